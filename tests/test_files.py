"""Tests for resource file reading and atomic replacement."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from ressync import files
from ressync.diagnostics import (
    DiagnosticCode,
    ResourceIOError,
    ResourceNotFoundError,
    ResourceParseError,
)
from ressync.files import atomic_write_text, read_resource, read_source


def _temp_files(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir() if p.name.startswith("xmlOut"))


class TestReadSource:
    """read_source maps filesystem failures onto sync errors."""

    def test_reads_without_newline_translation(self, tmp_path: Path) -> None:
        """CRLF bytes are returned unchanged."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"<resources>\r\n</resources>\r\n")

        assert read_source(path, role="locale") == "<resources>\r\n</resources>\r\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ResourceNotFoundError naming the path."""
        path = tmp_path / "values-fr" / "strings.xml"

        with pytest.raises(ResourceNotFoundError) as exc_info:
            read_source(path, role="locale")

        error = exc_info.value
        assert error.path == str(path)
        assert str(path) in str(error)
        assert "Locale resource file not found" in str(error)
        assert isinstance(error.__cause__, FileNotFoundError)

    def test_directory_instead_of_file(self, tmp_path: Path) -> None:
        """Other OS errors raise ResourceIOError."""
        with pytest.raises(ResourceIOError) as exc_info:
            read_source(tmp_path, role="base")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.READ_FAILED

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Undecodable bytes raise ResourceParseError with the byte offset."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"<resources>\xff</resources>")

        with pytest.raises(ResourceParseError) as exc_info:
            read_source(path, role="base")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.INVALID_ENCODING
        assert "byte 11" in diagnostic.message


class TestReadResource:
    """read_resource parses after reading."""

    def test_returns_source_and_document(self, tmp_path: Path) -> None:
        """Both the text and the parsed document are returned."""
        path = tmp_path / "strings.xml"
        path.write_text('<resources><string name="a">A</string></resources>', encoding="utf-8")

        source, document = read_resource(path, role="base")

        assert source.startswith("<resources>")
        entry = document.get("string", "a")
        assert entry is not None
        assert entry.value == "A"

    def test_parse_error_carries_path(self, tmp_path: Path) -> None:
        """Parse errors name the file."""
        path = tmp_path / "strings.xml"
        path.write_text("<resources>", encoding="utf-8")

        with pytest.raises(ResourceParseError) as exc_info:
            read_resource(path, role="locale")

        assert exc_info.value.path == str(path)


class TestAtomicWrite:
    """atomic_write_text replaces the target or leaves it untouched."""

    def test_replaces_content(self, tmp_path: Path) -> None:
        """Target holds the new text and no temp file remains."""
        path = tmp_path / "strings.xml"
        path.write_text("old", encoding="utf-8")

        atomic_write_text(path, "new\r\ncontent")

        assert path.read_bytes() == b"new\r\ncontent"
        assert _temp_files(tmp_path) == []

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_keeps_file_mode(self, tmp_path: Path) -> None:
        """The replaced file keeps the original permission bits."""
        path = tmp_path / "strings.xml"
        path.write_text("old", encoding="utf-8")
        path.chmod(0o640)

        atomic_write_text(path, "new")

        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_replace_failure_leaves_original(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed rename keeps the original bytes and removes the temp file."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"original")

        def failing_replace(src: str, dst: Path) -> None:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(files.os, "replace", failing_replace)

        with pytest.raises(ResourceIOError) as exc_info:
            atomic_write_text(path, "updated")

        assert path.read_bytes() == b"original"
        assert _temp_files(tmp_path) == []
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.REPLACE_FAILED
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_write_failure_leaves_original(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed write keeps the original bytes and removes the temp file."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"original")

        def failing_fsync(fd: int) -> None:
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(files.os, "fsync", failing_fsync)

        with pytest.raises(ResourceIOError) as exc_info:
            atomic_write_text(path, "updated")

        assert path.read_bytes() == b"original"
        assert _temp_files(tmp_path) == []
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.WRITE_FAILED

    def test_encode_error_removes_temp_file(self, tmp_path: Path) -> None:
        """Text that cannot be encoded propagates and leaves no temp file."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"original")

        with pytest.raises(UnicodeEncodeError):
            atomic_write_text(path, "bad \ud800")

        assert path.read_bytes() == b"original"
        assert _temp_files(tmp_path) == []

    def test_interrupt_removes_temp_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An interrupt during the write still cleans up before propagating."""
        path = tmp_path / "strings.xml"
        path.write_bytes(b"original")

        def interrupted_fsync(fd: int) -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr(files.os, "fsync", interrupted_fsync)

        with pytest.raises(KeyboardInterrupt):
            atomic_write_text(path, "updated")

        assert path.read_bytes() == b"original"
        assert _temp_files(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A temp file that cannot be created raises ResourceIOError."""
        path = tmp_path / "missing" / "strings.xml"

        with pytest.raises(ResourceIOError) as exc_info:
            atomic_write_text(path, "x")

        assert exc_info.value.path == str(path)
