"""Tests for key-driven document merging.

Example-based tests pin the exact output layout; property-based tests
check idempotence, key union, translation preservation and ordering over
generated file pairs.
"""

from __future__ import annotations

from hypothesis import event, given

from ressync.merge import MergeOptions, detect_layout, find_missing, merge_documents
from ressync.syntax import parse, serialize

from tests.strategies import resource_file_pairs

BASE = """\
<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="greeting">Hello</string>
    <string name="farewell">Goodbye</string>
</resources>
"""

LOCALE = """\
<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="greeting">Bonjour</string>
</resources>
"""

MARKER = "<!-- Untranslated: copied from values/strings.xml -->"


def _merge_text(base: str, locale: str, options: MergeOptions | None = None) -> str:
    result = merge_documents(parse(base), parse(locale), options=options)
    return serialize(result.document)


# ============================================================================
# EXAMPLES
# ============================================================================


class TestMergeExamples:
    """Exact output for representative file pairs."""

    def test_missing_entry_appended_after_translations(self) -> None:
        """farewell is appended after greeting, which keeps its translation."""
        assert _merge_text(BASE, LOCALE) == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<resources>\n"
            '    <string name="greeting">Bonjour</string>\n'
            f"    {MARKER}\n"
            '    <string name="farewell">Goodbye</string>\n'
            "</resources>\n"
        )

    def test_without_marker(self) -> None:
        """mark_untranslated=False appends the entries alone."""
        merged = _merge_text(BASE, LOCALE, MergeOptions(mark_untranslated=False))

        assert merged == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<resources>\n"
            '    <string name="greeting">Bonjour</string>\n'
            '    <string name="farewell">Goodbye</string>\n'
            "</resources>\n"
        )

    def test_nothing_missing_returns_locale_document(self) -> None:
        """Identical key sets leave the locale document untouched."""
        locale = parse(BASE.replace("Hello", "Bonjour").replace("Goodbye", "Au revoir"))
        result = merge_documents(parse(BASE), locale)

        assert not result.changed
        assert result.added == ()
        assert result.document is locale

    def test_marker_names_source_file(self) -> None:
        """source_label appears in the marker comment."""
        result = merge_documents(
            parse(BASE), parse(LOCALE), source_label="values/arrays.xml"
        )

        assert "<!-- Untranslated: copied from values/arrays.xml -->" in serialize(result.document)

    def test_dash_runs_in_source_label_collapsed(self) -> None:
        """A label containing '--' still yields a comment that parses back."""
        result = merge_documents(
            parse(BASE), parse(LOCALE), source_label="values/a---b.xml"
        )
        merged = serialize(result.document)

        assert "<!-- Untranslated: copied from values/a-b.xml -->" in merged
        assert parse(merged).keys() == parse(BASE).keys()

    def test_crlf_locale_keeps_crlf(self) -> None:
        """Appended lines use the locale file's CRLF newlines and indent."""
        locale = LOCALE.replace("\n", "\r\n").replace("    ", "  ")

        assert _merge_text(BASE, locale) == (
            '<?xml version="1.0" encoding="utf-8"?>\r\n'
            "<resources>\r\n"
            '  <string name="greeting">Bonjour</string>\r\n'
            f"  {MARKER}\r\n"
            '  <string name="farewell">Goodbye</string>\r\n'
            "</resources>\r\n"
        )

    def test_multiline_entry_converted_to_crlf(self) -> None:
        """LF inside a copied multi-line entry becomes CRLF in a CRLF locale."""
        base = (
            "<resources>\n"
            '    <plurals name="files">\n'
            '        <item quantity="one">%d file</item>\n'
            '        <item quantity="other">%d files</item>\n'
            "    </plurals>\n"
            "</resources>\n"
        )
        locale = "<resources>\r\n</resources>\r\n"
        merged = _merge_text(base, locale)

        assert "\n" not in merged.replace("\r\n", "")
        assert parse(merged).get("plurals", "files") is not None

    def test_self_closing_locale_root_expanded(self) -> None:
        """<resources/> is opened to hold the appended entries."""
        base = '<resources>\n    <string name="a">A</string>\n</resources>\n'
        locale = '<?xml version="1.0" encoding="utf-8"?>\n<resources />\n'

        assert _merge_text(base, locale) == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<resources>\n"
            f"    {MARKER}\n"
            '    <string name="a">A</string>\n'
            "</resources>\n"
        )

    def test_locale_comments_and_extra_keys_kept(self) -> None:
        """Locale-only keys, comments and spacing survive the merge."""
        locale = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<!-- French -->\n"
            "<resources>\n"
            "    <!-- Greetings -->\n"
            '    <string name="greeting">Bonjour</string>\n'
            "\n"
            '    <string name="obsolete">Ancien</string>\n'
            "</resources>\n"
        )
        merged = _merge_text(BASE, locale)
        prefix = locale[: locale.rindex("\n</resources>")]

        assert merged.startswith(prefix)
        assert parse(merged).keys() == (
            ("string", "greeting"),
            ("string", "obsolete"),
            ("string", "farewell"),
        )

    def test_namespace_declared_for_copied_entry(self) -> None:
        """A prefix used by a copied entry is declared on the locale root."""
        base = (
            '<resources xmlns:xliff="urn:oasis:names:tc:xliff:document:1.2">\n'
            '    <string name="count">Items: <xliff:g id="n">%d</xliff:g></string>\n'
            "</resources>\n"
        )
        locale = "<resources>\n</resources>\n"
        result = merge_documents(parse(base), parse(locale))
        merged = serialize(result.document)

        assert result.namespaces_added == ("xliff",)
        assert merged.startswith(
            '<resources xmlns:xliff="urn:oasis:names:tc:xliff:document:1.2">\n'
        )
        assert parse(merged).root.namespaces == {
            "xliff": "urn:oasis:names:tc:xliff:document:1.2"
        }

    def test_declared_namespace_not_repeated(self) -> None:
        """A prefix the locale root already declares is left alone."""
        root = '<resources xmlns:xliff="urn:oasis:names:tc:xliff:document:1.2">'
        base = f'{root}<string name="c"><xliff:g id="n">%d</xliff:g></string></resources>'
        locale = f"{root}</resources>"
        result = merge_documents(parse(base), parse(locale))

        assert result.namespaces_added == ()
        assert serialize(result.document).startswith(root + "\n")

    def test_untranslatable_entries_skipped_on_request(self) -> None:
        """skip_untranslatable leaves translatable="false" entries out."""
        base = (
            "<resources>\n"
            '    <string name="app_name" translatable="false">Terminal</string>\n'
            '    <string name="title">Title</string>\n'
            "</resources>\n"
        )
        locale = "<resources>\n</resources>\n"

        copied = merge_documents(parse(base), parse(locale))
        skipped = merge_documents(
            parse(base), parse(locale), options=MergeOptions(skip_untranslatable=True)
        )

        assert [e.name for e in copied.added] == ["app_name", "title"]
        assert [e.name for e in skipped.added] == ["title"]


class TestFindMissing:
    """find_missing compares keys, never values."""

    def test_base_order(self) -> None:
        """Missing entries come back in base order."""
        base = parse(
            '<resources><string name="c">C</string><string name="a">A</string>'
            '<string name="b">B</string></resources>'
        )
        locale = parse('<resources><string name="a">x</string></resources>')

        assert [e.name for e in find_missing(base, locale)] == ["c", "b"]

    def test_kind_is_part_of_key(self) -> None:
        """A plurals entry does not satisfy a string of the same name."""
        base = parse('<resources><string name="n">N</string></resources>')
        locale = parse('<resources><plurals name="n"></plurals></resources>')

        assert [e.key for e in find_missing(base, locale)] == [("string", "n")]


class TestDetectLayout:
    """Indent and newline detection."""

    def test_defaults_for_empty_document(self) -> None:
        """No whitespace hints gives four spaces and LF."""
        assert detect_layout(parse("<resources></resources>")) == ("    ", "\n")

    def test_tab_indent(self) -> None:
        """Indent is copied from the first indented node."""
        document = parse('<resources>\n\t<string name="a">A</string>\n</resources>')

        assert detect_layout(document) == ("\t", "\n")

    def test_crlf_detected(self) -> None:
        """CRLF anywhere between nodes selects CRLF."""
        document = parse('<resources>\r\n  <string name="a">A</string>\r\n</resources>')

        assert detect_layout(document) == ("  ", "\r\n")


# ============================================================================
# PROPERTIES
# ============================================================================


class TestMergeProperties:
    """Merge invariants over generated base/locale pairs."""

    @given(pair=resource_file_pairs())
    def test_idempotent(self, pair: tuple[str, str]) -> None:
        """PROPERTY: merging the merged file again changes nothing."""
        base_text, locale_text = pair
        base = parse(base_text)
        merged_text = serialize(merge_documents(base, parse(locale_text)).document)

        second = merge_documents(base, parse(merged_text))

        assert not second.changed
        assert serialize(second.document) == merged_text

    @given(pair=resource_file_pairs())
    def test_key_union(self, pair: tuple[str, str]) -> None:
        """PROPERTY: merged keys are exactly base keys plus locale keys."""
        base_text, locale_text = pair
        base, locale = parse(base_text), parse(locale_text)
        merged = parse(serialize(merge_documents(base, locale).document))

        assert set(merged.keys()) == set(base.keys()) | set(locale.keys())
        assert len(merged.keys()) == len(set(merged.keys()))

    @given(pair=resource_file_pairs())
    def test_translations_preserved(self, pair: tuple[str, str]) -> None:
        """PROPERTY: every locale entry keeps its value."""
        base_text, locale_text = pair
        locale = parse(locale_text)
        merged = parse(serialize(merge_documents(parse(base_text), locale).document))

        for entry in locale.entries:
            merged_entry = merged.get(entry.kind, entry.name)
            assert merged_entry is not None
            assert merged_entry.value == entry.value

    @given(pair=resource_file_pairs())
    def test_order_is_locale_then_missing_base(self, pair: tuple[str, str]) -> None:
        """PROPERTY: locale order first, then missing keys in base order."""
        base_text, locale_text = pair
        base, locale = parse(base_text), parse(locale_text)
        merged = parse(serialize(merge_documents(base, locale).document))

        present = set(locale.keys())
        expected = locale.keys() + tuple(key for key in base.keys() if key not in present)
        event(f"appended={min(len(expected) - len(present), 5)}")
        assert merged.keys() == expected

    @given(pair=resource_file_pairs())
    def test_locale_text_is_prefix(self, pair: tuple[str, str]) -> None:
        """PROPERTY: locale text up to its last entry survives byte for byte."""
        base_text, locale_text = pair
        merged_text = serialize(
            merge_documents(parse(base_text), parse(locale_text)).document
        )

        prefix = locale_text[: locale_text.rindex("</resources>")].rstrip(" \t\r\n")
        assert merged_text.startswith(prefix)

    @given(pair=resource_file_pairs())
    def test_copied_values_match_base(self, pair: tuple[str, str]) -> None:
        """PROPERTY: appended entries carry the base value as placeholder."""
        base_text, locale_text = pair
        base = parse(base_text)
        result = merge_documents(base, parse(locale_text))
        merged = parse(serialize(result.document))

        for entry in result.added:
            merged_entry = merged.get(entry.kind, entry.name)
            assert merged_entry is not None
            assert merged_entry.value == entry.value
