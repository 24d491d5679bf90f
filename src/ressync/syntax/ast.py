"""Resource document node definitions.

In-memory model of an Android ``<resources>`` document. Keyed entries and the
trivia between them (whitespace, comments, unnamed markup) are kept as an
ordered tuple of body nodes, so a parsed document serializes back to exactly
the text it came from.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass
from typing import TypeIs


# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "XmlAttribute",
    # Body nodes
    "ResourceEntry",
    "Comment",
    "Whitespace",
    "Markup",
    # Document structure
    "RootElement",
    "ResourceDocument",
    # Type aliases
    "BodyNode",
    "EntryKey",
]

type EntryKey = tuple[str, str]
"""Entry identity: (resource kind, name), e.g. ``("string", "app_name")``."""

_PREFIX_RE = re.compile(r"</?([A-Za-z_][-A-Za-z0-9_.]*):|\s([A-Za-z_][-A-Za-z0-9_.]*):[A-Za-z_]")


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class XmlAttribute:
    """Attribute of a start tag, value kept exactly as written (entities unexpanded)."""

    name: str
    value: str
    quote: str = '"'

    def render(self) -> str:
        """Render as it appears inside a start tag, without leading space."""
        return f"{self.name}={self.quote}{self.value}{self.quote}"


# ============================================================================
# BODY NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """Named resource element, e.g. ``<string name="hello">Hello</string>``.

    Attributes:
        kind: Element tag (``string``, ``plurals``, ``string-array``, ``dimen``, ...)
        name: Value of the ``name`` attribute
        value: Raw inner markup, placeholders and inline tags untouched
        attributes: All start tag attributes in source order (``name`` included)
        raw: Exact source text of the element; None for entries built in code
        span: Location in the source it was parsed from
    """

    kind: str
    name: str
    value: str = ""
    attributes: tuple[XmlAttribute, ...] = ()
    raw: str | None = None
    span: Span | None = None

    @property
    def key(self) -> EntryKey:
        """Identity within a document: (kind, name)."""
        return (self.kind, self.name)

    @property
    def translatable(self) -> bool:
        """False when the entry carries ``translatable="false"``."""
        for attribute in self.attributes:
            if attribute.name == "translatable":
                return attribute.value.strip().lower() != "false"
        return True

    def namespace_prefixes(self) -> frozenset[str]:
        """Namespace prefixes used by the element or its content (``xliff``, ``tools``)."""
        text = self.raw if self.raw is not None else self.value
        prefixes = set()
        for attribute in self.attributes:
            prefix, sep, _ = attribute.name.partition(":")
            if sep and prefix != "xmlns":
                prefixes.add(prefix)
        for match in _PREFIX_RE.finditer(text):
            prefixes.add(match.group(1) or match.group(2))
        prefixes.discard("xmlns")
        return frozenset(prefixes)

    @staticmethod
    def guard(node: object) -> TypeIs["ResourceEntry"]:
        """Type guard for ResourceEntry."""
        return isinstance(node, ResourceEntry)


@dataclass(frozen=True, slots=True)
class Comment:
    """XML comment; ``content`` is the text between ``<!--`` and ``-->``."""

    content: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Whitespace:
    """Run of XML whitespace between body nodes."""

    content: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Markup:
    """Unnamed element or processing instruction, kept verbatim.

    Example: ``<eat-comment/>``.
    """

    content: str
    span: Span | None = None


type BodyNode = ResourceEntry | Comment | Whitespace | Markup


# ============================================================================
# DOCUMENT STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class RootElement:
    """The ``<resources>`` start tag.

    Attributes:
        attributes: Start tag attributes in source order
        self_closing: True for ``<resources/>``
        raw: Exact start tag text; None when the tag was rebuilt in code
    """

    attributes: tuple[XmlAttribute, ...] = ()
    self_closing: bool = False
    raw: str | None = None

    @property
    def namespaces(self) -> dict[str, str]:
        """Declared namespace prefixes mapped to their URIs."""
        return {
            attribute.name.partition(":")[2]: attribute.value
            for attribute in self.attributes
            if attribute.name.startswith("xmlns:")
        }


@dataclass(frozen=True, slots=True)
class ResourceDocument:
    """Root node: one Android resource file.

    Attributes:
        root: The ``<resources>`` start tag
        body: Ordered body nodes between the root start and end tags
        prolog: Text before the root (BOM, XML declaration, comments)
        end_tag: Exact root end tag text (empty when the root is self-closing)
        epilogue: Text after the root end tag
    """

    root: RootElement
    body: tuple[BodyNode, ...] = ()
    prolog: str = ""
    end_tag: str = "</resources>"
    epilogue: str = ""

    @property
    def entries(self) -> tuple[ResourceEntry, ...]:
        """Keyed entries in document order."""
        return tuple(node for node in self.body if ResourceEntry.guard(node))

    def keys(self) -> tuple[EntryKey, ...]:
        """Entry keys in document order."""
        return tuple(entry.key for entry in self.entries)

    def get(self, kind: str, name: str) -> ResourceEntry | None:
        """Look up an entry by kind and name."""
        for entry in self.entries:
            if entry.kind == kind and entry.name == name:
                return entry
        return None
