"""Android resource document parser.

This module provides the ResourceParser class that turns the text of a
``res/values*/...xml`` file into a :class:`~ressync.syntax.ast.ResourceDocument`.

Architecture:
    The parser uses the immutable cursor pattern
    (:class:`~ressync.syntax.cursor.Cursor`). Each sub-parser returns a
    :class:`~ressync.syntax.cursor.ParseResult` with the parsed value and the
    cursor after it, or raises :class:`~ressync.diagnostics.ResourceParseError`.

    Only the structure needed for key-driven merging is interpreted: the
    ``<resources>`` root, its direct children, and the ``name`` attribute of
    each child. Entry content is checked for well-formedness (balanced tags,
    escaped ``<`` and ``&``) but kept as raw text, so every parsed node knows
    the exact source it came from.

Security:
    Includes a configurable input size limit and an element nesting limit.
"""

import re
from dataclasses import dataclass
from typing import NoReturn

from ressync.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from ressync.diagnostics import (
    DiagnosticCode,
    ErrorTemplate,
    ResourceParseError,
    SourceSpan,
)
from ressync.enums import EntryKind
from ressync.syntax.ast import (
    BodyNode,
    Comment,
    EntryKey,
    Markup,
    ResourceDocument,
    ResourceEntry,
    RootElement,
    Span,
    Whitespace,
    XmlAttribute,
)
from ressync.syntax.cursor import XML_WHITESPACE, Cursor, ParseResult
from ressync.syntax.position import get_error_context

__all__ = ["ParseContext", "ResourceParser", "parse"]

ROOT_TAG = "resources"

_NAME_RE = re.compile(r"[A-Za-z_:][-A-Za-z0-9_:.]*")
_ENTITY_RE = re.compile(r"&(?:[A-Za-z_][-A-Za-z0-9_.]*|#[0-9]+|#x[0-9A-Fa-f]+);")

# Entries that must carry a name; any other unnamed element is kept as Markup
_NAMED_KINDS = frozenset(EntryKind)


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Per-parse settings threaded through the sub-parsers.

    Attributes:
        path: File being parsed, for error messages
        max_depth: Maximum element nesting inside one entry
    """

    path: str | None = None
    max_depth: int = MAX_DEPTH


@dataclass(frozen=True, slots=True)
class StartTag:
    """Parsed start tag (``<string name="x">`` or ``<eat-comment/>``)."""

    name: str
    attributes: tuple[XmlAttribute, ...]
    self_closing: bool

    def get(self, attribute_name: str) -> str | None:
        """Value of an attribute, or None if absent."""
        for attribute in self.attributes:
            if attribute.name == attribute_name:
                return attribute.value
        return None


def _fail(
    cursor: Cursor,
    code: DiagnosticCode,
    message: str,
    context: ParseContext,
    hint: str | None = None,
) -> NoReturn:
    """Raise ResourceParseError located at the cursor."""
    line, column = cursor.compute_line_col()
    span = SourceSpan(start=cursor.pos, end=cursor.pos, line=line, column=column)
    diagnostic = ErrorTemplate.syntax_error(
        code,
        message,
        span=span,
        context=get_error_context(cursor.source, cursor.pos),
        path=context.path,
        hint=hint,
    )
    raise ResourceParseError(diagnostic, path=context.path or "", line=line, column=column)


def _skip_delimited(
    cursor: Cursor, opener: str, closer: str, what: str, context: ParseContext
) -> Cursor:
    """Skip from ``opener`` at the cursor to just past the next ``closer``."""
    end = cursor.source.find(closer, cursor.pos + len(opener))
    if end == -1:
        _fail(cursor, DiagnosticCode.UNEXPECTED_EOF, f"Unterminated {what}", context)
    return cursor.move_to(end + len(closer))


def _skip_comment(cursor: Cursor, context: ParseContext) -> Cursor:
    """Skip a comment at the cursor, rejecting '--' inside it (XML 1.0 section 2.5)."""
    end = _skip_delimited(cursor, "<!--", "-->", "comment", context)
    content_start = cursor.pos + 4
    content = cursor.source[content_start : end.pos - 3]
    dashes = content.find("--")
    if dashes == -1 and content.endswith("-"):
        dashes = len(content) - 1
    if dashes != -1:
        _fail(
            cursor.move_to(content_start + dashes),
            DiagnosticCode.MALFORMED_MARKUP,
            "'--' is not allowed inside a comment",
            context,
            hint="Comments cannot contain '--' or end with '-'",
        )
    return end


def _skip_doctype(cursor: Cursor, context: ParseContext) -> Cursor:
    """Skip a doctype declaration, including a bracketed internal subset."""
    source = cursor.source
    close = source.find(">", cursor.pos)
    subset = source.find("[", cursor.pos)
    if subset != -1 and (close == -1 or subset < close):
        subset_end = source.find("]", subset)
        if subset_end == -1:
            _fail(
                cursor,
                DiagnosticCode.UNEXPECTED_EOF,
                "Unterminated doctype internal subset",
                context,
            )
        close = source.find(">", subset_end)
    if close == -1:
        _fail(cursor, DiagnosticCode.UNEXPECTED_EOF, "Unterminated doctype", context)
    return cursor.move_to(close + 1)


def _at_tag_start(cursor: Cursor) -> bool:
    """True if the cursor is at ``<`` followed by a name character."""
    return _NAME_RE.match(cursor.source, cursor.pos + 1) is not None


def parse_name(cursor: Cursor, context: ParseContext) -> ParseResult[str]:
    """Parse an XML name (tag or attribute)."""
    match = _NAME_RE.match(cursor.source, cursor.pos)
    if match is None:
        _fail(cursor, DiagnosticCode.MALFORMED_MARKUP, "Expected a tag or attribute name", context)
    return ParseResult(match.group(), cursor.move_to(match.end()))


def parse_attribute(cursor: Cursor, context: ParseContext) -> ParseResult[XmlAttribute]:
    """Parse ``name="value"`` or ``name='value'``."""
    name_result = parse_name(cursor, context)
    name = name_result.value

    cursor = name_result.cursor.skip_whitespace()
    if cursor.is_eof:
        _fail(cursor, DiagnosticCode.UNEXPECTED_EOF, "Unterminated start tag", context)
    if cursor.current != "=":
        _fail(
            cursor,
            DiagnosticCode.MALFORMED_MARKUP,
            f"Expected '=' after attribute '{name}'",
            context,
        )

    cursor = cursor.advance().skip_whitespace()
    if cursor.is_eof:
        _fail(cursor, DiagnosticCode.UNEXPECTED_EOF, "Unterminated start tag", context)
    quote = cursor.current
    if quote not in ('"', "'"):
        _fail(
            cursor,
            DiagnosticCode.MALFORMED_MARKUP,
            f"Expected quoted value for attribute '{name}'",
            context,
        )

    end = cursor.source.find(quote, cursor.pos + 1)
    if end == -1:
        _fail(cursor, DiagnosticCode.UNEXPECTED_EOF, "Unterminated attribute value", context)
    value = cursor.source[cursor.pos + 1 : end]
    if "<" in value:
        _fail(
            cursor.advance(1 + value.index("<")),
            DiagnosticCode.MALFORMED_MARKUP,
            "'<' is not allowed in attribute values",
            context,
            hint="Write '&lt;' for a literal '<'",
        )
    return ParseResult(XmlAttribute(name=name, value=value, quote=quote), cursor.move_to(end + 1))


def parse_start_tag(cursor: Cursor, context: ParseContext) -> ParseResult[StartTag]:
    """Parse a start tag; the cursor must be at ``<``."""
    name_result = parse_name(cursor.advance(), context)
    name = name_result.value
    cursor = name_result.cursor

    attributes: list[XmlAttribute] = []
    seen: set[str] = set()
    while True:
        after_space = cursor.skip_whitespace()
        if after_space.is_eof:
            _fail(
                after_space,
                DiagnosticCode.UNEXPECTED_EOF,
                f"Unterminated start tag <{name}>",
                context,
            )
        if after_space.starts_with("/>"):
            tag = StartTag(name=name, attributes=tuple(attributes), self_closing=True)
            return ParseResult(tag, after_space.advance(2))
        if after_space.current == ">":
            tag = StartTag(name=name, attributes=tuple(attributes), self_closing=False)
            return ParseResult(tag, after_space.advance())
        if after_space.pos == cursor.pos:
            _fail(
                after_space,
                DiagnosticCode.MALFORMED_MARKUP,
                f"Expected whitespace, '>' or '/>' in start tag <{name}>",
                context,
            )

        attribute_result = parse_attribute(after_space, context)
        attribute = attribute_result.value
        if attribute.name in seen:
            _fail(
                after_space,
                DiagnosticCode.DUPLICATE_ATTRIBUTE,
                f"Duplicate attribute '{attribute.name}' on <{name}>",
                context,
            )
        seen.add(attribute.name)
        attributes.append(attribute)
        cursor = attribute_result.cursor


def parse_end_tag(cursor: Cursor, context: ParseContext) -> ParseResult[str]:
    """Parse ``</name>``; the cursor must be at ``</``."""
    name_result = parse_name(cursor.advance(2), context)
    after = name_result.cursor.skip_whitespace()
    if after.is_eof:
        _fail(after, DiagnosticCode.UNEXPECTED_EOF, "Unterminated end tag", context)
    if after.current != ">":
        _fail(after, DiagnosticCode.MALFORMED_MARKUP, "Expected '>' to close end tag", context)
    return ParseResult(name_result.value, after.advance())


def parse_element_content(
    cursor: Cursor, tag: str, context: ParseContext
) -> ParseResult[int]:
    """Scan element content up to and including the matching end tag.

    Nested elements, comments, CDATA sections and entity references are
    checked for well-formedness but not interpreted.

    Args:
        cursor: Position just after the element's start tag
        tag: Name of the element being closed
        context: Parse settings

    Returns:
        ParseResult whose value is the offset of the closing ``</tag>``
        (the end of the inner content) and whose cursor is past it
    """
    stack = [tag]
    source = cursor.source

    while True:
        if cursor.is_eof:
            _fail(
                cursor,
                DiagnosticCode.UNEXPECTED_EOF,
                f"Unterminated <{stack[-1]}> element",
                context,
                hint=f"Add '</{stack[-1]}>'",
            )

        char = cursor.current
        if char == "<":
            if cursor.starts_with("<!--"):
                cursor = _skip_comment(cursor, context)
            elif cursor.starts_with("<![CDATA["):
                cursor = _skip_delimited(cursor, "<![CDATA[", "]]>", "CDATA section", context)
            elif cursor.starts_with("<?"):
                cursor = _skip_delimited(cursor, "<?", "?>", "processing instruction", context)
            elif cursor.starts_with("</"):
                end_start = cursor.pos
                end_result = parse_end_tag(cursor, context)
                if end_result.value != stack[-1]:
                    _fail(
                        cursor,
                        DiagnosticCode.MISMATCHED_TAG,
                        f"Expected '</{stack[-1]}>' but found '</{end_result.value}>'",
                        context,
                        hint="Close every element with the tag that opened it",
                    )
                stack.pop()
                cursor = end_result.cursor
                if not stack:
                    return ParseResult(end_start, cursor)
            elif _at_tag_start(cursor):
                start_result = parse_start_tag(cursor, context)
                if not start_result.value.self_closing:
                    if len(stack) >= context.max_depth:
                        _fail(
                            cursor,
                            DiagnosticCode.MALFORMED_MARKUP,
                            f"Elements nested deeper than {context.max_depth} levels",
                            context,
                        )
                    stack.append(start_result.value.name)
                cursor = start_result.cursor
            else:
                _fail(
                    cursor,
                    DiagnosticCode.MALFORMED_MARKUP,
                    "Unescaped '<' in text",
                    context,
                    hint="Write '&lt;' for a literal '<'",
                )
        elif char == "&":
            match = _ENTITY_RE.match(source, cursor.pos)
            if match is None:
                _fail(
                    cursor,
                    DiagnosticCode.MALFORMED_MARKUP,
                    "Unescaped '&' in text",
                    context,
                    hint="Write '&amp;' for a literal '&'",
                )
            cursor = cursor.move_to(match.end())
        else:
            stops = [pos for pos in (cursor.find("<"), cursor.find("&")) if pos != -1]
            cursor = cursor.move_to(min(stops) if stops else len(source))


def parse_body_element(
    cursor: Cursor, context: ParseContext
) -> ParseResult[ResourceEntry | Markup]:
    """Parse one direct child of ``<resources>``."""
    start = cursor.pos
    start_result = parse_start_tag(cursor, context)
    tag = start_result.value

    if tag.self_closing:
        inner_start = inner_end = start_result.cursor.pos
        after = start_result.cursor
    else:
        inner_start = start_result.cursor.pos
        content_result = parse_element_content(start_result.cursor, tag.name, context)
        inner_end = content_result.value
        after = content_result.cursor

    raw = cursor.slice_to(after.pos)
    span = Span(start=start, end=after.pos)

    name = tag.get("name")
    if name is None:
        if tag.name in _NAMED_KINDS:
            _fail(
                cursor,
                DiagnosticCode.MISSING_NAME,
                f"<{tag.name}> element has no 'name' attribute",
                context,
            )
        return ParseResult(Markup(content=raw, span=span), after)

    entry = ResourceEntry(
        kind=tag.name,
        name=name,
        value=cursor.source[inner_start:inner_end],
        attributes=tag.attributes,
        raw=raw,
        span=span,
    )
    return ParseResult(entry, after)


def parse_body(
    cursor: Cursor, context: ParseContext
) -> ParseResult[tuple[tuple[BodyNode, ...], str]]:
    """Parse the children of ``<resources>`` and its end tag.

    Returns:
        ParseResult with (body nodes, exact end tag text)
    """
    nodes: list[BodyNode] = []
    first_seen: dict[EntryKey, int] = {}

    while True:
        if cursor.is_eof:
            _fail(
                cursor,
                DiagnosticCode.UNEXPECTED_EOF,
                f"Missing '</{ROOT_TAG}>' end tag",
                context,
            )

        start = cursor.pos
        char = cursor.current
        if char in XML_WHITESPACE:
            end = cursor.skip_whitespace()
            nodes.append(Whitespace(content=cursor.slice_to(end.pos), span=Span(start, end.pos)))
            cursor = end
        elif cursor.starts_with("<!--"):
            end = _skip_comment(cursor, context)
            content = cursor.source[start + 4 : end.pos - 3]
            nodes.append(Comment(content=content, span=Span(start, end.pos)))
            cursor = end
        elif cursor.starts_with("<?"):
            end = _skip_delimited(cursor, "<?", "?>", "processing instruction", context)
            nodes.append(Markup(content=cursor.slice_to(end.pos), span=Span(start, end.pos)))
            cursor = end
        elif cursor.starts_with("</"):
            end_result = parse_end_tag(cursor, context)
            if end_result.value != ROOT_TAG:
                _fail(
                    cursor,
                    DiagnosticCode.MISMATCHED_TAG,
                    f"Expected '</{ROOT_TAG}>' but found '</{end_result.value}>'",
                    context,
                )
            end_tag = cursor.slice_to(end_result.cursor.pos)
            return ParseResult((tuple(nodes), end_tag), end_result.cursor)
        elif char == "<" and _at_tag_start(cursor):
            element_result = parse_body_element(cursor, context)
            node = element_result.value
            if ResourceEntry.guard(node):
                if node.key in first_seen:
                    first_line, _ = Cursor(cursor.source, first_seen[node.key]).compute_line_col()
                    _fail(
                        cursor,
                        DiagnosticCode.DUPLICATE_KEY,
                        f"Duplicate <{node.kind} name=\"{node.name}\">, "
                        f"first defined on line {first_line}",
                        context,
                    )
                first_seen[node.key] = start
            nodes.append(node)
            cursor = element_result.cursor
        elif char == "<":
            _fail(
                cursor,
                DiagnosticCode.MALFORMED_MARKUP,
                f"Unexpected markup inside <{ROOT_TAG}>",
                context,
            )
        else:
            _fail(
                cursor,
                DiagnosticCode.MALFORMED_MARKUP,
                "Unexpected text outside an element",
                context,
                hint='Text belongs inside an entry such as <string name="...">',
            )


def _skip_misc(cursor: Cursor, context: ParseContext) -> Cursor:
    """Skip whitespace, comments and processing instructions."""
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.starts_with("<!--"):
            cursor = _skip_comment(cursor, context)
        elif cursor.starts_with("<?"):
            cursor = _skip_delimited(cursor, "<?", "?>", "processing instruction", context)
        else:
            return cursor


def parse_prolog(cursor: Cursor, context: ParseContext) -> Cursor:
    """Skip BOM, XML declaration, comments and doctype before the root.

    Returns:
        Cursor at the ``<`` of the root start tag
    """
    if cursor.starts_with("\ufeff"):
        cursor = cursor.advance()
    while True:
        cursor = _skip_misc(cursor, context)
        if cursor.is_eof:
            _fail(
                cursor,
                DiagnosticCode.MISSING_ROOT,
                f"No <{ROOT_TAG}> root element found",
                context,
            )
        if cursor.starts_with("<!DOCTYPE"):
            cursor = _skip_doctype(cursor, context)
        elif cursor.current == "<" and _at_tag_start(cursor):
            return cursor
        else:
            _fail(
                cursor,
                DiagnosticCode.MALFORMED_MARKUP,
                "Unexpected content before the root element",
                context,
            )


class ResourceParser:
    """Parser for Android ``<resources>`` documents.

    Example:
        >>> parser = ResourceParser()
        >>> document = parser.parse('<resources><string name="hi">Hi</string></resources>')
        >>> document.entries[0].name
        'hi'
    """

    __slots__ = ("_max_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 million).
                            0 disables the limit.
            max_depth: Maximum element nesting inside one entry (default: 100)
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_depth = max_depth if max_depth is not None else MAX_DEPTH

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_depth(self) -> int:
        """Maximum allowed element nesting."""
        return self._max_depth

    def parse(self, source: str, *, path: str | None = None) -> ResourceDocument:
        """Parse resource source text into a ResourceDocument.

        Args:
            source: Complete file content
            path: File path used in error messages

        Returns:
            ResourceDocument whose serialization equals ``source``

        Raises:
            ResourceParseError: On any structural violation. Unlike a
                tolerant parser there is no recovery: a file the tool cannot
                understand is never rewritten.
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(
                len(source), self._max_source_size, path=path
            )
            raise ResourceParseError(diagnostic, path=path or "")

        context = ParseContext(path=path, max_depth=self._max_depth)
        cursor = parse_prolog(Cursor(source, 0), context)
        prolog = source[: cursor.pos]

        root_start = cursor
        root_result = parse_start_tag(cursor, context)
        if root_result.value.name != ROOT_TAG:
            _fail(
                cursor,
                DiagnosticCode.MISSING_ROOT,
                f"Expected root element <{ROOT_TAG}>, found <{root_result.value.name}>",
                context,
            )
        root = RootElement(
            attributes=root_result.value.attributes,
            self_closing=root_result.value.self_closing,
            raw=root_start.slice_to(root_result.cursor.pos),
        )
        cursor = root_result.cursor

        body: tuple[BodyNode, ...] = ()
        end_tag = ""
        if not root.self_closing:
            body_result = parse_body(cursor, context)
            body, end_tag = body_result.value
            cursor = body_result.cursor

        epilogue_end = _skip_misc(cursor, context)
        if not epilogue_end.is_eof:
            _fail(
                epilogue_end,
                DiagnosticCode.TRAILING_CONTENT,
                f"Unexpected content after the <{ROOT_TAG}> element",
                context,
            )

        return ResourceDocument(
            root=root,
            body=body,
            prolog=prolog,
            end_tag=end_tag,
            epilogue=cursor.slice_to(len(source)),
        )


def parse(source: str, *, path: str | None = None) -> ResourceDocument:
    """Parse resource source text with default limits.

    Raises:
        ResourceParseError: If the source is not a well-formed resource document
    """
    return ResourceParser().parse(source, path=path)
