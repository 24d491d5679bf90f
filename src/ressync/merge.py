"""Key-driven merge of a base document into a locale document.

The merge never looks at lines, only at entry keys ``(kind, name)``:

    merged = locale body (original order, original values)
             + base entries missing from locale (base order, base values)

Existing locale entries are never modified, so translations survive, and a
second merge of the same pair finds nothing missing and returns the locale
document unchanged.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass

from ressync.constants import (
    DEFAULT_INDENT,
    DEFAULT_NEWLINE,
    UNTRANSLATED_MARKER,
)
from ressync.syntax.ast import (
    BodyNode,
    Comment,
    ResourceDocument,
    ResourceEntry,
    RootElement,
    Whitespace,
    XmlAttribute,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Options and results
    "MergeOptions",
    "MergeResult",
    # Operations
    "find_missing",
    "detect_layout",
    "merge_documents",
]

logger = logging.getLogger(__name__)

# Comment text cannot contain "--"
_DASH_RUN_RE = re.compile(r"-{2,}")


@dataclass(frozen=True, slots=True)
class MergeOptions:
    """Switches controlling how missing entries are added.

    Attributes:
        mark_untranslated: Put a marker comment before the appended block
        skip_untranslatable: Do not copy entries with ``translatable="false"``
        dry_run: Compute the merge but do not write the locale file
    """

    mark_untranslated: bool = True
    skip_untranslatable: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of merging one document pair.

    Attributes:
        document: Merged locale document (the locale document itself when
            nothing was missing)
        added: Entries copied from base, in base order
        namespaces_added: Namespace prefixes declared on the locale root
    """

    document: ResourceDocument
    added: tuple[ResourceEntry, ...] = ()
    namespaces_added: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        """True if the merged document differs from the locale document."""
        return bool(self.added)


def find_missing(
    base: ResourceDocument,
    locale: ResourceDocument,
    *,
    skip_untranslatable: bool = False,
) -> tuple[ResourceEntry, ...]:
    """Entries of ``base`` whose key is absent from ``locale``, in base order.

    Example:
        >>> [e.name for e in find_missing(base, locale)]
        ['farewell']
    """
    present = set(locale.keys())
    return tuple(
        entry
        for entry in base.entries
        if entry.key not in present and (entry.translatable or not skip_untranslatable)
    )


def detect_layout(document: ResourceDocument) -> tuple[str, str]:
    """Detect the indentation and newline style used by a document.

    Indentation is taken from the whitespace before the first body node that
    starts on its own line. Newlines are CRLF if any CRLF appears in the
    prolog or between body nodes.

    Returns:
        (indent, newline), with defaults for documents without a hint
    """
    whitespace = [node.content for node in document.body if isinstance(node, Whitespace)]

    newline = DEFAULT_NEWLINE
    if "\r\n" in document.prolog or any("\r\n" in text for text in whitespace):
        newline = "\r\n"
    elif "\n" in document.prolog or any("\n" in text for text in whitespace):
        newline = "\n"

    indent = DEFAULT_INDENT
    body = document.body
    for index, node in enumerate(body[:-1]):
        if isinstance(node, Whitespace) and "\n" in node.content:
            if isinstance(body[index + 1], Whitespace):
                continue
            indent = node.content.rpartition("\n")[2]
            break

    return indent, newline


def _adapt_newlines(entry: ResourceEntry, newline: str) -> ResourceEntry:
    """Copy of a base entry detached from its source, in the locale's newline style."""
    raw = entry.raw
    value = entry.value
    if newline == "\n":
        raw = raw.replace("\r\n", "\n") if raw is not None else None
        value = value.replace("\r\n", "\n")
    else:
        raw = raw.replace("\r\n", "\n").replace("\n", "\r\n") if raw is not None else None
        value = value.replace("\r\n", "\n").replace("\n", "\r\n")
    return dataclasses.replace(entry, raw=raw, value=value, span=None)


def _open_root(root: RootElement) -> RootElement:
    """Turn ``<resources/>`` into ``<resources>`` so entries can be added."""
    raw = root.raw
    if raw is not None:
        raw = raw.removesuffix("/>").rstrip() + ">"
    return RootElement(attributes=root.attributes, self_closing=False, raw=raw)


def _declare_namespaces(
    root: RootElement, base_root: RootElement, prefixes: frozenset[str]
) -> tuple[RootElement, tuple[str, ...]]:
    """Add base namespace declarations the appended entries need."""
    base_namespaces = base_root.namespaces
    locale_namespaces = root.namespaces
    needed = tuple(
        sorted(p for p in prefixes if p in base_namespaces and p not in locale_namespaces)
    )
    if not needed:
        return root, ()

    declarations = tuple(
        XmlAttribute(name=f"xmlns:{prefix}", value=base_namespaces[prefix]) for prefix in needed
    )
    raw = root.raw
    if raw is not None:
        closer = "/>" if raw.endswith("/>") else ">"
        head = raw.removesuffix(closer)
        stripped = head.rstrip()
        rendered = "".join(f" {declaration.render()}" for declaration in declarations)
        raw = stripped + rendered + head[len(stripped) :] + closer
    new_root = RootElement(
        attributes=root.attributes + declarations,
        self_closing=root.self_closing,
        raw=raw,
    )
    return new_root, needed


def merge_documents(
    base: ResourceDocument,
    locale: ResourceDocument,
    *,
    options: MergeOptions | None = None,
    source_label: str = "values/strings.xml",
) -> MergeResult:
    """Append entries missing from ``locale`` to it.

    Args:
        base: Authoritative document
        locale: Document to augment
        options: Merge switches (defaults: marker on, untranslatable copied)
        source_label: Base file name shown in the marker comment

    Returns:
        MergeResult with the merged document and the appended entries
    """
    options = options or MergeOptions()
    missing = find_missing(base, locale, skip_untranslatable=options.skip_untranslatable)
    if not missing:
        return MergeResult(document=locale)

    indent, newline = detect_layout(locale)
    separator = Whitespace(content=newline + indent)

    body: list[BodyNode] = list(locale.body)
    tail_indent = ""
    if body and isinstance(body[-1], Whitespace):
        trailing = body.pop().content
        if "\n" in trailing:
            tail_indent = trailing.rpartition("\n")[2]

    body.append(separator)
    if options.mark_untranslated:
        label = _DASH_RUN_RE.sub("-", source_label)
        body.append(Comment(content=UNTRANSLATED_MARKER.format(source=label)))
        body.append(separator)
    for index, entry in enumerate(missing):
        if index:
            body.append(separator)
        body.append(_adapt_newlines(entry, newline))
        logger.debug("Adding <%s name=\"%s\">", entry.kind, entry.name)
    body.append(Whitespace(content=newline + tail_indent))

    root = locale.root
    end_tag = locale.end_tag
    if root.self_closing:
        root = _open_root(root)
        end_tag = "</resources>"

    prefixes = frozenset().union(*(entry.namespace_prefixes() for entry in missing))
    root, namespaces_added = _declare_namespaces(root, base.root, prefixes)
    for prefix in namespaces_added:
        logger.debug("Declaring namespace prefix '%s' on <resources>", prefix)

    document = ResourceDocument(
        root=root,
        body=tuple(body),
        prolog=locale.prolog,
        end_tag=end_tag,
        epilogue=locale.epilogue,
    )
    return MergeResult(document=document, added=missing, namespaces_added=namespaces_added)
