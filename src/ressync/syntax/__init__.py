"""Resource document syntax package.

Provides the document model, parser and serializer, independent of the
merge logic and of the filesystem.

Python 3.13+.
"""

from .ast import (
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
from .cursor import Cursor, ParseResult
from .parser import ResourceParser, parse
from .serializer import SerializationValidationError, serialize

__all__ = [
    "BodyNode",
    "Comment",
    "Cursor",
    "EntryKey",
    "Markup",
    "ParseResult",
    "ResourceDocument",
    "ResourceEntry",
    "ResourceParser",
    "RootElement",
    "SerializationValidationError",
    "Span",
    "Whitespace",
    "XmlAttribute",
    "parse",
    "serialize",
]
