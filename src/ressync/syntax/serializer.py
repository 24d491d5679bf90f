"""Serialize resource documents back to XML text.

Nodes that came from the parser carry their exact source text and are
emitted unchanged, so ``serialize(parse(text)) == text`` for every document
the parser accepts. Nodes built in code are rendered from their fields.

Python 3.13+.
"""

from .ast import (
    BodyNode,
    Comment,
    Markup,
    ResourceDocument,
    ResourceEntry,
    RootElement,
    Whitespace,
    XmlAttribute,
)

__all__ = [
    "SerializationValidationError",
    "serialize",
    "serialize_entry",
    "serialize_node",
    "serialize_root",
]


class SerializationValidationError(ValueError):
    """Raised when a node built in code would produce invalid XML.

    Common causes:
    - Comment text containing ``--`` or ending with ``-``
    - Entry with an empty kind or name
    """


def _render_attributes(attributes: tuple[XmlAttribute, ...]) -> str:
    return "".join(f" {attribute.render()}" for attribute in attributes)


def serialize_root(root: RootElement) -> str:
    """Serialize the ``<resources>`` start tag."""
    if root.raw is not None:
        return root.raw
    closer = "/>" if root.self_closing else ">"
    return f"<resources{_render_attributes(root.attributes)}{closer}"


def serialize_entry(entry: ResourceEntry) -> str:
    """Serialize one entry.

    Example:
        >>> serialize_entry(ResourceEntry(kind="string", name="hi", value="Hello"))
        '<string name="hi">Hello</string>'
    """
    if entry.raw is not None:
        return entry.raw
    if not entry.kind or not entry.name:
        msg = f"Entry needs a kind and a name, got kind={entry.kind!r} name={entry.name!r}"
        raise SerializationValidationError(msg)

    attributes = entry.attributes
    if not any(attribute.name == "name" for attribute in attributes):
        attributes = (XmlAttribute(name="name", value=entry.name), *attributes)
    start = f"<{entry.kind}{_render_attributes(attributes)}"
    if not entry.value:
        return f"{start}/>"
    return f"{start}>{entry.value}</{entry.kind}>"


def _serialize_comment(comment: Comment) -> str:
    if "--" in comment.content or comment.content.endswith("-"):
        msg = f"Comment text cannot contain '--' or end with '-': {comment.content!r}"
        raise SerializationValidationError(msg)
    return f"<!--{comment.content}-->"


def serialize_node(node: BodyNode) -> str:
    """Serialize one body node."""
    match node:
        case ResourceEntry():
            return serialize_entry(node)
        case Comment():
            return _serialize_comment(node)
        case Whitespace() | Markup():
            return node.content


def serialize(document: ResourceDocument) -> str:
    """Serialize a document to XML text.

    Args:
        document: Parsed or merged document

    Returns:
        XML source text

    Raises:
        SerializationValidationError: If a node built in code is invalid
    """
    parts = [document.prolog, serialize_root(document.root)]
    parts.extend(serialize_node(node) for node in document.body)
    parts.append(document.end_tag)
    parts.append(document.epilogue)
    return "".join(parts)
