"""Convert Values and Python objects to XML strings."""

import base64
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Iterable

from sapling.config import DEFAULT_ELEMENT_TAG, SerializeOptions
from sapling.exceptions import UnsupportedShapeError
from sapling.formatting import format_xml
from sapling.namespaces import namespace_declarations, resolve_name
from sapling.shape import collapse_root, resolve_tags
from sapling.value import Mapping, Null, Scalar, Sequence, Value, from_python


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def serialize(obj: Any, options: SerializeOptions | None = None) -> str:
    """Convert a Python object or Value to an XML string.

    Args:
        obj: Value, dict, list, scalar, Pydantic model or dataclass instance
        options: Serialization options

    Returns:
        XML document text

    Raises:
        UnsupportedShapeError: If ``obj`` holds a value with no text form
        DepthLimitError: If ``obj`` nests deeper than ``options.max_depth``

    Example:
        >>> serialize({"name": "Alice", "age": 30}, SerializeOptions(declaration=False))
        '<root><name>Alice</name><age>30</age></root>'
    """
    options = options or SerializeOptions()
    value = from_python(obj, options.max_depth)
    root_tag, element_tag, pinned = resolve_tags(obj, options)

    root = value_to_element(
        value,
        root_tag,
        element_tag=element_tag,
        namespaces=options.namespaces,
        suppress_nulls=options.suppress_nulls,
        attributes=options.attributes,
    )
    root = collapse_root(root, pinned)

    text = ET.tostring(root, encoding="unicode")
    if options.declaration:
        text = XML_DECLARATION + text
    if options.pretty:
        text = format_xml(text, options.indent)
    return text


def serialize_base64(obj: Any, options: SerializeOptions | None = None) -> str:
    """Serialize to XML and return the UTF-8 bytes as base64 text."""
    return base64.b64encode(serialize(obj, options).encode("utf-8")).decode("ascii")


@dataclass(frozen=True)
class _Context:
    element_tag: str
    namespaces: dict[str, str]
    suppress_nulls: bool

    def name(self, tag: str) -> str:
        return resolve_name(tag, self.namespaces)


def value_to_element(
    value: Value,
    root_tag: str,
    element_tag: str = DEFAULT_ELEMENT_TAG,
    namespaces: dict[str, str] | None = None,
    suppress_nulls: bool = False,
    attributes: dict[str, str] | None = None,
) -> ET.Element:
    """Build an XML tree for a Value.

    Mapping keys name child elements, in order. A Sequence repeats its
    inherited tag once per item. With ``suppress_nulls`` set, empty
    scalars are dropped and any container left without children is
    dropped too, up to but not including the root.

    Args:
        value: The Value to convert
        root_tag: Root element name
        element_tag: Tag for sequence items with no natural key
        namespaces: Namespace table mapping URI to prefix
        suppress_nulls: Prune empty values
        attributes: Extra attributes for the root element

    Returns:
        The root element
    """
    namespaces = namespaces or {}
    ctx = _Context(element_tag, namespaces, suppress_nulls)

    root = ET.Element(ctx.name(root_tag))
    for name, attr in (attributes or {}).items():
        root.set(name, attr)
    for name, uri in namespace_declarations(namespaces).items():
        root.set(name, uri)

    match value:
        case Null():
            pass
        case Scalar(text):
            root.text = text
        case Mapping(entries):
            _build_children(root, entries.items(), ctx)
        case Sequence():
            _build(root, element_tag, value, ctx)
        case _:
            raise UnsupportedShapeError(f"Not a Value: {type(value).__name__}", value)

    return root


def _build(parent: ET.Element, tag: str, value: Value, ctx: _Context) -> bool:
    """Append ``value`` to ``parent`` under ``tag``.

    Returns:
        False when nothing was emitted because the value was suppressed
    """
    match value:
        case Null():
            if ctx.suppress_nulls:
                return False
            ET.SubElement(parent, ctx.name(tag))
            return True

        case Scalar(text):
            if ctx.suppress_nulls and not text:
                return False
            ET.SubElement(parent, ctx.name(tag)).text = text
            return True

        case Mapping(entries):
            return _build_wrapped(parent, tag, entries.items(), ctx)

        case Sequence(items):
            if not items:
                if ctx.suppress_nulls:
                    return False
                ET.SubElement(parent, ctx.name(tag))
                return True

            emitted = False
            for item in items:
                if isinstance(item, Sequence):
                    # A list inside a list gets its own element
                    pairs = ((ctx.element_tag, sub) for sub in item.items)
                    built = _build_wrapped(parent, tag, pairs, ctx)
                else:
                    built = _build(parent, tag, item, ctx)
                emitted = emitted or built
            return emitted

    raise UnsupportedShapeError(f"Not a Value: {type(value).__name__}", value)


def _build_wrapped(
    parent: ET.Element,
    tag: str,
    pairs: Iterable[tuple[str, Value]],
    ctx: _Context,
) -> bool:
    """Emit an element holding ``pairs``; prune it if all were suppressed."""
    element = ET.SubElement(parent, ctx.name(tag))
    if _build_children(element, pairs, ctx) or not ctx.suppress_nulls:
        return True
    parent.remove(element)
    return False


def _build_children(element: ET.Element, pairs: Iterable[tuple[str, Value]], ctx: _Context) -> bool:
    emitted = False
    for key, item in pairs:
        if _build(element, key, item, ctx):
            emitted = True
    return emitted
