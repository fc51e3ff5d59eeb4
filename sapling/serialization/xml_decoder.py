"""Convert XML strings to Values and Pydantic models."""

import logging
import types
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter

from sapling.config import DeserializeOptions
from sapling.events import Characters, EndElement, EventReader, StartElement
from sapling.exceptions import DepthLimitError, InvalidXMLError
from sapling.value import DEFAULT_MAX_DEPTH, Mapping, Null, Scalar, Sequence, Value, to_python


logger = logging.getLogger(__name__)


def deserialize(xml_input: str | bytes, options: DeserializeOptions | None = None) -> Mapping:
    """Parse XML into a Value tree.

    Repeated sibling tags become a Sequence. A tag seen once stays a bare
    value unless it is listed in ``options.array_tags``.

    Args:
        xml_input: XML document as a string or bytes
        options: Deserialization options

    Returns:
        A Mapping with a single key, the root element's name

    Raises:
        InvalidXMLError: If the input is not well-formed XML
        DepthLimitError: If nesting exceeds ``options.max_depth``

    Example:
        >>> to_python(deserialize("<root><item>1</item><item>2</item></root>"))
        {'root': {'item': ['1', '2']}}
    """
    options = options or DeserializeOptions()
    reader = EventReader(xml_input)
    return parse_events(reader, options.array_tags, options.max_depth)


def parse_events(
    reader: EventReader,
    array_tags: frozenset[str] = frozenset(),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Mapping:
    """Build a Value from a parser event stream positioned at the root."""
    event = reader.advance()
    if not isinstance(event, StartElement):
        raise InvalidXMLError(f"Expected a root element, got {event}")
    value = _parse_element(reader, event.name, array_tags, 1, max_depth)
    return Mapping({event.name: value})


def _parse_element(
    reader: EventReader,
    name: str,
    array_tags: frozenset[str],
    depth: int,
    max_depth: int,
) -> Value:
    """Consume events up to the end of element ``name`` and return its value."""
    if depth > max_depth:
        raise DepthLimitError(f"Element <{name}> exceeds max_depth={max_depth}", depth)

    entries: dict[str, Value] = {}
    text: list[str] = []

    while reader.has_next():
        match reader.advance():
            case StartElement(child):
                child_value = _parse_element(reader, child, array_tags, depth + 1, max_depth)
                _merge(entries, child, child_value, child in array_tags)
            case Characters(chunk):
                text.append(chunk)
            case EndElement(end):
                if end != name:
                    raise InvalidXMLError(f"Expected </{name}>, got </{end}>")
                return _element_value(name, entries, "".join(text))

    raise InvalidXMLError(f"Unexpected end of input inside <{name}>")


def _merge(entries: dict[str, Value], key: str, value: Value, always_array: bool) -> None:
    """Store a child value, turning repeated tags into a Sequence.

    Element values are never Sequences, so a stored Sequence always means
    the tag has been seen before (or is a declared array tag).
    """
    match entries.get(key):
        case None:
            entries[key] = Sequence([value]) if always_array else value
        case Sequence(items):
            items.append(value)
        case prior:
            logger.debug("Promoting repeated <%s> to a sequence", key)
            entries[key] = Sequence([prior, value])


def _element_value(name: str, entries: dict[str, Value], text: str) -> Value:
    if entries:
        # Mixed content: child elements win.
        if text.strip():
            logger.debug("Discarding text %r mixed with child elements in <%s>", text, name)
        return Mapping(entries)
    if text.strip():
        return Scalar(text)
    return Null()


def xml_to_pydantic(xml_input: str | bytes, target: Any, options: DeserializeOptions | None = None) -> Any:
    """Parse XML and validate against a Pydantic model or a list of models.

    Args:
        xml_input: XML string to parse
        target: Pydantic model class, or ``list[Model]``
        options: Deserialization options

    Returns:
        Instance of the model, or a list of instances

    Raises:
        ValidationError: If XML data doesn't match model schema
        InvalidXMLError: If XML is malformed

    Example:
        >>> from pydantic import BaseModel
        >>> class Person(BaseModel):
        ...     name: str
        ...     age: int
        >>> xml = '<Person><name>Alice</name><age>30</age></Person>'
        >>> person = xml_to_pydantic(xml, Person)
        >>> person.age
        30
    """
    data = to_python(deserialize(xml_input, options))

    item_type = _list_item_type(target)
    if item_type is not None:
        root_value = next(iter(data.values()))
        records = _find_records(root_value, item_type)
        if records is None:
            records = [] if root_value is None else [_unwrap(data, item_type)]
        return TypeAdapter(target).validate_python([_coerce(r, item_type) for r in records])

    if not _is_pydantic_model(target):
        raise TypeError(f"Expected Pydantic BaseModel class or list of models, got {target}")

    return target.model_validate(_coerce(_unwrap(data, target), target))


def _unwrap(data: Any, model: Any) -> Any:
    """Strip single-key wrappers that are not fields of the model.

    This removes the document root and a wrapper named after the model.
    """
    if not _is_pydantic_model(model):
        return data

    while isinstance(data, dict) and len(data) == 1:
        key, inner = next(iter(data.items()))
        if key in model.model_fields:
            break
        if inner is None and key == model.__name__:
            return {}
        if not isinstance(inner, dict):
            break
        data = inner
    return data


def _find_records(data: Any, item_type: Any) -> list | None:
    """Find the shallowest list in the data, breadth first.

    When the items are models, only lists of mappings qualify, so a list
    field inside a single record is not mistaken for the record list.
    """
    wants_mappings = _is_pydantic_model(item_type)
    queue = [data]
    while queue:
        node = queue.pop(0)
        if isinstance(node, list):
            if not wants_mappings or all(isinstance(i, dict) or i is None for i in node):
                return node
            continue
        if isinstance(node, dict):
            queue.extend(node.values())
    return None


def _coerce(data: Any, annotation: Any) -> Any:
    """Reshape generic data to follow a type annotation.

    Null fields are dropped so model defaults apply, and list fields
    accept both repeated tags and an ``<item>`` wrapper element.
    """
    annotation = _strip_optional(annotation)

    if _is_pydantic_model(annotation) and isinstance(data, dict):
        result = {}
        for key, value in data.items():
            field_info = annotation.model_fields.get(key)
            if field_info is None:
                result[key] = value
                continue
            if value is None and _list_item_type(_strip_optional(field_info.annotation)) is None:
                continue
            result[key] = _coerce(value, field_info.annotation)
        return result

    item_type = _list_item_type(annotation)
    if item_type is not None:
        if isinstance(data, dict) and len(data) == 1:
            key = next(iter(data))
            # A lone field of the item model is a record, not a wrapper.
            if not _is_model_field(_strip_optional(item_type), key):
                data = data[key]
        if data is None:
            return []
        if not isinstance(data, list):
            data = [data]
        return [_coerce(item, item_type) for item in data]

    return data


def _strip_optional(annotation: Any) -> Any:
    """Unwrap ``X | None`` to ``X``."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _list_item_type(annotation: Any) -> Any:
    """Return the item type of ``list[T]``, or None for other annotations."""
    if annotation is list:
        return Any
    if get_origin(annotation) is list:
        args = get_args(annotation)
        return args[0] if args else Any
    return None


def _is_pydantic_model(field_type: Any) -> bool:
    """Check if a type is a Pydantic model."""
    try:
        return isinstance(field_type, type) and issubclass(field_type, BaseModel)
    except TypeError:
        return False


def _is_model_field(annotation: Any, key: str) -> bool:
    return _is_pydantic_model(annotation) and key in annotation.model_fields
