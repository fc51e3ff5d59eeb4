"""The Value Model: the intermediate representation for both directions."""

import base64
import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Union
from uuid import UUID

from pydantic import BaseModel

from sapling.exceptions import DepthLimitError, UnsupportedShapeError


DEFAULT_MAX_DEPTH = 256


@dataclass
class Null:
    """Absence of content."""


@dataclass
class Scalar:
    """A string-valued leaf.

    Attributes:
        text: The leaf's text. Numeric and boolean values are already
            stringified by the time they reach this node.
    """
    text: str


@dataclass
class Sequence:
    """An ordered list of values."""
    items: list["Value"] = field(default_factory=list)


@dataclass
class Mapping:
    """An insertion-ordered set of ``(key, value)`` pairs with unique keys."""
    entries: dict[str, "Value"] = field(default_factory=dict)


Value = Union[Null, Scalar, Sequence, Mapping]


def is_sequence(value: Value) -> bool:
    return isinstance(value, Sequence)


def is_mapping(value: Value) -> bool:
    return isinstance(value, Mapping)


def is_empty(value: Value) -> bool:
    """Check whether a value carries no content.

    ``Null``, ``Scalar("")`` and empty containers are empty. Anything
    else, including a container that holds only empty values, is not.
    """
    match value:
        case Null():
            return True
        case Scalar(text):
            return text == ""
        case Sequence(items):
            return not items
        case Mapping(entries):
            return not entries
    raise UnsupportedShapeError(f"Not a Value: {type(value).__name__}", value)


def to_python(value: Value) -> Any:
    """Convert a Value to plain Python data (None, str, list, dict)."""
    match value:
        case Null():
            return None
        case Scalar(text):
            return text
        case Sequence(items):
            return [to_python(item) for item in items]
        case Mapping(entries):
            return {key: to_python(item) for key, item in entries.items()}
    raise UnsupportedShapeError(f"Not a Value: {type(value).__name__}", value)


def from_python(obj: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Convert an arbitrary Python object graph to a Value.

    Args:
        obj: None, a string, number, bool, date/time, Enum, UUID, bytes,
            dict, list, tuple, Pydantic model, dataclass instance, or an
            existing Value
        max_depth: Maximum container nesting depth

    Returns:
        The equivalent Value tree

    Raises:
        UnsupportedShapeError: If a value has no text form or the graph
            contains a cycle
        DepthLimitError: If nesting exceeds ``max_depth``

    Example:
        >>> from_python({"name": "Alice", "tags": ["a", "b"]})
        Mapping(entries={'name': Scalar(text='Alice'), 'tags': Sequence(items=[Scalar(text='a'), Scalar(text='b')])})
    """
    return _convert(obj, set(), 0, max_depth)


def _convert(obj: Any, active: set[int], depth: int, max_depth: int) -> Value:
    if isinstance(obj, (Null, Scalar)):
        return obj
    if obj is None:
        return Null()

    scalar = _scalar_text(obj)
    if scalar is not None:
        return Scalar(scalar)

    if depth >= max_depth:
        raise DepthLimitError(f"Nesting exceeds max_depth={max_depth}", depth)

    # Containers still being converted; meeting one again means a cycle.
    if id(obj) in active:
        raise UnsupportedShapeError(
            f"Cyclic reference to {type(obj).__name__} cannot be serialized", obj
        )
    active.add(id(obj))
    try:
        # Value containers are walked too, so they get the same checks.
        if isinstance(obj, Sequence):
            return Sequence([_convert(item, active, depth + 1, max_depth) for item in obj.items])
        if isinstance(obj, Mapping):
            return Mapping({
                key: _convert(val, active, depth + 1, max_depth)
                for key, val in obj.entries.items()
            })
        if isinstance(obj, BaseModel):
            return Mapping({
                name: _convert(getattr(obj, name), active, depth + 1, max_depth)
                for name in type(obj).model_fields
            })
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return Mapping({
                f.name: _convert(getattr(obj, f.name), active, depth + 1, max_depth)
                for f in dataclasses.fields(obj)
            })
        if isinstance(obj, dict):
            return Mapping({
                str(key): _convert(val, active, depth + 1, max_depth)
                for key, val in obj.items()
            })
        if isinstance(obj, (list, tuple)):
            return Sequence([_convert(item, active, depth + 1, max_depth) for item in obj])
    finally:
        active.discard(id(obj))

    raise UnsupportedShapeError(f"'{type(obj).__name__}' is an unsupported type", obj)


def _scalar_text(obj: Any) -> str | None:
    """Return the text form of a leaf value, or None for non-leaves."""
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return str(obj).lower()
    if isinstance(obj, Enum):
        return str(obj.value)
    if isinstance(obj, str):
        return obj
    if isinstance(obj, (int, float, Decimal, UUID)):
        return str(obj)
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    return None
