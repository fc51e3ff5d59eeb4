"""Sapling - schemaless XML <-> value transcoding.

Sapling converts nested mappings, sequences, scalars and nulls to XML and
back without a fixed schema, with optional Pydantic validation on the way in.
"""

from sapling._version import __version__
from sapling.config import SerializeOptions, DeserializeOptions
from sapling.exceptions import SaplingError, InvalidXMLError, UnsupportedShapeError, DepthLimitError
from sapling.formatting import format_xml, minify_xml
from sapling.serialization import (
    deserialize,
    serialize,
    serialize_base64,
    xml_to_pydantic,
)
from sapling.value import (
    Mapping,
    Null,
    Scalar,
    Sequence,
    Value,
    from_python,
    is_empty,
    is_mapping,
    is_sequence,
    to_python,
)

__all__ = [
    "__version__",
    "SerializeOptions",
    "DeserializeOptions",
    "SaplingError",
    "InvalidXMLError",
    "UnsupportedShapeError",
    "DepthLimitError",
    "format_xml",
    "minify_xml",
    "serialize",
    "serialize_base64",
    "deserialize",
    "xml_to_pydantic",
    "Mapping",
    "Null",
    "Scalar",
    "Sequence",
    "Value",
    "from_python",
    "is_empty",
    "is_mapping",
    "is_sequence",
    "to_python",
]
