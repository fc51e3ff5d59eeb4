"""XML encoding and decoding of Values, Python objects and Pydantic models."""

from sapling.serialization.xml_encoder import serialize, serialize_base64, value_to_element
from sapling.serialization.xml_decoder import deserialize, parse_events, xml_to_pydantic

__all__ = [
    "serialize",
    "serialize_base64",
    "value_to_element",
    "deserialize",
    "parse_events",
    "xml_to_pydantic",
]
