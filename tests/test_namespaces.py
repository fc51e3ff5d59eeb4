"""Tests for tag-name rewriting."""

import pytest

from sapling.exceptions import UnsupportedShapeError
from sapling.namespaces import local_name, namespace_declarations, resolve_name, sanitize_tag


def test_sanitize_leading_digit():
    """Test a leading digit gets an underscore prefix."""
    assert sanitize_tag("2024") == "_2024"
    assert sanitize_tag("a1") == "a1"


def test_sanitize_prefixed_name():
    """Test only the local part is sanitized."""
    assert sanitize_tag("ns:1st") == "ns:_1st"


def test_resolve_mapped_namespace():
    """Test Clark notation with a known URI gets its prefix."""
    assert resolve_name("{http://ns}tag", {"http://ns": "ns"}) == "ns:tag"


def test_resolve_unmapped_namespace():
    """Test an unknown URI is stripped."""
    assert resolve_name("{http://other}tag", {"http://ns": "ns"}) == "tag"
    assert resolve_name("{http://other}tag") == "tag"


def test_resolve_plain_name():
    """Test plain names pass through sanitized."""
    assert resolve_name("tag", {"http://ns": "ns"}) == "tag"
    assert resolve_name("9lives") == "_9lives"
    assert resolve_name("{http://ns}9lives", {"http://ns": "ns"}) == "ns:_9lives"


@pytest.mark.parametrize("name", ["", "   ", "a b", "a<b", "x\n", "{http://ns}a b"])
def test_resolve_invalid_name(name):
    """Test names that cannot be a tag are rejected."""
    with pytest.raises(UnsupportedShapeError, match="not a valid XML tag name"):
        resolve_name(name, {"http://ns": "ns"})


def test_namespace_declarations():
    """Test xmlns attributes, including a default namespace."""
    declarations = namespace_declarations({"http://ns": "ns", "http://default": ""})
    assert declarations == {"xmlns:ns": "http://ns", "xmlns": "http://default"}
    assert namespace_declarations(None) == {}


def test_local_name():
    """Test qualifiers are stripped on input."""
    assert local_name("{http://ns}tag") == "tag"
    assert local_name("ns:tag") == "tag"
    assert local_name("tag") == "tag"
