"""Tests for root/element tag selection and root collapse."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pydantic import BaseModel

from sapling.config import SerializeOptions
from sapling.shape import collapse_root, collection_item_type, pluralize, resolve_tags


class Person(BaseModel):
    """Simple test model."""
    name: str


class Company(BaseModel):
    """Another test model."""
    name: str


@dataclass
class Box:
    """Simple test dataclass."""
    size: int


def test_pluralize():
    """Test simple English plurals."""
    assert pluralize("Person") == "Persons"
    assert pluralize("Category") == "Categories"
    assert pluralize("Day") == "Days"
    assert pluralize("Box") == "Boxes"
    assert pluralize("Match") == "Matches"
    assert pluralize("Address") == "Addresses"


def test_collection_of_models():
    """Test a homogeneous list of models is recognized."""
    assert collection_item_type([Person(name="a"), Person(name="b")]) is Person


def test_collection_of_dataclasses():
    """Test a homogeneous tuple of dataclasses is recognized."""
    assert collection_item_type((Box(1),)) is Box


def test_not_a_collection():
    """Test mixed, empty and plain lists are not record collections."""
    assert collection_item_type([Person(name="a"), Company(name="b")]) is None
    assert collection_item_type([]) is None
    assert collection_item_type([{"name": "a"}]) is None
    assert collection_item_type(Person(name="a")) is None


def test_resolve_tags_pinned():
    """Test a pinned root wins over derivation."""
    options = SerializeOptions(root_tag="staff", element_tag="member")
    assert resolve_tags([Person(name="a")], options) == ("staff", "member", True)


def test_resolve_tags_derived():
    """Test tags derived from the record type."""
    assert resolve_tags([Person(name="a")], SerializeOptions()) == ("Persons", "Person", False)


def test_resolve_tags_default():
    """Test defaults for plain data."""
    options = SerializeOptions(element_tag="entry")
    assert resolve_tags({"a": 1}, options) == ("root", "entry", False)


def test_collapse_single_child():
    """Test a lone child becomes the document element."""
    root = ET.Element("root", {"xmlns:ns": "http://ns"})
    ET.SubElement(root, "item").text = "1"
    collapsed = collapse_root(root, pinned=False)
    assert ET.tostring(collapsed, encoding="unicode") == '<item xmlns:ns="http://ns">1</item>'


def test_no_collapse_when_pinned():
    """Test a pinned root is kept."""
    root = ET.Element("root")
    ET.SubElement(root, "item")
    assert collapse_root(root, pinned=True) is root


def test_no_collapse_with_several_children():
    """Test two children keep the wrapper."""
    root = ET.Element("root")
    ET.SubElement(root, "a")
    ET.SubElement(root, "b")
    assert collapse_root(root, pinned=False) is root


def test_no_collapse_without_children():
    """Test an empty root is kept."""
    root = ET.Element("root")
    assert collapse_root(root, pinned=False) is root
