"""Root and element tag selection, and the single-child root collapse."""

import dataclasses
import logging
import xml.etree.ElementTree as ET
from typing import Any

from pydantic import BaseModel

from sapling.config import DEFAULT_ROOT_TAG, SerializeOptions


logger = logging.getLogger(__name__)


def pluralize(name: str) -> str:
    """Return a simple English plural of a type name.

    Example:
        >>> pluralize("Person"), pluralize("Category"), pluralize("Box")
        ('Persons', 'Categories', 'Boxes')
    """
    lower = name.lower()
    if lower.endswith("y") and len(name) > 1 and lower[-2] not in "aeiou":
        return name[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return name + "es"
    return name + "s"


def collection_item_type(obj: Any) -> type | None:
    """Return T when ``obj`` is a non-empty list of records of one type T.

    Records are Pydantic model instances and dataclass instances.
    """
    if not isinstance(obj, (list, tuple)) or not obj:
        return None
    kind = type(obj[0])
    if not (issubclass(kind, BaseModel) or dataclasses.is_dataclass(kind)):
        return None
    if all(type(item) is kind for item in obj):
        return kind
    return None


def resolve_tags(obj: Any, options: SerializeOptions) -> tuple[str, str, bool]:
    """Choose the root and element tags for a top-level value.

    Returns:
        ``(root_tag, element_tag, pinned)``; ``pinned`` is True when the
        caller fixed the root tag, which also disables root collapse.
    """
    if options.root_tag is not None:
        return options.root_tag, options.element_tag, True

    kind = collection_item_type(obj)
    if kind is not None:
        root_tag, element_tag = pluralize(kind.__name__), kind.__name__
        logger.debug("Derived tags <%s>/<%s> from %s records", root_tag, element_tag, kind.__name__)
        return root_tag, element_tag, False

    return DEFAULT_ROOT_TAG, options.element_tag, False


def collapse_root(root: ET.Element, pinned: bool) -> ET.Element:
    """Make a lone child the document element when the root is not pinned.

    ``<root><item>...</item></root>`` becomes ``<item>...</item>``. Root
    attributes, including namespace declarations, move to the new root.
    """
    if pinned or len(root) != 1 or (root.text and root.text.strip()):
        return root

    child = root[0]
    for name, value in root.attrib.items():
        child.attrib.setdefault(name, value)
    child.tail = None
    logger.debug("Collapsed <%s> into its only child <%s>", root.tag, child.tag)
    return child
