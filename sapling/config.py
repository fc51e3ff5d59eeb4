"""Immutable option objects for serialize and deserialize calls."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sapling.value import DEFAULT_MAX_DEPTH


DEFAULT_ROOT_TAG = "root"
DEFAULT_ELEMENT_TAG = "element"


class SerializeOptions(BaseModel):
    """Options for converting a value to XML.

    Attributes:
        root_tag: Root element name. None leaves the root unpinned, which
            allows tag derivation from record collections and root collapse.
        element_tag: Element name for sequence items with no natural key
        attributes: Extra attributes set on the root element
        namespaces: Namespace table mapping URI to prefix
        suppress_nulls: Omit empty scalars and recursively-empty containers
        pretty: Indent the output
        indent: Indent unit used when ``pretty`` is set
        declaration: Emit the ``<?xml ...?>`` declaration
        max_depth: Maximum nesting depth of the input value

    Example:
        >>> options = SerializeOptions(root_tag="people", suppress_nulls=True)
        >>> options.with_root("staff").root_tag
        'staff'
    """

    model_config = ConfigDict(frozen=True)

    root_tag: str | None = None
    element_tag: str = DEFAULT_ELEMENT_TAG
    attributes: dict[str, str] = Field(default_factory=dict)
    namespaces: dict[str, str] = Field(default_factory=dict)
    suppress_nulls: bool = False
    pretty: bool = False
    indent: str = "    "
    declaration: bool = True
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)

    @field_validator("root_tag", "element_tag")
    @classmethod
    def _non_blank_tag(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("tag names cannot be blank")
        return value

    def with_root(self, root_tag: str) -> "SerializeOptions":
        """Return a copy with the root tag pinned."""
        return self.model_copy(update={"root_tag": root_tag})


class DeserializeOptions(BaseModel):
    """Options for converting XML to a value.

    Attributes:
        array_tags: Tag names that always deserialize to a Sequence, even
            on their first occurrence
        max_depth: Maximum element nesting depth of the input document
    """

    model_config = ConfigDict(frozen=True)

    array_tags: frozenset[str] = frozenset()
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)
