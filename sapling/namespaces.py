"""Tag-name rewriting shared by the encoder and decoder.

Names may arrive in Clark notation, ``{uri}local``. On the way out they are
rewritten to ``prefix:local`` through a namespace table (URI to prefix). On
the way in only the local name is kept; Clark notation is never rebuilt.
"""

import re

from sapling.exceptions import UnsupportedShapeError


_CLARK = re.compile(r"^\{(?P<uri>[^}]*)\}(?P<local>.+)$")
_XML_NAME = re.compile(r"[^\W\d][\w.\-]*(:[^\W\d][\w.\-]*)?")


def sanitize_tag(name: str) -> str:
    """Prefix a leading digit with ``_`` so the name is a valid tag.

    Only the local part of a ``prefix:local`` name is touched.

    Example:
        >>> sanitize_tag("2024")
        '_2024'
        >>> sanitize_tag("ns:1st")
        'ns:_1st'
    """
    prefix, sep, local = name.rpartition(":")
    if local[:1].isdigit():
        local = "_" + local
    return f"{prefix}{sep}{local}"


def resolve_name(name: str, namespaces: dict[str, str] | None = None) -> str:
    """Rewrite a tag name for output.

    Args:
        name: Plain or Clark-notation name
        namespaces: Mapping of namespace URI to prefix

    Returns:
        ``prefix:local`` for a mapped URI, ``local`` for an unmapped one,
        or the plain name, sanitized.

    Raises:
        UnsupportedShapeError: If the result is still not a valid tag name
    """
    match = _CLARK.match(name)
    if match is None:
        resolved = sanitize_tag(name)
    else:
        local = match.group("local")
        prefix = (namespaces or {}).get(match.group("uri"))
        resolved = sanitize_tag(f"{prefix}:{local}" if prefix else local)

    if not _XML_NAME.fullmatch(resolved):
        raise UnsupportedShapeError(f"{name!r} is not a valid XML tag name", name)
    return resolved


def namespace_declarations(namespaces: dict[str, str] | None) -> dict[str, str]:
    """Build the ``xmlns`` attributes for a namespace table.

    An empty prefix declares the default namespace.
    """
    declarations = {}
    for uri, prefix in (namespaces or {}).items():
        declarations[f"xmlns:{prefix}" if prefix else "xmlns"] = uri
    return declarations


def local_name(name: str) -> str:
    """Strip a ``{uri}`` qualifier or ``prefix:`` from a parsed tag name."""
    if name.startswith("{"):
        name = name.rpartition("}")[2]
    return name.rpartition(":")[2]
