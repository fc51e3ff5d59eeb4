"""Indentation and whitespace removal for serialized XML text."""

import re


_BETWEEN_TAGS = re.compile(r">\s+<")
_TAG_BOUNDARY = re.compile(r"(?<=>)(?=<)")


def _is_open_tag(token: str) -> bool:
    """Check whether ``token`` is a single opening tag such as ``<a x="1">``."""
    return (
        token.startswith("<")
        and not token.startswith(("</", "<?", "<!"))
        and not token.endswith("/>")
        and "<" not in token[1:]
    )


def minify_xml(text: str) -> str:
    """Remove whitespace between tags.

    Whitespace that is the whole text of an element, as in ``<a>  </a>``,
    is content and is kept.

    Example:
        >>> minify_xml("<a>\\n  <b>1</b>\\n  <c> </c>\\n</a>\\n")
        '<a><b>1</b><c> </c></a>'
    """
    text = text.strip()

    def _replace(match: re.Match) -> str:
        tag_start = text.rfind("<", 0, match.start())
        previous = text[tag_start:match.start() + 1]
        if _is_open_tag(previous) and text.startswith("</", match.end() - 1):
            return match.group(0)
        return "><"

    return _BETWEEN_TAGS.sub(_replace, text)


def format_xml(text: str, indent: str = "    ") -> str:
    """Indent XML text one tag (or one leaf element) per line.

    The input is minified first, so formatting already formatted text
    returns it unchanged. An opening tag directly followed by its closing
    tag stays on one line. Text nodes must not contain a literal ``><``.

    Args:
        text: Serialized XML
        indent: Indent unit repeated once per nesting level

    Returns:
        The indented document without trailing whitespace

    Example:
        >>> print(format_xml("<a><b>1</b><c/><d></d></a>", indent="  "))
        <a>
          <b>1</b>
          <c/>
          <d></d>
        </a>
    """
    tokens: list[str] = []
    for part in _TAG_BOUNDARY.split(minify_xml(text)):
        if tokens and part.startswith("</") and _is_open_tag(tokens[-1]):
            tokens[-1] += part
        else:
            tokens.append(part)

    lines = []
    level = 0
    for token in tokens:
        if token.startswith("</"):
            level = max(level - 1, 0)
            lines.append(indent * level + token)
        elif _is_open_tag(token):
            lines.append(indent * level + token)
            level += 1
        else:
            lines.append(indent * level + token)

    return "\n".join(lines).strip()
