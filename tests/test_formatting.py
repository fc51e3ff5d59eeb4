"""Tests for XML text formatting."""

from sapling.formatting import format_xml, minify_xml


FLAT = '<?xml version="1.0" encoding="UTF-8"?><a><b>1</b><c /><d><e>x</e></d></a>'

PRETTY = """<?xml version="1.0" encoding="UTF-8"?>
<a>
  <b>1</b>
  <c />
  <d>
    <e>x</e>
  </d>
</a>"""


def test_format_xml():
    """Test indentation of a flat document."""
    assert format_xml(FLAT, indent="  ") == PRETTY


def test_format_default_indent():
    """Test the default four-space indent."""
    assert format_xml("<a><b>1</b></a>") == "<a>\n    <b>1</b>\n</a>"


def test_format_is_idempotent():
    """Test formatting formatted text changes nothing."""
    once = format_xml(FLAT, indent="  ")
    assert format_xml(once, indent="  ") == once


def test_minify_reverses_format():
    """Test minify restores the flat form."""
    assert minify_xml(PRETTY) == FLAT


def test_format_single_element():
    """Test a document with one leaf element."""
    assert format_xml("<a>1</a>") == "<a>1</a>"
    assert format_xml("<a />") == "<a />"


def test_format_keeps_text_whitespace():
    """Test leaf text with surrounding spaces is not touched."""
    assert format_xml("<a><b> x </b></a>", indent="") == "<a>\n<b> x </b>\n</a>"


def test_format_open_close_pair():
    """Test an empty element written as an open/close pair stays on one line."""
    assert format_xml("<a><b></b></a>", indent="  ") == "<a>\n  <b></b>\n</a>"


def test_format_keeps_whitespace_only_text():
    """Test whitespace that is an element's whole text survives."""
    once = format_xml("<r><a>  </a><b /></r>", indent="  ")
    assert once == "<r>\n  <a>  </a>\n  <b />\n</r>"
    assert format_xml(once, indent="  ") == once


def test_minify_keeps_whitespace_only_text():
    """Test minify only drops whitespace between tags."""
    assert minify_xml("<r>\n  <a> </a>\n  <b>\n  </b>\n</r>") == "<r><a> </a><b>\n  </b></r>"
