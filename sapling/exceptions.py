"""Exception classes for Sapling."""


class SaplingError(Exception):
    """Base exception for all Sapling errors."""


class InvalidXMLError(SaplingError):
    """Raised when the input is not well-formed XML.

    The parser error is chained as ``__cause__``; no partial result is
    produced.

    Attributes:
        message: Human-readable error description
        xml_input: The offending input, echoed for diagnostics
    """

    def __init__(self, message: str, xml_input: str | bytes | None = None):
        super().__init__(message)
        self.xml_input = xml_input


class UnsupportedShapeError(SaplingError):
    """Raised when a host value cannot be represented as XML.

    This covers types with no text form and cyclic object graphs.

    Attributes:
        message: Human-readable error description
        value: The value that could not be converted (optional)
    """

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class DepthLimitError(SaplingError):
    """Raised when nesting exceeds the configured ``max_depth``."""

    def __init__(self, message: str, depth: int):
        super().__init__(message)
        self.depth = depth
