"""
Exception classes for structdoc.

All structdoc exceptions inherit from StructDocError,
making it easy to catch all library errors.

Classification itself never raises: every line or markup node resolves to
some element. These exceptions cover the edges around it (unsupported input
files, invalid configuration, unknown style identifiers).

Example:
    >>> try:
    ...     doc = structdoc.convert("thesis.docx")
    ... except structdoc.UnsupportedFormatError as e:
    ...     print(f"Format not supported: {e}")
    ... except structdoc.StructDocError as e:
    ...     print(f"structdoc error: {e}")
"""


class StructDocError(Exception):
    """
    Base exception for all structdoc errors.

    Catch this to handle any structdoc-specific error.
    """

    pass


class UnsupportedFormatError(StructDocError):
    """
    Raised when an input file format is not handled by structdoc.

    Binary formats (DOCX, PDF) must be decoded to text or HTML by the caller.

    Example:
        >>> structdoc.convert("thesis.docx")
        UnsupportedFormatError: Cannot detect format for: thesis.docx
    """

    pass


class ConfigurationError(StructDocError, ValueError):
    """
    Raised for invalid configuration or style definitions.

    Example:
        >>> StructureConfig(input_format="pdf")
        ConfigurationError: input_format must be one of ('auto', 'text', 'html')
    """

    pass


class UnknownStyleError(ConfigurationError, KeyError):
    """Raised when a style identifier is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ""
