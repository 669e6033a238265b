"""
Error handling for the heap log parser.

Format errors are raised as ParseError; the helper functions below build the
common ones with consistent codes and help text.
"""

from typing import Optional, List

from ..model.errors import HeapGenError, SourceLocation


class ParseError(HeapGenError):
    """
    Exception raised when a line of the heap log is malformed.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        line_text: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions,
                         source_line=line_text)
        self.line_text = line_text


def create_bad_address_error(text: str, location: SourceLocation,
                             line_text: Optional[str] = None) -> ParseError:
    """Create an error for a malformed address literal."""
    if not text.startswith("0x"):
        message = f"Expected address: {text}"
    else:
        message = f"Can't parse address: {text}"

    return ParseError(
        message=message,
        location=location,
        line_text=line_text,
        code="P001",
        help_text="Addresses are hexadecimal literals prefixed with '0x'.",
    )


def create_bad_color_error(text: str, location: SourceLocation,
                           line_text: Optional[str] = None) -> ParseError:
    """Create an error for an unrecognised color tag."""
    return ParseError(
        message=f"Unrecognised GC log color: {text}",
        location=location,
        line_text=line_text,
        code="P002",
        suggestions=["Use 'B' for black", "Use 'G' for gray"],
    )


def create_missing_field_error(field: str, location: SourceLocation,
                               line_text: Optional[str] = None) -> ParseError:
    """Create an error for a record with too few fields."""
    return ParseError(
        message=f"Missing {field}",
        location=location,
        line_text=line_text,
        code="P003",
        help_text=f"The line ended before its {field} field.",
    )


def create_unexpected_edge_error(location: SourceLocation,
                                 line_text: Optional[str] = None) -> ParseError:
    """Create an error for an edge line that precedes every node line."""
    return ParseError(
        message="Unexpected >",
        location=location,
        line_text=line_text,
        code="P004",
        help_text="Edge lines attach to the most recent node line; none has been seen yet.",
    )


def create_bad_section_error(location: SourceLocation,
                             line_text: Optional[str] = None) -> ParseError:
    """Create an error for a record outside of every section."""
    return ParseError(
        message="Bad section: line appears before any section header",
        location=location,
        line_text=line_text,
        code="P005",
        suggestions=["Start the log with '# Roots.'",
                     "Separate roots and things with '=========='"],
    )
