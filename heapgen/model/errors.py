"""
Error types shared by every stage of the heap reconstruction pipeline.

Every failure in heapgen is fatal: a dump that cannot be parsed, classified or
resolved aborts the whole run. Errors carry a Diagnostic so the command line
front end can report the offending line, address or tag precisely.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """A position in the heap log being parsed."""
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class Diagnostic:
    """Structured description of a failure."""
    message: str
    location: Optional[SourceLocation] = None
    severity: str = "error"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    source_line: Optional[str] = None      # Offending line of the log

    @property
    def category(self) -> Optional[str]:
        return ERROR_CODES.get(self.code) if self.code else None

    def __str__(self) -> str:
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"
        if self.source_line is not None:
            result += f"   | {self.source_line}\n"

        if self.category:
            result += f"  note: {self.category}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class HeapGenError(Exception):
    """
    Base class for all fatal heapgen errors.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        source_line: Optional[str] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            source_line=source_line
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class ClassificationError(HeapGenError):
    """Raised when a type tag and details pair maps to no known kind."""

    def __init__(self, type_tag: str, details: str,
                 location: Optional[SourceLocation] = None):
        super().__init__(
            message=f"Unknown kind: {type_tag} {details}",
            location=location,
            code="K001",
            help_text="Only the fixed set of GC thing kinds can be reconstructed; "
                      "objects must have the tag 'Function' or details ending in "
                      "'<unknown object>'.",
        )
        self.type_tag = type_tag
        self.details = details


class GraphError(HeapGenError):
    """Raised when the heap graph is referentially inconsistent."""


class DuplicateAddressError(GraphError):

    def __init__(self, address: int, location: Optional[SourceLocation] = None):
        super().__init__(
            message=f"Duplicate address: {format_address(address)}",
            location=location,
            code="R001",
            help_text="Each GC thing must be declared exactly once in the main section.",
        )
        self.address = address


class UnresolvedAddressError(GraphError):

    def __init__(self, address: int, context: str = "reference",
                 location: Optional[SourceLocation] = None):
        super().__init__(
            message=f"Unknown {context} target: {format_address(address)}",
            location=location,
            code="R002",
            help_text="The address is never declared as a node; the dump is "
                      "truncated or corrupt.",
        )
        self.address = address
        self.context = context


def format_address(address: int) -> str:
    return "0x" + format(address, "x")


# Error codes for categorization
ERROR_CODES = {
    "P001": "Malformed address literal",
    "P002": "Unrecognised GC log color",
    "P003": "Missing required field",
    "P004": "Edge line without a current node",
    "P005": "Line outside of any section",
    "R001": "Duplicate node address",
    "R002": "Unknown edge or root target",
    "K001": "Unknown GC thing kind",
}
