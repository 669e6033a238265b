"""
heapgen Parser Package

Parses GC heap logs into a HeapGraph.

Key Features:
- Section aware line parsing (roots, weak maps, main graph)
- Kind classification of every node line
- Edge name interning with element index detection
- Precise diagnostics carrying the offending line number

Everything that goes wrong is fatal; there is no error recovery.
"""

from .log_parser import GCLogParser, Section, parse_gc_log
from .errors import ParseError

__all__ = [
    # Core parser
    "GCLogParser",
    "Section",
    "parse_gc_log",

    # Error handling
    "ParseError",
]
