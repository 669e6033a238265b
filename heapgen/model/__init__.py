"""
heapgen Graph Model Package

Node, edge and root records for a parsed heap log, along with the lookup
tables that go with them:
- Address registry (address <-> node id)
- Edge name interner (compact property keys and element indices)
- Kind classification of GC things
- Shared error types and diagnostics
"""

from .errors import (
    SourceLocation, Diagnostic, HeapGenError, ClassificationError,
    GraphError, DuplicateAddressError, UnresolvedAddressError, format_address
)
from .kinds import Kind, INCLUDABLE_KINDS, classify
from .graph import (
    Color, PropertyKey, EdgeLabel, Edge, Node, Root,
    AddressRegistry, EdgeNameInterner, GraphStats, HeapGraph
)

__all__ = [
    # Graph
    "HeapGraph", "Node", "Edge", "Root", "Color",
    "PropertyKey", "EdgeLabel", "GraphStats",
    "AddressRegistry", "EdgeNameInterner",

    # Kinds
    "Kind", "INCLUDABLE_KINDS", "classify",

    # Errors
    "SourceLocation", "Diagnostic", "HeapGenError", "ClassificationError",
    "GraphError", "DuplicateAddressError", "UnresolvedAddressError",
    "format_address",
]
