"""
heapgen

Converts a textual GC heap log into a JavaScript program that recreates a
structurally identical object graph: same shapes, same reference topology,
same root arrays.

Architecture:
    heapgen/
    ├── model/           # Nodes, edges, roots, kinds and errors
    ├── parser/          # Heap log parsing
    ├── analysis/        # Reachability marking
    └── backend/         # JavaScript emission
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import EmitterConfig
from .model import HeapGraph, Kind, HeapGenError
from .parser import GCLogParser, parse_gc_log
from .analysis import ReachabilityMarker, mark_referenced_nodes
from .backend import JSEmitter
from .pipeline import build_graph, reconstruct_heap

__all__ = [
    # Core classes
    "GCLogParser",
    "HeapGraph",
    "Kind",
    "ReachabilityMarker",
    "JSEmitter",
    "EmitterConfig",
    "HeapGenError",

    # Pipeline
    "parse_gc_log",
    "mark_referenced_nodes",
    "build_graph",
    "reconstruct_heap",

    # Version info
    "__version__",
    "__license__",
]
