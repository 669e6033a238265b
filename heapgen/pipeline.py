"""
End to end heap reconstruction: parse, mark, emit.
"""

from typing import Optional

from .analysis.marker import mark_referenced_nodes
from .backend.js_emitter import JSEmitter
from .config import EmitterConfig
from .model.graph import HeapGraph
from .parser.log_parser import parse_gc_log


def build_graph(text: str, filename: str = "<input>") -> HeapGraph:
    """Parse a heap log and mark the nodes reachable from its roots."""
    graph = parse_gc_log(text, filename)
    mark_referenced_nodes(graph)
    return graph


def reconstruct_heap(text: str, config: Optional[EmitterConfig] = None,
                     filename: str = "<input>") -> str:
    """
    Convert heap log text into a JavaScript program recreating the heap.

    Raises:
        HeapGenError: if the log is malformed or inconsistent; no output is
            produced in that case
    """
    graph = build_graph(text, filename)
    return JSEmitter(config).render(graph)
