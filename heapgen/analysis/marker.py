"""
Reachability marking for heap graphs.

Heap logs always contain nodes for all permanent atoms even though most are
never referenced, plus whatever garbage had not been swept yet. Only nodes
transitively reachable from the roots are reconstructed.
"""

import logging
from typing import List

from ..model.graph import HeapGraph, Node

_log = logging.getLogger('heapgen')


class ReachabilityMarker:
    """
    Marks every node reachable from the roots.

    Traversal does not continue through shapes, base shapes or property maps:
    those are object internals, so whatever they reference is only marked if
    it is also reachable some other way.
    """

    def __init__(self, graph: HeapGraph):
        self.graph = graph
        self.worklist: List[Node] = []
        self.marked_count = 0

    def mark(self) -> int:
        """
        Mark all reachable nodes.

        Returns:
            Number of nodes newly marked
        """
        self.marked_count = 0

        for root in self.graph.roots():
            self._push(self.graph.resolve(root.address, "root"))

        while self.worklist:
            node = self.worklist.pop()
            if not node.includable:
                continue

            for edge in node.edges:
                self._push(self.graph.resolve(edge.target, "edge"))

        _log.info("marked %d of %d nodes", self.marked_count, len(self.graph))
        return self.marked_count

    def _push(self, node: Node):
        if not node.marked:
            node.marked = True
            self.marked_count += 1
            self.worklist.append(node)


def mark_referenced_nodes(graph: HeapGraph) -> int:
    """Mark every node of the graph reachable from its roots."""
    return ReachabilityMarker(graph).mark()
