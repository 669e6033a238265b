"""
JavaScript backend for heapgen.

Turns a marked HeapGraph into a script that rebuilds the same object graph:

    (() => {
    let n0={e0:0};
    let n1="1";

    n0.e0=n1;

    blackRoot()[0]=n0;
    })();

Strings and symbols keep only their identity, never their contents. Every
other includable kind (scripts, JIT code, scopes, ...) is stood in for by a
plain object.
"""

import logging
from typing import List, Optional

from ..config import EmitterConfig
from ..model.graph import HeapGraph, Node, PropertyKey, Root
from ..model.kinds import Kind

_log = logging.getLogger('heapgen')


class JSEmitter:
    """
    Emits the reconstruction script for a marked heap graph.

    Output is produced in three passes over the nodes in id order:
    declarations, edge assignments, then the black and gray root arrays.
    """

    def __init__(self, config: Optional[EmitterConfig] = None):
        self.config = config or EmitterConfig()
        self.graph: Optional[HeapGraph] = None
        self.lines: List[str] = []

    def emit(self, graph: HeapGraph) -> List[str]:
        """
        Generate the script for a graph that has already been marked.

        Args:
            graph: Marked heap graph

        Returns:
            Lines of the generated script, without line terminators
        """
        self.graph = graph
        self.lines = []

        if self.config.wrap_in_function:
            self.lines.append("(() => {")

        self._emit_nodes()
        self._emit_phase_break()
        self._emit_edges()
        self._emit_phase_break()
        self._emit_roots()

        if self.config.wrap_in_function:
            self.lines.append("})();")

        _log.info("emitted %d lines", len(self.lines))
        return self.lines

    def render(self, graph: HeapGraph) -> str:
        """Generate the script as a single newline terminated string."""
        return "\n".join(self.emit(graph)) + "\n"

    def _emit_phase_break(self):
        if self.config.separate_phases:
            self.lines.append("")

    def _emit_nodes(self):
        declared = 0
        for node in self._emitted_nodes():
            self.lines.append(self._declaration(node))
            declared += 1
        _log.debug("declared %d nodes", declared)

    def _declaration(self, node: Node) -> str:
        name = self.node_name(node)

        if node.kind is Kind.STRING:
            # Don't use real string contents, just make a unique string
            return f'let {name}="{node.id}";'

        if node.kind is Kind.SYMBOL:
            return f"const {name}=Symbol();"

        # Use objects for all other kinds
        keys: List[PropertyKey] = []
        for edge, _ in self._included_edges(node):
            if not edge.is_indexed and edge.label not in keys:
                keys.append(edge.label)
        fields = ",".join(f"{self.property_name(key)}:0" for key in keys)
        return f"let {name}={{{fields}}};"

    def _emit_edges(self):
        for node in self._emitted_nodes():
            source = self.node_name(node)
            for edge, target in self._included_edges(node):
                if edge.is_indexed:
                    self.lines.append(f"{source}[{edge.label}]={self.node_name(target)};")
                else:
                    self.lines.append(
                        f"{source}.{self.property_name(edge.label)}={self.node_name(target)};")

    def _emit_roots(self):
        self._emit_root_array(self.config.black_root_accessor, self.graph.black_roots)
        self._emit_root_array(self.config.gray_root_accessor, self.graph.gray_roots)

    def _emit_root_array(self, accessor: str, roots: List[Root]):
        index = 0
        for root in roots:
            target = self.graph.resolve(root.address, "root")
            if target.includable:
                self.lines.append(f"{accessor}()[{index}]={self.node_name(target)};")
                index += 1

    def _emitted_nodes(self):
        for node in self.graph.nodes:
            if node.marked and node.includable:
                yield node

    def _included_edges(self, node: Node):
        for edge in node.edges:
            target = self.graph.resolve(edge.target, "edge")
            if target.includable:
                yield edge, target

    def node_name(self, node: Node) -> str:
        return f"{self.config.node_prefix}{node.id}"

    def property_name(self, key: PropertyKey) -> str:
        return f"{self.config.property_prefix}{key.id}"
