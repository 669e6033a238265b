"""
In-memory model of a parsed heap log.

Nodes live in a single list indexed by their dense id. Edges store the target
*address*, which is resolved through the AddressRegistry when needed, so the
graph may contain cycles without nodes referencing each other directly.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from .errors import (
    DuplicateAddressError, UnresolvedAddressError, SourceLocation
)
from .kinds import Kind


class Color(Enum):
    """GC mark color recorded in the log."""
    BLACK = "black"
    GRAY = "gray"


@dataclass(frozen=True)
class PropertyKey:
    """Interned name of a non-indexed edge."""
    id: int


# An edge label is either an element index or an interned property key
EdgeLabel = Union[int, PropertyKey]


@dataclass(frozen=True)
class Edge:
    target: int             # Target address
    label: EdgeLabel

    @property
    def is_indexed(self) -> bool:
        return isinstance(self.label, int)


@dataclass
class Node:
    """One GC thing from the main section of the log."""
    id: int
    address: int
    color: Color
    kind: Kind
    details: str = ""
    edges: List[Edge] = field(default_factory=list)
    marked: bool = False

    @property
    def includable(self) -> bool:
        return self.kind.includable


@dataclass(frozen=True)
class Root:
    address: int
    color: Color
    name: str = ""


class AddressRegistry:
    """
    Bidirectional mapping between heap addresses and node ids.
    """

    def __init__(self):
        self._ids: Dict[int, int] = {}
        self._addresses: List[int] = []

    def register(self, address: int, location: Optional[SourceLocation] = None) -> int:
        """Assign the next node id to an address."""
        if address in self._ids:
            raise DuplicateAddressError(address, location)
        node_id = len(self._addresses)
        self._ids[address] = node_id
        self._addresses.append(address)
        return node_id

    def lookup(self, address: int, context: str = "reference",
               location: Optional[SourceLocation] = None) -> int:
        try:
            return self._ids[address]
        except KeyError:
            raise UnresolvedAddressError(address, context, location) from None

    def address_of(self, node_id: int) -> int:
        return self._addresses[node_id]

    def __contains__(self, address: int) -> bool:
        return address in self._ids

    def __len__(self) -> int:
        return len(self._addresses)


class EdgeNameInterner:
    """
    Assigns compact, stable labels to edge names.

    Names of the form objectElements[N] become the integer N. Every other
    name is given a PropertyKey numbered in first-seen order.
    """

    ELEMENTS_PATTERN = re.compile(r'^objectElements\[([0-9]+)\]$')

    def __init__(self):
        self._keys: Dict[str, PropertyKey] = {}

    def intern(self, name: str) -> EdgeLabel:
        match = self.ELEMENTS_PATTERN.match(name)
        if match:
            return int(match.group(1))

        key = self._keys.get(name)
        if key is None:
            key = PropertyKey(len(self._keys))
            self._keys[name] = key
        return key

    def names(self) -> Dict[str, PropertyKey]:
        """Interned names in first-seen order."""
        return dict(self._keys)

    def __len__(self) -> int:
        return len(self._keys)


@dataclass
class GraphStats:
    """Summary counts for a heap graph."""
    total_nodes: int = 0
    marked_nodes: int = 0
    black_roots: int = 0
    gray_roots: int = 0
    edges: int = 0
    property_names: int = 0
    nodes_by_kind: Dict[str, int] = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [
            f"nodes: {self.total_nodes} ({self.marked_nodes} marked)",
            f"roots: {self.black_roots} black, {self.gray_roots} gray",
            f"edges: {self.edges} ({self.property_names} distinct property names)",
        ]
        for kind, count in self.nodes_by_kind.items():
            lines.append(f"  {kind}: {count}")
        return "\n".join(lines)


class HeapGraph:
    """
    Nodes, roots and the lookup tables built while parsing a heap log.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.black_roots: List[Root] = []
        self.gray_roots: List[Root] = []
        self.registry = AddressRegistry()
        self.interner = EdgeNameInterner()

    def add_node(self, address: int, color: Color, kind: Kind, details: str = "",
                 location: Optional[SourceLocation] = None) -> Node:
        node_id = self.registry.register(address, location)
        node = Node(id=node_id, address=address, color=color, kind=kind, details=details)
        self.nodes.append(node)
        return node

    def add_edge(self, node: Node, name: str, target: int) -> Edge:
        edge = Edge(target=target, label=self.interner.intern(name))
        node.edges.append(edge)
        return edge

    def add_root(self, address: int, color: Color, name: str = "") -> Root:
        root = Root(address=address, color=color, name=name)
        if color is Color.BLACK:
            self.black_roots.append(root)
        else:
            self.gray_roots.append(root)
        return root

    def roots(self) -> Iterator[Root]:
        """All roots, black before gray."""
        yield from self.black_roots
        yield from self.gray_roots

    def resolve(self, address: int, context: str = "reference") -> Node:
        return self.nodes[self.registry.lookup(address, context)]

    def check_references(self):
        """Ensure every root and edge target names a declared node."""
        for root in self.roots():
            self.registry.lookup(root.address, "root")
        for node in self.nodes:
            for edge in node.edges:
                self.registry.lookup(edge.target, "edge")

    def stats(self) -> GraphStats:
        kinds = Counter(node.kind.value for node in self.nodes)
        return GraphStats(
            total_nodes=len(self.nodes),
            marked_nodes=sum(1 for node in self.nodes if node.marked),
            black_roots=len(self.black_roots),
            gray_roots=len(self.gray_roots),
            edges=sum(len(node.edges) for node in self.nodes),
            property_names=len(self.interner),
            nodes_by_kind={kind.value: kinds[kind.value] for kind in Kind if kinds[kind.value]},
        )

    def __len__(self) -> int:
        return len(self.nodes)
