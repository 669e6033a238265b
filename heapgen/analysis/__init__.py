"""
heapgen Analysis Package

Graph passes run between parsing and emission. Currently this is the
reachability marker that decides which nodes are worth reconstructing.
"""

from .marker import ReachabilityMarker, mark_referenced_nodes

__all__ = [
    "ReachabilityMarker",
    "mark_referenced_nodes",
]
