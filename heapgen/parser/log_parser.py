"""
Heap log parser.

Reads the textual GC heap log produced by the engine's heap dumper:

    # Roots.
    0x1234 B some root name
    # Weak maps.
    ...
    ==========
    0x1234 B Function <details>
    > 0x5678 B shape

and builds a HeapGraph. Parsing is all or nothing: the first malformed line
raises and no graph is returned.
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Tuple

from ..model.errors import SourceLocation
from ..model.graph import Color, HeapGraph, Node
from ..model.kinds import classify
from .errors import (
    create_bad_address_error, create_bad_color_error, create_missing_field_error,
    create_unexpected_edge_error, create_bad_section_error
)

_log = logging.getLogger('heapgen')


class Section(Enum):
    ROOTS = "roots"
    WEAK_MAPS = "weakmaps"
    MAIN = "main"


SECTION_HEADERS = {
    "# Roots.": Section.ROOTS,
    "# Weak maps.": Section.WEAK_MAPS,
    "==========": Section.MAIN,
}

COLOR_TAGS = {
    "B": Color.BLACK,
    "G": Color.GRAY,
}

EDGE_MARKER = ">"
TRAILER_START = "{"


class GCLogParser:
    """
    Line oriented parser for GC heap logs.
    """

    ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]+$')

    def __init__(self, text: str, filename: str = "<input>"):
        """
        Initialize the parser with the full log text.

        Args:
            text: Contents of the heap log
            filename: Name of the log, for error reporting
        """
        self.text = text
        self.filename = filename
        self.graph = HeapGraph()
        self.section: Optional[Section] = None
        self.current_node: Optional[Node] = None
        self.weak_map_lines = 0

        # Position of the line being parsed
        self._line_number = 0
        self._line_text = ""

    def parse(self) -> HeapGraph:
        """
        Parse the whole log.

        Returns:
            The populated HeapGraph

        Raises:
            HeapGenError: on the first malformed, unclassifiable or
                unresolvable record
        """
        for line_number, line in self._lines():
            self._line_number = line_number
            self._line_text = line

            header = SECTION_HEADERS.get(line)
            if header is not None:
                _log.debug("%s: entering %s section", self._location(), header.value)
                self.section = header
                continue

            if line.startswith("#"):
                continue

            if line == TRAILER_START:
                # Extra JSON data after the end of the log
                _log.debug("%s: stopping at trailing metadata", self._location())
                break

            self._parse_record(line.split(" "))

        # Edges may point forwards, so targets can only be checked at the end
        self.graph.check_references()

        if self.weak_map_lines:
            _log.debug("ignored %d weak map lines", self.weak_map_lines)
        _log.info("parsed %d nodes, %d black roots, %d gray roots",
                  len(self.graph), len(self.graph.black_roots), len(self.graph.gray_roots))
        return self.graph

    def _lines(self):
        for line_number, line in enumerate(self.text.split("\n"), start=1):
            if line:
                yield line_number, line

    def _parse_record(self, words: List[str]):
        if self.section is Section.ROOTS:
            self._parse_root(words)
        elif self.section is Section.WEAK_MAPS:
            # TODO: model weak map entries once the emitter can express them
            self.weak_map_lines += 1
        elif self.section is Section.MAIN:
            if words[0] == EDGE_MARKER:
                self._parse_edge(words)
            else:
                self._parse_node(words)
        else:
            raise create_bad_section_error(self._location(), self._line_text)

    def _parse_root(self, words: List[str]):
        address, color = self._parse_address_and_color(words)
        self.graph.add_root(address, color, " ".join(words[2:]))

    def _parse_node(self, words: List[str]):
        address, color = self._parse_address_and_color(words)
        if len(words) < 3:
            raise create_missing_field_error("type tag", self._location(), self._line_text)
        details = " ".join(words[3:])
        kind = classify(words[2], details, self._location())
        self.current_node = self.graph.add_node(address, color, kind, details, self._location())

    def _parse_edge(self, words: List[str]):
        if self.current_node is None:
            raise create_unexpected_edge_error(self._location(), self._line_text)
        if len(words) < 2:
            raise create_missing_field_error("edge target", self._location(), self._line_text)
        address = self._parse_address(words[1])
        self.graph.add_edge(self.current_node, " ".join(words[3:]), address)

    def _parse_address_and_color(self, words: List[str]) -> Tuple[int, Color]:
        address = self._parse_address(words[0])
        if len(words) < 2:
            raise create_missing_field_error("color", self._location(), self._line_text)
        return address, self._parse_color(words[1])

    def _parse_address(self, text: str) -> int:
        if not self.ADDRESS_PATTERN.match(text):
            raise create_bad_address_error(text, self._location(), self._line_text)
        return int(text[2:], 16)

    def _parse_color(self, text: str) -> Color:
        color = COLOR_TAGS.get(text)
        if color is None:
            raise create_bad_color_error(text, self._location(), self._line_text)
        return color

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line_number)


def parse_gc_log(text: str, filename: str = "<input>") -> HeapGraph:
    """Parse heap log text into a HeapGraph."""
    return GCLogParser(text, filename).parse()
