"""Tree-sitter points are (row, UTF-8 byte column); LSP wants UTF-16 units."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Span:
    start: Position
    end: Position


class LineIndex:
    def __init__(self, source: bytes) -> None:
        self.source = source
        starts = [0]
        offset = source.find(b"\n")
        while offset != -1:
            starts.append(offset + 1)
            offset = source.find(b"\n", offset + 1)
        self._starts = starts

    def position(self, point: tuple[int, int]) -> Position:
        row, column = point
        if row >= len(self._starts):
            row = len(self._starts) - 1
            column = len(self.source) - self._starts[row]
        start = self._starts[row]
        prefix = self.source[start : start + column].decode("utf-8", errors="replace")
        return Position(line=row, character=len(prefix.encode("utf-16-le")) // 2)

    def span(self, start: tuple[int, int], end: tuple[int, int]) -> Span:
        return Span(self.position(start), self.position(end))
