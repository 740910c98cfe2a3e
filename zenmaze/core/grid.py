"""
Grid primitives shared by the generator, the goal search and the session.

Text Format:
    X = Wall (impassable)
    . = Passage
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence


class Cell(Enum):
    """Types of cells in the maze."""
    PASSAGE = "."
    WALL = "X"

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        """Convert character to Cell. Unknown characters are walls."""
        if char in (".", " "):
            return cls.PASSAGE
        return cls.WALL


@dataclass(frozen=True)
class Point:
    """Integer (x, y) coordinate on a grid."""
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "Point":
        """Return the point offset by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


class Grid:
    """
    Immutable rectangular array of cells.

    Rows are indexed by y, columns by x. Anything outside the grid reads
    as a wall.
    """

    __slots__ = ("_rows", "width", "height")

    def __init__(self, rows: Sequence[Sequence[Cell]]):
        self._rows: tuple[tuple[Cell, ...], ...] = tuple(tuple(row) for row in rows)
        self.height: int = len(self._rows)
        self.width: int = len(self._rows[0]) if self._rows else 0

        if any(len(row) != self.width for row in self._rows):
            raise ValueError("Grid rows must all have the same length")

    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """Build a grid from its text form (one row per line)."""
        lines = text.strip().split("\n")
        return cls([[Cell.from_char(char) for char in line] for line in lines])

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def cell(self, point: Point) -> Cell:
        """Get cell at point. Out of bounds = wall."""
        if not self.in_bounds(point):
            return Cell.WALL
        return self._rows[point.y][point.x]

    def is_passage(self, point: Point) -> bool:
        return self.cell(point) is Cell.PASSAGE

    def passages(self) -> Iterator[Point]:
        """Iterate over every passage cell in row-major order."""
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                if cell is Cell.PASSAGE:
                    yield Point(x, y)

    def to_rows(self) -> list[str]:
        """Get the grid as a list of text rows."""
        return ["".join(cell.value for cell in row) for row in self._rows]

    def to_text(self) -> str:
        return "\n".join(self.to_rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
