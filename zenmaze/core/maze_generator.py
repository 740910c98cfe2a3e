"""
Zen Maze Generator

Builds perfect mazes (exactly one path between any two passages) with a
randomized depth-first carve over the odd-coordinate lattice of an
odd-by-odd grid.

The carve walks an explicit stack of frames instead of recursing, so a
41x41 level (about 400 open cells deep in the worst case) never touches
the interpreter's recursion limit.
"""

import random
from typing import Optional, Union

from .grid import Cell, Grid, Point

# Candidate neighbours two cells away: down, up, right, left
CARVE_STEPS: tuple[tuple[int, int], ...] = ((0, 2), (0, -2), (2, 0), (-2, 0))

CARVE_ORIGIN = Point(1, 1)

Seed = Union[int, str, bytes]


def round_up_odd(value: int) -> int:
    """Return value if odd, otherwise value + 1."""
    return value if value % 2 == 1 else value + 1


def generate_maze(
    width: int,
    height: int,
    seed: Optional[Seed] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Generate a perfect maze.

    Args:
        width: Requested width in cells. Even values are rounded up.
        height: Requested height in cells. Even values are rounded up.
        seed: Seed for a private random source. Ignored when rng is given.
        rng: Random source used to shuffle the carving order.

    Returns:
        Grid with a solid wall border whose passages form a spanning tree
        over the odd-coordinate cells.

    Raises:
        ValueError: If width or height is not a positive integer.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")

    if rng is None:
        rng = random.Random(seed)

    w = round_up_odd(width)
    h = round_up_odd(height)
    cells = [[Cell.WALL] * w for _ in range(h)]

    # A side of 1 has no interior to carve
    if w < 3 or h < 3:
        return Grid(cells)

    def shuffled_steps() -> list[tuple[int, int]]:
        steps = list(CARVE_STEPS)
        rng.shuffle(steps)
        return steps

    cells[CARVE_ORIGIN.y][CARVE_ORIGIN.x] = Cell.PASSAGE
    stack: list[tuple[Point, list[tuple[int, int]]]] = [(CARVE_ORIGIN, shuffled_steps())]

    while stack:
        current, remaining = stack[-1]
        if not remaining:
            stack.pop()
            continue

        dx, dy = remaining.pop()
        nx, ny = current.x + dx, current.y + dy

        if 0 < nx < w - 1 and 0 < ny < h - 1 and cells[ny][nx] is Cell.WALL:
            cells[current.y + dy // 2][current.x + dx // 2] = Cell.PASSAGE
            cells[ny][nx] = Cell.PASSAGE
            stack.append((Point(nx, ny), shuffled_steps()))

    return Grid(cells)
