"""
Goal placement by breadth-first search.

The exit of a level is the passage farthest from the start. On a perfect
maze the BFS distance is the length of the only path, so this is also the
longest walk a player can be asked to make.
"""

from collections import deque

from .grid import Grid, Point

UNREACHED = -1

# Neighbour expansion order: down, up, right, left
NEIGHBOUR_STEPS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class MazeIntegrityError(Exception):
    """Raised when a maze breaks an invariant the engine relies on."""

    pass


def _require_passage(grid: Grid, start: Point) -> None:
    if not grid.is_passage(start):
        raise MazeIntegrityError(
            f"Search start ({start.x}, {start.y}) is not a passage cell"
        )


def bfs_distances(grid: Grid, start: Point) -> list[list[int]]:
    """
    Compute the shortest passage distance from start to every cell.

    Args:
        grid: Maze grid.
        start: Passage cell to measure from.

    Returns:
        Distance map indexed [y][x]; UNREACHED for walls and cut-off cells.

    Raises:
        MazeIntegrityError: If start is not a passage.
    """
    _require_passage(grid, start)

    distances = [[UNREACHED] * grid.width for _ in range(grid.height)]
    distances[start.y][start.x] = 0
    queue: deque[Point] = deque([start])

    while queue:
        current = queue.popleft()
        d = distances[current.y][current.x]
        for dx, dy in NEIGHBOUR_STEPS:
            nxt = current.moved(dx, dy)
            if grid.is_passage(nxt) and distances[nxt.y][nxt.x] == UNREACHED:
                distances[nxt.y][nxt.x] = d + 1
                queue.append(nxt)

    return distances


def find_furthest_point(grid: Grid, start: Point) -> Point:
    """
    Find the passage farthest from start.

    Ties at the maximum distance go to the first cell dequeued, which is
    fixed by NEIGHBOUR_STEPS.

    Args:
        grid: Maze grid.
        start: Passage cell to search from.

    Returns:
        A reachable cell at maximum distance; start itself when it is the
        only passage.

    Raises:
        MazeIntegrityError: If start is not a passage.
    """
    _require_passage(grid, start)

    seen = {start}
    queue: deque[tuple[Point, int]] = deque([(start, 0)])
    furthest = start
    max_dist = 0

    while queue:
        current, d = queue.popleft()

        if d > max_dist:
            max_dist = d
            furthest = current

        for dx, dy in NEIGHBOUR_STEPS:
            nxt = current.moved(dx, dy)
            if nxt not in seen and grid.is_passage(nxt):
                seen.add(nxt)
                queue.append((nxt, d + 1))

    return furthest
