"""
Zen Maze Game Session

Navigation state for one play-through of a level:
- Move legality (walls and grid edges block)
- Undo history
- Move counting
- Exit detection

Player-facing failures (bumping a wall, undoing with nothing to undo,
moving after the win) are ordinary outcomes, never exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from .grid import Point
from .levels import Level


class Direction(Enum):
    """Movement directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }
        return deltas[self]

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction":
        """
        Get the direction for a unit step.

        Raises:
            ValueError: If (dx, dy) is not one of the four unit steps.
        """
        for direction in cls:
            if direction.delta == (dx, dy):
                return direction
        raise ValueError(f"Not a unit step: ({dx}, {dy})")


class GameState(Enum):
    """Session states."""
    PLAYING = "playing"
    WON = "won"


@dataclass
class MoveResult:
    """Result of a move action."""
    status: Literal["moved", "blocked", "won", "ignored"]
    position: Point
    moves: int

    @property
    def collided(self) -> bool:
        return self.status == "blocked"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "position": self.position.to_dict(),
            "moves": self.moves,
        }


class GameSession:
    """
    Navigation state machine over a single level.

    Not thread safe: one controller owns a session and feeds it moves in
    order.

    Example usage:
        session = GameSession(catalog.level_at(1))
        result = session.move(Direction.DOWN)
        if result.collided:
            ...
        session.undo()
    """

    def __init__(self, level: Level):
        self._level = level
        self._position = level.start
        self._history: list[Point] = []
        self._move_count = 0
        self._state = GameState.PLAYING

    @property
    def level(self) -> Level:
        return self._level

    @property
    def position(self) -> Point:
        return self._position

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def history(self) -> tuple[Point, ...]:
        """Previous positions, most recent last."""
        return tuple(self._history)

    @property
    def history_length(self) -> int:
        return len(self._history)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def won(self) -> bool:
        return self._state is GameState.WON

    def move(self, direction: Direction) -> MoveResult:
        """
        Try to step one cell in a direction.

        Args:
            direction: Direction to move.

        Returns:
            MoveResult. "blocked" means the target is a wall or off the
            grid; "won" is returned only for the move that reaches the exit.
        """
        if self.won:
            return MoveResult(status="ignored", position=self._position, moves=self._move_count)

        dx, dy = direction.delta
        target = self._position.moved(dx, dy)

        # Wall collision - can't move
        if not self._level.grid.is_passage(target):
            return MoveResult(status="blocked", position=self._position, moves=self._move_count)

        self._history.append(self._position)
        self._move_count += 1
        self._position = target

        if target == self._level.exit:
            self._state = GameState.WON
            return MoveResult(status="won", position=target, moves=self._move_count)

        return MoveResult(status="moved", position=target, moves=self._move_count)

    def step(self, dx: int, dy: int) -> MoveResult:
        """Move by a raw unit delta, e.g. (0, -1) for up."""
        return self.move(Direction.from_delta(dx, dy))

    def undo(self) -> bool:
        """
        Return to the previous position.

        Returns:
            True if a move was undone, False when there is nothing to undo
            or the level is already won.
        """
        if self.won or not self._history:
            return False

        self._position = self._history.pop()
        self._move_count = max(0, self._move_count - 1)
        return True

    def reset(self, level: Optional[Level] = None) -> None:
        """Restart at the start of level (or of the current level)."""
        if level is not None:
            self._level = level
        self._position = self._level.start
        self._history.clear()
        self._move_count = 0
        self._state = GameState.PLAYING

    def visualize(self) -> str:
        """
        Generate ASCII visualization of the level.

        Returns:
            Text grid with S (start), E (exit) and @ (player).
        """
        rows = [list(row) for row in self._level.grid.to_rows()]
        for marker, point in (
            ("S", self._level.start),
            ("E", self._level.exit),
            ("@", self._position),
        ):
            rows[point.y][point.x] = marker
        return "\n".join("".join(row) for row in rows)


if __name__ == "__main__":
    # Quick demo
    from .levels import LevelCatalog

    level = LevelCatalog().level_at(1)
    session = GameSession(level)
    print(f"Level {level.id} ({level.size}x{level.size}, {level.difficulty.value})")
    print(session.visualize())

    for direction in (Direction.DOWN, Direction.RIGHT, Direction.UP):
        result = session.move(direction)
        print(f"Move {direction.value}: {result.to_dict()}")

    print(f"Undo: {session.undo()} -> {session.position.to_dict()}")
    print(session.visualize())
