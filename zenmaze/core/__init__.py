# Core module
from .grid import Cell, Grid, Point
from .maze_generator import generate_maze, round_up_odd
from .goal_placer import (
    UNREACHED,
    MazeIntegrityError,
    bfs_distances,
    find_furthest_point,
)
from .levels import (
    Difficulty,
    Level,
    LevelCatalog,
    LevelInfo,
    level_difficulty,
    level_size,
)
from .game_session import Direction, GameSession, GameState, MoveResult

__all__ = [
    "Cell",
    "Grid",
    "Point",
    "generate_maze",
    "round_up_odd",
    "UNREACHED",
    "MazeIntegrityError",
    "bfs_distances",
    "find_furthest_point",
    "Difficulty",
    "Level",
    "LevelCatalog",
    "LevelInfo",
    "level_difficulty",
    "level_size",
    "Direction",
    "GameSession",
    "GameState",
    "MoveResult",
]
