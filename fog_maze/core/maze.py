import logging
import random
from typing import List, Optional, Tuple

from fog_maze.core.grid import Grid, InvalidDimensions, _is_size
from fog_maze.core.visibility import VisibilityCalculator
from fog_maze.algo.hunt_and_kill import HuntAndKill
from fog_maze.algo.solvers import BFS

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

class Maze:
    """
    A generated perfect maze with a start, an exit and a fog-of-war mask.

    The grid is owned privately. Callers get read accessors plus a single
    mutating entry point, update_visibility(), which only touches the
    VISIBLE bit. Walls and visited flags are frozen after construction.
    """

    def __init__(self, width: int, height: int, seed: int = None, rng: Optional[random.Random] = None):
        if not _is_size(width) or not _is_size(height):
            raise InvalidDimensions(f"Maze dimensions must be positive integers, got {width}x{height}")

        self._grid = Grid(width, height)

        generator = HuntAndKill(self._grid, seed=seed, rng=rng)
        generator.run_all()
        self._start: Position = generator.start

        self._bfs = BFS(self._grid).run_all(self._start)
        self._exit: Position = self._bfs.farthest
        self._exit_distance = self._bfs.max_distance

        logger.info(
            "Generated %dx%d maze: start=%s exit=%s distance=%d",
            width, height, self._start, self._exit, self._exit_distance,
        )

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def start(self) -> Position:
        return self._start

    @property
    def exit(self) -> Position:
        return self._exit

    @property
    def exit_distance(self) -> int:
        return self._exit_distance

    def is_in_bounds(self, x: int, y: int) -> bool:
        return self._grid.in_bounds(x, y)

    def has_wall(self, x: int, y: int, direction: int) -> bool:
        return self._grid.has_wall(x, y, direction)

    def walls_of(self, x: int, y: int) -> int:
        return self._grid.walls_of(x, y)

    def is_visible(self, x: int, y: int) -> bool:
        return self._grid.is_visible(x, y)

    def is_visited(self, x: int, y: int) -> bool:
        return self._grid.is_visited(x, y)

    def open_directions(self, x: int, y: int) -> List[int]:
        return [d for d in Grid.DIRECTIONS if not self._grid.has_wall(x, y, d)]

    def count_open_passages(self) -> int:
        return self._grid.count_open_passages()

    def count_dead_ends(self) -> int:
        # A dead end keeps three of its four walls
        dead_ends = 0
        for y in range(self.height):
            for x in range(self.width):
                if bin(self._grid.walls_of(x, y)).count("1") == 3:
                    dead_ends += 1
        return dead_ends

    def visible_cells(self) -> List[Position]:
        return self._grid.visible_cells()

    def distance_from_start(self, x: int, y: int) -> int:
        return self._bfs.distance(x, y)

    def solution_path(self) -> List[Position]:
        return self._bfs.path_to(self._exit)

    def shortest_path(self, origin: Position, target: Position) -> List[Position]:
        if not (self.is_in_bounds(*origin) and self.is_in_bounds(*target)):
            return []
        return BFS(self._grid).run_all(origin).path_to(target)

    def update_visibility(self, agent_x: int, agent_y: int):
        VisibilityCalculator.update(self._grid, self._exit, agent_x, agent_y)

    def to_bytes(self) -> bytes:
        return self._grid.cells.tobytes()
