import logging
from typing import Iterator, List, Optional, Tuple
from fog_maze.core.grid import Grid
from fog_maze.algo.base import Generator

logger = logging.getLogger(__name__)

class HuntAndKill(Generator):
    """
    Alternates a random walk ("kill") that consumes unvisited neighbours with a
    row-major scan ("hunt") for an unvisited cell touching visited territory.
    The removed walls form a spanning tree over every cell.
    """

    walk_count = 0
    hunt_count = 0
    _hunt_row = 0

    def run(self) -> Iterator[str]:
        grid = self.grid
        rng = self.rng

        # Random start cell
        cx = rng.randrange(grid.width)
        cy = rng.randrange(grid.height)
        self.start = (cx, cy)
        grid.set_visited(cx, cy)
        self.step_count = 0
        self.walk_count = 0
        self.hunt_count = 0

        # Rows above this one are fully visited; cells never become unvisited again
        self._hunt_row = 0

        logger.debug("Hunt-and-Kill on %dx%d from %s", grid.width, grid.height, self.start)

        while True:
            # Walk phase
            self.walk_count += 1
            while True:
                neighbors = [
                    (nx, ny, dir_bit)
                    for nx, ny, dir_bit in grid.get_neighbors(cx, cy)
                    if not grid.is_visited(nx, ny)
                ]
                if not neighbors:
                    break

                nx, ny, dir_bit = rng.choice(neighbors)
                grid.carve_path(cx, cy, dir_bit)
                grid.set_visited(nx, ny)
                cx, cy = nx, ny
                self.step_count += 1

                if self.step_count % 100 == 0:
                    yield f"Walking... Carved: {self.step_count}"

            # Hunt phase
            found = self.hunt()
            if found is None:
                break
            cx, cy = found
            self.hunt_count += 1
            self.step_count += 1

            if self.hunt_count % 10 == 0:
                yield f"Hunting... Row: {cy}"

        logger.debug(
            "Generation finished: %d passages, %d walks, %d hunts",
            self.step_count, self.walk_count, self.hunt_count,
        )
        yield "Done"

    def hunt(self) -> Optional[Tuple[int, int]]:
        """
        Scans in raster order for the first unvisited cell with a visited
        neighbour, connects it to one of those neighbours at random and
        returns it. Returns None once every cell is visited.
        """
        grid = self.grid
        for y in range(self._hunt_row, grid.height):
            row_has_unvisited = False
            for x in range(grid.width):
                if grid.is_visited(x, y):
                    continue
                row_has_unvisited = True

                visited: List[Tuple[int, int, int]] = [
                    (nx, ny, dir_bit)
                    for nx, ny, dir_bit in grid.get_neighbors(x, y)
                    if grid.is_visited(nx, ny)
                ]
                if visited:
                    _, _, dir_bit = self.rng.choice(visited)
                    grid.carve_path(x, y, dir_bit)
                    grid.set_visited(x, y)
                    return (x, y)

            if not row_has_unvisited and y == self._hunt_row:
                self._hunt_row = y + 1

        return None
