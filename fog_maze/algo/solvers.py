import logging
from array import array
from collections import deque
from typing import Iterator, List, Tuple
from fog_maze.core.grid import Grid

logger = logging.getLogger(__name__)

class BFS:
    """
    Breadth-first distance field over the carved passages.

    Open neighbours are expanded in North, East, South, West order and the
    farthest cell is only replaced on a strictly greater distance, so ties go
    to the first cell the traversal discovers.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.start: Tuple[int, int] = (0, 0)
        self.farthest: Tuple[int, int] = (0, 0)
        self.max_distance = 0
        self.visited_count = 0
        # Dense arrays: -1 = unreached, parent 0 = None, else direction back to parent
        self.distances = array('i', [-1] * (grid.width * grid.height))
        self.parents = array('B', [0] * (grid.width * grid.height))

    def run(self, start: Tuple[int, int]) -> Iterator[str]:
        grid = self.grid
        start_idx = grid.get_index(*start)

        self.start = start
        self.farthest = start
        self.max_distance = 0
        self.distances[start_idx] = 0
        self.visited_count = 1

        queue = deque([start])

        while queue:
            cx, cy = queue.popleft()
            dist = self.distances[cy * grid.width + cx]

            if dist > self.max_distance:
                self.max_distance = dist
                self.farthest = (cx, cy)

            for nx, ny, direction in grid.get_open_neighbors(cx, cy):
                idx = ny * grid.width + nx
                if self.distances[idx] == -1:
                    self.distances[idx] = dist + 1
                    # Store Parent Direction (Inverse)
                    self.parents[idx] = Grid.OPPOSITE[direction]
                    self.visited_count += 1
                    queue.append((nx, ny))

            if self.visited_count % 1000 == 0:
                yield f"Visited: {self.visited_count}"

        yield "Solved"

    def run_all(self, start: Tuple[int, int]) -> "BFS":
        for _ in self.run(start):
            pass
        return self

    def distance(self, x: int, y: int) -> int:
        if not self.grid.in_bounds(x, y):
            return -1
        return self.distances[y * self.grid.width + x]

    def path_to(self, end: Tuple[int, int]) -> List[Tuple[int, int]]:
        """Reconstructs start..end from the parent array. Empty if unreachable."""
        if self.distance(*end) == -1:
            return []

        path = []
        curr = end
        while curr != self.start:
            path.append(curr)
            p_dir = self.parents[self.grid.get_index(*curr)]
            if p_dir == 0: break

            curr = (curr[0] + Grid.DX[p_dir], curr[1] + Grid.DY[p_dir])

        path.append(self.start)
        path.reverse()
        return path


def locate_exit(grid: Grid, start: Tuple[int, int]) -> Tuple[Tuple[int, int], int]:
    """Returns the cell farthest from start along the passages, and its distance."""
    bfs = BFS(grid).run_all(start)
    logger.debug("Exit at %s, %d steps from %s", bfs.farthest, bfs.max_distance, start)
    return bfs.farthest, bfs.max_distance
