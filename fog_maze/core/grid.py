from array import array
from typing import Iterator, List, Tuple


class InvalidDimensions(ValueError):
    """Raised when a grid or maze is requested with a non-positive size."""


def _is_size(value) -> bool:
    # bool is an int subclass but never a size
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class Grid:
    # Bitmask Constants
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Flags
    VISITED = 0b00010000
    VISIBLE = 0b00100000 # Fog of war: rewritten on every agent move

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    # Visitation order matters: generation and exit placement are reproducible only in this order
    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

    # Direction Helpers
    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}
    NAMES = {NORTH: "north", EAST: "east", SOUTH: "south", WEST: "west"}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if not _is_size(width) or not _is_size(height):
            raise InvalidDimensions(f"Grid dimensions must be positive integers, got {width}x{height}")
        self.width = width
        self.height = height
        # Initialize with all walls present (value 15)
        # using 'B' (unsigned char) -> 1 byte per cell
        self.cells = array('B', [self.ALL_WALLS] * (width * height))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def carve_path(self, x1: int, y1: int, dir_bit: int):
        """
        Removes the wall between current cell (x,y) and the neighbor in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbor.
        """
        if dir_bit not in self.OPPOSITE:
            raise ValueError(f"Unknown direction bit: {dir_bit}")

        x2 = x1 + self.DX[dir_bit]
        y2 = y1 + self.DY[dir_bit]

        if not (self.in_bounds(x1, y1) and self.in_bounds(x2, y2)):
            return # Cannot carve into void

        # Remove wall from cell 1
        self.cells[y1 * self.width + x1] &= ~dir_bit
        # Remove opposite wall from cell 2
        self.cells[y2 * self.width + x2] &= ~self.OPPOSITE[dir_bit]

    def remove_wall(self, x1: int, y1: int, x2: int, y2: int):
        """
        Removes the shared wall between two axis-aligned neighbours.
        Both sides of the edge are cleared together.
        """
        if not (self.in_bounds(x1, y1) and self.in_bounds(x2, y2)):
            raise ValueError(f"Cannot remove wall between ({x1}, {y1}) and ({x2}, {y2}): out of bounds")

        dx, dy = x2 - x1, y2 - y1
        for dir_bit in self.DIRECTIONS:
            if self.DX[dir_bit] == dx and self.DY[dir_bit] == dy:
                self.carve_path(x1, y1, dir_bit)
                return
        raise ValueError(f"Cells ({x1}, {y1}) and ({x2}, {y2}) are not 4-neighbours")

    def has_wall(self, x: int, y: int, dir_bit: int) -> bool:
        # Unexplored space is always walled
        if not (0 <= x < self.width and 0 <= y < self.height):
            return True
        return (self.cells[y * self.width + x] & dir_bit) != 0

    def walls_of(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return self.ALL_WALLS
        return self.cells[y * self.width + x] & self.ALL_WALLS

    def set_visited(self, x: int, y: int, visited: bool = True):
        idx = self.get_index(x, y)
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return (self.cells[y * self.width + x] & self.VISITED) != 0

    def set_visible(self, x: int, y: int):
        # Silently ignore positions off the lattice
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y * self.width + x] |= self.VISIBLE

    def is_visible(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return (self.cells[y * self.width + x] & self.VISIBLE) != 0

    def clear_visibility(self):
        mask = ~self.VISIBLE & 0xFF
        cells = self.cells
        for i in range(len(cells)):
            cells[i] &= mask

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all valid grid neighbors,
        in North, East, South, West order.
        Does NOT check walls (that's for pathfinding).
        """
        # North
        if y > 0:
            yield (x, y - 1, self.NORTH)
        # East
        if x < self.width - 1:
            yield (x + 1, y, self.EAST)
        # South
        if y < self.height - 1:
            yield (x, y + 1, self.SOUTH)
        # West
        if x > 0:
            yield (x - 1, y, self.WEST)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction) for neighbors that are NOT blocked by a wall.
        """
        val = self.cells[self.get_index(x, y)]

        if not (val & self.NORTH) and y > 0:
            yield (x, y - 1, self.NORTH)
        if not (val & self.EAST) and x < self.width - 1:
            yield (x + 1, y, self.EAST)
        if not (val & self.SOUTH) and y < self.height - 1:
            yield (x, y + 1, self.SOUTH)
        if not (val & self.WEST) and x > 0:
            yield (x - 1, y, self.WEST)

    def count_open_passages(self) -> int:
        # Each passage is counted once, from its western or northern cell
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                if x < self.width - 1 and not (val & self.EAST):
                    count += 1
                if y < self.height - 1 and not (val & self.SOUTH):
                    count += 1
        return count

    def visible_cells(self) -> List[Tuple[int, int]]:
        return [
            (i % self.width, i // self.width)
            for i, val in enumerate(self.cells)
            if val & self.VISIBLE
        ]
