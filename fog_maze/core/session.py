import logging
from typing import List, Tuple

from fog_maze.core.grid import Grid
from fog_maze.core.maze import Maze

logger = logging.getLogger(__name__)

# Direction names and movement keys accepted from input sources
DIRECTION_ALIASES = {
    "north": Grid.NORTH, "w": Grid.NORTH, "up": Grid.NORTH,
    "east": Grid.EAST, "d": Grid.EAST, "right": Grid.EAST,
    "south": Grid.SOUTH, "s": Grid.SOUTH, "down": Grid.SOUTH,
    "west": Grid.WEST, "a": Grid.WEST, "left": Grid.WEST,
}
MOVEMENT_KEYS = set("wasd")


def parse_direction(token: str) -> int:
    key = token.strip().lower()
    if key.startswith("arrow"):
        key = key[len("arrow"):]
    try:
        return DIRECTION_ALIASES[key]
    except KeyError:
        raise ValueError(f"Unknown direction: {token!r}") from None


def parse_moves(text: str) -> List[int]:
    """
    Parses comma separated moves. A run of movement keys such as "wwdsa"
    expands to one move per key.
    """
    directions = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        if len(token) > 1 and set(token.lower()) <= MOVEMENT_KEYS:
            directions.extend(DIRECTION_ALIASES[key] for key in token.lower())
        else:
            directions.append(parse_direction(token))
    return directions


class GameSession:
    """Moves one agent through a maze, validating steps against the walls."""

    def __init__(self, maze: Maze):
        self.maze = maze
        self.position: Tuple[int, int] = maze.start
        self.step_count = 0
        self.history: List[Tuple[int, int]] = [maze.start]
        self.solved = maze.start == maze.exit
        maze.update_visibility(*self.position)

    def legal_moves(self) -> List[int]:
        return self.maze.open_directions(*self.position)

    def move(self, direction: int) -> bool:
        if self.solved:
            return False

        x, y = self.position
        if self.maze.has_wall(x, y, direction):
            logger.debug("Blocked: %s from %s", Grid.NAMES.get(direction, direction), self.position)
            return False

        self.position = (x + Grid.DX[direction], y + Grid.DY[direction])
        self.step_count += 1
        self.history.append(self.position)
        self.maze.update_visibility(*self.position)

        if self.position == self.maze.exit:
            self.solved = True
            logger.info("Maze solved in %d steps", self.step_count)
        return True

    def manhattan_to_exit(self) -> int:
        ex, ey = self.maze.exit
        return abs(self.position[0] - ex) + abs(self.position[1] - ey)
