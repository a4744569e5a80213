import logging
import random
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from fog_maze.core.grid import Grid
from fog_maze.core.session import GameSession

logger = logging.getLogger(__name__)

class Agent(ABC):
    @abstractmethod
    def choose(self, session: GameSession) -> Optional[int]:
        """Returns the next direction bit, or None when there is nothing to do."""
        pass

class RandomWalker(Agent):
    """Picks uniformly among the legal moves at the current cell."""

    def __init__(self, seed: int = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def choose(self, session: GameSession) -> Optional[int]:
        moves = session.legal_moves()
        if not moves:
            return None
        return self.rng.choice(moves)

class ShortestPathAgent(Agent):
    """
    Follows the BFS path from wherever the agent stands to the exit. The path
    is searched once and only recomputed if the agent leaves it.
    """

    def __init__(self):
        self._maze = None
        self._next_step: Dict[Tuple[int, int], Tuple[int, int]] = {}

    def choose(self, session: GameSession) -> Optional[int]:
        x, y = session.position
        if session.maze is not self._maze or (x, y) not in self._next_step:
            path = session.maze.shortest_path((x, y), session.maze.exit)
            self._maze = session.maze
            self._next_step = dict(zip(path, path[1:]))

        if (x, y) not in self._next_step:
            return None

        nx, ny = self._next_step[(x, y)]
        for direction in session.legal_moves():
            if (x + Grid.DX[direction], y + Grid.DY[direction]) == (nx, ny):
                return direction
        return None


def play(session: GameSession, agent: Agent, max_steps: int) -> int:
    """Lets the agent move until the maze is solved or max_steps is reached."""
    moves = 0
    for attempt in range(max_steps):
        if session.solved:
            break
        direction = agent.choose(session)
        if direction is None:
            break
        if session.move(direction):
            moves += 1
        if attempt % 100 == 99:
            logger.debug("Agent at %s after %d moves", session.position, moves)
    return moves
