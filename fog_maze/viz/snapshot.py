from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from fog_maze.core.grid import Grid
from fog_maze.core.maze import Maze

# Cell style codes, in the order a renderer would pick a fill
STYLE_FOG = 0
STYLE_FLOOR = 1
STYLE_START = 2
STYLE_EXIT = 3
STYLE_AGENT = 4

@dataclass
class FrameSnapshot:
    """
    Per-frame arrays for a renderer, shaped (height, width) so that
    arr[y, x] addresses cell (x, y). No pixels are produced here.
    """
    walls: np.ndarray
    visible: np.ndarray
    styles: np.ndarray

    @classmethod
    def from_maze(cls, maze: Maze, agent: Optional[Tuple[int, int]] = None) -> "FrameSnapshot":
        # Convert bytearray to numpy (h, w)
        arr = np.frombuffer(maze.to_bytes(), dtype=np.uint8).reshape(maze.height, maze.width)

        walls = arr & Grid.ALL_WALLS
        visible = (arr & Grid.VISIBLE) != 0

        styles = np.full(arr.shape, STYLE_FLOOR, dtype=np.uint8)
        sx, sy = maze.start
        ex, ey = maze.exit
        styles[sy, sx] = STYLE_START
        # Exit wins over start on a 1x1 maze
        styles[ey, ex] = STYLE_EXIT
        if agent is not None and maze.is_in_bounds(*agent):
            styles[agent[1], agent[0]] = STYLE_AGENT
        styles[~visible] = STYLE_FOG

        return cls(walls=walls, visible=visible, styles=styles)

    @property
    def visible_count(self) -> int:
        return int(np.count_nonzero(self.visible))
