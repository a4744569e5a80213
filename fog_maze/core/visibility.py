from typing import Tuple
from fog_maze.core.grid import Grid

class VisibilityCalculator:
    """
    Fog of war. Each update starts from a dark grid: only the agent's cell,
    the neighbours it has an open passage to, and the exit with its four
    neighbours end up visible. Only the VISIBLE bit is ever written.
    """

    @staticmethod
    def update(grid: Grid, exit: Tuple[int, int], agent_x: int, agent_y: int):
        grid.clear_visibility()

        grid.set_visible(agent_x, agent_y)
        for dir_bit in Grid.DIRECTIONS:
            if not grid.has_wall(agent_x, agent_y, dir_bit):
                grid.set_visible(agent_x + Grid.DX[dir_bit], agent_y + Grid.DY[dir_bit])

        # The goal stays locatable regardless of line of sight
        ex, ey = exit
        grid.set_visible(ex, ey)
        for dir_bit in Grid.DIRECTIONS:
            grid.set_visible(ex + Grid.DX[dir_bit], ey + Grid.DY[dir_bit])
