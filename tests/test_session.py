import unittest
import sys
import os
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fog_maze.core.grid import Grid
from fog_maze.core.maze import Maze
from fog_maze.core.session import GameSession, parse_direction, parse_moves
from fog_maze.algo.agents import RandomWalker, ShortestPathAgent, play

class TestSession(unittest.TestCase):
    def test_initial_state(self):
        maze = Maze(8, 8, seed=1)
        session = GameSession(maze)
        self.assertEqual(session.position, maze.start)
        self.assertEqual(session.step_count, 0)
        self.assertFalse(session.solved)
        self.assertTrue(maze.is_visible(*maze.start))
        self.assertTrue(maze.is_visible(*maze.exit))

    def test_single_cell_starts_solved(self):
        session = GameSession(Maze(1, 1))
        self.assertTrue(session.solved)
        self.assertEqual(session.legal_moves(), [])
        self.assertFalse(session.move(Grid.EAST))

    def test_two_by_one(self):
        maze = Maze(2, 1, seed=4)
        session = GameSession(maze)

        moves = session.legal_moves()
        self.assertEqual(len(moves), 1)

        # The outer boundary is always walled
        self.assertFalse(session.move(Grid.NORTH))
        self.assertFalse(session.move(Grid.SOUTH))
        self.assertEqual(session.step_count, 0)
        self.assertEqual(session.position, maze.start)

        self.assertTrue(session.move(moves[0]))
        self.assertEqual(session.position, maze.exit)
        self.assertEqual(session.step_count, 1)
        self.assertTrue(session.solved)

        # Terminal state ignores further input
        self.assertFalse(session.move(Grid.OPPOSITE[moves[0]]))
        self.assertEqual(session.step_count, 1)

    def test_visibility_follows_agent(self):
        maze = Maze(9, 9, seed=12)
        session = GameSession(maze)
        direction = session.legal_moves()[0]
        self.assertTrue(session.move(direction))
        self.assertTrue(maze.is_visible(*session.position))
        self.assertEqual(session.history, [maze.start, session.position])

    def test_manhattan_to_exit(self):
        maze = Maze(10, 6, seed=9)
        session = GameSession(maze)
        (sx, sy), (ex, ey) = maze.start, maze.exit
        self.assertEqual(session.manhattan_to_exit(), abs(sx - ex) + abs(sy - ey))

    def test_parse_direction(self):
        self.assertEqual(parse_direction("North"), Grid.NORTH)
        self.assertEqual(parse_direction("w"), Grid.NORTH)
        self.assertEqual(parse_direction("d"), Grid.EAST)
        self.assertEqual(parse_direction(" s "), Grid.SOUTH)
        self.assertEqual(parse_direction("ArrowLeft"), Grid.WEST)
        with self.assertRaises(ValueError):
            parse_direction("x")

    def test_compass_letters_are_not_aliases(self):
        # "w" is a movement key, so "n,e,s,w" must not quietly mean north at the end
        for token in ("n", "e"):
            with self.assertRaises(ValueError):
                parse_direction(token)
        with self.assertRaises(ValueError):
            parse_moves("n,e,s,w")
        self.assertEqual(parse_moves("north,east,south,west"), [Grid.NORTH, Grid.EAST, Grid.SOUTH, Grid.WEST])

    def test_parse_moves(self):
        self.assertEqual(parse_moves("wdsa"), [Grid.NORTH, Grid.EAST, Grid.SOUTH, Grid.WEST])
        self.assertEqual(parse_moves("WW, left,ArrowDown"), [Grid.NORTH, Grid.NORTH, Grid.WEST, Grid.SOUTH])
        self.assertEqual(parse_moves(" , "), [])
        with self.assertRaises(ValueError):
            parse_moves("NESW")

class TestAgents(unittest.TestCase):
    def test_shortest_path_agent(self):
        maze = Maze(12, 12, seed=77)
        session = GameSession(maze)
        moves = play(session, ShortestPathAgent(), max_steps=1000)

        self.assertTrue(session.solved)
        self.assertEqual(moves, maze.exit_distance)
        self.assertEqual(session.history, maze.solution_path())

    def test_shortest_path_agent_searches_once(self):
        maze = Maze(20, 20, seed=8)
        session = GameSession(maze)
        with mock.patch.object(maze, "shortest_path", wraps=maze.shortest_path) as search:
            moves = play(session, ShortestPathAgent(), max_steps=10000)

        self.assertTrue(session.solved)
        self.assertEqual(moves, maze.exit_distance)
        self.assertEqual(search.call_count, 1)

    def test_shortest_path_agent_new_maze(self):
        agent = ShortestPathAgent()
        for seed in (1, 2):
            maze = Maze(7, 7, seed=seed)
            session = GameSession(maze)
            self.assertEqual(play(session, agent, max_steps=1000), maze.exit_distance)
            self.assertTrue(session.solved)

    def test_random_walker_moves_are_legal(self):
        maze = Maze(6, 6, seed=3)
        session = GameSession(maze)
        moves = play(session, RandomWalker(seed=3), max_steps=50)

        self.assertEqual(moves, session.step_count)
        for (x1, y1), (x2, y2) in zip(session.history, session.history[1:]):
            self.assertEqual(abs(x1 - x2) + abs(y1 - y2), 1)
            self.assertTrue(maze.distance_from_start(x2, y2) >= 0)

    def test_random_walker_solves_small_maze(self):
        maze = Maze(5, 5, seed=10)
        session = GameSession(maze)
        play(session, RandomWalker(seed=10), max_steps=100000)
        self.assertTrue(session.solved)
        self.assertEqual(session.position, maze.exit)

    def test_budget(self):
        maze = Maze(5, 5, seed=2)
        session = GameSession(maze)
        self.assertEqual(play(session, RandomWalker(seed=2), max_steps=0), 0)
        self.assertEqual(session.position, maze.start)

if __name__ == '__main__':
    unittest.main()
