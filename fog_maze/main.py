import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'fog_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fog_maze.core.grid import Grid, InvalidDimensions

DEFAULT_SIZE = 15

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fog Maze: Hunt-and-Kill mazes with fog of war")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze and report its layout")
    gen_parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")

    # Play Command
    play_parser = subparsers.add_parser("play", help="Walk an agent from start to exit")
    play_parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help="Maze Width")
    play_parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help="Maze Height")
    play_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    play_parser.add_argument("--moves", type=str, help="Comma separated moves (north, left, w/a/s/d, ...) or a run of keys like wwdsa")
    play_parser.add_argument("--agent", type=str, default="random", choices=["random", "bfs"], help="Agent used when --moves is not given")
    play_parser.add_argument("--max-steps", type=int, default=None, help="Move budget (default: 4 * cells)")

    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("fog_maze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    from fog_maze.core.maze import Maze
    try:
        maze = Maze(args.width, args.height, seed=args.seed)
    except InvalidDimensions as e:
        logger.error(str(e))
        return 2

    if args.command == "generate":
        logger.info(f"Start: {maze.start}  Exit: {maze.exit}  Distance: {maze.exit_distance}")
        logger.info(f"Open passages: {maze.count_open_passages()}  Dead ends: {maze.count_dead_ends()}")
        print(f"{maze.width}x{maze.height} start={maze.start} exit={maze.exit} distance={maze.exit_distance}")

    elif args.command == "play":
        from fog_maze.core.session import GameSession, parse_moves
        from fog_maze.algo.agents import RandomWalker, ShortestPathAgent, play

        session = GameSession(maze)

        if args.moves:
            try:
                directions = parse_moves(args.moves)
            except ValueError as e:
                logger.error(str(e))
                return 2

            for direction in directions:
                if not session.move(direction):
                    logger.warning(f"Move {Grid.NAMES[direction]} rejected at {session.position}")
        else:
            max_steps = args.max_steps if args.max_steps is not None else maze.width * maze.height * 4
            agent = ShortestPathAgent() if args.agent == "bfs" else RandomWalker(seed=args.seed)
            logger.info(f"Playing with {args.agent} agent (budget {max_steps})...")
            play(session, agent, max_steps)

        logger.info(f"Visible cells: {len(maze.visible_cells())}")
        status = "solved" if session.solved else "unsolved"
        print(f"{status} in {session.step_count} steps (optimal {maze.exit_distance}) at {session.position}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
