import argparse
import sys
import traceback

import pygame

from constants import ALGORITHMS, DIFFICULTY_SIZES, VISUALIZATION_MODES, DEFAULT_DIFFICULTY, DEFAULT_VISUALIZATION_MODE
from session import MazeSession


def build_session(args):
    session = MazeSession()
    session.set_difficulty(args.difficulty)
    session.set_visualization_mode(args.mode)
    if args.preset is not None:
        session.load_preset_maze(args.preset)
    elif args.difficulty != DEFAULT_DIFFICULTY:
        session.generate_maze()
    if args.algorithm:
        session.set_algorithm(args.algorithm)
    return session


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Watch classical search algorithms explore a maze.")
    parser.add_argument("--difficulty", choices=list(DIFFICULTY_SIZES), default=DEFAULT_DIFFICULTY)
    parser.add_argument("--mode", choices=list(VISUALIZATION_MODES), default=DEFAULT_VISUALIZATION_MODE,
                        help="instant: show the result at once; step: replay exploration cell by cell")
    parser.add_argument("--preset", type=int, default=None, help="Load a hand-authored maze (index wraps)")
    parser.add_argument("--algorithm", choices=list(ALGORITHMS), default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    from game import Game
    maze_game = Game(build_session(args))
    try:
        maze_game.run()
    except Exception as e:
        print(f"\nAn error occurred during game execution: {type(e).__name__}: {e}", file=sys.stderr)
        traceback.print_exc()
        if pygame.get_init():
            pygame.quit()
        sys.exit(1)


if __name__ == '__main__':
    main()
