"""
cli.py - Command-line interface for c4engine

This module lets a person play Connect Four against the heuristic opponent
in a terminal, inspect how the opponent scores a position, and benchmark the
engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

from c4engine.ai.heuristic import HeuristicPlayer
from c4engine.debug import debug, DebugLevel
from c4engine.errors import EngineError
from c4engine.game.engine import Engine
from c4engine.game.rules import ConnectFourGame, play_turn
from c4engine.utils import AI_THINK_DELAY, Side, parse_moves

# Special commands returned by get_human_move
QUIT = -1
UNDO = -2
RESTART = -3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='c4engine', description='Connect Four against a heuristic opponent')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default=None,
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level')
    parser.add_argument('--log-file', default=None, help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--side', choices=['first', 'second'], default='first',
                             help='Side the human plays (first moves first)')
    play_parser.add_argument('--delay', type=float, default=AI_THINK_DELAY,
                             help='Seconds the AI pauses before moving')

    analyze_parser = subparsers.add_parser('analyze', help='Score every column of a position')
    analyze_parser.add_argument('--moves', type=str, default='',
                                help='Comma-separated columns played so far, e.g. 3,4,3')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the engine')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of iterations for benchmarking')
    benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')

    return parser


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None
        self.game: Optional[ConnectFourGame] = None

    def parse_args(self) -> None:
        self.args = build_parser().parse_args(self.argv)

        debug.configure_from_env()
        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the selected command and return the exit code."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the heuristic opponent."""
        human_side = Side.FIRST if self.args.side == 'first' else Side.SECOND
        self.game = ConnectFourGame(human_side=human_side)

        print("Starting a new Connect Four game!")
        print(f"You are {human_side.label} ({human_side.symbol}).")
        print("Enter a column number to move. Other commands: 'q' quit, 'u' undo, 'r' restart.")
        print(self.game.render())

        while True:
            if self.game.is_game_over():
                print(self.game.status_text())
                if not self.prompt_play_again():
                    return
                continue

            if not self.game.is_human_turn():
                print("AI is thinking...")
                if self.args.delay > 0:
                    time.sleep(self.args.delay)
                column = self.game.ai_move()
                if column is None:
                    print("The AI has no move.")
                    return
                print(f"AI plays column {column}")
                print(self.game.render())
                continue

            print(self.game.status_text())
            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == UNDO:
                if self.game.undo_last_turn():
                    print("Last turn undone.")
                    print(self.game.render())
                else:
                    print("Nothing to undo yet.")
                continue
            if move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            try:
                self.game.human_move(move)
            except EngineError as e:
                print(f"Invalid move: {e}")
                continue
            print(self.game.render())

    def prompt_play_again(self) -> bool:
        """Offer undo or a new game once the game has ended."""
        answer = input("Play again? (y = new game, u = undo, anything else quits): ").strip().lower()
        if answer == 'y':
            self.game.reset()
            print(self.game.render())
            return True
        if answer == 'u' and self.game.undo_last_turn():
            print(self.game.render())
            return True
        return False

    def get_human_move(self) -> Optional[int]:
        """
        Read a move from the player.

        Returns:
            Column index, a special command code, or None for unreadable input
        """
        cols = self.game.engine.cols
        user_input = input(f"Your move (columns 0-{cols - 1}, q/u/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'u':
            return UNDO
        if user_input == 'r':
            return RESTART

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def analyze_position(self) -> int:
        """Print the heuristic score of every playable column."""
        try:
            engine = Engine.from_moves(parse_moves(self.args.moves))
        except (ValueError, EngineError) as e:
            print(f"Error loading position: {e}")
            return 1

        print(engine.render())
        print(f"Status: {engine.status.name}, {engine.current_side.label} to move")

        player = HeuristicPlayer()
        scores = player.score_moves(engine)
        if not scores:
            print("No playable columns.")
            return 0

        for column, score in scores.items():
            print(f"  column {column}: {score:10.1f}")
        print(f"Chosen column: {player.get_move(engine)}")
        return 0

    def benchmark(self) -> None:
        """Time drops, win checks and move selection."""
        iterations = self.args.iterations
        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {iterations} iterations...")

        engine = Engine()
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            available = engine.available_columns()
            if engine.status.is_game_over() or not available:
                engine.reset()
                continue
            play_turn(engine, rng.choice(available))
            moves_made += 1
        moves_time = debug.end_timer("moves")
        print(f"Playing {moves_made} turns: {moves_time:.6f} seconds total, "
              f"{moves_time / max(moves_made, 1) * 1000:.6f} ms per turn")

        player = HeuristicPlayer()
        games = max(iterations // 100, 1)
        selections = 0
        debug.start_timer("selection")
        for _ in range(games):
            engine.reset()
            while not engine.status.is_game_over():
                column = player.get_move(engine)
                if column is None:
                    break
                play_turn(engine, column)
                selections += 1
        selection_time = debug.end_timer("selection")
        print(f"Heuristic self-play, {games} games, {selections} moves: {selection_time:.6f} seconds total, "
              f"{selection_time / max(selections, 1) * 1000:.6f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
