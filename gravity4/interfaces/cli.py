"""
cli.py - Command-line interface for gravity Connect Four

This module provides a terminal front end: an interactive game against the
heuristic opponent (or a second human), an automated demo match and a
small benchmark of the rules engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

from gravity4.ai.heuristic import HeuristicPlayer, RandomPlayer
from gravity4.config import SessionConfig
from gravity4.debug import debug, DebugLevel
from gravity4.game.board import Board
from gravity4.game.gravity import invert_gravity
from gravity4.game.moves import landing_row, valid_columns
from gravity4.game.session import GameSession, GameSnapshot, Phase
from gravity4.game.win_detector import global_win, local_win
from gravity4.utils import COLS, GameStatus, Gravity, Player

HELP_TEXT = (
    f"Commands: 0-{COLS - 1} drop a piece, g flip gravity, a toggle auto gravity, "
    "i toggle AI, r reset board, s reset scores, h help, q quit"
)


class SimpleCLI:
    """Simple command-line interface for gravity Connect Four."""

    def __init__(self, input_func=input, output=None, sleep=time.sleep):
        """
        Initialize the CLI.

        Args:
            input_func: Source of user input lines
            output: Stream to print to (defaults to stdout)
            sleep: Used to wait out settle delays in real time
        """
        self.input = input_func
        self.output = output or sys.stdout
        self.sleep = sleep
        self.args = None

    def print(self, text: str = "") -> None:
        print(text, file=self.output)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Gravity Connect Four CLI')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug-level debug)')
        parser.add_argument('--debug-level', dest='debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning', help='Logging verbosity')
        parser.add_argument('--log-file', dest='log_file', default=None,
                            help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--ai', choices=['heuristic', 'random', 'none'], default='heuristic',
                                 help='Opponent type; none for two human players')
        play_parser.add_argument('--no-auto-gravity', dest='no_auto_gravity', action='store_true',
                                 help='Do not flip gravity after every turn')
        play_parser.add_argument('--delay', type=float, default=None,
                                 help='Settle delay in seconds')
        play_parser.add_argument('--seed', type=int, default=None, help='Random seed for the AI')

        demo_parser = subparsers.add_parser('demo', help='Watch the heuristic AI play itself')
        demo_parser.add_argument('--games', type=int, default=1, help='Number of games to play')
        demo_parser.add_argument('--no-auto-gravity', dest='no_auto_gravity', action='store_true',
                                 help='Do not flip gravity after every turn')
        demo_parser.add_argument('--delay', type=float, default=0.0,
                                 help='Settle delay in seconds')
        demo_parser.add_argument('--seed', type=int, default=None, help='Random seed for both players')
        demo_parser.add_argument('--quiet', action='store_true', help='Only print results')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the rules engine')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Random seed')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel[self.args.debug_level.upper()])
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI; returns a process exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'demo':
            self.demo()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            self.print("Please specify a command. Use --help for options.")
            return 1
        return 0

    # --- play ---------------------------------------------------------------

    def make_session(self) -> GameSession:
        config = SessionConfig.from_args(self.args)
        rng = random.Random(config.seed)
        if self.args.ai == 'random':
            ai = RandomPlayer(config.ai_player, rng)
        else:
            ai = HeuristicPlayer(config.ai_player, config.ai_random_rate, rng)
        return GameSession(config, ai=ai)

    def show_transition(self, snap: GameSnapshot) -> None:
        """Session listener: print the board whenever pieces move."""
        if snap.phase == Phase.MOVE_IN_FLIGHT:
            self.print(snap.render())
        elif snap.phase == Phase.GRAVITY_IN_FLIGHT:
            self.print(f"Gravity flips: pieces now fall {snap.gravity}.")
            self.print(snap.render())

    def describe_result(self, session: GameSession) -> str:
        status = session.status
        scores = session.scores
        score_line = f"Score X {scores[Player.ONE]} - {scores[Player.TWO]} O"
        if status == GameStatus.DRAW:
            return f"It's a draw! {score_line}"
        return f"{status.winner} wins! {score_line}"

    def play_game(self) -> None:
        """Play a gravity Connect Four game interactively."""
        session = self.make_session()
        debug.info(f"Starting interactive game (ai={self.args.ai}, auto_gravity={session.auto_gravity})", "cli")
        session.subscribe(self.show_transition)

        self.print("Starting a new gravity Connect Four game!")
        self.print(HELP_TEXT)
        self.print(session.render())

        announced_end = False
        while True:
            session.run_pending(sleep=self.sleep)

            if session.status.is_game_over() and not announced_end:
                self.print(session.render())
                self.print(self.describe_result(session))
                self.print("Press r to play again or q to quit.")
                announced_end = True

            try:
                command = self.input(f"{session.turn} to move (gravity {session.gravity}): ").strip().lower()
            except EOFError:
                command = 'q'

            if command == 'q':
                self.print("Quitting game.")
                return
            if command in ('h', '?'):
                self.print(HELP_TEXT)
            elif command == 'g':
                if not session.toggle_gravity_manual():
                    self.print("Gravity cannot be flipped right now.")
            elif command == 'a':
                session.set_auto_gravity(not session.auto_gravity)
                self.print(f"Auto gravity {'ON' if session.auto_gravity else 'OFF'}")
            elif command == 'i':
                session.set_ai_enabled(not session.ai_enabled)
                self.print(f"AI ({session.ai.player}) {'ON' if session.ai_enabled else 'OFF'}")
            elif command == 'r':
                session.reset_board()
                announced_end = False
                self.print("Board reset.")
                self.print(session.render())
            elif command == 's':
                session.reset_scores()
                self.print("Scores reset.")
            else:
                self.handle_column(session, command)

    def handle_column(self, session: GameSession, command: str) -> None:
        try:
            column = int(command)
        except ValueError:
            debug.debug(f"Unparseable input {command!r}", "cli")
            self.print("Invalid input. Enter a column number or h for help.")
            return

        if not 0 <= column < COLS:
            self.print(f"Column must be between 0 and {COLS - 1}.")
        elif session.status.is_game_over():
            self.print("The game is over. Press r to play again.")
        elif session.locked:
            self.print("Pieces are still settling. Try again in a moment.")
        elif not session.select_column(column):
            self.print(f"Column {column} is full.")

    # --- demo ---------------------------------------------------------------

    def demo(self) -> None:
        """Let two heuristic players play each other."""
        config = SessionConfig.from_args(self.args)
        config.ai_enabled = True
        rng = random.Random(config.seed)
        session = GameSession(config, ai=HeuristicPlayer(Player.TWO, config.ai_random_rate, rng))
        first = HeuristicPlayer(Player.ONE, config.ai_random_rate, rng)
        if not self.args.quiet:
            session.subscribe(self.show_transition)

        for game in range(1, self.args.games + 1):
            if game > 1:
                session.reset_board()
            while True:
                session.run_pending(sleep=self.sleep if config.settle_delay else None)
                if session.status.is_game_over():
                    break
                session.select_column(first.choose_column(session.board, session.gravity,
                                                          session.valid_columns()))
            self.print(f"Game {game}: {self.describe_result(session)}")

    # --- benchmark ----------------------------------------------------------

    def random_board(self, rng: random.Random, moves: int) -> Board:
        board = Board()
        player = Player.ONE
        gravity = Gravity.DOWN
        for _ in range(moves):
            columns = valid_columns(board, gravity)
            if not columns:
                break
            col = rng.choice(columns)
            board.set(landing_row(board, col, gravity), col, player)
            player = player.other()
            if rng.random() < 0.3:
                gravity, board, _ = invert_gravity(board, gravity)
        return board

    def benchmark(self) -> None:
        """Benchmark the rules engine."""
        iterations = max(1, self.args.iterations)
        rng = random.Random(self.args.seed)
        self.print(f"Running benchmark with {iterations} iterations...")
        boards = [self.random_board(rng, rng.randint(7, 30)) for _ in range(min(iterations, 200))]

        debug.start_timer("landing")
        for i in range(iterations):
            board = boards[i % len(boards)]
            for col in range(COLS):
                landing_row(board, col, Gravity.DOWN if i % 2 else Gravity.UP)
        landing_time = debug.end_timer("landing")
        self.print(f"Landing rows: {landing_time:.6f} seconds total, "
                   f"{landing_time / (iterations * COLS) * 1e6:.3f} us per column")

        debug.start_timer("local_win")
        checks = 0
        for i in range(iterations):
            board = boards[i % len(boards)]
            for piece in board.pieces:
                local_win(board, piece.row, piece.col, piece.owner)
                checks += 1
        local_time = debug.end_timer("local_win")
        self.print(f"Local win checks: {checks} in {local_time:.6f} seconds")

        debug.start_timer("global_win")
        for i in range(iterations):
            global_win(boards[i % len(boards)])
        global_time = debug.end_timer("global_win")
        self.print(f"Global win scans: {global_time / iterations * 1000:.6f} ms per board")

        debug.start_timer("invert")
        for i in range(iterations):
            invert_gravity(boards[i % len(boards)], Gravity.DOWN)
        invert_time = debug.end_timer("invert")
        self.print(f"Gravity inversions: {invert_time / iterations * 1000:.6f} ms per board")

        games = max(1, iterations // 100)
        config = SessionConfig(settle_delay=0.0, ai_delay=0.0, ai_enabled=True, seed=self.args.seed)
        session = GameSession(config)
        first = HeuristicPlayer(Player.ONE, config.ai_random_rate, random.Random(self.args.seed))
        debug.start_timer("games")
        for _ in range(games):
            session.reset_board()
            while True:
                session.run_pending()
                if session.status.is_game_over():
                    break
                session.select_column(first.choose_column(session.board, session.gravity,
                                                          session.valid_columns()))
        games_time = debug.end_timer("games")
        scores = session.scores
        self.print(f"Played {games} full games in {games_time:.6f} seconds "
                   f"(X {scores[Player.ONE]} - {scores[Player.TWO]} O)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
