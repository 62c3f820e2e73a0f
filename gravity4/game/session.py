"""
session.py - Turn control for gravity Connect Four

GameSession owns the board, the turn, the gravity direction and the scores,
and serializes every state change against a settle delay:

    IDLE --select_column--> MOVE_IN_FLIGHT --settle--> IDLE | GAME_OVER
                                                  +--auto flip--> GRAVITY_IN_FLIGHT
    GRAVITY_IN_FLIGHT --settle--> IDLE | GAME_OVER

While a move or a flip is settling the session is locked and new intents
are rejected, not queued. Continuations are scheduled on a SettleScheduler
and tagged with the session epoch; reset_board bumps the epoch so nothing
scheduled before the reset can touch the new game.
"""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from gravity4.ai.heuristic import HeuristicPlayer
from gravity4.config import SessionConfig
from gravity4.debug import debug
from gravity4.exceptions import ColumnFullError, OutOfBoundsError
from gravity4.game.board import Board
from gravity4.game.gravity import invert_gravity
from gravity4.game.moves import resolve_landing, valid_columns
from gravity4.game.scheduler import SettleHandle, SettleScheduler
from gravity4.game.win_detector import find_winning_line, global_win, local_win
from gravity4.utils import (ROWS, COLS, PLAYERS, GameStatus, Gravity, Player,
                            is_valid_column, render_board_ascii)


class Phase(Enum):
    IDLE = auto()
    MOVE_IN_FLIGHT = auto()
    GRAVITY_IN_FLIGHT = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session after a committed transition."""
    board: Tuple[Tuple[Player, ...], ...]
    turn: Player
    gravity: Gravity
    scores: Dict[Player, int]
    status: GameStatus
    phase: Phase
    locked: bool
    auto_gravity: bool
    ai_enabled: bool

    def piece_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell != Player.EMPTY)

    def render(self) -> str:
        grid = np.array([[cell.value for cell in row] for row in self.board], dtype=int)
        return render_board_ascii(grid, self.gravity)


Listener = Callable[[GameSnapshot], None]


class GameSession:
    """
    One game table: board, turn, gravity, scores and the move pipeline.

    Args:
        config: Session settings; defaults to SessionConfig()
        scheduler: Clock the settle continuations run on
        ai: The automated player; defaults to a HeuristicPlayer for
            config.ai_player seeded with config.seed
    """

    def __init__(self, config: Optional[SessionConfig] = None,
                 scheduler: Optional[SettleScheduler] = None,
                 ai: Optional[HeuristicPlayer] = None):
        self.config = config or SessionConfig()
        self.scheduler = scheduler or SettleScheduler()
        self.ai = ai or HeuristicPlayer(self.config.ai_player, self.config.ai_random_rate,
                                        random.Random(self.config.seed))
        self.auto_gravity = self.config.auto_gravity
        self.ai_enabled = self.config.ai_enabled

        self._scores: Dict[Player, int] = {player: 0 for player in PLAYERS}
        self._listeners: List[Listener] = []
        self._handles: List[SettleHandle] = []
        self._ai_handle: Optional[SettleHandle] = None
        self._epoch = 0
        self._board = Board()
        self._reset_state()
        debug.debug(f"New session: auto_gravity={self.auto_gravity}, ai_enabled={self.ai_enabled}", "session")
        self._maybe_schedule_ai(self.config.ai_delay)

    # --- observable state -------------------------------------------------

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Player:
        return self._turn

    @property
    def gravity(self) -> Gravity:
        return self._gravity

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def scores(self) -> Dict[Player, int]:
        return dict(self._scores)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self._last_move

    def snapshot(self) -> GameSnapshot:
        board = tuple(tuple(Player(int(self._board.grid[r, c])) for c in range(COLS))
                      for r in range(ROWS))
        return GameSnapshot(
            board=board,
            turn=self._turn,
            gravity=self._gravity,
            scores=dict(self._scores),
            status=self._status,
            phase=self._phase,
            locked=self._locked,
            auto_gravity=self.auto_gravity,
            ai_enabled=self.ai_enabled,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every transition; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def valid_columns(self) -> List[int]:
        if self._status.is_game_over():
            return []
        return valid_columns(self._board, self._gravity)

    def winning_line(self) -> List[Tuple[int, int]]:
        if self._status.winner is None:
            return []
        _, line = find_winning_line(self._board)
        return line

    def render(self) -> str:
        return self._board.render(self._gravity, self.winning_line())

    # --- commands ---------------------------------------------------------

    def select_column(self, column: int) -> bool:
        """
        Drop the current player's piece into ``column``.

        Returns:
            True if the move was committed; False if it was rejected because
            the game is over, a previous transition is still settling or the
            column is full. A rejected move leaves the state unchanged.

        Raises:
            OutOfBoundsError: if the column index is outside the board
        """
        if not is_valid_column(column):
            raise OutOfBoundsError(col=column)
        if self._status.is_game_over():
            debug.debug(f"Ignoring column {column}: game is over", "session")
            return False
        if self._locked:
            debug.debug(f"Ignoring column {column}: {self._phase.name} still settling", "session")
            return False

        try:
            row = resolve_landing(self._board, column, self._gravity)
        except ColumnFullError as e:
            debug.debug(f"Rejected move: {e}", "session")
            return False

        player = self._turn
        self._board.set(row, column, player)
        self._last_move = (row, column)
        self._locked = True
        self._phase = Phase.MOVE_IN_FLIGHT
        debug.info(f"{player.name} drops into column {column}, lands on row {row}", "session")

        self._schedule(self.config.settle_delay, self._settle_move, row, column, player)
        self._notify()
        return True

    def toggle_gravity_manual(self) -> bool:
        """Flip gravity on request; ignored while locked or after the game ended."""
        if self._locked or self._status.is_game_over():
            debug.debug("Ignoring manual gravity flip", "session")
            return False
        self._start_gravity_flip()
        return True

    def reset_board(self) -> None:
        """Start a new game; scores are kept and pending continuations are discarded."""
        self._epoch += 1
        for handle in self._handles:
            handle.cancel()
        self._handles = []
        self._reset_state()
        debug.info(f"Board reset (epoch {self._epoch})", "session")
        self._notify()
        self._maybe_schedule_ai(self.config.ai_delay)

    def reset_scores(self) -> None:
        self._scores = {player: 0 for player in PLAYERS}
        debug.info("Scores reset", "session")
        self._notify()

    def set_auto_gravity(self, enabled: bool) -> None:
        self.auto_gravity = bool(enabled)
        debug.debug(f"Auto gravity {'on' if self.auto_gravity else 'off'}", "session")
        self._notify()

    def set_ai_enabled(self, enabled: bool) -> None:
        self.ai_enabled = bool(enabled)
        debug.debug(f"AI {'enabled' if self.ai_enabled else 'disabled'}", "session")
        self._notify()
        if not self._locked:
            self._maybe_schedule_ai(0.0)

    def run_pending(self, sleep=None) -> int:
        """Settle everything currently scheduled, including AI replies."""
        return self.scheduler.run_until_idle(sleep=sleep)

    # --- continuations ----------------------------------------------------

    def _reset_state(self) -> None:
        self._board.clear()
        self._turn = Player.ONE
        self._gravity = Gravity.DOWN
        self._status = GameStatus.IN_PROGRESS
        self._phase = Phase.IDLE
        self._locked = False
        self._last_move = None

    def _schedule(self, delay: float, callback: Callable, *args) -> SettleHandle:
        self._handles = [h for h in self._handles if h.active]
        handle = self.scheduler.call_later(delay, self._run_if_current, self._epoch, callback, args)
        self._handles.append(handle)
        return handle

    def _run_if_current(self, epoch: int, callback: Callable, args: tuple) -> None:
        if epoch != self._epoch:
            debug.debug(f"Dropping stale {callback.__name__} from epoch {epoch}", "session")
            return
        callback(*args)

    def _settle_move(self, row: int, col: int, player: Player) -> None:
        self._locked = False

        if local_win(self._board, row, col, player):
            self._end_game(player)
            return

        if self._board.is_full():
            self._status = GameStatus.DRAW
            self._phase = Phase.GAME_OVER
            debug.info("Board is full: draw", "session")
            self._notify()
            return

        self._turn = self._turn.other()
        self._phase = Phase.IDLE
        debug.debug(f"Turn passes to {self._turn.name}", "session")

        if self.auto_gravity:
            self._start_gravity_flip()
        else:
            self._notify()

        self._maybe_schedule_ai(self.config.ai_delay)

    def _start_gravity_flip(self) -> None:
        self._gravity, self._board, _ = invert_gravity(self._board, self._gravity)
        self._locked = True
        self._phase = Phase.GRAVITY_IN_FLIGHT
        debug.info(f"Gravity is now {self._gravity}", "session")
        self._schedule(self.config.settle_delay, self._settle_gravity)
        self._notify()

    def _settle_gravity(self) -> None:
        self._locked = False
        winner = global_win(self._board)
        if winner is not None:
            self._end_game(winner)
            return
        self._phase = Phase.IDLE
        self._notify()
        self._maybe_schedule_ai(self.config.ai_delay)

    def _end_game(self, winner: Player) -> None:
        self._status = GameStatus.won_by(winner)
        self._phase = Phase.GAME_OVER
        self._locked = False
        self._scores[winner] += 1
        debug.info(f"{winner.name} wins; scores {self._scores[Player.ONE]}-{self._scores[Player.TWO]}", "session")
        self._notify()

    def _maybe_schedule_ai(self, delay: float) -> None:
        """Queue an AI move if it is the AI's turn; at most one request is pending."""
        if self._ai_handle is not None and self._ai_handle.active:
            return
        if self.ai_enabled and self._turn == self.ai.player and not self._status.is_game_over():
            self._ai_handle = self._schedule(delay, self._ai_move)

    def _ai_move(self) -> None:
        if not self.ai_enabled or self._turn != self.ai.player or self._status.is_game_over():
            return
        if self._locked:
            debug.debug("AI move deferred: still settling", "session")
            self._ai_handle = self._schedule(self.config.ai_delay, self._ai_move)
            return

        columns = valid_columns(self._board, self._gravity)
        if not columns:
            return
        column = self.ai.choose_column(self._board, self._gravity, columns)
        debug.info(f"AI ({self.ai.player.name}) picks column {column}", "session")
        self.select_column(column)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
