"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures shared by the game, ai and interface tests.
"""

from typing import Callable, Sequence

import pytest

from gravity4.config import SessionConfig
from gravity4.debug import debug, DebugLevel
from gravity4.game.board import Board
from gravity4.game.scheduler import SettleScheduler
from gravity4.game.session import GameSession

SETTLE = 0.6


class FixedRandom:
    """Stand-in for random.Random with a pinned random() value; choice() takes the last item."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return list(seq)[-1]

    def seed(self, *args, **kwargs):
        pass


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the shared debug manager at its default level between tests."""
    level = debug.level
    yield
    debug.configure(level=level, components=[])


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def board_from_rows() -> Callable[[Sequence[str]], Board]:
    """Build a board from six strings of seven symbols, top row first ('.', 'X', 'O')."""
    return Board.from_rows


@pytest.fixture
def scheduler() -> SettleScheduler:
    return SettleScheduler()


@pytest.fixture
def make_session(scheduler) -> Callable[..., GameSession]:
    """Call the inner function with SessionConfig overrides; auto gravity and AI default to off."""

    def _make(ai=None, **overrides) -> GameSession:
        settings = dict(settle_delay=SETTLE, ai_delay=SETTLE, auto_gravity=False,
                        ai_enabled=False, seed=0)
        settings.update(overrides)
        return GameSession(SessionConfig(**settings), scheduler=scheduler, ai=ai)

    return _make


@pytest.fixture
def fixed_random() -> Callable[[float], FixedRandom]:
    return FixedRandom
