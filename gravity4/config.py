"""
config.py - Tunable settings for a game session

Board dimensions are fixed in gravity4.utils; everything a player or the
command line may change lives here.
"""

from dataclasses import dataclass
from typing import Optional

from gravity4.utils import Player

# Seconds a committed move or gravity flip takes to settle
SETTLE_DELAY = 0.6
# Seconds between a turn switch and the automated player's move
AI_DELAY = 0.6
# Chance that the heuristic opponent explores a random column
AI_RANDOM_RATE = 0.2


@dataclass
class SessionConfig:
    settle_delay: float = SETTLE_DELAY
    ai_delay: float = AI_DELAY
    auto_gravity: bool = True
    ai_enabled: bool = False
    ai_player: Player = Player.TWO
    ai_random_rate: float = AI_RANDOM_RATE
    seed: Optional[int] = None

    def __post_init__(self):
        if self.settle_delay < 0 or self.ai_delay < 0:
            raise ValueError("Delays must be non-negative")
        if not 0.0 <= self.ai_random_rate <= 1.0:
            raise ValueError(f"ai_random_rate must be within [0, 1], got {self.ai_random_rate}")
        if self.ai_player == Player.EMPTY:
            raise ValueError("The automated player must be Player.ONE or Player.TWO")

    @classmethod
    def from_args(cls, args) -> 'SessionConfig':
        """Build a config from an argparse namespace, keeping defaults for missing flags."""
        ai = getattr(args, 'ai', 'heuristic')
        delay = getattr(args, 'delay', None)
        return cls(
            settle_delay=SETTLE_DELAY if delay is None else delay,
            ai_delay=AI_DELAY if delay is None else delay,
            auto_gravity=not getattr(args, 'no_auto_gravity', False),
            ai_enabled=ai != 'none',
            ai_random_rate=getattr(args, 'random_rate', AI_RANDOM_RATE),
            seed=getattr(args, 'seed', None),
        )
