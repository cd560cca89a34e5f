"""
state.py
Defines the ground-truth state dataclasses for Robo Power: PlayerState, DeckState, GameState.
Related modules:
- engine.py: Mutates and reads GameState during play.
- config.py: GameConfig is part of GameState.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .cards import Card
from .config import GameConfig


@dataclass
class PlayerState:
    """
    Stores private state for a single player.
    Fields:
        player_id (int): Seat index.
        hand (list[Card]): Cards held (hidden from opponents).
        active (bool): False once the player has been knocked out.
    """
    player_id: int
    hand: List[Card] = field(default_factory=list)
    active: bool = True


@dataclass
class DeckState:
    """
    Shared card piles. The top of each pile is the end of its list.
    """
    draw_pile: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)


@dataclass
class GameState:
    """
    Composite state for the entire game: config, every player, and the piles.
    """
    config: GameConfig
    players: Tuple[PlayerState, ...]
    deck: DeckState
    status: str = "NOT_STARTED"  # PLAYING | ENDED
