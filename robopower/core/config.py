"""
config.py
Defines the GameConfig dataclass, which centralizes the table options for a Robo Power game.
Related modules:
- engine.py: Uses GameConfig to deal hands and build the draw pile.
- cards.py: Provides the default deck composition.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .cards import Card, DECK_COMPOSITION


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all table options for a Robo Power game.
    Fields:
        num_players (int): Number of seats (default 4).
        hand_size (int): Cards dealt to each player at the start.
        deck (tuple): Deck composition as (card, copies) pairs.
        rng_seed (int|None): Seed for deterministic shuffles.
    """
    num_players: int = 4
    hand_size: int = 5
    deck: Tuple[Tuple[Card, int], ...] = DECK_COMPOSITION
    rng_seed: Optional[int] = 69

    def validate(self) -> None:
        """
        Raises:
            ValueError: If the deck cannot deal a full hand to every player.
        """
        if self.num_players < 2:
            raise ValueError("num_players must be at least 2")
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        deck_size = sum(copies for _, copies in self.deck)
        if deck_size < self.num_players * self.hand_size:
            raise ValueError("deck is too small to deal every player a full hand")
