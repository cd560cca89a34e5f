"""
cards.py
Defines the Card identities for Robo Power and the composition of one full deck.
Related modules:
- config.py: GameConfig carries the deck composition used by the engine.
- engine.py: Builds and shuffles the draw pile from the composition.
- card_tracker.py: Uses the full deck as the reference multiset for unknown cards.
"""

import random
from enum import Enum
from typing import Iterable, List, Tuple


class Card(Enum):
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SPY = "spy"
    SPYMASTER = "spymaster"
    TRAP = "trap"
    RETREAT = "retreat"

    @property
    def is_special(self) -> bool:
        return not self.value.isdigit()


# 4 of each value card, 4 spies, 2 spymasters, 4 traps, 2 retreats
DECK_COMPOSITION: Tuple[Tuple[Card, int], ...] = (
    (Card.ONE, 4),
    (Card.TWO, 4),
    (Card.THREE, 4),
    (Card.FOUR, 4),
    (Card.FIVE, 4),
    (Card.SIX, 4),
    (Card.SEVEN, 4),
    (Card.EIGHT, 4),
    (Card.NINE, 4),
    (Card.SPY, 4),
    (Card.SPYMASTER, 2),
    (Card.TRAP, 4),
    (Card.RETREAT, 2),
)


def full_deck(composition: Iterable[Tuple[Card, int]] = DECK_COMPOSITION) -> List[Card]:
    """
    Build the reference multiset of every card in the game, in a stable order.
    Args:
        composition: Pairs of (card, copies).
    Returns:
        list[Card]: One entry per physical card.
    """
    deck = []
    for card, copies in composition:
        deck.extend([card] * copies)
    return deck


def make_deck(rng: random.Random, composition: Iterable[Tuple[Card, int]] = DECK_COMPOSITION) -> List[Card]:
    deck = full_deck(composition)
    rng.shuffle(deck)
    return deck

