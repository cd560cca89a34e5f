"""
events.py
Defines the GameEvent types emitted by the engine as public game actions happen.
Each event is an immutable dataclass; subscribers register per event class via GameEngine.on_event_of_type.
Related modules:
- engine.py: Emits these events synchronously.
- card_tracker.py: Consumes them to infer opponents' hands.
- recorder.py: Records them for replay or persistence.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .cards import Card


class GameEvent:
    """
    Base class for all game events.
    """
    pass


@dataclass(frozen=True)
class DuelResult:
    """
    Outcome of a resolved duel.
    Fields:
        discarded_cards (dict): Player index -> cards sent to the discard pile.
        retained_cards (dict): Player index -> cards returned to that player's hand.
        trapped_cards (dict): Trapping player index -> {victim index -> cards taken from the victim}.
    """
    discarded_cards: Dict[int, List[Card]] = field(default_factory=dict)
    retained_cards: Dict[int, List[Card]] = field(default_factory=dict)
    trapped_cards: Dict[int, Dict[int, List[Card]]] = field(default_factory=dict)


@dataclass(frozen=True)
class PlayerDiscard(GameEvent):
    """
    A player discarded a card from their hand at the start of their turn.
    """
    up_player_index: int
    discarded_card: Card


@dataclass(frozen=True)
class Duel(GameEvent):
    result: DuelResult


@dataclass(frozen=True)
class Spied(GameEvent):
    """
    A player took an unrevealed card from another player's hand.
    Fields:
        up_player_index (int): The spying player.
        spied_player_index (int): The player who lost a card.
        remaining_cards (int): Cards left in the spied player's hand afterwards.
    """
    up_player_index: int
    spied_player_index: int
    remaining_cards: int


@dataclass(frozen=True)
class DiscardPileReshuffledIntoDrawPile(GameEvent):
    """
    The draw pile ran out and the discard pile was shuffled to form a new one.
    Fields:
        previous_discard (tuple): Discard pile contents just before the reshuffle.
    """
    previous_discard: Tuple[Card, ...]


@dataclass(frozen=True)
class SpyCardTransferred(GameEvent):
    """
    Private side of a spy: which card moved. Only the two players involved may act on the card.
    """
    from_player_index: int
    to_player_index: int
    card: Card


EVENT_TYPES = (PlayerDiscard, Duel, Spied, DiscardPileReshuffledIntoDrawPile, SpyCardTransferred)
