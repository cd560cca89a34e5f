"""
engine.py
Implements the GameEngine class, which owns the ground-truth game state, applies moves, and publishes events.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState, PlayerState, DeckState hold all game data.
- events.py: Event types emitted to subscribers.
- card_tracker.py: The main subscriber, inferring opponents' hands from events.
"""

import random
from typing import Callable, Dict, List, Optional, Type

from .cards import Card, full_deck, make_deck
from .config import GameConfig
from .events import (
    DiscardPileReshuffledIntoDrawPile,
    Duel,
    DuelResult,
    GameEvent,
    PlayerDiscard,
    Spied,
    SpyCardTransferred,
)
from .state import DeckState, GameState, PlayerState
from ..utils.logger import get_logger

logger = get_logger(__name__)


class IllegalMoveError(Exception):
    """
    Raised when an illegal move is attempted (inactive player, bad index, cards not held, etc).
    """
    pass


class GameEngine:
    """
    Main state machine for Robo Power. Holds every hand and pile, applies moves, and publishes events
    synchronously to handlers registered with on_event_of_type.
    Duel scoring is not computed here: callers pass an already-resolved DuelResult.
    """
    def __init__(self, config: GameConfig):
        """
        Initialize a new game engine with the given configuration.
        Args:
            config (GameConfig): Game configuration.
        """
        config.validate()
        self.config = config
        self.rng = random.Random(config.rng_seed)
        players = tuple(PlayerState(player_id=i) for i in range(config.num_players))
        deck = DeckState(draw_pile=make_deck(self.rng, config.deck))
        self.state = GameState(config=config, players=players, deck=deck)
        self._full_deck = tuple(full_deck(config.deck))
        self._handlers: Dict[Type[GameEvent], List[Callable]] = {}
        self._events: List[GameEvent] = []
        self._seated: Dict[int, object] = {}

    # --- event bus ---

    def on_event_of_type(self, event_type: Type[GameEvent], handler: Callable[[GameEvent], None]) -> None:
        """
        Register handler to be called with every event of exactly event_type, in registration order.
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def _emit(self, event: GameEvent) -> None:
        """
        Internal: Record an event and deliver it to its subscribers before returning.
        """
        self._events.append(event)
        for handler in list(self._handlers.get(type(event), ())):
            handler(event)

    def pop_events(self) -> List[GameEvent]:
        """
        Return and clear all emitted events since last call.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self) -> List[GameEvent]:
        """
        Return all events emitted so far (does not clear).
        """
        return list(self._events)

    # --- queries ---

    @property
    def player_count(self) -> int:
        return len(self.state.players)

    @property
    def active_players(self) -> List[PlayerState]:
        return [p for p in self.state.players if p.active]

    @property
    def discard_pile(self) -> List[Card]:
        return list(self.state.deck.discard_pile)

    @property
    def full_deck(self) -> List[Card]:
        """Every card that exists in this game, one entry per physical card."""
        return list(self._full_deck)

    def hand_of(self, player_index: int) -> List[Card]:
        return list(self._player(player_index).hand)

    def hand_size(self, player_index: int) -> int:
        """Number of cards held; public information."""
        return len(self._player(player_index).hand)

    def is_terminal(self) -> bool:
        return self.state.status == "ENDED"

    # --- players ---

    def register_player(self, player) -> None:
        """
        Seat a Player so the engine can deliver private spy callbacks to it.
        """
        index = player.player_index
        self._player(index)
        if index in self._seated:
            raise IllegalMoveError(f"Seat {index} is already taken")
        self._seated[index] = player

    def _player(self, player_index: int) -> PlayerState:
        if not 0 <= player_index < len(self.state.players):
            raise IllegalMoveError(f"No player at index {player_index}")
        return self.state.players[player_index]

    def _active_player(self, player_index: int) -> PlayerState:
        player = self._player(player_index)
        if not player.active:
            raise IllegalMoveError(f"Player {player_index} is out of the game")
        return player

    # --- moves ---

    def start_game(self) -> None:
        """
        Deal hand_size cards to every player. Dealing is private and emits no events.
        """
        if self.state.status != "NOT_STARTED":
            raise IllegalMoveError("Game has already started")
        for _ in range(self.config.hand_size):
            for player in self.state.players:
                player.hand.append(self.state.deck.draw_pile.pop())
        self.state.status = "PLAYING"

    def draw(self, player_index: int) -> Optional[Card]:
        """
        Draw the top card of the draw pile into a player's hand. If the draw pile is empty the discard pile
        is first reshuffled into it, which is announced with DiscardPileReshuffledIntoDrawPile.
        Returns:
            Card|None: The drawn card, or None when both piles are empty.
        """
        player = self._active_player(player_index)
        deck = self.state.deck
        if not deck.draw_pile:
            if not deck.discard_pile:
                return None
            self._reshuffle()
        card = deck.draw_pile.pop()
        player.hand.append(card)
        return card

    def _reshuffle(self) -> None:
        deck = self.state.deck
        previous = tuple(deck.discard_pile)
        deck.draw_pile = list(previous)
        deck.discard_pile = []
        self.rng.shuffle(deck.draw_pile)
        logger.info("Reshuffled %d discarded cards into the draw pile", len(previous))
        self._emit(DiscardPileReshuffledIntoDrawPile(previous_discard=previous))

    def discard(self, player_index: int, card_index: int) -> Card:
        """
        Move a card from a player's hand to the discard pile.
        Args:
            player_index (int): The discarding player.
            card_index (int): Position of the card in their hand.
        Returns:
            Card: The discarded card.
        Raises:
            IllegalMoveError: If the player is out or the index is not in their hand.
        """
        player = self._active_player(player_index)
        if not 0 <= card_index < len(player.hand):
            raise IllegalMoveError(f"Player {player_index} has no card at index {card_index}")
        card = player.hand.pop(card_index)
        self.state.deck.discard_pile.append(card)
        self._update_active()
        self._emit(PlayerDiscard(up_player_index=player_index, discarded_card=card))
        return card

    def spy(self, up_player_index: int, spied_player_index: int, card_index: Optional[int] = None) -> Card:
        """
        The up player takes one unrevealed card from another player's hand (random unless card_index is given).
        Publishes Spied to everyone, then SpyCardTransferred and the seated players' callbacks for the two
        players involved.
        """
        if up_player_index == spied_player_index:
            raise IllegalMoveError("A player cannot spy on themselves")
        spier = self._active_player(up_player_index)
        spied = self._active_player(spied_player_index)
        if not spied.hand:
            raise IllegalMoveError(f"Player {spied_player_index} has no cards to spy")
        if card_index is None:
            card_index = self.rng.randrange(len(spied.hand))
        elif not 0 <= card_index < len(spied.hand):
            raise IllegalMoveError(f"Player {spied_player_index} has no card at index {card_index}")

        card = spied.hand.pop(card_index)
        spier.hand.append(card)
        self._update_active()

        self._emit(Spied(
            up_player_index=up_player_index,
            spied_player_index=spied_player_index,
            remaining_cards=len(spied.hand),
        ))
        self._emit(SpyCardTransferred(
            from_player_index=spied_player_index,
            to_player_index=up_player_index,
            card=card,
        ))

        receiver = self._seated.get(up_player_index)
        if receiver is not None:
            receiver.on_receive_spy_card(card, spied_player_index)
        victim = self._seated.get(spied_player_index)
        if victim is not None:
            victim.on_card_stolen(card, up_player_index)
        return card

    def resolve_duel(self, result: DuelResult) -> None:
        """
        Apply a resolved duel: discarded cards go to the discard pile, retained cards stay in hand, and
        trapped cards move from the victim's hand to the trapper's hand. Publishes Duel.
        Raises:
            IllegalMoveError: If the result references cards a player does not hold; nothing is applied.
        """
        # validate against the hands before touching anything
        needed: Dict[int, List[Card]] = {}
        for player_index, cards in result.discarded_cards.items():
            needed.setdefault(player_index, []).extend(cards)
        for player_index, cards in result.retained_cards.items():
            needed.setdefault(player_index, []).extend(cards)
        for trapper, trapped_map in result.trapped_cards.items():
            self._active_player(trapper)
            for victim, cards in trapped_map.items():
                needed.setdefault(victim, []).extend(cards)
        for player_index, cards in needed.items():
            hand = list(self._active_player(player_index).hand)
            for card in cards:
                if card not in hand:
                    raise IllegalMoveError(f"Player {player_index} does not hold {card.name}")
                hand.remove(card)

        for player_index, cards in result.discarded_cards.items():
            hand = self.state.players[player_index].hand
            for card in cards:
                hand.remove(card)
                self.state.deck.discard_pile.append(card)
        for trapper, trapped_map in result.trapped_cards.items():
            for victim, cards in trapped_map.items():
                for card in cards:
                    self.state.players[victim].hand.remove(card)
                    self.state.players[trapper].hand.append(card)

        self._update_active()
        self._emit(Duel(result=result))

    def _update_active(self) -> None:
        """
        Internal: Knock out players left without cards; the game ends when one player remains.
        """
        if self.state.status != "PLAYING":
            return
        for player in self.state.players:
            if player.active and not player.hand:
                player.active = False
                logger.info("Player %d is out of cards and leaves the game", player.player_id)
        if len(self.active_players) <= 1:
            self.state.status = "ENDED"
