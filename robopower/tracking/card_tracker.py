"""
card_tracker.py
Implements CardTracker, the bookkeeping of which cards each opponent is known to hold, inferred only from public
game events.
Related modules:
- engine.py: Publishes the events the tracker subscribes to, and answers deck/discard/active-player queries.
- events.py: The event shapes handled here.
- base.py: PlayerWithCardTracker owns a tracker and forwards the private spy callbacks to it.

The known cards are a conservative under-approximation. Some deductions are deliberately not made:
- if a spymaster takes both cards of a player holding exactly two, the second card is not deduced;
- the full-disclosure rule on reshuffle only applies when exactly one opponent is still in the game;
- retained cards that were drawn after the known count was established are not noticed.
"""

from collections import Counter
from typing import Callable, Dict, Iterable, List

from ..core.cards import Card
from ..core.events import (
    DiscardPileReshuffledIntoDrawPile,
    Duel,
    PlayerDiscard,
    Spied,
    SpyCardTransferred,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


class UnknownPlayerError(KeyError):
    """
    Raised when known cards are looked up for an index that is not a tracked opponent.
    """
    pass


def remove_each(cards: List[Card], to_remove: Iterable[Card]) -> None:
    """
    Remove one copy of each card in to_remove (unlike a filter, which would drop every copy).
    Cards that are not present are skipped.
    """
    for card in to_remove:
        if card in cards:
            cards.remove(card)


class CardTracker:
    """
    Tracks the cards known to be in each opponent's hand from the public event stream of a game.

    Must be constructed before the game starts so no events are missed. Whenever the tracking player receives a
    card via spy, on_receive_spy_card must be called, and whenever it has a card stolen, on_card_stolen must be
    called; PlayerWithCardTracker does both automatically. Alternatively pass follow_spy_transfers=True to
    apply SpyCardTransferred events instead, but never both.
    """
    def __init__(self, game, tracking_player_index: int, get_hand: Callable[[], List[Card]],
                 follow_spy_transfers: bool = False):
        """
        Args:
            game: The engine publishing events (GameEngine or anything with the same queries).
            tracking_player_index (int): Seat of the player this tracker works for.
            get_hand (callable): Returns the tracking player's current hand.
            follow_spy_transfers (bool): Apply SpyCardTransferred events involving the tracking player.
        """
        if not 0 <= tracking_player_index < game.player_count:
            raise UnknownPlayerError(tracking_player_index)
        self.game = game
        self.tracking_player_index = tracking_player_index
        self.get_hand = get_hand
        self.follow_spy_transfers = follow_spy_transfers
        self._known_cards: Dict[int, List[Card]] = {
            index: [] for index in range(game.player_count) if index != tracking_player_index
        }

        game.on_event_of_type(PlayerDiscard, self._on_discard)
        game.on_event_of_type(Duel, self._on_duel)
        game.on_event_of_type(Spied, self._on_spied)
        game.on_event_of_type(DiscardPileReshuffledIntoDrawPile, self._on_reshuffle)
        game.on_event_of_type(SpyCardTransferred, self._on_spy_transfer)

    @property
    def known_cards(self) -> Dict[int, List[Card]]:
        """
        A copy of the known cards, as opponent index -> cards known to be in their hand.
        The tracking player is not included.
        """
        return {index: list(cards) for index, cards in self._known_cards.items()}

    def _cards_of(self, player_index: int) -> List[Card]:
        try:
            return self._known_cards[player_index]
        except KeyError:
            raise UnknownPlayerError(player_index) from None

    # --- event handlers ---

    def _on_discard(self, event: PlayerDiscard) -> None:
        if event.up_player_index == self.tracking_player_index:
            return
        remove_each(self._cards_of(event.up_player_index), [event.discarded_card])
        logger.debug("Player %d discarded %s", event.up_player_index, event.discarded_card.name)

    def _on_duel(self, event: Duel) -> None:
        result = event.result

        for player, discarded in result.discarded_cards.items():
            if player != self.tracking_player_index:
                remove_each(self._cards_of(player), discarded)

        # retained cards may already have been known, so only add the copies beyond what we knew
        for player, retained in result.retained_cards.items():
            if player == self.tracking_player_index:
                continue
            player_cards = self._cards_of(player)
            for card, retained_count in Counter(retained).items():
                # TODO this misses retained copies drawn from the deck after the known count was established
                newly_seen = retained_count - player_cards.count(card)
                if newly_seen > 0:
                    player_cards.extend([card] * newly_seen)

        # trapped cards always leave the victim and join the trapper
        for trapper, trapped_map in result.trapped_cards.items():
            trapper_cards = None if trapper == self.tracking_player_index else self._cards_of(trapper)
            for trapped_from, trapped in trapped_map.items():
                if trapped_from != self.tracking_player_index:
                    remove_each(self._cards_of(trapped_from), trapped)
                if trapper_cards is not None:
                    trapper_cards.extend(trapped)

        logger.debug("Known cards after duel: %s", self._known_cards)

    def _on_spied(self, event: Spied) -> None:
        # spies from or to the tracking player arrive via on_receive_spy_card and on_card_stolen instead
        if self.tracking_player_index in (event.up_player_index, event.spied_player_index):
            return

        spied_cards = self._cards_of(event.spied_player_index)
        # a player left with nothing held exactly one card; if we knew it, we know where it went
        if event.remaining_cards == 0 and spied_cards:
            self._cards_of(event.up_player_index).append(spied_cards[0])

        # any card could have been taken, so nothing left in the spied hand is certain
        spied_cards.clear()
        logger.debug("Player %d spied player %d", event.up_player_index, event.spied_player_index)

    def _on_reshuffle(self, event: DiscardPileReshuffledIntoDrawPile) -> None:
        active = [p for p in self.game.active_players if p.player_id != self.tracking_player_index]
        if len(active) != 1:
            return
        # one-on-one: the other player's hand is pinned down exactly
        active_player = active[0].player_id
        self._cards_of(active_player)[:] = list(event.previous_discard) + list(self.get_hand())
        logger.debug("Reshuffle revealed the hand of player %d", active_player)

    def _on_spy_transfer(self, event: SpyCardTransferred) -> None:
        if not self.follow_spy_transfers:
            return
        if event.to_player_index == self.tracking_player_index:
            self.on_receive_spy_card(event.card, event.from_player_index)
        elif event.from_player_index == self.tracking_player_index:
            self.on_card_stolen(event.card, event.to_player_index)

    # --- owner callbacks ---

    def on_receive_spy_card(self, card: Card, from_player_index: int) -> None:
        """
        Must be called whenever the tracking player receives card via spy from from_player_index.
        """
        remove_each(self._cards_of(from_player_index), [card])

    def on_card_stolen(self, card: Card, by_player_index: int) -> None:
        """
        Must be called whenever the tracking player has card taken via spy by by_player_index.
        """
        self._cards_of(by_player_index).append(card)

    # --- queries ---

    def unknown_cards(self) -> List[Card]:
        """
        Returns the cards which are not accounted for: unidentified in an opponent's hand or still in the draw pile.
        """
        remaining = list(self.game.full_deck)
        remove_each(remaining, self.get_hand())
        remove_each(remaining, self.game.discard_pile)
        for cards in self._known_cards.values():
            remove_each(remaining, cards)
        return remaining

    def unidentified_count(self, player_index: int) -> int:
        """Number of cards in an opponent's hand whose identity is not known."""
        return max(0, self.game.hand_size(player_index) - len(self._cards_of(player_index)))
