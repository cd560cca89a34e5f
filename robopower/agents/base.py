from abc import ABC, abstractmethod
from typing import List, Sequence, Set

from ..core.cards import Card
from ..tracking.card_tracker import CardTracker


class Player(ABC):
    """
    Abstract base class for all Robo Power players.
    A player is seated at construction; the engine then delivers the private spy callbacks to it.
    Subclasses implement the three decisions a player makes on its own turn.
    """

    def __init__(self, player_index: int, engine):
        self.player_index = player_index
        self.engine = engine
        engine.register_player(self)

    @property
    def hand(self) -> List[Card]:
        """A snapshot of this player's current hand."""
        return self.engine.hand_of(self.player_index)

    def opponents(self) -> List[int]:
        """Indices of the other players still in the game."""
        return [p.player_id for p in self.engine.active_players if p.player_id != self.player_index]

    @abstractmethod
    def choose_discard(self) -> int:
        """
        Returns:
            int: Index in hand of the card to discard at the start of the turn.
        """
        raise NotImplementedError

    @abstractmethod
    def choose_duel_card(self, involved_players: Set[int], previous_rounds: Sequence) -> int:
        """
        Args:
            involved_players (set[int]): Everyone taking part in this duel round.
            previous_rounds (list): Rounds already played in this duel (ties replay).
        Returns:
            int: Index in hand of the card to play.
        """
        raise NotImplementedError

    @abstractmethod
    def choose_spy_target(self) -> int:
        """
        Returns:
            int: Index of the active opponent to take a card from.
        """
        raise NotImplementedError

    def on_receive_spy_card(self, card: Card, from_player_index: int) -> None:
        """Called by the engine when this player takes card from from_player_index via spy."""
        pass

    def on_card_stolen(self, card: Card, by_player_index: int) -> None:
        """Called by the engine when by_player_index takes card from this player via spy."""
        pass


class PlayerWithCardTracker(Player):
    """
    A Player which keeps a CardTracker and forwards the spy callbacks to it.
    Must be constructed before the game starts so the tracker sees every event.
    """

    def __init__(self, player_index: int, engine):
        super().__init__(player_index, engine)
        self.card_tracker = CardTracker(engine, player_index, lambda: self.hand)

    def on_receive_spy_card(self, card: Card, from_player_index: int) -> None:
        self.card_tracker.on_receive_spy_card(card, from_player_index)

    def on_card_stolen(self, card: Card, by_player_index: int) -> None:
        self.card_tracker.on_card_stolen(card, by_player_index)
