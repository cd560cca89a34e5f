import random

from . import register_agent
from .base import Player, PlayerWithCardTracker


@register_agent("random")
class RandomPlayer(Player):
    """
    Plays uniformly at random: a random card to discard, a random card in duels, and a random active opponent to spy.
    """
    def __init__(self, player_index, engine, rng=None):
        """
        Args:
            rng: Optional random number generator.
        """
        super().__init__(player_index, engine)
        self.rng = rng or random.Random()

    def choose_discard(self):
        return self.rng.randrange(len(self.hand))

    def choose_duel_card(self, involved_players, previous_rounds):
        return self.rng.randrange(len(self.hand))

    def choose_spy_target(self):
        return self.rng.choice(self.opponents())


@register_agent("random_tracking")
class RandomTrackingPlayer(PlayerWithCardTracker):
    """
    Plays cards at random like RandomPlayer, but spies the opponent holding the most cards it cannot identify,
    since a spy on a fully known hand teaches nothing new. Ties are broken at random.
    """
    def __init__(self, player_index, engine, rng=None):
        super().__init__(player_index, engine)
        self.rng = rng or random.Random()

    def choose_discard(self):
        return self.rng.randrange(len(self.hand))

    def choose_duel_card(self, involved_players, previous_rounds):
        return self.rng.randrange(len(self.hand))

    def choose_spy_target(self):
        opponents = self.opponents()
        unidentified = {p: self.card_tracker.unidentified_count(p) for p in opponents}
        most = max(unidentified.values())
        return self.rng.choice([p for p in opponents if unidentified[p] == most])
