import unittest
from collections import Counter

from robopower.core.cards import Card
from robopower.core.config import GameConfig
from robopower.core.engine import GameEngine
from robopower.core.events import DuelResult
from robopower.tracking.card_tracker import CardTracker, UnknownPlayerError, remove_each


def make_engine(hands, num_players=4):
    """Start a game, then replace the dealt hands with fixed ones."""
    engine = GameEngine(GameConfig(num_players=num_players))
    engine.start_game()
    for index, hand in hands.items():
        engine.state.players[index].hand = list(hand)
    return engine


class TestCardTracker(unittest.TestCase):
    """
    Tests for `CardTracker` driven through a real `GameEngine`, tracking from seat 0 in a 4-player game.
    """

    def setUp(self):
        self.engine = make_engine({
            0: [Card.ONE, Card.TWO, Card.THREE],
            1: [Card.FOUR, Card.FOUR, Card.FIVE],
            2: [Card.ONE, Card.ONE, Card.SIX, Card.TRAP],
            3: [Card.SPY, Card.SEVEN],
        })
        self.tracker = CardTracker(self.engine, 0, lambda: self.engine.hand_of(0))

    def known(self, index):
        return Counter(self.tracker.known_cards[index])

    def test_starts_empty_without_tracking_player(self):
        self.assertEqual(self.tracker.known_cards, {1: [], 2: [], 3: []})

    def test_discards_of_unknown_card_are_noops(self):
        self.engine.discard(1, 0)
        self.engine.discard(1, 0)
        self.assertEqual(self.tracker.known_cards[1], [])

    def test_discard_removes_one_known_copy(self):
        self.engine.resolve_duel(DuelResult(retained_cards={1: [Card.FOUR, Card.FOUR]}))
        self.engine.discard(1, 0)
        self.assertEqual(self.tracker.known_cards[1], [Card.FOUR])

    def test_tracking_player_discard_is_ignored(self):
        self.engine.discard(0, 0)
        self.assertEqual(self.tracker.known_cards, {1: [], 2: [], 3: []})

    def test_retained_cards_become_known(self):
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE, Card.ONE, Card.SIX]}))
        self.assertEqual(self.known(2), Counter({Card.ONE: 2, Card.SIX: 1}))

    def test_retaining_known_cards_adds_nothing(self):
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE, Card.ONE, Card.SIX]}))
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE]}))
        self.assertEqual(self.known(2), Counter({Card.ONE: 2, Card.SIX: 1}))

    def test_retaining_more_copies_adds_only_the_excess(self):
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE]}))
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE, Card.ONE]}))
        self.assertEqual(self.tracker.known_cards[2], [Card.ONE, Card.ONE])

    def test_tracking_player_retained_cards_are_ignored(self):
        self.engine.resolve_duel(DuelResult(retained_cards={0: [Card.ONE]}))
        self.assertNotIn(0, self.tracker.known_cards)

    def test_duel_discards_apply_before_retentions(self):
        self.engine.resolve_duel(DuelResult(
            discarded_cards={1: [Card.FOUR]},
            retained_cards={1: [Card.FOUR]},
        ))
        self.assertEqual(self.tracker.known_cards[1], [Card.FOUR])

    def test_trap_moves_card_between_opponents(self):
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE, Card.ONE, Card.SIX]}))
        self.engine.resolve_duel(DuelResult(
            discarded_cards={3: [Card.SPY]},
            trapped_cards={3: {2: [Card.SIX]}},
        ))
        self.assertEqual(self.known(2), Counter({Card.ONE: 2}))
        self.assertEqual(self.tracker.known_cards[3], [Card.SIX])

    def test_trap_from_tracking_player_is_added_to_trapper(self):
        self.engine.resolve_duel(DuelResult(trapped_cards={2: {0: [Card.ONE]}}))
        self.assertEqual(self.tracker.known_cards[2], [Card.ONE])

    def test_trap_by_tracking_player_only_removes_from_victim(self):
        self.engine.resolve_duel(DuelResult(retained_cards={1: [Card.FIVE]}))
        self.engine.resolve_duel(DuelResult(trapped_cards={0: {1: [Card.FIVE]}}))
        self.assertEqual(self.tracker.known_cards[1], [])
        self.assertNotIn(0, self.tracker.known_cards)

    def test_spy_of_last_known_card_moves_it(self):
        self.engine.state.players[3].hand = [Card.SEVEN]
        self.engine.resolve_duel(DuelResult(retained_cards={3: [Card.SEVEN]}))
        self.engine.spy(1, 3)
        self.assertEqual(self.tracker.known_cards[1], [Card.SEVEN])
        self.assertEqual(self.tracker.known_cards[3], [])

    def test_spy_of_last_unknown_card_learns_nothing(self):
        self.engine.state.players[3].hand = [Card.SEVEN]
        self.engine.spy(1, 3)
        self.assertEqual(self.tracker.known_cards[1], [])
        self.assertEqual(self.tracker.known_cards[3], [])

    def test_spy_clears_spied_player(self):
        self.engine.resolve_duel(DuelResult(retained_cards={2: [Card.ONE, Card.ONE, Card.SIX]}))
        self.engine.spy(1, 2)
        self.assertEqual(self.tracker.known_cards[2], [])
        self.assertEqual(self.tracker.known_cards[1], [])

    def test_spy_involving_tracking_player_waits_for_callbacks(self):
        self.engine.resolve_duel(DuelResult(retained_cards={1: [Card.FIVE]}))
        card = self.engine.spy(0, 1, card_index=2)
        self.assertEqual(card, Card.FIVE)
        self.assertEqual(self.tracker.known_cards[1], [Card.FIVE])
        self.tracker.on_receive_spy_card(card, 1)
        self.assertEqual(self.tracker.known_cards[1], [])

    def test_card_stolen_adds_to_thief(self):
        self.tracker.on_card_stolen(Card.TWO, 3)
        self.assertEqual(self.tracker.known_cards[3], [Card.TWO])

    def test_reshuffle_one_on_one_reveals_opponent(self):
        for index in (2, 3):
            self.engine.state.players[index].hand = []
            self.engine.state.players[index].active = False
        self.engine.state.deck.draw_pile = []
        self.engine.state.deck.discard_pile = [Card.NINE, Card.TRAP]
        self.engine.draw(1)
        self.assertEqual(self.known(1), Counter([Card.NINE, Card.TRAP, Card.ONE, Card.TWO, Card.THREE]))

    def test_reshuffle_with_several_opponents_is_ignored(self):
        self.engine.resolve_duel(DuelResult(retained_cards={1: [Card.FIVE]}))
        self.engine.state.deck.draw_pile = []
        self.engine.state.deck.discard_pile = [Card.NINE]
        self.engine.draw(1)
        self.assertEqual(self.tracker.known_cards, {1: [Card.FIVE], 2: [], 3: []})

    def test_unknown_cards_excludes_everything_accounted_for(self):
        engine = GameEngine(GameConfig(num_players=4, rng_seed=3))
        engine.start_game()
        tracker = CardTracker(engine, 0, lambda: engine.hand_of(0))
        engine.discard(1, 0)
        engine.resolve_duel(DuelResult(retained_cards={2: engine.hand_of(2)[:2]}))
        engine.discard(0, 0)

        unknown = tracker.unknown_cards()
        known_total = sum(len(cards) for cards in tracker.known_cards.values())
        self.assertEqual(
            len(unknown),
            len(engine.full_deck) - len(engine.hand_of(0)) - len(engine.discard_pile) - known_total,
        )
        expected = Counter(engine.full_deck)
        expected.subtract(engine.hand_of(0))
        expected.subtract(engine.discard_pile)
        for cards in tracker.known_cards.values():
            expected.subtract(cards)
        self.assertEqual(Counter(unknown), +expected)

    def test_unknown_cards_has_no_side_effects(self):
        before = self.tracker.known_cards
        self.tracker.unknown_cards()
        self.tracker.unknown_cards()
        self.assertEqual(self.tracker.known_cards, before)

    def test_known_cards_is_a_copy(self):
        view = self.tracker.known_cards
        view[1].append(Card.NINE)
        view[9] = [Card.ONE]
        self.assertEqual(self.tracker.known_cards, {1: [], 2: [], 3: []})

    def test_lookup_of_untracked_index_fails(self):
        with self.assertRaises(UnknownPlayerError):
            self.tracker.on_card_stolen(Card.ONE, 0)
        with self.assertRaises(KeyError):
            self.tracker.on_receive_spy_card(Card.ONE, 7)

    def test_tracking_index_out_of_range_fails(self):
        with self.assertRaises(UnknownPlayerError):
            CardTracker(self.engine, 4, lambda: [])


class TestFollowSpyTransfers(unittest.TestCase):
    """
    A tracker built with follow_spy_transfers=True applies the private spy events itself.
    """

    def test_spy_transfers_are_applied_from_events(self):
        engine = make_engine({
            0: [Card.ONE, Card.TWO, Card.THREE],
            1: [Card.FOUR, Card.FOUR, Card.FIVE],
        }, num_players=3)
        tracker = CardTracker(engine, 0, lambda: engine.hand_of(0), follow_spy_transfers=True)
        engine.resolve_duel(DuelResult(retained_cards={1: [Card.FIVE]}))

        engine.spy(0, 1, card_index=2)
        self.assertEqual(tracker.known_cards[1], [])

        engine.spy(1, 0, card_index=0)
        self.assertEqual(tracker.known_cards[1], [Card.ONE])

    def test_transfers_between_other_players_are_ignored(self):
        engine = make_engine({1: [Card.FOUR], 2: [Card.SIX, Card.SEVEN]}, num_players=3)
        tracker = CardTracker(engine, 0, lambda: engine.hand_of(0), follow_spy_transfers=True)
        engine.spy(1, 2, card_index=0)
        self.assertEqual(tracker.known_cards, {1: [], 2: []})

    def test_manual_tracker_ignores_transfer_events(self):
        engine = make_engine({0: [Card.ONE], 1: [Card.FOUR, Card.FIVE]}, num_players=3)
        tracker = CardTracker(engine, 0, lambda: engine.hand_of(0))
        engine.spy(1, 0, card_index=0)
        self.assertEqual(tracker.known_cards[1], [])


class TestRemoveEach(unittest.TestCase):
    def test_removes_one_copy_per_element(self):
        cards = [Card.ONE, Card.ONE, Card.TWO]
        remove_each(cards, [Card.ONE, Card.THREE])
        self.assertEqual(cards, [Card.ONE, Card.TWO])


if __name__ == '__main__':
    unittest.main()
