"""Tests for the flip-card memory engine."""

from games import FlipResult
from games.memory import CardFace, build_deck
from models import GameMode, SessionPhase

# With identity shuffles the deck is laid out as
# 0: p1-term  1: p1-def  2: p2-term  3: p2-def  4: p3-term  5: p3-def


class TestDeck:
    """Tests for building the card deck."""

    def test_two_cards_per_pair(self, batch_for):
        deck = build_deck(batch_for(GameMode.MEMORY).items)
        assert [card.uid for card in deck] == [
            "p1-term",
            "p1-def",
            "p2-term",
            "p2-def",
            "p3-term",
            "p3-def",
        ]
        assert deck[0].face == CardFace.TERM
        assert deck[1].face == CardFace.DEF
        assert deck[1].content == "Enerji üretir"

    def test_cards_start_face_down(self, start):
        engine = start(GameMode.MEMORY)
        view = engine.snapshot()
        assert len(view.cards) == 6
        assert all(card.content is None for card in view.cards)
        assert view.moves == 0


class TestFlip:
    """Tests for flipping cards."""

    def test_first_flip_reveals(self, start):
        engine = start(GameMode.MEMORY)
        assert engine.flip(0) == FlipResult.FLIPPED
        view = engine.snapshot()
        assert view.cards[0].content == "Mitokondri"
        assert view.moves == 0

    def test_flip_same_card_twice_ignored(self, start):
        engine = start(GameMode.MEMORY)
        engine.flip(0)
        assert engine.flip(0) == FlipResult.IGNORED
        assert engine.flipped == [0]

    def test_out_of_range_ignored(self, start):
        engine = start(GameMode.MEMORY)
        assert engine.flip(6) == FlipResult.IGNORED
        assert engine.flip(-1) == FlipResult.IGNORED

    def test_match_resolves_after_delay(self, start, timer):
        """A matching pair stays face up and is marked matched after 500 ms."""
        engine = start(GameMode.MEMORY)
        engine.flip(0)
        assert engine.flip(1) == FlipResult.MATCH
        assert engine.moves == 1
        assert engine.processing

        timer.advance(500)
        assert not engine.processing
        assert engine.cards[0].is_matched
        assert engine.cards[1].is_matched
        assert engine.matched_pairs == 1

    def test_mismatch_flips_back_after_delay(self, start, timer):
        engine = start(GameMode.MEMORY)
        engine.flip(0)
        assert engine.flip(3) == FlipResult.MISMATCH

        timer.advance(999)
        assert engine.cards[0].is_flipped
        assert engine.processing

        timer.advance(1)
        assert not engine.cards[0].is_flipped
        assert not engine.cards[3].is_flipped
        assert not engine.processing
        assert engine.matched_pairs == 0

    def test_board_locked_while_processing(self, start, timer):
        """A third flip during resolution is ignored."""
        engine = start(GameMode.MEMORY)
        engine.flip(0)
        engine.flip(3)
        assert engine.flip(4) == FlipResult.IGNORED
        assert not engine.cards[4].is_flipped

        timer.run_pending()
        assert engine.flip(4) == FlipResult.FLIPPED

    def test_matched_card_ignored(self, start, timer):
        engine = start(GameMode.MEMORY)
        engine.flip(0)
        engine.flip(1)
        timer.run_pending()
        assert engine.flip(0) == FlipResult.IGNORED

    def test_moves_count_attempts(self, start, timer):
        engine = start(GameMode.MEMORY)
        for first, second in ((0, 3), (0, 1), (2, 5)):
            engine.flip(first)
            engine.flip(second)
            timer.run_pending()
        assert engine.moves == 3


class TestCompletion:
    """Tests for clearing the board."""

    def test_all_pairs_complete_round(self, start, controller, timer):
        engine = start(GameMode.MEMORY)
        for first, second in ((0, 1), (2, 3), (4, 5)):
            engine.flip(first)
            engine.flip(second)
            timer.run_pending()

        assert engine.all_matched
        assert controller.phase == SessionPhase.COMPLETE
        assert controller.score == 3
        assert engine.flip(0) == FlipResult.IGNORED

    def test_not_complete_before_last_match_resolves(self, start, controller, timer):
        engine = start(GameMode.MEMORY)
        for first, second in ((0, 1), (2, 3), (4, 5)):
            engine.flip(first)
            engine.flip(second)
            if first != 4:
                timer.run_pending()
        assert controller.phase == SessionPhase.ACTIVE

        timer.run_pending()
        assert controller.phase == SessionPhase.COMPLETE
