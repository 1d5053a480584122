"""Tests for the quiz, true/false and fill-in-the-blank engines."""

import pytest

from games import GameConfig, TrueFalseConfig
from models import AnswerOutcome, GameMode, SessionPhase
from session import SessionController


class TestQuizEngine:
    """Tests for multiple-choice questions."""

    def test_correct_answer(self, start, controller):
        engine = start(GameMode.QUIZ)
        assert engine.submit(0) == AnswerOutcome.CORRECT
        assert controller.score == 1

    def test_incorrect_answer(self, start, controller):
        engine = start(GameMode.QUIZ)
        assert engine.submit(3) == AnswerOutcome.INCORRECT
        assert controller.score == 0
        assert controller.phase == SessionPhase.ANSWERED

    def test_second_submission_ignored(self, start, controller):
        """Only the first choice for an item counts."""
        engine = start(GameMode.QUIZ)
        engine.submit(3)
        assert engine.submit(0) is None
        assert controller.score == 0
        assert engine.snapshot().selected == 3

    @pytest.mark.parametrize("choice", [-1, 4, True, "A", None, 1.0])
    def test_invalid_choice_ignored(self, start, controller, choice):
        engine = start(GameMode.QUIZ)
        assert engine.submit(choice) is None
        assert controller.phase == SessionPhase.ACTIVE

    def test_answer_hidden_until_submitted(self, start):
        engine = start(GameMode.QUIZ)
        view = engine.snapshot()
        assert view.correct_answer is None
        assert view.outcome is None
        assert "correct_answer" not in view.model_dump(exclude_none=True)

        engine.submit(2)
        view = engine.snapshot()
        assert view.correct_answer == 0
        assert view.selected == 2
        assert view.outcome == AnswerOutcome.INCORRECT

    def test_next_item_resets_selection(self, start, controller):
        engine = start(GameMode.QUIZ)
        engine.submit(0)
        engine.next_item()

        view = engine.snapshot()
        assert view.cursor == 1
        assert view.question == "2 x 3 = ?"
        assert view.selected is None
        assert view.outcome is None

    def test_next_item_before_answer_is_noop(self, start, controller):
        engine = start(GameMode.QUIZ)
        engine.next_item()
        assert controller.cursor == 0

    def test_full_run(self, start, controller):
        """Answering every item completes with one point per correct answer."""
        engine = start(GameMode.QUIZ)
        for choice in (0, 0, 2):
            engine.submit(choice)
            engine.next_item()

        assert controller.phase == SessionPhase.COMPLETE
        assert controller.score == 2
        assert engine.is_complete
        assert engine.submit(0) is None


class TestTrueFalseEngine:
    """Tests for true/false statements."""

    def test_judge_statement(self, start, controller):
        engine = start(GameMode.TRUE_FALSE)
        assert engine.submit(True) == AnswerOutcome.CORRECT
        assert controller.score == 1

    def test_false_statement(self, start, controller, timer):
        engine = start(GameMode.TRUE_FALSE)
        engine.submit(True)
        timer.run_pending()
        assert engine.submit(True) == AnswerOutcome.INCORRECT
        assert engine.snapshot().correct_answer is False

    @pytest.mark.parametrize("choice", [1, 0, "true", None])
    def test_non_bool_ignored(self, start, choice):
        engine = start(GameMode.TRUE_FALSE)
        assert engine.submit(choice) is None

    def test_auto_advance_after_delay(self, start, controller, timer):
        """Feedback stays up for 800 ms, then the next statement appears."""
        engine = start(GameMode.TRUE_FALSE)
        engine.submit(False)

        timer.advance(799)
        assert controller.cursor == 0
        assert controller.phase == SessionPhase.ANSWERED

        timer.advance(1)
        assert controller.cursor == 1
        assert controller.phase == SessionPhase.ACTIVE
        assert engine.snapshot().outcome is None

    def test_manual_advance_cancels_auto_advance(self, start, controller, timer):
        """Skipping the wait does not advance twice."""
        engine = start(GameMode.TRUE_FALSE)
        engine.submit(True)
        engine.next_item()
        assert controller.cursor == 1

        engine.submit(False)
        timer.run_pending()
        assert controller.phase == SessionPhase.COMPLETE
        assert controller.score == 2

    def test_auto_advance_completes_on_last_item(self, start, controller, timer):
        engine = start(GameMode.TRUE_FALSE)
        engine.submit(True)
        timer.run_pending()
        engine.submit(False)
        timer.run_pending()
        assert controller.phase == SessionPhase.COMPLETE
        assert controller.cursor == 1

    def test_auto_advance_disabled(self, batch_for, timer):
        config = GameConfig(true_false=TrueFalseConfig(auto_advance=False))
        controller = SessionController(timer=timer, config=config)
        engine = controller.start(batch_for(GameMode.TRUE_FALSE))
        engine.submit(True)

        assert not timer.has_pending
        assert controller.phase == SessionPhase.ANSWERED

    def test_without_timer_advances_immediately(self, batch_for):
        controller = SessionController()
        engine = controller.start(batch_for(GameMode.TRUE_FALSE))
        assert engine.submit(True) == AnswerOutcome.CORRECT
        assert controller.cursor == 1
        assert controller.phase == SessionPhase.ACTIVE


class TestFillBlankEngine:
    """Tests for fill-in-the-blank sentences."""

    def test_correct_option(self, start, controller):
        engine = start(GameMode.FILL_BLANKS)
        assert engine.submit("1923") == AnswerOutcome.CORRECT
        assert controller.score == 1

    def test_wrong_option(self, start):
        engine = start(GameMode.FILL_BLANKS)
        assert engine.submit("1919") == AnswerOutcome.INCORRECT
        assert engine.snapshot().correct_answer == "1923"

    def test_option_not_offered_is_ignored(self, start, controller):
        engine = start(GameMode.FILL_BLANKS)
        assert engine.submit("1453") is None
        assert engine.submit(1) is None
        assert controller.phase == SessionPhase.ACTIVE

    def test_comparison_is_exact(self, start):
        engine = start(GameMode.FILL_BLANKS)
        assert engine.submit(" 1923") is None

    def test_sentence_parts(self, start):
        """The sentence splits around its single blank."""
        engine = start(GameMode.FILL_BLANKS)
        assert engine.sentence_parts() == ("Cumhuriyet ", " yılında ilan edildi.")

        view = engine.snapshot()
        assert view.before_blank == "Cumhuriyet "
        assert view.after_blank == " yılında ilan edildi."
        assert view.options == ["1919", "1923", "1938"]

    def test_second_item(self, start, controller):
        engine = start(GameMode.FILL_BLANKS)
        engine.submit("1923")
        engine.next_item()
        assert engine.submit("Ankara") == AnswerOutcome.CORRECT
        engine.next_item()
        assert controller.phase == SessionPhase.COMPLETE
        assert controller.score == 2
