"""Single-shot answer engines: quiz, true/false and fill-in-the-blank.

All three share one shape. The player submits exactly one choice per item,
the engine evaluates it by exact match, reports the outcome to the session
and only then reveals the correct answer.
"""

from abc import abstractmethod
from typing import Any, TypeVar

from loguru import logger

from games.base import EngineView, GameEngine
from games.timers import ScheduledCall
from models import (
    BLANK_PLACEHOLDER,
    AnswerOutcome,
    ContentItem,
    FillBlankItem,
    GameMode,
    QuizItem,
    SessionPhase,
    TrueFalseItem,
)

I = TypeVar("I", bound=ContentItem)


class ChoiceEngine(GameEngine[I]):
    """Shared submit/next cycle for single-shot engines."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.selected: Any = None
        self.outcome: AnswerOutcome | None = None
        self._pending_advance: ScheduledCall | None = None

    def prepare_item(self) -> None:
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None
        self.selected = None
        self.outcome = None

    @property
    def is_answered(self) -> bool:
        return self.outcome is not None

    @abstractmethod
    def is_valid_choice(self, choice: Any) -> bool:
        """Return True if choice is something the player could have picked."""
        ...

    @abstractmethod
    def is_correct_choice(self, choice: Any) -> bool:
        ...

    @abstractmethod
    def correct_choice(self) -> Any:
        ...

    def submit(self, choice: Any) -> AnswerOutcome | None:
        """Submit the player's choice for the current item.

        Returns:
            The outcome, or None if the submission was ignored (already
            answered, session not active, or not a valid choice).
        """
        if self.is_answered or self.session.phase != SessionPhase.ACTIVE:
            logger.debug("Ignoring {} submission: item already answered", self.mode.value)
            return None
        if not self.is_valid_choice(choice):
            logger.debug("Ignoring invalid {} choice {!r}", self.mode.value, choice)
            return None

        outcome = (
            AnswerOutcome.CORRECT
            if self.is_correct_choice(choice)
            else AnswerOutcome.INCORRECT
        )
        self.selected = choice
        self.outcome = outcome
        self.session.record_answer(outcome)
        self.after_submit()
        return outcome

    def after_submit(self) -> None:
        """Hook run once the outcome has been recorded."""
        pass

    def next_item(self) -> None:
        """Move on after feedback has been shown."""
        if self.session.phase == SessionPhase.ANSWERED:
            self.session.advance()

    def revealed_answer(self) -> Any:
        """The correct answer, available only after submission."""
        return self.correct_choice() if self.is_answered else None


class QuizView(EngineView):
    cursor: int
    question: str
    options: list[str]
    selected: int | None = None
    correct_answer: int | None = None
    outcome: AnswerOutcome | None = None


class QuizEngine(ChoiceEngine[QuizItem]):
    """Multiple choice: pick the index of the correct option."""

    mode = GameMode.QUIZ

    def is_valid_choice(self, choice: Any) -> bool:
        return (
            isinstance(choice, int)
            and not isinstance(choice, bool)
            and 0 <= choice < len(self.current_item.options)
        )

    def is_correct_choice(self, choice: int) -> bool:
        return choice == self.current_item.correct_answer

    def correct_choice(self) -> int:
        return self.current_item.correct_answer

    def snapshot(self) -> QuizView:
        item = self.current_item
        return QuizView(
            **self._view_fields(),
            cursor=self.session.cursor,
            question=item.question,
            options=list(item.options),
            selected=self.selected,
            correct_answer=self.revealed_answer(),
            outcome=self.outcome,
        )


class TrueFalseView(EngineView):
    cursor: int
    statement: str
    selected: bool | None = None
    correct_answer: bool | None = None
    outcome: AnswerOutcome | None = None


class TrueFalseEngine(ChoiceEngine[TrueFalseItem]):
    """Judge a statement as true or false.

    After feedback the engine moves on by itself once the configured delay
    has passed; next_item() is still accepted to skip the wait.
    """

    mode = GameMode.TRUE_FALSE

    def is_valid_choice(self, choice: Any) -> bool:
        return isinstance(choice, bool)

    def is_correct_choice(self, choice: bool) -> bool:
        return choice == self.current_item.is_true

    def correct_choice(self) -> bool:
        return self.current_item.is_true

    def after_submit(self) -> None:
        if self.config is None or not self.config.auto_advance:
            return
        cursor = self.session.cursor

        def _advance() -> None:
            self._pending_advance = None
            if self.session.cursor == cursor:
                self.next_item()

        self._pending_advance = self.schedule(self.config.feedback_delay_ms, _advance)

    def snapshot(self) -> TrueFalseView:
        return TrueFalseView(
            **self._view_fields(),
            cursor=self.session.cursor,
            statement=self.current_item.statement,
            selected=self.selected,
            correct_answer=self.revealed_answer(),
            outcome=self.outcome,
        )


class FillBlankView(EngineView):
    cursor: int
    sentence: str
    before_blank: str
    after_blank: str
    options: list[str]
    selected: str | None = None
    correct_answer: str | None = None
    outcome: AnswerOutcome | None = None


class FillBlankEngine(ChoiceEngine[FillBlankItem]):
    """Complete a sentence by picking the option that fills its blank."""

    mode = GameMode.FILL_BLANKS

    def is_valid_choice(self, choice: Any) -> bool:
        return isinstance(choice, str) and choice in self.current_item.options

    def is_correct_choice(self, choice: str) -> bool:
        return choice == self.current_item.correct_answer

    def correct_choice(self) -> str:
        return self.current_item.correct_answer

    def sentence_parts(self) -> tuple[str, str]:
        """Split the sentence around its blank."""
        before, _, after = self.current_item.sentence.partition(BLANK_PLACEHOLDER)
        return before, after

    def snapshot(self) -> FillBlankView:
        item = self.current_item
        before, after = self.sentence_parts()
        return FillBlankView(
            **self._view_fields(),
            cursor=self.session.cursor,
            sentence=item.sentence,
            before_blank=before,
            after_blank=after,
            options=list(item.options),
            selected=self.selected,
            correct_answer=self.revealed_answer(),
            outcome=self.outcome,
        )
