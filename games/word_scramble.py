"""Word scramble game: rebuild a word from its shuffled letters.

The target word is exploded into letter tokens. Each token keeps a stable id
(its position in the word) so repeated letters stay individually movable.
Tokens start in a shuffled bank; the player moves them one at a time onto the
end of the assembly, or back from the assembly onto the end of the bank.
Bank and assembly always partition the word's letters between them.
"""

from loguru import logger
from pydantic import BaseModel, ConfigDict

from games.base import EngineView, GameEngine, shuffled
from games.timers import ScheduledCall
from models import AnswerOutcome, GameMode, SessionPhase, WordItem


class LetterToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    letter: str


class WordScrambleView(EngineView):
    cursor: int
    hint: str
    word_length: int
    bank: list[LetterToken]
    assembly: list[LetterToken]
    can_check: bool
    feedback: AnswerOutcome | None
    revealed_word: str | None


def explode_word(word: str) -> list[LetterToken]:
    return [LetterToken(id=index, letter=letter) for index, letter in enumerate(word)]


class WordScrambleEngine(GameEngine[WordItem]):
    """Multiset-to-sequence assembly engine."""

    mode = GameMode.WORD_SCRAMBLE

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.bank: list[LetterToken] = []
        self.assembly: list[LetterToken] = []
        self.feedback: AnswerOutcome | None = None
        self.revealed = False
        self._pending: list[ScheduledCall] = []
        self._wrong_feedback: ScheduledCall | None = None

    def prepare_item(self) -> None:
        for call in self._pending:
            call.cancel()
        self._pending = []
        self._wrong_feedback = None
        self.bank = shuffled(self.rng, explode_word(self.current_item.word))
        self.assembly = []
        self.feedback = None
        self.revealed = False

    @property
    def target(self) -> str:
        return self.current_item.word

    @property
    def assembled_word(self) -> str:
        return "".join(token.letter for token in self.assembly)

    @property
    def is_locked(self) -> bool:
        """True once the current item is solved or skipped."""
        return self.session.phase != SessionPhase.ACTIVE

    @property
    def can_check(self) -> bool:
        return not self.is_locked and len(self.assembly) == len(self.target)

    def move_to_assembly(self, token_id: int) -> bool:
        """Move a token from the bank onto the end of the assembly."""
        return self._move(token_id, self.bank, self.assembly)

    def move_to_bank(self, token_id: int) -> bool:
        """Move a token from the assembly back onto the end of the bank."""
        return self._move(token_id, self.assembly, self.bank)

    def _move(
        self,
        token_id: int,
        source: list[LetterToken],
        destination: list[LetterToken],
    ) -> bool:
        if self.is_locked:
            return False
        token = next((t for t in source if t.id == token_id), None)
        if token is None:
            logger.debug("Ignoring move of token {} not in source", token_id)
            return False
        source.remove(token)
        destination.append(token)
        if self.feedback == AnswerOutcome.INCORRECT:
            self.feedback = None
        return True

    def reshuffle_bank(self) -> None:
        """Re-randomize the bank order without touching the assembly."""
        if not self.is_locked:
            self.rng.shuffle(self.bank)

    def check_answer(self) -> bool | None:
        """Compare the assembled letters with the target word.

        Returns:
            True on success, False on a wrong arrangement (the assembly is
            left as it is), or None if checking is not enabled yet.
        """
        if not self.can_check:
            return None

        if self.assembled_word != self.target:
            self.feedback = AnswerOutcome.INCORRECT
            # A repeated wrong check restarts the feedback window
            if self._wrong_feedback is not None:
                self._wrong_feedback.cancel()
            self._wrong_feedback = self.schedule(
                self.config.wrong_feedback_ms if self.config else 0,
                self._clear_wrong_feedback,
            )
            self._track(self._wrong_feedback)
            return False

        self.feedback = AnswerOutcome.CORRECT
        self.session.record_answer(AnswerOutcome.CORRECT)
        self._schedule_advance()
        return True

    def skip(self) -> bool:
        """Give up on the current word: reveal it and count it as missed."""
        if self.is_locked:
            return False
        self.revealed = True
        self.feedback = AnswerOutcome.INCORRECT
        self.session.record_answer(AnswerOutcome.INCORRECT)
        self._schedule_advance()
        return True

    def _clear_wrong_feedback(self) -> None:
        if self.feedback == AnswerOutcome.INCORRECT and not self.is_locked:
            self.feedback = None

    def _schedule_advance(self) -> None:
        cursor = self.session.cursor

        def _advance() -> None:
            if self.session.cursor == cursor:
                self.session.advance()

        self._track(
            self.schedule(self.config.advance_delay_ms if self.config else 0, _advance)
        )

    def _track(self, call: ScheduledCall | None) -> None:
        self._pending = [c for c in self._pending if c.pending]
        if call is not None and call.pending:
            self._pending.append(call)

    def snapshot(self) -> WordScrambleView:
        return WordScrambleView(
            **self._view_fields(),
            cursor=self.session.cursor,
            hint=self.current_item.hint,
            word_length=len(self.target),
            bank=list(self.bank),
            assembly=list(self.assembly),
            can_check=self.can_check,
            feedback=self.feedback,
            revealed_word=self.target if self.revealed else None,
        )
