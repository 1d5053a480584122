from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

BLANK_PLACEHOLDER = "___"


class GameMode(str, Enum):
    QUIZ = "QUIZ"
    MATCHING = "MATCHING"
    TRUE_FALSE = "TRUE_FALSE"
    WORD_SCRAMBLE = "WORD_SCRAMBLE"
    FILL_BLANKS = "FILL_BLANKS"
    MEMORY = "MEMORY"
    SORTING = "SORTING"


class GradeLevel(str, Enum):
    GRADE_5 = "5. Sınıf"
    GRADE_6 = "6. Sınıf"
    GRADE_7 = "7. Sınıf"
    GRADE_8 = "8. Sınıf"


class GenerationRequest(BaseModel):
    """One content request sent to the generator when a session starts."""

    grade: GradeLevel = GradeLevel.GRADE_5
    subject: str
    topic: str = Field(min_length=1)
    mode: GameMode

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("topic must not be blank")
        return value


# ============================================================================
# Content Items
# ============================================================================


class ContentItem(BaseModel):
    """Base class for generated items.

    Items are frozen once validated and accept the camelCase names the
    generator emits (``correctAnswer``, ``isTrue``, ``orderIndex``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class QuizItem(ContentItem):
    question: str
    options: list[str]
    correct_answer: int = Field(alias="correctAnswer")


class PairItem(ContentItem):
    """A term/definition pair, shared by the matching and memory games."""

    id: str
    term: str
    definition: str


class TrueFalseItem(ContentItem):
    statement: str
    is_true: bool = Field(alias="isTrue")


class WordItem(ContentItem):
    word: str
    hint: str


class FillBlankItem(ContentItem):
    sentence: str  # Contains exactly one "___" marker
    correct_answer: str = Field(alias="correctAnswer")
    options: list[str]


class SortItem(ContentItem):
    id: str
    content: str
    order_index: int = Field(alias="orderIndex")


Item = Union[QuizItem, PairItem, TrueFalseItem, WordItem, FillBlankItem, SortItem]

ITEM_TYPES: dict[GameMode, type[ContentItem]] = {
    GameMode.QUIZ: QuizItem,
    GameMode.MATCHING: PairItem,
    GameMode.MEMORY: PairItem,
    GameMode.TRUE_FALSE: TrueFalseItem,
    GameMode.WORD_SCRAMBLE: WordItem,
    GameMode.FILL_BLANKS: FillBlankItem,
    GameMode.SORTING: SortItem,
}


class ContentBatch(BaseModel):
    """A validated, immutable set of items for a single game round."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    mode: GameMode
    items: tuple[Item, ...]


# ============================================================================
# Session Models
# ============================================================================


class SessionPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"
    ANSWERED = "answered"
    COMPLETE = "complete"
    ERROR = "error"


class AnswerOutcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


class SessionState(BaseModel):
    """Tracks the progress of one game run over one batch."""

    items: tuple[Item, ...]
    cursor: int = 0
    score: int = 0
    phase: SessionPhase = SessionPhase.ACTIVE

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def is_last_item(self) -> bool:
        return self.cursor >= len(self.items) - 1
