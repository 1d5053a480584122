"""Abstract base class and shared utilities for game engines."""

import random
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Protocol, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from games.timers import ScheduledCall, TimerService
from models import AnswerOutcome, ContentItem, GameMode, SessionPhase

I = TypeVar("I", bound=ContentItem)
T = TypeVar("T")


class AnswerRecorder(Protocol):
    """The part of the session controller an engine is allowed to drive."""

    @property
    def phase(self) -> SessionPhase: ...

    @property
    def score(self) -> int: ...

    @property
    def cursor(self) -> int: ...

    def record_answer(self, outcome: AnswerOutcome) -> None: ...

    def advance(self) -> None: ...

    def complete_round(self, score: int) -> None: ...


class EngineView(BaseModel):
    """Fields shared by every engine snapshot."""

    model_config = ConfigDict(frozen=True)

    mode: GameMode
    phase: SessionPhase
    score: int
    total: int


class GameEngine(ABC, Generic[I]):
    """Abstract base class for game engines.

    Each game mode implements this interface to provide:
    - Per-item (or per-board) interaction state
    - Mode-specific actions (submit, select, flip, move, swap)
    - A read-only snapshot for the presentation layer

    To add a new game mode:
    1. Add the mode to GameMode and its item model to ITEM_TYPES in models.py
    2. Create an engine class extending GameEngine[YourItemModel]
    3. Register it in ENGINE_REGISTRY in games/__init__.py
    """

    mode: ClassVar[GameMode]

    def __init__(
        self,
        session: AnswerRecorder,
        items: Sequence[I],
        rng: random.Random | None = None,
        timer: TimerService | None = None,
        config: Any = None,
    ):
        """Initialize engine state for a freshly started session.

        Args:
            session: Controller that owns score, cursor and phase.
            items: Validated items of the batch, in generated order.
            rng: Random source for shuffles. Defaults to a new Random().
            timer: Timer service for delayed transitions.
            config: Mode-specific configuration block.
        """
        self.session = session
        self.items = tuple(items)
        self.rng = rng or random.Random()
        self.timer = timer
        self.config = config

    def prepare_item(self) -> None:
        """Rebuild per-item interaction state.

        Called by the controller after start and after every advance.
        Board engines build their whole board once and keep this a no-op.
        """
        pass

    @property
    def current_item(self) -> I:
        return self.items[self.session.cursor]

    @property
    def is_complete(self) -> bool:
        return self.session.phase == SessionPhase.COMPLETE

    def schedule(self, delay_ms: int, callback) -> ScheduledCall | None:
        """Schedule a delayed transition, or run it now without a timer."""
        if self.timer is None:
            callback()
            return None
        return self.timer.call_later(delay_ms, callback)

    def _view_fields(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "phase": self.session.phase,
            "score": self.session.score,
            "total": len(self.items),
        }

    @abstractmethod
    def snapshot(self) -> BaseModel:
        """Return a read-only view of the current item or board."""
        ...


def shuffled(rng: random.Random, values: Sequence[T]) -> list[T]:
    """Return a uniformly shuffled copy of values using the given source."""
    result = list(values)
    rng.shuffle(result)
    return result


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-F) or number (1-6) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index
