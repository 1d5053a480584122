"""Session controller: the lifecycle of one game run.

The controller owns the validated batch, the cursor, the aggregate score and
the phase. It picks the engine for the batch's mode and hands the engine a
narrow recorder interface (record_answer / advance / complete_round); all
other interaction state lives in the engine.

Phases:
    IDLE      back at configuration, no session
    LOADING   a generation request is outstanding
    ACTIVE    waiting for the player's answer on the current item or board
    ANSWERED  the current item has been answered, waiting to advance
    COMPLETE  the run is over
    ERROR     the last start failed; the previous session, if any, is kept
"""

import random

from loguru import logger
from pydantic import BaseModel, ConfigDict

from games import ENGINE_REGISTRY, GameConfig, GameEngine, get_mode_config
from games.errors import GenerationFailure, SessionStartError, UnsupportedMode
from games.timers import TimerService
from games.validator import ContentValidator
from generator.base import ContentGenerator
from models import (
    AnswerOutcome,
    ContentBatch,
    GameMode,
    GenerationRequest,
    Item,
    SessionPhase,
    SessionState,
)


class SessionSummary(BaseModel):
    """Final report of a game run."""

    model_config = ConfigDict(frozen=True)

    title: str
    mode: GameMode
    score: int
    total: int
    is_complete: bool

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return self.score / self.total * 100


class SessionController:
    """Drives one game run at a time."""

    def __init__(
        self,
        rng: random.Random | None = None,
        timer: TimerService | None = None,
        config: GameConfig | None = None,
    ):
        self.rng = rng or random.Random()
        self.timer = timer
        self.config = config or GameConfig()
        self.batch: ContentBatch | None = None
        self.state: SessionState | None = None
        self.engine: GameEngine | None = None
        self.last_error: SessionStartError | None = None
        # IDLE/LOADING/ERROR shadow the running state's phase while set
        self._status: SessionPhase | None = None

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        if self._status is not None:
            return self._status
        if self.state is None:
            return SessionPhase.IDLE
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score if self.state else 0

    @property
    def cursor(self) -> int:
        return self.state.cursor if self.state else 0

    @property
    def total(self) -> int:
        return self.state.total if self.state else 0

    @property
    def current_item(self) -> Item | None:
        if self.state is None:
            return None
        return self.state.items[self.state.cursor]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, batch: ContentBatch) -> GameEngine:
        """Install a validated batch and build the engine for its mode.

        Raises:
            UnsupportedMode: If no engine is registered for the batch's mode.
        """
        engine_class = ENGINE_REGISTRY.get(batch.mode)
        if engine_class is None:
            raise UnsupportedMode(f"No game engine for mode {batch.mode!r}")

        if self.timer is not None:
            self.timer.cancel_all()

        self.batch = batch
        self.state = SessionState(items=batch.items)
        self._status = None
        self.last_error = None
        self.engine = engine_class(
            self,
            batch.items,
            rng=self.rng,
            timer=self.timer,
            config=get_mode_config(self.config, batch.mode),
        )
        self.engine.prepare_item()
        logger.info(
            "Started {} session {!r} with {} items",
            batch.mode.value,
            batch.title,
            len(batch.items),
        )
        return self.engine

    def begin(
        self,
        request: GenerationRequest,
        generator: ContentGenerator,
        validator: ContentValidator | None = None,
    ) -> GameEngine:
        """Generate, validate and start a batch for a request.

        On failure the controller moves to ERROR, remembers the error and
        keeps the previous session untouched, then re-raises.

        Raises:
            SessionStartError: Generation, validation or engine selection
                failed. Any other exception from the generator is wrapped
                in GenerationFailure.
        """
        validator = validator or ContentValidator()
        self._status = SessionPhase.LOADING
        logger.info(
            "Requesting {} batch on {!r} ({})",
            request.mode.value,
            request.topic,
            request.subject,
        )
        try:
            raw = generator.generate(request)
            batch = validator.validate(raw, request.mode)
            return self.start(batch)
        except SessionStartError as e:
            self._fail(request, e)
            raise
        except Exception as e:
            failure = GenerationFailure(f"{type(e).__name__}: {e}")
            self._fail(request, failure)
            raise failure from e

    def _fail(self, request: GenerationRequest, error: SessionStartError) -> None:
        self._status = SessionPhase.ERROR
        self.last_error = error
        logger.error("Could not start {} session: {}", request.mode.value, error)

    def resume(self) -> SessionPhase:
        """Leave ERROR and go back to the previous session or to IDLE."""
        if self._status == SessionPhase.ERROR:
            self._status = None
            self.last_error = None
        return self.phase

    def reset(self) -> None:
        """Discard the session and return to configuration."""
        if self.timer is not None:
            self.timer.cancel_all()
        self.batch = None
        self.state = None
        self.engine = None
        self.last_error = None
        self._status = None
        logger.debug("Session reset")

    # ------------------------------------------------------------------
    # Recorder interface used by engines
    # ------------------------------------------------------------------

    def record_answer(self, outcome: AnswerOutcome) -> None:
        if self.phase != SessionPhase.ACTIVE:
            logger.debug("Ignoring answer in phase {}", self.phase.value)
            return
        if outcome == AnswerOutcome.CORRECT:
            self.state.score += 1
        self.state.phase = SessionPhase.ANSWERED

    def advance(self) -> None:
        if self.phase != SessionPhase.ANSWERED:
            logger.debug("Ignoring advance in phase {}", self.phase.value)
            return
        if self.state.is_last_item:
            self.state.phase = SessionPhase.COMPLETE
            logger.info("Session complete: {}/{}", self.state.score, self.state.total)
            return
        self.state.cursor += 1
        self.state.phase = SessionPhase.ACTIVE
        self.engine.prepare_item()

    def complete_round(self, score: int) -> None:
        """Finish a whole-board round, awarding up to one point per item."""
        if self.phase != SessionPhase.ACTIVE:
            logger.debug("Ignoring round completion in phase {}", self.phase.value)
            return
        self.state.score = max(self.state.score, min(score, self.state.total))
        self.state.phase = SessionPhase.COMPLETE
        logger.info("Session complete: {}/{}", self.state.score, self.state.total)

    def summary(self) -> SessionSummary | None:
        if self.state is None or self.batch is None:
            return None
        return SessionSummary(
            title=self.batch.title,
            mode=self.batch.mode,
            score=self.state.score,
            total=self.state.total,
            is_complete=self.state.phase == SessionPhase.COMPLETE,
        )
