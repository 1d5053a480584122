"""Game engines for the MindForge mini-games.

This package provides one engine per game mode, the content validator that
turns generated batches into typed items, and the timer service used for
delayed transitions.

Architecture:
- The content validator accepts or rejects a raw generated batch
- The session controller (session.py) owns cursor, score and phase
- Engines own the interaction state of the current item or board and
  report outcomes back to the controller
- ENGINE_REGISTRY is the single place a mode tag is mapped to an engine

Single-shot engines:
- QuizEngine: Pick the correct option index
- TrueFalseEngine: Judge a statement
- FillBlankEngine: Pick the word that completes a sentence

Board engines:
- MatchingEngine: Pair terms with definitions
- MemoryEngine: Flip cards to find pairs
- SortingEngine: Order items by swapping neighbours

Assembly engines:
- WordScrambleEngine: Rebuild a word from shuffled letters
"""

from games.base import (
    AnswerRecorder,
    EngineView,
    GameEngine,
    parse_letter_input,
    shuffled,
)
from games.choice import (
    ChoiceEngine,
    FillBlankEngine,
    FillBlankView,
    QuizEngine,
    QuizView,
    TrueFalseEngine,
    TrueFalseView,
)
from games.config import (
    GameConfig,
    MatchingConfig,
    MemoryConfig,
    TrueFalseConfig,
    WordScrambleConfig,
)
from games.errors import (
    GameError,
    GenerationFailure,
    MalformedContent,
    SessionStartError,
    UnsupportedMode,
)
from games.matching import MatchingEngine, MatchingView, SelectionResult
from games.memory import FlipResult, MemoryEngine, MemoryView
from games.sorting import Direction, SortingEngine, SortingView
from games.timers import ScheduledCall, SimulatedTimer, TimerService
from games.validator import ContentValidator, validate_batch
from games.word_scramble import LetterToken, WordScrambleEngine, WordScrambleView
from models import GameMode

# Registry of engine classes by mode
ENGINE_REGISTRY: dict[GameMode, type[GameEngine]] = {
    GameMode.QUIZ: QuizEngine,
    GameMode.TRUE_FALSE: TrueFalseEngine,
    GameMode.FILL_BLANKS: FillBlankEngine,
    GameMode.MATCHING: MatchingEngine,
    GameMode.MEMORY: MemoryEngine,
    GameMode.WORD_SCRAMBLE: WordScrambleEngine,
    GameMode.SORTING: SortingEngine,
}


def get_mode_config(config: GameConfig, mode: GameMode):
    """Return the configuration block for a mode, or None if it has none."""
    return {
        GameMode.MATCHING: config.matching,
        GameMode.MEMORY: config.memory,
        GameMode.TRUE_FALSE: config.true_false,
        GameMode.WORD_SCRAMBLE: config.word_scramble,
    }.get(mode)


__all__ = [
    # Registry
    "ENGINE_REGISTRY",
    "get_mode_config",
    # Base
    "AnswerRecorder",
    "EngineView",
    "GameEngine",
    "parse_letter_input",
    "shuffled",
    # Single-shot engines
    "ChoiceEngine",
    "QuizEngine",
    "QuizView",
    "TrueFalseEngine",
    "TrueFalseView",
    "FillBlankEngine",
    "FillBlankView",
    # Board engines
    "MatchingEngine",
    "MatchingView",
    "SelectionResult",
    "MemoryEngine",
    "MemoryView",
    "FlipResult",
    "SortingEngine",
    "SortingView",
    "Direction",
    # Assembly engines
    "WordScrambleEngine",
    "WordScrambleView",
    "LetterToken",
    # Configuration
    "GameConfig",
    "MatchingConfig",
    "MemoryConfig",
    "TrueFalseConfig",
    "WordScrambleConfig",
    # Errors
    "GameError",
    "SessionStartError",
    "MalformedContent",
    "UnsupportedMode",
    "GenerationFailure",
    # Timers
    "TimerService",
    "SimulatedTimer",
    "ScheduledCall",
    # Validation
    "ContentValidator",
    "validate_batch",
]
