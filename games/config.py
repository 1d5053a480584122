"""Configuration for game engines.

These configuration models hold the timings of the delayed transitions
(mismatch clears, card resolution, auto-advance). Delays are presentation
timing only: engines schedule them on a timer service and stay locked until
the callback fires, whatever the duration.
"""

from pydantic import BaseModel, Field


class MatchingConfig(BaseModel):
    """Configuration for the matching game."""

    mismatch_delay_ms: int = Field(default=500, ge=0)


class MemoryConfig(BaseModel):
    """Configuration for the memory card game."""

    match_delay_ms: int = Field(default=500, ge=0)
    mismatch_delay_ms: int = Field(default=1000, ge=0)


class TrueFalseConfig(BaseModel):
    """Configuration for the true/false game."""

    feedback_delay_ms: int = Field(default=800, ge=0)
    auto_advance: bool = True


class WordScrambleConfig(BaseModel):
    """Configuration for the word scramble game."""

    advance_delay_ms: int = Field(default=1500, ge=0)
    wrong_feedback_ms: int = Field(default=1000, ge=0)


class GameConfig(BaseModel):
    """Master configuration for all game modes."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    true_false: TrueFalseConfig = Field(default_factory=TrueFalseConfig)
    word_scramble: WordScrambleConfig = Field(default_factory=WordScrambleConfig)
