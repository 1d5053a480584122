"""MindForge UI Module - Terminal front end for the mini-games."""

from ui.app import GameUI
from ui.components import (
    FeedbackPanel,
    MatchingBoard,
    MemoryBoard,
    QuestionPanel,
    SortingPanel,
    SummaryPanel,
    WelcomeScreen,
    WordScramblePanel,
)
from ui.styles import (
    ACCENT_AMBER,
    BRAND_INDIGO,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    SUCCESS_GREEN,
)

__all__ = [
    "GameUI",
    "FeedbackPanel",
    "MatchingBoard",
    "MemoryBoard",
    "QuestionPanel",
    "SortingPanel",
    "SummaryPanel",
    "WelcomeScreen",
    "WordScramblePanel",
    "ACCENT_AMBER",
    "BRAND_INDIGO",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
    "SUCCESS_GREEN",
]
