"""Errors raised at the session-start boundary.

Invalid operations inside a running game are never errors; engines ignore
them. Only starting a session can fail, and every failure is a
``SessionStartError`` so callers can surface it as one retryable message.
"""


class GameError(Exception):
    """Base class for all game engine errors."""


class SessionStartError(GameError):
    """A session could not be started; control returns to configuration."""


class MalformedContent(SessionStartError):
    """The generated batch failed structural validation."""


class UnsupportedMode(SessionStartError):
    """The batch declares a mode with no matching engine."""


class GenerationFailure(SessionStartError):
    """The content generator errored, timed out, or returned nothing usable."""
