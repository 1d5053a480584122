"""Abstract interface for content generators."""

from abc import ABC, abstractmethod
from typing import Any

from models import GenerationRequest


class ContentGenerator(ABC):
    """Abstract interface for the external content source.

    A generator is handed to the session controller explicitly for every
    session start. It returns the raw, unvalidated batch; validation is the
    caller's job.
    """

    @abstractmethod
    def generate(self, request: GenerationRequest) -> Any:
        """Produce one raw content batch for a request.

        Args:
            request: Grade, subject, topic and mode of the game to create.

        Returns:
            The decoded batch (normally a dict with title, description,
            mode and items).

        Raises:
            GenerationFailure: If the source errors, times out, or returns
                nothing usable.
        """
        pass
