"""Generator that serves fixed batches, for offline play and tests."""

import copy
import json
from pathlib import Path
from typing import Any

from loguru import logger

from games.errors import GenerationFailure
from generator.base import ContentGenerator
from models import GameMode, GenerationRequest

SAMPLES_PATH = Path(__file__).parent / "samples.json"


class StaticContentGenerator(ContentGenerator):
    """Returns a stored raw batch for the requested mode.

    The request's subject and topic are ignored. Each call returns a fresh
    copy so callers cannot mutate the stored batch.
    """

    def __init__(self, batches: dict[GameMode | str, Any]):
        self.batches = {GameMode(mode): batch for mode, batch in batches.items()}
        self.requests: list[GenerationRequest] = []

    @classmethod
    def from_file(cls, path: Path | str) -> "StaticContentGenerator":
        """Load batches from a JSON file mapping mode tags to raw batches."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise GenerationFailure(f"Cannot load content from {path}: {e}") from e
        if not isinstance(data, dict):
            raise GenerationFailure(f"{path} must map mode tags to batches")
        try:
            return cls(data)
        except ValueError as e:
            raise GenerationFailure(f"{path}: {e}") from e

    def generate(self, request: GenerationRequest) -> Any:
        self.requests.append(request)
        if request.mode not in self.batches:
            raise GenerationFailure(f"No stored content for mode {request.mode.value}")
        logger.info("Serving stored {} batch", request.mode.value)
        return copy.deepcopy(self.batches[request.mode])


def load_samples() -> StaticContentGenerator:
    """Generator over the bundled sample batches, one per mode."""
    return StaticContentGenerator.from_file(SAMPLES_PATH)
