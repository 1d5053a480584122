"""Content generators for MindForge.

A generator turns a GenerationRequest into one raw content batch. The batch
is validated by games.validator before a session uses it.
"""

from pathlib import Path

from generator.base import ContentGenerator
from generator.gemini import GeminiContentGenerator, parse_response
from generator.prompts import build_prompt, language_instruction
from generator.static import SAMPLES_PATH, StaticContentGenerator, load_samples


def get_content_generator(
    offline: bool = False, content_path: Path | str | None = None
) -> ContentGenerator:
    """Pick the generator for a run.

    A content file wins over everything else; offline play uses the bundled
    samples; otherwise Gemini is used.
    """
    if content_path is not None:
        return StaticContentGenerator.from_file(content_path)
    if offline:
        return load_samples()
    return GeminiContentGenerator()


__all__ = [
    "ContentGenerator",
    "GeminiContentGenerator",
    "StaticContentGenerator",
    "SAMPLES_PATH",
    "build_prompt",
    "get_content_generator",
    "language_instruction",
    "load_samples",
    "parse_response",
]
