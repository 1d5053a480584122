"""Content generator backed by Google Gemini.

Sends one prompt per session start and constrains the response to the
mode's JSON schema. The model's answer is decoded but not validated here.
"""

import json
import re
from typing import Any

from loguru import logger

from games.errors import GenerationFailure
from generator.base import ContentGenerator
from generator.prompts import build_prompt, generation_config
from models import GameMode, GenerationRequest
from settings import get_settings


class GeminiContentGenerator(ContentGenerator):
    """Generates game content with a Gemini model."""

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        timeout_s: float | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout_s = timeout_s or settings.request_timeout_s
        self._client = None

    @property
    def client(self):
        """Lazy-load Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise GenerationFailure(
                    "Gemini API key required (set GEMINI_API_KEY or MINDFORGE_GEMINI_API_KEY)"
                )
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai.GenerativeModel(model_name=self.model_name)
        return self._client

    def generate(self, request: GenerationRequest) -> dict[str, Any]:
        prompt = build_prompt(request)
        logger.info(
            "Requesting {} content for {} / {} ({})",
            request.mode.value,
            request.subject,
            request.topic,
            self.model_name,
        )

        try:
            response = self.client.generate_content(
                prompt,
                generation_config=generation_config(request.mode),
                request_options={"timeout": self.timeout_s},
            )
            text = response.text
        except GenerationFailure:
            raise
        except Exception as e:
            logger.error(f"Gemini generation error: {e}")
            raise GenerationFailure(f"Gemini request failed: {e}") from e

        if not text:
            raise GenerationFailure("No response generated")

        data = parse_response(text)

        # The model sometimes labels memory batches as matching; both share a shape.
        if request.mode == GameMode.MEMORY:
            data["mode"] = GameMode.MEMORY.value
        return data


def parse_response(text: str) -> dict[str, Any]:
    """Decode the JSON object in a model response.

    Tolerates markdown code fences or stray text around the object.
    """
    json_match = re.search(r"\{[\s\S]*\}", text)
    if not json_match:
        raise GenerationFailure("No JSON object found in response")
    try:
        data = json.loads(json_match.group(0))
    except json.JSONDecodeError as e:
        raise GenerationFailure(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GenerationFailure("Response JSON is not an object")
    return data
