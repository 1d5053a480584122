"""Structural validation of generated content batches.

The generator is a black box that may return anything. The validator only
checks shape: the top-level fields exist, every item has every required
field with the right primitive type, and the few structural invariants the
engines rely on hold (answer indexes in range, one blank per sentence,
unique ids). Whether the content is any good is the generator's problem.

A batch either validates completely or is rejected as a whole.
"""

import json
from enum import Enum
from typing import Any

from loguru import logger
from pydantic import ValidationError

from games.errors import MalformedContent, UnsupportedMode
from models import BLANK_PLACEHOLDER, ITEM_TYPES, ContentBatch, GameMode


class FieldType(str, Enum):
    """Primitive types that item fields may have on the wire."""

    TEXT = "TEXT"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    TEXT_LIST = "TEXT_LIST"


QUIZ_FIELDS = {
    "question": FieldType.TEXT,
    "options": FieldType.TEXT_LIST,
    "correctAnswer": FieldType.INTEGER,
}
PAIR_FIELDS = {
    "id": FieldType.TEXT,
    "term": FieldType.TEXT,
    "definition": FieldType.TEXT,
}

# Required wire fields per mode, keyed by the names the generator emits.
ITEM_FIELDS: dict[GameMode, dict[str, FieldType]] = {
    GameMode.QUIZ: QUIZ_FIELDS,
    GameMode.MATCHING: PAIR_FIELDS,
    GameMode.MEMORY: PAIR_FIELDS,
    GameMode.TRUE_FALSE: {
        "statement": FieldType.TEXT,
        "isTrue": FieldType.BOOLEAN,
    },
    GameMode.WORD_SCRAMBLE: {
        "word": FieldType.TEXT,
        "hint": FieldType.TEXT,
    },
    GameMode.FILL_BLANKS: {
        "sentence": FieldType.TEXT,
        "correctAnswer": FieldType.TEXT,
        "options": FieldType.TEXT_LIST,
    },
    GameMode.SORTING: {
        "id": FieldType.TEXT,
        "content": FieldType.TEXT,
        "orderIndex": FieldType.INTEGER,
    },
}


def check_type(value: Any, field_type: FieldType) -> bool:
    """Validate a value against a wire field type."""
    if field_type == FieldType.TEXT:
        return isinstance(value, str)
    elif field_type == FieldType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    elif field_type == FieldType.BOOLEAN:
        return isinstance(value, bool)
    elif field_type == FieldType.TEXT_LIST:
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    return False


def resolve_mode(mode: GameMode | str) -> GameMode:
    """Turn a mode tag into a GameMode, raising UnsupportedMode if unknown."""
    if isinstance(mode, GameMode):
        return mode
    try:
        return GameMode(mode)
    except ValueError:
        raise UnsupportedMode(f"No game engine for mode {mode!r}") from None


class ContentValidator:
    """Accepts or rejects a raw generated batch for an expected mode."""

    def validate(self, raw: Any, expected_mode: GameMode | str) -> ContentBatch:
        """Validate a raw batch and build the immutable ContentBatch.

        Args:
            raw: Decoded JSON object (or a JSON string) from the generator.
            expected_mode: The mode the session was started for. The batch's
                own mode field is overridden by it.

        Returns:
            The validated batch.

        Raises:
            MalformedContent: If any required structure is missing.
            UnsupportedMode: If expected_mode is not a known mode.
        """
        mode = resolve_mode(expected_mode)
        data = self._decode(raw)

        errors = self._validate_top_level(data)
        if errors:
            raise MalformedContent("; ".join(errors))

        declared = data.get("mode")
        if declared != mode.value:
            logger.warning(
                "Batch declared mode {!r}; using requested mode {}", declared, mode.value
            )

        errors = []
        for index, item in enumerate(data["items"]):
            errors.extend(
                f"items[{index}]: {error}" for error in self.validate_item(item, mode)
            )
        errors.extend(self._validate_unique_ids(data["items"], mode))
        if errors:
            logger.debug("Rejected {} batch: {}", mode.value, errors)
            raise MalformedContent("; ".join(errors))

        item_type = ITEM_TYPES[mode]
        try:
            items = tuple(item_type.model_validate(item) for item in data["items"])
            return ContentBatch(
                title=data["title"],
                description=data["description"],
                mode=mode,
                items=items,
            )
        except ValidationError as e:
            raise MalformedContent(str(e)) from e

    def validate_item(self, item: Any, mode: GameMode) -> list[str]:
        """Validate one raw item.

        Returns:
            List of error messages; empty if the item is acceptable.
        """
        if not isinstance(item, dict):
            return [f"expected an object, got {type(item).__name__}"]

        errors: list[str] = []
        for name, field_type in ITEM_FIELDS[mode].items():
            if name not in item or item[name] is None:
                errors.append(f"missing required field {name}")
            elif not check_type(item[name], field_type):
                errors.append(
                    f"field {name}: expected {field_type.value}, "
                    f"got {type(item[name]).__name__}"
                )
        if errors:
            return errors

        if mode == GameMode.QUIZ:
            if len(item["options"]) < 2:
                errors.append("quiz needs at least 2 options")
            elif not 0 <= item["correctAnswer"] < len(item["options"]):
                errors.append(f"correctAnswer {item['correctAnswer']} out of range")
        elif mode == GameMode.FILL_BLANKS:
            if item["sentence"].count(BLANK_PLACEHOLDER) != 1:
                errors.append(f"sentence must contain exactly one {BLANK_PLACEHOLDER}")
            if item["correctAnswer"] not in item["options"]:
                errors.append("options must include correctAnswer")
        elif mode == GameMode.WORD_SCRAMBLE:
            if not item["word"] or not item["word"].isalpha():
                errors.append(f"word {item['word']!r} must be non-empty letters")

        return errors

    def _decode(self, raw: Any) -> Any:
        if isinstance(raw, (str, bytes)):
            try:
                return json.loads(raw)
            except ValueError as e:
                raise MalformedContent(f"Response is not valid JSON: {e}") from e
        return raw

    def _validate_top_level(self, data: Any) -> list[str]:
        if not isinstance(data, dict):
            return [f"expected a JSON object, got {type(data).__name__}"]

        errors = []
        for name in ("title", "description"):
            if not isinstance(data.get(name), str):
                errors.append(f"missing or non-text {name}")
        items = data.get("items")
        if not isinstance(items, list):
            errors.append("missing items list")
        elif not items:
            errors.append("items must not be empty")
        return errors

    def _validate_unique_ids(self, items: list[Any], mode: GameMode) -> list[str]:
        if "id" not in ITEM_FIELDS[mode]:
            return []
        seen: set[str] = set()
        errors = []
        for item in items:
            if not isinstance(item, dict) or not isinstance(item.get("id"), str):
                continue
            if item["id"] in seen:
                errors.append(f"duplicate id {item['id']!r}")
            seen.add(item["id"])
        return errors


def validate_batch(raw: Any, expected_mode: GameMode | str) -> ContentBatch:
    """Validate a raw batch with a default ContentValidator."""
    return ContentValidator().validate(raw, expected_mode)
