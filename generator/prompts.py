"""Prompt templates for LLM content generation.

One task line, one JSON item shape and one response schema per game mode.
Shapes and schemas use the camelCase field names the validator expects.
"""

import copy
import json

from models import GameMode, GenerationRequest

MODE_TASKS: dict[GameMode, str] = {
    GameMode.QUIZ: "Create a multiple-choice quiz with 8-10 challenging questions.",
    GameMode.MATCHING: "Create 6-8 pairs of terms and definitions.",
    GameMode.MEMORY: "Create 6 pairs of concepts that fit on small cards (short text).",
    GameMode.TRUE_FALSE: "Create 10 statements, thoroughly mixing true and false facts.",
    GameMode.WORD_SCRAMBLE: (
        "Create 6 important keywords related to the topic. Provide a helpful hint."
    ),
    GameMode.FILL_BLANKS: (
        "Create 6 sentences with one key missing word represented by '___'. "
        "Provide options."
    ),
    GameMode.SORTING: (
        "Create a list of 5-7 items that need to be put in a specific order. "
        "Examples: Mathematical values (small to large), Historical timeline, "
        "Steps in a process."
    ),
}

PAIR_SHAPE = {"id": "string", "term": "string", "definition": "string"}

ITEM_SHAPES: dict[GameMode, dict[str, str]] = {
    GameMode.QUIZ: {
        "question": "string",
        "options": "array of 4 strings",
        "correctAnswer": "integer index of the correct option (0-3)",
    },
    GameMode.MATCHING: PAIR_SHAPE,
    GameMode.MEMORY: PAIR_SHAPE,
    GameMode.TRUE_FALSE: {"statement": "string", "isTrue": "boolean"},
    GameMode.WORD_SCRAMBLE: {
        "word": "the answer word, uppercase letters only",
        "hint": "a hint or definition for the word",
    },
    GameMode.FILL_BLANKS: {
        "sentence": "sentence with a single '___' placeholder",
        "correctAnswer": "string",
        "options": "array of 3-4 strings including the correct one",
    },
    GameMode.SORTING: {
        "id": "string",
        "content": "item to be sorted (e.g. '1/2', '1071', 'Step 1')",
        "orderIndex": "integer position in the correct order (0 for first)",
    },
}

ENGLISH_SUBJECT_MARKERS = ("ingilizce", "english")

PROMPT_TEMPLATE = """
You are an expert educational content creator for Middle School students (Turkish MEB Curriculum).

Target Audience: {grade}
Subject: {subject}
Specific Topic: {topic}
Game Mode: {mode}

Task: {task}
{language}

IMPORTANT INSTRUCTIONS:
1. STRICTLY FOLLOW the Turkish Ministry of National Education (MEB) curriculum for the selected grade.
2. If the subject is Math (Matematik): Use clear text representation for formulas. For sorting games, provide numbers, fractions, or decimals that are tricky to order.
3. If the subject is English (İngilizce): The content MUST be in English.
4. If the subject is Religious Culture (Din Kültürü) or Family (Aile): Ensure content is respectful, accurate, and aligns with moral education standards.
5. If the subject is History/Revolution (İnkılap Tarihi/Sosyal): Focus on key dates, figures, and events.
6. Ensure difficulty is appropriate for {grade}.
7. Make content diverse and unique every time.
8. Return strictly JSON matching this shape:
{shape}
"""


def is_english_subject(subject: str) -> bool:
    # str.lower() turns a dotted capital İ into "i" plus a combining dot
    lowered = subject.replace("İ", "I").lower()
    return any(marker in lowered for marker in ENGLISH_SUBJECT_MARKERS)


def language_instruction(subject: str) -> str:
    if is_english_subject(subject):
        return (
            "Language: The educational content (questions, answers, terms) MUST be "
            "in English. Instructions or hints can be in Turkish if helpful for "
            "5-8th grade level."
        )
    return "Language: Turkish (Türkçe)"


def response_shape(mode: GameMode) -> str:
    """Describe the expected JSON document for a mode."""
    shape = {
        "title": "string",
        "description": "string",
        "mode": mode.value,
        "items": [ITEM_SHAPES[mode]],
    }
    return json.dumps(shape, indent=2, ensure_ascii=False)


def build_prompt(request: GenerationRequest) -> str:
    """Build the generation prompt for a request."""
    return PROMPT_TEMPLATE.format(
        grade=request.grade.value,
        subject=request.subject,
        topic=request.topic,
        mode=request.mode.value,
        task=MODE_TASKS[request.mode],
        language=language_instruction(request.subject),
        shape=response_shape(request.mode),
    )


# ============================================================================
# Response schemas (controlled generation)
# ============================================================================

PAIR_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "term": {"type": "string"},
        "definition": {"type": "string"},
    },
    "required": ["id", "term", "definition"],
}

ITEM_SCHEMAS: dict[GameMode, dict] = {
    GameMode.QUIZ: {
        "type": "object",
        "properties": {
            "question": {"type": "string"},
            "options": {"type": "array", "items": {"type": "string"}},
            "correctAnswer": {
                "type": "integer",
                "description": "Index of the correct option (0-3)",
            },
        },
        "required": ["question", "options", "correctAnswer"],
    },
    GameMode.MATCHING: PAIR_SCHEMA,
    GameMode.MEMORY: PAIR_SCHEMA,
    GameMode.TRUE_FALSE: {
        "type": "object",
        "properties": {
            "statement": {"type": "string"},
            "isTrue": {"type": "boolean"},
        },
        "required": ["statement", "isTrue"],
    },
    GameMode.WORD_SCRAMBLE: {
        "type": "object",
        "properties": {
            "word": {"type": "string", "description": "Uppercase letters only"},
            "hint": {"type": "string"},
        },
        "required": ["word", "hint"],
    },
    GameMode.FILL_BLANKS: {
        "type": "object",
        "properties": {
            "sentence": {
                "type": "string",
                "description": "Sentence with a single '___' placeholder",
            },
            "correctAnswer": {"type": "string"},
            "options": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["sentence", "correctAnswer", "options"],
    },
    GameMode.SORTING: {
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "content": {"type": "string"},
            "orderIndex": {
                "type": "integer",
                "description": "Position in the correct order, 0 for first",
            },
        },
        "required": ["id", "content", "orderIndex"],
    },
}


def response_schema(mode: GameMode) -> dict:
    """JSON schema of the whole batch document for a mode."""
    return {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "description": {"type": "string"},
            "mode": {"type": "string", "description": f"Always {mode.value}"},
            "items": {"type": "array", "items": copy.deepcopy(ITEM_SCHEMAS[mode])},
        },
        "required": ["title", "description", "mode", "items"],
    }


def generation_config(mode: GameMode, temperature: float = 0.9) -> dict:
    """Gemini generation config forcing a JSON batch of the mode's shape."""
    return {
        "response_mime_type": "application/json",
        "response_schema": response_schema(mode),
        "temperature": temperature,
    }
