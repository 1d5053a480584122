"""Shared pytest fixtures for the MindForge test suite."""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from games import GameConfig, SimulatedTimer, validate_batch
from models import ContentBatch, GameMode
from session import SessionController


class IdentityRandom(random.Random):
    """Random source whose shuffle leaves sequences untouched."""

    def shuffle(self, x, *args, **kwargs):
        pass


class ReverseRandom(random.Random):
    """Random source whose shuffle reverses sequences in place."""

    def shuffle(self, x, *args, **kwargs):
        x.reverse()


def raw_quiz_batch() -> dict:
    return {
        "title": "Kesirler",
        "description": "Kesirlerle ilgili sorular",
        "mode": "QUIZ",
        "items": [
            {"question": "1/2 + 1/2 = ?", "options": ["1", "2", "1/4", "0"], "correctAnswer": 0},
            {"question": "2 x 3 = ?", "options": ["5", "6", "8", "9"], "correctAnswer": 1},
            {"question": "10 / 2 = ?", "options": ["2", "4", "5", "20"], "correctAnswer": 2},
        ],
    }


def raw_pair_batch(mode: str = "MATCHING") -> dict:
    return {
        "title": "Organeller",
        "description": "Organelleri görevleriyle eşleştir",
        "mode": mode,
        "items": [
            {"id": "p1", "term": "Mitokondri", "definition": "Enerji üretir"},
            {"id": "p2", "term": "Ribozom", "definition": "Protein sentezler"},
            {"id": "p3", "term": "Çekirdek", "definition": "Hücreyi yönetir"},
        ],
    }


def raw_true_false_batch() -> dict:
    return {
        "title": "Güneş Sistemi",
        "description": "Doğru mu yanlış mı?",
        "mode": "TRUE_FALSE",
        "items": [
            {"statement": "Güneş bir yıldızdır.", "isTrue": True},
            {"statement": "Ay kendi ışığını üretir.", "isTrue": False},
        ],
    }


def raw_word_batch() -> dict:
    return {
        "title": "Pressure",
        "description": "Unscramble the words",
        "mode": "WORD_SCRAMBLE",
        "items": [
            {"word": "PRESSURE", "hint": "Basınç"},
            {"word": "FORCE", "hint": "Kuvvet"},
        ],
    }


def raw_fill_batch() -> dict:
    return {
        "title": "Cumhuriyet",
        "description": "Boşlukları doldur",
        "mode": "FILL_BLANKS",
        "items": [
            {
                "sentence": "Cumhuriyet ___ yılında ilan edildi.",
                "correctAnswer": "1923",
                "options": ["1919", "1923", "1938"],
            },
            {
                "sentence": "TBMM ___ şehrinde açıldı.",
                "correctAnswer": "Ankara",
                "options": ["İstanbul", "Ankara"],
            },
        ],
    }


def raw_sort_batch() -> dict:
    return {
        "title": "Kesirleri sırala",
        "description": "Küçükten büyüğe",
        "mode": "SORTING",
        "items": [
            {"id": "a", "content": "1/4", "orderIndex": 0},
            {"id": "b", "content": "1/2", "orderIndex": 1},
            {"id": "c", "content": "3/4", "orderIndex": 2},
        ],
    }


RAW_BATCHES = {
    GameMode.QUIZ: raw_quiz_batch,
    GameMode.MATCHING: raw_pair_batch,
    GameMode.MEMORY: lambda: raw_pair_batch("MEMORY"),
    GameMode.TRUE_FALSE: raw_true_false_batch,
    GameMode.WORD_SCRAMBLE: raw_word_batch,
    GameMode.FILL_BLANKS: raw_fill_batch,
    GameMode.SORTING: raw_sort_batch,
}


@pytest.fixture
def raw_batches() -> dict[GameMode, dict]:
    """One valid raw batch per mode, freshly built for each test."""
    return {mode: build() for mode, build in RAW_BATCHES.items()}


@pytest.fixture
def batch_for():
    """Factory returning the validated sample batch for a mode."""

    def _batch_for(mode: GameMode) -> ContentBatch:
        return validate_batch(RAW_BATCHES[mode](), mode)

    return _batch_for


@pytest.fixture
def timer() -> SimulatedTimer:
    return SimulatedTimer()


@pytest.fixture
def controller(timer) -> SessionController:
    """Controller with identity shuffles and a simulated clock."""
    return SessionController(rng=IdentityRandom(), timer=timer, config=GameConfig())


@pytest.fixture
def start(controller, batch_for):
    """Start a session for a mode and return its engine."""

    def _start(mode: GameMode):
        return controller.start(batch_for(mode))

    return _start
