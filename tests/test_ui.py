"""Tests for rendering engine snapshots in the terminal UI."""

import pytest
from rich.console import Console

from models import GameMode
from ui import GameUI


@pytest.fixture
def ui() -> GameUI:
    return GameUI(Console(record=True, width=140))


class TestShowView:
    """Every mode's snapshot has a component that draws it."""

    @pytest.mark.parametrize("mode", list(GameMode))
    def test_renders_each_mode(self, ui, start, mode):
        engine = start(mode)
        ui.show_view(engine.snapshot())
        assert ui.console.export_text().strip()

    def test_quiz_options_labelled(self, ui, start):
        ui.show_view(start(GameMode.QUIZ).snapshot())
        output = ui.console.export_text()
        assert "1/2 + 1/2 = ?" in output
        assert "A. 1" in output
        assert "D. 0" in output

    def test_fill_blank_shows_gap(self, ui, start):
        ui.show_view(start(GameMode.FILL_BLANKS).snapshot())
        assert "Cumhuriyet _____ yılında" in ui.console.export_text()

    def test_memory_cards_hidden(self, ui, start):
        """Face-down cards show no content."""
        ui.show_view(start(GameMode.MEMORY).snapshot())
        output = ui.console.export_text()
        assert "Mitokondri" not in output
        assert "?" in output

    def test_word_scramble_hint(self, ui, start):
        ui.show_view(start(GameMode.WORD_SCRAMBLE).snapshot())
        output = ui.console.export_text()
        assert "Basınç" in output
        assert "_ _ _ _ _ _ _ _" in output


class TestMessages:
    """Tests for feedback, summary and error panels."""

    def test_feedback(self, ui):
        ui.show_feedback(False, "B. 6", "A. 5")
        output = ui.console.export_text()
        assert "Not quite!" in output
        assert "You answered: A. 5" in output
        assert "Correct answer: B. 6" in output

    def test_summary(self, ui):
        ui.show_summary("Kesirler", "QUIZ", 4, 5)
        output = ui.console.export_text()
        assert "4/5" in output
        assert "80%" in output

    def test_error(self, ui):
        ui.show_error("Something broke")
        assert "Something broke" in ui.console.export_text()
