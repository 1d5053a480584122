from typing import Optional

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from games import (
    FillBlankView,
    MatchingView,
    MemoryView,
    QuizView,
    SortingView,
    TrueFalseView,
    WordScrambleView,
)
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
from ui.styles import DEFAULT_THEME, ERROR_RED, INFO_BLUE, MUTED_GRAY

# Component used to draw each snapshot type
VIEW_COMPONENTS = {
    QuizView: QuestionPanel,
    TrueFalseView: QuestionPanel,
    FillBlankView: QuestionPanel,
    MatchingView: MatchingBoard,
    MemoryView: MemoryBoard,
    WordScrambleView: WordScramblePanel,
    SortingView: SortingPanel,
}


class GameUI:
    """Main UI orchestrator for the MindForge terminal front end."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)

    def show_welcome(self, title: str, description: str, mode: str, total: int) -> None:
        """Display the batch title card and wait for the player to press Enter."""
        self.console.print(WelcomeScreen(title, description, mode, total))
        self.console.print()
        self.console.input(Text("Press Enter to start...", style=f"bold {MUTED_GRAY}"))

    def show_view(self, view: BaseModel) -> None:
        """Draw an engine snapshot with the component for its type."""
        component = VIEW_COMPONENTS[type(view)]
        self.console.print(component(view))
        self.console.print()

    def show_feedback(
        self, is_correct: bool, correct_answer: str, user_answer: str = ""
    ) -> None:
        """Display feedback for the player's answer."""
        self.console.print(FeedbackPanel(is_correct, correct_answer, user_answer))
        self.console.print()

    def show_summary(self, title: str, mode: str, score: int, total: int) -> None:
        self.console.print(SummaryPanel(title, mode, score, total))

    def ask(self, prompt: str = "Your answer: ") -> str:
        """Read one line of input. Returns "quit" for q."""
        user_input = self.console.input(
            Text(prompt, style=f"bold {MUTED_GRAY}")
        ).strip()
        if user_input.lower() in ("q", "quit"):
            return "quit"
        return user_input

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(message, style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_hint(self, message: str) -> None:
        """Display a one-line input correction."""
        self.console.print(Text(message + "\n", style=ERROR_RED))

    def show_loading(self, topic: str) -> None:
        self.console.print(Text(f"Creating a game about {topic}...", style=INFO_BLUE))

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(Text("Goodbye! See you next time.", style=MUTED_GRAY))

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> str:
        """Wait for the player to press Enter to continue."""
        return self.ask("Press Enter to continue...")
