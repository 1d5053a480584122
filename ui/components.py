from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
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
from models import AnswerOutcome
from ui.styles import (
    ACCENT_AMBER,
    BRAND_INDIGO,
    ERROR_RED,
    INFO_BLUE,
    MODE_LABELS,
    MUTED_GRAY,
    SUCCESS_GREEN,
    TEXT_WHITE,
    create_error_header,
    create_success_header,
    get_mode_color,
    get_score_style,
)


def option_label(index: int) -> str:
    return chr(65 + index)


def progress_bar(current: int, total: int, width: int = 30) -> str:
    """Create a text-based progress bar."""
    percent = (current / total * 100) if total > 0 else 0
    filled = int(width * percent / 100)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] {percent:.0f}%"


def outcome_style(selected: bool, correct: bool, answered: bool) -> Style:
    """Style for an option once the answer is revealed."""
    if answered and correct:
        return Style(color=SUCCESS_GREEN, bold=True)
    if answered and selected:
        return Style(color=ERROR_RED, bold=True)
    return Style(color=TEXT_WHITE)


class WelcomeScreen:
    """Title card shown before the first item of a batch."""

    def __init__(self, title: str, description: str, mode: str, total: int):
        self.title = title
        self.description = description
        self.mode = mode
        self.total = total

    def render(self) -> Panel:
        color = get_mode_color(self.mode)
        banner = Text()
        banner.append(f"{self.title}\n\n", Style(color=color, bold=True))
        banner.append(f"{self.description}\n\n", Style(color=TEXT_WHITE))
        banner.append("Type 'q' at any time to quit.\n", Style(color=MUTED_GRAY))

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")
        stats.add_row(
            Text("Game", style=Style(color=MUTED_GRAY)),
            Text(MODE_LABELS.get(self.mode, self.mode), style=Style(color=color, bold=True)),
        )
        stats.add_row(
            Text("Items", style=Style(color=MUTED_GRAY)),
            Text(str(self.total), style=Style(color=ACCENT_AMBER, bold=True)),
        )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(3, 3),
            ),
            title="MindForge",
            border_style=color,
            box=box.HEAVY,
            padding=(1, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class QuestionPanel:
    """Single-shot item: quiz, true/false or fill-in-the-blank."""

    def __init__(self, view: QuizView | TrueFalseView | FillBlankView):
        self.view = view

    def render(self) -> Panel:
        view = self.view
        answered = view.outcome is not None
        content = Text()
        content.append(progress_bar(view.cursor, view.total), Style(color=MUTED_GRAY))
        content.append("\n")
        content.append(
            f"Question {view.cursor + 1}/{view.total}    Score: {view.score}\n\n",
            Style(color=MUTED_GRAY),
        )

        if isinstance(view, QuizView):
            content.append(view.question, Style(color=TEXT_WHITE, bold=True))
            content.append("\n\n")
            for i, option in enumerate(view.options):
                content.append(f"{option_label(i)}. ", Style(color=ACCENT_AMBER, bold=True))
                content.append(
                    option,
                    outcome_style(view.selected == i, view.correct_answer == i, answered),
                )
                content.append("\n")
            subtitle = "Type A, B, C, ... (or 'q' to quit)"
        elif isinstance(view, TrueFalseView):
            content.append(view.statement, Style(color=TEXT_WHITE, bold=True))
            content.append("\n\n")
            content.append("T. ", Style(color=ACCENT_AMBER, bold=True))
            content.append("True", outcome_style(view.selected is True, view.correct_answer is True, answered))
            content.append("    F. ", Style(color=ACCENT_AMBER, bold=True))
            content.append("False", outcome_style(view.selected is False, view.correct_answer is False, answered))
            content.append("\n")
            subtitle = "Type T or F (or 'q' to quit)"
        else:
            content.append(view.before_blank, Style(color=TEXT_WHITE, bold=True))
            blank = view.selected if answered else "_____"
            content.append(blank, Style(color=ACCENT_AMBER, bold=True, underline=True))
            content.append(view.after_blank, Style(color=TEXT_WHITE, bold=True))
            content.append("\n\n")
            for i, option in enumerate(view.options):
                content.append(f"{option_label(i)}. ", Style(color=ACCENT_AMBER, bold=True))
                content.append(
                    option,
                    outcome_style(
                        view.selected == option, view.correct_answer == option, answered
                    ),
                )
                content.append("\n")
            subtitle = "Type A, B, C, ... (or 'q' to quit)"

        return Panel(
            Align.left(content),
            title=MODE_LABELS[view.mode.value],
            subtitle=subtitle,
            border_style=get_mode_color(view.mode.value),
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying answer feedback."""

    def __init__(self, is_correct: bool, correct_answer: str, user_answer: str = ""):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer

    def render(self) -> Panel:
        content = Text()
        if self.is_correct:
            content.append(create_success_header())
            content.append("\n")
        else:
            content.append(create_error_header())
            content.append("\n")
            if self.user_answer:
                content.append(f"You answered: {self.user_answer}\n", Style(color=MUTED_GRAY))

        content.append("\n")
        content.append("Correct answer: ", Style(color=MUTED_GRAY))
        content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))

        return Panel(
            Align.left(content),
            title="Result",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class MatchingBoard:
    """Two-column board of terms and definitions."""

    def __init__(self, view: MatchingView):
        self.view = view

    def _entry(self, text: str, selected: bool, matched: bool) -> Text:
        if matched:
            return Text(f"✓ {text}", style=Style(color=SUCCESS_GREEN, dim=True))
        if selected and self.view.mismatch:
            return Text(text, style=Style(color=ERROR_RED, bold=True, reverse=True))
        if selected:
            return Text(text, style=Style(color=INFO_BLUE, bold=True, reverse=True))
        return Text(text, style=Style(color=TEXT_WHITE))

    def render(self) -> Panel:
        view = self.view
        table = Table(
            show_header=True,
            header_style=Style(color=get_mode_color(view.mode.value), bold=True),
            border_style=MUTED_GRAY,
            box=box.HEAVY,
        )
        table.add_column("#", justify="right", style=Style(color=ACCENT_AMBER, bold=True))
        table.add_column("Term")
        table.add_column("", justify="right", style=Style(color=ACCENT_AMBER, bold=True))
        table.add_column("Definition")

        for i, (term, definition) in enumerate(zip(view.terms, view.definitions)):
            table.add_row(
                str(i + 1),
                self._entry(term.text, term.selected, term.matched),
                option_label(i),
                self._entry(definition.text, definition.selected, definition.matched),
            )

        status = Text(
            f"Matched {view.matched_count}/{view.pair_count}",
            style=Style(color=MUTED_GRAY),
        )
        if view.mismatch:
            status.append("    Not a pair!", Style(color=ERROR_RED, bold=True))

        return Panel(
            Align.center(Columns([table, status], align="center")),
            title=MODE_LABELS[view.mode.value],
            subtitle="Type a term number and a definition letter, e.g. 2B (or 'q' to quit)",
            border_style=get_mode_color(view.mode.value),
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class MemoryBoard:
    """Grid of face-down and face-up cards."""

    COLUMNS = 4

    def __init__(self, view: MemoryView):
        self.view = view

    def _card(self, card) -> Panel:
        label = str(card.index + 1)
        if card.is_matched:
            body = Text(card.content, style=Style(color=SUCCESS_GREEN, bold=True))
            border = SUCCESS_GREEN
        elif card.is_flipped:
            body = Text(card.content, style=Style(color=TEXT_WHITE, bold=True))
            border = INFO_BLUE
        else:
            body = Text("?", style=Style(color=MUTED_GRAY, bold=True))
            border = MUTED_GRAY
        return Panel(Align.center(body), title=label, border_style=border, width=22)

    def render(self) -> Panel:
        view = self.view
        grid = Table.grid(padding=(0, 1))
        for _ in range(self.COLUMNS):
            grid.add_column()
        cards = [self._card(card) for card in view.cards]
        for start in range(0, len(cards), self.COLUMNS):
            grid.add_row(*cards[start : start + self.COLUMNS])

        status = Text(
            f"Pairs {view.matched_pairs}/{view.pair_count}    Moves: {view.moves}",
            style=Style(color=MUTED_GRAY),
        )
        content = Table.grid()
        content.add_row(grid)
        content.add_row(status)

        return Panel(
            Align.center(content),
            title=MODE_LABELS[view.mode.value],
            subtitle="Type a card number, or two: 3 7 (or 'q' to quit)",
            border_style=get_mode_color(view.mode.value),
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WordScramblePanel:
    """Letter bank, assembly slots and hint for the current word."""

    def __init__(self, view: WordScrambleView):
        self.view = view

    def render(self) -> Panel:
        view = self.view
        content = Text()
        content.append(progress_bar(view.cursor, view.total), Style(color=MUTED_GRAY))
        content.append("\n")
        content.append(
            f"Word {view.cursor + 1}/{view.total}    Score: {view.score}\n\n",
            Style(color=MUTED_GRAY),
        )
        content.append("Hint: ", Style(color=MUTED_GRAY))
        content.append(view.hint, Style(color=TEXT_WHITE, bold=True))
        content.append("\n\n")

        if view.feedback == AnswerOutcome.CORRECT:
            slot_style = Style(color=SUCCESS_GREEN, bold=True)
        elif view.feedback == AnswerOutcome.INCORRECT:
            slot_style = Style(color=ERROR_RED, bold=True)
        else:
            slot_style = Style(color=INFO_BLUE, bold=True)
        slots = [token.letter for token in view.assembly]
        slots += ["_"] * (view.word_length - len(slots))
        content.append(" ".join(slots), slot_style)
        content.append("\n\n")

        if view.revealed_word:
            content.append("The word was: ", Style(color=MUTED_GRAY))
            content.append(view.revealed_word, Style(color=SUCCESS_GREEN, bold=True))
            content.append("\n\n")

        for i, token in enumerate(view.bank):
            content.append(f"{i + 1}:", Style(color=MUTED_GRAY))
            content.append(f"{token.letter}  ", Style(color=ACCENT_AMBER, bold=True))
        content.append("\n")

        return Panel(
            Align.left(content),
            title=MODE_LABELS[view.mode.value],
            subtitle="number=take letter  u=undo  r=reshuffle  c=check  s=skip  q=quit",
            border_style=get_mode_color(view.mode.value),
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SortingPanel:
    """Current order of the sorting round."""

    def __init__(self, view: SortingView):
        self.view = view

    def render(self) -> Panel:
        view = self.view
        content = Text()
        for i, entry in enumerate(view.order):
            content.append(f"{i + 1}. ", Style(color=ACCENT_AMBER, bold=True))
            content.append(entry.content, Style(color=TEXT_WHITE, bold=True))
            content.append("\n")

        if view.checked:
            content.append("\n")
            if view.is_correct:
                content.append(create_success_header())
            else:
                content.append("✗ Not in order yet, keep going!", Style(color=ERROR_RED, bold=True))

        return Panel(
            Align.left(content),
            title=MODE_LABELS[view.mode.value],
            subtitle="3u / 3d = move item 3 up/down  c=check  q=quit",
            border_style=get_mode_color(view.mode.value),
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SummaryPanel:
    """Final score of a finished game."""

    def __init__(self, title: str, mode: str, score: int, total: int):
        self.title = title
        self.mode = mode
        self.score = score
        self.total = total

    @property
    def percent(self) -> float:
        return (self.score / self.total * 100) if self.total > 0 else 0.0

    def render(self) -> Panel:
        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.SIMPLE)
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")
        stats.add_row("Game", MODE_LABELS.get(self.mode, self.mode))
        stats.add_row("Score", Text(f"{self.score}/{self.total}", style=get_score_style(self.percent)))
        stats.add_row("Success", Text(f"{self.percent:.0f}%", style=get_score_style(self.percent)))

        content = Text()
        content.append("Game Complete!\n\n", Style(color=BRAND_INDIGO, bold=True))
        content.append(f"{self.title}\n", Style(color=TEXT_WHITE))
        content.append(f"Progress: {progress_bar(self.score, self.total)}\n", Style(color=MUTED_GRAY))

        return Panel(
            Columns(
                [Align.center(content), Align.center(stats)],
                align="center",
                padding=(0, 1),
            ),
            title="Summary",
            border_style=ACCENT_AMBER,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()
