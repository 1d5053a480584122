from rich.style import Style
from rich.text import Text
from rich.theme import Theme

BRAND_INDIGO = "#6366F1"
ACCENT_AMBER = "#F59E0B"
SUCCESS_GREEN = "#22C55E"
ERROR_RED = "#EF4444"
INFO_BLUE = "#3B82F6"
MUTED_GRAY = "#94A3B8"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=BRAND_INDIGO, bold=True),
        "secondary": Style(color=ACCENT_AMBER, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=ACCENT_AMBER, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "title": Style(color=BRAND_INDIGO, bold=True),
        "subtitle": Style(color=MUTED_GRAY),
    }
)

# One accent color per game mode, keyed by mode tag
MODE_COLORS = {
    "QUIZ": BRAND_INDIGO,
    "MATCHING": "#A855F7",
    "MEMORY": "#EC4899",
    "TRUE_FALSE": INFO_BLUE,
    "WORD_SCRAMBLE": ACCENT_AMBER,
    "FILL_BLANKS": "#14B8A6",
    "SORTING": "#F97316",
}

MODE_LABELS = {
    "QUIZ": "Quiz",
    "MATCHING": "Matching",
    "MEMORY": "Memory Cards",
    "TRUE_FALSE": "True or False",
    "WORD_SCRAMBLE": "Word Scramble",
    "FILL_BLANKS": "Fill in the Blanks",
    "SORTING": "Sorting",
}


def get_mode_color(mode: str) -> str:
    """Get the accent color for a game mode."""
    return MODE_COLORS.get(mode, BRAND_INDIGO)


def get_score_style(percent: float) -> Style:
    """Get color style based on the final score percentage."""
    if percent >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif percent >= 50:
        return Style(color=ACCENT_AMBER)
    else:
        return Style(color=ERROR_RED)


def create_success_header() -> Text:
    """Create a success/correct answer header."""
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("Correct!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_error_header() -> Text:
    """Create an error/incorrect answer header."""
    header = Text()
    header.append("✗ ", Style(color=ERROR_RED, bold=True))
    header.append("Not quite!", Style(color=ERROR_RED, bold=True))
    return header
