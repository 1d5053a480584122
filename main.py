import argparse
import random
import re
import sys
import time
from pathlib import Path

from loguru import logger
from rich.console import Console

from games import (
    Direction,
    FillBlankView,
    FlipResult,
    MatchingEngine,
    MemoryEngine,
    QuizView,
    SelectionResult,
    SessionStartError,
    SimulatedTimer,
    SortingEngine,
    TrueFalseEngine,
    WordScrambleEngine,
    parse_letter_input,
)
from games.choice import ChoiceEngine
from generator import get_content_generator
from models import AnswerOutcome, GameMode, GenerationRequest, GradeLevel, SessionPhase
from session import SessionController
from settings import get_settings
from ui import GameUI

START_ERROR_MESSAGE = (
    "An error occurred while creating the game. "
    "Please try again or pick a different topic."
)

GRADES: dict[str, GradeLevel] = {
    "5": GradeLevel.GRADE_5,
    "6": GradeLevel.GRADE_6,
    "7": GradeLevel.GRADE_7,
    "8": GradeLevel.GRADE_8,
}

TRUE_FALSE_INPUTS = {
    "t": True,
    "true": True,
    "d": True,  # Doğru
    "f": False,
    "false": False,
    "y": False,  # Yanlış
}

PLAY_AGAIN_INPUTS = {"y", "yes", "e", "evet"}

MATCHING_TOKEN = re.compile(r"(\d+)|([A-Za-z])")
SORTING_MOVE = re.compile(r"^(\d+)\s*([udUD])$")


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(description="MindForge - educational mini-games")
    parser.add_argument(
        "--mode",
        "-m",
        type=str.upper,
        choices=[mode.value for mode in GameMode],
        default=GameMode.QUIZ.value,
        help="Game mode (default: QUIZ)",
    )
    parser.add_argument(
        "--grade",
        "-g",
        choices=sorted(GRADES),
        default="5",
        help="Grade level 5-8 (default: 5)",
    )
    parser.add_argument(
        "--subject",
        "-s",
        type=str,
        default="Matematik",
        help="School subject (default: Matematik)",
    )
    parser.add_argument(
        "--topic",
        "-t",
        type=str,
        default=None,
        help="Topic of the game; asked interactively if omitted",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Play the bundled sample content instead of calling Gemini",
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=None,
        help="JSON file of batches keyed by mode tag to play instead of Gemini",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible shuffles",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print debug logging to stderr",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else get_settings().log_level.upper(),
        format="<level>{level: <8}</level> | {message}",
    )


def settle(timer: SimulatedTimer) -> None:
    """Wait out pending transitions in real time, firing each as it falls due."""
    delay = timer.next_delay_ms()
    while delay is not None:
        time.sleep(delay / 1000)
        timer.advance(delay)
        delay = timer.next_delay_ms()


# ============================================================================
# Single-shot games
# ============================================================================


def read_choice(ui: GameUI, engine: ChoiceEngine):
    """Prompt until the player enters a choice the engine accepts.

    Returns:
        The choice, or None if the player quits.
    """
    view = engine.snapshot()
    while True:
        user_input = ui.ask()
        if user_input == "quit":
            return None

        if isinstance(engine, TrueFalseEngine):
            choice = TRUE_FALSE_INPUTS.get(user_input.lower())
            if choice is not None:
                return choice
            ui.show_hint("Please enter T or F (or 'q' to quit)")
            continue

        index = parse_letter_input(user_input, len(view.options))
        if index is not None:
            return view.options[index] if isinstance(view, FillBlankView) else index
        last = chr(64 + len(view.options))
        ui.show_hint(f"Please enter A-{last} (or 'q' to quit)")


def describe_choice(view, choice) -> str:
    """Human-readable form of a choice for feedback."""
    if isinstance(view, QuizView):
        return f"{chr(65 + choice)}. {view.options[choice]}"
    if isinstance(choice, bool):
        return "True" if choice else "False"
    return str(choice)


def play_choice(ui: GameUI, controller: SessionController, timer: SimulatedTimer) -> bool:
    """Play a quiz, true/false or fill-in-the-blank game item by item."""
    engine = controller.engine
    while controller.phase != SessionPhase.COMPLETE:
        ui.show_view(engine.snapshot())
        choice = read_choice(ui, engine)
        if choice is None:
            return False

        outcome = engine.submit(choice)
        answered = engine.snapshot()
        ui.show_feedback(
            outcome == AnswerOutcome.CORRECT,
            describe_choice(answered, engine.correct_choice()),
            describe_choice(answered, choice),
        )

        if timer.has_pending:
            settle(timer)
        elif ui.wait_for_continue() == "quit":
            return False
        engine.next_item()
    return True


# ============================================================================
# Board games
# ============================================================================


def parse_matching_input(user_input: str, size: int) -> list[tuple[str, int]] | None:
    """Parse "2B"-style input into (column, index) selections.

    Numbers pick terms and letters pick definitions. Returns None if any
    token is out of range or nothing was entered.
    """
    selections = []
    for number, letter in MATCHING_TOKEN.findall(user_input):
        if number:
            index = int(number) - 1
            column = "term"
        else:
            index = ord(letter.upper()) - 65
            column = "definition"
        if not 0 <= index < size:
            return None
        selections.append((column, index))
    return selections or None


def play_matching(ui: GameUI, controller: SessionController, timer: SimulatedTimer) -> bool:
    engine: MatchingEngine = controller.engine
    while controller.phase != SessionPhase.COMPLETE:
        view = engine.snapshot()
        ui.show_view(view)
        user_input = ui.ask()
        if user_input == "quit":
            return False

        selections = parse_matching_input(user_input, len(view.terms))
        if selections is None:
            ui.show_hint("Enter a term number and/or a definition letter, e.g. 2B")
            continue

        for column, index in selections:
            if column == "term":
                result = engine.select_term(view.terms[index].id)
            else:
                result = engine.select_definition(view.definitions[index].id)
            if result == SelectionResult.MISMATCHED:
                ui.show_view(engine.snapshot())
                settle(timer)
    return True


def play_memory(ui: GameUI, controller: SessionController, timer: SimulatedTimer) -> bool:
    engine: MemoryEngine = controller.engine
    while controller.phase != SessionPhase.COMPLETE:
        ui.show_view(engine.snapshot())
        user_input = ui.ask()
        if user_input == "quit":
            return False

        numbers = user_input.replace(",", " ").split()
        if not numbers or not all(n.isdigit() for n in numbers):
            ui.show_hint(f"Enter card numbers between 1 and {len(engine.cards)}")
            continue

        for number in numbers:
            result = engine.flip(int(number) - 1)
            if result in (FlipResult.MATCH, FlipResult.MISMATCH):
                ui.show_view(engine.snapshot())
                settle(timer)
    return True


def play_sorting(ui: GameUI, controller: SessionController, timer: SimulatedTimer) -> bool:
    engine: SortingEngine = controller.engine
    while controller.phase != SessionPhase.COMPLETE:
        ui.show_view(engine.snapshot())
        user_input = ui.ask()
        if user_input == "quit":
            return False

        if user_input.lower() == "c":
            engine.check_order()
            continue

        match = SORTING_MOVE.match(user_input)
        if match is None:
            ui.show_hint("Enter e.g. 3u or 3d to move item 3, or c to check")
            continue
        position = int(match.group(1)) - 1
        direction = Direction.UP if match.group(2).lower() == "u" else Direction.DOWN
        if not engine.swap_adjacent(position, direction):
            ui.show_hint("That item cannot move that way")

    ui.show_view(engine.snapshot())
    return True


# ============================================================================
# Word scramble
# ============================================================================


def play_word_scramble(
    ui: GameUI, controller: SessionController, timer: SimulatedTimer
) -> bool:
    engine: WordScrambleEngine = controller.engine
    while controller.phase != SessionPhase.COMPLETE:
        view = engine.snapshot()
        ui.show_view(view)
        user_input = ui.ask("Command: ")
        if user_input == "quit":
            return False

        command = user_input.lower()
        if command.isdigit():
            index = int(command) - 1
            if 0 <= index < len(view.bank):
                engine.move_to_assembly(view.bank[index].id)
            else:
                ui.show_hint(f"Pick a letter between 1 and {len(view.bank)}")
        elif command == "u":
            if view.assembly:
                engine.move_to_bank(view.assembly[-1].id)
        elif command == "r":
            engine.reshuffle_bank()
        elif command == "c":
            result = engine.check_answer()
            if result is None:
                ui.show_hint("Place every letter before checking")
            elif result:
                ui.show_view(engine.snapshot())
                settle(timer)
        elif command == "s":
            if engine.skip():
                ui.show_view(engine.snapshot())
                settle(timer)
        else:
            ui.show_hint("Unknown command")
    return True


PLAY_LOOPS = {
    GameMode.QUIZ: play_choice,
    GameMode.TRUE_FALSE: play_choice,
    GameMode.FILL_BLANKS: play_choice,
    GameMode.MATCHING: play_matching,
    GameMode.MEMORY: play_memory,
    GameMode.WORD_SCRAMBLE: play_word_scramble,
    GameMode.SORTING: play_sorting,
}


# ============================================================================
# Entry point
# ============================================================================


def start_game(
    ui: GameUI, controller: SessionController, args, generator, topic: str | None = None
) -> bool:
    """Create a game, asking for another topic after each failed attempt.

    Returns:
        True once a session is running, False if the player gave up.
    """
    topic = (topic or "").strip() or ui.ask("Topic: ")
    while True:
        if not topic or topic == "quit":
            return False
        request = GenerationRequest(
            grade=GRADES[args.grade],
            subject=args.subject,
            topic=topic,
            mode=GameMode(args.mode),
        )
        ui.show_loading(topic)
        try:
            controller.begin(request, generator)
            return True
        except SessionStartError:
            ui.show_error(START_ERROR_MESSAGE)
            controller.resume()
        topic = ui.ask("Topic (press Enter to quit): ")


def play_session(ui: GameUI, controller: SessionController, timer: SimulatedTimer) -> None:
    """Play the running session to the end, or until the player quits it."""
    batch = controller.batch
    ui.clear_screen()
    ui.show_welcome(batch.title, batch.description, batch.mode.value, len(batch.items))

    if PLAY_LOOPS[batch.mode](ui, controller, timer):
        summary = controller.summary()
        ui.show_summary(summary.title, summary.mode.value, summary.score, summary.total)


def ask_play_again(ui: GameUI) -> bool:
    answer = ui.ask("Play again? (y/N): ")
    return answer.lower() in PLAY_AGAIN_INPUTS


def run_interactive(
    args, console: Console | None = None, rng: random.Random | None = None
) -> int:
    """Run games until the player stops. Returns the process exit code."""
    ui = GameUI(console)
    timer = SimulatedTimer()
    controller = SessionController(rng=rng or random.Random(args.seed), timer=timer)

    try:
        generator = get_content_generator(offline=args.offline, content_path=args.content)
    except SessionStartError as e:
        logger.error(f"Cannot set up content source: {e}")
        ui.show_error(START_ERROR_MESSAGE)
        return 1

    topic = args.topic
    played = 0
    while start_game(ui, controller, args, generator, topic):
        play_session(ui, controller, timer)
        played += 1
        if not ask_play_again(ui):
            break
        # Back to configuration with a fresh topic prompt
        controller.reset()
        topic = None

    ui.show_quit_message()
    return 0 if played else 1


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        code = run_interactive(args)
    except KeyboardInterrupt:
        GameUI().show_quit_message()
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
