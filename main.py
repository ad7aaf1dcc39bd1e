import argparse
import random
import signal
import sys
import time

from loguru import logger
from rich.console import Console

from activity import ActivityController
from exercises import (
    ContentGenerationClient,
    ExerciseError,
    GenerationConfig,
    GenerationProvider,
    OpenAIProvider,
    SequentialSession,
    SessionController,
    TutorConfig,
    VocabularyMatchSession,
    list_exercise_schemas,
)
from models import ExerciseKind
from reporting import ResultsReporter, get_results_reporter
from ui import QUIT, TutorUI

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"


def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(description="Spanish Tutor")
    parser.add_argument(
        "--kind",
        "-k",
        choices=[kind.value for kind in ExerciseKind],
        default=None,
        help="Start directly with this exercise kind",
    )
    parser.add_argument(
        "--model",
        "-m",
        type=str,
        default=None,
        help="Generation model (default: OPENAI_MODEL or gpt-4o-mini)",
    )
    parser.add_argument(
        "--level",
        "-l",
        type=str,
        default=None,
        help="CEFR level of the exercises (default: A2)",
    )
    parser.add_argument(
        "--learner-language",
        type=str,
        default=None,
        help="Language used for hints and translations (default: Greek)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print debug logging to stderr",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; WARNING and above unless verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=LOG_FORMAT)


def build_config(args: argparse.Namespace) -> TutorConfig:
    """Build the tutor config from the environment and command line."""
    generation = GenerationConfig.from_env(
        model=args.model,
        level=args.level,
        learner_language=args.learner_language,
    )
    return TutorConfig(generation=generation)


def handle_quit(ui: TutorUI) -> None:
    """Print quit message and exit."""
    ui.show_quit_message()
    sys.exit(0)


def create_sigint_handler(ui: TutorUI):
    """Create a SIGINT handler that exits cleanly."""

    def sigint_handler(signum, frame):
        handle_quit(ui)

    return sigint_handler


def start_activity(
    ui: TutorUI, controller: ActivityController, kind: ExerciseKind
) -> SessionController | None:
    """Generate an exercise, offering to retry on failure.

    Returns:
        The new session, or None if the user gives up.
    """
    while True:
        try:
            with ui.show_loading():
                session = controller.start(kind)
        except ExerciseError as e:
            ui.show_error(f"Failed to generate the activity: {e}")
            if ui.ask_retry():
                continue
            return None
        if session is not None:
            return session


def play_sequential(ui: TutorUI, session: SequentialSession) -> bool:
    """Run a question-by-question session. Returns False if the user quits."""
    while not session.is_completed:
        ui.clear_screen()
        answer = ui.show_question(session)
        if answer == QUIT:
            return False

        try:
            user_answer = session.submit_answer(answer)
        except ValueError as e:
            ui.show_error(str(e))
            continue

        question = session.exercise.questions[user_answer.question_index]
        ui.show_feedback(
            user_answer.is_correct,
            question.correct_answer,
            user_answer=answer,
            explanation=question.explanation,
            hint=question.hint,
        )
        ui.wait_for_continue()
        session.advance()

    return True


def play_matching(ui: TutorUI, session: VocabularyMatchSession) -> bool:
    """Run a matching session. Returns False if the user quits."""
    while not session.is_completed:
        ui.clear_screen()
        ui.show_match_board(session)
        pair = ui.ask_match_pair(session.total)
        if pair is None:
            return False

        word, definition = pair
        try:
            session.select_word(word)
            outcome = session.select_definition(definition)
        except ValueError as e:
            session.clear_selection()
            ui.show_error(str(e))
            continue

        if outcome is not None and not outcome.is_correct:
            ui.show_match_board(session)
            time.sleep(session.incorrect_remaining())

    return True


def play_session(ui: TutorUI, session: SessionController) -> bool:
    if isinstance(session, VocabularyMatchSession):
        return play_matching(ui, session)
    if isinstance(session, SequentialSession):
        return play_sequential(ui, session)
    raise TypeError(f"Unsupported session type: {type(session).__name__}")


def offer_report(ui: TutorUI, controller: ActivityController) -> None:
    """Ask whether to send the results and send them until accepted or declined."""
    while ui.ask_send_report():
        student_name, recipient_address = ui.ask_report_details()
        with ui.show_loading("Enviando..."):
            result = controller.send_report(student_name, recipient_address)
        ui.show_report_result(result.success, result.message)
        if result.success:
            return


def run_interactive(
    config: TutorConfig | None = None,
    provider: GenerationProvider | None = None,
    reporter: ResultsReporter | None = None,
    kind: ExerciseKind | None = None,
    seed: int | None = None,
    console: Console | None = None,
) -> None:
    """Run the interactive tutoring loop.

    Args:
        config: Tutor configuration (default: built from the environment).
        provider: Generation provider (default: OpenAI).
        reporter: Results reporter (default: simulated email).
        kind: Exercise kind to start with, skipping the menu once.
        seed: Random seed for shuffling.
        console: Console to render to.
    """
    config = config or TutorConfig(generation=GenerationConfig.from_env())
    ui = TutorUI(console)
    ui.clear_screen()

    client = ContentGenerationClient(
        provider or OpenAIProvider(config.generation), config.generation
    )
    controller = ActivityController(
        client,
        reporter=reporter or get_results_reporter(config.reporting),
        match_config=config.matching,
        rng=random.Random(seed) if seed is not None else None,
    )

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    schemas = list_exercise_schemas()
    next_kind = kind

    while True:
        if next_kind is None:
            ui.show_welcome(schemas)
            next_kind = ui.choose_kind(schemas)
            if next_kind is None:
                break

        session = start_activity(ui, controller, next_kind)
        if session is None:
            next_kind = None
            continue

        if not play_session(ui, session):
            break

        ui.show_results(session.exercise, session.answers, session.score)
        offer_report(ui, controller)

        action = ui.ask_next_action()
        controller.restart()
        if action == "restart":
            next_kind = controller.current_kind
        elif action == "menu":
            next_kind = None
        else:
            break

    ui.show_quit_message()


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    configure_logging(args.verbose)
    config = build_config(args)
    if not config.generation.has_api_key:
        logger.warning("OPENAI_API_KEY is not set; exercises cannot be generated")

    run_interactive(
        config,
        kind=ExerciseKind(args.kind) if args.kind else None,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
