from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.text import Text

from exercises.matching import VocabularyMatchSession
from exercises.schemas import ExerciseSchema
from exercises.sequential import SequentialSession, SingleChoiceSession
from models import Exercise, ExerciseKind, ReadingComprehensionExercise, Score, UserAnswer
from ui.components import (
    ExercisePanel,
    FeedbackPanel,
    MatchBoard,
    ResultsPanel,
    WelcomeScreen,
    option_label,
)
from ui.styles import ERROR_RED, MUTED_GRAY, SPANISH_GOLD, SUCCESS_GREEN

QUIT = "quit"


class TutorUI:
    """Main UI orchestrator for the Spanish Tutor application."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _ask(self, prompt: str) -> str:
        return self.console.input(Text(prompt, style=f"bold {MUTED_GRAY}")).strip()

    def show_welcome(self, schemas: list[ExerciseSchema]) -> None:
        """Display the banner and the menu of exercise kinds."""
        self.console.print(WelcomeScreen(schemas))
        self.console.print()

    def choose_kind(self, schemas: list[ExerciseSchema]) -> ExerciseKind | None:
        """Ask for an exercise kind from the menu.

        Returns:
            The chosen kind, or None if the user quits.
        """
        while True:
            user_input = self._ask("Elige una actividad: ")

            if user_input.lower() == "q":
                return None

            if user_input.isdigit() and 1 <= int(user_input) <= len(schemas):
                return schemas[int(user_input) - 1].kind

            self.console.print(
                Text(
                    f"Please enter a number from 1 to {len(schemas)} (or 'q' to quit)\n",
                    style=ERROR_RED,
                )
            )

    def show_loading(self, message: str = "Generando actividad...") -> Status:
        """Spinner shown while an exercise is being generated."""
        return self.console.status(Text(message, style=SPANISH_GOLD), spinner="dots")

    # ------------------------------------------------------------------
    # Sequential exercises
    # ------------------------------------------------------------------

    def show_question(self, session: SequentialSession) -> str:
        """Display the current question and get the user's answer.

        Returns:
            "quit" if the user quits, otherwise the answer text (for choice
            questions, the chosen option).
        """
        exercise = session.exercise
        question = session.current_question
        is_choice = isinstance(session, SingleChoiceSession)
        passage = (
            exercise.passage
            if isinstance(exercise, ReadingComprehensionExercise)
            else None
        )

        panel = ExercisePanel(
            title=exercise.title,
            prompt_text=question.prompt,
            options=list(question.options or ()),
            exercise_number=session.current_index + 1,
            total_exercises=session.total,
            instructions=exercise.instructions,
            passage=passage,
            verb=question.verb,
            tense=question.tense,
            input_mode="choice" if is_choice else "text",
        )
        self.console.print(panel)
        self.console.print()

        if is_choice:
            return self._get_choice_input(list(question.options or ()))
        return self._get_text_input()

    def _get_choice_input(self, options: list[str]) -> str:
        labels = [option_label(i) for i in range(len(options))]
        while True:
            user_input = self._ask("Tu respuesta: ")

            if user_input.lower() == "q":
                return QUIT

            if user_input.upper() in labels:
                return options[labels.index(user_input.upper())]

            self.console.print(
                Text(
                    f"Please enter {', '.join(labels)} (or 'q' to quit)\n",
                    style=ERROR_RED,
                )
            )

    def _get_text_input(self) -> str:
        while True:
            user_input = self._ask("Tu respuesta: ")

            if user_input.lower() == "q":
                return QUIT

            if user_input:
                return user_input

            self.console.print(Text("Please type an answer (or 'q' to quit)\n", style=ERROR_RED))

    def show_feedback(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: str | None = None,
        hint: str | None = None,
    ) -> None:
        """Display feedback for the user's answer."""
        feedback = FeedbackPanel(
            is_correct=is_correct,
            correct_answer=correct_answer,
            user_answer=user_answer,
            explanation=explanation,
            hint=hint,
        )
        self.console.print(feedback)
        self.console.print()

    # ------------------------------------------------------------------
    # Vocabulary matching
    # ------------------------------------------------------------------

    def show_match_board(self, session: VocabularyMatchSession) -> None:
        self.console.print(MatchBoard(session))
        self.console.print()

    def ask_match_pair(self, total: int) -> tuple[int, int] | None:
        """Ask for a word number and a definition letter, e.g. "2 C".

        Returns:
            Zero-based (word, definition) positions, or None if the user quits.
        """
        labels = [option_label(i) for i in range(total)]
        while True:
            user_input = self._ask("Pareja: ")

            if user_input.lower() == "q":
                return None

            compact = user_input.replace(" ", "").upper()
            number, letter = compact[:-1], compact[-1:]
            if number.isdigit() and 1 <= int(number) <= total and letter in labels:
                return int(number) - 1, labels.index(letter)

            self.console.print(
                Text(
                    f"Please enter a number 1-{total} and a letter {labels[0]}-{labels[-1]}"
                    " (or 'q' to quit)\n",
                    style=ERROR_RED,
                )
            )

    # ------------------------------------------------------------------
    # Results and reporting
    # ------------------------------------------------------------------

    def show_results(
        self, exercise: Exercise, answers: tuple[UserAnswer, ...], score: Score
    ) -> None:
        self.console.print(ResultsPanel(exercise, answers, score))
        self.console.print()

    def ask_send_report(self) -> bool:
        """Ask whether to email the results to a teacher."""
        user_input = self._ask("¿Enviar resultados a tu profesor? (s/n): ")
        return user_input.lower() in ("s", "si", "sí", "y", "yes")

    def ask_report_details(self) -> tuple[str, str]:
        """Ask for the student's name and the teacher's email address."""
        student_name = self._ask("Tu nombre: ")
        recipient_address = self._ask("Email del profesor: ")
        return student_name, recipient_address

    def show_report_result(self, success: bool, message: str) -> None:
        if success:
            self.show_success(message)
        else:
            self.show_error(message)

    def ask_next_action(self) -> str:
        """Ask what to do after an exercise.

        Returns:
            "restart" for a new exercise of the same kind, "menu" to choose
            another kind, or "quit".
        """
        while True:
            user_input = self._ask(
                "[r] otra actividad igual  [m] menú  [q] salir: "
            ).lower()

            if user_input == "r":
                return "restart"
            if user_input == "m":
                return "menu"
            if user_input == "q":
                return QUIT

            self.console.print(Text("Please enter r, m or q\n", style=ERROR_RED))

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_success(self, message: str) -> None:
        self.console.print(Text(message, style=SUCCESS_GREEN))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(Text("👋 ¡Hasta luego!", style=MUTED_GRAY))

    def ask_retry(self) -> bool:
        """Ask whether to retry a failed generation request."""
        user_input = self._ask("¿Intentar de nuevo? (s/n): ")
        return user_input.lower() in ("s", "si", "sí", "y", "yes")

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(Text("Press Enter to continue...", style=f"bold {MUTED_GRAY}"))
