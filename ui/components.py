from typing import Literal

from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from exercises.matching import VocabularyMatchSession
from exercises.schemas import BLANK_MARKER, ExerciseSchema
from models import Exercise, Score, UserAnswer, VocabularyMatchExercise
from ui.styles import (
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    SPANISH_GOLD,
    SPANISH_RED,
    SUCCESS_GREEN,
    TEXT_WHITE,
    create_error_header,
    create_success_header,
    create_welcome_banner,
    get_percentage_style,
)


def option_label(index: int) -> str:
    """Letter label for an option: 0 -> A, 1 -> B, ..."""
    return chr(65 + index)


def render_prompt(prompt: str, fill: str | None = None) -> Text:
    """Render a prompt, highlighting the blank (or the text filling it)."""
    text = Text()
    before, marker, after = prompt.partition(BLANK_MARKER)
    text.append(before, Style(color=TEXT_WHITE, bold=True))
    if marker:
        if fill is None:
            text.append("[___]", Style(color=SPANISH_GOLD, bold=True))
        else:
            text.append(f'"{fill}"', Style(color=SPANISH_GOLD, bold=True))
        text.append(after, Style(color=TEXT_WHITE, bold=True))
    return text


class WelcomeScreen:
    """Welcome banner with the menu of exercise kinds."""

    def __init__(self, schemas: list[ExerciseSchema]):
        self.schemas = schemas

    def render(self) -> Panel:
        banner = create_welcome_banner()
        banner.append("\n\n")
        banner.append("¿Qué quieres practicar hoy?\n", Style(color=TEXT_WHITE))
        banner.append("Type 'q' at any time to quit.", Style(color=MUTED_GRAY))

        menu = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        menu.add_column("Key", justify="center")
        menu.add_column("Activity")

        for i, schema in enumerate(self.schemas, start=1):
            entry = Text()
            entry.append(schema.display_title, Style(color=SPANISH_RED, bold=True))
            entry.append("\n")
            entry.append(schema.description, Style(color=MUTED_GRAY))
            menu.add_row(Text(str(i), style=Style(color=SPANISH_GOLD, bold=True)), entry)

        return Panel(
            Group(Align.center(banner), Text(), Align.center(menu)),
            border_style=SPANISH_RED,
            box=box.HEAVY,
            padding=(1, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ExercisePanel:
    """A styled panel for one question of a sequential exercise."""

    def __init__(
        self,
        title: str,
        prompt_text: str,
        options: list[str] | None = None,
        exercise_number: int = 0,
        total_exercises: int = 0,
        instructions: str | None = None,
        passage: str | None = None,
        verb: str | None = None,
        tense: str | None = None,
        input_mode: Literal["choice", "text"] = "choice",
    ):
        self.title = title
        self.prompt_text = prompt_text
        self.options = options or []
        self.exercise_number = exercise_number
        self.total_exercises = total_exercises
        self.instructions = instructions
        self.passage = passage
        self.verb = verb
        self.tense = tense
        self.input_mode = input_mode

    @property
    def progress_percent(self) -> float:
        if self.total_exercises == 0:
            return 0.0
        return (self.exercise_number - 1) / self.total_exercises * 100

    def render(self) -> Panel:
        content = Text()

        if self.total_exercises > 0:
            content.append(self._create_progress_bar(), Style(color=MUTED_GRAY))
            content.append("\n")
            content.append(
                f"Pregunta {self.exercise_number}/{self.total_exercises}\n",
                Style(color=MUTED_GRAY),
            )

        if self.instructions:
            content.append(self.instructions, Style(color=INFO_BLUE, italic=True))
            content.append("\n\n")

        if self.passage:
            content.append(self.passage, Style(color=TEXT_WHITE))
            content.append("\n\n")

        content.append(render_prompt(self.prompt_text))
        if self.verb:
            content.append(f"  ({self.verb}", Style(color=MUTED_GRAY))
            if self.tense:
                content.append(f", {self.tense}", Style(color=MUTED_GRAY))
            content.append(")", Style(color=MUTED_GRAY))
        content.append("\n\n")

        for i, option in enumerate(self.options):
            content.append(f"{option_label(i)}. ", Style(color=SPANISH_GOLD, bold=True))
            content.append(option, Style(color=TEXT_WHITE))
            content.append("\n")

        if self.input_mode == "choice":
            last = option_label(max(len(self.options) - 1, 0))
            subtitle = f"Type A-{last} (or 'q' to quit)"
        else:
            subtitle = "Type the missing word (or 'q' to quit)"

        return Panel(
            Align.left(content),
            title=self.title,
            subtitle=subtitle,
            border_style=SPANISH_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying answer feedback."""

    def __init__(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: str | None = None,
        hint: str | None = None,
    ):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer
        self.explanation = explanation
        self.hint = hint

    def render(self) -> Panel:
        content = Text()

        if self.is_correct:
            content.append(create_success_header())
            content.append("\n")
        else:
            content.append(create_error_header())
            content.append("\n")
            if self.user_answer:
                content.append(
                    f"Tu respuesta: {self.user_answer}\n", Style(color=MUTED_GRAY)
                )
            content.append("\n")
            content.append("Respuesta correcta: ", Style(color=MUTED_GRAY))
            content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))
            if self.hint:
                content.append("\n")
                content.append("Pista: ", Style(color=SPANISH_GOLD, bold=True))
                content.append(self.hint, Style(color=TEXT_WHITE))

        if self.explanation:
            content.append("\n\n")
            content.append("Explicación:\n", Style(color=SPANISH_GOLD, bold=True))
            content.append(self.explanation, Style(color=TEXT_WHITE))

        return Panel(
            Align.left(content),
            title="Resultado",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class MatchBoard:
    """Two-column board for a vocabulary matching session.

    Words are numbered and definitions lettered. Solved entries are ticked,
    entries from the last wrong pair are crossed until their delay passes.
    """

    def __init__(self, session: VocabularyMatchSession):
        self.session = session

    def render(self) -> Panel:
        session = self.session
        table = Table(
            show_header=True,
            header_style=Style(color=SPANISH_RED, bold=True),
            border_style=MUTED_GRAY,
            box=box.HEAVY,
        )
        table.add_column("Palabra")
        table.add_column("Definición")

        words = session.words
        definitions = session.definitions
        for i in range(session.total):
            table.add_row(
                self._cell(
                    f"{i + 1}. {words[i]}",
                    solved=session.is_word_solved(i),
                    incorrect=session.is_word_incorrect(i),
                    selected=session.selected_word == i,
                ),
                self._cell(
                    f"{option_label(i)}. {definitions[i]}",
                    solved=session.is_definition_solved(i),
                    incorrect=session.is_definition_incorrect(i),
                    selected=session.selected_definition == i,
                ),
            )

        instructions = Text(
            session.exercise.instructions or "", Style(color=INFO_BLUE, italic=True)
        )
        progress = Text(
            f"Parejas: {session.solved_count}/{session.total}   "
            f"Errores: {session.failed_attempts}",
            Style(color=MUTED_GRAY),
        )

        return Panel(
            Group(instructions, Text(), Align.center(table), Text(), progress),
            title=session.exercise.title,
            subtitle="Pick a number and a letter, e.g. '2 C' (or 'q' to quit)",
            border_style=SPANISH_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _cell(self, label: str, solved: bool, incorrect: bool, selected: bool) -> Text:
        if solved:
            return Text(f"✓ {label}", Style(color=SUCCESS_GREEN, dim=True))
        if incorrect:
            return Text(f"✗ {label}", Style(color=ERROR_RED, bold=True))
        if selected:
            return Text(f"▶ {label}", Style(color=SPANISH_GOLD, bold=True))
        return Text(f"  {label}", Style(color=TEXT_WHITE))

    def __rich__(self) -> Panel:
        return self.render()


class ResultsPanel:
    """Final score and a per-question review of the answer log."""

    def __init__(self, exercise: Exercise, answers: tuple[UserAnswer, ...], score: Score):
        self.exercise = exercise
        self.answers = answers
        self.score = score

    def render(self) -> Panel:
        summary = Text(justify="center")
        summary.append("¡Resultados!\n", Style(color=SPANISH_RED, bold=True))
        summary.append(f"Ejercicio: {self.exercise.title}\n\n", Style(color=MUTED_GRAY))
        summary.append(
            f"{self.score.correct_count} / {self.score.total}\n",
            Style(color=TEXT_WHITE, bold=True),
        )
        summary.append(
            f"{self.score.percentage}%", get_percentage_style(self.score.percentage)
        )

        review = Table(
            title="Resumen de Respuestas",
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.SIMPLE,
        )
        review.add_column("Mark", justify="center")
        review.add_column("Answer")
        for answer in self.answers:
            mark = (
                Text("✓", Style(color=SUCCESS_GREEN, bold=True))
                if answer.is_correct
                else Text("✗", Style(color=ERROR_RED, bold=True))
            )
            review.add_row(mark, self._review_line(answer))

        return Panel(
            Columns([Align.center(summary), Align.center(review)], align="center", padding=(0, 3)),
            title="Resultados",
            border_style=SPANISH_GOLD,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _review_line(self, answer: UserAnswer) -> Text:
        if isinstance(self.exercise, VocabularyMatchExercise):
            item = self.exercise.items[answer.question_index]
            return Text(f"{item.word} - {item.definition}", Style(color=TEXT_WHITE))

        question = self.exercise.questions[answer.question_index]
        line = render_prompt(question.prompt, fill=answer.answer)
        if BLANK_MARKER not in question.prompt:
            line.append(f"  {answer.answer}", Style(color=SPANISH_GOLD, bold=True))
        if not answer.is_correct:
            line.append(f"  ({question.correct_answer})", Style(color=SUCCESS_GREEN))
        return line

    def __rich__(self) -> Panel:
        return self.render()
