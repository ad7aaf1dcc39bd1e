"""Prompt templates and output schema descriptors for every exercise kind.

The registry is pure data: for each ExerciseKind it holds the prompt sent
to the generation provider and a structural descriptor of the document the
provider is asked to return. The generation client and the validator look
kinds up here; nothing in this module talks to the network.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models import AnswerStyle, ExerciseKind

from .config import GenerationConfig

BLANK_MARKER = "___"


# =============================================================================
# Schema Descriptor
# =============================================================================


class SchemaNode(BaseModel):
    """A node of a structural output schema.

    Examples:
        - type="string"
        - type="enum", values=["ser", "estar"]
        - type="array", items=SchemaNode(type="string")
        - type="object", properties={"word": ...}, required=["word"]
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["object", "array", "string", "enum"]
    description: str = ""
    properties: dict[str, "SchemaNode"] = Field(default_factory=dict)
    required: tuple[str, ...] = ()
    items: "SchemaNode | None" = None
    values: tuple[str, ...] = ()

    def to_json_schema(self) -> dict:
        """Render the node as a JSON Schema dict."""
        if self.type == "object":
            schema: dict = {
                "type": "object",
                "properties": {
                    name: node.to_json_schema()
                    for name, node in self.properties.items()
                },
                "required": list(self.required),
            }
        elif self.type == "array":
            schema = {"type": "array"}
            if self.items is not None:
                schema["items"] = self.items.to_json_schema()
        elif self.type == "enum":
            schema = {"type": "string", "enum": list(self.values)}
        else:
            schema = {"type": "string"}

        if self.description:
            schema["description"] = self.description
        return schema


SchemaNode.model_rebuild()


def string(description: str = "") -> SchemaNode:
    return SchemaNode(type="string", description=description)


def enum(*values: str, description: str = "") -> SchemaNode:
    return SchemaNode(type="enum", values=values, description=description)


def array(items: SchemaNode, description: str = "") -> SchemaNode:
    return SchemaNode(type="array", items=items, description=description)


def obj(
    properties: dict[str, SchemaNode],
    required: list[str],
    description: str = "",
) -> SchemaNode:
    return SchemaNode(
        type="object",
        properties=properties,
        required=tuple(required),
        description=description,
    )


# =============================================================================
# Exercise Schema
# =============================================================================


class ExerciseSchema(BaseModel):
    """Everything needed to request one kind of exercise.

    count_setting names the GenerationConfig field that sets how many
    questions or items the prompt asks for.
    """

    model_config = ConfigDict(frozen=True)

    kind: ExerciseKind
    display_title: str
    description: str
    default_instructions: str
    answer_style: AnswerStyle
    uses_blank_marker: bool
    count_setting: Literal["question_count", "vocabulary_count", "reading_question_count"]
    prompt_template: str
    descriptor: SchemaNode

    def render_prompt(self, config: GenerationConfig) -> str:
        """Fill the prompt template from the generation config."""
        return self.prompt_template.format(
            count=getattr(config, self.count_setting),
            level=config.level,
            learner_language=config.learner_language,
            blank=BLANK_MARKER,
        )


_TITLE = string("Short exercise title in Spanish")
_INSTRUCTIONS = string("One-sentence instructions in Spanish")
_EXPLANATION = string("Brief explanation of why the answer is correct")

_SER_VS_ESTAR = ExerciseSchema(
    kind=ExerciseKind.SER_VS_ESTAR,
    display_title="Ser vs. Estar",
    description="Elige la forma correcta de 'ser' o 'estar'.",
    default_instructions="Elige la opción correcta para completar la frase.",
    answer_style=AnswerStyle.SINGLE_CHOICE,
    uses_blank_marker=True,
    count_setting="question_count",
    prompt_template=(
        "Generate {count} multiple-choice questions for a Spanish {level} level "
        "student to practice the difference between \"ser\" and \"estar\". "
        "Each question is a sentence containing exactly one blank written as "
        "\"{blank}\". Give two options: the correctly conjugated form of "
        "\"ser\" and the same person and tense of \"estar\". The correct "
        "answer must be copied exactly from the options. Say which verb is "
        "correct and briefly explain why."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "questions": array(
                obj(
                    {
                        "sentence": string("Sentence with the blank marker"),
                        "options": array(string(), "Conjugated ser/estar forms"),
                        "correct_answer": string("One of the options, verbatim"),
                        "verb": enum("ser", "estar"),
                        "explanation": _EXPLANATION,
                    },
                    ["sentence", "options", "correct_answer", "verb", "explanation"],
                )
            ),
        },
        ["title", "instructions", "questions"],
    ),
)

_FILL_IN_THE_BLANK = ExerciseSchema(
    kind=ExerciseKind.FILL_IN_THE_BLANK,
    display_title="Completar Huecos",
    description="Rellena los espacios con la palabra correcta.",
    default_instructions="Escribe la palabra que falta en cada frase.",
    answer_style=AnswerStyle.FREE_TEXT,
    uses_blank_marker=True,
    count_setting="question_count",
    prompt_template=(
        "Generate {count} fill-in-the-blank questions for a Spanish {level} "
        "level student. Each question is a sentence containing exactly one "
        "blank written as \"{blank}\". The answer is a single word. Add a "
        "short hint written in {learner_language}."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "questions": array(
                obj(
                    {
                        "sentence": string("Sentence with the blank marker"),
                        "correct_answer": string("The word that fills the blank"),
                        "hint": string("Hint in the learner's language"),
                    },
                    ["sentence", "correct_answer", "hint"],
                )
            ),
        },
        ["title", "instructions", "questions"],
    ),
)

_VOCABULARY_MATCH = ExerciseSchema(
    kind=ExerciseKind.VOCABULARY_MATCH,
    display_title="Unir Vocabulario",
    description="Empareja las palabras con sus definiciones.",
    default_instructions="Une cada palabra con su traducción.",
    answer_style=AnswerStyle.MATCHING,
    uses_blank_marker=False,
    count_setting="vocabulary_count",
    prompt_template=(
        "Generate {count} vocabulary pairs for a Spanish {level} level "
        "student. Each pair contains a common Spanish word and its "
        "translation in {learner_language}. All words and all translations "
        "must be distinct."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "items": array(
                obj(
                    {
                        "word": string("Spanish word"),
                        "definition": string("Translation in the learner's language"),
                    },
                    ["word", "definition"],
                )
            ),
        },
        ["title", "instructions", "items"],
    ),
)

_READING_COMPREHENSION = ExerciseSchema(
    kind=ExerciseKind.READING_COMPREHENSION,
    display_title="Comprensión Lectora",
    description="Lee un texto y responde a las preguntas.",
    default_instructions="Lee el texto y elige la respuesta correcta.",
    answer_style=AnswerStyle.SINGLE_CHOICE,
    uses_blank_marker=False,
    count_setting="reading_question_count",
    prompt_template=(
        "Generate a short reading comprehension exercise for a Spanish {level} "
        "level student: a text of about 50-70 words and {count} "
        "multiple-choice questions about it. Each question has 4 options and "
        "the correct answer must be copied exactly from the options."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "text": string("Reading passage in Spanish"),
            "questions": array(
                obj(
                    {
                        "question": string(),
                        "options": array(string()),
                        "correct_answer": string("One of the options, verbatim"),
                    },
                    ["question", "options", "correct_answer"],
                )
            ),
        },
        ["title", "instructions", "text", "questions"],
    ),
)

_TENSES = ("presente", "pretérito indefinido", "pretérito imperfecto", "futuro")

_VERB_TENSES = ExerciseSchema(
    kind=ExerciseKind.VERB_TENSES,
    display_title="Tiempos Verbales",
    description="Practica el pretérito indefinido y el imperfecto.",
    default_instructions="Elige la forma verbal correcta para cada frase.",
    answer_style=AnswerStyle.SINGLE_CHOICE,
    uses_blank_marker=True,
    count_setting="question_count",
    prompt_template=(
        "Generate {count} multiple-choice questions for a Spanish {level} "
        "student to practice verb tenses (presente, pretérito indefinido, "
        "pretérito imperfecto, futuro). Each question is a sentence with "
        "exactly one blank written as \"{blank}\" where a verb goes. Give the "
        "infinitive, the tense to use, 4 conjugated options, the correct "
        "answer copied exactly from the options and a brief explanation."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "questions": array(
                obj(
                    {
                        "sentence": string("Sentence with the blank marker"),
                        "verb": string("Infinitive"),
                        "tense": enum(*_TENSES),
                        "options": array(string(), "Conjugated forms"),
                        "correct_answer": string("One of the options, verbatim"),
                        "explanation": _EXPLANATION,
                    },
                    ["sentence", "verb", "tense", "options", "correct_answer", "explanation"],
                )
            ),
        },
        ["title", "instructions", "questions"],
    ),
)

_VERB_CONJUGATION = ExerciseSchema(
    kind=ExerciseKind.VERB_CONJUGATION,
    display_title="Conjugar Verbos",
    description="Conjuga verbos irregulares en presente.",
    default_instructions="Escribe la forma correcta del verbo entre paréntesis.",
    answer_style=AnswerStyle.FREE_TEXT,
    uses_blank_marker=True,
    count_setting="question_count",
    prompt_template=(
        "Generate {count} verb conjugation questions for a Spanish {level} "
        "student practicing irregular verbs in the present tense. Each "
        "question is a sentence with exactly one blank written as \"{blank}\" "
        "followed by the infinitive in parentheses. Give the infinitive, the "
        "tense, the correctly conjugated form and a brief explanation."
    ),
    descriptor=obj(
        {
            "title": _TITLE,
            "instructions": _INSTRUCTIONS,
            "questions": array(
                obj(
                    {
                        "sentence": string("Sentence with the blank marker"),
                        "verb": string("Infinitive"),
                        "tense": enum(*_TENSES),
                        "correct_answer": string("Conjugated form"),
                        "explanation": _EXPLANATION,
                    },
                    ["sentence", "verb", "tense", "correct_answer", "explanation"],
                )
            ),
        },
        ["title", "instructions", "questions"],
    ),
)


EXERCISE_SCHEMAS: dict[ExerciseKind, ExerciseSchema] = {
    schema.kind: schema
    for schema in (
        _SER_VS_ESTAR,
        _FILL_IN_THE_BLANK,
        _VOCABULARY_MATCH,
        _READING_COMPREHENSION,
        _VERB_TENSES,
        _VERB_CONJUGATION,
    )
}


def get_exercise_schema(kind: ExerciseKind) -> ExerciseSchema:
    """Get the registry entry for an exercise kind."""
    return EXERCISE_SCHEMAS[ExerciseKind(kind)]


def list_exercise_schemas() -> list[ExerciseSchema]:
    """Return registry entries in menu order."""
    return [EXERCISE_SCHEMAS[kind] for kind in ExerciseKind]
