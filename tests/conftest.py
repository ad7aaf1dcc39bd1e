"""Shared pytest fixtures for the Spanish Tutor test suite."""

import copy
import json
import random
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises.providers import GenerationProvider
from exercises.schemas import SchemaNode
from exercises.validation import ExerciseValidator
from models import ExerciseKind


class FakeProvider(GenerationProvider):
    """Provider returning canned replies in order.

    A reply may be a string, an exception to raise, or a callable taking
    the prompt and returning either of those.
    """

    def __init__(self, replies: list[Any]):
        self.replies = list(replies)
        self.calls: list[tuple[str, SchemaNode]] = []

    def generate(self, prompt: str, schema: SchemaNode) -> str:
        self.calls.append((prompt, schema))
        if not self.replies:
            raise AssertionError("FakeProvider ran out of replies")
        reply = self.replies.pop(0)
        if callable(reply) and not isinstance(reply, str):
            reply = reply(prompt)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Raw provider documents
# ============================================================================


SER_VS_ESTAR_DOC = {
    "title": "Ser o Estar",
    "instructions": "Elige la forma correcta.",
    "questions": [
        {
            "sentence": "Yo ___ de Grecia.",
            "options": ["soy", "estoy"],
            "correct_answer": "soy",
            "verb": "ser",
            "explanation": "El origen se expresa con 'ser'.",
        },
        {
            "sentence": "Hoy ___ muy cansado.",
            "options": ["soy", "estoy"],
            "correct_answer": "estoy",
            "verb": "estar",
            "explanation": "Los estados temporales usan 'estar'.",
        },
    ],
}

FILL_IN_THE_BLANK_DOC = {
    "title": "Completa la frase",
    "instructions": "Escribe la palabra que falta.",
    "questions": [
        {
            "sentence": "Yo ___ estudiante.",
            "correct_answer": "soy",
            "hint": "είμαι",
        },
        {
            "sentence": "Mañana ___ a la playa.",
            "correct_answer": "voy",
            "hint": "πηγαίνω",
        },
    ],
}

VOCABULARY_MATCH_DOC = {
    "title": "Animales",
    "instructions": "Une cada palabra con su traducción.",
    "items": [
        {"word": "perro", "definition": "dog"},
        {"word": "gato", "definition": "cat"},
        {"word": "pez", "definition": "fish"},
    ],
}

READING_COMPREHENSION_DOC = {
    "title": "Un día en Madrid",
    "instructions": "Lee el texto y responde.",
    "text": "Ana vive en Madrid. Cada mañana toma un café en la plaza y después va al trabajo en metro.",
    "questions": [
        {
            "question": "¿Dónde vive Ana?",
            "options": ["En Sevilla", "En Madrid", "En Valencia"],
            "correct_answer": "En Madrid",
        },
        {
            "question": "¿Cómo va Ana al trabajo?",
            "options": ["En coche", "A pie", "En metro"],
            "correct_answer": "En metro",
        },
    ],
}

VERB_TENSES_DOC = {
    "title": "El pasado",
    "instructions": "Elige el tiempo correcto.",
    "questions": [
        {
            "sentence": "Ayer yo ___ al cine.",
            "verb": "ir",
            "tense": "pretérito indefinido",
            "options": ["fui", "iba", "voy", "iré"],
            "correct_answer": "fui",
            "explanation": "Acción terminada en el pasado.",
        },
    ],
}

VERB_CONJUGATION_DOC = {
    "title": "Verbos irregulares",
    "instructions": "Conjuga el verbo.",
    "questions": [
        {
            "sentence": "Yo siempre ___ la verdad. (decir)",
            "verb": "decir",
            "tense": "presente",
            "correct_answer": "digo",
            "explanation": "'Decir' es irregular en la primera persona.",
        },
    ],
}

RAW_DOCUMENTS: dict[ExerciseKind, dict] = {
    ExerciseKind.SER_VS_ESTAR: SER_VS_ESTAR_DOC,
    ExerciseKind.FILL_IN_THE_BLANK: FILL_IN_THE_BLANK_DOC,
    ExerciseKind.VOCABULARY_MATCH: VOCABULARY_MATCH_DOC,
    ExerciseKind.READING_COMPREHENSION: READING_COMPREHENSION_DOC,
    ExerciseKind.VERB_TENSES: VERB_TENSES_DOC,
    ExerciseKind.VERB_CONJUGATION: VERB_CONJUGATION_DOC,
}


@pytest.fixture
def raw_documents() -> dict[ExerciseKind, dict]:
    """Deep copies of a valid raw document for every exercise kind."""
    return {kind: copy.deepcopy(doc) for kind, doc in RAW_DOCUMENTS.items()}


@pytest.fixture
def raw_reply() -> Callable[[ExerciseKind], str]:
    """Factory for the JSON reply text of a valid document."""

    def make(kind: ExerciseKind) -> str:
        return json.dumps(RAW_DOCUMENTS[kind], ensure_ascii=False)

    return make


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Factory for a FakeProvider with the given replies."""

    def make(*replies: Any) -> FakeProvider:
        return FakeProvider(list(replies))

    return make


@pytest.fixture
def validator() -> ExerciseValidator:
    return ExerciseValidator()


@pytest.fixture
def ser_vs_estar_exercise(validator):
    return validator.validate(ExerciseKind.SER_VS_ESTAR, SER_VS_ESTAR_DOC)


@pytest.fixture
def fill_in_the_blank_exercise(validator):
    return validator.validate(ExerciseKind.FILL_IN_THE_BLANK, FILL_IN_THE_BLANK_DOC)


@pytest.fixture
def vocabulary_exercise(validator):
    return validator.validate(ExerciseKind.VOCABULARY_MATCH, VOCABULARY_MATCH_DOC)


@pytest.fixture
def reading_exercise(validator):
    return validator.validate(
        ExerciseKind.READING_COMPREHENSION, READING_COMPREHENSION_DOC
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic shuffles."""
    return random.Random(42)
