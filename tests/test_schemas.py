"""Unit tests for the exercise schema registry."""

import pytest

from exercises.config import GenerationConfig
from exercises.schemas import (
    BLANK_MARKER,
    EXERCISE_SCHEMAS,
    get_exercise_schema,
    list_exercise_schemas,
)
from models import AnswerStyle, ExerciseKind


class TestRegistry:
    """Tests for registry lookups."""

    def test_every_kind_has_an_entry(self):
        assert set(EXERCISE_SCHEMAS) == set(ExerciseKind)

    def test_list_follows_kind_order(self):
        assert [s.kind for s in list_exercise_schemas()] == list(ExerciseKind)

    def test_lookup_accepts_string_value(self):
        schema = get_exercise_schema("vocabulary_match")
        assert schema.kind == ExerciseKind.VOCABULARY_MATCH

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            get_exercise_schema("crossword")

    @pytest.mark.parametrize(
        "kind,style,uses_blank",
        [
            (ExerciseKind.SER_VS_ESTAR, AnswerStyle.SINGLE_CHOICE, True),
            (ExerciseKind.FILL_IN_THE_BLANK, AnswerStyle.FREE_TEXT, True),
            (ExerciseKind.VOCABULARY_MATCH, AnswerStyle.MATCHING, False),
            (ExerciseKind.READING_COMPREHENSION, AnswerStyle.SINGLE_CHOICE, False),
            (ExerciseKind.VERB_TENSES, AnswerStyle.SINGLE_CHOICE, True),
            (ExerciseKind.VERB_CONJUGATION, AnswerStyle.FREE_TEXT, True),
        ],
    )
    def test_answer_style_mapping(self, kind, style, uses_blank):
        schema = get_exercise_schema(kind)
        assert schema.answer_style == style
        assert schema.uses_blank_marker is uses_blank

    def test_menu_text_present(self):
        for schema in list_exercise_schemas():
            assert schema.display_title
            assert schema.description
            assert schema.default_instructions


class TestPromptRendering:
    """Tests for filling prompt templates from the config."""

    def test_prompt_uses_level_and_count(self):
        config = GenerationConfig(level="B1", question_count=7)
        prompt = get_exercise_schema(ExerciseKind.SER_VS_ESTAR).render_prompt(config)

        assert "B1" in prompt
        assert "7" in prompt
        assert BLANK_MARKER in prompt

    def test_vocabulary_prompt_uses_vocabulary_count_and_language(self):
        config = GenerationConfig(vocabulary_count=9, learner_language="Greek")
        prompt = get_exercise_schema(ExerciseKind.VOCABULARY_MATCH).render_prompt(config)

        assert "9" in prompt
        assert "Greek" in prompt

    def test_reading_prompt_uses_reading_question_count(self):
        config = GenerationConfig(reading_question_count=4)
        prompt = get_exercise_schema(
            ExerciseKind.READING_COMPREHENSION
        ).render_prompt(config)

        assert "4 multiple-choice questions" in prompt

    def test_fill_prompt_asks_for_hint_in_learner_language(self):
        config = GenerationConfig(learner_language="Italian")
        prompt = get_exercise_schema(ExerciseKind.FILL_IN_THE_BLANK).render_prompt(config)

        assert "Italian" in prompt


class TestSchemaDescriptor:
    """Tests for rendering descriptors as JSON Schema."""

    def test_object_lists_required_fields(self):
        schema = get_exercise_schema(ExerciseKind.READING_COMPREHENSION)
        rendered = schema.descriptor.to_json_schema()

        assert rendered["type"] == "object"
        assert rendered["required"] == ["title", "instructions", "text", "questions"]
        assert rendered["properties"]["questions"]["type"] == "array"

    def test_enum_renders_as_string_enum(self):
        schema = get_exercise_schema(ExerciseKind.SER_VS_ESTAR)
        rendered = schema.descriptor.to_json_schema()
        verb = rendered["properties"]["questions"]["items"]["properties"]["verb"]

        assert verb == {"type": "string", "enum": ["ser", "estar"]}

    def test_descriptions_are_included(self):
        schema = get_exercise_schema(ExerciseKind.VOCABULARY_MATCH)
        rendered = schema.descriptor.to_json_schema()
        word = rendered["properties"]["items"]["items"]["properties"]["word"]

        assert word == {"type": "string", "description": "Spanish word"}
