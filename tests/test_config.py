"""Unit tests for configuration loading."""

import pytest

import main
from exercises.config import GenerationConfig


@pytest.fixture
def tutor_env(monkeypatch):
    """Environment with every generation setting present."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4.1")
    monkeypatch.setenv("TUTOR_LEVEL", "B1")
    monkeypatch.setenv("TUTOR_LEARNER_LANGUAGE", "English")


class TestFromEnv:
    """Tests for GenerationConfig.from_env."""

    def test_reads_environment(self, tutor_env):
        config = GenerationConfig.from_env()

        assert config.api_key == "sk-test"
        assert config.model == "gpt-4.1"
        assert config.level == "B1"
        assert config.learner_language == "English"

    def test_none_overrides_keep_environment(self, tutor_env):
        config = GenerationConfig.from_env(model=None, level=None, learner_language=None)

        assert config.model == "gpt-4.1"
        assert config.level == "B1"
        assert config.learner_language == "English"

    def test_explicit_override_wins(self, tutor_env):
        config = GenerationConfig.from_env(level="C1")

        assert config.level == "C1"
        assert config.model == "gpt-4.1"


class TestBuildConfig:
    """Tests for building the config from command line arguments."""

    def test_absent_flags_keep_environment(self, tutor_env):
        args = main.create_parser().parse_args([])

        config = main.build_config(args)

        assert config.generation.model == "gpt-4.1"
        assert config.generation.level == "B1"
        assert config.generation.learner_language == "English"

    def test_flags_override_environment(self, tutor_env):
        args = main.create_parser().parse_args(["--model", "gpt-4o", "-l", "A1"])

        config = main.build_config(args)

        assert config.generation.model == "gpt-4o"
        assert config.generation.level == "A1"
        assert config.generation.learner_language == "English"
