"""Configuration for exercise generation, matching and reporting.

These configuration models are constructed explicitly and passed to the
objects that need them, so tests can substitute their own values.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class GenerationConfig(BaseModel):
    """Configuration for the content generation provider and prompts."""

    api_key: str | None = Field(default=None, repr=False)
    model: str = "gpt-4o-mini"
    base_url: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    level: str = "A2"
    learner_language: str = "Greek"  # Language used for hints and translations
    question_count: int = Field(default=5, ge=1, le=20)
    vocabulary_count: int = Field(default=6, ge=2, le=20)
    reading_question_count: int = Field(default=3, ge=1, le=10)

    @classmethod
    def from_env(cls, dotenv_path: str | None = None, **overrides) -> "GenerationConfig":
        """Build a config from the environment, loading a .env file first.

        Explicit keyword overrides win over environment values; None
        overrides are ignored.
        """
        load_dotenv(dotenv_path)
        values = {
            "api_key": os.getenv("OPENAI_API_KEY"),
            "model": os.getenv("OPENAI_MODEL"),
            "base_url": os.getenv("OPENAI_BASE_URL"),
            "level": os.getenv("TUTOR_LEVEL"),
            "learner_language": os.getenv("TUTOR_LEARNER_LANGUAGE"),
        }
        values.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        return cls(**{key: value for key, value in values.items() if value is not None})

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


class MatchConfig(BaseModel):
    """Configuration for vocabulary matching sessions."""

    incorrect_delay_seconds: float = Field(default=1.0, ge=0.0)


class ReportConfig(BaseModel):
    """Configuration for the results reporter."""

    simulated_delay_seconds: float = Field(default=1.5, ge=0.0)


class TutorConfig(BaseModel):
    """Master configuration for the tutor."""

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    matching: MatchConfig = Field(default_factory=MatchConfig)
    reporting: ReportConfig = Field(default_factory=ReportConfig)
