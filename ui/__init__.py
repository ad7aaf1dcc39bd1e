"""Spanish Tutor UI Module - Terminal interface for Spanish practice."""

from ui.app import QUIT, TutorUI
from ui.components import (
    ExercisePanel,
    FeedbackPanel,
    MatchBoard,
    ResultsPanel,
    WelcomeScreen,
)
from ui.styles import (
    SPANISH_RED,
    SPANISH_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "QUIT",
    "TutorUI",
    "ExercisePanel",
    "FeedbackPanel",
    "MatchBoard",
    "ResultsPanel",
    "WelcomeScreen",
    "SPANISH_RED",
    "SPANISH_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
