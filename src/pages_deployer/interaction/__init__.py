"""Operator interaction module."""

from .handler import (
    UserInteractionHandler,
    InteractionRequest,
    CLIInteractionHandler,
    AutoResponseHandler,
    ScriptedInteractionHandler,
    QuestionCategory,
    is_affirmative,
)

__all__ = [
    "UserInteractionHandler",
    "InteractionRequest",
    "CLIInteractionHandler",
    "AutoResponseHandler",
    "ScriptedInteractionHandler",
    "QuestionCategory",
    "is_affirmative",
]
