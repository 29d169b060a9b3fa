"""Operator interaction: yes/no confirmations and status messages."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import IO, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

logger = logging.getLogger(__name__)

AFFIRMATIVE = "y"


def is_affirmative(answer: Optional[str]) -> bool:
    """Only the single token ``y`` (any case, surrounding blanks ignored) means yes."""
    if answer is None:
        return False
    return answer.strip().lower() == AFFIRMATIVE


class QuestionCategory(str, Enum):
    """Category of questions for context."""
    CONFIRMATION = "confirmation"   # 确认部署、网络操作
    DECISION = "decision"           # 创建仓库等可选操作
    OPTIONAL = "optional"           # 打开浏览器等无关紧要的操作


@dataclass
class InteractionRequest:
    """A yes/no question put to the operator."""

    key: str                        # 稳定标识，供自动应答与测试使用
    question: str
    category: QuestionCategory = QuestionCategory.CONFIRMATION
    context: Optional[str] = None

    def format_prompt(self) -> str:
        return f"{self.question} (y/N): "


class UserInteractionHandler(ABC):
    """Abstract base class for handling operator interaction."""

    @abstractmethod
    def ask(self, request: InteractionRequest) -> str:
        """
        Present a request to the operator and return the raw answer.

        Args:
            request: The question to present

        Returns:
            The text typed by the operator; empty when nothing was entered
        """

    @abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        """
        Send a notification to the operator (no response needed).

        Args:
            message: The message to display
            level: One of info, success, warning, error, step, title
        """

    def confirm(self, request: InteractionRequest) -> bool:
        answer = self.ask(request)
        confirmed = is_affirmative(answer)
        logger.debug("Prompt %s answered %r -> %s", request.key, answer, confirmed)
        return confirmed

    def present(self, title: str, rows: Sequence[Tuple[str, str]]) -> None:
        """Show a titled block of label/value pairs."""
        self.notify(title, "title")
        for label, value in rows:
            self.notify(f"{label}: {value}", "info")


_LEVEL_STYLES = {
    "info": ("ℹ", "cyan"),
    "success": ("✓", "green"),
    "warning": ("⚠", "yellow"),
    "error": ("✗", "red"),
    "step": ("→", "magenta"),
}


class CLIInteractionHandler(UserInteractionHandler):
    """Terminal handler rendering with rich; answers are read from stdin."""

    def __init__(self, console: Optional[Console] = None, stream: Optional[IO[str]] = None) -> None:
        """
        Args:
            console: Console used for output, a stdout console by default
            stream: Read answers from this stream instead of stdin
        """
        self.console = console or Console(highlight=False)
        self.stream = stream

    def ask(self, request: InteractionRequest) -> str:
        if request.context:
            self.console.print(f"   {escape(request.context)}", style="dim")
        prompt = f"[yellow]{escape(request.format_prompt())}[/yellow]"
        try:
            return self.console.input(prompt, stream=self.stream)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return ""

    def notify(self, message: str, level: str = "info") -> None:
        if level == "title":
            self.console.print()
            self.console.print(escape(message), style="bold blue")
            self.console.print()
            return
        icon, style = _LEVEL_STYLES.get(level, ("•", ""))
        self.console.print(f"{icon} {escape(message)}", style=style)

    def present(self, title: str, rows: Sequence[Tuple[str, str]]) -> None:
        table = Table(title=title, show_header=False, title_style="bold blue")
        table.add_column(style="bold")
        table.add_column()
        for label, value in rows:
            table.add_row(escape(label), escape(value))
        self.console.print()
        self.console.print(table)


class AutoResponseHandler(UserInteractionHandler):
    """
    Non-interactive handler: answers every prompt automatically.
    Per-key answers take precedence over ``always_confirm``.
    """

    def __init__(
        self,
        always_confirm: bool = True,
        default_responses: Optional[Dict[str, str]] = None,
    ) -> None:
        self.always_confirm = always_confirm
        self.default_responses = default_responses or {}

    def ask(self, request: InteractionRequest) -> str:
        if request.key in self.default_responses:
            answer = self.default_responses[request.key]
        else:
            answer = AFFIRMATIVE if self.always_confirm else "n"
        logger.info("Auto-answering '%s' with '%s'", request.question, answer)
        return answer

    def notify(self, message: str, level: str = "info") -> None:
        log_level = {"error": logging.ERROR, "warning": logging.WARNING}.get(level, logging.INFO)
        logger.log(log_level, "%s", message)


class ScriptedInteractionHandler(UserInteractionHandler):
    """
    Replays pre-recorded answers keyed by request key.
    Unanswered prompts get an empty answer, which counts as no.
    """

    def __init__(self, answers: Optional[Dict[str, str]] = None) -> None:
        self.answers = dict(answers or {})
        self.asked: List[InteractionRequest] = []
        self.messages: List[Tuple[str, str]] = []

    def ask(self, request: InteractionRequest) -> str:
        self.asked.append(request)
        return self.answers.get(request.key, "")

    def notify(self, message: str, level: str = "info") -> None:
        self.messages.append((level, message))

    @property
    def asked_keys(self) -> List[str]:
        return [request.key for request in self.asked]

    def messages_at(self, level: str) -> List[str]:
        return [message for lvl, message in self.messages if lvl == level]
