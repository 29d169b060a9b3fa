"""Tests for operator interaction handlers."""

import io

import pytest
from rich.console import Console

from pages_deployer.interaction import (
    AutoResponseHandler,
    CLIInteractionHandler,
    InteractionRequest,
    QuestionCategory,
    ScriptedInteractionHandler,
    is_affirmative,
)


def _request(key: str = "proceed") -> InteractionRequest:
    return InteractionRequest(key=key, question="Start the deployment?")


class TestIsAffirmative:
    @pytest.mark.parametrize("answer", ["y", "Y", " y ", "y\n"])
    def test_yes(self, answer):
        assert is_affirmative(answer) is True

    @pytest.mark.parametrize(
        "answer", ["", "   ", "\n", "n", "N", "yes", "YES", "yy", "ye", "no", "1", "true", None]
    )
    def test_everything_else_is_no(self, answer):
        assert is_affirmative(answer) is False


class TestInteractionRequest:
    def test_format_prompt(self):
        assert _request().format_prompt() == "Start the deployment? (y/N): "

    def test_default_category_is_confirmation(self):
        assert _request().category == QuestionCategory.CONFIRMATION


class TestCLIInteractionHandler:
    def _handler(self, typed: str):
        out = io.StringIO()
        console = Console(file=out, force_terminal=False, width=120)
        return CLIInteractionHandler(console=console, stream=io.StringIO(typed)), out

    def test_confirm_reads_stream(self):
        handler, out = self._handler("Y\n")
        assert handler.confirm(_request()) is True
        assert "Start the deployment? (y/N):" in out.getvalue()

    def test_empty_input_is_no(self):
        handler, _ = self._handler("\n")
        assert handler.confirm(_request()) is False

    def test_eof_is_no(self):
        handler, _ = self._handler("")
        assert handler.confirm(_request()) is False

    def test_context_is_printed(self):
        handler, out = self._handler("n\n")
        handler.confirm(InteractionRequest(key="k", question="Q?", context="details here"))
        assert "details here" in out.getvalue()

    def test_notify_levels(self):
        handler, out = self._handler("")
        handler.notify("all good", "success")
        handler.notify("careful", "warning")
        handler.notify("Section", "title")
        text = out.getvalue()
        assert "✓ all good" in text
        assert "⚠ careful" in text
        assert "Section" in text

    def test_notify_does_not_interpret_markup(self):
        handler, out = self._handler("")
        handler.notify("path [bold]literal[/bold]", "info")
        assert "[bold]literal[/bold]" in out.getvalue()

    def test_present_renders_rows(self):
        handler, out = self._handler("")
        handler.present("Deployment information", [("Site", "https://octocat.github.io/x")])
        text = out.getvalue()
        assert "Deployment information" in text
        assert "https://octocat.github.io/x" in text


class TestAutoResponseHandler:
    def test_always_confirm(self):
        assert AutoResponseHandler().confirm(_request()) is True

    def test_always_reject(self):
        assert AutoResponseHandler(always_confirm=False).confirm(_request()) is False

    def test_per_key_response_wins(self):
        handler = AutoResponseHandler(default_responses={"open_browser": "n"})
        assert handler.confirm(_request("open_browser")) is False
        assert handler.confirm(_request("proceed")) is True


class TestScriptedInteractionHandler:
    def test_replays_answers_and_records(self):
        handler = ScriptedInteractionHandler({"proceed": "y"})

        assert handler.confirm(_request("proceed")) is True
        assert handler.confirm(_request("create_repo")) is False
        assert handler.asked_keys == ["proceed", "create_repo"]

    def test_records_notifications(self):
        handler = ScriptedInteractionHandler()
        handler.notify("hello", "warning")
        handler.present("Title", [("A", "1")])
        assert handler.messages_at("warning") == ["hello"]
        assert handler.messages_at("title") == ["Title"]
        assert "A: 1" in handler.messages_at("info")
