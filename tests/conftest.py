"""Shared test fixtures for navigator and scanner tests."""

from __future__ import annotations

import sys
from collections.abc import Generator

import pytest
from loguru import logger


class ScriptedPrompt:
    """Stand-in for ``input`` that replays canned answers, then raises EOFError."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class FakeRunner:
    """Process runner that records commands instead of starting them."""

    def __init__(
        self,
        *,
        spawn_error: OSError | None = None,
        run_error: OSError | None = None,
        return_code: int = 0,
    ) -> None:
        self.spawn_error = spawn_error
        self.run_error = run_error
        self.return_code = return_code
        self.spawned: list[str] = []
        self.ran: list[list[str]] = []

    def spawn(self, command: str) -> None:
        if self.spawn_error is not None:
            raise self.spawn_error
        self.spawned.append(command)

    def run(self, args: list[str]) -> int:
        if self.run_error is not None:
            raise self.run_error
        self.ran.append(args)
        return self.return_code


class FakeProbe:
    """Availability probe answering from a fixed set of installed tools."""

    def __init__(self, *installed: str) -> None:
        self.installed = set(installed)
        self.calls: list[str] = []

    def __call__(self, tool_name: str) -> bool:
        self.calls.append(tool_name)
        return tool_name in self.installed


@pytest.fixture(autouse=True)
def _reset_logger() -> Generator[None, None, None]:
    """Restore a plain stderr handler after CLI tests reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Capture every loguru message emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def scripted_prompt() -> type[ScriptedPrompt]:
    return ScriptedPrompt


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def fake_probe() -> type[FakeProbe]:
    return FakeProbe
