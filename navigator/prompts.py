"""Line-oriented prompt helpers shared by the interactive steps."""

from __future__ import annotations

from collections.abc import Callable

Prompt = Callable[[str], str]


def ask(prompt: Prompt, question: str) -> str:
    """Ask one question and return the trimmed answer; EOF counts as empty."""
    try:
        return prompt(question).strip()
    except EOFError:
        return ""


def confirm(prompt: Prompt, question: str) -> bool:
    """Return True only for a ``y``/``Y`` answer."""
    return ask(prompt, question).lower() == "y"


def parse_number(answer: str) -> int | None:
    """Parse an integer answer, returning None when it is not a number.

    Only an optional sign followed by ASCII digits is accepted.
    """
    digits = answer[1:] if answer[:1] in ("+", "-") else answer
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(answer)
