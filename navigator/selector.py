"""Top-level "jump to code" prompt over a finished scan."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from functools import partial

from loguru import logger

from models import Finding
from navigator.inspector import inspect_finding
from navigator.prompts import Prompt, ask, parse_number

LISTING_TEXT_WIDTH = 40


class SelectionOutcome(Enum):
    EXITED = "exited"
    LISTED = "listed"
    INSPECTED = "inspected"
    OUT_OF_RANGE = "out_of_range"
    IGNORED = "ignored"


def format_location_listing(findings: Sequence[Finding]) -> list[str]:
    """Render ``id file:line - text`` for every finding."""
    return [
        f"  {finding.id} {finding.location} - {finding.text[:LISTING_TEXT_WIDTH]}"
        for finding in findings
    ]


def select_finding(
    findings: Sequence[Finding],
    *,
    prompt: Prompt = input,
    inspect: Callable[[Finding], object] | None = None,
) -> SelectionOutcome:
    """Ask once for a finding number and act on the answer.

    Every branch ends the session; nothing loops back to the prompt.
    """
    if inspect is None:
        inspect = partial(inspect_finding, prompt=prompt)

    logger.info("\nJUMP TO CODE:")
    logger.info(f"  - Enter number (1-{len(findings)}) to select item")
    logger.info("  - Press Enter to exit")
    logger.info("  - Type 'a' to see ALL locations")

    answer = ask(prompt, "\nSelect item: ")
    if not answer:
        logger.info("Goodbye!")
        return SelectionOutcome.EXITED

    if answer.lower() == "a":
        logger.info("\nALL ITEMS LOCATIONS:")
        for rendered_line in format_location_listing(findings):
            logger.info(rendered_line)
        return SelectionOutcome.LISTED

    number = parse_number(answer)
    if number is None:
        # Unparsable input ends the session without a message.
        logger.debug(f"[DEBUG] Ignoring selection: {answer!r}")
        return SelectionOutcome.IGNORED

    if not 1 <= number <= len(findings):
        logger.error(f"Please enter 1-{len(findings)}")
        return SelectionOutcome.OUT_OF_RANGE

    inspect(findings[number - 1])
    return SelectionOutcome.INSPECTED
