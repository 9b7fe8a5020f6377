"""Show one finding in context and hand it to the editor dispatcher."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from models import Finding
from navigator.dispatcher import DispatchOutcome, EditorDispatcher
from navigator.editors import is_available
from navigator.processes import ProcessRunner
from navigator.prompts import Prompt
from scanner.detectors import read_text, split_lines

LINES_BEFORE = 3
LINES_AFTER = 2
RULE = "=" * 60


def context_window(line_number: int, file_length: int) -> range:
    """Return the 1-based line numbers shown around ``line_number``."""
    start = max(1, line_number - LINES_BEFORE)
    end = min(file_length, line_number + LINES_AFTER)
    return range(start, end + 1)


def format_context(lines: list[str], line_number: int) -> list[str]:
    """Render context lines, marking the finding's line with ``>>>``."""
    rendered: list[str] = []
    for current in context_window(line_number, len(lines)):
        prefix = ">>> " if current == line_number else "    "
        text = lines[current - 1].rstrip("\r")
        rendered.append(f"{prefix}{current:4}: {text}")
    return rendered


def show_context(finding: Finding) -> bool:
    """Print the finding's surroundings, re-read fresh from disk.

    Returns False when the file can no longer be read.
    """
    try:
        lines = split_lines(read_text(finding.file_path))
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug(f"[DEBUG] Context unavailable for {finding.file_path}: {exc}")
        return False

    logger.info("\nCONTEXT:")
    for rendered_line in format_context(lines, finding.line_number):
        logger.info(rendered_line)
    return True


def inspect_finding(
    finding: Finding,
    *,
    probe: Callable[[str], bool] = is_available,
    runner: ProcessRunner | None = None,
    prompt: Prompt = input,
) -> DispatchOutcome:
    """Show the selected finding, then let the user open it in an editor."""
    logger.info(f"\n{RULE}")
    logger.info(f"SELECTED: {finding.text}")
    logger.info(f"LOCATION: {finding.location}")
    show_context(finding)
    logger.info(RULE)

    dispatcher = EditorDispatcher(finding, probe=probe, runner=runner, prompt=prompt)
    return dispatcher.run()
