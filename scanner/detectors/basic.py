"""Keyword detectors for compliance risks and review markers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from models import Tag

# Checked in order; first match wins.
COMPLIANCE_RULES: tuple[tuple[Tag, tuple[str, ...]], ...] = (
    ("SSN", ("ssn", "social security")),
    ("PATIENT_ID", ("patient_id", "patient id", "mrn")),
    ("PHI", ("phi", "protected health")),
    ("DOB", ("dob", "date of birth")),
)
MARKER_RULES: tuple[tuple[Tag, tuple[str, ...]], ...] = (
    ("FIXME", ("fixme",)),
    ("TODO", ("todo",)),
    ("XXX", ("xxx",)),
    ("HACK", ("hack",)),
)


def _match_rules(
    lowered_line: str,
    rules: tuple[tuple[Tag, tuple[str, ...]], ...],
) -> Tag | None:
    """Return the first tag whose keywords occur in the line."""
    for tag, keywords in rules:
        if any(keyword in lowered_line for keyword in keywords):
            return tag
    return None


def classify(line: str) -> Tag | None:
    """Classify one line of text.

    Compliance risks take precedence: marker keywords are only checked when
    no compliance keyword is present.
    """
    lowered_line = line.lower()
    return _match_rules(lowered_line, COMPLIANCE_RULES) or _match_rules(
        lowered_line, MARKER_RULES
    )


def split_lines(content: str) -> list[str]:
    """Split on newlines without producing a line after a trailing newline."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def classify_lines(lines: Iterable[str]) -> Iterator[tuple[int, str, Tag]]:
    """Yield ``(line_number, trimmed_text, tag)`` for every classified line."""
    for line_number, line in enumerate(lines, start=1):
        trimmed_line = line.strip()
        tag = classify(trimmed_line)
        if tag is not None:
            yield line_number, trimmed_line, tag


def read_text(file_path: str | Path) -> str:
    """Read a file as strict UTF-8 with newline translation disabled."""
    with Path(file_path).open("r", encoding="utf-8", newline="") as file_handle:
        return file_handle.read()


def detect_file(file_path: str | Path) -> list[tuple[int, str, Tag]]:
    """Detect classified lines in one file.

    Raises:
        OSError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8 text.
    """
    return list(classify_lines(split_lines(read_text(file_path))))
