"""Scanner engine implementation.

Limitations:
- Plain case-insensitive substring matching, no word boundaries
- Depth-bounded traversal, deeper files are never read
- Only UTF-8 text files are classified
"""

from __future__ import annotations

from pathlib import Path
from time import perf_counter

from loguru import logger

from models import FileError, FileErrorPolicy, Finding, ScanResult, Tag
from scanner.detectors import detect_file
from scanner.filesystem import DEFAULT_MAX_DEPTH, collect_files

FILE_ERROR_POLICIES: tuple[FileErrorPolicy, ...] = ("skip", "collect", "abort")


class ScanAbortedError(OSError):
    """Raised under the ``abort`` policy when a file or directory is unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class _FileErrorHandler:
    """Apply one file-error policy and remember collected errors."""

    def __init__(self, policy: FileErrorPolicy) -> None:
        if policy not in FILE_ERROR_POLICIES:
            raise ValueError(f"Unknown file error policy: {policy!r}")
        self.policy = policy
        self.errors: list[FileError] = []

    def __call__(self, path: Path, exc: Exception) -> None:
        reason = str(exc)
        if self.policy == "abort":
            raise ScanAbortedError(str(path), reason) from exc
        if self.policy == "collect":
            self.errors.append(FileError(path=str(path), reason=reason))
        logger.debug(f"[DEBUG] Skipping unreadable entry: {path} ({reason})")


def _assign_ids(located: list[tuple[str, int, Tag, str]]) -> tuple[Finding, ...]:
    """Number findings 1..N in their final order."""
    return tuple(
        Finding(id=index, file_path=file_path, line_number=line_number, tag=tag, text=text)
        for index, (file_path, line_number, tag, text) in enumerate(located, start=1)
    )


def scan(
    path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_file_error: FileErrorPolicy = "skip",
) -> ScanResult:
    """Scan a directory tree and return findings in discovery order.

    Raises:
        FileNotFoundError: If the root does not exist.
        NotADirectoryError: If the root is not a directory.
        PermissionError: If the root cannot be listed.
        ScanAbortedError: Under the ``abort`` policy, on the first unreadable entry.
    """
    started_at = perf_counter()
    handle_error = _FileErrorHandler(on_file_error)
    source_files = collect_files(path, max_depth=max_depth, on_error=handle_error)
    scanned_files = 0
    located: list[tuple[str, int, Tag, str]] = []

    for file_path in source_files:
        try:
            detected = detect_file(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            handle_error(file_path, exc)
            continue

        scanned_files += 1
        located.extend(
            (str(file_path), line_number, tag, text) for line_number, text, tag in detected
        )

    duration_ms = int((perf_counter() - started_at) * 1000)

    return ScanResult(
        findings=_assign_ids(located),
        scanned_files=scanned_files,
        duration_ms=duration_ms,
        errors=tuple(handle_error.errors),
    )
