"""Filesystem utilities for depth-bounded file discovery."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

DEFAULT_MAX_DEPTH = 3
SKIPPED_SUFFIXES = (".png", ".jpg", ".pdf", ".zip")
# Matched against the file name only, not against parent directories.
SKIPPED_NAME_PARTS = ("target", "node_modules")

DirectoryErrorHandler = Callable[[Path, OSError], None]


def should_skip_file(file_name: str) -> bool:
    """Return True for binary or build-output file names."""
    lowered_name = file_name.lower()
    return lowered_name.endswith(SKIPPED_SUFFIXES) or any(
        part in lowered_name for part in SKIPPED_NAME_PARTS
    )


def _walk(
    root: Path,
    max_depth: int,
    on_error: DirectoryErrorHandler | None,
) -> Iterator[Path]:
    pending_dirs: list[tuple[Path, int]] = [(root, 0)]

    while pending_dirs:
        current_dir, depth = pending_dirs.pop()
        if depth >= max_depth:
            continue

        try:
            entries = sorted(current_dir.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            if current_dir == root:
                raise
            if on_error is not None:
                on_error(current_dir, exc)
            continue

        sub_dirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                if not entry.is_symlink():
                    sub_dirs.append(entry)
                continue
            if entry.is_file() and not entry.is_symlink():
                yield entry

        pending_dirs.extend((sub_dir, depth + 1) for sub_dir in reversed(sub_dirs))


def iter_files(
    root_path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_error: DirectoryErrorHandler | None = None,
) -> Iterator[Path]:
    """Yield regular files under a root, at most ``max_depth`` levels deep.

    A file directly inside the root is at depth 1. Within a directory, names
    are visited in sorted order and files come before subdirectories, so the
    order is stable for an unchanged tree.

    Args:
        root_path: Directory to scan.
        max_depth: Maximum number of levels below the root.
        on_error: Called for subdirectories that cannot be listed; they are
            skipped when no handler is given.

    Raises:
        ValueError: If ``max_depth`` is negative.
        FileNotFoundError: If the path does not exist.
        NotADirectoryError: If the path is not a directory.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    root = Path(root_path)
    if not root.exists():
        raise FileNotFoundError(f"Scan path does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Scan path is not a directory: {root}")

    return _walk(root, max_depth, on_error)


def collect_files(
    root_path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_error: DirectoryErrorHandler | None = None,
) -> list[Path]:
    """Collect files to classify, in traversal order, without skipped names."""
    return [
        file_path
        for file_path in iter_files(root_path, max_depth=max_depth, on_error=on_error)
        if not should_skip_file(file_path.name)
    ]
