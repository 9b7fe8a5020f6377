"""CLI entry point for the LAST-OFF medical code navigator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from models import ScanResult, Tag
from navigator.selector import select_finding
from scanner.engine import FILE_ERROR_POLICIES, scan
from scanner.filesystem import DEFAULT_MAX_DEPTH

CONTENT_WIDTH = 50
TAG_PREFIXES = {"critical": "!! ", "warning": "! ", "marker": ""}
BANNER_RULE = "=" * 60


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Find TODOs, FIXMEs and healthcare data risks, then jump to them"
    )
    parser.add_argument(
        "--path",
        default=".",
        help="Directory path to scan (default: current directory)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum directory depth below the root (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--on-file-error",
        choices=FILE_ERROR_POLICIES,
        default="skip",
        help="What to do with unreadable files (default: skip)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure loguru output for CLI messages."""
    logger.remove()
    logger.add(
        sys.stdout,
        level="DEBUG" if verbose else "INFO",
        format="{message}",
        filter=lambda record: record["level"].name in {"INFO", "DEBUG"},
    )
    logger.add(sys.stderr, level="WARNING", format="{message}")


def _build_aligned_table(rows: list[list[str]]) -> list[str]:
    """Return table rows with simple aligned columns."""
    if not rows:
        return []

    column_widths = [0] * len(rows[0])
    for row in rows:
        for index, value in enumerate(row):
            column_widths[index] = max(column_widths[index], len(value))

    return [
        " | ".join(value.ljust(column_widths[index]) for index, value in enumerate(row))
        for row in rows
    ]


def format_table_output(result: ScanResult) -> str:
    """Render findings as a human-readable table."""
    table_rows: list[list[str]] = [["#", "TYPE", "FILE", "LINE", "CONTENT"]]
    for finding in result.findings:
        table_rows.append(
            [
                str(finding.id),
                f"{TAG_PREFIXES[finding.severity]}{finding.tag}",
                finding.file_path,
                str(finding.line_number),
                finding.text[:CONTENT_WIDTH],
            ]
        )
    return "\n".join(_build_aligned_table(table_rows))


def format_summary(result: ScanResult) -> str:
    """Render finding counts, omitting categories with no findings."""
    counted: list[tuple[int, str]] = [
        (result.count(severity="critical"), "critical healthcare risks"),
        (result.count(severity="warning"), "healthcare warnings"),
    ]
    marker_tags: tuple[Tag, ...] = ("FIXME", "TODO")
    counted.extend((result.count(tag=tag), f"{tag}s") for tag in marker_tags)

    lines = ["=== Summary ==="]
    lines.extend(f"  - {count} {label}" for count, label in counted if count > 0)
    lines.append(f"  - {len(result)} total items to review")
    lines.append(f"Scanned files: {result.scanned_files} in {result.duration_ms} ms")
    return "\n".join(lines)


def report_file_errors(result: ScanResult) -> None:
    """Warn about files collected as unreadable."""
    if not result.errors:
        return
    logger.warning(f"Skipped {len(result.errors)} unreadable entries:")
    for error in result.errors:
        logger.warning(f"  {error.path}: {error.reason}")


def main() -> int:
    """Run the navigator CLI."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    if args.max_depth < 0:
        parser.error("--max-depth must be >= 0")

    target_path = Path(args.path)
    logger.info(BANNER_RULE)
    logger.info("   LAST-OFF: Medical Code Navigator   ")
    logger.info(BANNER_RULE)
    logger.info(f"Scanning: {target_path.resolve()}")

    if not target_path.exists():
        logger.error(f"Error scanning: path does not exist: {target_path}")
        return 0
    if not target_path.is_dir():
        logger.error(f"Error scanning: path is not a directory: {target_path}")
        return 0

    try:
        result = scan(
            target_path,
            max_depth=args.max_depth,
            on_file_error=args.on_file_error,
        )
    except OSError as exc:
        logger.error(f"Error scanning: {exc}")
        return 0

    if not result.findings:
        logger.info("\nNo TODOs, FIXMEs, or healthcare risks found!")
        report_file_errors(result)
        return 0

    logger.info(f"\n{format_table_output(result)}\n")
    logger.info(format_summary(result))
    report_file_errors(result)

    select_finding(result.findings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
