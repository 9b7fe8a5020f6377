"""Data models for scan results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Tag = Literal["SSN", "PATIENT_ID", "PHI", "DOB", "FIXME", "TODO", "XXX", "HACK"]
Severity = Literal["critical", "warning", "marker"]
FileErrorPolicy = Literal["skip", "collect", "abort"]

CRITICAL_TAGS = frozenset({"SSN", "PATIENT_ID"})
WARNING_TAGS = frozenset({"PHI", "DOB"})


@dataclass(frozen=True)
class Finding:
    """One classified line occurrence."""

    id: int
    file_path: str
    line_number: int
    tag: Tag
    text: str

    @property
    def severity(self) -> Severity:
        """Return display severity derived from the tag."""
        if self.tag in CRITICAL_TAGS:
            return "critical"
        if self.tag in WARNING_TAGS:
            return "warning"
        return "marker"

    @property
    def location(self) -> str:
        """Return ``file:line`` for display."""
        return f"{self.file_path}:{self.line_number}"


@dataclass(frozen=True)
class FileError:
    """A file or directory that could not be read during a scan."""

    path: str
    reason: str


@dataclass(frozen=True)
class ScanResult:
    """Ordered findings of one scan plus run statistics."""

    findings: tuple[Finding, ...] = ()
    scanned_files: int = 0
    duration_ms: int = 0
    errors: tuple[FileError, ...] = ()

    def __len__(self) -> int:
        return len(self.findings)

    def count(self, *, severity: Severity | None = None, tag: Tag | None = None) -> int:
        """Count findings matching a severity and/or tag."""
        return sum(
            1
            for finding in self.findings
            if (severity is None or finding.severity == severity)
            and (tag is None or finding.tag == tag)
        )
