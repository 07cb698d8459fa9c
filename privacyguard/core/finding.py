"""
Privacy Guard Finding Model

A Finding records one rule matching one file. A ScanReport collects the
findings of a single invocation (staged, full or explicit-file scan).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class Category(Enum):
    CRITICAL = "CRITICAL"
    PII = "PII"
    WARNING = "WARNING"

    @property
    def blocking(self) -> bool:
        return self is not Category.WARNING


class Verdict(Enum):
    BLOCKED = "BLOCKED"
    ALLOWED = "ALLOWED"


@dataclass(frozen=True)
class Finding:
    source_path: str
    line_numbers: tuple[int, ...]
    category: Category
    rule_name: str

    @property
    def lines_display(self) -> str:
        return ",".join(str(n) for n in self.line_numbers)

    def display(self) -> str:
        """Line-oriented form used by the plain text reports."""
        return f"{self.source_path}:{self.lines_display}:{self.category.value}:{self.rule_name}"

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to a dictionary for JSON serialization."""
        return {
            "file": self.source_path,
            "lines": list(self.line_numbers),
            "category": self.category.value,
            "rule": self.rule_name,
        }


def _sort_key(finding: Finding) -> tuple[str, str]:
    return (finding.source_path, finding.rule_name)


@dataclass
class ScanReport:
    """
    Result of one scan invocation.

    ``findings`` only ever holds CRITICAL and PII findings, WARNING findings
    live in ``warnings``.
    """

    files_scanned: int = 0
    findings: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def add(self, finding: Finding) -> None:
        if finding.category.blocking:
            self.findings.append(finding)
        else:
            self.warnings.append(finding)

    @classmethod
    def combine(cls, reports: Iterable["ScanReport"]) -> "ScanReport":
        """Concatenate many reports, sorting once at the end."""
        combined = cls()
        for report in reports:
            combined.files_scanned += report.files_scanned
            combined.findings.extend(report.findings)
            combined.warnings.extend(report.warnings)
            combined.missing.extend(report.missing)
        combined.findings.sort(key=_sort_key)
        combined.warnings.sort(key=_sort_key)
        return combined

    @property
    def critical(self) -> list[Finding]:
        return [f for f in self.findings if f.category is Category.CRITICAL]

    @property
    def pii(self) -> list[Finding]:
        return [f for f in self.findings if f.category is Category.PII]

    @property
    def files_with_findings(self) -> list[str]:
        """Paths with at least one blocking finding, in report order."""
        return list(dict.fromkeys(f.source_path for f in self.findings))

    def to_dict(self) -> dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "findings": [f.to_dict() for f in self.findings],
            "warnings": [f.to_dict() for f in self.warnings],
            "missing": list(self.missing),
        }


@dataclass(frozen=True)
class VerdictResult:
    """Aggregate decision for a batch of findings."""

    verdict: Verdict
    category: Optional[Category]
    critical_count: int = 0
    pii_count: int = 0
    warning_count: int = 0

    @property
    def blocked(self) -> bool:
        return self.verdict is Verdict.BLOCKED

    @property
    def advisory(self) -> bool:
        return not self.blocked and self.warning_count > 0

    @property
    def clean(self) -> bool:
        return self.category is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "category": self.category.value if self.category else None,
            "critical": self.critical_count,
            "pii": self.pii_count,
            "warnings": self.warning_count,
        }
