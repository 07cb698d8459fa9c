"""
Privacy Guard JSON Reporter

Generates machine-readable JSON output format:
{
    "version": "1.0",
    "mode": "staged",
    "summary": {
        "files_scanned": N,
        "verdict": "BLOCKED",
        "category": "CRITICAL",
        "critical": n, "pii": n, "warnings": n
    },
    "findings": [...],
    "warnings": [...],
    "missing": [...]
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from privacyguard import __version__
from privacyguard.core.finding import ScanReport, VerdictResult


class JSONReporter:
    """Generates JSON-formatted scan reports."""

    def __init__(self, mode: str, target: str) -> None:
        self.mode = mode
        self.target = target

    def report(
        self,
        report: ScanReport,
        verdict: VerdictResult,
        output_file: Optional[str] = None,
    ) -> str:
        """
        Generate JSON report.

        Args:
            report: Merged report of the scan.
            verdict: Verdict derived from the report.
            output_file: Optional file path to write the report to.

        Returns:
            The JSON string.
        """
        data = report.to_dict()
        summary = {"files_scanned": data.pop("files_scanned")}
        summary.update(verdict.to_dict())

        report_data = {
            "version": "1.0",
            "tool": {
                "name": "Privacy Guard",
                "version": __version__,
            },
            "mode": self.mode,
            "target": self.target,
            "summary": summary,
            **data,
        }

        json_str = json.dumps(report_data, indent=2)

        if output_file:
            Path(output_file).write_text(json_str, encoding="utf-8")

        return json_str
