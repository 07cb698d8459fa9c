"""
Privacy Guard GitHub Actions Integration

Provides helpers for running Privacy Guard in GitHub Actions:
- GitHub Actions annotations (errors/warnings)
- Step summary output
- Environment detection
"""

from __future__ import annotations

import os

from privacyguard.core.finding import Category, ScanReport, VerdictResult
from privacyguard.utils.logger import get_logger

logger = get_logger(__name__)


def is_github_actions() -> bool:
    """Check if currently running inside GitHub Actions."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_annotations(report: ScanReport) -> list[str]:
    """
    Build one workflow command per finding.

    ::error file={name},line={line},title={title}::{message}

    Property values and the message are percent-encoded as the workflow
    command syntax requires.
    """
    commands = []
    for finding in report.findings + report.warnings:
        level = "error" if finding.category.blocking else "warning"
        title = f"{finding.category.value} - {finding.rule_name}"
        params = [
            f"file={_escape_property(finding.source_path)}",
            f"line={finding.line_numbers[0]}",
            f"title={_escape_property(title)}",
        ]
        msg = f"{finding.rule_name} detected on lines {finding.lines_display}"
        commands.append(f"::{level} {','.join(params)}::{_escape_data(msg)}")
    return commands


def emit_annotations(report: ScanReport) -> None:
    """Emit GitHub Actions workflow annotations for each finding."""
    if not is_github_actions():
        return

    for command in format_annotations(report):
        print(command)


def build_step_summary(report: ScanReport, verdict: VerdictResult, mode: str) -> str:
    """Render the markdown step summary."""
    lines = [
        "## Privacy Guard Scan Results\n",
        f"**Mode:** `{mode}`  ",
        f"**Files scanned:** {report.files_scanned}\n",
        "| Category | Count |",
        "|----------|-------|",
        f"| 🔴 CRITICAL | {verdict.critical_count} |",
        f"| 🟠 PII | {verdict.pii_count} |",
        f"| 🟡 WARNING | {verdict.warning_count} |",
        "",
    ]

    if verdict.blocked:
        lines.append(f"### ❌ Status: BLOCKED ({verdict.category.value})")
        lines.append("Sensitive data must be removed before merging.")
    elif verdict.category is Category.WARNING:
        lines.append("### ⚠️ Status: ALLOWED with warnings")
        lines.append("Review the warnings for privacy implications.")
    else:
        lines.append("### ✅ Status: CLEAN")
        lines.append("No sensitive data found.")

    lines.append("")

    all_findings = report.findings + report.warnings
    if all_findings:
        lines.append("<details><summary>Findings</summary>\n")
        for f in all_findings[:50]:
            lines.append(
                f"- **{f.category.value}** `{f.source_path}` lines {f.lines_display} ({f.rule_name})"
            )
        lines.append("\n</details>")

    return "\n".join(lines) + "\n"


def write_step_summary(report: ScanReport, verdict: VerdictResult, mode: str) -> None:
    """
    Append a summary to the GitHub Actions step summary.
    This appears on the workflow run page.
    """
    if not is_github_actions():
        return

    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return

    try:
        with open(summary_file, "a", encoding="utf-8") as fh:
            fh.write(build_step_summary(report, verdict, mode))
    except OSError as exc:
        logger.warning("github.summary_failed", path=summary_file, error=str(exc))
