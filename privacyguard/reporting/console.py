"""
Privacy Guard Console Reporter

Human-readable colored console output for the staged, full and check
commands, plus the pattern listing.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import click

from privacyguard import __version__
from privacyguard.core.finding import Category, Finding, ScanReport, VerdictResult
from privacyguard.core.rules import RuleSet


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        safe = text.encode(sys.stdout.encoding or "utf-8", errors="replace").decode(
            sys.stdout.encoding or "utf-8", errors="replace"
        )
        click.echo(safe, **kwargs)


# Category colors
CATEGORY_COLORS = {
    "CRITICAL": "bright_red",
    "PII": "red",
    "WARNING": "yellow",
}

RISK_TEXT = {
    Category.CRITICAL: "HIGH - Contains sensitive credentials or data",
    Category.PII: "MEDIUM - Contains personal information",
    Category.WARNING: "LOW - Review for privacy implications",
}

SECTION_TITLES = {
    Category.CRITICAL: "CRITICAL SECURITY VIOLATIONS FOUND:",
    Category.PII: "PII VIOLATIONS FOUND:",
    Category.WARNING: "PRIVACY WARNINGS:",
}

BLOCKED_MESSAGES = {
    Category.CRITICAL: "COMMIT BLOCKED - Remove sensitive data before committing",
    Category.PII: "COMMIT BLOCKED - Remove or sanitize PII before committing",
}

REMEDIATION = {
    Category.CRITICAL: [
        "Revoke and rotate any exposed credential",
        "Load secrets from environment variables or a secrets manager",
        "Never commit real card or social security numbers",
    ],
    Category.PII: [
        "Replace with placeholder values",
        "Move to configuration files",
        "Use environment variables",
        "Implement data sanitization",
    ],
}


class ConsoleReporter:
    """Prints formatted privacy scan reports to the console."""

    def __init__(self, enforce: bool = True) -> None:
        self.enforce = enforce

    # ── staged ──

    def report_staged(self, report: ScanReport, verdict: VerdictResult) -> None:
        """Detailed report: every finding with its lines and risk."""
        self._print_header("Scanning staged files for PII violations")
        if report.files_scanned == 0:
            _safe_echo(click.style("  [!] No staged files found", fg="yellow"))
            _safe_echo("")
            return

        self._print_counts(report, verdict)

        for category, findings in (
            (Category.CRITICAL, report.critical),
            (Category.PII, report.pii),
            (Category.WARNING, report.warnings),
        ):
            if findings:
                self._print_section(category, findings)

        if verdict.blocked:
            self._print_blocked(verdict)
        else:
            if verdict.advisory:
                _safe_echo(click.style(
                    "  [i] Warnings don't block commit but should be reviewed", fg="blue"
                ))
            _safe_echo(click.style(
                "  [OK] No PII violations detected in staged files", fg="green", bold=True
            ))
        _safe_echo("")

    # ── full ──

    def report_full(self, report: ScanReport, verdict: VerdictResult, scan_dirs: Sequence[str]) -> None:
        """Summary report: counts and offending paths, without line detail."""
        self._print_header("Scanning entire codebase for PII violations")
        _safe_echo(click.style(f"  Directories: {', '.join(scan_dirs)}", fg="white"))

        for path in report.files_with_findings:
            _safe_echo(click.style(f"  [!] PII found in: {path}", fg="yellow"))

        flagged = len(report.files_with_findings)
        _safe_echo("")
        _safe_echo(click.style("  Full Codebase Scan Results:", fg="bright_white", bold=True))
        _safe_echo(f"    Files scanned: {report.files_scanned}")
        _safe_echo(f"    Files with violations: {flagged}")
        _safe_echo(f"    Warnings: {verdict.warning_count}")
        _safe_echo("")

        if flagged == 0:
            _safe_echo(click.style("  [OK] No PII violations found in codebase", fg="green", bold=True))
        else:
            _safe_echo(click.style(
                f"  [!] {flagged} file(s) contain potential PII", fg="yellow", bold=True
            ))
            _safe_echo(click.style(
                "  Use 'privacy-guard staged' to see details before committing", fg="blue"
            ))
            self._print_enforcement_note()
        _safe_echo("")

    # ── check ──

    def report_check(self, paths: Sequence[str], report: ScanReport, verdict: VerdictResult) -> None:
        """Per-file pass/fail for explicitly named files."""
        self._print_header("Scanning specified files for PII violations")

        by_path: dict[str, list[Finding]] = {}
        for finding in report.findings + report.warnings:
            by_path.setdefault(finding.source_path, []).append(finding)
        missing = set(report.missing)

        for path in paths:
            if path in missing:
                _safe_echo(click.style(f"  [!] File not found: {path}", fg="yellow"))
                continue
            _safe_echo(click.style(f"  Checking: {path}", fg="blue"))
            for finding in by_path.get(path, []):
                color = CATEGORY_COLORS[finding.category.value]
                label = "VIOLATION" if finding.category.blocking else "WARNING"
                _safe_echo(click.style(f"    {label}: {finding.display()}", fg=color))

        flagged = len(report.files_with_findings)
        _safe_echo("")
        if flagged == 0:
            _safe_echo(click.style(
                "  [OK] No PII violations found in specified files", fg="green", bold=True
            ))
        else:
            _safe_echo(click.style(
                f"  [X] PII violations found in {flagged} file(s)", fg="bright_red", bold=True
            ))
            self._print_enforcement_note()
        _safe_echo("")

    # ── patterns ──

    def show_patterns(self, rules: RuleSet) -> None:
        _safe_echo("PII Detection Patterns:")
        _safe_echo("")
        headings = (
            (Category.CRITICAL, "CRITICAL (blocks commit):"),
            (Category.PII, "PII (blocks commit):"),
            (Category.WARNING, "WARNINGS (allows commit):"),
        )
        for category, heading in headings:
            _safe_echo(click.style(heading, fg=CATEGORY_COLORS[category.value], bold=True))
            for rule in rules.by_category(category):
                _safe_echo(f"  - {rule.label} ({rule.name}): {rule.pattern}")
            _safe_echo("")

        _safe_echo(click.style("WHITELISTED:", fg="green", bold=True))
        for entry in rules.whitelist.values():
            _safe_echo(f"  - {entry.name}: {entry.pattern}")

    # ── helpers ──

    def _print_header(self, action: str) -> None:
        _safe_echo("")
        _safe_echo(click.style("=" * 55, fg="bright_blue"))
        _safe_echo(click.style("  Privacy Guard - PII Detection & Security Scanning", fg="bright_white", bold=True))
        _safe_echo(click.style(f"  Version: {__version__}", fg="white"))
        _safe_echo(click.style("=" * 55, fg="bright_blue"))
        _safe_echo(click.style(f"  {action}...", fg="blue"))
        _safe_echo("")

    def _print_counts(self, report: ScanReport, verdict: VerdictResult) -> None:
        _safe_echo(click.style("  Privacy Scan Results:", fg="bright_white", bold=True))
        _safe_echo(f"    Files scanned: {report.files_scanned}")
        _safe_echo(f"    Critical violations: {verdict.critical_count}")
        _safe_echo(f"    PII violations: {verdict.pii_count}")
        _safe_echo(f"    Warnings: {verdict.warning_count}")
        _safe_echo("")

    def _print_section(self, category: Category, findings: list[Finding]) -> None:
        color = CATEGORY_COLORS[category.value]
        _safe_echo(click.style(f"  {SECTION_TITLES[category]}", fg=color, bold=True))
        _safe_echo("")
        for finding in findings:
            _safe_echo(click.style(
                f"    {finding.source_path} (lines: {finding.lines_display})", fg=color
            ))
            _safe_echo(f"        Type: {finding.rule_name}")
            _safe_echo(f"        Risk: {RISK_TEXT[category]}")
        _safe_echo("")

    def _print_blocked(self, verdict: VerdictResult) -> None:
        category = verdict.category
        if self.enforce:
            _safe_echo(click.style(f"  [X] {BLOCKED_MESSAGES[category]}", fg="bright_red", bold=True))
        else:
            _safe_echo(click.style(
                "  [!] Violations found, blocking is disabled by configuration",
                fg="yellow",
                bold=True,
            ))
        _safe_echo("")
        _safe_echo(click.style("  Remediation options:", fg="blue"))
        for option in REMEDIATION[category]:
            _safe_echo(f"    - {option}")

    def _print_enforcement_note(self) -> None:
        if not self.enforce:
            _safe_echo(click.style(
                "  [!] Blocking is disabled by configuration", fg="yellow"
            ))


def render_notice(message: str, level: Optional[str] = None) -> None:
    """Print a one-line notice in the reporter's style."""
    colors = {"error": "red", "warning": "yellow", "success": "green"}
    prefix = {"error": "[X]", "warning": "[!]", "success": "[+]"}.get(level or "", "  ")
    _safe_echo(click.style(f"  {prefix} {message}", fg=colors.get(level or "", "white")))
