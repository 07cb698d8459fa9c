"""
Privacy Guard Content Scanner

Classifies the text of one file against the rule tables. The scanner is
stateless: every call builds a fresh report and the rule tables are shared
read-only.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Optional, Union

from privacyguard.core.finding import Finding, ScanReport
from privacyguard.core.rules import DEFAULT_RULESET, PatternRule, RuleSet
from privacyguard.utils.logger import get_logger

logger = get_logger(__name__)

# File extensions that are never scanned
BINARY_EXTENSIONS = {
    "exe", "dll", "bin", "pdf", "img", "png", "jpg", "jpeg", "gif", "ico",
    "zip", "tar", "gz",
}

# Directories whose contents are never scanned
EXCLUDED_DIRS = {
    "node_modules", ".git", "bin", "obj", ".vs", ".vscode", "coverage",
    "TestResults", "StrykerOutput",
}


def is_excluded(file_path: Union[str, Path]) -> bool:
    """Check whether a path is skipped before any pattern is evaluated."""
    path = PurePosixPath(str(file_path).replace("\\", "/"))
    if path.suffix[1:] in BINARY_EXTENSIONS:
        return True
    return any(part in EXCLUDED_DIRS for part in path.parts[:-1])


def read_content(file_path: Path) -> str:
    """Read a file for scanning; unreadable files count as empty."""
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("scan.input_unavailable", path=str(file_path), error=str(exc))
        return ""


class ContentScanner:
    """
    Scans file content for PII and secrets.

    Each pattern rule is evaluated against every line. A rule whose matched
    lines also hit any whitelist rule is dropped for the whole file.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULESET) -> None:
        self.rules = rules

    def scan(self, content: Optional[str], file_path: Union[str, Path]) -> ScanReport:
        source = str(file_path)
        report = ScanReport(files_scanned=1)

        if is_excluded(source):
            logger.debug("scan.file_excluded", path=source)
            return report

        if not content:
            return report

        lines = content.split("\n")
        for rule in self.rules.patterns.values():
            finding = self._match_rule(rule, lines, source)
            if finding is not None:
                report.add(finding)

        report.findings.sort(key=lambda f: f.rule_name)
        report.warnings.sort(key=lambda f: f.rule_name)
        return report

    @staticmethod
    def excluded(file_path: Union[str, Path]) -> bool:
        return is_excluded(file_path)

    def scan_path(self, file_path: Path, display_path: Optional[str] = None) -> ScanReport:
        """Scan a file on disk. The display path is used for attribution."""
        source = display_path or str(file_path)
        if self.excluded(source):
            return self.scan(None, source)
        return self.scan(read_content(file_path), source)

    def _match_rule(
        self,
        rule: PatternRule,
        lines: list[str],
        source: str,
    ) -> Optional[Finding]:
        line_numbers = [
            line_no
            for line_no, line in enumerate(lines, start=1)
            if rule.matcher.search(line)
        ]
        if not line_numbers:
            return None

        if self._whitelisted([lines[n - 1] for n in line_numbers]):
            logger.debug("scan.rule_whitelisted", path=source, rule=rule.name)
            return None

        return Finding(
            source_path=source,
            line_numbers=tuple(line_numbers),
            category=rule.category,
            rule_name=rule.name,
        )

    def _whitelisted(self, matched_lines: list[str]) -> bool:
        block = "\n".join(matched_lines)
        return any(entry.matcher.search(block) for entry in self.rules.whitelist.values())
