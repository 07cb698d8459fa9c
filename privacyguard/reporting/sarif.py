"""
Privacy Guard SARIF Reporter

Generates SARIF 2.1.0 (Static Analysis Results Interchange Format) output
for GitHub Code Scanning and other SARIF consumers. Each matched line
becomes one result.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from privacyguard import __version__
from privacyguard.core.finding import Category, ScanReport
from privacyguard.core.rules import DEFAULT_RULESET, RuleSet
from privacyguard.reporting.console import RISK_TEXT


# SARIF severity level mapping
SARIF_LEVEL_MAP = {
    Category.CRITICAL: "error",
    Category.PII: "error",
    Category.WARNING: "warning",
}

SECURITY_SEVERITY = {
    Category.CRITICAL: "9.0",
    Category.PII: "6.0",
    Category.WARNING: "3.0",
}


class SARIFReporter:
    """Generates SARIF 2.1.0-formatted scan reports."""

    def __init__(self, rules: RuleSet = DEFAULT_RULESET) -> None:
        self.rules = rules

    def report(
        self,
        report: ScanReport,
        output_file: Optional[str] = None,
    ) -> str:
        """
        Generate SARIF report.

        Args:
            report: Merged report of the scan.
            output_file: Optional file path to write the report to.

        Returns:
            The SARIF JSON string.
        """
        rules_map: dict[str, dict] = {}
        results: list[dict] = []

        for finding in report.findings + report.warnings:
            if finding.rule_name not in rules_map:
                label = self._label(finding.rule_name)
                rules_map[finding.rule_name] = {
                    "id": finding.rule_name,
                    "name": label,
                    "shortDescription": {"text": label},
                    "fullDescription": {"text": RISK_TEXT[finding.category]},
                    "defaultConfiguration": {
                        "level": SARIF_LEVEL_MAP[finding.category]
                    },
                    "properties": {
                        "security-severity": SECURITY_SEVERITY[finding.category],
                        "tags": ["privacy", finding.category.value.lower()],
                    },
                }

            rule_index = list(rules_map.keys()).index(finding.rule_name)
            file_path = finding.source_path.replace("\\", "/")
            for line in finding.line_numbers:
                results.append(
                    {
                        "ruleId": finding.rule_name,
                        "ruleIndex": rule_index,
                        "level": SARIF_LEVEL_MAP[finding.category],
                        "message": {
                            "text": f"{finding.category.value}: {finding.rule_name} detected"
                        },
                        "locations": [
                            {
                                "physicalLocation": {
                                    "artifactLocation": {
                                        "uri": file_path,
                                        "uriBaseId": "%SRCROOT%",
                                    },
                                    "region": {"startLine": line},
                                }
                            }
                        ],
                    }
                )

        sarif = {
            "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json",
            "version": "2.1.0",
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "Privacy Guard",
                            "version": __version__,
                            "rules": list(rules_map.values()),
                        }
                    },
                    "results": results,
                }
            ],
        }

        sarif_str = json.dumps(sarif, indent=2)

        if output_file:
            Path(output_file).write_text(sarif_str, encoding="utf-8")

        return sarif_str

    def _label(self, rule_name: str) -> str:
        rule = self.rules.patterns.get(rule_name)
        return rule.label if rule else rule_name
