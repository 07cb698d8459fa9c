"""
Privacy Guard Verdict Aggregation

Turns a batch of findings into one BLOCKED/ALLOWED decision:
- any CRITICAL finding blocks with severity CRITICAL
- otherwise any PII finding blocks with severity PII
- otherwise warnings allow with an advisory
- otherwise the batch is clean
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Union

from privacyguard.core.finding import Category, Finding, ScanReport, Verdict, VerdictResult


def evaluate(source: Union[ScanReport, Iterable[Finding]]) -> VerdictResult:
    """Evaluate a report, or any iterable of findings, into a verdict."""
    if isinstance(source, ScanReport):
        findings = list(source.findings) + list(source.warnings)
    else:
        findings = list(source)

    counter = Counter(f.category for f in findings)
    critical = counter.get(Category.CRITICAL, 0)
    pii = counter.get(Category.PII, 0)
    warnings = counter.get(Category.WARNING, 0)

    if critical:
        verdict, category = Verdict.BLOCKED, Category.CRITICAL
    elif pii:
        verdict, category = Verdict.BLOCKED, Category.PII
    elif warnings:
        verdict, category = Verdict.ALLOWED, Category.WARNING
    else:
        verdict, category = Verdict.ALLOWED, None

    return VerdictResult(
        verdict=verdict,
        category=category,
        critical_count=critical,
        pii_count=pii,
        warning_count=warnings,
    )
