"""
Privacy Guard Batch Runner

Scans many files with one ContentScanner. Files are independent, so they
may be fanned out over a thread pool; the merged report is sorted by path
and rule either way.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from privacyguard.core.finding import ScanReport
from privacyguard.core.scanner import ContentScanner


@dataclass(frozen=True)
class ScanItem:
    """One file to scan: where to attribute findings and how to get its text."""

    path: str
    load: Callable[[], Optional[str]]


def _scan_item(scanner: ContentScanner, item: ScanItem) -> ScanReport:
    # Excluded paths never load their content
    if scanner.excluded(item.path):
        return scanner.scan(None, item.path)
    return scanner.scan(item.load(), item.path)


def scan_batch(
    items: Iterable[ScanItem],
    scanner: ContentScanner,
    workers: int = 1,
) -> ScanReport:
    """Scan every item and merge the per-file reports."""
    items = list(items)
    if workers <= 1 or len(items) <= 1:
        reports = [_scan_item(scanner, item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            reports = list(pool.map(lambda item: _scan_item(scanner, item), items))

    return ScanReport.combine(reports)
