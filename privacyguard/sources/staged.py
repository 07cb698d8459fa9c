"""
Privacy Guard staged-changes source

Scans the proposed (staged) content of every path in the pending commit.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Optional

from privacyguard.core.finding import ScanReport
from privacyguard.core.scanner import ContentScanner
from privacyguard.sources.batch import ScanItem, scan_batch
from privacyguard.sources.git import staged_content, staged_paths


def scan_staged(
    scanner: ContentScanner,
    cwd: Optional[Path] = None,
    workers: int = 1,
) -> ScanReport:
    """Scan the staged version of each staged path."""
    items = [
        ScanItem(path=path, load=partial(staged_content, path, cwd))
        for path in staged_paths(cwd)
    ]
    return scan_batch(items, scanner, workers=workers)
