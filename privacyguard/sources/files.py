"""
Privacy Guard explicit-file source

Scans the files named on the command line. Missing files are reported and
skipped; they never stop the rest of the batch.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Sequence

from privacyguard.core.errors import InvalidInvocationError
from privacyguard.core.finding import ScanReport
from privacyguard.core.scanner import ContentScanner, read_content
from privacyguard.sources.batch import ScanItem, scan_batch


def scan_files(
    paths: Sequence[str],
    scanner: ContentScanner,
    workers: int = 1,
) -> ScanReport:
    """Scan each existing file; record the others in ``missing``."""
    if not paths:
        raise InvalidInvocationError("No files specified")

    items: list[ScanItem] = []
    missing: list[str] = []
    # Repeated paths are scanned once
    for path in dict.fromkeys(paths):
        file_path = Path(path)
        if file_path.is_file():
            items.append(ScanItem(path=path, load=partial(read_content, file_path)))
        else:
            missing.append(path)

    report = scan_batch(items, scanner, workers=workers)
    report.missing.extend(missing)
    return report
