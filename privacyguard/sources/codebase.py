"""
Privacy Guard full-codebase source

Walks a fixed set of root directories and scans on-disk content.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Iterator

from privacyguard.core.finding import ScanReport
from privacyguard.core.scanner import ContentScanner, read_content
from privacyguard.sources.batch import ScanItem, scan_batch
from privacyguard.utils.logger import get_logger

logger = get_logger(__name__)


def iter_codebase_files(root: Path, scan_dirs: list[str]) -> Iterator[Path]:
    """Yield every regular file under the scan directories that exist."""
    for name in scan_dirs:
        directory = root / name
        if not directory.is_dir():
            logger.debug("scan.dir_missing", path=str(directory))
            continue
        for file_path in sorted(directory.rglob("*")):
            if file_path.is_file():
                yield file_path


def scan_codebase(
    root: Path,
    scan_dirs: list[str],
    scanner: ContentScanner,
    workers: int = 1,
) -> ScanReport:
    """Scan the on-disk content of the whole codebase."""
    items = [
        ScanItem(
            path=file_path.relative_to(root).as_posix(),
            load=partial(read_content, file_path),
        )
        for file_path in iter_codebase_files(root, scan_dirs)
    ]
    return scan_batch(items, scanner, workers=workers)
