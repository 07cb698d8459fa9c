"""
Pytest Configuration and Fixtures

Shared fixtures for Privacy Guard tests.
"""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog

from privacyguard.core.config import PrivacyGuardConfig
from privacyguard.core.finding import Category, Finding, ScanReport
from privacyguard.core.scanner import ContentScanner


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """CLI runs bind log output to their own streams; undo that after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config() -> PrivacyGuardConfig:
    """Create a default configuration."""
    return PrivacyGuardConfig()


@pytest.fixture
def scanner() -> ContentScanner:
    """Scanner over the default rule tables."""
    return ContentScanner()


@pytest.fixture
def sample_report() -> ScanReport:
    """A report holding one finding of each category."""
    report = ScanReport(files_scanned=3)
    report.add(Finding(
        source_path="src/settings.py",
        line_numbers=(4, 9),
        category=Category.CRITICAL,
        rule_name="password",
    ))
    report.add(Finding(
        source_path="docs/team.md",
        line_numbers=(2,),
        category=Category.PII,
        rule_name="email",
    ))
    report.add(Finding(
        source_path="deploy/server.conf",
        line_numbers=(1,),
        category=Category.WARNING,
        rule_name="ip_address",
    ))
    return report


@pytest.fixture
def git_repo(temp_dir: Path) -> Path:
    """Create an empty git repository."""
    repo = temp_dir / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", "-q"], cwd=repo, check=True)
    subprocess.run(["git", "config", "user.email", "ci@corp.io"], cwd=repo, check=True)
    subprocess.run(["git", "config", "user.name", "CI"], cwd=repo, check=True)
    return repo


def stage(repo: Path, relative: str, content: str) -> Path:
    """Write a file inside the repository and stage it."""
    path = repo / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    subprocess.run(["git", "add", relative], cwd=repo, check=True)
    return path
