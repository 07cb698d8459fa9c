"""
Privacy Guard git access

Reads the list of staged paths and their staged blobs. Nothing here
writes to the repository.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from privacyguard.core.errors import GitError
from privacyguard.utils.logger import get_logger

logger = get_logger(__name__)


def _git(args: list[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    git_path = shutil.which("git")
    if not git_path:
        raise GitError("git is not installed or not on PATH")
    try:
        return subprocess.run(
            [git_path, *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
        )
    except OSError as exc:
        raise GitError(f"Failed to run git: {exc}") from exc


def staged_paths(cwd: Optional[Path] = None) -> list[str]:
    """Paths changed in the pending commit, relative to the repository root."""
    result = _git(["diff", "--cached", "--name-only", "-z"], cwd)
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        logger.warning("git.command_failed", command="diff --cached", error=stderr)
        raise GitError(stderr or "git diff --cached failed")
    output = result.stdout.decode("utf-8", errors="replace")
    return [path for path in output.split("\0") if path]


def staged_content(path: str, cwd: Optional[Path] = None) -> str:
    """
    Staged version of a file.

    Paths without a staged blob (deleted files, submodules) yield empty
    content rather than an error.
    """
    try:
        result = _git(["show", f":{path}"], cwd)
    except GitError as exc:
        logger.debug("scan.input_unavailable", path=path, error=str(exc))
        return ""
    if result.returncode != 0:
        logger.debug("scan.input_unavailable", path=path)
        return ""
    return result.stdout.decode("utf-8", errors="replace")


def install_pre_commit_hook(command: str, cwd: Optional[Path] = None, force: bool = False) -> Path:
    """
    Write a pre-commit hook that runs the given command.

    Returns the hook path. An existing hook is left alone unless force is set.
    """
    result = _git(["rev-parse", "--git-path", "hooks"], cwd)
    if result.returncode != 0:
        raise GitError("Not inside a git repository")

    hooks_dir = Path(result.stdout.decode("utf-8", errors="replace").strip())
    if not hooks_dir.is_absolute():
        hooks_dir = (cwd or Path.cwd()) / hooks_dir
    hooks_dir.mkdir(parents=True, exist_ok=True)

    hook = hooks_dir / "pre-commit"
    if hook.exists() and not force:
        raise FileExistsError(str(hook))

    hook.write_text(
        "#!/bin/sh\n"
        "# Installed by privacy-guard: blocks commits with PII or secrets\n"
        f"exec {command}\n",
        encoding="utf-8",
    )
    hook.chmod(0o755)
    return hook
