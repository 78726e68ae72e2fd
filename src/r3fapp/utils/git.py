"""Git helpers: clone the starter and create the initial commit."""

from __future__ import annotations

import logging
from pathlib import Path

from r3fapp.utils.process import CommandRunner

logger = logging.getLogger(__name__)


def clone_args(url: str, project_name: str, branch: str, recursive: bool = True) -> list[str]:
    args = ["git", "clone", url, "--branch", branch, project_name, "--single-branch"]
    if recursive:
        args.append("--recursive")
    return args


def init_git(root: Path, runner: CommandRunner, message: str) -> bool:
    """Initialize a repository with one commit; False if git is unavailable."""
    if not runner.exists("git"):
        logger.warning("git not found, skipping repository initialization")
        return False
    runner.run(["git", "init"], cwd=root)
    runner.run(["git", "add", "-A"], cwd=root)
    runner.run(["git", "commit", "-m", message], cwd=root)
    return True
