"""Package manager detection and install/uninstall argument building."""

from __future__ import annotations

import os
import shutil


def get_install_cmd() -> str:
    """``yarn`` when invoked through yarn and yarn is on PATH, else ``npm``."""
    user_agent = os.environ.get("npm_config_user_agent", "")
    if user_agent.startswith("yarn") and shutil.which("yarn"):
        return "yarn"
    return "npm"


def add_args(install_cmd: str, *packages: str, dev: bool = False) -> list[str]:
    verb = "add" if install_cmd == "yarn" else "install"
    return [install_cmd, verb, *(["-D"] if dev else []), *packages]


def remove_args(install_cmd: str, *packages: str) -> list[str]:
    verb = "remove" if install_cmd == "yarn" else "uninstall"
    return [install_cmd, verb, *packages]


def upgrade_args(install_cmd: str, package: str) -> list[str]:
    verb = "upgrade" if install_cmd == "yarn" else "install"
    return [install_cmd, verb, package]
