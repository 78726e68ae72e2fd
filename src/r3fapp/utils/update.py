"""Check PyPI for a newer release of create-r3f-app."""

from __future__ import annotations

import logging
from enum import Enum

import httpx
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)


class UpdateStatus(Enum):
    CURRENT = "current"
    OUTDATED = "outdated"
    AHEAD = "ahead"
    UNKNOWN = "unknown"


def compare_versions(current: str, latest: str) -> UpdateStatus:
    try:
        cur, new = Version(current), Version(latest)
    except InvalidVersion:
        return UpdateStatus.UNKNOWN
    if cur < new:
        return UpdateStatus.OUTDATED
    if cur > new:
        return UpdateStatus.AHEAD
    return UpdateStatus.CURRENT


def fetch_latest_version(url: str, timeout: float = 5.0, client: httpx.Client | None = None) -> str:
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        response = http.get(url)
        response.raise_for_status()
        return str(response.json()["info"]["version"])
    finally:
        if owns_client:
            http.close()


def check_for_update(
    current: str, url: str, timeout: float = 5.0, client: httpx.Client | None = None
) -> tuple[UpdateStatus, str | None]:
    """Return the update status and the latest published version.

    Network and payload problems are logged and reported as UNKNOWN.
    """
    try:
        latest = fetch_latest_version(url, timeout=timeout, client=client)
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        logger.debug("update check failed: %s", exc)
        return UpdateStatus.UNKNOWN, None
    return compare_versions(current, latest), latest
