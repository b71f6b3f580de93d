"""Repository search on GitHub."""

from __future__ import annotations

import re
from typing import Any

import requests

API = "https://api.github.com/search/repositories"
IMAGE_BASE = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)

_COMMAND_RE = re.compile(r">github\s(-.{1,10}? )?(.*)")


def notnull(text: str) -> str:
    """Return text, or "None" when it is empty."""
    return text if text else "None"


def parse_command(text: str) -> tuple[str, str] | None:
    """Split ">github [-x ]query" into (option, query), or None."""
    m = _COMMAND_RE.fullmatch(text)
    if not m:
        return None
    return m.group(1) or "", m.group(2)


def search(query: str, timeout: float = 10.0) -> dict:
    """Return the best-matching repository; LookupError if none matches."""
    resp = requests.get(
        API,
        params={"q": query},
        headers={"User-Agent": USER_AGENT},
        timeout=timeout,
    )
    if resp.status_code != 200:
        raise RuntimeError(f"code {resp.status_code}")
    info = resp.json()
    if not _int(info.get("total_count")) or not info.get("items"):
        raise LookupError("没有找到这样的仓库")
    return info["items"][0]


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return int(bool(value))
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def format_repo(repo: dict) -> str:
    """Text summary of a repository."""
    license_key = _str((repo.get("license") or {}).get("key"))
    return (
        f"{_str(repo.get('full_name'))}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/"
        f"{_int(repo.get('forks'))}/{_int(repo.get('open_issues'))}\n"
        f"Language: {notnull(_str(repo.get('language')))}\n"
        f"License: {notnull(license_key.upper())}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n"
    )


def image_url(repo: dict) -> str:
    """Preview card image for a repository."""
    return IMAGE_BASE + _str(repo.get("full_name"))