"""Dress-up picture albums: list albums and build their image links."""

from __future__ import annotations

import json
import re
from typing import Any

import requests

DRESS_URL = "http://www.yoooooooooo.com/gitdress"
MALE = "dress"
FEMALE = "girldress"
LIST_URL = DRESS_URL + "/{sex}/album/list.json"
DETAIL_URL = DRESS_URL + "/{sex}/album/{name}/info.json"
IMAGE_URL = DRESS_URL + "/{sex}/album/{name}/{index}-m.webp"

_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def sex_for(matched: str) -> str:
    """Album family for a command: "女装" or "男装", optionally prefixed "随机"."""
    kind = matched.removeprefix("随机")
    if kind == "女装":
        return MALE
    if kind == "男装":
        return FEMALE
    raise ValueError(f"unknown command: {matched!r}")


def _get_json(url: str, timeout: float) -> Any:
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return json.loads(resp.content)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)


def dress_list(sex: str, timeout: float = 10.0) -> list[str]:
    """Names of all albums of one family."""
    data = _get_json(LIST_URL.format(sex=sex), timeout)
    if not isinstance(data, list):
        return []
    return [_text(v) for v in data]


def detail(sex: str, name: str, timeout: float = 10.0) -> int:
    """Number of pictures in an album."""
    data = _get_json(DETAIL_URL.format(sex=sex, name=name), timeout)
    return len(data) if isinstance(data, list) else 0


def image_urls(sex: str, name: str, count: int) -> list[str]:
    """Links to every picture of an album, numbered from 1."""
    return [IMAGE_URL.format(sex=sex, name=name, index=i) for i in range(1, count + 1)]


def format_menu(matched: str, names: list[str]) -> str:
    """Numbered album list asking the user to choose one."""
    lines = "".join(f"{i}. {name}\n" for i, name in enumerate(names))
    return f"请输入{matched}序号\n{lines}"


def parse_choice(text: str, count: int) -> int:
    """Index chosen by the user; ValueError if it is not a valid index."""
    if not _NUMBER_RE.fullmatch(text):
        raise ValueError("请输入数字!")
    num = int(text)
    if not 0 <= num < count:
        raise ValueError("序号非法!")
    return num