"""City epidemic statistics lookup."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import requests

TXURL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)


@dataclass
class Area:
    """Statistics for one region and its sub-regions."""

    name: str = ""
    today_confirm: int = 0
    today_wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list[Area] = field(default_factory=list)


def _int(value: Any) -> int:
    return int(value) if value is not None else 0


def _area(raw: dict) -> Area:
    today = raw.get("today") or {}
    total = raw.get("total") or {}
    return Area(
        name=raw.get("name") or "",
        today_confirm=_int(today.get("confirm")),
        today_wzz_add=today.get("wzz_add"),
        now_confirm=_int(total.get("nowConfirm")),
        confirm=_int(total.get("confirm")),
        dead=_int(total.get("dead")),
        heal=_int(total.get("heal")),
        grade=total.get("grade") or "",
        wzz=_int(total.get("wzz")),
        children=[_area(c) for c in raw.get("children") or []],
    )


def parse_result(payload: bytes | str | dict) -> tuple[Area, str]:
    """Return the root of the area tree and the last update time."""
    data = payload if isinstance(payload, dict) else json.loads(payload)
    shelf = (data.get("data") or {}).get("diseaseh5Shelf") or {}
    tree = shelf.get("areaTree") or []
    if not tree:
        raise ValueError("empty area tree")
    return _area(tree[0]), shelf.get("lastUpdateTime") or ""


def find_city(area: Area | None, name: str) -> Area | None:
    """Depth-first search for a region by name."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def query(city: str, timeout: float = 10.0) -> tuple[Area | None, str]:
    """Fetch current statistics and look up one city."""
    resp = requests.get(TXURL, timeout=timeout)
    resp.raise_for_status()
    root, updated = parse_result(resp.content)
    return find_city(root, city), updated


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def format_area(area: Area, updated: str) -> str:
    """Text reply describing one region."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增人数：{area.today_confirm}\n"
        f"现有确诊：{area.now_confirm}\n"
        f"累计确诊：{area.confirm}\n"
        f"治愈人数：{area.heal}\n"
        f"死亡人数：{area.dead}\n"
        f"无症状人数：{area.wzz}\n"
        f"新增无症状：{_show(area.today_wzz_add)}\n"
        f"更新时间：\n『{updated}』"
    )