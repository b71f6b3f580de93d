"""Drift bottles: messages thrown into a shared sea and picked at random."""

from __future__ import annotations

import re
import sqlite3
import threading
from dataclasses import dataclass

_POLY_ISO = 0xD800000000000000
_MASK64 = (1 << 64) - 1


def _make_table() -> list[int]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY_ISO if crc & 1 else crc >> 1
        table.append(crc)
    return table


_TABLE = _make_table()

_UNESCAPE_RE = re.compile(r"&#91;|&#93;|&amp;")
_UNESCAPES = {"&#91;": "[", "&#93;": "]", "&amp;": "&"}

MIN_LENGTH = 10


def crc64_iso(data: bytes) -> int:
    """CRC-64 with the ISO polynomial, as an unsigned integer."""
    crc = _MASK64
    for b in data:
        crc = _TABLE[(crc ^ b) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


@dataclass(frozen=True)
class Bottle:
    """A message in a bottle."""

    id: int
    qq: int
    name: str
    msg: str
    grp: int
    time: str


def make_bottle(qq: int, grp: int, time: str, name: str, msg: str) -> Bottle:
    """Build a bottle whose id is a hash of its contents."""
    key = f"{grp}_{qq}_{time}_{name}_{msg}".encode()
    crc = crc64_iso(key)
    ident = crc - (1 << 64) if crc >= (1 << 63) else crc
    return Bottle(id=ident, qq=qq, name=name, msg=msg, grp=grp, time=time)


def validate_message(text: str) -> str:
    """Unescape chat codes and make sure enough is left to throw."""
    plain = _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(0)], text)
    if len(plain) < MIN_LENGTH:
        raise ValueError("需要投递的内容过少( ")
    return plain


def format_bottle(bottle: Bottle, botname: str) -> str:
    """Text shown when a bottle is picked."""
    return (
        f"{botname}试着帮你捞出来了这个~\n"
        f"ID:{bottle.id}\n"
        f"投递人: {bottle.name}({bottle.qq})\n"
        f"群号: {bottle.grp}\n"
        f"时间: {bottle.time}\n"
        f"内容: \n{bottle.msg}"
    )


class Sea:
    """Persistent store of bottles."""

    def __init__(self, path: str) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS global ("
                "id INTEGER PRIMARY KEY NOT NULL, "
                "qq INTEGER NOT NULL, "
                "Name TEXT NOT NULL, "
                "msg TEXT NOT NULL, "
                "grp INTEGER NOT NULL, "
                "time TEXT NOT NULL)"
            )

    def throw(self, bottle: Bottle) -> None:
        """Store a bottle, replacing one with the same id."""
        with self._lock, self._conn:
            self._conn.execute(
                "REPLACE INTO global (id, qq, Name, msg, grp, time) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (bottle.id, bottle.qq, bottle.name, bottle.msg, bottle.grp, bottle.time),
            )

    def pick(self) -> Bottle:
        """Return a random bottle; LookupError if the sea is empty."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id, qq, Name, msg, grp, time FROM global "
                "ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("the sea is empty")
        ident, qq, name, msg, grp, time = row
        return Bottle(id=ident, qq=qq, name=name, msg=msg, grp=grp, time=time)

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> Sea:
        return self

    def __exit__(self, *exc) -> None:
        self.close()