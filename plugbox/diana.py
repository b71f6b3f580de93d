"""A collection of short essays: add, pick at random, or fetch the special one."""

from __future__ import annotations

import hashlib
import logging
import re
import sqlite3
import threading

log = logging.getLogger(__name__)

HENTAI_ID = -3802576048116006195

_TEACH_RE = re.compile(r"教你一篇小作文(.*)")


def text_id(text: str) -> int:
    """Id of a text: first eight bytes of its MD5, little-endian, signed."""
    digest = hashlib.md5(text.encode()).digest()
    return int.from_bytes(digest[:8], "little", signed=True)


def parse_teach(message: str) -> str | None:
    """Return the essay in a "教你一篇小作文..." command, or None."""
    m = _TEACH_RE.fullmatch(message)
    return m.group(1) if m else None


class TextStore:
    """Persistent store of essays."""

    def __init__(self, path: str) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS text ("
                "id INTEGER PRIMARY KEY NOT NULL, "
                "data TEXT NOT NULL)"
            )
        log.info("[Diana]读取%d条小作文", self.count())

    def add(self, text: str) -> int:
        """Store an essay and return its id."""
        ident = text_id(text)
        with self._lock, self._conn:
            self._conn.execute(
                "REPLACE INTO text (id, data) VALUES (?, ?)", (ident, text)
            )
        return ident

    def random(self) -> str:
        """Return a random essay; LookupError if there is none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT data FROM text ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no essays stored")
        return row[0]

    def hentai(self) -> str:
        """Return the special essay; LookupError if it is missing."""
        with self._lock:
            row = self._conn.execute(
                "SELECT data FROM text WHERE id = ?", (HENTAI_ID,)
            ).fetchone()
        if row is None:
            raise LookupError("special essay not found")
        return row[0]

    def count(self) -> int:
        """Number of stored essays."""
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM text").fetchone()[0]

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> TextStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()