"""Jokes with the listener's name filled in."""

from __future__ import annotations

import logging
import sqlite3
import threading

log = logging.getLogger(__name__)

PLACEHOLDER = "%name"


def fill_name(text: str, name: str) -> str:
    """Put a name in every placeholder of a joke."""
    return text.replace(PLACEHOLDER, name)


class JokeStore:
    """Persistent store of jokes."""

    def __init__(self, path: str) -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS jokes ("
                "id INTEGER PRIMARY KEY NOT NULL, "
                "text TEXT NOT NULL)"
            )
        log.info("[funny]加载 %d 个笑话", self.count())

    def pick(self, name: str) -> str:
        """Return a random joke about name; LookupError if there is none."""
        with self._lock:
            row = self._conn.execute(
                "SELECT text FROM jokes ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no jokes stored")
        return fill_name(row[0], name)

    def count(self) -> int:
        """Number of stored jokes."""
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM jokes").fetchone()[0]

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> JokeStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()