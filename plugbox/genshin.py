"""Simulated ten-pull card draws rendered from an archive of artwork."""

from __future__ import annotations

import random
import re
import threading
import zipfile
from dataclasses import dataclass

from PIL import Image

_NAME_RE = re.compile(r"_(.*)\.png")
_PREFIX_LEN = len("Genshin/")
_STAR_FILES = {"ThreeStar.png": 3, "FourStar.png": 4, "FiveStar.png": 5}
_BACKGROUNDS = {5: "five_bg.jpg", 4: "four_bg.jpg", 3: "three_bg.jpg"}

_CANVAS_SIZE = (1920, 1080)
_CANVAS_COLOR = (50, 50, 50, 255)
_FIRST_X = 230
_CARD_STEP = 146
_REPLY_POS = (1270, 945)
_GUARANTEE_EVERY = 9


def is_five_star_mode(value: int) -> bool:
    """Whether the stored setting selects the five-star pool."""
    return value & 1 == 1


def set_mode(value: int, five_stars: bool) -> int:
    """Return the stored setting with the pool bit set or cleared."""
    return value | 1 if five_stars else value & ~1


def reply_text(names: list[str], num: int, previous: str) -> str:
    """List drawn five-star items; num is 1 for characters, 2 for weapons."""
    if num == 1:
        parts = ["★五星角色★\n"]
    elif num == 2 and previous:
        parts = ["\n★五星武器★\n"]
    else:
        parts = ["★五星武器★\n"]
    for name in names:
        m = _NAME_RE.search(name)
        if m is None:
            raise ValueError(f"no item name in {name!r}")
        parts.append(m.group(1) + " * ")
    return "".join(parts)


@dataclass(frozen=True)
class DrawResult:
    """Outcome of one draw.

    Each card is (background, item, star icon, element icon), all archive
    entry names with the top folder removed.
    """

    cards: tuple[tuple[str, str, str, str], ...]
    text: str
    highlight: bool

    @property
    def items(self) -> list[str]:
        """The drawn items in display order."""
        return [card[1] for card in self.cards]


class Gacha:
    """Card pool read from a zip archive."""

    def __init__(self, zip_path: str) -> None:
        self._zip = zipfile.ZipFile(zip_path)
        self._zip_lock = threading.Lock()
        self._lock = threading.Lock()
        self._total = 0
        self._tree: dict[str, list[str]] = {}
        self._entries: dict[str, str] = {}
        self._stars: dict[int, str] = {}
        for info in self._zip.infolist():
            if info.is_dir():
                continue
            name = info.filename[_PREFIX_LEN:]
            self._entries[name] = info.filename
            folder, sep, base = name.rpartition("/")
            if not sep:
                self._tree[name] = [name]
                continue
            if folder:
                self._tree.setdefault(folder, []).append(name)
                if folder == "gacha" and base in _STAR_FILES:
                    self._stars[_STAR_FILES[base]] = name

    def _first(self, key: str) -> str:
        entries = self._tree.get(key)
        if not entries:
            raise LookupError(f"missing {key!r} in archive")
        return entries[0]

    def _pick(self, folder: str, rng) -> str:
        entries = self._tree.get(folder)
        if not entries:
            raise LookupError(f"missing folder {folder!r} in archive")
        return entries[rng.randrange(len(entries))]

    def _star(self, level: int) -> str:
        try:
            return self._stars[level]
        except KeyError:
            raise LookupError(f"missing {level}-star icon in archive") from None

    def _icon(self, name: str) -> str:
        start = name.rfind("/") + 1
        end = name.find("_")
        if end < start:
            raise LookupError(f"no element in {name!r}")
        return self._first(name[start:end] + ".png")

    def draw(self, count: int = 10, five_star_mode: bool = False, rng=None) -> DrawResult:
        """Draw count cards from the normal or the five-star pool."""
        rng = rng if rng is not None else random
        backs = {level: self._first(name) for level, name in _BACKGROUNDS.items()}
        stars = {level: self._star(level) for level in (3, 4, 5)}

        five_chars: list[str] = []
        four_chars: list[str] = []
        five_arms: list[str] = []
        four_arms: list[str] = []
        three_arms: list[str] = []

        def five() -> None:
            if rng.randrange(2) == 0:
                five_chars.append(self._pick("five", rng))
            else:
                five_arms.append(self._pick("five2", rng))

        with self._lock:
            guaranteed = self._total % _GUARANTEE_EVERY == 0
            if not five_star_mode:
                self._total += 1

        remaining = count
        if guaranteed:
            five()
            remaining -= 1

        if five_star_mode:
            for _ in range(remaining):
                five()
        else:
            for _ in range(remaining):
                a = rng.randrange(1000)
                if a <= 800:
                    three_arms.append(self._pick("Three", rng))
                elif a <= 885:
                    four_chars.append(self._pick("four", rng))
                elif a <= 970:
                    four_arms.append(self._pick("four2", rng))
                elif a <= 985:
                    five_chars.append(self._pick("five", rng))
                else:
                    five_arms.append(self._pick("five2", rng))
            if not four_chars and not four_arms and three_arms:
                three_arms.pop()
                if rng.randrange(2) == 0:
                    four_chars.append(self._pick("four", rng))
                else:
                    four_arms.append(self._pick("four2", rng))

        cards = []
        for group, level in (
            (five_chars, 5),
            (four_chars, 4),
            (five_arms, 5),
            (four_arms, 4),
            (three_arms, 3),
        ):
            for item in group:
                cards.append((backs[level], item, stars[level], self._icon(item)))

        text = ""
        if five_chars:
            text += reply_text(five_chars, 1, text)
        if five_arms:
            text += reply_text(five_arms, 2, text)
        return DrawResult(
            cards=tuple(cards),
            text=text,
            highlight=bool(five_chars or five_arms),
        )

    def _overlay(self, canvas: Image.Image, name: str, pos: tuple[int, int]) -> None:
        with self._zip_lock, self._zip.open(self._entries[name]) as f:
            image = Image.open(f)
            image.load()
        image = image.convert("RGBA")
        canvas.paste(image, pos, image)

    def render(self, result: DrawResult) -> Image.Image:
        """Draw the result screen for a draw."""
        canvas = Image.new("RGBA", _CANVAS_SIZE, _CANVAS_COLOR)
        self._overlay(canvas, self._first("bg0.jpg"), (0, 0))
        for i, card in enumerate(result.cards):
            pos = (_FIRST_X + _CARD_STEP * i, 0)
            for entry in card:
                self._overlay(canvas, entry, pos)
        self._overlay(canvas, self._first("Reply.png"), _REPLY_POS)
        return canvas

    def close(self) -> None:
        """Close the archive."""
        with self._zip_lock:
            self._zip.close()

    def __enter__(self) -> Gacha:
        return self

    def __exit__(self, *exc) -> None:
        self.close()