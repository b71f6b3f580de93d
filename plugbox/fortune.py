"""Daily fortune slips drawn onto a background picture."""

from __future__ import annotations

import hashlib
import zipfile

from PIL import Image, ImageDraw, ImageFont

TABLE: tuple[str, ...] = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌",
    "公主连结", "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师",
    "赛马娘", "东方归言录", "奇异恩典", "夏日口袋", "ASoul",
)
DEFAULT_KIND = "车万"

_INDEX = {name: i for i, name in enumerate(TABLE)}

_COLUMN = 9
_WHITE = (255, 255, 255, 255)
_BLACK = (0, 0, 0, 255)


def kind_index(name: str) -> int:
    """Stored value for a background kind; ValueError if there is no such kind."""
    try:
        return _INDEX[name] & 0xFF
    except KeyError:
        raise ValueError(f"没有这个底图哦～: {name!r}") from None


def kind_for(value: int) -> str:
    """Background kind for a stored value, falling back to the default."""
    v = value & 0xFF
    return TABLE[v] if v < len(TABLE) else DEFAULT_KIND


def rows_num(total: int, div: int) -> int:
    """Number of groups of div needed to hold total items."""
    rows, rest = divmod(total, div)
    return rows + 1 if rest else rows


def offset(total: int, now: int, distance: float) -> float:
    """Position of item now among total items spaced distance apart."""
    if total % 2 == 0:
        return (now - total // 2 - 1) * distance
    return (now - total // 2 - 1.5) * distance


def glyph_positions(
    text: str, glyph_width: float, glyph_height: float
) -> list[tuple[str, float, float]]:
    """Place each character in vertical columns read right to left.

    glyph_width and glyph_height are the spacing between columns and rows.
    Returns (character, x, baseline y) for every character.
    """
    chars = list(text)
    n = len(chars)
    columns = rows_num(n, _COLUMN)
    positions: list[tuple[str, float, float]] = []
    if columns == 2:
        div = rows_num(n, 2)
        for i, ch in enumerate(chars):
            col = rows_num(i + 1, div)
            in_col = min(n - (col - 1) * div, div)
            row = i % div + 1
            x = -offset(columns, col, glyph_width) + 115
            if col == 1:
                y = offset(_COLUMN, row, glyph_height) + 320.0
            else:
                y = offset(_COLUMN, row + (_COLUMN - in_col), glyph_height) + 320.0
            positions.append((ch, x, y))
        return positions
    for i, ch in enumerate(chars):
        col = rows_num(i + 1, _COLUMN)
        in_col = min(n - (col - 1) * _COLUMN, _COLUMN)
        row = i % _COLUMN + 1
        x = -offset(columns, col, glyph_width) + 115
        y = offset(in_col, row, glyph_height) + 320.0
        positions.append((ch, x, y))
    return positions


def cache_name(zipfile: str, index: int, title: str, text: str) -> str:
    """Hex digest naming the cached picture for one background and slip."""
    key = f"{zipfile}{index}{title}{text}".encode()
    return hashlib.md5(key).hexdigest()


def load_background(path: str, index: int) -> Image.Image:
    """Decode the index-th entry of a zip archive of backgrounds."""
    with zipfile.ZipFile(path) as archive:
        entries = archive.infolist()
        if not 0 <= index < len(entries):
            raise IndexError(f"no entry {index} in {path} ({len(entries)} entries)")
        with archive.open(entries[index]) as f:
            image = Image.open(f)
            image.load()
    return image


def draw(
    background: Image.Image, title: str, text: str, font_path: str
) -> Image.Image:
    """Draw a fortune slip's title and text over a background."""
    width, height = background.size
    canvas = Image.new("RGBA", (height, width), (0, 0, 0, 0))
    canvas.paste(background.convert("RGBA"), (0, 0))
    pen = ImageDraw.Draw(canvas)

    title_font = ImageFont.truetype(font_path, 45)
    title_width = pen.textlength(title, font=title_font)
    pen.text((140 - title_width / 2, 112), title, fill=_WHITE, font=title_font, anchor="ls")

    body_font = ImageFont.truetype(font_path, 23)
    glyph_width = pen.textlength("测", font=body_font)
    ascent, descent = body_font.getmetrics()
    for ch, x, y in glyph_positions(text, glyph_width + 10, ascent + descent + 10):
        pen.text((x, y), ch, fill=_BLACK, font=body_font, anchor="ls")
    return canvas