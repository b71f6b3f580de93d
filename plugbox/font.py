"""Render arbitrary text onto a picture."""

from __future__ import annotations

import base64
import io
import os
import re

from PIL import Image, ImageDraw, ImageFont

FONT_DIR = "data/Font/"
DEFAULT_FONT = FONT_DIR + "regular.ttf"

FONTS: dict[str, str] = {
    "用终末体": FONT_DIR + "syumatu.ttf",
    "用终末变体": FONT_DIR + "nisi.ttf",
    "用紫罗兰体": FONT_DIR + "violet.ttf",
    "用樱酥体": FONT_DIR + "sakura.ttf",
    "用Consolas体": FONT_DIR + "consolas.ttf",
    "用苹方体": DEFAULT_FONT,
}

_RENDER_RE = re.compile(r"(用.+)?渲染文字([\s\S]+)")


def font_for(choice: str | None) -> str:
    """Font file for a "用xxx体" choice, the default font otherwise."""
    return FONTS.get(choice or "", DEFAULT_FONT)


def parse_render(text: str) -> tuple[str, str] | None:
    """Parse "(用[字体])渲染文字xxx" into (font path, text), or None."""
    m = _RENDER_RE.fullmatch(text)
    if not m:
        return None
    return font_for(m.group(1)), m.group(2)


def _load_font(font_path: str | None, size: int):
    if font_path is None:
        try:
            return ImageFont.load_default(size=size)
        except TypeError:
            return ImageFont.load_default()
    if not os.path.exists(font_path):
        raise FileNotFoundError(font_path)
    return ImageFont.truetype(font_path, size)


def _wrap(text: str, pen: ImageDraw.ImageDraw, font, limit: float) -> list[str]:
    lines = []
    for paragraph in text.split("\n"):
        line = ""
        for ch in paragraph:
            if line and pen.textlength(line + ch, font=font) > limit:
                lines.append(line)
                line = ch
            else:
                line += ch
        lines.append(line)
    return lines


def render_text(
    text: str, font_path: str | None, width: int = 400, font_size: int = 20
) -> str:
    """Render text wrapped to width; return the PNG as base64.

    A font_path of None uses the built-in default font.
    """
    font = _load_font(font_path, font_size)
    margin = font_size
    line_height = int(font_size * 1.5)
    probe = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    lines = _wrap(text, probe, font, max(width - 2 * margin, font_size))
    height = 2 * margin + line_height * len(lines)
    canvas = Image.new("RGB", (width, height), (255, 255, 255))
    pen = ImageDraw.Draw(canvas)
    for i, line in enumerate(lines):
        pen.text((margin, margin + i * line_height), line, fill=(0, 0, 0), font=font)
    buf = io.BytesIO()
    canvas.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")