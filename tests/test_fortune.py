import zipfile
from io import BytesIO

import pytest
from PIL import Image

from plugbox import fortune


def test_kind_round_trip():
    for name in fortune.TABLE:
        assert fortune.kind_for(fortune.kind_index(name)) == name


def test_kind_index_unknown():
    with pytest.raises(ValueError):
        fortune.kind_index("nope")


def test_kind_for_default_and_mask():
    assert fortune.kind_for(0) == "车万"
    assert fortune.kind_for(255) == fortune.DEFAULT_KIND
    assert fortune.kind_for(0x100 + 3) == fortune.TABLE[3]


@pytest.mark.parametrize("total", range(0, 40))
@pytest.mark.parametrize("div", [1, 2, 9])
def test_rows_num_is_ceiling(total, div):
    rows = fortune.rows_num(total, div)
    assert rows * div >= total
    assert (rows - 1) * div < total or total == 0


@pytest.mark.parametrize("total", [1, 2, 3, 8, 9])
def test_offset_steps_and_scales(total):
    for now in range(1, total + 1):
        assert fortune.offset(total, now + 1, 7.0) - fortune.offset(total, now, 7.0) == pytest.approx(7.0)
        assert fortune.offset(total, now, 6.0) == pytest.approx(2 * fortune.offset(total, now, 3.0))


def test_glyph_positions_empty():
    assert fortune.glyph_positions("", 30.0, 40.0) == []


def test_glyph_positions_single_column():
    text = "一二三四五六七八九"
    pos = fortune.glyph_positions(text, 30.0, 40.0)
    assert [p[0] for p in pos] == list(text)
    assert len({p[1] for p in pos}) == 1
    for a, b in zip(pos, pos[1:]):
        assert b[2] - a[2] == pytest.approx(40.0)


def test_glyph_positions_two_columns():
    text = "一二三四五六七八九十"
    pos = fortune.glyph_positions(text, 30.0, 40.0)
    assert [p[0] for p in pos] == list(text)
    xs = sorted({p[1] for p in pos})
    assert len(xs) == 2
    assert xs[1] - xs[0] == pytest.approx(30.0)
    first, second = pos[:5], pos[5:]
    assert first[0][1] > second[0][1]
    for column in (first, second):
        for a, b in zip(column, column[1:]):
            assert b[2] - a[2] == pytest.approx(40.0)


def test_glyph_positions_three_columns():
    pos = fortune.glyph_positions("字" * 20, 30.0, 40.0)
    assert len(pos) == 20
    assert len({p[1] for p in pos}) == 3


def test_cache_name_deterministic():
    a = fortune.cache_name("a.zip", 1, "t", "x")
    assert a == fortune.cache_name("a.zip", 1, "t", "x")
    assert len(a) == 32
    assert a != fortune.cache_name("a.zip", 2, "t", "x")


def _png(size):
    buf = BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()


def test_load_background(tmp_path):
    path = tmp_path / "bg.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("a.png", _png((4, 5)))
        zf.writestr("b.png", _png((7, 3)))
    im = fortune.load_background(str(path), 1)
    assert im.size == (7, 3)
    with pytest.raises(IndexError):
        fortune.load_background(str(path), 2)


def test_draw_missing_font(tmp_path):
    bg = Image.new("RGB", (20, 20))
    with pytest.raises(OSError):
        fortune.draw(bg, "title", "text", str(tmp_path / "missing.ttf"))