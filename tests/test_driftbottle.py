import pytest

from plugbox.driftbottle import (
    Sea,
    crc64_iso,
    format_bottle,
    make_bottle,
    validate_message,
)


def test_crc64_check_value():
    assert crc64_iso(b"123456789") == 0xB90956C775A41001


def test_crc64_empty():
    assert crc64_iso(b"") == 0


def test_make_bottle_id_is_deterministic_and_signed():
    a = make_bottle(10001, 20002, "2022-12-10 08:30:00", "alice", "a message here")
    b = make_bottle(10001, 20002, "2022-12-10 08:30:00", "alice", "a message here")
    c = make_bottle(10001, 20002, "2022-12-10 08:30:00", "alice", "another message")
    assert a.id == b.id
    assert a.id != c.id
    assert -(1 << 63) <= a.id < (1 << 63)
    assert a.msg == "a message here"
    assert a.grp == 20002


def test_validate_message_too_short():
    with pytest.raises(ValueError):
        validate_message("short")


def test_validate_message_counts_characters():
    text = "漂流瓶漂流瓶漂流瓶漂"
    assert validate_message(text) == text


def test_validate_message_unescapes():
    assert validate_message("&#91;hello&#93; &amp; world") == "[hello] & world"


def test_format_bottle():
    bottle = make_bottle(10001, 20002, "2022-12-10 08:30:00", "alice", "hello world!!")
    text = format_bottle(bottle, "bot")
    assert text.startswith("bot试着帮你捞出来了这个~\n")
    assert f"ID:{bottle.id}\n" in text
    assert "投递人: alice(10001)" in text
    assert text.endswith("内容: \nhello world!!")


def test_sea_round_trip(tmp_path):
    bottle = make_bottle(10001, 20002, "2022-12-10 08:30:00", "alice", "hello world!!")
    with Sea(str(tmp_path / "sea.db")) as sea:
        sea.throw(bottle)
        sea.throw(bottle)
        assert sea.pick() == bottle


def test_sea_persists(tmp_path):
    path = str(tmp_path / "sea.db")
    bottle = make_bottle(1, 2, "t", "n", "persisted message")
    sea = Sea(path)
    sea.throw(bottle)
    sea.close()
    with Sea(path) as again:
        assert again.pick() == bottle


def test_sea_empty_raises(tmp_path):
    with Sea(str(tmp_path / "sea.db")) as sea:
        with pytest.raises(LookupError):
            sea.pick()