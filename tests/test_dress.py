from unittest import mock

import pytest

from plugbox import dress


def _response(content: bytes):
    resp = mock.MagicMock()
    resp.content = content
    return resp


def test_sex_for():
    assert dress.sex_for("女装") == dress.MALE
    assert dress.sex_for("男装") == dress.FEMALE
    assert dress.sex_for("随机男装") == "girldress"
    with pytest.raises(ValueError):
        dress.sex_for("上衣")


def test_image_urls():
    urls = dress.image_urls("dress", "a", 2)
    assert urls == [
        "http://www.yoooooooooo.com/gitdress/dress/album/a/1-m.webp",
        "http://www.yoooooooooo.com/gitdress/dress/album/a/2-m.webp",
    ]
    assert dress.image_urls("dress", "a", 0) == []


def test_format_menu():
    assert dress.format_menu("女装", ["a", "b"]) == "请输入女装序号\n0. a\n1. b\n"


def test_parse_choice():
    assert dress.parse_choice("1", 2) == 1
    assert dress.parse_choice("+0", 2) == 0
    with pytest.raises(ValueError, match="请输入数字"):
        dress.parse_choice("x", 2)
    with pytest.raises(ValueError, match="序号非法"):
        dress.parse_choice("2", 2)
    with pytest.raises(ValueError, match="序号非法"):
        dress.parse_choice("-1", 2)


@mock.patch("plugbox.dress.requests.get")
def test_dress_list(get):
    get.return_value = _response('["甲", "乙", 3]'.encode())
    assert dress.dress_list("dress") == ["甲", "乙", "3"]
    assert get.call_args.args[0] == dress.LIST_URL.format(sex="dress")


@mock.patch("plugbox.dress.requests.get")
def test_dress_list_not_array(get):
    get.return_value = _response(b'{"a": 1}')
    assert dress.dress_list("girldress") == []


@mock.patch("plugbox.dress.requests.get")
def test_detail(get):
    get.return_value = _response(b"[1, 2, 3]")
    assert dress.detail("dress", "甲") == 3
    assert get.call_args.args[0] == dress.DETAIL_URL.format(sex="dress", name="甲")
    get.return_value = _response(b"{}")
    assert dress.detail("dress", "甲") == 0