from unittest import mock

import pytest
import requests

from plugbox.gifcmd import (
    COMMANDS,
    Invocation,
    UserContext,
    logo_url,
    material_url,
    parse_command,
)


def _response(content=b"\x89PNG data"):
    resp = mock.MagicMock()
    resp.content = content
    return resp


def test_parse_number_target():
    inv = parse_command("摸123456", 42)
    assert isinstance(inv, Invocation)
    assert inv.command == "摸"
    assert inv.effect == COMMANDS["摸"]
    assert inv.logos == ("123456", "42")
    assert inv.args == ("",)


def test_parse_at_target():
    inv = parse_command("搓[CQ:at,qq=123456]", 7)
    assert inv.target == "123456"
    assert inv.sender == "7"


def test_parse_image_target():
    file_id = "a1" * 16
    inv = parse_command(f"爬[CQ:image,file={file_id}.image]", 1)
    assert inv.target == file_id


def test_parse_args_between_command_and_target():
    inv = parse_command("阿尼亚喜欢好 看 123456", 1)
    assert inv.command == "阿尼亚喜欢"
    assert inv.args == ("好", "看", "")
    assert inv.target == "123456"


def test_longest_command_wins():
    inv = parse_command("舔屏123456", 1)
    assert inv.command == "舔屏"


def test_parse_rejects_unknown_or_missing_target():
    assert parse_command("不存在123456", 1) is None
    assert parse_command("摸", 1) is None
    assert parse_command("摸abc", 1) is None


def test_logo_url_number():
    assert logo_url("123456") == "http://q4.qlogo.cn/g?b=qq&nk=123456&s=640"


def test_logo_url_image_id_uppercased():
    url = logo_url("abcdef")
    assert url == "https://gchat.qpic.cn/gchatpic_new//--ABCDEF/0"


def test_material_url():
    assert material_url("mo/0.png").endswith("/-/raw/main/mo/0.png")


def test_user_context_paths(tmp_path):
    cc = UserContext(tmp_path, 99)
    assert cc.user_dir == tmp_path / "users" / "99"
    assert cc.user_dir.is_dir()
    assert cc.head_images == (cc.user_dir / "0.gif", cc.user_dir / "1.gif")


def test_material_path_existing_skips_download(tmp_path):
    cc = UserContext(tmp_path, 1)
    existing = tmp_path / "materials" / "mo" / "0.png"
    existing.parent.mkdir(parents=True)
    existing.write_bytes(b"x")
    with mock.patch("plugbox.gifcmd.requests.get") as get:
        assert cc.material_path("mo/0.png") == existing
    assert get.call_count == 0


def test_material_path_downloads(tmp_path):
    cc = UserContext(tmp_path, 1)
    with mock.patch("plugbox.gifcmd.requests.get", return_value=_response(b"abc")) as get:
        path = cc.material_path("si/0.png")
    assert path.read_bytes() == b"abc"
    assert get.call_args[0][0] == material_url("si/0.png")


def test_material_path_failure_leaves_nothing(tmp_path):
    cc = UserContext(tmp_path, 1)
    with mock.patch(
        "plugbox.gifcmd.requests.get", side_effect=requests.ConnectionError("down")
    ):
        with pytest.raises(requests.ConnectionError):
            cc.material_path("pa/3.png")
    assert not (tmp_path / "materials" / "pa" / "3.png").exists()


def test_material_range(tmp_path):
    cc = UserContext(tmp_path, 1)
    with mock.patch("plugbox.gifcmd.requests.get", return_value=_response()):
        paths = cc.material_range("qiao", 3)
    assert [p.name for p in paths] == ["0.png", "1.png", "2.png"]
    assert all(p.exists() for p in paths)


def test_prepare_logos(tmp_path):
    cc = UserContext(tmp_path, 5)
    with mock.patch("plugbox.gifcmd.requests.get", return_value=_response(b"g")) as get:
        paths = cc.prepare_logos("123456", "5")
    assert paths == list(cc.head_images)
    assert [c[0][0] for c in get.call_args_list] == [logo_url("123456"), logo_url("5")]