"""Picture-making commands: parsing, avatar links and material downloads."""

from __future__ import annotations

import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import requests

log = logging.getLogger(__name__)

MATERIAL_BASE = "https://gitcode.net/m0_60838134/imagematerials/-/raw/main/"
QQ_LOGO_URL = "http://q4.qlogo.cn/g?b=qq&nk={value}&s=640"
CHAT_PIC_URL = "https://gchat.qpic.cn/gchatpic_new//--{value}/0"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
)
TIMEOUT = 30.0

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# command word -> picture effect it produces
COMMANDS: dict[str, str] = {
    "搓": "cuo",
    "冲": "xqe",
    "摸": "mo",
    "拍": "pai",
    "丢": "diu",
    "吃": "chi",
    "敲": "qiao",
    "啃": "ken",
    "蹭": "ceng",
    "爬": "pa",
    "撕": "si",
    "灰度": "grayscale",
    "上翻": "flip_v",
    "下翻": "flip_v",
    "左翻": "flip_h",
    "右翻": "flip_h",
    "反色": "invert",
    "浮雕": "convolve3x3",
    "打码": "blur",
    "负片": "invert_and_grayscale",
    "旋转": "rotate",
    "变形": "deformation",
    "亲": "kiss",
    "结婚申请": "marriage",
    "结婚登记": "marriage",
    "阿尼亚喜欢": "anyasuki",
    "像只": "alike",
    "我永远喜欢": "always_like",
    "永远喜欢": "always_like",
    "像样的亲亲": "decent_kiss",
    "国旗": "china_flag",
    "不要靠近": "dont_touch",
    "万能表情": "universal",
    "空白表情": "universal",
    "采访": "interview",
    "需要": "need",
    "你可能需要": "need",
    "这像画吗": "paint",
    "小画家": "painter",
    "完美": "perfect",
    "玩游戏": "play_game",
    "出警": "police",
    "警察": "police1",
    "舔": "prpr",
    "舔屏": "prpr",
    "prpr": "prpr",
    "安全感": "safe_sense",
    "精神支柱": "support",
    "想什么": "thinkwhat",
    "墙纸": "wallpaper",
    "为什么at我": "whyatme",
    "交个朋友": "make_friend",
    "打工人": "back_to_work",
    "继续干活": "back_to_work",
    "兑换券": "coupon",
    "注意力涣散": "distracted",
    "垃圾桶": "garbage",
    "垃圾": "garbage",
    "捶": "thump",
    "啾啾": "jiujiu",
    "2敲": "knock",
    "听音乐": "listen_music",
    "永远爱你": "love_you",
    "2拍": "pat",
    "顶": "jack_up",
    "捣": "pound",
    "打拳": "punch",
    "滚": "roll",
    "吸": "suck",
    "嗦": "suck",
    "扔": "throw",
    "锤": "hammer",
    "紧贴": "tightly",
    "紧紧贴着": "tightly",
    "转": "turn",
    "蒙蔽": "mengbi",
    "踩": "cai",
    "好玩": "haowan",
    "2转": "whirl",
    "2滚": "push",
    "踢球": "tiqiu",
    "2舔": "lick",
    "可莉吃": "klee",
    "胡桃啃": "hutaoken",
    "怀": "huai",
    "砰": "peng",
    "你犯法了": "fanfa",
    "炖": "dun",
    "2蹭": "ceng2",
    "诶嘿": "eihei",
    "膜拜": "worship",
    "吞": "ci",
    "揍": "zou",
    "给我变": "bian",
    "玩一下": "van",
    "不要看": "neko",
    "小天使": "xiaotianshi",
    "你的": "youer",
    "我老婆": "nowife",
    "远离": "yuanli",
    "抬棺": "taiguan",
    "一直": "always_do",
}

# Longer words first, so "舔屏" is never read as "舔" followed by "屏".
_COMMAND_ALTS = "|".join(
    re.escape(c) for c in sorted(COMMANDS, key=len, reverse=True)
)
_COMMAND_RE = re.compile(
    "(" + _COMMAND_ALTS + ")"
    r"[\s\S]*?"
    r"(\[CQ:(image,file=([0-9a-zA-Z]{32}).*|at.+?(\d{5,11}))\].*|(\d+))",
    re.ASCII,
)


@dataclass(frozen=True)
class Invocation:
    """A parsed picture command."""

    command: str
    effect: str
    target: str
    sender: str
    args: tuple[str, ...]

    @property
    def logos(self) -> tuple[str, str]:
        """Avatar sources: the target first, then the sender."""
        return self.target, self.sender


def parse_command(text: str, user_id: int) -> Invocation | None:
    """Parse "<command>[text]<@user|QQ number|image>", or return None."""
    m = _COMMAND_RE.fullmatch(text)
    if not m:
        return None
    command, tail = m.group(1), m.group(2)
    target = "".join(g or "" for g in m.group(4, 5, 6))
    middle = text[len(command):]
    if tail and middle.endswith(tail):
        middle = middle[: len(middle) - len(tail)]
    return Invocation(
        command=command,
        effect=COMMANDS[command],
        target=target,
        sender=str(user_id),
        args=tuple(middle.split(" ")),
    )


def _is_int64(value: str) -> bool:
    return bool(_INTEGER_RE.fullmatch(value)) and _INT64_MIN <= int(value) <= _INT64_MAX


def logo_url(value: str) -> str:
    """Avatar link for a QQ number, or chat picture link for an image id."""
    if _is_int64(value):
        return QQ_LOGO_URL.format(value=value)
    return CHAT_PIC_URL.format(value=value.upper())


def material_url(name: str) -> str:
    """Download link of a picture material."""
    return MATERIAL_BASE + name


def _download(url: str, target: Path) -> None:
    try:
        resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=TIMEOUT)
        resp.raise_for_status()
        data = resp.content
    except requests.RequestException:
        target.unlink(missing_ok=True)
        raise
    try:
        target.write_bytes(data)
    except OSError:
        target.unlink(missing_ok=True)
        raise


class UserContext:
    """Working directories for one user's pictures."""

    def __init__(self, datapath: str | os.PathLike, user: int) -> None:
        self.datapath = Path(datapath)
        self.materials_dir = self.datapath / "materials"
        self.user_dir = self.datapath / "users" / str(user)
        self.user_dir.mkdir(parents=True, exist_ok=True)
        self.head_images = (self.user_dir / "0.gif", self.user_dir / "1.gif")

    def prepare_logos(self, *values: str) -> list[Path]:
        """Download the avatar for each value to 0.gif, 1.gif, ..."""
        paths = []
        for i, value in enumerate(values):
            target = self.user_dir / f"{i}.gif"
            _download(logo_url(value), target)
            paths.append(target)
        return paths

    def material_path(self, name: str) -> Path:
        """Local path of a material, downloading it if it is missing."""
        target = self.materials_dir / name
        if target.exists():
            log.debug("[gif] dl %s exists at %s", name, target)
            return target
        target.parent.mkdir(parents=True, exist_ok=True)
        _download(material_url(name), target)
        log.debug("[gif] dl %s to %s succeeded", name, target)
        return target

    def material_range(self, prefix: str, end: int) -> list[Path]:
        """Local paths of materials prefix/0.png .. prefix/<end-1>.png."""
        (self.materials_dir / prefix).mkdir(parents=True, exist_ok=True)
        names = [f"{prefix}/{i}.png" for i in range(end)]
        if not names:
            return []
        with ThreadPoolExecutor(max_workers=min(8, len(names))) as pool:
            futures = [pool.submit(self.material_path, n) for n in names]
            return [f.result() for f in futures]