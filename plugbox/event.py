"""Friend requests and group invitations: auto-accept switches and flag codes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import IntFlag

_BASE = 0x4E00
_CHUNK_MASK = 0x3FFF
_FLAG_MASK = (1 << 56) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_SWITCH_RE = re.compile(r"(开启|关闭)自动同意(申请|邀请|主人)")
_DECISION_RE = re.compile(r"(同意|拒绝)(申请|邀请)\s*([一-踀]{4})\s*(.*)")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_KINDS = {"申请": "friend", "邀请": "invite"}


class AutoAccept(IntFlag):
    """Stored auto-accept switches."""

    APPLY = 0b001
    INVITE = 0b010
    MASTER_OFF = 0b100


_SOURCE_BITS = {
    "申请": AutoAccept.APPLY,
    "邀请": AutoAccept.INVITE,
    "主人": AutoAccept.MASTER_OFF,
}


@dataclass(frozen=True)
class Decision:
    """A superuser's answer to a pending request."""

    accept: bool
    kind: str
    flag: str
    reason: str


def apply_switch(state: int, option: str, source: str) -> AutoAccept:
    """Return the switches after turning one of them on ("开启") or off ("关闭")."""
    if option not in ("开启", "关闭"):
        raise ValueError(f"unknown option: {option!r}")
    try:
        bit = _SOURCE_BITS[source]
    except KeyError:
        raise ValueError(f"unknown source: {source!r}") from None
    # Turning master auto-accept off sets its bit.
    on = (option == "关闭") if source == "主人" else (option == "开启")
    current = int(state)
    value = current | bit if on else current & (0b111 ^ bit)
    return AutoAccept(value & 0b111)


def parse_switch(text: str) -> tuple[str, str] | None:
    """Parse a switch command into (option, source), or None."""
    m = _SWITCH_RE.fullmatch(text)
    return (m.group(1), m.group(2)) if m else None


def encode_flag(flag: str | int) -> str:
    """Encode a request flag as four base16384 characters (low 56 bits)."""
    text = str(flag)
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"invalid flag: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"flag out of range: {text!r}")
    bits = value & _FLAG_MASK
    return "".join(
        chr(_BASE + ((bits >> shift) & _CHUNK_MASK)) for shift in (42, 28, 14, 0)
    )


def decode_flag(text: str) -> str:
    """Decode four base16384 characters back into the decimal flag."""
    if len(text) != 4:
        raise ValueError(f"encoded flag must be 4 characters: {text!r}")
    bits = 0
    for ch in text:
        code = ord(ch) - _BASE
        if not 0 <= code <= _CHUNK_MASK:
            raise ValueError(f"not a base16384 character: {ch!r}")
        bits = (bits << 14) | code
    return str(bits)


def parse_decision(text: str) -> Decision | None:
    """Parse "同意/拒绝 申请/邀请 <flag> [reason]", or return None."""
    m = _DECISION_RE.fullmatch(text)
    if not m:
        return None
    cmd, org, encoded, reason = m.groups()
    return Decision(
        accept=cmd == "同意",
        kind=_KINDS[org],
        flag=decode_flag(encoded),
        reason=reason,
    )


def should_auto_accept(state: int, kind: str, is_superuser: bool) -> bool:
    """Decide whether a "friend" or "invite" request is accepted automatically."""
    if kind == "friend":
        bit = AutoAccept.APPLY
    elif kind == "invite":
        bit = AutoAccept.INVITE
    else:
        raise ValueError(f"unknown request kind: {kind!r}")
    value = int(state)
    master_off = bool(value & AutoAccept.MASTER_OFF)
    return bool(value & bit) or (not master_off and is_superuser)


def _stamp(when: datetime) -> str:
    return when.strftime(_TIME_FORMAT)


def format_invite_notice(
    when: datetime,
    username: str,
    userid: int,
    groupname: str,
    groupid: int,
    encoded: str,
    accepted: bool,
) -> list[str]:
    """Build the forward-message nodes sent to the superuser for a group invite."""
    body = (
        f"收到来自\n用户:[{username}]({userid})的群聊邀请"
        f"\n群聊:[{groupname}]({groupid})"
    )
    if accepted:
        return [f"已自动同意在{_stamp(when)}{body}\nflag:{encoded}"]
    return [
        f"在{_stamp(when)}{body}"
        "\n请在下方复制flag并在前面加上:"
        "\n同意/拒绝邀请，来决定同意还是拒绝",
        encoded,
    ]


def format_friend_notice(
    when: datetime,
    username: str,
    userid: int,
    comment: str,
    encoded: str,
    accepted: bool,
) -> list[str]:
    """Build the forward-message nodes sent to the superuser for a friend request."""
    body = f"收到来自\n用户:[{username}]({userid})\n的好友请求:{comment}"
    if accepted:
        return [f"已自动同意在{_stamp(when)}{body}\nflag:{encoded}"]
    return [
        f"在{_stamp(when)}{body}"
        "\n请在下方复制flag并在前面加上:"
        "\n同意/拒绝申请，来决定同意还是拒绝",
        encoded,
    ]