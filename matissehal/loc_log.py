"""Name lookups and time strings for location-service log messages."""

from __future__ import annotations

import math
import time
from typing import Iterable, Sequence, Tuple

from matissehal.loc_target import GnssTarget, gnss_type, has_ssc
from matissehal.msg_q import MsgQStatus

UNKNOWN_STR = "UNKNOWN"

NameTable = Sequence[Tuple[str, int]]

MSG_Q_STATUS_TABLE: NameTable = tuple((f"eMSG_Q_{s.name}", int(s)) for s in MsgQStatus)
TARGET_NAME_TABLE: NameTable = tuple((f"GNSS_{g.name}", int(g)) for g in GnssTarget)


def name_from_mask(table: Iterable[Tuple[str, int]], mask: int) -> str:
    """Return the name of the first entry whose value shares a bit with ``mask``."""
    return next((name for name, val in table if val & mask), UNKNOWN_STR)


def name_from_val(table: Iterable[Tuple[str, int]], value: int) -> str:
    """Return the name of the first entry whose value equals ``value``."""
    return next((name for name, val in table if val == value), UNKNOWN_STR)


def msg_q_status_name(status: int) -> str:
    """Return the name of a message-queue status code."""
    return name_from_val(MSG_Q_STATUS_TABLE, int(status))


def succ_fail_string(is_succ: bool) -> str:
    """Return "successful" or "failed"."""
    return "successful" if is_succ else "failed"


def target_name(target: int) -> str:
    """Describe a target value, e.g. ``" GNSS_MDM with SSC"``."""
    index = gnss_type(target)
    if not 0 <= index < len(TARGET_NAME_TABLE):
        index = len(TARGET_NAME_TABLE) - 1
    name = name_from_val(TARGET_NAME_TABLE, index)
    if has_ssc(target):
        return f" {name} with SSC"
    return f" {name}  without SSC"


def loc_get_time(now: float | None = None) -> str:
    """Format local time of day as ``HH:MM:SS.mmm``."""
    if now is None:
        now = time.time()
    seconds = math.floor(now)
    millis = int((now - seconds) * 1000)
    hms = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"{hms}.{millis:03d}"