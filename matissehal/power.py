"""Switching touch input devices on and off with the screen."""

from __future__ import annotations

import logging
import os
from typing import Union

TK_POWER = "/sys/class/input/input1/enabled"
TS_POWER = "/sys/class/input/input2/enabled"

PathLike = Union[str, os.PathLike]

_log = logging.getLogger(__name__)


def sysfs_write(path: PathLike, value: str) -> bool:
    """Write ``value`` to an existing file; log and return False on failure."""
    try:
        fd = os.open(path, os.O_WRONLY)
    except OSError as exc:
        _log.error("Error opening %s: %s", path, exc.strerror)
        return False
    try:
        os.write(fd, value.encode("ascii"))
    except OSError as exc:
        _log.error("Error writing to %s: %s", path, exc.strerror)
        return False
    finally:
        os.close(fd)
    return True


def set_interactive(
    on: bool,
    touchkey_path: PathLike = TK_POWER,
    touchscreen_path: PathLike = TS_POWER,
) -> bool:
    """Enable or disable touch keys and touchscreen; tell whether both worked."""
    _log.debug("set_interactive: %s input devices", "enabling" if on else "disabling")
    flag = "1" if on else "0"
    keys_ok = sysfs_write(touchkey_path, flag)
    screen_ok = sysfs_write(touchscreen_path, flag)
    return keys_ok and screen_ok