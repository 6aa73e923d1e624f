"""Backlight and button lights driven through sysfs brightness files."""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Optional, Union

PANEL_FILE = "/sys/class/leds/lcd-backlight/brightness"
BUTTON_FILE = "/sys/class/sec/sec_touchkey/brightness"

LIGHT_ID_BACKLIGHT = "backlight"
LIGHT_ID_BUTTONS = "buttons"
LIGHT_ID_BATTERY = "battery"
LIGHT_ID_NOTIFICATIONS = "notifications"
LIGHT_ID_ATTENTION = "attention"

MODULE_NAME = "Matissewifi Lights Module"

PathLike = Union[str, os.PathLike]

_log = logging.getLogger(__name__)
_lock = threading.Lock()


def rgb_to_brightness(color: int) -> int:
    """Turn an ARGB colour into a 0-255 brightness; alpha is ignored."""
    color &= 0x00FFFFFF
    red = (color >> 16) & 0xFF
    green = (color >> 8) & 0xFF
    blue = color & 0xFF
    return (77 * red + 150 * green + 29 * blue) >> 8


def is_lit(color: int) -> bool:
    """Tell whether any colour channel of an ARGB colour is on."""
    return bool(color & 0x00FFFFFF)


def write_int(path: PathLike, value: int) -> None:
    """Write ``value`` and a newline to an existing file.

    Raises OSError when the file cannot be opened or written.
    """
    _log.debug("write_int: path %s, value %d", path, value)
    try:
        fd = os.open(path, os.O_RDWR)
    except OSError:
        _log.error("write_int failed to open %s", path)
        raise
    try:
        os.write(fd, f"{value}\n".encode("ascii"))
    finally:
        os.close(fd)


class LightDevice:
    """One light, opened by name, whose colour can be set.

    The battery, notification and attention lights have no hardware on
    this device, so setting them is accepted and has no effect.
    """

    def __init__(
        self,
        name: str,
        panel_file: PathLike = PANEL_FILE,
        button_file: PathLike = BUTTON_FILE,
    ) -> None:
        handlers: dict[str, Optional[Callable[[int], None]]] = {
            LIGHT_ID_BACKLIGHT: self._set_backlight,
            LIGHT_ID_BUTTONS: self._set_buttons,
            LIGHT_ID_BATTERY: None,
            LIGHT_ID_NOTIFICATIONS: None,
            LIGHT_ID_ATTENTION: None,
        }
        if name not in handlers:
            raise ValueError(f"unknown light: {name!r}")
        self.name = name
        self.panel_file = panel_file
        self.button_file = button_file
        self._handler = handlers[name]

    def set_light(self, color: int) -> None:
        """Show ``color`` (ARGB) on this light."""
        if self._handler is not None:
            self._handler(color)

    def _set_backlight(self, color: int) -> None:
        brightness = rgb_to_brightness(color)
        with _lock:
            write_int(self.panel_file, brightness)

    def _set_buttons(self, color: int) -> None:
        with _lock:
            write_int(self.button_file, 1 if is_lit(color) else 0)

    def __repr__(self) -> str:
        return f"LightDevice(name={self.name!r})"


def open_lights(
    name: str,
    panel_file: PathLike = PANEL_FILE,
    button_file: PathLike = BUTTON_FILE,
) -> LightDevice:
    """Open the light called ``name``; raise ValueError for an unknown one."""
    return LightDevice(name, panel_file, button_file)