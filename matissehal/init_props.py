"""Setting build properties at boot according to the bootloader version."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

ANDROID_TARGET = "msm8226"

_log = logging.getLogger(__name__)

_US_PROPERTIES = {
    "ro.build.fingerprint": "samsung/matissewifi/matissewifixx:4.4.2/KOT49H/T320UEU1ANAI:user/release-keys",
    "ro.build.description": "matissewifi-user 4.4.2 KOT49H T320UEU1ANAI release-keys",
    "ro.product.model": "SM-T530",
    "ro.product.device": "matissewifi",
}

_INTL_PROPERTIES = {
    "ro.build.fingerprint": "samsung/matissewifixx/matissewifi:4.4.2/KOT49H/T320XXU1ANAI:user/release-keys",
    "ro.build.description": "matissewifixx-user 4.4.2 KOT49H T530XXU1ANAI release-keys",
    "ro.product.model": "SM-T530",
    "ro.product.device": "matissewifi",
}


def init_properties(
    properties: MutableMapping[str, str],
    target_platform: str = ANDROID_TARGET,
) -> dict[str, str]:
    """Set the build properties that match the bootloader.

    Nothing is changed unless ``ro.board.platform`` equals ``target_platform``.
    Returns the properties that were set.
    """
    platform = properties.get("ro.board.platform", "")
    if not platform or platform != target_platform:
        return {}

    bootloader = properties.get("ro.bootloader", "")
    chosen = _US_PROPERTIES if "T530" in bootloader else _INTL_PROPERTIES
    properties.update(chosen)

    device = properties.get("ro.product.device", "")
    _log.error(
        "Found bootloader id %s setting build properties for %s device",
        bootloader,
        device,
    )
    return dict(chosen)