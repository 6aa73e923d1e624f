"""Detection of the GNSS target the location stack runs on.

A target value packs the GNSS type in its upper bits and a one-bit flag,
set when a sensor subsystem (SSC) is present, in its lowest bit.
"""

from __future__ import annotations

import enum
import os
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Optional, Union

from matissehal.log_util import LogLevel, get_logger


class GnssTarget(enum.IntEnum):
    """Kinds of GNSS hardware a target can carry."""

    NONE = 0
    MSM = 1
    GSS = 2
    MDM = 3
    QCA1530 = 4
    UNKNOWN = 5


class SscType(enum.IntEnum):
    """Whether a sensor subsystem is present."""

    NO_SSC = 0
    HAS_SSC = 1


def target_set(gnss: int, ssc: int) -> int:
    """Pack a GNSS type and SSC flag into a target value."""
    return (int(gnss) << 1) | int(ssc)


def gnss_type(target: int) -> int:
    """Return the GNSS type packed into a target value."""
    return target >> 1


def has_ssc(target: int) -> bool:
    """Tell whether a target value has the SSC flag set."""
    return (target & SscType.HAS_SSC) == SscType.HAS_SSC


TARGET_DEFAULT = target_set(GnssTarget.MSM, SscType.HAS_SSC)
TARGET_MDM = target_set(GnssTarget.MDM, SscType.HAS_SSC)
TARGET_APQ_SA = target_set(GnssTarget.GSS, SscType.NO_SSC)
TARGET_MPQ = target_set(GnssTarget.NONE, SscType.NO_SSC)
TARGET_MSM_NO_SSC = target_set(GnssTarget.MSM, SscType.NO_SSC)
TARGET_QCA1530 = target_set(GnssTarget.QCA1530, SscType.NO_SSC)
TARGET_UNKNOWN = target_set(GnssTarget.UNKNOWN, SscType.NO_SSC)

#: Returned when detection could not settle on a target; it is not cached.
TARGET_NOT_DETECTED = 0xFFFFFFFF

APQ8064_ID_1 = "109"
APQ8064_ID_2 = "153"
MPQ8064_ID_1 = "130"
MSM8930_ID_1 = "142"
MSM8930_ID_2 = "116"
APQ8030_ID_1 = "157"
APQ8074_ID_1 = "184"

LINE_LEN = 100
QCA1530_DETECT_TIMEOUT = 30
QCA1530_DETECT_PRESENT = "yes"
QCA1530_DETECT_PROGRESS = "detect"
QCA1530_PROPERTY = "persist.qca1530"
BASEBAND_PROPERTY = "ro.baseband"

HW_PLATFORM_PATH = "sys/devices/soc0/hw_platform"
SOC_ID_PATH = "sys/devices/soc0/soc_id"
HW_PLATFORM_DEP_PATH = "sys/devices/system/soc/soc0/hw_platform"
SOC_ID_DEP_PATH = "sys/devices/system/soc/soc0/id"
MDM_PATH = "dev/mdm"

_STR_LIQUID = "Liquid"
_STR_SURF = "Surf"
_STR_MTP = "MTP"
_STR_APQ = "apq"

PropertySource = Union[Mapping[str, str], Callable[[str], Optional[str]], None]


def _matches_word(text: str, word: str) -> bool:
    """True when ``text`` starts with ``word`` followed by end of string or line."""
    if not text.startswith(word):
        return False
    rest = text[len(word):]
    return rest == "" or rest[0] in "\0\n\r"


def _read_a_line(path: Path, line_size: int = LINE_LEN) -> Optional[str]:
    """Read the first line of a file, at most ``line_size - 1`` characters."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(line_size - 1)
    except OSError as exc:
        get_logger().emit(LogLevel.ERROR, f"open failed: {path}: {exc.strerror}")
        return None
    get_logger().emit(LogLevel.DEBUG, f"cat {path}: {line}")
    return line


class TargetDetector:
    """Works out the target from system properties and SoC information files.

    ``properties`` maps a property name to its value; a mapping or a callable
    returning None for an inaccessible property may be given.  File paths are
    resolved below ``root``.  A detected target is remembered.
    """

    def __init__(
        self,
        properties: PropertySource = None,
        root: Union[str, os.PathLike] = "/",
        sleep: Callable[[float], None] = time.sleep,
        detect_timeout: int = QCA1530_DETECT_TIMEOUT,
    ) -> None:
        if properties is None:
            self._get_property: Callable[[str], Optional[str]] = lambda name: None
        elif isinstance(properties, Mapping):
            self._get_property = properties.get
        else:
            self._get_property = properties
        self._root = Path(root)
        self._sleep = sleep
        self._detect_timeout = detect_timeout
        self._target: Optional[int] = None

    def _path(self, relative: str) -> Path:
        return self._root / relative

    def is_qca1530(self) -> bool:
        """Tell whether the QCA1530 SoC is configured, waiting out detection."""
        result = False
        for _ in range(self._detect_timeout):
            value = self._get_property(QCA1530_PROPERTY)
            if value is None:
                get_logger().emit(
                    LogLevel.VERBOSE,
                    f"qca1530: property {QCA1530_PROPERTY} is not accessible",
                )
                break
            get_logger().emit(
                LogLevel.VERBOSE, f"qca1530: property {QCA1530_PROPERTY} is set to {value}"
            )
            if value == QCA1530_DETECT_PRESENT:
                result = True
                break
            if value == QCA1530_DETECT_PROGRESS:
                get_logger().emit(LogLevel.VERBOSE, "qca1530: SoC detection is in progress.")
                self._sleep(1)
                continue
            break
        get_logger().emit(
            LogLevel.DEBUG, f"qca1530: detected={'true' if result else 'false'}"
        )
        return result

    def _read_first_existing(self, preferred: str, fallback: str) -> str:
        path = self._path(preferred)
        if not path.exists():
            path = self._path(fallback)
        return _read_a_line(path) or ""

    def detect(self) -> int:
        """Return the target value, detecting it on first use."""
        if self._target is not None:
            return self._target

        target = self._classify()
        if target != TARGET_NOT_DETECTED:
            self._target = target
        get_logger().emit(LogLevel.DEBUG, f"HAL: detect returned {target}")
        return target

    def _classify(self) -> int:
        if self.is_qca1530():
            return TARGET_QCA1530

        baseband = self._get_property(BASEBAND_PROPERTY) or ""
        hw_platform = self._read_first_existing(HW_PLATFORM_PATH, HW_PLATFORM_DEP_PATH)
        soc_id = self._read_first_existing(SOC_ID_PATH, SOC_ID_DEP_PATH)

        if baseband.startswith(_STR_APQ):
            if _matches_word(soc_id, MPQ8064_ID_1):
                return TARGET_MPQ
            return TARGET_APQ_SA

        if any(_matches_word(hw_platform, word) for word in (_STR_LIQUID, _STR_SURF, _STR_MTP)):
            if _read_a_line(self._path(MDM_PATH)) is not None:
                return TARGET_MDM
            return TARGET_NOT_DETECTED

        if _matches_word(soc_id, MSM8930_ID_1) or _matches_word(soc_id, MSM8930_ID_2):
            return TARGET_MSM_NO_SSC
        return TARGET_UNKNOWN