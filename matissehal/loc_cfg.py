"""Reading ``KEY = VALUE`` configuration files into parameter tables.

Each line is split at ``=``; the value is parsed as a hex number when it
starts with ``0x``, and as both a float and a decimal integer otherwise.
Every parameter in the caller's table whose name matches takes the value in
the form its type asks for.  The logger's own ``DEBUG_LEVEL`` and
``TIMESTAMP`` parameters are always looked for as well, and the shared
logger is configured from them once the file has been read.
"""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable, Iterator, Optional, Union

from matissehal.log_util import DEFAULT_DEBUG_LEVEL, LogLevel, get_logger, loc_logger_init

LOC_MAX_PARAM_NAME = 48
LOC_MAX_PARAM_STRING = 80
LOC_MAX_PARAM_LINE = 80

_C_SPACE = " \t\n\v\f\r"
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_DEC_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_HEX_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ParamType(str, enum.Enum):
    """How a parameter's value is stored."""

    NUMBER = "n"
    STRING = "s"
    FLOAT = "f"


@dataclass
class ConfigValue:
    """One parsed ``name = value`` line, with the value in every form."""

    name: str
    str_value: str
    int_value: int = 0
    float_value: float = 0.0


@dataclass
class ConfigParam:
    """A named parameter that a configuration file may set."""

    name: str
    param_type: ParamType
    value: Any = None
    is_set: bool = False

    def __post_init__(self) -> None:
        self.param_type = ParamType(self.param_type)
        self.name = self.name[: LOC_MAX_PARAM_NAME - 1]

    def apply(self, value: ConfigValue) -> bool:
        """Take ``value`` if its name is this parameter's; tell whether it did."""
        if value.name != self.name:
            return False
        if self.param_type is ParamType.STRING:
            if value.str_value == "NULL":
                self.value = ""
            else:
                self.value = value.str_value[:LOC_MAX_PARAM_STRING]
        elif self.param_type is ParamType.NUMBER:
            self.value = value.int_value
        else:
            self.value = value.float_value
        self.is_set = True
        get_logger().emit(LogLevel.DEBUG, f"apply: PARAM {self.name} = {self.value}")
        return True


LOGGER_PARAMS = (
    ConfigParam("DEBUG_LEVEL", ParamType.NUMBER, DEFAULT_DEBUG_LEVEL),
    ConfigParam("TIMESTAMP", ParamType.NUMBER, 0),
)


def _clamp32(number: int) -> int:
    return max(_INT32_MIN, min(_INT32_MAX, number))


def _parse_dec(text: str) -> int:
    match = _DEC_RE.match(text)
    return _clamp32(int(match.group(1))) if match else 0


def _parse_hex(text: str) -> int:
    match = _HEX_RE.match(text)
    if not match:
        return 0
    number = int(match.group(2), 16)
    return _clamp32(-number if match.group(1) == "-" else number)


def _parse_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def trim_space(text: str) -> str:
    """Strip leading and trailing whitespace.

    A string made only of whitespace is returned unchanged.
    """
    stripped = text.strip(_C_SPACE)
    return stripped if stripped else text


def parse_line(line: str) -> Optional[ConfigValue]:
    """Parse one configuration line; None when it holds no name and value."""
    tokens = [token for token in line.split("=") if token]
    if len(tokens) < 2:
        return None
    name = trim_space(tokens[0])
    str_value = trim_space(tokens[1])
    value = ConfigValue(name=name, str_value=str_value)
    if str_value[:1] == "0" and str_value[1:2].lower() == "x":
        value.int_value = _parse_hex(str_value[2:])
    else:
        value.float_value = _parse_float(str_value)
        value.int_value = _parse_dec(str_value)
    return value


def _lines(handle: BinaryIO) -> Iterator[str]:
    """Yield lines in pieces no longer than the line buffer holds."""
    limit = LOC_MAX_PARAM_LINE - 1
    for raw in handle:
        line = raw.decode("latin-1")
        while len(line) > limit:
            yield line[:limit]
            line = line[limit:]
        if line:
            yield line


def _init_logger() -> None:
    debug_level, timestamp = LOGGER_PARAMS
    loc_logger_init(debug_level.value, timestamp.value)


def read_conf(
    path: Union[str, os.PathLike],
    table: Optional[Iterable[ConfigParam]] = None,
) -> bool:
    """Read a configuration file into ``table``; tell whether the file was found.

    The ``is_set`` flag of every parameter in ``table`` is cleared before the
    file is read and set for each parameter the file names.
    """
    params = list(table) if table is not None else []
    try:
        handle = open(path, "rb")
    except OSError:
        get_logger().emit(LogLevel.WARNING, f"read_conf: no {path} file found")
        _init_logger()
        return False

    with handle:
        get_logger().emit(LogLevel.DEBUG, f"read_conf: using {path}")
        for param in params:
            param.is_set = False
        for line in _lines(handle):
            value = parse_line(line)
            if value is None:
                continue
            for param in params:
                param.apply(value)
            for param in LOGGER_PARAMS:
                param.apply(value)

    _init_logger()
    return True