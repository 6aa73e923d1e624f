"""Reading the WLAN MAC address from the factory information file."""

from __future__ import annotations

import logging
import os
import re
from typing import Union

MAC_INFO_FILE = "/efs/wifi/.mac.info"

_log = logging.getLogger(__name__)

_OCTET = r"\s*([0-9A-Fa-f]{1,2})"
_MAC_RE = re.compile(":".join([_OCTET] * 6))


def parse_mac(text: str) -> bytes:
    """Parse ``XX:XX:XX:XX:XX:XX`` at the start of ``text`` into six bytes.

    Trailing text is ignored.  Raises ValueError when no address is found.
    """
    match = _MAC_RE.match(text)
    if match is None:
        raise ValueError(f"not a MAC address: {text!r}")
    return bytes(int(octet, 16) for octet in match.groups())


def read_wlan_address(path: Union[str, os.PathLike] = MAC_INFO_FILE) -> bytes:
    """Read the WLAN MAC address from ``path``.

    Raises OSError when the file cannot be opened and ValueError when its
    contents are not an address.
    """
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            text = handle.read()
    except OSError:
        _log.error("read_wlan_address: failed to open %s", path)
        raise
    try:
        return parse_mac(text)
    except ValueError:
        _log.error("read_wlan_address: %s: file contents are not valid", path)
        raise