from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

# Gateway replies with a bare integer. Anything above this threshold is a
# message id, anything at or below it is a status code from the table below.
MAX_STATUS_CODE: Final[int] = 100
MIN_MESSAGE_ID: Final[int] = MAX_STATUS_CODE + 1

UNKNOWN_ERROR: Final[str] = "unknown error"

RESPONSE_CODES: Final[Mapping[int, str]] = MappingProxyType(
    {
        1: "system internal error",
        2: "missing PARAM_NAME parameter",
        3: "unable to authenticate",
        4: "IP ADDRESS is not allowed",
        5: "invalid SENDER parameter",
        6: "SENDER is not allowed",
        7: "invalid NUMBER parameter",
        8: "invalid CODING parameter",
        9: "unable to convert TEXT",
        10: "length of UDH and TEXT too long",
        11: "empty TEXT parameter",
        12: "invalid TIME parameter",
        13: "invalid EXPIRED parameter",
        14: "invalid DLR-URL parameter",
        15: "Invalid FLAG-FLASH parameter",
        16: "invalid FLAG-NOLOG parameter",
        17: "invalid FLAG-TEST parameter",
        18: "invalid FLAG-NOBL parameter",
        19: "invalid FLAG-CONVERT parameter",
    }
)


def describe_code(code: int) -> str:
    return RESPONSE_CODES.get(code, UNKNOWN_ERROR)
