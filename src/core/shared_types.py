"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class AcceptState(StrEnum):
    NO_ACCEPTS = "no accepts"
    ONE_ACCEPT = "one accept"
    TWO_ACCEPTS = "two accepts"


class VerifyFailure(StrEnum):
    """Why a chain did not verify. The first failing check wins."""

    MISSING_ACCEPT = "missing accept"
    BAD_ACCEPT = "bad accept"
    BAD_MOVE_SIGNATURE = "bad move signature"
