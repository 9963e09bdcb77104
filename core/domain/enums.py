from __future__ import annotations

from enum import Enum


class ScopeKind(str, Enum):
    PROJECT = "PROJECT"
    VERSION = "VERSION"
    TRACKER = "TRACKER"
    ASSIGNEE = "ASSIGNEE"


class EtcMethod(str, Enum):
    """How the estimate to complete is derived when forecasting."""

    AC_PLUS_REMAINING = "AC_PLUS_REMAINING"  # AC + (BAC - EV)
    CPI = "CPI"  # AC + (BAC - EV) / CPI
    CPI_SPI = "CPI_SPI"  # AC + (BAC - EV) / (CPI * SPI)


__all__ = ["ScopeKind", "EtcMethod"]
