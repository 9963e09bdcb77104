from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Tuple

from core.domain import EtcMethod, ScopeSelector
from core.exceptions import ValidationError

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def _default_etc_method() -> EtcMethod:
    raw = (os.getenv("PM_EVM_ETC_METHOD", EtcMethod.CPI.value) or "").strip().upper()
    try:
        return EtcMethod(raw or EtcMethod.CPI.value)
    except ValueError as exc:
        raise ValidationError(f"Unsupported PM_EVM_ETC_METHOD: {raw!r}", code="BAD_OPTION") from exc


def _default_exclude_holidays() -> bool:
    return _parse_bool("PM_EVM_EXCLUDE_HOLIDAYS", os.getenv("PM_EVM_EXCLUDE_HOLIDAYS", "false"))


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValidationError(f"Option '{name}' expects a boolean, got {value!r}", code="BAD_OPTION")


def _parse_date(name: str, value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Option '{name}' expects an ISO date, got {value!r}", code="BAD_OPTION") from exc


def _parse_id(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    return str(value).strip() or None


def _parse_ids(value: Any) -> Tuple[str, ...]:
    if value in (None, ""):
        return ()
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(v) for v in value]
    return tuple(p.strip() for p in parts if p and p.strip())


@dataclass(frozen=True)
class EvmOptions:
    """Per-request configuration of one EVM calculation."""

    basis_date: date = field(default_factory=date.today)
    selected_tracker_ids: Tuple[str, ...] = ()
    selected_version_id: Optional[str] = None
    selected_assignee_id: Optional[str] = None
    baseline_id: Optional[str] = None
    no_use_baseline: bool = False
    forecast: bool = False
    display_performance: bool = False
    display_incomplete: bool = False
    exclude_holidays: bool = field(default_factory=_default_exclude_holidays)
    etc_method: EtcMethod = field(default_factory=_default_etc_method)
    calendar_id: str = "default"

    @classmethod
    def from_params(cls, params: Mapping[str, Any], today: Optional[date] = None) -> "EvmOptions":
        """Build options from request-style values (strings, 'true'/'false', ISO dates)."""
        etc_raw = params.get("etc_method")
        if etc_raw in (None, ""):
            etc_method = _default_etc_method()
        else:
            try:
                etc_method = EtcMethod(str(etc_raw).strip().upper())
            except ValueError as exc:
                raise ValidationError(f"Unsupported etc_method: {etc_raw!r}", code="BAD_OPTION") from exc

        if params.get("exclude_holidays") in (None, ""):
            exclude_holidays = _default_exclude_holidays()
        else:
            exclude_holidays = _parse_bool("exclude_holidays", params.get("exclude_holidays"))

        return cls(
            basis_date=_parse_date("basis_date", params.get("basis_date")) or today or date.today(),
            selected_tracker_ids=_parse_ids(params.get("selected_tracker_id")),
            selected_version_id=_parse_id(params.get("selected_version_id")),
            selected_assignee_id=_parse_id(params.get("selected_assignee_id")),
            baseline_id=_parse_id(params.get("baseline_id")),
            no_use_baseline=_parse_bool("no_use_baseline", params.get("no_use_baseline")),
            forecast=_parse_bool("forecast", params.get("forecast")),
            display_performance=_parse_bool("display_performance", params.get("display_performance")),
            display_incomplete=_parse_bool("display_incomplete", params.get("display_incomplete")),
            exclude_holidays=exclude_holidays,
            etc_method=etc_method,
            calendar_id=_parse_id(params.get("calendar_id")) or "default",
        )

    def scope_selector(self) -> ScopeSelector:
        if self.selected_version_id:
            return ScopeSelector.version(self.selected_version_id)
        if self.selected_tracker_ids:
            return ScopeSelector.trackers(*self.selected_tracker_ids)
        if self.selected_assignee_id:
            return ScopeSelector.assignee(self.selected_assignee_id)
        return ScopeSelector.project()


__all__ = ["EvmOptions"]
