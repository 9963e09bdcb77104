from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from core.domain import EtcMethod, Issue
from core.services.evm.actual_cost import ActualCost
from core.services.evm.earned_value import EarnedValue
from core.services.evm.options import EvmOptions
from core.services.evm.planned_value import PlannedValue

ChartValues = List[Optional[float]]


@dataclass(frozen=True)
class EvmForecast:
    eac: Optional[float]
    forecast_finish_date: Optional[date]
    today_ac: Optional[float]
    today_ev: float
    etc_method: EtcMethod = EtcMethod.CPI


@dataclass(frozen=True)
class EvmResult:
    basis_date: date
    pv: PlannedValue
    pv_actual: PlannedValue
    ev: EarnedValue
    ac: ActualCost
    bac: float
    pv_baseline: Optional[PlannedValue] = None
    finished_date: Optional[date] = None
    forecast: Optional[EvmForecast] = None

    @property
    def has_forecast(self) -> bool:
        return self.forecast is not None

    @property
    def chart_adjust_date(self) -> date:
        """EV and AC are only charted up to here."""
        return min(d for d in (self.finished_date, self.basis_date) if d is not None)


@dataclass
class EvmChartData:
    labels: List[int] = field(default_factory=list)
    pv: ChartValues = field(default_factory=list)
    ac: ChartValues = field(default_factory=list)
    ev: ChartValues = field(default_factory=list)
    pv_daily: ChartValues = field(default_factory=list)
    baseline: Optional[ChartValues] = None
    bac: ChartValues = field(default_factory=list)
    eac: ChartValues = field(default_factory=list)
    ac_forecast: ChartValues = field(default_factory=list)
    ev_forecast: ChartValues = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "pv": list(self.pv),
            "ac": list(self.ac),
            "ev": list(self.ev),
            "pv_daily": list(self.pv_daily),
            "baseline": list(self.baseline) if self.baseline is not None else None,
            "bac": list(self.bac),
            "eac": list(self.eac),
            "ac_forecast": list(self.ac_forecast),
            "ev_forecast": list(self.ev_forecast),
        }


@dataclass
class PerformanceChartData:
    labels: List[int] = field(default_factory=list)
    spi: ChartValues = field(default_factory=list)
    cpi: ChartValues = field(default_factory=list)
    cr: ChartValues = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "spi": list(self.spi),
            "cpi": list(self.cpi),
            "cr": list(self.cr),
        }


@dataclass
class EvmIndicators:
    basis_date: date

    BAC: float
    PV: Optional[float]
    EV: float
    AC: Optional[float]

    SV: Optional[float]
    CV: Optional[float]
    SPI: Optional[float]
    CPI: Optional[float]
    CR: Optional[float]
    EAC: Optional[float] = None
    ETC: Optional[float] = None
    VAC: Optional[float] = None
    TCPI_to_BAC: Optional[float] = None
    completion_percent: Optional[float] = None
    forecast_finish_date: Optional[date] = None
    delay_days: Optional[int] = None
    status_text: str = ""


@dataclass
class EvmReport:
    project_id: str
    options: EvmOptions
    result: Optional[EvmResult] = None
    chart: EvmChartData = field(default_factory=EvmChartData)
    performance: Optional[PerformanceChartData] = None
    indicators: Optional[EvmIndicators] = None
    incomplete_issues: List[Issue] = field(default_factory=list)
    baseline_id: Optional[str] = None
    trace_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.result is None


__all__ = [
    "ChartValues",
    "EvmForecast",
    "EvmResult",
    "EvmChartData",
    "PerformanceChartData",
    "EvmIndicators",
    "EvmReport",
]
