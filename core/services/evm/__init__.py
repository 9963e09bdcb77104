from .calculator import EvmCalculator
from .chart_data import ChartSeriesBuilder, complement_evm_value
from .indicators import summarize
from .models import (
    EvmChartData,
    EvmForecast,
    EvmIndicators,
    EvmReport,
    EvmResult,
    PerformanceChartData,
)
from .options import EvmOptions
from .series import Series
from .service import EvmService

__all__ = [
    "EvmCalculator",
    "ChartSeriesBuilder",
    "complement_evm_value",
    "summarize",
    "EvmChartData",
    "EvmForecast",
    "EvmIndicators",
    "EvmReport",
    "EvmResult",
    "PerformanceChartData",
    "EvmOptions",
    "Series",
    "EvmService",
]
