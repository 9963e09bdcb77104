from __future__ import annotations

from core.services.evm.models import EvmIndicators, EvmResult
from core.services.evm.ratios import safe_div, safe_mul


def summarize(evm: EvmResult) -> EvmIndicators:
    """
    Point-in-time EVM figures at the basis date.

    Variances and indices are None wherever an operand is missing (no actual
    cost yet, empty plan); EAC/ETC/VAC are only filled when forecasting.
    """
    BAC = evm.bac
    PV = evm.pv.today_value
    EV = evm.ev.today_value
    AC = evm.ac.today_value

    SPI = safe_div(EV, PV)
    CPI = safe_div(EV, AC)

    EAC = ETC = VAC = None
    forecast_finish = None
    delay_days = None
    if evm.forecast is not None:
        EAC = evm.forecast.eac
        forecast_finish = evm.forecast.forecast_finish_date
        if EAC is not None:
            ETC = EAC - AC if AC is not None else None
            VAC = BAC - EAC
        if forecast_finish is not None and evm.pv.due_date is not None:
            delay_days = (forecast_finish - evm.pv.due_date).days

    TCPI_to_BAC = None
    if AC is not None and BAC - AC > 0:
        TCPI_to_BAC = (BAC - EV) / (BAC - AC)

    indicators = EvmIndicators(
        basis_date=evm.basis_date,
        BAC=BAC,
        PV=PV,
        EV=EV,
        AC=AC,
        SV=(EV - PV) if PV is not None else None,
        CV=(EV - AC) if AC is not None else None,
        SPI=SPI,
        CPI=CPI,
        CR=safe_mul(SPI, CPI),
        EAC=EAC,
        ETC=ETC,
        VAC=VAC,
        TCPI_to_BAC=TCPI_to_BAC,
        completion_percent=(EV / BAC * 100.0) if BAC > 0 else None,
        forecast_finish_date=forecast_finish,
        delay_days=delay_days,
    )
    indicators.status_text = interpret_indicators(indicators)
    return indicators


def interpret_indicators(ind: EvmIndicators) -> str:
    parts = []

    if ind.CPI is None:
        parts.append("CPI: not available (no actual cost yet).")
    elif ind.CPI >= 1.05:
        parts.append("Cost: under budget (good).")
    elif ind.CPI >= 0.95:
        parts.append("Cost: roughly on budget.")
    else:
        parts.append("Cost: over budget (needs action).")

    if ind.SPI is None:
        parts.append("SPI: not available.")
    elif ind.SPI >= 1.05:
        parts.append("Schedule: ahead.")
    elif ind.SPI >= 0.95:
        parts.append("Schedule: on track.")
    else:
        parts.append("Schedule: behind (recover plan).")

    if ind.VAC is not None:
        if ind.VAC >= 0:
            parts.append("Forecast: within budget at completion.")
        else:
            parts.append("Forecast: likely over budget at completion.")

    if ind.delay_days is not None and ind.delay_days > 0:
        parts.append(f"Forecast finish: {ind.delay_days} day(s) after the planned due date.")

    return " ".join(parts)


__all__ = ["summarize", "interpret_indicators"]
