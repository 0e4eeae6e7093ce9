"""Long-term projection: yearly cash flows, NPV, IRR, discounted payback.

Year 0 carries the investment; every following year carries the bill
savings escalated by energy inflation, reduced by module degradation, net
of O&M.

Key formulas:
  CF_0 = −system_cost
  CF_y = annual_savings × (1 + infl)^(y−1) × (1 − deg)^(y−1) − O&M
  NPV  = Σ CF_y / (1 + r)^y
  IRR  = rate where NPV = 0  (bisection)
"""

from __future__ import annotations

import numpy as np

from solar_proposal.config.finance import FinancialAssumptions
from solar_proposal.models.results import FinancialProjection


def compute_npv(cash_flows: list[float], annual_rate: float) -> float:
    """Net Present Value of yearly cash flows.

    Parameters
    ----------
    cash_flows : list[float]
        Yearly net cash flows. Index 0 = year 0 (not discounted).
    annual_rate : float
        Discount rate as a fraction (e.g. 0.06 for 6%).
    """
    if not cash_flows:
        return 0.0
    years = np.arange(len(cash_flows))
    discount = (1.0 + annual_rate) ** years
    return float(np.sum(np.asarray(cash_flows, dtype=float) / discount))


def compute_irr(cash_flows: list[float], max_iter: int = 200, tol: float = 1e-8) -> float | None:
    """Internal Rate of Return (annual) via bisection.

    Returns None if:
      - All cash flows are same sign (no crossover)
      - No root between −99% and 1000%
    """
    if not cash_flows or len(cash_flows) < 2:
        return None

    has_positive = any(cf > 0 for cf in cash_flows)
    has_negative = any(cf < 0 for cf in cash_flows)
    if not (has_positive and has_negative):
        return None

    low, high = -0.99, 10.0
    npv_low = compute_npv(cash_flows, low)
    if npv_low * compute_npv(cash_flows, high) > 0:
        return None

    mid = (low + high) / 2
    for _ in range(max_iter):
        mid = (low + high) / 2
        npv_mid = compute_npv(cash_flows, mid)

        if abs(npv_mid) < tol:
            return mid

        if npv_low * npv_mid < 0:
            high = mid
        else:
            low = mid
            npv_low = npv_mid

        if high - low < tol:
            return mid

    return mid


def compute_discounted_payback(cash_flows: list[float], annual_rate: float) -> float | None:
    """Years until cumulative PV(CF) reaches zero, interpolated within the year.

    Returns None if it never does within the horizon.
    """
    if not cash_flows:
        return None

    cumulative_pv = 0.0
    for year, cf in enumerate(cash_flows):
        pv = cf / (1.0 + annual_rate) ** year
        previous = cumulative_pv
        cumulative_pv += pv
        if year > 0 and cumulative_pv >= 0:
            if pv <= 0:
                return float(year)
            return (year - 1) + (-previous / pv)
    return None


def build_projection(
    system_cost_reais: float,
    annual_savings_reais: float,
    assumptions: FinancialAssumptions,
) -> FinancialProjection:
    """Project yearly cash flows over ``assumptions.horizon_years``."""
    inflation = assumptions.energy_inflation_annual_percent / 100.0
    degradation = assumptions.panel_degradation_annual_percent / 100.0
    rate = assumptions.discount_rate_annual_percent / 100.0

    # Exponent y−1 so the first year uses today's tariff and a new array.
    age = np.arange(assumptions.horizon_years)
    escalation = (1.0 + inflation) ** age * (1.0 - degradation) ** age
    yearly = annual_savings_reais * escalation - assumptions.annual_om_cost_reais

    cash_flows = [-system_cost_reais] + [float(v) for v in yearly]
    cumulative = [float(v) for v in np.cumsum(cash_flows)]

    return FinancialProjection(
        first_year_savings_reais=annual_savings_reais - assumptions.annual_om_cost_reais,
        cash_flows_reais=cash_flows,
        cumulative_cash_flows_reais=cumulative,
        total_savings_reais=float(np.sum(yearly)),
        npv_reais=compute_npv(cash_flows, rate),
        irr_annual=compute_irr(cash_flows),
        discounted_payback_years=compute_discounted_payback(cash_flows, rate),
    )
