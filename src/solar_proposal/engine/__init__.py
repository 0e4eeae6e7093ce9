"""Engine: deterministic proposal calculation pipeline."""

from solar_proposal.engine.resolution import (
    resolve_irradiation,
    resolve_minimum_billed_kwh,
    resolve_tariff,
)
from solar_proposal.engine.billing import (
    compute_baseline,
    compute_bill_after,
    compute_energy_balance,
)
from solar_proposal.engine.sizing import (
    DAYS_PER_MONTH,
    effective_performance_ratio,
    estimate_generation,
    size_system,
)
from solar_proposal.engine.financials import compute_financials, estimate_system_cost
from solar_proposal.engine.advisories import build_advisories
from solar_proposal.engine.calculator import calculate_solar

__all__ = [
    "resolve_tariff",
    "resolve_irradiation",
    "resolve_minimum_billed_kwh",
    "compute_baseline",
    "compute_bill_after",
    "compute_energy_balance",
    "DAYS_PER_MONTH",
    "effective_performance_ratio",
    "estimate_generation",
    "size_system",
    "compute_financials",
    "estimate_system_cost",
    "build_advisories",
    "calculate_solar",
]
