"""System sizing and generation estimate.

Both stages use ``DAYS_PER_MONTH``.  A fixed 30-day month is a deliberate
simplification; sizing and generation must share it or the array stops
matching the energy it was sized for.
"""

from __future__ import annotations

import math

from solar_proposal.errors import DomainError
from solar_proposal.models.results import GenerationEstimate, SystemSizing

DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12


def effective_performance_ratio(system_loss_factor: float, shading_loss_percent: float) -> float:
    """PR × (1 − shading%)."""
    return system_loss_factor * (1.0 - shading_loss_percent / 100.0)


def _check_divisors(irradiation_psh: float, effective_pr: float) -> None:
    if not irradiation_psh > 0:
        raise DomainError(f"Irradiation must be positive, got {irradiation_psh!r} kWh/m²/day")
    if not effective_pr > 0:
        raise DomainError(
            f"Effective performance ratio must be positive, got {effective_pr!r} "
            "(check system loss factor and shading loss)"
        )


def size_system(
    consumption_kwh: float,
    compensation_target_percent: float,
    module_power_wp: float,
    irradiation_psh: float,
    effective_pr: float,
    module_count_override: int | None = None,
) -> SystemSizing:
    """Required kWp, module count and installed kWp.

    Raises
    ------
    DomainError
        If irradiation or the effective PR is not positive.
    """
    _check_divisors(irradiation_psh, effective_pr)

    energy_needed_per_month_kwh = consumption_kwh * (compensation_target_percent / 100.0)
    energy_needed_per_day_kwh = energy_needed_per_month_kwh / DAYS_PER_MONTH

    required_kwp = energy_needed_per_day_kwh / (irradiation_psh * effective_pr)

    if module_count_override is not None:
        module_count = module_count_override
    else:
        module_count = math.ceil(required_kwp * 1_000 / module_power_wp)
    module_count = max(1, module_count)

    return SystemSizing(
        effective_performance_ratio=effective_pr,
        energy_needed_per_day_kwh=energy_needed_per_day_kwh,
        required_kwp=required_kwp,
        module_count=module_count,
        installed_kwp=module_count * module_power_wp / 1_000,
    )


def estimate_generation(
    installed_kwp: float,
    irradiation_psh: float,
    effective_pr: float,
) -> GenerationEstimate:
    """Average monthly (and annual) generation of the installed array."""
    monthly_generation_kwh = installed_kwp * irradiation_psh * DAYS_PER_MONTH * effective_pr
    return GenerationEstimate(
        monthly_generation_kwh=monthly_generation_kwh,
        annual_generation_kwh=monthly_generation_kwh * MONTHS_PER_YEAR,
    )
