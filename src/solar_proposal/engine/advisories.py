"""Warnings and recommendations attached to a calculation result.

Warnings flag outcomes the proposal must not present as a normal sale
(negative savings, undefined payback).  Recommendations are softer hints
for the sales engineer.
"""

from __future__ import annotations

from solar_proposal.config.inputs import CalculationInput
from solar_proposal.models.results import (
    BaselineBilling,
    EnergyBalance,
    FinancialMetrics,
    GenerationEstimate,
    SystemSizing,
)

OVERSIZED_SURPLUS_RATIO = 0.20
LONG_PAYBACK_YEARS = 10.0
HIGH_SHADING_PERCENT = 20.0


def build_advisories(
    inputs: CalculationInput,
    baseline: BaselineBilling,
    sizing: SystemSizing,
    generation: GenerationEstimate,
    balance: EnergyBalance,
    financials: FinancialMetrics,
) -> tuple[list[str], list[str]]:
    """Return ``(warnings, recommendations)`` for one calculation."""
    warnings: list[str] = []
    recommendations: list[str] = []
    consumption = inputs.monthly_consumption_kwh

    if consumption <= baseline.minimum_billed_kwh:
        warnings.append(
            f"Consumption of {consumption:g} kWh is at or below the minimum billed "
            f"{baseline.minimum_billed_kwh:g} kWh; solar cannot reduce this bill."
        )

    if financials.monthly_savings_reais < 0:
        warnings.append(
            "The post-solar bill is higher than the current bill "
            f"(monthly savings {financials.monthly_savings_reais:.2f} R$)."
        )

    if not financials.payback_applicable:
        warnings.append("Payback is not applicable: the system produces no annual savings.")
    elif financials.payback_years > LONG_PAYBACK_YEARS:
        recommendations.append(
            f"Payback of {financials.payback_years:.1f} years exceeds {LONG_PAYBACK_YEARS:g} years; "
            "review equipment cost or the compensation target."
        )

    target_kwh = consumption * inputs.compensation_target_percent / 100.0
    if inputs.module_count is not None and generation.monthly_generation_kwh < target_kwh:
        warnings.append(
            f"{sizing.module_count} modules generate {generation.monthly_generation_kwh:.0f} kWh/month, "
            f"below the {target_kwh:.0f} kWh compensation target; the bill after solar "
            "assumes full compensation and the savings are overstated."
        )

    if balance.injected_surplus_kwh > OVERSIZED_SURPLUS_RATIO * consumption:
        recommendations.append(
            f"Surplus injection of {balance.injected_surplus_kwh:.0f} kWh/month exceeds "
            f"{OVERSIZED_SURPLUS_RATIO:.0%} of consumption; consider fewer modules."
        )

    if inputs.shading_loss_percent > HIGH_SHADING_PERCENT:
        recommendations.append(
            f"Shading loss of {inputs.shading_loss_percent:g}% is high; review the array layout."
        )

    return warnings, recommendations
