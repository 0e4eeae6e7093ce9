"""Result types: the contract between engine, API and proposal renderer.

Every model is frozen: a ``CalculationResult`` is produced once per call and
never mutated afterwards.  Values are not rounded; currency and number
formatting belong to the presentation layer.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FieldSerializationInfo,
    computed_field,
    field_serializer,
)

from solar_proposal.config.finance import FinancialAssumptions
from solar_proposal.config.inputs import CalculationInput

CostSource = Literal["override", "equipment", "per_kwp"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ═══════════════════════════════════════════════════════════════════════════
# Pipeline stages
# ═══════════════════════════════════════════════════════════════════════════

class ResolvedTariff(_Frozen):
    """Tariff after applying overrides and the flag tier."""

    energy_tariff_reais_kwh: float
    flag_surcharge_reais_kwh: float
    final_tariff_reais_kwh: float
    """energy_tariff + flag_surcharge, always additive."""


class BaselineBilling(_Frozen):
    """Pre-solar monthly bill."""

    minimum_billed_kwh: float
    """Regulatory minimum ("disponibilidade") for the phase type."""
    minimum_billed_reais: float
    billed_consumption_reais: float
    bill_before_reais: float
    """consumption × final tariff + public lighting fee."""


class SystemSizing(_Frozen):
    """Array sizing."""

    effective_performance_ratio: float
    """PR × (1 − shading)."""
    energy_needed_per_day_kwh: float
    required_kwp: float
    module_count: int = Field(ge=1)
    installed_kwp: float


class GenerationEstimate(_Frozen):
    """Expected generation of the installed array."""

    monthly_generation_kwh: float
    annual_generation_kwh: float


class EnergyBalance(_Frozen):
    """Net-metering balance for an average month."""

    compensated_kwh: float = Field(ge=0)
    """Consumption offset by generation, net of the minimum billed kWh."""
    net_billed_kwh: float
    """consumption − compensated."""
    injected_surplus_kwh: float = Field(ge=0)
    """Generation beyond the compensable consumption, exported as credits."""


class FinancialMetrics(_Frozen):
    """Savings and simple payback.

    ``payback_years`` is ``inf`` when there are no savings; that is a valid
    result.  ``payback_applicable`` carries the same information so callers
    do not have to test for infinity, and JSON output renders the payback
    as ``null`` in that case.
    """

    system_cost_reais: float
    cost_source: CostSource
    monthly_savings_reais: float
    annual_savings_reais: float
    payback_years: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def payback_applicable(self) -> bool:
        return math.isfinite(self.payback_years)

    @field_serializer("payback_years")
    def _serialize_payback(self, value: float, info: FieldSerializationInfo) -> float | None:
        if info.mode == "json" and not math.isfinite(value):
            return None
        return value


class FinancialProjection(_Frozen):
    """Year-by-year cash flows over the assumption horizon.

    ``cash_flows_reais[0]`` is the investment (year 0, negative);
    ``cash_flows_reais[y]`` is the net saving of year ``y``.
    """

    first_year_savings_reais: float
    """Annual savings minus O&M, before escalation and degradation."""
    cash_flows_reais: list[float]
    cumulative_cash_flows_reais: list[float]
    total_savings_reais: float
    """Sum of yearly net savings (excludes the investment)."""
    npv_reais: float
    irr_annual: float | None = None
    """None when the flows never change sign."""
    discounted_payback_years: float | None = None
    """None when the discounted cumulative never reaches zero."""


# ═══════════════════════════════════════════════════════════════════════════
# Top-level result
# ═══════════════════════════════════════════════════════════════════════════

class CalculationResult(_Frozen):
    """Complete output of one ``calculate_solar`` call."""

    inputs: CalculationInput
    assumptions: FinancialAssumptions
    irradiation_psh_kwh_m2_day: float
    tariff: ResolvedTariff
    baseline: BaselineBilling
    sizing: SystemSizing
    generation: GenerationEstimate
    energy_balance: EnergyBalance
    bill_after_reais: float
    financials: FinancialMetrics
    projection: FinancialProjection
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
