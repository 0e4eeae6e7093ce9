"""System cost, savings and simple payback."""

from __future__ import annotations

import math

from solar_proposal.config.pricing import PricingContext
from solar_proposal.engine.sizing import MONTHS_PER_YEAR
from solar_proposal.models.results import CostSource, FinancialMetrics


def estimate_system_cost(
    installed_kwp: float,
    module_count: int,
    pricing: PricingContext,
    override: float | None = None,
    module_price_reais: float | None = None,
    inverter_cost_reais: float = 0.0,
    installation_cost_reais: float = 0.0,
) -> tuple[float, CostSource]:
    """Turnkey system cost and where it came from.

    Precedence: explicit override > equipment bill of materials (when a
    module price is given) > installed kWp × ``default_cost_per_kwp_reais``.
    """
    if override is not None:
        return override, "override"
    if module_price_reais is not None:
        cost = module_count * module_price_reais + inverter_cost_reais + installation_cost_reais
        return cost, "equipment"
    return installed_kwp * pricing.default_cost_per_kwp_reais, "per_kwp"


def compute_financials(
    bill_before_reais: float,
    bill_after_reais: float,
    system_cost_reais: float,
    cost_source: CostSource = "override",
) -> FinancialMetrics:
    """Monthly/annual savings and simple payback.

    Savings are not clamped: a negative value means the post-solar bill is
    higher than the pre-solar one.  Payback is ``inf`` whenever annual
    savings are not positive; this function never raises for it.
    """
    monthly_savings_reais = bill_before_reais - bill_after_reais
    annual_savings_reais = monthly_savings_reais * MONTHS_PER_YEAR

    if annual_savings_reais > 0:
        payback_years = system_cost_reais / annual_savings_reais
    else:
        payback_years = math.inf

    return FinancialMetrics(
        system_cost_reais=system_cost_reais,
        cost_source=cost_source,
        monthly_savings_reais=monthly_savings_reais,
        annual_savings_reais=annual_savings_reais,
        payback_years=payback_years,
    )
