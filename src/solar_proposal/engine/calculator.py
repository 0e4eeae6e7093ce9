"""Calculation orchestrator: the single entry point of the engine.

    validate → resolve tariff / irradiation / minimum → baseline bill
      → sizing → generation → energy balance → bill after
      → savings & payback → projection → advisories

Every error is raised before the result is built; there are no partial
results.  The function holds no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from solar_proposal.config.finance import FinancialAssumptions
from solar_proposal.config.inputs import CalculationInput
from solar_proposal.config.pricing import PricingContext, default_pricing_context
from solar_proposal.engine.advisories import build_advisories
from solar_proposal.engine.billing import (
    compute_baseline,
    compute_bill_after,
    compute_energy_balance,
)
from solar_proposal.engine.financials import compute_financials, estimate_system_cost
from solar_proposal.engine.resolution import (
    resolve_irradiation,
    resolve_minimum_billed_kwh,
    resolve_tariff,
)
from solar_proposal.engine.sizing import (
    effective_performance_ratio,
    estimate_generation,
    size_system,
)
from solar_proposal.finance.projection import build_projection
from solar_proposal.models.results import CalculationResult

logger = logging.getLogger(__name__)


def calculate_solar(
    data: CalculationInput | Mapping[str, Any],
    pricing: PricingContext | None = None,
    assumptions: FinancialAssumptions | None = None,
) -> CalculationResult:
    """Run the full proposal calculation.

    Parameters
    ----------
    data : CalculationInput | Mapping
        Validated input, or a raw mapping that is validated first
        (``pydantic.ValidationError`` on bad shape or range).
    pricing : PricingContext, optional
        Reference tables.  Defaults to ``default_pricing_context()``.
    assumptions : FinancialAssumptions, optional
        Projection assumptions.  Defaults to ``FinancialAssumptions()``.

    Raises
    ------
    ConfigurationError
        Unknown tariff pair, state or phase type.
    DomainError
        Irradiation or effective performance ratio not positive.
    """
    inp = data if isinstance(data, CalculationInput) else CalculationInput.model_validate(data)
    pricing = pricing if pricing is not None else default_pricing_context()
    assumptions = assumptions if assumptions is not None else FinancialAssumptions()

    logger.debug(
        "calculate_solar: %s/%s %s kWh, state=%s",
        inp.utility_provider, inp.customer_class, inp.monthly_consumption_kwh, inp.state,
    )

    # ── 1. Lookups ─────────────────────────────────────────────────────
    tariff = resolve_tariff(
        inp.utility_provider,
        inp.customer_class,
        inp.tariff_flag_color,
        pricing,
        energy_tariff_override=inp.energy_tariff_reais_kwh,
        flag_surcharge_override=inp.flag_surcharge_reais_kwh,
    )
    irradiation = resolve_irradiation(inp.state, pricing, override=inp.irradiation_psh_kwh_m2_day)
    minimum_kwh = resolve_minimum_billed_kwh(
        inp.phase_type, pricing, override=inp.min_kwh_per_phase_override,
    )

    # ── 2. Pre-solar bill ──────────────────────────────────────────────
    baseline = compute_baseline(
        inp.monthly_consumption_kwh,
        inp.public_lighting_fee_reais,
        tariff.final_tariff_reais_kwh,
        minimum_kwh,
    )

    # ── 3. Sizing & generation ─────────────────────────────────────────
    effective_pr = effective_performance_ratio(inp.system_loss_factor, inp.shading_loss_percent)
    sizing = size_system(
        inp.monthly_consumption_kwh,
        inp.compensation_target_percent,
        inp.module_power_wp,
        irradiation,
        effective_pr,
        module_count_override=inp.module_count,
    )
    generation = estimate_generation(sizing.installed_kwp, irradiation, effective_pr)

    # ── 4. Post-solar bill ─────────────────────────────────────────────
    balance = compute_energy_balance(
        inp.monthly_consumption_kwh,
        generation.monthly_generation_kwh,
        minimum_kwh,
    )
    bill_after = compute_bill_after(baseline.minimum_billed_reais, inp.public_lighting_fee_reais)

    # ── 5. Savings, payback, projection ────────────────────────────────
    system_cost, cost_source = estimate_system_cost(
        sizing.installed_kwp,
        sizing.module_count,
        pricing,
        override=inp.system_cost_reais,
        module_price_reais=inp.module_price_reais,
        inverter_cost_reais=inp.inverter_cost_reais,
        installation_cost_reais=inp.installation_cost_reais,
    )
    financials = compute_financials(baseline.bill_before_reais, bill_after, system_cost, cost_source)
    projection = build_projection(system_cost, financials.annual_savings_reais, assumptions)

    warnings, recommendations = build_advisories(
        inp, baseline, sizing, generation, balance, financials,
    )

    logger.info(
        "Sized %d x %g Wp (%.2f kWp) for %g kWh/month; payback %.1f years",
        sizing.module_count, inp.module_power_wp, sizing.installed_kwp,
        inp.monthly_consumption_kwh, financials.payback_years,
    )

    return CalculationResult(
        inputs=inp,
        assumptions=assumptions,
        irradiation_psh_kwh_m2_day=irradiation,
        tariff=tariff,
        baseline=baseline,
        sizing=sizing,
        generation=generation,
        energy_balance=balance,
        bill_after_reais=bill_after,
        financials=financials,
        projection=projection,
        warnings=warnings,
        recommendations=recommendations,
    )
