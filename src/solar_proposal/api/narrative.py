"""Narrative generator: plain-text interpretation of a calculation result.

Converts a ``CalculationResult`` into a sectioned summary suitable for a
proposal cover letter or an LLM prompt.  All currency and number
formatting happens here, never in the engine.
"""

from __future__ import annotations

import math

from solar_proposal.models.results import CalculationResult


def format_brl(value: float | None) -> str:
    """Format as Brazilian reais, e.g. ``R$ 1.234,56``; non-finite → ``N/A``."""
    if value is None or not math.isfinite(value):
        return "N/A"
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_number(value: float | None, decimals: int = 0) -> str:
    """pt-BR number formatting; non-finite → ``N/A``."""
    if value is None or not math.isfinite(value):
        return "N/A"
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _header(title: str) -> list[str]:
    return ["=" * 60, title, "=" * 60]


def generate_narrative(result: CalculationResult) -> str:
    """Generate a plain-text narrative from a calculation result.

    Sections:
      1. System
      2. Monthly bill
      3. Savings & payback
      4. Long-term outlook
      5. Warnings & recommendations (only when present)
    """
    inp = result.inputs
    s = result.sizing
    f = result.financials
    p = result.projection
    b = result.energy_balance

    sections: list[str] = []

    # ── 1. System ──
    sections += _header("SYSTEM")
    sections.append(
        f"Utility: {inp.utility_provider} ({inp.customer_class}), flag: {inp.tariff_flag_color}\n"
        f"Location: {inp.state}, {format_number(result.irradiation_psh_kwh_m2_day, 2)} kWh/m²/day\n"
        f"Modules: {s.module_count} x {format_number(inp.module_power_wp)} Wp "
        f"= {format_number(s.installed_kwp, 2)} kWp "
        f"(required {format_number(s.required_kwp, 2)} kWp)\n"
        f"Performance ratio: {format_number(s.effective_performance_ratio * 100, 1)}%\n"
        f"Generation: {format_number(result.generation.monthly_generation_kwh)} kWh/month"
    )

    # ── 2. Monthly bill ──
    sections.append("")
    sections += _header("MONTHLY BILL")
    sections.append(
        f"Consumption: {format_number(inp.monthly_consumption_kwh)} kWh\n"
        f"Final tariff: {format_brl(result.tariff.final_tariff_reais_kwh)}/kWh\n"
        f"Compensated: {format_number(b.compensated_kwh)} kWh, "
        f"billed: {format_number(b.net_billed_kwh)} kWh, "
        f"surplus credits: {format_number(b.injected_surplus_kwh)} kWh\n"
        f"Bill before solar: {format_brl(result.baseline.bill_before_reais)}\n"
        f"Bill after solar: {format_brl(result.bill_after_reais)}"
    )

    # ── 3. Savings & payback ──
    sections.append("")
    sections += _header("SAVINGS & PAYBACK")
    payback = (
        f"{format_number(f.payback_years, 1)} years" if f.payback_applicable else "N/A"
    )
    sections.append(
        f"System cost: {format_brl(f.system_cost_reais)} ({f.cost_source})\n"
        f"Monthly savings: {format_brl(f.monthly_savings_reais)}\n"
        f"Annual savings: {format_brl(f.annual_savings_reais)}\n"
        f"Simple payback: {payback}"
    )

    # ── 4. Long-term outlook ──
    a = result.assumptions
    sections.append("")
    sections += _header(f"{a.horizon_years}-YEAR OUTLOOK")
    irr = f"{format_number(p.irr_annual * 100, 2)}%" if p.irr_annual is not None else "N/A"
    disc = (
        f"{format_number(p.discounted_payback_years, 1)} years"
        if p.discounted_payback_years is not None
        else "not reached"
    )
    sections.append(
        f"First-year net savings: {format_brl(p.first_year_savings_reais)}\n"
        f"Total net savings: {format_brl(p.total_savings_reais)}\n"
        f"NPV at {format_number(a.discount_rate_annual_percent, 1)}%: {format_brl(p.npv_reais)}\n"
        f"IRR: {irr}\n"
        f"Discounted payback: {disc}"
    )

    # ── 5. Warnings & recommendations ──
    if result.warnings or result.recommendations:
        sections.append("")
        sections += _header("WARNINGS & RECOMMENDATIONS")
        sections += [f"! {w}" for w in result.warnings]
        sections += [f"- {r}" for r in result.recommendations]

    return "\n".join(sections)
