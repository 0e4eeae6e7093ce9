"""Pre- and post-solar billing and the monthly energy balance.

Pure arithmetic, no rounding.
"""

from __future__ import annotations

from solar_proposal.models.results import BaselineBilling, EnergyBalance


def compute_baseline(
    consumption_kwh: float,
    public_lighting_fee_reais: float,
    final_tariff_reais_kwh: float,
    minimum_billed_kwh: float,
) -> BaselineBilling:
    """Monthly bill before solar."""
    billed_consumption_reais = consumption_kwh * final_tariff_reais_kwh
    return BaselineBilling(
        minimum_billed_kwh=minimum_billed_kwh,
        minimum_billed_reais=minimum_billed_kwh * final_tariff_reais_kwh,
        billed_consumption_reais=billed_consumption_reais,
        bill_before_reais=billed_consumption_reais + public_lighting_fee_reais,
    )


def compute_energy_balance(
    consumption_kwh: float,
    generation_kwh: float,
    minimum_billed_kwh: float,
) -> EnergyBalance:
    """Compensated, billed and injected energy for an average month.

    The minimum billed kWh is always paid, so it is taken out of the
    compensation.  Compensation is clamped at zero when generation (or
    consumption) is below the minimum.
    """
    injected_surplus_kwh = max(0.0, generation_kwh - (consumption_kwh - minimum_billed_kwh))
    balance = min(generation_kwh, consumption_kwh) - minimum_billed_kwh
    compensated_kwh = max(0.0, balance)
    return EnergyBalance(
        compensated_kwh=compensated_kwh,
        net_billed_kwh=consumption_kwh - compensated_kwh,
        injected_surplus_kwh=injected_surplus_kwh,
    )


def compute_bill_after(
    minimum_billed_reais: float,
    public_lighting_fee_reais: float,
) -> float:
    """Monthly bill after solar: the minimum billed amount plus the public
    lighting fee.

    Generation is assumed to offset everything above the minimum; an
    undersized array is reported as a warning, not billed here.
    """
    return minimum_billed_reais + public_lighting_fee_reais
