"""Tariff, irradiation and minimum-billed resolution.

Each lookup follows the same precedence: caller override, then the
reference table in the ``PricingContext``, then ``ConfigurationError``.
Nothing falls back to a silent default.
"""

from __future__ import annotations

from solar_proposal.config.inputs import FlagColor, PhaseType
from solar_proposal.config.pricing import PricingContext
from solar_proposal.errors import ConfigurationError
from solar_proposal.models.results import ResolvedTariff


def resolve_tariff(
    provider: str,
    customer_class: str,
    flag_color: FlagColor,
    pricing: PricingContext,
    energy_tariff_override: float | None = None,
    flag_surcharge_override: float | None = None,
) -> ResolvedTariff:
    """Resolve energy tariff + flag surcharge → final tariff.

    The table is only consulted for components without an override, so a
    pair missing from the table is fine when both overrides are supplied.
    """
    energy_tariff = energy_tariff_override
    surcharge = flag_surcharge_override

    if energy_tariff is None or surcharge is None:
        info = pricing.find_tariff(provider, customer_class)
        if info is None:
            raise ConfigurationError(
                "UnknownTariff",
                f"No tariff registered for provider '{provider}' and class '{customer_class}'",
            )
        if energy_tariff is None:
            energy_tariff = info.energy_tariff_reais_kwh
        if surcharge is None:
            if flag_color not in info.flag_surcharges_reais_kwh:
                raise ConfigurationError(
                    "UnknownTariff",
                    f"No '{flag_color}' flag surcharge registered for provider "
                    f"'{provider}' and class '{customer_class}'",
                )
            surcharge = info.flag_surcharges_reais_kwh[flag_color]

    return ResolvedTariff(
        energy_tariff_reais_kwh=energy_tariff,
        flag_surcharge_reais_kwh=surcharge,
        final_tariff_reais_kwh=energy_tariff + surcharge,
    )


def resolve_irradiation(
    state: str,
    pricing: PricingContext,
    override: float | None = None,
) -> float:
    """Peak sun hours for a state; lookup is case-insensitive."""
    if override is not None:
        return override
    key = state.strip().upper()
    if key not in pricing.irradiation_psh:
        raise ConfigurationError(
            "UnknownIrradiation",
            f"No irradiation registered for state '{key}'",
        )
    return pricing.irradiation_psh[key]


def resolve_minimum_billed_kwh(
    phase_type: PhaseType,
    pricing: PricingContext,
    override: float | None = None,
) -> float:
    """Minimum billed consumption for the connection's phase type."""
    if override is not None:
        return override
    if phase_type not in pricing.minimum_billed_kwh:
        raise ConfigurationError(
            "UnknownPhase",
            f"No minimum billed consumption registered for phase type '{phase_type}'",
        )
    return pricing.minimum_billed_kwh[phase_type]
