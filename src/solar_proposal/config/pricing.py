"""Reference data: tariffs, irradiation and minimum billed kWh.

The tables are carried in a ``PricingContext`` value that is passed into
the engine at call time.  ``default_pricing_context()`` builds a fresh copy
of the built-in Brazilian reference data on every call.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, field_validator

from solar_proposal.config.inputs import (
    FlagColor,
    PhaseType,
    normalize_flag_color,
    normalize_phase_type,
)


# ANEEL flag surcharges (R$/kWh), shared by every utility.
_DEFAULT_FLAG_SURCHARGES: dict[str, float] = {
    "green": 0.0,
    "yellow": 0.01885,
    "red1": 0.04463,
    "red2": 0.07877,
    "scarcity": 0.142,
}

# Final energy tariff with taxes (R$/kWh), by utility and consumer class.
_DEFAULT_ENERGY_TARIFFS: dict[str, dict[str, float]] = {
    "Equatorial GO": {"residencial": 0.63, "comercial": 0.66, "rural": 0.56},
    "CHESP": {"residencial": 0.71, "comercial": 0.74, "rural": 0.60},
}

# Annual mean daily irradiation on a tilted plane (kWh/m²/day), CRESESB.
_DEFAULT_IRRADIATION_PSH: dict[str, float] = {
    "AC": 4.6, "AL": 5.5, "AP": 4.9, "AM": 4.6, "BA": 5.6, "CE": 5.6,
    "DF": 5.5, "ES": 5.0, "GO": 5.7, "MA": 5.2, "MT": 5.4, "MS": 5.3,
    "MG": 5.4, "PA": 4.9, "PB": 5.7, "PR": 4.8, "PE": 5.6, "PI": 5.8,
    "RJ": 5.0, "RN": 5.8, "RS": 4.6, "RO": 4.7, "RR": 4.9, "SC": 4.4,
    "SP": 5.0, "SE": 5.4, "TO": 5.5,
}

# Low-voltage minimum billed consumption ("custo de disponibilidade").
_DEFAULT_MINIMUM_BILLED_KWH: dict[str, float] = {"mono": 30.0, "bi": 50.0, "tri": 100.0}

DEFAULT_COST_PER_KWP_REAIS = 4_500.0


class TariffInfo(BaseModel):
    """Energy tariff and flag surcharges for one (utility, class) pair."""

    model_config = ConfigDict(allow_inf_nan=False)

    energy_tariff_reais_kwh: NonNegativeFloat = Field(description="Base energy tariff (R$/kWh)")
    flag_surcharges_reais_kwh: dict[FlagColor, NonNegativeFloat] = Field(
        default_factory=lambda: dict(_DEFAULT_FLAG_SURCHARGES),
        description="Surcharge per flag color (R$/kWh)",
    )

    @field_validator("flag_surcharges_reais_kwh", mode="before")
    @classmethod
    def _normalize_flag_keys(cls, v: object) -> object:
        if isinstance(v, dict):
            return {normalize_flag_color(k): val for k, val in v.items()}
        return v


class PricingContext(BaseModel):
    """All reference tables consumed by one calculation."""

    model_config = ConfigDict(allow_inf_nan=False)

    tariffs: dict[str, dict[str, TariffInfo]] = Field(
        default_factory=dict,
        description="utility → consumer class → tariff",
    )
    irradiation_psh: dict[str, NonNegativeFloat] = Field(
        default_factory=dict,
        description="State code → average peak sun hours (kWh/m²/day)",
    )
    minimum_billed_kwh: dict[PhaseType, NonNegativeFloat] = Field(
        default_factory=lambda: dict(_DEFAULT_MINIMUM_BILLED_KWH),
        description="Phase type → minimum billed consumption (kWh)",
    )
    default_cost_per_kwp_reais: float = Field(
        default=DEFAULT_COST_PER_KWP_REAIS, ge=0,
        description="Turnkey cost per installed kWp when no cost is supplied (R$)",
    )

    @field_validator("irradiation_psh", mode="before")
    @classmethod
    def _uppercase_states(cls, v: object) -> object:
        if isinstance(v, dict):
            return {str(k).strip().upper(): val for k, val in v.items()}
        return v

    @field_validator("minimum_billed_kwh", mode="before")
    @classmethod
    def _normalize_phase_keys(cls, v: object) -> object:
        if isinstance(v, dict):
            return {normalize_phase_type(k): val for k, val in v.items()}
        return v

    def find_tariff(self, provider: str, customer_class: str) -> TariffInfo | None:
        """Exact-match lookup; ``None`` when the pair is not registered."""
        return self.tariffs.get(provider, {}).get(customer_class)


def default_pricing_context() -> PricingContext:
    """Built-in reference data (Equatorial GO, CHESP, 27 federative units)."""
    return PricingContext(
        tariffs={
            provider: {
                customer_class: TariffInfo(
                    energy_tariff_reais_kwh=rate,
                    flag_surcharges_reais_kwh=dict(_DEFAULT_FLAG_SURCHARGES),
                )
                for customer_class, rate in classes.items()
            }
            for provider, classes in _DEFAULT_ENERGY_TARIFFS.items()
        },
        irradiation_psh=dict(_DEFAULT_IRRADIATION_PSH),
        minimum_billed_kwh=dict(_DEFAULT_MINIMUM_BILLED_KWH),
        default_cost_per_kwp_reais=DEFAULT_COST_PER_KWP_REAIS,
    )
