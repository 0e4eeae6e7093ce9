"""Calculation input: the validation stage in front of the pure pipeline.

Structural and range checks live here (pydantic), so the engine functions
can assume a well-formed ``CalculationInput``.  Portuguese field aliases
match the payloads produced by the proposal wizard.
"""

from __future__ import annotations

import unicodedata
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

FlagColor = Literal["green", "yellow", "red1", "red2", "scarcity"]
PhaseType = Literal["mono", "bi", "tri"]

FLAG_COLORS: tuple[str, ...] = ("green", "yellow", "red1", "red2", "scarcity")
PHASE_TYPES: tuple[str, ...] = ("mono", "bi", "tri")

_FLAG_ALIASES: dict[str, str] = {
    "verde": "green",
    "amarela": "yellow",
    "amarelo": "yellow",
    "vermelha1": "red1",
    "vermelha_1": "red1",
    "vermelha_p1": "red1",
    "vermelha_patamar_1": "red1",
    "red_1": "red1",
    "vermelha2": "red2",
    "vermelha_2": "red2",
    "vermelha_p2": "red2",
    "vermelha_patamar_2": "red2",
    "red_2": "red2",
    "escassez": "scarcity",
    "escassez_hidrica": "scarcity",
}

_PHASE_ALIASES: dict[str, str] = {
    "monofasico": "mono",
    "monofasica": "mono",
    "bifasico": "bi",
    "bifasica": "bi",
    "trifasico": "tri",
    "trifasica": "tri",
}


def _slug(value: str) -> str:
    """Lowercase, strip accents, collapse spaces/hyphens to underscores."""
    text = unicodedata.normalize("NFKD", value.strip().lower())
    text = "".join(c for c in text if not unicodedata.combining(c))
    return text.replace("-", "_").replace(" ", "_")


def normalize_flag_color(value: object) -> object:
    if isinstance(value, str):
        slug = _slug(value)
        return _FLAG_ALIASES.get(slug, slug)
    return value


def normalize_phase_type(value: object) -> object:
    if isinstance(value, str):
        slug = _slug(value)
        return _PHASE_ALIASES.get(slug, slug)
    return value


class CalculationInput(BaseModel):
    """One proposal request: household profile, tariff keys and panel specs.

    Every ``*_override`` style field follows the same precedence contract in
    the engine: a supplied value wins over the reference tables, and a
    missing table entry with no override is an error.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False,
    )

    # --- Consumption & bill ---
    monthly_consumption_kwh: float = Field(
        gt=0, alias="consumo_mensal_kwh",
        description="Average monthly consumption (kWh)",
    )
    public_lighting_fee_reais: float = Field(
        default=0.0, ge=0, alias="cip_iluminacao_publica_reais",
        description="Public lighting contribution (CIP) added to every bill (R$)",
    )

    # --- Tariff keys ---
    utility_provider: str = Field(
        min_length=1, alias="concessionaria",
        description="Distribution utility, e.g. 'Equatorial GO'",
    )
    customer_class: str = Field(
        default="residencial", min_length=1, alias="classe",
        description="Consumer class, e.g. 'residencial', 'comercial'",
    )
    tariff_flag_color: FlagColor = Field(
        default="green", alias="bandeira",
        description="Tariff flag tier. Portuguese names (verde, amarela, "
                    "vermelha1, vermelha2, escassez) are accepted.",
    )
    phase_type: PhaseType = Field(
        default="mono", alias="rede_fases",
        description="Service connection type; drives the minimum billed kWh",
    )

    # --- Location ---
    state: str = Field(
        min_length=2, max_length=2, alias="estado",
        description="Two-letter state code (irradiation lookup key)",
    )
    irradiation_psh_kwh_m2_day: float | None = Field(
        default=None, ge=0, alias="irradiacao_psh_kwh_m2_dia",
        description="Optional irradiation override (peak sun hours). "
                    "Zero passes validation and is rejected by the engine.",
    )

    # --- Panel & system ---
    module_power_wp: float = Field(
        default=550.0, gt=0, alias="potencia_modulo_wp",
        description="Nameplate power of one module (Wp)",
    )
    compensation_target_percent: float = Field(
        default=100.0, ge=0, le=100, alias="meta_compensacao_percent",
        description="Share of consumption the system is sized to offset (%)",
    )
    system_loss_factor: float = Field(
        default=0.8, ge=0, le=1.0, alias="fator_desempenho",
        description="Performance ratio (PR) after inverter, wiring and soiling losses",
    )
    shading_loss_percent: float = Field(
        default=0.0, ge=0, le=100, alias="perda_sombreamento_percent",
        description="Additional loss from shading (%)",
    )

    # --- Overrides ---
    energy_tariff_reais_kwh: float | None = Field(
        default=None, ge=0, alias="tarifa_energia_reais_kwh",
        description="Override for the base energy tariff (R$/kWh)",
    )
    flag_surcharge_reais_kwh: float | None = Field(
        default=None, ge=0, alias="adicional_bandeira_reais_kwh",
        description="Override for the flag surcharge (R$/kWh)",
    )
    min_kwh_per_phase_override: float | None = Field(
        default=None, ge=0, alias="custo_disponibilidade_kwh",
        description="Override for the minimum billed consumption (kWh)",
    )
    module_count: int | None = Field(
        default=None, ge=0, alias="quantidade_modulos",
        description="Override for the number of modules (floored to 1)",
    )
    system_cost_reais: float | None = Field(
        default=None, ge=0, alias="custo_sistema_reais",
        description="Override for the turnkey system cost (R$)",
    )

    # --- Equipment bill of materials ---
    module_price_reais: float | None = Field(
        default=None, ge=0, alias="preco_modulo_reais",
        description="Unit module price; when set, system cost is built from "
                    "equipment instead of cost per kWp",
    )
    inverter_cost_reais: float = Field(
        default=0.0, ge=0, alias="custo_inversor_reais",
        description="Inverter cost (R$), used with module_price_reais",
    )
    installation_cost_reais: float = Field(
        default=0.0, ge=0, alias="custo_fixo_instalacao_reais",
        description="Fixed installation cost (R$), used with module_price_reais",
    )

    @field_validator("tariff_flag_color", mode="before")
    @classmethod
    def _normalize_flag(cls, v: object) -> object:
        return normalize_flag_color(v)

    @field_validator("phase_type", mode="before")
    @classmethod
    def _normalize_phase(cls, v: object) -> object:
        return normalize_phase_type(v)

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("utility_provider", "customer_class", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip()
        return v
