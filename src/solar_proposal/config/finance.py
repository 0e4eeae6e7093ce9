"""Long-term financial assumptions: 25-year projection inputs."""

from pydantic import BaseModel, ConfigDict, Field


class FinancialAssumptions(BaseModel):
    """Escalation, degradation, O&M and discount-rate assumptions.

    These drive the cash-flow projection, NPV and IRR.  They do not affect
    the monthly savings or the simple payback.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    annual_om_cost_reais: float = Field(
        default=150.0, ge=0, alias="custo_om_anual_reais",
        description="Operation & maintenance cost per year (R$)",
    )
    energy_inflation_annual_percent: float = Field(
        default=8.0, ge=0, le=100, alias="inflacao_energetica_anual_percent",
        description="Yearly tariff escalation (%)",
    )
    panel_degradation_annual_percent: float = Field(
        default=0.5, ge=0, le=100, alias="degradacao_anual_paineis_percent",
        description="Yearly generation loss from module ageing (%)",
    )
    discount_rate_annual_percent: float = Field(
        default=6.0, ge=0, le=100, alias="taxa_minima_atratividade_percent",
        description="Minimum attractive rate of return (TMA) used for NPV (%)",
    )
    horizon_years: int = Field(
        default=25, ge=1, le=50,
        description="Projection length, typically the module warranty (years)",
    )
