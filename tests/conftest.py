"""Shared test fixtures: reference tables and the Goiás residential case."""

from __future__ import annotations

import pytest

from solar_proposal.config import (
    CalculationInput,
    FinancialAssumptions,
    PricingContext,
    TariffInfo,
    default_pricing_context,
)


@pytest.fixture
def pricing() -> PricingContext:
    return default_pricing_context()


@pytest.fixture
def small_pricing() -> PricingContext:
    """Minimal hand-written tables, independent of the built-in data."""
    return PricingContext(
        tariffs={
            "Test Utility": {
                "residencial": TariffInfo(
                    energy_tariff_reais_kwh=0.80,
                    flag_surcharges_reais_kwh={"green": 0.0, "yellow": 0.02},
                ),
            },
        },
        irradiation_psh={"SP": 5.0},
        minimum_billed_kwh={"mono": 30, "bi": 50, "tri": 100},
        default_cost_per_kwp_reais=5_000,
    )


@pytest.fixture
def goias_input() -> CalculationInput:
    """500 kWh/month residential consumer on Equatorial GO."""
    return CalculationInput(
        monthly_consumption_kwh=500,
        utility_provider="Equatorial GO",
        customer_class="residencial",
        tariff_flag_color="green",
        public_lighting_fee_reais=25,
        phase_type="mono",
        state="GO",
        module_power_wp=550,
        compensation_target_percent=100,
        system_loss_factor=0.8,
        shading_loss_percent=0,
    )


@pytest.fixture
def goias_payload() -> dict:
    """Same case as ``goias_input``, in the wizard's Portuguese field names."""
    return {
        "consumo_mensal_kwh": 500,
        "concessionaria": "Equatorial GO",
        "classe": "residencial",
        "bandeira": "verde",
        "cip_iluminacao_publica_reais": 25,
        "rede_fases": "mono",
        "estado": "GO",
        "potencia_modulo_wp": 550,
        "meta_compensacao_percent": 100,
        "fator_desempenho": 0.8,
    }


@pytest.fixture
def flat_assumptions() -> FinancialAssumptions:
    """No escalation, degradation, O&M or discounting; easy hand checks."""
    return FinancialAssumptions(
        annual_om_cost_reais=0,
        energy_inflation_annual_percent=0,
        panel_degradation_annual_percent=0,
        discount_rate_annual_percent=0,
        horizon_years=10,
    )
