"""End-to-end tests for engine/calculator.py: full pipeline scenarios."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from solar_proposal.config import CalculationInput, FinancialAssumptions, PricingContext
from solar_proposal.engine.calculator import calculate_solar
from solar_proposal.errors import ConfigurationError, DomainError


def _variant(base: CalculationInput, **changes) -> CalculationInput:
    return CalculationInput.model_validate({**base.model_dump(), **changes})


# ═══════════════════════════════════════════════════════════════════════════
# Goiás residential scenario
# ═══════════════════════════════════════════════════════════════════════════

class TestGoiasScenario:

    def test_tariff(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.tariff.final_tariff_reais_kwh == pytest.approx(0.63)

    def test_baseline(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.baseline.minimum_billed_kwh == 30
        assert r.baseline.bill_before_reais == pytest.approx(340.0)

    def test_sizing(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.irradiation_psh_kwh_m2_day == 5.7
        assert r.sizing.module_count == 7
        assert r.sizing.installed_kwp == pytest.approx(3.85)
        assert r.generation.monthly_generation_kwh == pytest.approx(526.68)

    def test_balance_and_bill_after(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.energy_balance.compensated_kwh == pytest.approx(470.0)
        assert r.energy_balance.net_billed_kwh == pytest.approx(30.0)
        assert r.energy_balance.injected_surplus_kwh == pytest.approx(56.68)
        assert r.bill_after_reais == pytest.approx(18.9 + 25)

    def test_financials(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        f = r.financials
        assert f.system_cost_reais == pytest.approx(3.85 * 4_500)
        assert f.cost_source == "per_kwp"
        assert f.monthly_savings_reais == pytest.approx(296.1)
        assert f.annual_savings_reais == pytest.approx(3_553.2)
        assert math.isfinite(f.payback_years)
        assert f.payback_years > 0
        assert f.payback_years == pytest.approx(f.system_cost_reais / f.annual_savings_reais)

    def test_no_advisories_for_healthy_case(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.warnings == []
        assert r.recommendations == []

    def test_portuguese_payload_matches(self, goias_input: CalculationInput, goias_payload: dict):
        assert calculate_solar(goias_payload) == calculate_solar(goias_input)

    def test_result_echoes_input(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        assert r.inputs == goias_input

    def test_deterministic(self, goias_input: CalculationInput):
        assert calculate_solar(goias_input) == calculate_solar(goias_input)

    def test_result_is_frozen(self, goias_input: CalculationInput):
        r = calculate_solar(goias_input)
        with pytest.raises(ValidationError):
            r.bill_after_reais = 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Edge scenarios
# ═══════════════════════════════════════════════════════════════════════════

class TestEdgeScenarios:

    def test_consumption_equal_to_minimum_has_no_payback(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, monthly_consumption_kwh=30))
        assert r.energy_balance.compensated_kwh == 0.0
        assert r.financials.annual_savings_reais == 0.0
        assert r.financials.payback_years == math.inf
        assert r.financials.payback_applicable is False
        assert any("not applicable" in w for w in r.warnings)

    def test_consumption_below_minimum_negative_savings(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, monthly_consumption_kwh=20))
        # before 20 × 0.63 + 25 = 37.6 ; after 30 × 0.63 + 25 = 43.9
        assert r.financials.monthly_savings_reais == pytest.approx(-6.3)
        assert r.bill_after_reais > r.baseline.bill_before_reais
        assert math.isinf(r.financials.payback_years)
        assert any("higher than the current bill" in w for w in r.warnings)
        assert any("minimum billed" in w for w in r.warnings)

    def test_undersized_override_keeps_minimum_bill(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, module_count=3))
        # 1.65 kWp × 5.7 × 30 × 0.8 = 225.72 kWh
        assert r.generation.monthly_generation_kwh == pytest.approx(225.72)
        assert r.energy_balance.compensated_kwh == pytest.approx(195.72)
        # 30 × 0.63 + 25 whatever the array size
        assert r.bill_after_reais == pytest.approx(43.9)
        assert any("below the 500 kWh compensation target" in w for w in r.warnings)

    def test_single_module_bill_is_minimum_plus_fee(self, goias_payload: dict):
        r = calculate_solar({**goias_payload, "quantidade_modulos": 1})
        assert r.sizing.module_count == 1
        assert r.bill_after_reais == pytest.approx(30 * 0.63 + 25)
        assert any("below the 500 kWh compensation target" in w for w in r.warnings)

    def test_zero_module_override_becomes_one(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, module_count=0))
        assert r.sizing.module_count == 1

    def test_oversized_override_recommends_fewer_modules(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, module_count=20))
        assert r.energy_balance.injected_surplus_kwh > 100
        assert any("fewer modules" in rec for rec in r.recommendations)

    def test_high_shading_recommendation(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, shading_loss_percent=30))
        assert r.sizing.effective_performance_ratio == pytest.approx(0.56)
        assert any("Shading" in rec for rec in r.recommendations)

    def test_flag_color_raises_bill(self, goias_input: CalculationInput):
        green = calculate_solar(goias_input)
        red = calculate_solar(_variant(goias_input, tariff_flag_color="red2"))
        assert red.tariff.final_tariff_reais_kwh == pytest.approx(0.63 + 0.07877)
        assert red.baseline.bill_before_reais > green.baseline.bill_before_reais

    def test_tri_phase_minimum(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, phase_type="tri"))
        assert r.baseline.minimum_billed_kwh == 100
        assert r.energy_balance.compensated_kwh == pytest.approx(400.0)

    def test_minimum_override(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, min_kwh_per_phase_override=0))
        assert r.baseline.minimum_billed_kwh == 0
        assert r.energy_balance.compensated_kwh == pytest.approx(500.0)

    def test_system_cost_override(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, system_cost_reais=20_000))
        assert r.financials.system_cost_reais == 20_000
        assert r.financials.cost_source == "override"

    def test_equipment_cost(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(
            goias_input, module_price_reais=950, inverter_cost_reais=4_000,
            installation_cost_reais=2_000,
        ))
        assert r.financials.system_cost_reais == pytest.approx(12_650)
        assert r.financials.cost_source == "equipment"


# ═══════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════

class TestErrors:

    def test_unknown_tariff(self, goias_input: CalculationInput):
        with pytest.raises(ConfigurationError) as excinfo:
            calculate_solar(_variant(goias_input, utility_provider="Unknown Co"))
        assert excinfo.value.kind == "UnknownTariff"
        assert "Unknown Co" in str(excinfo.value)

    def test_unknown_tariff_with_both_overrides(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(
            goias_input, utility_provider="Unknown Co",
            energy_tariff_reais_kwh=0.70, flag_surcharge_reais_kwh=0.0,
        ))
        assert r.tariff.final_tariff_reais_kwh == pytest.approx(0.70)

    def test_unknown_state(self, goias_input: CalculationInput):
        with pytest.raises(ConfigurationError) as excinfo:
            calculate_solar(_variant(goias_input, state="ZZ"))
        assert excinfo.value.kind == "UnknownIrradiation"

    def test_unknown_state_with_override(self, goias_input: CalculationInput):
        r = calculate_solar(_variant(goias_input, state="ZZ", irradiation_psh_kwh_m2_day=5.0))
        assert r.irradiation_psh_kwh_m2_day == 5.0

    def test_zero_irradiation_override(self, goias_input: CalculationInput):
        with pytest.raises(DomainError) as excinfo:
            calculate_solar(_variant(goias_input, irradiation_psh_kwh_m2_day=0))
        assert excinfo.value.kind == "InvalidDivisor"

    def test_zero_loss_factor(self, goias_input: CalculationInput):
        with pytest.raises(DomainError):
            calculate_solar(_variant(goias_input, system_loss_factor=0))

    def test_full_shading(self, goias_input: CalculationInput):
        with pytest.raises(DomainError):
            calculate_solar(_variant(goias_input, shading_loss_percent=100))

    def test_invalid_mapping_raises_validation_error(self):
        with pytest.raises(ValidationError):
            calculate_solar({"monthly_consumption_kwh": -5, "utility_provider": "CHESP", "state": "GO"})

    def test_negative_irradiation_override_rejected_at_input(self, goias_payload: dict):
        with pytest.raises(ValidationError) as excinfo:
            calculate_solar({**goias_payload, "irradiacao_psh_kwh_m2_dia": -1})
        assert excinfo.value.errors()[0]["loc"] == ("irradiacao_psh_kwh_m2_dia",)

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_consumption_rejected(self, goias_payload: dict, value: float):
        with pytest.raises(ValidationError):
            calculate_solar({**goias_payload, "consumo_mensal_kwh": value})

    def test_non_finite_assumption_rejected(self, goias_payload: dict):
        with pytest.raises(ValidationError):
            calculate_solar(goias_payload, FinancialAssumptions(energy_inflation_annual_percent=math.inf))


# ═══════════════════════════════════════════════════════════════════════════
# Injected context
# ═══════════════════════════════════════════════════════════════════════════

class TestInjectedContext:

    def test_custom_pricing(self, small_pricing: PricingContext):
        r = calculate_solar(
            {"monthly_consumption_kwh": 300, "utility_provider": "Test Utility", "state": "sp"},
            pricing=small_pricing,
        )
        assert r.tariff.final_tariff_reais_kwh == pytest.approx(0.80)
        assert r.irradiation_psh_kwh_m2_day == 5.0
        assert r.financials.system_cost_reais == pytest.approx(r.sizing.installed_kwp * 5_000)

    def test_default_tables_not_shared(self, pricing: PricingContext, goias_input: CalculationInput):
        pricing.irradiation_psh["GO"] = 1.0
        assert calculate_solar(goias_input).irradiation_psh_kwh_m2_day == 5.7

    def test_assumptions_flow_into_projection(self, goias_input: CalculationInput):
        a = FinancialAssumptions(horizon_years=10, annual_om_cost_reais=0)
        r = calculate_solar(goias_input, assumptions=a)
        assert r.assumptions == a
        assert len(r.projection.cash_flows_reais) == 11
        assert r.projection.first_year_savings_reais == pytest.approx(r.financials.annual_savings_reais)
