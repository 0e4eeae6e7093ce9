"""Tests for api/narrative.py: formatting and narrative sections."""

from __future__ import annotations

import math

from solar_proposal.api.narrative import format_brl, format_number, generate_narrative
from solar_proposal.config import CalculationInput
from solar_proposal.engine.calculator import calculate_solar


class TestFormatting:

    def test_brl(self):
        assert format_brl(1234.56) == "R$ 1.234,56"
        assert format_brl(0) == "R$ 0,00"
        assert format_brl(-5) == "-R$ 5,00"

    def test_brl_non_finite(self):
        assert format_brl(math.inf) == "N/A"
        assert format_brl(math.nan) == "N/A"
        assert format_brl(None) == "N/A"

    def test_number(self):
        assert format_number(1234567.891, 2) == "1.234.567,89"
        assert format_number(1500) == "1.500"
        assert format_number(math.inf) == "N/A"


class TestNarrative:

    def test_sections_present(self, goias_input: CalculationInput):
        text = generate_narrative(calculate_solar(goias_input))
        assert "SYSTEM" in text
        assert "MONTHLY BILL" in text
        assert "SAVINGS & PAYBACK" in text
        assert "25-YEAR OUTLOOK" in text
        assert "WARNINGS" not in text

    def test_key_figures(self, goias_input: CalculationInput):
        text = generate_narrative(calculate_solar(goias_input))
        assert "Modules: 7 x 550 Wp" in text
        assert "Bill before solar: R$ 340,00" in text
        assert "Bill after solar: R$ 43,90" in text

    def test_no_payback_renders_na(self, goias_input: CalculationInput):
        inp = CalculationInput.model_validate({**goias_input.model_dump(), "monthly_consumption_kwh": 30})
        text = generate_narrative(calculate_solar(inp))
        assert "Simple payback: N/A" in text
        assert "WARNINGS & RECOMMENDATIONS" in text
