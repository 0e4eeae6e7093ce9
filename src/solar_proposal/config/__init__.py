"""Configuration models: calculation inputs, reference data, assumptions."""

from solar_proposal.config.inputs import (
    FLAG_COLORS,
    PHASE_TYPES,
    CalculationInput,
    FlagColor,
    PhaseType,
)
from solar_proposal.config.pricing import (
    DEFAULT_COST_PER_KWP_REAIS,
    PricingContext,
    TariffInfo,
    default_pricing_context,
)
from solar_proposal.config.finance import FinancialAssumptions
from solar_proposal.config.loader import load_pricing_context

__all__ = [
    "FLAG_COLORS",
    "PHASE_TYPES",
    "CalculationInput",
    "FlagColor",
    "PhaseType",
    "DEFAULT_COST_PER_KWP_REAIS",
    "PricingContext",
    "TariffInfo",
    "default_pricing_context",
    "FinancialAssumptions",
    "load_pricing_context",
]
