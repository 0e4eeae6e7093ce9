"""Result models: calculation output contracts."""

from solar_proposal.models.results import (
    BaselineBilling,
    CalculationResult,
    EnergyBalance,
    FinancialMetrics,
    FinancialProjection,
    GenerationEstimate,
    ResolvedTariff,
    SystemSizing,
)

__all__ = [
    "BaselineBilling",
    "CalculationResult",
    "EnergyBalance",
    "FinancialMetrics",
    "FinancialProjection",
    "GenerationEstimate",
    "ResolvedTariff",
    "SystemSizing",
]
