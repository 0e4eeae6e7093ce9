"""Error taxonomy for the calculation engine.

``ConfigurationError`` covers missing reference data and is always surfaced
to the caller with the offending key.  ``DomainError`` is the numeric flavour
of the same contract: a precondition that would otherwise turn into
``inf`` / ``nan`` inside the sizing math.

A non-finite payback is *not* an error; see ``FinancialMetrics``.
"""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal["UnknownTariff", "UnknownIrradiation", "UnknownPhase", "InvalidDivisor"]


class SolarCalculationError(ValueError):
    """Base class for every error raised by the calculator."""


class ConfigurationError(SolarCalculationError):
    """Reference data or overrides cannot satisfy a lookup.

    Attributes
    ----------
    kind : str
        Machine-readable category (``UnknownTariff``, ``UnknownIrradiation``,
        ``UnknownPhase`` or ``InvalidDivisor``).
    detail : str
        Human-readable message naming the offending key or value.
    """

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind}: {detail}")

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "detail": self.detail}


class DomainError(ConfigurationError):
    """Invalid numeric precondition (zero/negative irradiation or PR)."""

    def __init__(self, detail: str) -> None:
        super().__init__("InvalidDivisor", detail)


class PricingFileError(SolarCalculationError):
    """A pricing file could not be read or parsed into a PricingContext."""
