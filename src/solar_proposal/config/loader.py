"""Pricing file loader: YAML or JSON reference data.

A pricing file has the same shape as ``PricingContext``::

    tariffs:
      Equatorial GO:
        residencial:
          energy_tariff_reais_kwh: 0.63
    irradiation_psh:
      GO: 5.7
    default_cost_per_kwp_reais: 4500

With ``merge_defaults=True`` (the default) the file is layered over the
built-in tables, so it only needs to list what differs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from solar_proposal.config.pricing import PricingContext, default_pricing_context
from solar_proposal.errors import PricingFileError

logger = logging.getLogger(__name__)


def _load_raw(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise PricingFileError(f"Unsupported pricing file extension: {path.suffix}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PricingFileError(f"Cannot read pricing file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) if suffix in {".yaml", ".yml"} else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise PricingFileError(f"Cannot parse pricing file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PricingFileError(f"Pricing file {path} must contain a mapping at the top level")
    return data


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def load_pricing_context(path: str | Path, merge_defaults: bool = True) -> PricingContext:
    """Load a ``PricingContext`` from a YAML/JSON file.

    Raises
    ------
    PricingFileError
        Unsupported extension, unreadable file, malformed content or
        values that fail validation.
    """
    path = Path(path)
    raw = _load_raw(path)

    if merge_defaults:
        data = default_pricing_context().model_dump()
        # Normalise state keys before merging so "go" overrides "GO".
        if isinstance(raw.get("irradiation_psh"), dict):
            raw["irradiation_psh"] = {
                str(k).strip().upper(): v for k, v in raw["irradiation_psh"].items()
            }
        _deep_merge(data, raw)
    else:
        data = raw

    try:
        pricing = PricingContext.model_validate(data)
    except ValidationError as exc:
        raise PricingFileError(f"Invalid pricing data in {path}: {exc}") from exc

    logger.info(
        "Loaded pricing from %s: %d utilities, %d states",
        path, len(pricing.tariffs), len(pricing.irradiation_psh),
    )
    return pricing
