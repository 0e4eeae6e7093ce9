"""FastAPI server: JSON API for the solar proposal calculator.

Run with:
    uvicorn solar_proposal.api.server:app --reload --port 8000

Or:
    solar-proposal-api

Endpoints:
    GET  /                     welcome document
    GET  /health               liveness probe
    GET  /schema               JSON Schema for CalculationInput
    GET  /pricing              active reference tables
    POST /calculate            run a calculation (result + narrative)
    POST /calculate/narrative  run + plain-text interpretation only

The reference tables come from the file named by
``SOLAR_PROPOSAL_PRICING_FILE`` (YAML or JSON) or, when unset, from the
built-in defaults.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from solar_proposal.api.narrative import generate_narrative
from solar_proposal.config.finance import FinancialAssumptions
from solar_proposal.config.inputs import CalculationInput
from solar_proposal.config.loader import load_pricing_context
from solar_proposal.config.pricing import PricingContext, default_pricing_context
from solar_proposal.engine.calculator import calculate_solar
from solar_proposal.errors import ConfigurationError

logger = logging.getLogger(__name__)

PRICING_FILE_ENV = "SOLAR_PROPOSAL_PRICING_FILE"


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Solar Proposal Calculator API",
    version="1.0",
    description=(
        "Sizing, billing and payback calculation for grid-tied solar "
        "proposals under Brazilian net metering. Send a CalculationInput "
        "to POST /calculate."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_pricing_context() -> PricingContext:
    """Reference tables for this process, loaded once."""
    path = os.environ.get(PRICING_FILE_ENV)
    if path:
        return load_pricing_context(path)
    logger.info("%s not set; using built-in pricing tables", PRICING_FILE_ENV)
    return default_pricing_context()


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.warning("Calculation rejected (%s): %s", exc.kind, exc.detail)
    return JSONResponse(status_code=422, content={"error": exc.to_dict()})


@app.exception_handler(RequestValidationError)
def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 with field locations and messages.

    The offending values are left out: a non-finite number such as
    ``Infinity`` cannot be rendered back as JSON.
    """
    detail = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": detail})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body for /calculate."""
    input: CalculationInput = Field(
        description="Proposal input. English field names or Portuguese aliases "
                    "are accepted, e.g. {'consumo_mensal_kwh': 500, "
                    "'concessionaria': 'Equatorial GO', 'estado': 'GO'}",
    )
    assumptions: FinancialAssumptions = Field(
        default_factory=FinancialAssumptions,
        description="Optional long-term projection assumptions",
    )


class CalculateResponse(BaseModel):
    """Response from /calculate."""
    result: dict[str, Any]
    narrative: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root: returns a welcome message and pointers."""
    return {
        "name": "Solar Proposal Calculator API",
        "version": "1.0",
        "start_here": "GET /schema",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/schema")
def get_schema():
    """JSON Schema for CalculationInput: types, defaults, constraints."""
    return CalculationInput.model_json_schema()


@app.get("/pricing")
def get_pricing():
    """Reference tables used by this server."""
    return get_pricing_context().model_dump(mode="json")


@app.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest):
    """Run a calculation and return the full result plus narrative.

    Unknown tariffs/states and invalid divisors come back as HTTP 422 with
    ``{"error": {"kind": ..., "detail": ...}}``.  A payback that does not
    exist is ``null`` with ``payback_applicable: false``.
    """
    result = calculate_solar(req.input, get_pricing_context(), req.assumptions)
    return CalculateResponse(
        result=result.model_dump(mode="json"),
        narrative=generate_narrative(result),
    )


@app.post("/calculate/narrative")
def calculate_with_narrative(req: CalculateRequest):
    """Run a calculation and return only the narrative and headline metrics."""
    result = calculate_solar(req.input, get_pricing_context(), req.assumptions)
    f = result.financials
    return {
        "narrative": generate_narrative(result),
        "headline_metrics": {
            "module_count": result.sizing.module_count,
            "installed_kwp": result.sizing.installed_kwp,
            "bill_before_reais": result.baseline.bill_before_reais,
            "bill_after_reais": result.bill_after_reais,
            "monthly_savings_reais": f.monthly_savings_reais,
            "payback_years": f.payback_years if f.payback_applicable else None,
            "npv_reais": result.projection.npv_reais,
        },
        "warnings": result.warnings,
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "solar_proposal.api.server:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
