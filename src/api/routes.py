"""API routes for the withholding tax engine."""

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.calculators.models import (
    InversionRequest,
    InversionResult,
    TaxInput,
    TaxSummary,
    ValidationResult,
)
from src.calculators.validators import (
    validate_dependents,
    validate_gross_amount,
    validate_net_amount,
    validate_service_tax_rate,
)
from src.engine import TaxEngine

logger = logging.getLogger(__name__)

router = APIRouter()


class ValidateRequest(BaseModel):
    """Raw form values to range-check; omitted fields are not checked."""

    gross_amount: Any = None
    net_amount: Any = None
    dependents: Any = None
    service_tax_rate: Any = None


def _engine(request: Request) -> TaxEngine:
    return request.app.state.engine


@router.get("/health")
async def health(request: Request) -> dict:  # type: ignore[type-arg]
    """Health check endpoint with cache stats when caching is on."""
    result: dict[str, object] = {"status": "ok"}
    engine = getattr(request.app.state, "engine", None)
    if engine is not None:
        stats = engine.cache_stats()
        if stats is not None:
            result["cache"] = stats.model_dump(exclude={"keys"})
    return result


@router.post("/calculate", response_model=TaxSummary)
def calculate(body: TaxInput, request: Request) -> TaxSummary:
    """Calculate all withholdings for a gross payment."""
    return _engine(request).compute_summary(body)


@router.post("/calculate/gross-from-net", response_model=InversionResult)
def gross_from_net(body: InversionRequest, request: Request) -> InversionResult:
    """Find the gross payment needed for a target net payment."""
    result = _engine(request).solve_gross_from_net(body)
    if not result.converged:
        logger.info("Returning approximate gross %s for net %s", result.gross_amount_found, body.target_net_amount)
    return result


@router.post("/validate")
async def validate(body: ValidateRequest) -> dict[str, ValidationResult]:
    """Range-check submitted form values without calculating anything."""
    checks = {
        "gross_amount": validate_gross_amount,
        "net_amount": validate_net_amount,
        "dependents": validate_dependents,
        "service_tax_rate": validate_service_tax_rate,
    }
    values = body.model_dump()
    return {
        field: check(values[field])
        for field, check in checks.items()
        if values[field] is not None
    }


@router.delete("/cache")
async def clear_cache(request: Request) -> JSONResponse:
    """Drop every cached summary."""
    _engine(request).clear_cache()
    return JSONResponse({"status": "ok"})
