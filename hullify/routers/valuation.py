from typing import Any
from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from ..schemas import Valuation
from ..services.valuation_service import ValuationService
from ..core.security import require_api_key, rate_limit

router = APIRouter()

def service_dep(request: Request) -> ValuationService:
    # Estimator client is built once at startup and shared; the service itself is stateless
    return ValuationService(request.app.state.estimator)

@router.post("/estimate", response_model=Valuation)
async def post_estimate(
    # Plain object, not VesselPayload: a wrongly typed field falls back to its
    # default in the normalizer instead of failing the whole request with 422.
    body: dict[str, Any] = Body(...),
    include_trend: bool = Query(default=False),
    _auth = Depends(require_api_key),     # API key guard
    _lim  = Depends(rate_limit),          # Rate limiting
    svc: ValuationService = Depends(service_dep),
):
    valuation = await svc.compute(body, include_trend=include_trend)
    # Trend is absent (not null) unless asked for
    exclude = None if include_trend else {"trend"}
    return JSONResponse(valuation.model_dump(mode="json", exclude=exclude))
