"""Savant API - FastAPI application entrypoint."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from savant.service import SavantService

SERVICE_NAME = "savant-api"
SERVICE_VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Module-level service shared by every request in this process
_service: Optional[SavantService] = None


def get_service() -> SavantService:
    """Returns the process-wide service, creating it on first use."""
    global _service
    if _service is None:
        _service = SavantService()
        logger.info("Savant service initialized.")
    return _service


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Allow every origin; answer preflight requests with an empty 200."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    global _service
    if _service is not None:
        await _service.aclose()
        _service = None


app = FastAPI(
    title="Savant API",
    description="Hockey matchup statistics aggregated from MoneyPuck, NHL and ESPN",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)
app.add_middleware(CORSHeadersMiddleware)


def _first(request: Request, name: str) -> Optional[str]:
    """First value of a query parameter that may be repeated."""
    values = request.query_params.getlist(name)
    return values[0] if values else None


@app.get("/health")
async def health(service: SavantService = Depends(get_service)):
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "cache_age_seconds": service.cache.snapshot(),
    }


@app.get("/")
@app.get("/api")
async def query(request: Request, service: SavantService = Depends(get_service)):
    """Schedule mode with ``action=schedule``, matchup mode with ``home`` and ``away``."""
    action = _first(request, "action")
    try:
        if action == "schedule":
            return await service.get_schedule(_first(request, "date"))

        home = _first(request, "home")
        away = _first(request, "away")
        if not home or not away:
            return JSONResponse(status_code=400, content={"error": "Missing teams"})

        return await service.get_matchup(home, away)
    except Exception as e:
        logger.exception(f"Request failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
