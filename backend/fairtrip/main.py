import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fairtrip.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "fairtrip.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from fairtrip.routers import airports, destinations, trips, usage
from fairtrip.services.api_tracker import ApiCallTracker
from fairtrip.services.cache_service import CacheService
from fairtrip.services.cached_provider import get_flight_provider
from fairtrip.services.fairness import CurrencyMismatch
from fairtrip.services.flight_provider import ProviderUnavailable

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one tracker, cache and provider per process, injected via app.state
    tracker = ApiCallTracker()
    cache = CacheService(settings.redis_url, tracker=tracker)
    provider = get_flight_provider(settings, cache, tracker)

    app.state.settings = settings
    app.state.tracker = tracker
    app.state.cache = cache
    app.state.flight_provider = provider
    logger.info(f"FairTrip started with provider {provider.name}")

    yield

    # Shutdown
    await provider.close()
    await cache.close()
    logger.info("Provider and cache connections closed")


app = FastAPI(
    title="FairTrip",
    description="Fair group flight search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProviderUnavailable)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailable):
    logger.error(f"Provider unavailable on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": f"Flight provider unavailable: {exc}"})


@app.exception_handler(CurrencyMismatch)
async def currency_mismatch_handler(request: Request, exc: CurrencyMismatch):
    logger.error(f"Currency mismatch on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


app.include_router(airports.router, prefix="/api/airports", tags=["airports"])
app.include_router(destinations.router, prefix="/api/destinations", tags=["destinations"])
app.include_router(trips.router, prefix="/api/trips", tags=["trips"])
app.include_router(usage.router, prefix="/api/usage", tags=["usage"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "fairtrip"}
