"""
AI Job Matcher — FastAPI Application Entry Point

Registers routers, applies middleware, and serves the API.
"""

import contextlib
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobmatch import dependencies
from jobmatch.config import settings
from jobmatch.routers import session

# ── Logging ───────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 {settings.app_name} is starting up (AI provider: {settings.ai_provider})")
    await dependencies.open_session()
    yield
    # Shutdown
    dependencies.close_session()
    logger.info(f"🛑 {settings.app_name} is shutting down")


# ── App factory ───────────────────────────────────────────────
app = FastAPI(
    title=settings.app_name,
    description=(
        "Paste a résumé and one or more job descriptions; "
        "an AI model scores the fit and lists matching and missing skills."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handler ─────────────────────────────────
# Unhandled errors still come back as JSON, without internal detail
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {exc}\n{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {type(exc).__name__}"},
    )


# ── Routers ───────────────────────────────────────────────────
app.include_router(session.router)


# ── Health Check ──────────────────────────────────────────────
@app.get("/", tags=["Health"])
async def health_check():
    return {"status": "ok", "service": settings.app_name}
