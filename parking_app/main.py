# parking_app/main.py
"""
FastAPI application entry point.
Builds the app around an explicitly constructed Database handle,
with request timing, a global error handler, and all routers.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from parking_app.routers import enforcement, health, lots, scans, testing, vehicles
from parking_app.database import Database
from parking_app.config import settings
from parking_app.utils.logger import get_logger
import time

logger = get_logger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="Campus Parking API",
        description="Lot availability, gate scans, and unregistered-vehicle enforcement.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.db = database or Database.from_settings(settings)

    # ── CORS (browser client may be served from another origin) ─────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Global Exception Handler ─────────────────────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(lots.router,            prefix="/api", tags=["🅿️  Lots"])
    app.include_router(lots.occupancy_router,                 tags=["🅿️  Lots"])
    app.include_router(scans.router,           prefix="/api", tags=["🚗 Scans"])
    app.include_router(enforcement.router,     prefix="/api", tags=["🚨 Enforcement"])
    app.include_router(vehicles.router,        prefix="/api", tags=["🔍 Vehicles"])
    app.include_router(health.router,          prefix="/api", tags=["💚 Health"])
    app.include_router(testing.router,         prefix="/api", tags=["🧪 Load simulation"])

    # ── Startup / Shutdown ───────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("🚀 Campus Parking backend starting up...")
        app.state.db.create_tables()
        logger.info("✅ Database tables ready")
        logger.info(f"🏫 Buildings configured: {list(settings.BUILDINGS.keys())}")
        logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
        logger.info("📖 API docs at /docs")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("🛑 Campus Parking backend shutting down...")
        app.state.db.dispose()

    return app


app = create_app()
