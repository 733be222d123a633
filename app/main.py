# app/main.py
"""
FastAPI application entry point.
Builds the app (database, middleware, global error handlers, all routers)
in create_app(); `app` is the instance uvicorn serves.
"""

import os
import time

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import Settings, settings
from app.database import Database
from app.routers import (
    accidents, charges, clientpayments, contracts, customers, dashboard, factures, health,
    infractions, interventions, reservations, traites, users, vehicleinspections,
    vehicleinsurances, vehicles,
)
from app.services.auth_service import get_current_user
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Resource routers, guarded by the bearer token when AUTH_REQUIRED is on
RESOURCE_ROUTERS = [
    (customers.router,          "👤 Customers"),
    (vehicles.router,           "🚗 Vehicles"),
    (contracts.router,          "📝 Contracts"),
    (reservations.router,       "📅 Reservations"),
    (accidents.router,          "💥 Accidents"),
    (charges.router,            "💸 Charges"),
    (clientpayments.router,     "💳 Client payments"),
    (factures.router,           "🧾 Factures"),
    (infractions.router,        "🚨 Infractions"),
    (interventions.router,      "🔧 Interventions"),
    (traites.router,            "🏦 Traites"),
    (vehicleinspections.router, "🔍 Vehicle inspections"),
    (vehicleinsurances.router,  "🛡️  Vehicle insurances"),
    (dashboard.router,          "📊 Dashboard"),
]


def create_app(config: Settings = None) -> FastAPI:
    config = config or settings

    app = FastAPI(
        title="Location Back-Office API",
        description="Car-rental back-office — fleet, customers, contracts, billing and dashboard.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = config
    app.state.db = Database(config.DATABASE_URL, echo=config.DB_ECHO)

    # ── CORS (allow the back-office frontend to call the API) ───────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ───────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Global Exception Handler ────────────────────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Routers ─────────────────────────────────────────────────────────────
    guard = [Depends(get_current_user)] if config.AUTH_REQUIRED else []
    for router, tag in RESOURCE_ROUTERS:
        app.include_router(router, prefix="/api/v1", tags=[tag], dependencies=guard)
    app.include_router(users.router,  prefix="/api/v1", tags=["🔑 Users"])
    app.include_router(health.router, prefix="/api/v1", tags=["💚 Health"])

    # ── Uploaded files (read-only) ──────────────────────────────────────────
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")

    # ── Startup / Shutdown ──────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("🚀 Location Back-Office starting up...")
        app.state.db.create_tables()
        logger.info("✅ Database tables ready")
        logger.info(f"📁 Uploads stored in {os.path.abspath(config.UPLOAD_DIR)}")
        logger.info(f"🔐 Auth on resource routes: {'required' if config.AUTH_REQUIRED else 'off'}")
        logger.info(f"🌐 Listening on http://{config.BACKEND_IP}:{config.BACKEND_PORT}")
        logger.info("📖 API docs at /docs")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("🛑 Location Back-Office shutting down...")
        app.state.db.dispose()

    return app


app = create_app()
