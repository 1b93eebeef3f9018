"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from app.api.v1 import admin, appointments, auth, availability, health, services

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Authentication
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"],
)

# Service catalog
api_router.include_router(
    services.router,
    prefix="/services",
    tags=["services"],
)

# Public availability
api_router.include_router(
    availability.router,
    prefix="/availability",
    tags=["availability"],
)

# Appointments
api_router.include_router(
    appointments.router,
    prefix="/appointments",
    tags=["appointments"],
)

# Administration
api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["admin"],
)
