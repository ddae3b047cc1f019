"""Routes API / API routes."""

from fastapi import APIRouter

from throttle_vault.api import auth, cars, garage

api_router = APIRouter(prefix="/api")

api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
api_router.include_router(garage.router, prefix="/garage", tags=["garage"])

# Identification hors /api / credentials live outside /api
auth_router = APIRouter(prefix="/auth", tags=["auth"])
auth_router.include_router(auth.router)
