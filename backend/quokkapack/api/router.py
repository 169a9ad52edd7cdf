"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from quokkapack.api.routes import users, trips, trip_items, categories, items

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(trip_items.router)
api_router.include_router(categories.router)
api_router.include_router(items.router)
