"""Models package - Import all models for SQLAlchemy registration."""
from quokkapack.models.user import MasterUser, UserLogin
from quokkapack.models.category import Category, Item, category_items
from quokkapack.models.trip import Trip, TripItem, trip_categories

__all__ = [
    "MasterUser",
    "UserLogin",
    "Category",
    "Item",
    "category_items",
    "Trip",
    "TripItem",
    "trip_categories",
]
