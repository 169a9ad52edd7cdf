"""
Pydantic schemas for trip packing records and the classified trip catalog.
"""
from pydantic import BaseModel
from typing import List, Optional
import enum


class PackingState(str, enum.Enum):
    """Packing state of a catalog item within one trip."""
    AVAILABLE_TO_ADD = "AvailableToAdd"
    UNPACKED = "Unpacked"
    PACKED = "Packed"


class TripItemUpdate(BaseModel):
    """Schema for toggling a packed flag."""
    is_packed: bool


class TripItemBatchUpdate(BaseModel):
    """One entry of a batch packed-flag update."""
    trip_item_id: int
    is_packed: bool


class TripItemResponse(BaseModel):
    """Schema for an item that is on a trip's packing list."""
    trip_item_id: int
    item_id: int
    item_name: str
    is_packed: bool


class TripCatalogItemResponse(BaseModel):
    """Schema for a catalog item joined with its zero-or-one link."""
    item_id: int
    name: str
    is_essential: bool = False
    category_id: int
    category_name: str
    trip_item_id: Optional[int] = None
    is_packed: Optional[bool] = None
    status: PackingState


class CatalogCategoryGroup(BaseModel):
    """Catalog items of one category, split by whether they are on the trip."""
    category_id: int
    category_name: str
    items_in_trip: List[TripCatalogItemResponse] = []
    items_not_in_trip: List[TripCatalogItemResponse] = []


class PackingProgress(BaseModel):
    """Per-trip packing completion over distinct catalog items."""
    total_items: int
    packed: int
    unpacked: int
    available_to_add: int
    percent_packed: float  # packed / (packed + unpacked)


class TripCatalogResponse(BaseModel):
    """Schema for the grouped packing view of a trip."""
    trip_id: int
    groups: List[CatalogCategoryGroup] = []
    progress: PackingProgress
