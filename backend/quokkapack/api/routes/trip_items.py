"""
Packing list routes: add catalog items to a trip and track packed status.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
from quokkapack.db.session import get_db
from quokkapack.models.user import MasterUser
from quokkapack.models.trip import Trip, TripItem
from quokkapack.models.category import Item
from quokkapack.schemas.trip_item import TripItemBatchUpdate, TripItemResponse, TripItemUpdate
from quokkapack.api.dependencies import get_current_user
from quokkapack.api.routes.trips import check_trip_access
from quokkapack.services.packing_service import catalog_item_ids

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/items", tags=["trip-items"])


def to_response(trip_item: TripItem) -> TripItemResponse:
    return TripItemResponse(
        trip_item_id=trip_item.id,
        item_id=trip_item.item_id,
        item_name=trip_item.item.name,
        is_packed=trip_item.is_packed
    )


def get_trip_item(trip: Trip, trip_item_id: int) -> TripItem:
    """Return the trip's link with the given id, else 404."""
    for trip_item in trip.trip_items:
        if trip_item.id == trip_item_id:
            return trip_item
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Trip item not found"
    )


@router.get("", response_model=List[TripItemResponse])
async def list_trip_items(
    trip_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the items on a trip's packing list."""
    trip = check_trip_access(trip_id, current_user, db)
    trip_items = sorted(trip.trip_items, key=lambda ti: (ti.item.name.lower(), ti.id))
    return [to_response(ti) for ti in trip_items]


@router.post("/{item_id}", response_model=TripItemResponse, status_code=status.HTTP_201_CREATED)
async def add_item_to_trip(
    trip_id: int,
    item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a catalog item to the packing list. Adding it twice returns the existing entry."""
    trip = check_trip_access(trip_id, current_user, db)
    item = db.query(Item).filter(
        Item.id == item_id,
        Item.master_user_id == current_user.id,
        Item.is_archived.is_(False)
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    
    if item.id not in catalog_item_ids(trip):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Item is not in this trip's catalog"
        )
    
    existing = db.query(TripItem).filter(
        TripItem.trip_id == trip.id,
        TripItem.item_id == item.id
    ).first()
    if existing:
        return to_response(existing)
    
    trip_item = TripItem(trip_id=trip.id, item_id=item.id, is_packed=False)
    db.add(trip_item)
    try:
        db.commit()
    except IntegrityError:
        # Another request added the same item first
        db.rollback()
        logger.info(f"Item {item_id} was added to trip {trip_id} concurrently")
        trip_item = db.query(TripItem).filter(
            TripItem.trip_id == trip_id,
            TripItem.item_id == item_id
        ).one()
    db.refresh(trip_item)
    return to_response(trip_item)


@router.put("/batch", response_model=List[TripItemResponse])
async def update_trip_items(
    trip_id: int,
    updates: List[TripItemBatchUpdate],
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set the packed flag of several trip items at once."""
    trip = check_trip_access(trip_id, current_user, db)
    
    updated = []
    for update in updates:
        trip_item = get_trip_item(trip, update.trip_item_id)
        trip_item.is_packed = update.is_packed
        updated.append(trip_item)
    
    db.commit()
    return [to_response(ti) for ti in updated]


@router.patch("/{trip_item_id}", response_model=TripItemResponse)
async def update_trip_item(
    trip_id: int,
    trip_item_id: int,
    update: TripItemUpdate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mark one trip item packed or unpacked."""
    trip = check_trip_access(trip_id, current_user, db)
    trip_item = get_trip_item(trip, trip_item_id)
    trip_item.is_packed = update.is_packed
    db.commit()
    db.refresh(trip_item)
    return to_response(trip_item)


@router.delete("/{trip_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item_from_trip(
    trip_id: int,
    trip_item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Take an item off the packing list; it becomes available to add again."""
    trip = check_trip_access(trip_id, current_user, db)
    trip_item = get_trip_item(trip, trip_item_id)
    trip.trip_items.remove(trip_item)
    db.commit()
