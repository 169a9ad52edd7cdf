"""
Trip management routes, including the classified packing catalog.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from quokkapack.db.session import get_db
from quokkapack.models.user import MasterUser
from quokkapack.models.trip import Trip
from quokkapack.models.category import Category
from quokkapack.schemas.trip import TripCreate, TripUpdate, TripResponse, TripDetailResponse
from quokkapack.schemas.trip_item import TripCatalogResponse
from quokkapack.services.packing_service import (
    build_trip_catalog, group_catalog_by_category, prune_unreachable_links, summarize_progress
)
from quokkapack.api.dependencies import get_current_user

router = APIRouter(prefix="/trips", tags=["trips"])


def check_trip_access(trip_id: int, user: MasterUser, db: Session) -> Trip:
    """Return the trip if it belongs to the user, else 404."""
    trip = db.query(Trip).filter(
        Trip.id == trip_id,
        Trip.master_user_id == user.id
    ).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


def get_owned_category(category_id: int, user: MasterUser, db: Session) -> Category:
    """Return the category if it belongs to the user, else 404."""
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.master_user_id == user.id
    ).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return category


def to_detail_response(trip: Trip) -> TripDetailResponse:
    """Build the trip details with its classified catalog."""
    return TripDetailResponse(
        id=trip.id,
        destination=trip.destination,
        start_date=trip.start_date,
        end_date=trip.end_date,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
        category_ids=sorted(c.id for c in trip.categories),
        items=build_trip_catalog(trip)
    )


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip, optionally attaching categories."""
    categories = [get_owned_category(cid, current_user, db) for cid in dict.fromkeys(trip_data.category_ids)]
    
    new_trip = Trip(
        destination=trip_data.destination,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        master_user_id=current_user.id,
        categories=categories
    )
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    
    return to_detail_response(new_trip)


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips for current user."""
    return db.query(Trip).filter(
        Trip.master_user_id == current_user.id
    ).order_by(Trip.start_date, Trip.id).all()


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with every catalog item and its packing state."""
    trip = check_trip_access(trip_id, current_user, db)
    return to_detail_response(trip)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update trip information."""
    trip = check_trip_access(trip_id, current_user, db)
    
    start_date = trip_data.start_date or trip.start_date
    end_date = trip_data.end_date or trip.end_date
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date"
        )
    
    if trip_data.destination is not None:
        trip.destination = trip_data.destination
    trip.start_date = start_date
    trip.end_date = end_date
    
    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and its packing list."""
    trip = check_trip_access(trip_id, current_user, db)
    db.delete(trip)
    db.commit()


@router.get("/{trip_id}/catalog", response_model=TripCatalogResponse)
async def get_trip_catalog(
    trip_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the packing view: catalog grouped by category plus progress."""
    trip = check_trip_access(trip_id, current_user, db)
    entries = build_trip_catalog(trip)
    return TripCatalogResponse(
        trip_id=trip.id,
        groups=group_catalog_by_category(entries),
        progress=summarize_progress(entries)
    )


@router.post("/{trip_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_category_to_trip(
    trip_id: int,
    category_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Make a category's items available to the trip."""
    trip = check_trip_access(trip_id, current_user, db)
    category = get_owned_category(category_id, current_user, db)
    
    if category not in trip.categories:
        trip.categories.append(category)
        db.commit()


@router.delete("/{trip_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_category_from_trip(
    trip_id: int,
    category_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Detach a category from the trip.
    Links for items no longer reachable through any remaining category are dropped.
    """
    trip = check_trip_access(trip_id, current_user, db)
    category = get_owned_category(category_id, current_user, db)
    
    if category not in trip.categories:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category is not attached to this trip"
        )
    trip.categories.remove(category)
    prune_unreachable_links(trip)
    
    db.commit()
