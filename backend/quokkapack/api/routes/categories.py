"""
Category management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from quokkapack.db.session import get_db
from quokkapack.models.user import MasterUser
from quokkapack.models.category import Category
from quokkapack.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryResponse, CategoryDetailResponse
)
from quokkapack.api.dependencies import get_current_user
from quokkapack.api.routes.trips import get_owned_category
from quokkapack.api.routes.items import get_owned_item
from quokkapack.services.packing_service import prune_unreachable_links

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new category."""
    category = Category(
        name=category_data.name,
        description=category_data.description,
        is_default=category_data.is_default,
        master_user_id=current_user.id
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    include_archived: bool = False,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's categories."""
    query = db.query(Category).filter(Category.master_user_id == current_user.id)
    if not include_archived:
        query = query.filter(Category.is_archived.is_(False))
    return query.order_by(Category.name, Category.id).all()


@router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(
    category_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a category with its items."""
    return get_owned_category(category_id, current_user, db)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update category information."""
    category = get_owned_category(category_id, current_user, db)
    for field, value in category_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(category, field, value)
    if category.is_archived:
        for trip in category.trips:
            prune_unreachable_links(trip)
    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a category. Its items are kept; trips drop links to items it alone provided."""
    category = get_owned_category(category_id, current_user, db)
    for trip in list(category.trips):
        trip.categories.remove(category)
        prune_unreachable_links(trip)
    db.delete(category)
    db.commit()


@router.post("/{category_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_item_to_category(
    category_id: int,
    item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Put an item into a category."""
    category = get_owned_category(category_id, current_user, db)
    item = get_owned_item(item_id, current_user, db)
    if item not in category.items:
        category.items.append(item)
        db.commit()


@router.delete("/{category_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item_from_category(
    category_id: int,
    item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Take an item out of a category."""
    category = get_owned_category(category_id, current_user, db)
    item = get_owned_item(item_id, current_user, db)
    if item not in category.items:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item is not in this category"
        )
    category.items.remove(item)
    for trip in category.trips:
        prune_unreachable_links(trip)
    db.commit()
