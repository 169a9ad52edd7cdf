"""
Item management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from quokkapack.db.session import get_db
from quokkapack.models.user import MasterUser
from quokkapack.models.category import Category, Item
from quokkapack.schemas.category import ItemCreate, ItemUpdate, ItemResponse
from quokkapack.api.dependencies import get_current_user
from quokkapack.services.packing_service import prune_unreachable_links

router = APIRouter(prefix="/items", tags=["items"])


def get_owned_item(item_id: int, user: MasterUser, db: Session) -> Item:
    """Return the item if it belongs to the user, else 404."""
    item = db.query(Item).filter(
        Item.id == item_id,
        Item.master_user_id == user.id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return item


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new item, optionally placing it in categories."""
    category_ids = list(dict.fromkeys(item_data.category_ids))
    categories = []
    if category_ids:
        categories = db.query(Category).filter(
            Category.id.in_(category_ids),
            Category.master_user_id == current_user.id
        ).all()
        if len(categories) != len(category_ids):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found"
            )
    
    item = Item(
        name=item_data.name,
        notes=item_data.notes,
        is_essential=item_data.is_essential,
        master_user_id=current_user.id,
        categories=categories
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.get("", response_model=List[ItemResponse])
async def list_items(
    category_id: Optional[int] = None,
    include_archived: bool = False,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's items, optionally within one category."""
    query = db.query(Item).filter(Item.master_user_id == current_user.id)
    if category_id is not None:
        query = query.filter(Item.categories.any(Category.id == category_id))
    if not include_archived:
        query = query.filter(Item.is_archived.is_(False))
    return query.order_by(Item.name, Item.id).all()


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get item by ID."""
    return get_owned_item(item_id, current_user, db)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    item_data: ItemUpdate,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update item information."""
    item = get_owned_item(item_id, current_user, db)
    for field, value in item_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(item, field, value)
    if item.is_archived:
        for trip in {link.trip for link in item.trip_items}:
            prune_unreachable_links(trip)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    current_user: MasterUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an item along with its trip entries."""
    item = get_owned_item(item_id, current_user, db)
    db.delete(item)
    db.commit()
