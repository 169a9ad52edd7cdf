"""
Pydantic schemas for Category and Item entities.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ItemBase(BaseModel):
    """Base item schema."""
    name: str
    notes: Optional[str] = None
    is_essential: bool = False


class ItemCreate(ItemBase):
    """Schema for item creation."""
    category_ids: List[int] = []


class ItemUpdate(BaseModel):
    """Schema for item update."""
    name: Optional[str] = None
    notes: Optional[str] = None
    is_essential: Optional[bool] = None
    is_archived: Optional[bool] = None


class ItemResponse(ItemBase):
    """Schema for item response."""
    id: int
    is_archived: bool
    category_ids: List[int] = []
    created_at: datetime
    
    class Config:
        from_attributes = True


class CategoryBase(BaseModel):
    """Base category schema."""
    name: str
    description: Optional[str] = None
    is_default: bool = False


class CategoryCreate(CategoryBase):
    """Schema for category creation."""
    pass


class CategoryUpdate(BaseModel):
    """Schema for category update."""
    name: Optional[str] = None
    description: Optional[str] = None
    is_default: Optional[bool] = None
    is_archived: Optional[bool] = None


class CategoryResponse(CategoryBase):
    """Schema for category response."""
    id: int
    is_archived: bool
    created_at: datetime
    
    class Config:
        from_attributes = True


class CategoryDetailResponse(CategoryResponse):
    """Schema for category response with its items."""
    items: List[ItemResponse] = []
