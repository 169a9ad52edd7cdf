"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, model_validator
from typing import List, Optional
from datetime import date, datetime
from quokkapack.schemas.trip_item import TripCatalogItemResponse


class TripBase(BaseModel):
    """Base trip schema."""
    destination: str
    start_date: date
    end_date: date
    
    @model_validator(mode="after")
    def check_dates(self):
        """Reject trips that end before they start."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripCreate(TripBase):
    """Schema for trip creation."""
    category_ids: List[int] = []


class TripUpdate(BaseModel):
    """Schema for trip update."""
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with its classified catalog."""
    category_ids: List[int] = []
    items: List[TripCatalogItemResponse] = []
