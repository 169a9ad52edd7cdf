"""
Trip model and the per-trip packing record.
"""
from sqlalchemy import Column, String, Date, Boolean, ForeignKey, Integer, Uuid, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from quokkapack.db.base import Base, BaseModel

# Junction table for Trip and Category many-to-many relationship
trip_categories = Table(
    "trip_categories",
    Base.metadata,
    Column("trip_id", Integer, ForeignKey("trips.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Trip(BaseModel):
    """Trip model representing a journey to pack for."""
    __tablename__ = "trips"
    
    destination = Column(String(200), nullable=False, default="")
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    master_user_id = Column(Uuid, ForeignKey("master_users.id"), nullable=False, index=True)
    
    # Relationships
    master_user = relationship("MasterUser", back_populates="trips")
    categories = relationship("Category", secondary=trip_categories, back_populates="trips")
    trip_items = relationship("TripItem", back_populates="trip", cascade="all, delete-orphan")


class TripItem(BaseModel):
    """Link marking an item as on a trip's packing list."""
    __tablename__ = "trip_items"
    __table_args__ = (
        UniqueConstraint("trip_id", "item_id", name="uq_trip_items_trip_item"),
    )
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    is_packed = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    trip = relationship("Trip", back_populates="trip_items")
    item = relationship("Item", back_populates="trip_items")
