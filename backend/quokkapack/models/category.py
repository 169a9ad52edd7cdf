"""
Category and Item models for a user's belongings.
"""
from sqlalchemy import Column, String, Boolean, Text, ForeignKey, Integer, Uuid, Table
from sqlalchemy.orm import relationship
from quokkapack.db.base import Base, BaseModel

# Junction table for Category and Item many-to-many relationship
category_items = Table(
    "category_items",
    Base.metadata,
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    Column("item_id", Integer, ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
)


class Category(BaseModel):
    """A named group of items, e.g. "Toiletries"."""
    __tablename__ = "categories"
    
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    master_user_id = Column(Uuid, ForeignKey("master_users.id"), nullable=False, index=True)
    
    # Relationships
    master_user = relationship("MasterUser", back_populates="categories")
    items = relationship("Item", secondary=category_items, back_populates="categories")
    trips = relationship("Trip", secondary="trip_categories", back_populates="categories")


class Item(BaseModel):
    """A belonging that can be packed."""
    __tablename__ = "items"
    
    name = Column(String(200), nullable=False)
    notes = Column(Text, nullable=True)
    is_essential = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    master_user_id = Column(Uuid, ForeignKey("master_users.id"), nullable=False, index=True)
    
    # Relationships
    master_user = relationship("MasterUser", back_populates="items")
    categories = relationship("Category", secondary=category_items, back_populates="items")
    trip_items = relationship("TripItem", back_populates="item", cascade="all, delete-orphan")
    
    @property
    def category_ids(self):
        return [c.id for c in self.categories]
