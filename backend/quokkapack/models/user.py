"""
Identity models: the canonical internal user and its federated logins.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from quokkapack.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MasterUser(Base):
    """Canonical internal identity, provisioned on first login."""
    __tablename__ = "master_users"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    
    # Relationships
    logins = relationship("UserLogin", back_populates="master_user", cascade="all, delete-orphan")
    trips = relationship("Trip", back_populates="master_user", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="master_user", cascade="all, delete-orphan")
    items = relationship("Item", back_populates="master_user", cascade="all, delete-orphan")


class UserLogin(Base):
    """A federated identity binding; (issuer, provider_user_id) is unique."""
    __tablename__ = "user_logins"
    __table_args__ = (
        UniqueConstraint("issuer", "provider_user_id", name="uq_user_logins_issuer_subject"),
    )
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    provider = Column(String(50), nullable=False)  # e.g. "entra"
    provider_user_id = Column(String(255), nullable=False)  # subject claim
    issuer = Column(String(512), nullable=False)  # iss claim
    email = Column(String(320), nullable=True)
    display_name = Column(String(255), nullable=False, default="")
    master_user_id = Column(Uuid, ForeignKey("master_users.id"), nullable=False, index=True)
    
    # Relationships
    master_user = relationship("MasterUser", back_populates="logins")
