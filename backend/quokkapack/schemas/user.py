"""
Pydantic schemas for MasterUser and UserLogin.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class UserLoginResponse(BaseModel):
    """Schema for a federated login binding."""
    provider: str
    provider_user_id: str
    issuer: str
    email: Optional[str] = None
    display_name: str = ""
    
    class Config:
        from_attributes = True


class MasterUserResponse(BaseModel):
    """Schema for the current user."""
    id: UUID
    created_at: datetime
    logins: List[UserLoginResponse] = []
    
    class Config:
        from_attributes = True
