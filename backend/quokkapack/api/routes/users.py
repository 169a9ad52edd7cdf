"""
User routes: first-contact initialization and current user info.
"""
from fastapi import APIRouter, Depends
from quokkapack.api.dependencies import get_current_user
from quokkapack.core.utils import format_response
from quokkapack.models.user import MasterUser
from quokkapack.schemas.user import MasterUserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/initialize")
async def initialize_user(current_user: MasterUser = Depends(get_current_user)):
    """Provision the caller on first login; a no-op for known users."""
    return format_response({"id": str(current_user.id)}, message="User initialized")


@router.get("/me", response_model=MasterUserResponse)
async def get_current_user_info(current_user: MasterUser = Depends(get_current_user)):
    """Get current user information."""
    return current_user
