"""
Request dependencies: bearer token validation and current-user resolution.
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from quokkapack.core.exceptions import MissingClaim
from quokkapack.core.security import decode_access_token, principal_from_claims
from quokkapack.db.session import get_db
from quokkapack.models.user import MasterUser
from quokkapack.services.identity_service import get_identity_resolver

security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> MasterUser:
    """
    Validate the bearer token and return the caller's MasterUser.

    The user is provisioned on first contact. Its id is attached to
    request.state so later code in the same request can skip the lookup.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    principal = principal_from_claims(claims)
    try:
        user = get_identity_resolver(db).resolve(
            principal.issuer,
            principal.subject,
            email=principal.email,
            display_name=principal.display_name,
        )
    except MissingClaim as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    request.state.master_user_id = user.id
    return user
