"""
Bearer token validation and claim extraction for the external identity provider.
"""
from dataclasses import dataclass
from typing import Optional
import logging
from jose import JWTError, jwt
from quokkapack.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FederatedPrincipal:
    """Identity claims of an authenticated caller, as plain values."""
    issuer: Optional[str]
    subject: Optional[str]
    email: Optional[str] = None
    display_name: str = ""


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT issued by the identity provider."""
    options = {"verify_aud": bool(settings.OIDC_AUDIENCE)}
    kwargs = {}
    if settings.OIDC_AUDIENCE:
        kwargs["audience"] = settings.OIDC_AUDIENCE
    if settings.OIDC_ISSUER:
        kwargs["issuer"] = settings.OIDC_ISSUER
    try:
        return jwt.decode(
            token,
            settings.OIDC_SIGNING_KEY,
            algorithms=settings.OIDC_ALGORITHMS,
            options=options,
            **kwargs
        )
    except JWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None


def principal_from_claims(claims: dict) -> FederatedPrincipal:
    """
    Pull issuer, subject, email and display name out of a claim set.

    The subject is taken from the first claim in OIDC_SUBJECT_CLAIMS that has a
    value (Entra puts the stable user id in "oid"). Values are passed through
    as-is; no case or trailing-slash normalization is applied.
    """
    subject = None
    for claim_name in settings.OIDC_SUBJECT_CLAIMS:
        value = claims.get(claim_name)
        if value:
            subject = str(value)
            break

    display_name = claims.get("name") or claims.get("preferred_username") or ""
    return FederatedPrincipal(
        issuer=claims.get("iss"),
        subject=subject,
        email=claims.get("email"),
        display_name=display_name,
    )
