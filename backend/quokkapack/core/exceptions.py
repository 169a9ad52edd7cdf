"""
Domain exceptions raised by the identity and persistence layers.
"""


class QuokkaPackError(Exception):
    """Base class for application errors."""


class MissingClaim(QuokkaPackError):
    """The principal lacks an issuer or subject claim."""

    def __init__(self, claim: str):
        self.claim = claim
        super().__init__(f"Missing required claim: {claim}")


class StoreConflict(QuokkaPackError):
    """A write violated a uniqueness constraint enforced by the store."""


class StoreUnavailable(QuokkaPackError):
    """The store could not be reached or failed transiently."""
