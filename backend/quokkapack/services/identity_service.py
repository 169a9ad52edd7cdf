"""
Identity resolution: just-in-time provisioning of internal users from
federated identity-provider claims.

A (issuer, subject) pair maps to exactly one UserLogin and through it to one
MasterUser. The first request from an unseen pair creates both rows in a single
commit. Two first-contact requests racing each other are settled by the unique
constraint on user_logins(issuer, provider_user_id): the loser rolls back and
re-reads the winner's row instead of failing.
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, joinedload
from quokkapack.core.config import settings
from quokkapack.core.exceptions import MissingClaim, StoreConflict, StoreUnavailable
from quokkapack.models.user import MasterUser, UserLogin

logger = logging.getLogger(__name__)

ISSUER_SUBJECT_CONSTRAINT = "uq_user_logins_issuer_subject"


def is_issuer_subject_conflict(error: IntegrityError) -> bool:
    """
    Tell a duplicate (issuer, subject) apart from other integrity errors.

    MySQL and PostgreSQL name the violated constraint; SQLite lists its columns.
    """
    message = str(error.orig)
    if ISSUER_SUBJECT_CONSTRAINT in message:
        return True
    return "user_logins.issuer" in message and "user_logins.provider_user_id" in message


class UserLoginStore:
    """Durable store for logins, backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_issuer_subject(self, issuer: str, subject: str) -> Optional[UserLogin]:
        """Return the login for (issuer, subject) with its MasterUser loaded, or None."""
        try:
            return (
                self.db.query(UserLogin)
                .options(joinedload(UserLogin.master_user))
                .filter(UserLogin.issuer == issuer, UserLogin.provider_user_id == subject)
                .first()
            )
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailable(str(e)) from e

    def insert_user_with_login(self, master_user: MasterUser, login: UserLogin) -> None:
        """
        Persist a MasterUser and its first login as one atomic unit.

        A duplicate (issuer, subject) raises StoreConflict. Any other integrity
        error (NOT NULL, length) is a data bug and propagates as IntegrityError.
        """
        login.master_user = master_user
        self.db.add(master_user)
        self.db.add(login)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_issuer_subject_conflict(e):
                raise StoreConflict(str(e.orig)) from e
            raise
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailable(str(e)) from e


class IdentityResolver:
    """Maps an inbound principal to its canonical MasterUser."""

    def __init__(self, store: UserLoginStore, provider: Optional[str] = None):
        self.store = store
        self.provider = provider or settings.OIDC_PROVIDER_NAME

    def resolve(
        self,
        issuer: Optional[str],
        subject: Optional[str],
        email: Optional[str] = None,
        display_name: str = ""
    ) -> MasterUser:
        """
        Return the MasterUser for (issuer, subject), creating it on first contact.

        Issuer and subject are matched exactly as given. Email and display name
        are only recorded when the login is created; later calls never update them.

        Raises:
            MissingClaim: issuer or subject is empty. Nothing is read or written.
            StoreUnavailable: the store failed; the caller may retry the request.
        """
        if not issuer:
            raise MissingClaim("iss")
        if not subject:
            raise MissingClaim("sub")

        login = self.store.find_by_issuer_subject(issuer, subject)
        if login is not None:
            return login.master_user

        master_user = MasterUser()
        login = UserLogin(
            provider=self.provider,
            provider_user_id=subject,
            issuer=issuer,
            email=email,
            display_name=display_name or "",
        )
        try:
            self.store.insert_user_with_login(master_user, login)
        except StoreConflict:
            logger.warning(f"Concurrent first login for subject '{subject}' at {issuer}; re-reading winner")
            winner = self.store.find_by_issuer_subject(issuer, subject)
            if winner is None:
                raise
            return winner.master_user

        logger.info(f"Provisioned user {master_user.id} for subject '{subject}' at {issuer}")
        return master_user


def get_identity_resolver(db: Session) -> IdentityResolver:
    """Build a resolver bound to a request's session."""
    return IdentityResolver(UserLoginStore(db))
