# /gradeledger/services/user_service.py

"""
Account business logic: sign-up, credential checks and session creation.
Routers translate the errors raised here into HTTP responses.
"""

import logging
import uuid
from typing import Optional

from ..core import security
from ..core.errors import NotAuthenticatedError, RecordValidationError
from ..db.models.user_models import User as UserModel
from ..models.user_model import UserCreate, SessionContext
from .database_service import DatabaseService
from .workspace_service import WorkspaceRegistry

logger = logging.getLogger(__name__)


def create_user(db: DatabaseService, user: UserCreate) -> UserModel:
    """Registers a new account. Raises RecordValidationError if the email is taken."""
    if db.get_user_by_email(user.email) is not None:
        raise RecordValidationError("An account with this email already exists.", duplicate=True)

    new_user = db.add_user({
        "id": str(uuid.uuid4()),
        "email": user.email,
        "password_hash": security.get_password_hash(user.password),
        "is_active": True,
    })
    logger.info("Registered user %s", new_user.id)
    return new_user


def authenticate_user(db: DatabaseService, email: str, password: str) -> Optional[UserModel]:
    user = db.get_user_by_email(email.strip().lower())
    if user is None or not user.is_active:
        return None
    if not security.verify_password(password, user.password_hash):
        return None
    return user


def sign_in(db: DatabaseService, email: str, password: str) -> SessionContext:
    user = authenticate_user(db, email, password)
    if user is None:
        raise NotAuthenticatedError("Incorrect email or password")
    return SessionContext(
        owner_id=user.id,
        email=user.email,
        access_token=security.create_access_token(subject=user.id),
    )


def sign_out(registry: WorkspaceRegistry, session: SessionContext) -> None:
    """Drops the owner's in-memory workspace. Stored data is untouched."""
    registry.discard(session)
    logger.info("Signed out user %s", session.owner_id)
