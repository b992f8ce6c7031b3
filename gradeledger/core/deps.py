# /gradeledger/core/deps.py

"""
Request dependencies shared by the routers: the signed-in session and the
caller's workspace.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from .errors import NotAuthenticatedError
from .security import decode_access_token
from ..models.user_model import SessionContext
from ..services.database_service import DatabaseService, get_db_service
from ..services.workspace_service import StudentWorkspace

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_session(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> SessionContext:
    try:
        owner_id = decode_access_token(token)
    except NotAuthenticatedError as e:
        raise _unauthorized(str(e))

    user = db.get_user_by_id(owner_id)
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise _unauthorized("Inactive user")
    return SessionContext(owner_id=user.id, email=user.email, access_token=token)


def get_workspace(
    request: Request,
    session: SessionContext = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
) -> StudentWorkspace:
    """The caller's workspace, loaded from the remote store on first use."""
    return request.app.state.workspaces.get(session).ensure_loaded(db)
