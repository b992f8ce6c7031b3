# /gradeledger/routers/auth_router.py

"""
Authentication endpoints:
- sign-up (`/signup`)
- login and token generation (`/token`, OAuth2 password flow)
- the current user's profile (`/me`)
- sign-out (`/signout`), which drops the caller's in-memory workspace
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from ..core.deps import get_current_session
from ..core.errors import NotAuthenticatedError, RecordValidationError
from ..models.user_model import User, UserCreate, Token, SessionContext
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
def sign_up(user_in: UserCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return user_service.create_user(db=db, user=user_in)
    except RecordValidationError as e:
        code = status.HTTP_409_CONFLICT if e.duplicate else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=str(e))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service),
):
    """The email goes in the OAuth2 `username` field."""
    try:
        session = user_service.sign_in(db, email=form_data.username, password=form_data.password)
    except NotAuthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=session.access_token, token_type="bearer")


@router.get("/me", response_model=User)
def read_current_user(
    session: SessionContext = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
):
    return db.get_user_by_id(session.owner_id)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(request: Request, session: SessionContext = Depends(get_current_session)):
    user_service.sign_out(request.app.state.workspaces, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
