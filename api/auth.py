# ------------------------------------------
# Authentication API routes (FastAPI)
# - /auth/sign-up      : Registers a user and opens a session
# - /auth/sign-in      : Authenticates a non-admin user and opens a session
# - /auth/sign-out     : Deletes the current session
# - /auth/sign-out-all : Deletes every session of the current user
# - /auth/current-user : Returns the current user without the password hash
# Uses dependency-injected DB session via get_db()
# ------------------------------------------

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.schemas.base import MessageResponse
from app.schemas.user import SignUpRequest, SignInRequest, SessionTokenResponse, UserProfile
from app.services.auth_service import sign_up, sign_in, sign_out, sign_out_all
from app.core.security import AuthContext, TokenCodec, get_current_session, get_token_codec
from app.db.database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/sign-up", response_model=SessionTokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user: SignUpRequest,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec)
):
    token = sign_up(db, codec, user.name, user.email, user.password)
    return SessionTokenResponse(session_token=token)

@router.post("/sign-in", response_model=SessionTokenResponse, status_code=status.HTTP_201_CREATED)
def login(
    user: SignInRequest,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec)
):
    token = sign_in(db, codec, user.email, user.password)
    return SessionTokenResponse(session_token=token)

@router.post("/sign-out", response_model=MessageResponse)
def logout(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_session)
):
    sign_out(db, auth.session.id)
    return {"message": "Successfully signed out."}

@router.post("/sign-out-all", response_model=MessageResponse)
def logout_everywhere(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_session)
):
    sign_out_all(db, auth.user.id)
    return {"message": "Successfully signed out everywhere."}

@router.get("/current-user", response_model=UserProfile)
def current_user(auth: AuthContext = Depends(get_current_session)):
    return auth.user
