from passlib.context import CryptContext
from jose import jwt, JWTError, ExpiredSignatureError
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.core.config import Settings, get_settings, ALGORITHM, SESSION_TTL
from app.core.errors import AppError, ErrorKind
from app.db.database import get_db, utcnow
from app.models.user import User, UserSession, UserRole
import logging

logger = logging.getLogger(__name__)

# Issued tokens are longer than bcrypt's 72 byte limit, so both secrets use argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
security = HTTPBearer(auto_error=False)

REQUIRED_CLAIMS = ("sub", "sid", "role", "exp", "iat")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def hash_session_token(token: str) -> str:
    return pwd_context.hash(token)

def verify_session_token(token: str, token_hash: str) -> bool:
    try:
        return pwd_context.verify(token, token_hash)
    except ValueError:
        logger.error("Stored session token hash is not a recognised argon2 hash")
        return False


class TokenCodec:
    """Signs and verifies the HS256 session tokens handed to clients.

    A token carries the user id (``sub``), the session id (``sid``) and the
    role it was issued for, plus ``iat``/``exp``. Verification never raises:
    anything that is not a correctly signed, unexpired HS256 token yields None.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.secret_key

    def issue(self, user_id: str, session_id: str, role: str) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": user_id,
            "sid": session_id,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + SESSION_TTL).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[dict]:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            logger.info("Rejected expired session token")
            return None
        except JWTError as e:
            logger.info(f"Rejected session token: {type(e).__name__}")
            return None


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec(settings)


@dataclass(frozen=True)
class AuthContext:
    user: User
    session: UserSession


def _unauthorized(message: str) -> AppError:
    logger.warning(f"Authentication rejected: {message}")
    return AppError(ErrorKind.unauthorized, message)

def _forbidden(message: str) -> AppError:
    logger.warning(f"Authorization rejected: {message}")
    return AppError(ErrorKind.forbidden, message)

def authenticate_token(db: Session, codec: TokenCodec, token: Optional[str]) -> AuthContext:
    if not token:
        raise _unauthorized("Missing session token")

    payload = codec.verify(token)
    if payload is None:
        raise _unauthorized("Invalid or expired session token")

    if any(not payload.get(claim) for claim in REQUIRED_CLAIMS):
        raise _unauthorized("Malformed session token data")

    if datetime.now(timezone.utc).timestamp() > payload["exp"]:
        raise _unauthorized("Invalid or expired session token")

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if user is None:
        raise _unauthorized("User not found")

    if user.role.value != payload["role"]:
        raise _forbidden("User role mismatch")

    if user.role == UserRole.admin:
        raise _forbidden("Admins are not allowed")

    session = db.query(UserSession).filter(
        UserSession.id == payload["sid"],
        UserSession.user_id == payload["sub"]
    ).first()
    if session is None:
        raise _unauthorized("Session not found")

    if utcnow() > session.expires_at:
        raise _unauthorized("Session is expired")

    if not verify_session_token(token, session.token_hash):
        raise _unauthorized("Incorrect session token")

    return AuthContext(user=user, session=session)

def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec)
) -> AuthContext:
    token = credentials.credentials.strip() if credentials else None
    return authenticate_token(db, codec, token)

def get_current_user(auth: AuthContext = Depends(get_current_session)) -> User:
    return auth.user
