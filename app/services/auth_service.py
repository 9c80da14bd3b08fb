# ------------------------------------------
# Session service functions
# - sign_up() : Creates a user with an argon2 password hash and opens a session
# - sign_in() : Verifies credentials (non-admin accounts only) and opens a session
# - sign_out() / sign_out_all() : Delete one session or every session of a user
# - purge_expired_sessions() : Housekeeping for sessions past their expiry
# Only the argon2 hash of an issued token is persisted; the raw token is returned once
# ------------------------------------------

import logging
import uuid
from datetime import datetime
from functools import lru_cache
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.config import SESSION_TTL
from app.core.errors import AppError, ErrorKind
from app.core.security import TokenCodec, get_password_hash, verify_password, hash_session_token
from app.db.database import utcnow
from app.models.user import User, UserSession, UserRole

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"

@lru_cache
def _dummy_password_hash() -> str:
    return get_password_hash(uuid.uuid4().hex)

def _create_session(db: Session, codec: TokenCodec, user: User) -> str:
    session_id = str(uuid.uuid4())
    token = codec.issue(user_id=user.id, session_id=session_id, role=user.role.value)

    db.add(UserSession(
        id=session_id,
        user_id=user.id,
        token_hash=hash_session_token(token),
        expires_at=utcnow() + SESSION_TTL
    ))
    db.commit()

    logger.info(f"Session {session_id} opened for user {user.id}")
    return token

def sign_up(db: Session, codec: TokenCodec, name: str, email: str, password: str) -> str:
    email = email.strip().lower()

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise AppError(ErrorKind.conflict, "Email already registered")

    new_user = User(
        id=str(uuid.uuid4()),
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=UserRole.default
    )
    db.add(new_user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise AppError(ErrorKind.conflict, "Email already registered")

    logger.info(f"Registered user {new_user.id}")
    return _create_session(db, codec, new_user)

def sign_in(db: Session, codec: TokenCodec, email: str, password: str) -> str:
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user:
        # Same argon2 work as a wrong password so unknown emails are not faster
        verify_password(password, _dummy_password_hash())
        raise AppError(ErrorKind.unauthorized, INVALID_CREDENTIALS)

    if user.role == UserRole.admin:
        logger.warning(f"Admin account {user.id} attempted to sign in")
        raise AppError(ErrorKind.forbidden, "Admins are not allowed to sign in")

    if not verify_password(password, user.password_hash):
        raise AppError(ErrorKind.unauthorized, INVALID_CREDENTIALS)

    return _create_session(db, codec, user)

def sign_out(db: Session, session_id: str) -> None:
    db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Session {session_id} closed")

def sign_out_all(db: Session, user_id: str) -> int:
    deleted = db.query(UserSession).filter(UserSession.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Closed {deleted} sessions for user {user_id}")
    return deleted

def purge_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
    cutoff = now or utcnow()
    deleted = db.query(UserSession).filter(UserSession.expires_at <= cutoff).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Purged {deleted} expired sessions")
    return deleted
