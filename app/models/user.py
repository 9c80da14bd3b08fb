# ------------------------------------------
# SQLAlchemy credential and session models
# - User : registered account with argon2 password hash and role
# - UserSession : server-side session row bound to the hash of one issued token
# Sessions are deleted with their user (ON DELETE CASCADE)
# ------------------------------------------

from sqlalchemy import Column, String, TIMESTAMP, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum
import uuid
from app.db.database import Base, utcnow

class UserRole(str, enum.Enum):
    default = "default"
    admin = "admin"

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="users_roles"), nullable=False, default=UserRole.default)
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, onupdate=utcnow)

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    timesheet_entries = relationship("TimesheetEntry", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

class UserSession(Base):
    __tablename__ = "sessions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(Text, nullable=False, unique=True)
    expires_at = Column(TIMESTAMP, nullable=False)
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="sessions")
