"""
Timesheet Data Models
=====================================
SQLAlchemy ORM models for client reference data and time entries.

Models:
- Client: Reference list of clients an entry can be booked against
- TimesheetEntry: One worked interval of a user on a single calendar day

Entries store the normalized day (`date`) alongside the interval so that
overlap checks for a user only ever look at a single day.
"""

from sqlalchemy import Column, String, Text, Enum, ForeignKey, TIMESTAMP, Numeric, Index
from sqlalchemy.orm import relationship
import enum
import uuid
from app.db.database import Base, utcnow

class TimesheetEntryStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class Client(Base):
    __tablename__ = "clients"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, onupdate=utcnow)

    timesheet_entries = relationship("TimesheetEntry", back_populates="client", cascade="all, delete-orphan", passive_deletes=True)

class TimesheetEntry(Base):
    __tablename__ = "timesheet_entries"
    __table_args__ = (
        Index("ix_timesheet_entries_user_date", "user_id", "date"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(TIMESTAMP, nullable=False)
    start_time = Column(TIMESTAMP, nullable=False)
    end_time = Column(TIMESTAMP, nullable=False)
    remarks = Column(Text, nullable=True)
    total_hrs = Column(Numeric(4, 2, asdecimal=False), nullable=False)
    position = Column(Text, nullable=False)
    site_address = Column(Text, nullable=False)
    status = Column(Enum(TimesheetEntryStatus, name="timesheet_entries_status"), nullable=False, default=TimesheetEntryStatus.pending)
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="timesheet_entries")
    client = relationship("Client", back_populates="timesheet_entries")
