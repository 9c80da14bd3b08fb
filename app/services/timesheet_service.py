# ------------------------------------------
# Timesheet service functions
# - normalize_interval() : Pins date/start/end onto one calendar day, minute precision
# - compute_total_hours() : Interval length in hours, 2 decimals
# - add_entry() : Overlap-checked insert for the authenticated user
# - owner_lock_query() : SELECT ... FOR UPDATE on the owning user row
# - list_entries() : A user's entries with their client, newest day first
# Dates are computed in ENTRY_TIMEZONE and stored as naive UTC
# ------------------------------------------

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Query, Session, joinedload
from app.core.config import ENTRY_TIMEZONE
from app.core.errors import AppError, ErrorKind
from app.models.timesheet import Client, TimesheetEntry, TimesheetEntryStatus
from app.models.user import User

logger = logging.getLogger(__name__)

def _to_storage(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)

def normalize_interval(date: datetime, start_time: datetime, end_time: datetime) -> Tuple[datetime, datetime, datetime]:
    tz = ZoneInfo(ENTRY_TIMEZONE)
    day = date.astimezone(tz).replace(hour=0, minute=0, second=0, microsecond=0)

    def _on_day(value: datetime) -> datetime:
        local = value.astimezone(tz)
        return local.replace(year=day.year, month=day.month, day=day.day, second=0, microsecond=0)

    return _to_storage(day), _to_storage(_on_day(start_time)), _to_storage(_on_day(end_time))

def compute_total_hours(start_time: datetime, end_time: datetime) -> float:
    return round((end_time - start_time).total_seconds() / 3600, 2)

def list_entries(db: Session, user: User) -> List[TimesheetEntry]:
    return (
        db.query(TimesheetEntry)
        .options(joinedload(TimesheetEntry.client))
        .filter(TimesheetEntry.user_id == user.id)
        .order_by(TimesheetEntry.date.desc(), TimesheetEntry.start_time.desc())
        .all()
    )

def owner_lock_query(db: Session, user_id: str) -> Query:
    """Row lock on the owning user; serializes overlap check and insert per user where supported."""
    return db.query(User).filter(User.id == user_id).with_for_update()

def add_entry(
    db: Session,
    user: User,
    client_id: str,
    date: datetime,
    start_time: datetime,
    end_time: datetime,
    position: str,
    site_address: str,
    remarks: Optional[str] = None
) -> TimesheetEntry:
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise AppError(ErrorKind.not_found, "Client not found")

    day, start, end = normalize_interval(date, start_time, end_time)

    owner_lock_query(db, user.id).first()

    conflicting_entry = db.query(TimesheetEntry).filter(
        TimesheetEntry.user_id == user.id,
        TimesheetEntry.date == day,
        TimesheetEntry.start_time < end,
        TimesheetEntry.end_time > start
    ).first()
    if conflicting_entry:
        db.rollback()
        logger.warning(f"Entry for user {user.id} on {day.date()} overlaps entry {conflicting_entry.id}")
        raise AppError(ErrorKind.conflict, "Selected time overlaps with an existing entry")

    entry = TimesheetEntry(
        user_id=user.id,
        client_id=client.id,
        date=day,
        start_time=start,
        end_time=end,
        total_hrs=compute_total_hours(start, end),
        remarks=remarks,
        position=position,
        site_address=site_address,
        status=TimesheetEntryStatus.pending
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    logger.info(f"Timesheet entry {entry.id} added for user {user.id}: {entry.total_hrs}h")
    return entry
