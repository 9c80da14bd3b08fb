from .user import User, UserSession, UserRole
from .timesheet import Client, TimesheetEntry, TimesheetEntryStatus

__all__ = [
    "User", "UserSession", "UserRole",
    "Client", "TimesheetEntry", "TimesheetEntryStatus",
]
