#!/usr/bin/env python3
"""
Expired Session Cleanup
=======================

Sessions past their expiry are already rejected by the auth guard; this
script removes their rows so the sessions table does not grow unbounded.

Usage:
    python purge_sessions.py
"""

import logging
from app.db.database import SessionLocal
from app.services.auth_service import purge_expired_sessions

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    with SessionLocal() as db:
        deleted = purge_expired_sessions(db)
    logger.info(f"Removed {deleted} expired sessions")

if __name__ == "__main__":
    main()
