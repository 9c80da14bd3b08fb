#!/usr/bin/env python3
"""
Schema Setup
============

Creates the users, sessions, clients and timesheet_entries tables. Clients
are managed outside the API, so names passed with --client are inserted
(existing names are left alone).

Usage:
    python create_tables.py
    python create_tables.py --client "Acme Holdings" --client "Harbour Works"
"""

import argparse
import logging
from typing import List, Sequence
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from app.db.database import Base, SessionLocal, engine
from app.models import Client

logger = logging.getLogger(__name__)

def create_tables(bind: Engine = engine) -> List[str]:
    existing = set(inspect(bind).get_table_names())
    Base.metadata.create_all(bind=bind)
    created = [name for name in Base.metadata.tables if name not in existing]
    logger.info(f"Created tables: {', '.join(created) or 'none'}")
    return created

def seed_clients(db: Session, names: Sequence[str]) -> List[Client]:
    wanted = {name.strip() for name in names if name.strip()}
    known = {c.name for c in db.query(Client).filter(Client.name.in_(wanted)).all()}

    added = [Client(name=name) for name in sorted(wanted - known)]
    db.add_all(added)
    db.commit()

    logger.info(f"Added {len(added)} clients, {len(known)} already present")
    return added

def main(argv=None):
    parser = argparse.ArgumentParser(description="Create database tables and optionally seed clients.")
    parser.add_argument("--client", action="append", default=[], help="client name to insert (repeatable)")
    args = parser.parse_args(argv)

    create_tables()
    if args.client:
        with SessionLocal() as db:
            seed_clients(db, args.client)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
