# ------------------------------------------
# Database configuration for the application
# - Loads DATABASE_URL from env variables
# - Creates SQLAlchemy engine & session factory (SQLite URLs allowed for local runs)
# - Provides get_db() for FastAPI dependency injection
# - utcnow(): the naive-UTC convention every timestamp column uses
# ------------------------------------------

import os
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable not set")

# Sync routes run in a threadpool, so SQLite connections must cross threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def utcnow() -> datetime:
    # Timestamps are stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)
