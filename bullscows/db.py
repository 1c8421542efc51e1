"""
Single place to:
- Read DATABASE_URL from env
- Create a SQLAlchemy Engine (MySQL via PyMySQL in production, SQLite works too)
- Create a Session factory (SessionLocal) for per-request DB sessions
- Provide get_db() dependency for FastAPI routes
"""

import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

# 1) Load env vars from .env if present
load_dotenv()

# 2) Pull the connection string.
DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError(
        "DATABASE_URL is not set. Add it to your environment or a local .env (not committed)."
    )

# 3) Driver-specific connect args.
#    SQLite connections are used from FastAPI worker threads, not only the thread that opened them.
def connect_args_for(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

# 4) Create the SQLAlchemy Engine.
#    pool_pre_ping=True = auto-detect dead connections.
engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args_for(DATABASE_URL),
    pool_pre_ping=True,
    echo=False,
    future=True,
)

# 5) Session factory, one session per request.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

# 6) Base class for ORM models.
class Base(DeclarativeBase):
    pass

# 7) FastAPI dependency that yields a DB session for the duration of a request.
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
