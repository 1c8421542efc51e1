"""
Dev convenience: create the games/guesses tables if they don't exist.
Call this at startup in local/dev only
"""

from .db import engine, Base
from . import models  # noqa: F401  (registers the tables on Base.metadata)

def create_all():
    Base.metadata.create_all(bind=engine)
