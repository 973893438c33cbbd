# =============================================================================
# File: shedsite/db.py
# Purpose: SQLAlchemy engine + session factory for the site database.
# =============================================================================
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Get DATABASE_URL from env or fallback
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///shedsite.db")

engine = create_engine(DATABASE_URL, echo=False, future=True)

class Base(DeclarativeBase):
    """Declarative base for ORM models."""
    pass

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

def init_db(database_url: str | None = None):
    """Create all tables if they don't exist.

    When a database_url is given (app config, tests), the engine is rebuilt
    and the session factory rebound to it.
    """
    global engine
    if database_url and database_url != engine.url.render_as_string(hide_password=False):
        engine.dispose()
        engine = create_engine(database_url, echo=False, future=True)
        SessionLocal.configure(bind=engine)

    # Import models so metadata sees them before create_all
    from . import models  # noqa: F401
    Base.metadata.create_all(engine)
    return engine
