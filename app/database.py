from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from supabase import create_client, Client
import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Database URLs
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pantry_pilot.db")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {},
    pool_pre_ping=True,
    pool_recycle=300,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Supabase client is only used to verify session tokens
supabase: Client = None

if SUPABASE_URL and SUPABASE_ANON_KEY:
    supabase = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_supabase() -> Client:
    """Get Supabase client for auth operations"""
    if not supabase:
        raise RuntimeError(
            "Supabase client not initialized. Check your environment variables."
        )
    return supabase


def init_db():
    """Initialize database tables"""
    # Register every model on Base.metadata before creating tables
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_db_connection() -> dict:
    """Check database connectivity"""
    status = {"sqlalchemy": False, "supabase": supabase is not None}

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        status["sqlalchemy"] = True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")

    return status
