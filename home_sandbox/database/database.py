import os
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker
from loguru import logger
from home_sandbox.config import DATABASE_URL
from .base import Base  # Use shared Base definition


def _ensure_sqlite_dir(url: str):
    """Create the directory holding a file based SQLite database"""
    if url.startswith("sqlite:///") and ":memory:" not in url:
        db_dir = os.path.dirname(url[len("sqlite:///"):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True, mode=0o755)  # 0o755 = rwxr-xr-x
            logger.info(f"Database directory ensured: {db_dir}")


_ensure_sqlite_dir(DATABASE_URL)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Initialize database tables"""
    bind = bind or engine
    logger.info("init_db: Initializing database tables...")
    try:
        # Import all models to ensure proper registration
        from home_sandbox.models import Device, Preset  # noqa: F401

        Base.metadata.create_all(bind=bind)
        tables = set(inspect(bind).get_table_names())
        missing = {'devices', 'presets'} - tables
        if missing:
            logger.error(f"Schema check failed. Missing tables: {missing}")
            raise RuntimeError("Database schema incomplete")
        logger.info("init_db: Database tables created")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def get_db():
    """Database session dependency"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def shutdown_db():
    """Shutdown database connection"""
    try:
        # Close the engine connection pool
        engine.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {str(e)}")
