from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from typing import Iterator
import asyncio
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_options(database_url: str) -> dict:
    """Pool and driver options for the configured backend"""
    if database_url.startswith("sqlite"):
        # SQLite connections are shared with FastAPI's worker threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "connect_args": {
            "connect_timeout": 5,  # 5 second connection timeout
        },
        "pool_timeout": 10,  # 10 second timeout for getting a connection from pool
    }


class Database:
    """Store handle owning the engine and the session factory.

    Created once at startup and published on ``app.state.db``; request
    handlers receive sessions from it through the ``get_db`` dependency.
    """

    def __init__(self, database_url: str, engine: Engine = None):
        self.database_url = database_url
        self.engine = engine or create_engine(database_url, **_engine_options(database_url))
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def display_url(self) -> str:
        """Database location without credentials, for logging"""
        return self.engine.url.render_as_string(hide_password=True)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> None:
        """Execute a trivial query; raises if the database is unreachable"""
        with self.engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()

    async def wait_until_ready(self, max_retries: int = 30, retry_delay: float = 2) -> bool:
        """Wait for database to be available with retry logic"""
        logger.info(f"Waiting for database connection to {self.display_url}...")

        for attempt in range(1, max_retries + 1):
            try:
                await asyncio.to_thread(self.ping)
                logger.info("Database connection successful")
                return True
            except Exception as e:
                if attempt < max_retries:
                    logger.warning(f"Database connection attempt {attempt}/{max_retries} failed: {e}. Retrying in {retry_delay}s...")
                    await asyncio.sleep(retry_delay)
                else:
                    logger.error(f"Database connection failed after {max_retries} attempts: {e}")
                    raise
        return False

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session"""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
