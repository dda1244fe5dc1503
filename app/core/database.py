"""PostgreSQL connection, session management and startup connectivity check."""

import logging
import time
from collections.abc import Callable, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    connect_args={"connect_timeout": settings.DB_CONNECT_TIMEOUT_SEC},
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class DatabaseUnavailableError(Exception):
    """Raised when the database cannot be reached after all startup retries."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def wait_for_database(
    bind: Engine,
    retries: int,
    backoff_sec: float,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Ping the database up to `retries` times with linear backoff (attempt * backoff_sec).

    Raises DatabaseUnavailableError when every attempt fails; callers treat that as fatal.
    """
    last_error: SQLAlchemyError | None = None
    for attempt in range(1, retries + 1):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database reachable (attempt %s/%s)", attempt, retries)
            return
        except SQLAlchemyError as e:
            last_error = e
            if attempt == retries:
                break
            logger.warning(
                "Database ping attempt %s/%s failed; retrying in %.1fs",
                attempt,
                retries,
                attempt * backoff_sec,
            )
            sleep(attempt * backoff_sec)
    logger.error("Database unreachable after %s attempts: %s", retries, last_error)
    raise DatabaseUnavailableError(
        f"Database unreachable after {retries} attempts."
    ) from last_error
