"""Record store connection and session management."""

from collections.abc import Generator

from psycopg2 import errors as pg_errors
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker

from userhub.core.config import Settings, settings

# Postgres "query_canceled", raised when statement_timeout expires.
QUERY_CANCELED_SQLSTATE = "57014"


def build_engine(config: Settings) -> Engine:
    """Create the engine; on Postgres every statement gets the configured deadline."""
    connect_args: dict[str, str] = {}
    if not config.DATABASE_URL.startswith("sqlite"):
        connect_args["options"] = f"-c statement_timeout={config.DB_STATEMENT_TIMEOUT_MS}"
    return create_engine(
        config.DATABASE_URL,
        pool_pre_ping=True,
        echo=config.DEBUG,
        connect_args=connect_args,
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
    except Exception:
        return False


def is_statement_timeout(exc: BaseException) -> bool:
    """True if a driver error means the statement deadline expired."""
    if not isinstance(exc, DBAPIError):
        return False
    if isinstance(exc.orig, pg_errors.QueryCanceled):
        return True
    # psycopg 3 exposes SQLSTATE as .sqlstate, psycopg2 as .pgcode
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    return sqlstate == QUERY_CANCELED_SQLSTATE
