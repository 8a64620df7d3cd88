# db/db_utils.py
"""
Database helpers - engine creation, sessions and dialect-aware upserts.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.dialects import postgresql, sqlite

from db.models import Base

logger = logging.getLogger(__name__)


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the configured database.

    SQLite in-memory URLs share one connection so every session sees the
    same database.
    """
    kwargs: Dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    logger.info(f"Database engine created ({engine.dialect.name})")
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Provide a transactional scope: commit on success, rollback on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all_tables(engine: Engine) -> None:
    """Create tracker tables if they do not exist."""
    Base.metadata.create_all(engine)
    logger.info("Tracker tables created successfully")


# UPSERT

def dialect_insert(session: Session, table_class):
    """Return the dialect-specific INSERT construct supporting ON CONFLICT."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table_class)
    if dialect == "sqlite":
        return sqlite.insert(table_class)
    raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'")


def upsert_row(
    session: Session,
    table_class,
    values: Dict[str, Any],
    conflict_columns: List[str],
    update_columns: Optional[List[str]] = None
) -> None:
    """
    Insert one row, updating the given columns when the conflict key exists.

    Args:
        session: Active session
        table_class: ORM model class
        values: Column values for the new row
        conflict_columns: Columns of the unique constraint
        update_columns: Columns refreshed on conflict (defaults to every
            non-key column in values)
    """
    if update_columns is None:
        update_columns = [c for c in values if c not in conflict_columns and c != "id"]

    stmt = dialect_insert(session, table_class).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=conflict_columns,
        set_={col: stmt.excluded[col] for col in update_columns},
    )
    session.execute(stmt)
