"""Database configuration and session management utilities."""
from __future__ import annotations

import contextlib
import logging
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import DDL, create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from registrar.config import DATABASE_URL, PAYMENT_CONFIRMATION_THRESHOLD, SQLALCHEMY_ECHO

LOGGER = logging.getLogger(__name__)

DATABASE_PRAGMA = "PRAGMA foreign_keys = ON"

STUDENT_COURSE_VIEW = "student_course_view"
STUDENT_COURSE_VIEW_SELECT = """
SELECT
    s.id AS student_id,
    s.first_name || ' ' || s.last_name AS student_name,
    c.name AS course_name,
    b.name AS batch_name,
    r.registration_date AS registration_date,
    r.status AS status
FROM students s
JOIN registrations r ON s.id = r.student_id
JOIN batches b ON r.batch_id = b.id
JOIN courses c ON b.course_id = c.id
"""

PAYMENT_TRIGGER = "trg_registrations_confirm_payment"

# SQLite cannot assign NEW in a trigger, so the row is corrected after the write.
SQLITE_PAYMENT_TRIGGERS = tuple(
    f"""
CREATE TRIGGER IF NOT EXISTS {PAYMENT_TRIGGER}_{operation}
AFTER {operation.upper()} ON registrations
FOR EACH ROW
WHEN NEW.payment > {PAYMENT_CONFIRMATION_THRESHOLD} AND NEW.status <> 'Confirmed'
BEGIN
    UPDATE registrations SET status = 'Confirmed' WHERE id = NEW.id;
END
"""
    for operation in ("insert", "update")
)

POSTGRESQL_PAYMENT_TRIGGERS = (
    f"""
CREATE OR REPLACE FUNCTION confirm_paid_registration()
RETURNS TRIGGER AS $$
BEGIN
    IF NEW.payment > {PAYMENT_CONFIRMATION_THRESHOLD} THEN
        NEW.status := 'Confirmed';
    END IF;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
""",
    f"DROP TRIGGER IF EXISTS {PAYMENT_TRIGGER} ON registrations",
    f"""
CREATE TRIGGER {PAYMENT_TRIGGER}
    BEFORE INSERT OR UPDATE ON registrations
    FOR EACH ROW
    EXECUTE FUNCTION confirm_paid_registration()
""",
)
POSTGRESQL_PAYMENT_FUNCTION_DROP = "DROP FUNCTION IF EXISTS confirm_paid_registration()"

_PAYMENT_TRIGGERS = {
    "sqlite": SQLITE_PAYMENT_TRIGGERS,
    "postgresql": POSTGRESQL_PAYMENT_TRIGGERS,
}


def payment_trigger_statements(dialect_name: str) -> tuple[str, ...]:
    """Return the DDL installing the payment confirmation trigger.

    Dialects without an entry get no trigger; ORM writes still go through the
    ``Registration`` flush hook.
    """
    return _PAYMENT_TRIGGERS.get(dialect_name, ())


def _install_sqlite_hooks(target: Engine) -> None:
    @event.listens_for(target, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        # pysqlite must not issue its own BEGIN, otherwise SAVEPOINT breaks.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute(DATABASE_PRAGMA)
        cursor.close()

    @event.listens_for(target, "begin")
    def _on_begin(conn) -> None:
        # Writers are serialized from the start of the transaction.
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine with the pragmas and transaction handling the schema relies on."""

    new_engine = create_engine(url, future=True, echo=echo)
    if new_engine.dialect.name == "sqlite":
        _install_sqlite_hooks(new_engine)
    return new_engine


engine = create_db_engine(DATABASE_URL, echo=SQLALCHEMY_ECHO)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _view_missing(ddl, target, bind, **kw) -> bool:
    return STUDENT_COURSE_VIEW not in inspect(bind).get_view_names()


event.listen(
    Base.metadata,
    "after_create",
    DDL(f"CREATE VIEW {STUDENT_COURSE_VIEW} AS {STUDENT_COURSE_VIEW_SELECT}").execute_if(
        callable_=_view_missing
    ),
)
event.listen(Base.metadata, "before_drop", DDL(f"DROP VIEW IF EXISTS {STUDENT_COURSE_VIEW}"))

for _dialect, _statements in _PAYMENT_TRIGGERS.items():
    for _statement in _statements:
        event.listen(Base.metadata, "after_create", DDL(_statement).execute_if(dialect=_dialect))
# Triggers go with their table; the PostgreSQL function does not.
event.listen(
    Base.metadata,
    "after_drop",
    DDL(POSTGRESQL_PAYMENT_FUNCTION_DROP).execute_if(dialect="postgresql"),
)


def init_db(reset: bool = False, bind: Engine | None = None) -> None:
    """Create tables, indexes, the student course view and the payment trigger.

    With ``reset`` the existing schema is torn down first.
    """
    from registrar.db import models  # noqa: F401

    target = bind or engine
    if reset:
        LOGGER.info("Dropping registrar schema on %s", target.url)
        Base.metadata.drop_all(bind=target)
    Base.metadata.create_all(bind=target)
    LOGGER.info("Registrar schema ready on %s", target.url)


@contextlib.contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "DATABASE_URL",
    "PAYMENT_TRIGGER",
    "STUDENT_COURSE_VIEW",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_session",
    "init_db",
    "payment_trigger_statements",
    "utcnow",
]
