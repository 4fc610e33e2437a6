"""
Session and statement helpers shared by the SQL repositories.

Responsibilities:
- Scope one session per repository call.
- Emit dialect-specific INSERT .. ON CONFLICT DO NOTHING.

Non-Responsibilities:
- No business logic.

Invariant:
Repositories must not encode domain decisions.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from ..exceptions import RepositoryError
from ..retry import exponential_backoff, is_transient_error

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

# Applied to every repository call that touches the database.
retry_transient = exponential_backoff(
    max_retries=3,
    base_delay=0.1,
    exceptions=(OperationalError,),
    should_retry=is_transient_error,
)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope: commit on success, roll back on error."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def insert_ignore(session: Session, model, rows: List[Dict[str, Any]], conflict_columns: List[str]) -> int:
    """
    Insert rows, silently skipping any that violate the unique key.

    Returns:
        Number of rows actually inserted, as reported by the driver
    """
    if not rows:
        return 0
    dialect = session.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise RepositoryError(f"Insert-ignore is not supported on dialect '{dialect}'")
    stmt = insert(model).values(rows).on_conflict_do_nothing(index_elements=conflict_columns)
    result = session.execute(stmt)
    return result.rowcount
