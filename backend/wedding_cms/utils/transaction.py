from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from wedding_cms.extensions import db
from wedding_cms.domain.exceptions import BackendError


@contextmanager
def backend_errors():
    """Translate database failures on reads into BackendError."""
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        raise BackendError(f"Database request failed: {exc.__class__.__name__}") from exc


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    IntegrityError is re-raised as-is so callers can map constraint
    violations to a domain conflict.
    """
    try:
        with backend_errors():
            yield
            db.session.commit()
    except Exception:
        db.session.rollback()
        raise
