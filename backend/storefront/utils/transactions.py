from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, SessionTransactionOrigin

from storefront.exceptions import TransactionFailure


@contextmanager
def _adopt_autobegun(session: Session) -> Iterator:
    # an earlier query autobegan this transaction; nobody else will commit it
    try:
        yield
        session.commit()
    except BaseException:
        session.rollback()
        raise


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Context manager that runs a unit of work in a transaction on the given Session.

    - No transaction active: begin one, commit on exit.
    - Transaction autobegun by a previous query: adopt it, commit on exit.
    - Transaction explicitly begun by the caller: start a nested SAVEPOINT
      (begin_nested); the caller commits the outer one.

    Any exception rolls the unit back. Store-level failures other than
    integrity violations are re-raised as TransactionFailure.
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    tx = session.get_transaction()
    if tx is None:
        cm = session.begin()
    elif tx.origin is SessionTransactionOrigin.AUTOBEGIN:
        cm = _adopt_autobegun(session)
    else:
        cm = session.begin_nested()
    try:
        with cm:
            yield
    except IntegrityError:
        raise
    except DBAPIError as e:
        raise TransactionFailure(f"Data store failure: {e.orig}") from e
