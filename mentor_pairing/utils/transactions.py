# mentor_pairing/utils/transactions.py
import logging
import time
from typing import Callable, TypeVar
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.exc import OperationalError

from ..constants import ErrorMessages
from ..exceptions import TransientError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Errors meaning "someone else wrote first": re-run the whole unit against fresh rows
RETRYABLE_ERRORS = (StaleDataError, OperationalError)

def run_in_transaction(
    db: Session,
    work: Callable[[], T],
    max_attempts: int,
    backoff_seconds: float = 0.0,
    label: str = "transaction",
) -> T:
    """
    Runs ``work`` and commits it as one transaction.

    ``work`` must do all of its reads and checks itself so a retry re-validates
    against the rows as they are now. Business errors roll back and propagate
    untouched; conflicts are retried up to ``max_attempts`` and then surface as
    TransientError.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            result = work()
            db.commit()
            return result
        except RETRYABLE_ERRORS as e:
            db.rollback()
            if attempt >= max_attempts:
                logger.error(f"{label}: giving up after {attempt} conflicting attempts: {e}")
                raise TransientError(ErrorMessages.TRANSIENT) from e
            logger.warning(f"{label}: concurrent update detected on attempt {attempt}, retrying")
            if backoff_seconds:
                time.sleep(backoff_seconds * attempt)
        except Exception:
            db.rollback()
            raise
