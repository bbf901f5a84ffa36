import logging
import time
from functools import wraps

from flask import current_app
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from models import db

logger = logging.getLogger(__name__)


def is_transient_db_error(exc: Exception) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def with_db_retry(fn):
    """
    Retry ``fn`` on transient database errors with a fixed delay.
    Attempts and delay come from DB_RETRY_ATTEMPTS / DB_RETRY_DELAY_SECONDS.
    Anything else (including BookingError rejections) propagates on the first attempt.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        attempts = max(int(current_app.config.get("DB_RETRY_ATTEMPTS", 3)), 1)
        delay = current_app.config.get("DB_RETRY_DELAY_SECONDS", 1.0)

        for attempt in range(1, attempts + 1):
            try:
                return fn(*args, **kwargs)
            except DBAPIError as exc:
                db.session.rollback()
                if not is_transient_db_error(exc):
                    raise
                if attempt == attempts:
                    logger.error("%s failed after %d attempts: %s", fn.__name__, attempts, exc)
                    raise
                logger.warning("%s attempt %d/%d failed: %s", fn.__name__, attempt, attempts, exc)
                if delay:
                    time.sleep(delay)
    return wrapper
