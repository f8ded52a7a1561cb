# app/utils/retry.py
import logging

from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log
from sqlalchemy.exc import OperationalError

from app.utils.settings import DB_CONNECT_ATTEMPTS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def db_connect_retry(attempts: int = DB_CONNECT_ATTEMPTS):
    # only used while waiting for the database at startup, stores never retry
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception_type(OperationalError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
