import logging

from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from storefront.exceptions import TransactionFailure
from storefront.utils.logging import get_logger

log = get_logger(__name__)


def transaction_retry():
    """
    Retry a transactional unit once after a TransactionFailure. Only safe for
    units wrapped in smart_transaction, which roll back before the error escapes.
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(2),
        wait=wait_fixed(0.1),
        retry=retry_if_exception_type(TransactionFailure),
        before_sleep=before_sleep_log(log, logging.WARNING),
    )
