"""Synchronous command processing with bounded retry.

Each command handler runs inside one Protean unit of work, so a command is the
atomic unit: it commits entirely or not at all. Transient store failures
(lost connections, optimistic-concurrency conflicts on an aggregate version)
are retried by re-running the whole unit of work with exponential backoff.
Validation, authorization and state-machine failures are deterministic and
propagate on the first attempt.
"""

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from storefront import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

TRANSIENT_ERRORS = (ExpectedVersionError, ConnectionError, TimeoutError)


def _log_retry(retry_state):
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying command after transient failure",
        attempt=retry_state.attempt_number,
        error=type(exc).__name__ if exc else None,
    )


def retrying(attempts=None):
    """Build the retry policy used around a unit of work."""
    return Retrying(
        stop=stop_after_attempt(attempts or settings.RETRY_ATTEMPTS),
        wait=wait_exponential_jitter(
            initial=settings.RETRY_INITIAL_WAIT,
            max=settings.RETRY_MAX_WAIT,
        ),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=_log_retry,
        reraise=True,
    )


def process(command, attempts=None):
    """Process a command synchronously and return the handler's result."""
    return retrying(attempts)(current_domain.process, command, asynchronous=False)
