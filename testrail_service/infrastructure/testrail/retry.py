"""
Retry on rate limiting (HTTP 429) for POST requests.
"""
import logging
import math
import time
from typing import Callable, Optional

from testrail_service.core.interfaces.transport import TransportResponse

logger = logging.getLogger(__name__)

RATE_LIMITED = 429
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_RETRY_AFTER_SECONDS = 5


class RetryPolicy:
    """Re-sends a request while TestRail answers 429, waiting ``Retry-After``."""

    def __init__(
        self,
        sleep: Callable[[float], None] = time.sleep,
        default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS
    ):
        """Initialize retry policy.

        Args:
            sleep: Blocking sleep taking seconds
            default_retry_after: Delay in seconds when a 429 has no usable Retry-After
        """
        self._sleep = sleep
        self._default_retry_after = default_retry_after

    def retry_delay_ms(self, response: TransportResponse) -> int:
        """Delay requested by a 429 response, in milliseconds."""
        raw = response.header('Retry-After')
        try:
            seconds = float(raw)
        except (TypeError, ValueError):
            seconds = None
        if seconds is None or not math.isfinite(seconds):
            logger.warning(
                "429 without a usable Retry-After header (%r), waiting %ss",
                raw, self._default_retry_after
            )
            seconds = self._default_retry_after
        return int(max(seconds, 0) * 1000)

    def execute(
        self,
        send: Callable[[], TransportResponse],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS
    ) -> TransportResponse:
        """Send, retrying on 429 up to ``max_attempts`` attempts in total.

        The last response is returned as-is, so a 429 that outlasts the
        attempts reaches the caller unchanged.

        Args:
            send: Performs one attempt
            max_attempts: Total number of attempts (at least one is made)

        Returns:
            The last TransportResponse received
        """
        response: Optional[TransportResponse] = None
        delay_ms = 0
        attempts = max(1, max_attempts)

        for attempt in range(attempts):
            if attempt > 0:
                logger.warning("retry %d/%d", attempt, attempts)
                logger.debug("Sleeping for retry: %dms", delay_ms)
                self._sleep(delay_ms / 1000)

            response = send()
            if response.status_code != RATE_LIMITED:
                break
            logger.warning("429 for POST")
            if attempt + 1 < attempts:
                delay_ms = self.retry_delay_ms(response)

        return response
