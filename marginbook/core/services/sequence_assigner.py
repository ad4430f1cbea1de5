"""
Per-user gapless sequence numbering for receipts and invoices.

The store performs the atomic step (read the user's highest number and
insert with the next one inside one write transaction). This service
retries that step when a concurrent writer wins the race, with exponential
backoff, and gives up with a transient error after a bounded number of
attempts.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

from tenacity import (
    RetryCallState,
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from marginbook.config import get_logger
from marginbook.core.entities import RecordKind
from marginbook.core.exceptions import SequenceConflictError, SequenceExhaustedError

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PREFIXES = {
    RecordKind.RECEIPT: "RCPT",
    RecordKind.INVOICE: "INV",
}


def format_sequence_number(
    kind: RecordKind,
    number: int,
    width: int = 4,
    prefixes: dict[RecordKind, str] | None = None,
) -> str:
    """
    Display form of a sequence number, e.g. ``RCPT-0007`` or ``INV-0042``.

    Cosmetic only; the integer is what gets stored.
    """
    prefix = (prefixes or DEFAULT_PREFIXES)[kind]
    return f"{prefix}-{int(number):0{width}d}"


class SequenceAssigner:
    """
    Drives a store's read-max-then-insert step until it lands.

    Each retry re-runs the whole step, so the number is always recomputed
    from the current maximum.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        retry_delay: float = 0.05,
        retry_multiplier: float = 2.0,
    ):
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = max(0.0, retry_delay)
        self.retry_multiplier = retry_multiplier

    def _get_retry_decorator(self) -> Any:
        return retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                exp_base=self.retry_multiplier,
                min=self.retry_delay,
                max=self.retry_delay * (self.retry_multiplier ** self.max_attempts),
            ),
            retry=retry_if_exception_type(SequenceConflictError),
            before_sleep=self._log_retry,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "sequence_conflict_retry",
            attempt=retry_state.attempt_number,
            error=str(error) if error else None,
        )

    async def assign(
        self,
        kind: RecordKind,
        user_id: str,
        insert: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Run ``insert`` until it succeeds or attempts run out.

        Args:
            kind: Receipt or invoice, for errors and logs
            user_id: Owner whose sequence is being extended
            insert: Store step that assigns max+1 and inserts

        Returns:
            Whatever ``insert`` returns, normally the persisted record

        Raises:
            SequenceExhaustedError: If every attempt hit a conflict
        """
        async def attempt() -> T:
            return await insert()

        try:
            result = await self._get_retry_decorator()(attempt)()
        except RetryError as e:
            logger.error(
                "sequence_exhausted",
                kind=kind.value,
                user_id=user_id,
                attempts=self.max_attempts,
            )
            raise SequenceExhaustedError(kind.value, user_id, self.max_attempts) from e
        return cast(T, result)
