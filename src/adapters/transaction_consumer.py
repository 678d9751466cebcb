"""Inbound adapter turning transaction messages into report updates.

The transaction service publishes one message per created or updated
transaction. Both kinds are applied identically. A message that cannot be
decoded or applied is logged and dropped: there is no retry and no
dead-letter destination.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
import json

from src.application.use_cases.apply_transaction import ApplyTransactionUseCase
from src.domain.errors import InvalidEvent
from src.domain.models.transactions import TransactionEvent, TransactionType
from src.infrastructure.logging.logger import get_app_logger


class ConsumeOutcome(str, Enum):
    """What happened to a consumed message."""

    ACKED = "acked"
    DROPPED = "dropped"


def _parse_type(raw) -> TransactionType | str | None:
    if raw is None:
        return None
    try:
        return TransactionType(str(raw).upper())
    except ValueError:
        return str(raw)


def _parse_amount(raw) -> Decimal | None:
    if raw is None:
        return None
    try:
        return Decimal(str(raw))
    except InvalidOperation as exc:
        raise InvalidEvent(f"Invalid amount {raw!r}") from exc


def _parse_date(raw) -> date | None:
    if raw is None or isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw))
    except ValueError as exc:
        raise InvalidEvent(f"Invalid date {raw!r}") from exc


def decode_transaction_message(payload) -> TransactionEvent:
    """Decode a transaction message into a TransactionEvent.

    Args:
        payload: JSON bytes or text, or an already decoded mapping, using
            the camelCase keys of the transaction service.

    Returns:
        TransactionEvent: Event with typed amount, date and type.

    Raises:
        InvalidEvent: If the payload is not a JSON object or has
        unparseable values.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        try:
            payload = json.loads(payload, parse_float=Decimal)
        except ValueError as exc:
            raise InvalidEvent(f"Message is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise InvalidEvent(
            f"Message must be a JSON object, got {type(payload).__name__}"
        )
    return TransactionEvent(
        transaction_id=payload.get("transactionId"),
        user_id=payload.get("userId"),
        type=_parse_type(payload.get("type")),
        amount=_parse_amount(payload.get("amount")),
        date=_parse_date(payload.get("date")),
        category=payload.get("category"),
        description=payload.get("description"),
    )


class TransactionEventConsumer:
    """Consume transaction-created and transaction-updated messages."""

    def __init__(
        self,
        apply_transaction: ApplyTransactionUseCase,
        logger=None,
    ) -> None:
        """Initialize the consumer.

        Args:
            apply_transaction: Use case accumulating events into reports.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._apply_transaction = apply_transaction
        self._logger = logger or get_app_logger()

    def consume_created(self, message) -> ConsumeOutcome:
        """Handle a message from the transaction-created queue."""
        return self.handle(message, kind="created")

    def consume_updated(self, message) -> ConsumeOutcome:
        """Handle a message from the transaction-updated queue."""
        return self.handle(message, kind="updated")

    def handle(self, message, kind: str = "created") -> ConsumeOutcome:
        """Apply one message and decide whether it is acknowledged.

        Args:
            message: Raw payload or a decoded TransactionEvent.
            kind: Notification kind, used for logging only.

        Returns:
            ConsumeOutcome: ACKED on success, DROPPED on any failure.
        """
        transaction_id = None
        try:
            event = (
                message
                if isinstance(message, TransactionEvent)
                else decode_transaction_message(message)
            )
            transaction_id = event.transaction_id
            self._logger.info(
                f"Processing {kind} transaction ID: {transaction_id}"
            )
            self._apply_transaction.execute(event)
        except Exception as exc:
            self._logger.error(
                f"Dropping {kind} transaction ID: {transaction_id} after "
                f"{type(exc).__name__}: {exc}"
            )
            return ConsumeOutcome.DROPPED
        self._logger.info(
            f"Successfully applied {kind} transaction ID: {transaction_id}"
        )
        return ConsumeOutcome.ACKED


__all__ = [
    "ConsumeOutcome",
    "TransactionEventConsumer",
    "decode_transaction_message",
]
