"""Policy checks applied to transaction events before aggregation."""

from decimal import Decimal, InvalidOperation

from src.domain.constants import MONEY_QUANTUM
from src.domain.errors import InvalidEvent
from src.domain.models.transactions import TransactionEvent


def _check_amount(event: TransactionEvent) -> None:
    """Reject amounts that cannot be stored exactly in cents."""
    amount = Decimal(event.amount)
    if not amount.is_finite():
        raise InvalidEvent(
            f"Transaction {event.transaction_id} has a non-finite amount "
            f"{amount}"
        )
    try:
        in_cents = amount.quantize(MONEY_QUANTUM)
    except InvalidOperation as exc:
        raise InvalidEvent(
            f"Transaction {event.transaction_id} amount {amount} is too large"
        ) from exc
    if in_cents != amount:
        raise InvalidEvent(
            f"Transaction {event.transaction_id} amount {amount} has more "
            "than two decimal places"
        )


def validate_event(event: TransactionEvent) -> TransactionEvent:
    """Ensure an event carries the fields the aggregation needs.

    Args:
        event: Event to check.

    Returns:
        TransactionEvent: The same event.

    Raises:
        InvalidEvent: If user id is blank, date, amount or type is missing,
        or the amount is not a finite value in whole cents.
    """
    if event.user_id is None or not str(event.user_id).strip():
        raise InvalidEvent(
            f"Transaction {event.transaction_id} has no user id"
        )
    missing = [
        name
        for name in ("date", "amount", "type")
        if getattr(event, name) is None
    ]
    if missing:
        raise InvalidEvent(
            f"Transaction {event.transaction_id} is missing "
            f"{', '.join(missing)}"
        )
    _check_amount(event)
    return event


__all__ = ["validate_event"]
