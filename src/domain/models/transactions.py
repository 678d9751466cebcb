"""Domain models for inbound transaction events."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Kinds of transactions published by the transaction service."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class TransactionEvent:
    """Immutable transaction notification consumed by the reports core.

    Attributes:
        transaction_id: Opaque identifier from the transaction service.
        user_id: Owner of the transaction.
        type: Transaction kind, or the raw value when unrecognised.
        amount: Transaction amount.
        date: Calendar date the transaction belongs to.
        category: Category label.
        description: Optional free text.
    """

    transaction_id: object | None
    user_id: str | None
    type: TransactionType | str | None
    amount: Decimal | None
    date: date | None
    category: str | None = None
    description: str | None = None


__all__ = ["TransactionType", "TransactionEvent"]
