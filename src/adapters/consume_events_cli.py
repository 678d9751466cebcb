"""CLI adapter feeding transaction messages to the report consumer.

Messages are read as JSON lines from REPORTS_EVENTS_FILE, or from standard
input when unset. REPORTS_EVENT_KIND selects the notification kind
(``created`` or ``updated``). Failed messages are dropped, as they are on
the queue.
"""

from collections.abc import Iterable
import os
import sys

from src.adapters.transaction_consumer import (
    ConsumeOutcome,
    TransactionEventConsumer,
)
from src.infrastructure.container import build_apply_transaction_use_case
from src.infrastructure.logging.logger import get_app_logger

EVENT_KINDS = ("created", "updated")


def _consume_lines(
    consumer: TransactionEventConsumer,
    lines: Iterable[str],
    kind: str,
) -> tuple[int, int]:
    """Feed non-blank lines to the consumer.

    Returns:
        tuple[int, int]: Acknowledged and dropped message counts.
    """
    acked = 0
    dropped = 0
    for line in lines:
        if not line.strip():
            continue
        if kind == "updated":
            outcome = consumer.consume_updated(line)
        else:
            outcome = consumer.consume_created(line)
        if outcome is ConsumeOutcome.ACKED:
            acked += 1
        else:
            dropped += 1
    return acked, dropped


def main() -> None:
    """Replay a stream of transaction messages into monthly reports."""
    logger = get_app_logger()
    kind = os.getenv("REPORTS_EVENT_KIND", "created").strip().lower()
    if kind not in EVENT_KINDS:
        logger.error(
            f"Unsupported REPORTS_EVENT_KIND '{kind}'. "
            f"Expected one of {', '.join(EVENT_KINDS)}."
        )
        return

    consumer = TransactionEventConsumer(
        build_apply_transaction_use_case(),
        logger=logger,
    )
    events_file = os.getenv("REPORTS_EVENTS_FILE")
    if events_file:
        with open(events_file, encoding="utf-8") as handle:
            acked, dropped = _consume_lines(consumer, handle, kind)
    else:
        acked, dropped = _consume_lines(consumer, sys.stdin, kind)

    print(f"Applied {acked} {kind} transactions, dropped {dropped}.")


if __name__ == "__main__":  # pragma: no cover
    main()
