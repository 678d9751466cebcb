"""Domain constants for monthly reports."""

import re

from src.utils.decimal_utils import MONEY_QUANTUM

PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


__all__ = [
    "MONEY_QUANTUM",
    "PERIOD_PATTERN",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
