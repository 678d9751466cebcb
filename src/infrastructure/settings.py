"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ReportsSettings:
    """Tunable settings of the reports service.

    Attributes:
        default_page_size: Page size used when a listing requests none.
        max_page_size: Largest page size served by report listings.
    """

    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    @classmethod
    def from_env(cls) -> "ReportsSettings":
        """Build settings from environment variables.

        Returns:
            ReportsSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        max_page_size = cls._read_positive_int(
            "REPORTS_MAX_PAGE_SIZE",
            MAX_PAGE_SIZE,
            logger=logger,
        )
        default_page_size = cls._read_positive_int(
            "REPORTS_DEFAULT_PAGE_SIZE",
            DEFAULT_PAGE_SIZE,
            logger=logger,
        )
        if default_page_size > max_page_size:
            logger.warning(
                f"REPORTS_DEFAULT_PAGE_SIZE={default_page_size} exceeds "
                f"REPORTS_MAX_PAGE_SIZE={max_page_size}; capping it"
            )
            default_page_size = max_page_size
        return cls(
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back to a default.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
            return default
        if value <= 0:
            logger.warning(f"Ignoring non-positive {name}={value}")
            return default
        return value


__all__ = ["ReportsSettings"]
