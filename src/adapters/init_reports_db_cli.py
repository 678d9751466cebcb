"""CLI adapter creating the monthly reports table."""

from src.infrastructure.container import build_report_store
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Ensure the reports database has its table."""
    logger = get_app_logger()
    store = build_report_store()
    store.prepare_storage()
    logger.info("monthly_reports table is ready")
    print("Reports database is ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
