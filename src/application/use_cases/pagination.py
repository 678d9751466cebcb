"""Page request normalization for report listings."""

from src.domain.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.domain.models.reports import PageRequest


def ensure_safe_page(
    page: PageRequest | None,
    max_size: int = MAX_PAGE_SIZE,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """Clamp a page request to valid bounds.

    Args:
        page: Requested page, or None for the first default page.
        max_size: Largest page size served.
        default_size: Size used when the requested one is not positive.

    Returns:
        PageRequest: Page with a non-negative number and a size in
        ``1..max_size``.
    """
    if page is None:
        return PageRequest(page=0, size=min(default_size, max_size))
    number = max(page.page, 0)
    size = page.size if page.size > 0 else default_size
    return PageRequest(page=number, size=min(size, max_size))


__all__ = ["ensure_safe_page"]
