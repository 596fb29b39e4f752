"""Pagination policy applied to external input before it reaches ContactService."""

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps OFFSET within a 64-bit integer for any page size.
MAX_PAGE = 2**31 - 1


def clamp_paging(page: int, page_size: int) -> tuple[int, int]:
    """Silently correct out-of-range paging values:
    1 <= page <= MAX_PAGE, 1 <= page_size <= MAX_PAGE_SIZE.
    """
    page = min(max(page, 1), MAX_PAGE)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page, page_size


def total_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for total_count items; 0 when there are no items."""
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size
