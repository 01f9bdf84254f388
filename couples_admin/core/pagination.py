"""Pagination helpers shared by the listing views."""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from couples_admin.core.constants import ALLOWED_PAGE_SIZES, DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class PageRequest:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def parse_pagination(
    page: Optional[object] = None,
    per_page: Optional[object] = None,
    allowed_sizes: Sequence[int] = ALLOWED_PAGE_SIZES,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """
    Normalize raw page/per_page values.

    Unparsable or non-positive pages become 1. Page sizes outside the
    allow-list fall back to the default instead of erroring; a default that
    is itself outside the allow-list is replaced by the smallest allowed size.
    """
    try:
        page_number = int(page) if page is not None else 1
    except (TypeError, ValueError):
        page_number = 1
    if page_number < 1:
        page_number = 1

    try:
        size = int(per_page) if per_page is not None else default_size
    except (TypeError, ValueError):
        size = default_size
    if default_size not in allowed_sizes:
        default_size = min(allowed_sizes)
    if size not in allowed_sizes:
        size = default_size

    return PageRequest(page=page_number, per_page=size)


def total_pages(total: int, per_page: int) -> int:
    """Number of pages for ``total`` items, never less than 1."""
    if total <= 0 or per_page <= 0:
        return 1
    return max(1, math.ceil(total / per_page))
