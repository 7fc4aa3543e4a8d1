"""Page bounds and page-count arithmetic for listing queries."""

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE: Final = 1
DEFAULT_PAGE_SIZE: Final = 10
MAX_PAGE_SIZE: Final = 100
MAX_PAGE: Final = 2**31 - 1


class PageRequest(BaseModel):
    """A validated 1-indexed page request."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` items, ``page_size`` at a time."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return (total + page_size - 1) // page_size


def has_previous_page(page: int) -> bool:
    return page > 1


def has_next_page(page: int, total: int, page_size: int) -> bool:
    return page < total_pages(total, page_size)
