"""
Pydantic schemas for paginated listings.

PageRequest is what the caller asks for; PageResult is what the
Pagination Calculator derives from it and the total row count.
"""

from pydantic import BaseModel, Field


class Sort(BaseModel):
    """Sort on one column. ascending=False means descending."""
    column: str = Field(min_length=1)
    ascending: bool = True


class PageRequest(BaseModel):
    """The first page is page 1."""
    page_no: int = 1
    item_size: int = 10
    sorts: list[Sort] = Field(default_factory=list)


class PageResult(BaseModel):
    request: PageRequest
    total_entries: int
    total_pages: int
    page: int
    page_size: int
    next_page: int
    previous_page: int
    first_page: int
    last_page: int
    is_first: bool
    is_last: bool
    have_prev: bool
    have_next: bool
    offset: int
