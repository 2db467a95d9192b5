"""
Query parameters shared by the listing endpoints.

Sorting is given as repeated ``sort`` parameters; a leading ``-``
sorts that column descending, e.g. ``?sort=-balance&sort=name``.
"""

from fastapi import Query

from accounting_core.config import get_settings
from accounting_core.schemas.pagination import PageRequest, Sort


def page_params(
    page_no: int = 1,
    item_size: int | None = None,
    sort: list[str] = Query(default=[]),
) -> PageRequest:
    if item_size is None:
        item_size = get_settings().DEFAULT_PAGE_SIZE
    sorts = []
    for column in sort:
        if column.startswith("-"):
            sorts.append(Sort(column=column[1:], ascending=False))
        else:
            sorts.append(Sort(column=column))
    return PageRequest(page_no=page_no, item_size=item_size, sorts=sorts)
