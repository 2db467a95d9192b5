"""
Pagination calculator.

page_result_for() is a pure function from a page request and a total
row count to a page descriptor. paginate() applies that descriptor to
a SQLAlchemy select.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from accounting_core.errors import InvalidSortColumnError
from accounting_core.schemas.pagination import PageRequest, PageResult


def page_result_for(request: PageRequest, count: int) -> PageResult:
    """
    Compute the page descriptor for a result set of ``count`` rows.

    - item_size <= 0 is treated as 1.
    - An empty result set still has one (empty) page.
    - page_no is clamped into [1, last_page].
    - next_page and previous_page saturate at the last and first page.
    """
    item_size = request.item_size if request.item_size > 0 else 1
    first_page = 1

    if count == 0:
        last_page = 1
    elif count % item_size == 0:
        last_page = count // item_size
    else:
        last_page = count // item_size + 1

    if request.page_no > last_page:
        page = last_page
    elif request.page_no < first_page:
        page = first_page
    else:
        page = request.page_no

    is_first = page == first_page
    is_last = page == last_page
    offset = (page - 1) * item_size

    if is_last:
        if count == item_size or count == 0:
            page_size = count
        elif count % item_size == 0:
            page_size = item_size
        else:
            page_size = count % item_size
        next_page = page
    else:
        page_size = item_size
        next_page = page + 1

    previous_page = page if is_first else page - 1

    return PageResult(
        request=request.model_copy(update={"item_size": item_size}),
        total_entries=count,
        total_pages=last_page,
        page=page,
        page_size=page_size,
        next_page=next_page,
        previous_page=previous_page,
        first_page=first_page,
        last_page=last_page,
        is_first=is_first,
        is_last=is_last,
        have_prev=not is_first,
        have_next=not is_last,
        offset=offset,
    )


def paginate(
    db: Session,
    statement: Select,
    request: PageRequest,
    model,
    default_order: list,
) -> tuple[PageResult, list]:
    """
    Run ``statement`` one page at a time.

    Sorts in the request name columns of ``model``; when the request has
    none, ``default_order`` is used. Returns the page descriptor and the
    rows of the requested page.
    """
    count = db.execute(
        select(func.count()).select_from(statement.subquery())
    ).scalar_one()
    page = page_result_for(request, count)

    columns = model.__table__.columns
    ordering = []
    for sort in request.sorts:
        if sort.column not in columns:
            raise InvalidSortColumnError(
                f"cannot sort {model.__tablename__} on '{sort.column}'"
            )
        column = columns[sort.column]
        ordering.append(column.asc() if sort.ascending else column.desc())
    if not ordering:
        ordering = default_order

    rows = db.execute(
        statement.order_by(*ordering)
        .offset(page.offset)
        .limit(page.page_size)
    ).scalars().all()
    return page, list(rows)
