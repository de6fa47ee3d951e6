"""
Author Ordering Service

Returns every author, sorted by a caller-chosen field and direction, with
each author's books loaded for projection.

Sort Fields:
============
    1 = name      (ties broken by surname)
    2 = surname   (ties broken by name)
    3 = birth date (ties broken by id)
    anything else = id

Direction:
==========
    1 = ascending, anything else = descending

Every ordering ends on id so equal keys always come back in the same order.

Usage:
    from library_api.services.ordering import order_authors

    authors = order_authors(db, sort_field=2, direction=1)
"""

import logging
from enum import IntEnum

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from library_api.models.author import Author
from library_api.models.book import AuthorBook

logger = logging.getLogger(__name__)


class SortField(IntEnum):
    ID = 0
    NAME = 1
    SURNAME = 2
    BIRTH_DATE = 3


class SortDirection(IntEnum):
    DESCENDING = 0
    ASCENDING = 1


# Columns applied in order for each sort field.
ORDER_COLUMNS = {
    SortField.ID: (Author.id,),
    SortField.NAME: (Author.name, Author.surname, Author.id),
    SortField.SURNAME: (Author.surname, Author.name, Author.id),
    SortField.BIRTH_DATE: (Author.birth_date, Author.id),
}


def resolve_sort_field(sort_field: int) -> SortField:
    """Map a raw sort code onto SortField; unknown codes sort by id."""
    try:
        return SortField(sort_field)
    except ValueError:
        return SortField.ID


def resolve_direction(sort_field: int, direction: int) -> SortDirection:
    """
    Map a raw direction code onto SortDirection.

    A request with neither field nor direction chosen, (0, 0), lists authors
    by ascending id. Every other pair is taken literally.
    """
    if sort_field == 0 and direction == 0:
        return SortDirection.ASCENDING
    if direction == SortDirection.ASCENDING:
        return SortDirection.ASCENDING
    return SortDirection.DESCENDING


def order_authors(db: Session, sort_field: int = 0, direction: int = 0) -> list[Author]:
    """
    Load all authors in the requested order.

    Returns:
        Authors with author_books and each link's book eager-loaded;
        an empty list when there are no authors
    """
    field = resolve_sort_field(sort_field)
    resolved = resolve_direction(sort_field, direction)

    columns = ORDER_COLUMNS[field]
    if resolved == SortDirection.ASCENDING:
        order_by = [column.asc() for column in columns]
    else:
        order_by = [column.desc() for column in columns]

    query = (
        select(Author)
        .options(selectinload(Author.author_books).selectinload(AuthorBook.book))
        .order_by(*order_by)
    )
    authors = list(db.scalars(query).all())

    logger.debug(
        f"Ordered {len(authors)} authors by {field.name.lower()} {resolved.name.lower()}"
    )
    return authors
