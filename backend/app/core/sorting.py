"""Ordering helper for listing queries."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.core.database import Base


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    allowed_fields: Collection[str],
    default_field: str = "id",
    default_direction: str = "asc",
) -> Query:  # type: ignore[type-arg]
    """Order a query by a ``"field:direction"`` string.

    Unknown fields fall back to ``default_field``; unknown directions fall
    back to ``default_direction``. Only columns named in ``allowed_fields``
    can be sorted on, so arbitrary model attributes are never reachable
    from a query string.
    """
    field = default_field
    direction = default_direction

    if order_by:
        candidate_field, _, candidate_direction = order_by.partition(":")
        if candidate_field in allowed_fields and hasattr(model, candidate_field):
            field = candidate_field
            direction = candidate_direction if candidate_direction in ("asc", "desc") else "asc"

    order_func = asc if direction == "asc" else desc
    query = query.order_by(order_func(getattr(model, field)))
    if field != "id":
        # Stable paging when the sort column has duplicates
        query = query.order_by(asc(model.id))
    return query
