"""Table-agnostic row access shared by the entity repositories."""
from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

M = TypeVar("M")


def plain_values(values: dict[str, Any]) -> dict[str, Any]:
    """Enum members -> their stored string value."""
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()}


def fetch_all(db: Session, model: type[M], *order_by: Any, limit: Optional[int] = None) -> list[M]:
    stmt = select(model).order_by(*order_by)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars())


def insert_row(db: Session, model: type[M], values: dict[str, Any]) -> M:
    """Insert one row and reload it so server defaults (timestamps) are populated."""
    row = model(**plain_values(values))
    db.add(row)
    db.flush()
    db.refresh(row)
    return row


def update_row(db: Session, model: type[M], row_id: str, values: dict[str, Any]) -> Optional[M]:
    """Apply only the given columns; None when the row does not exist."""
    row = db.get(model, row_id)
    if row is None:
        return None
    for key, value in plain_values(values).items():
        setattr(row, key, value)
    db.flush()
    db.refresh(row)
    return row


def update_rows(db: Session, model: Any, ids: Iterable[str], values: dict[str, Any]) -> int:
    """Single UPDATE ... WHERE id IN (...); returns matched row count."""
    result = db.execute(update(model).where(model.id.in_(list(ids))).values(**plain_values(values)))
    return result.rowcount


def delete_rows(db: Session, model: Any, ids: Iterable[str]) -> int:
    result = db.execute(delete(model).where(model.id.in_(list(ids))))
    return result.rowcount
