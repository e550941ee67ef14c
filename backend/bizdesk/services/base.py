"""
Entity services: cached reads plus mutations that invalidate and notify.

Every mutation is one unit of work. On success the service's cache key is
invalidated and a success notification is sent; on failure an error
notification carries the backend message and the cache is left alone.
Mutations never raise for backend errors; callers get a MutationResult.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bizdesk.core.errors import AppError, BackendFailure, InvalidValueError, NotFoundError, backend_message
from bizdesk.core.notifications import Notifier
from bizdesk.core.query_cache import QueryCache
from bizdesk.db.session import session_scope
from bizdesk.repositories.crud import delete_rows, insert_row, update_row, update_rows

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def coerce_choice(choices: Type[E], value: Any, field: str) -> E:
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise InvalidValueError(f"Invalid {field} '{value}' (expected one of: {allowed})") from None


@dataclass(frozen=True)
class MutationResult(Generic[T]):
    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None


class EntityService:
    query_key: tuple = ()
    label = "record"
    plural = "records"

    def __init__(self, session_factory: sessionmaker, cache: QueryCache, notifier: Notifier) -> None:
        self._session_factory = session_factory
        self._cache = cache
        self._notifier = notifier

    # -- reads ---------------------------------------------------------------

    def list(self) -> list:
        """Full collection, served from cache until the next successful mutation."""
        return self._cache.fetch(self.query_key, self._load)

    @property
    def cached(self) -> Optional[list]:
        return self._cache.get(self.query_key)

    def refetch(self) -> None:
        self._cache.invalidate(self.query_key)

    def _load(self) -> list:
        try:
            with session_scope(self._session_factory) as db:
                return self._fetch(db)
        except SQLAlchemyError as exc:
            logger.warning("Loading %s failed: %s", self.plural, backend_message(exc))
            raise BackendFailure.from_exc(exc) from exc
        except ValidationError as exc:
            raise BackendFailure(f"Malformed {self.label} row: {exc}") from exc

    def _fetch(self, db: Session) -> list:
        raise NotImplementedError

    # -- mutations -----------------------------------------------------------

    def _mutate(self, work: Callable[[Session], T], *, success: str, failure: str) -> MutationResult[T]:
        try:
            with session_scope(self._session_factory) as db:
                data = work(db)
        except (SQLAlchemyError, AppError, ValidationError) as exc:
            message = backend_message(exc)
            logger.warning("%s: %s", failure, message, extra={"entity": self.label})
            self._notifier.error(failure, message)
            return MutationResult(ok=False, error=message)
        self._cache.invalidate(self.query_key)
        logger.info(success, extra={"entity": self.label})
        self._notifier.success(success)
        return MutationResult(ok=True, data=data)

    @property
    def _title(self) -> str:
        return self.label[:1].upper() + self.label[1:]


class CrudService(EntityService):
    """create / update / delete / bulk variants over one table."""

    model: Any = None
    status_column = "status"
    status_choices: Optional[Type[Enum]] = None

    @staticmethod
    def to_domain(row: Any) -> BaseModel:
        raise NotImplementedError

    @staticmethod
    def create_values(draft: Any) -> dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def update_values(draft: Any) -> dict[str, Any]:
        return draft.model_dump(exclude_unset=True)

    def _before_create(self, db: Session, draft: Any) -> None:
        pass

    def _before_update(self, db: Session, row_id: str, draft: Any) -> None:
        pass

    def create(self, draft: Any) -> MutationResult:
        def work(db: Session):
            self._before_create(db, draft)
            return self.to_domain(insert_row(db, self.model, self.create_values(draft)))

        return self._mutate(
            work,
            success=f"{self._title} created successfully",
            failure=f"Failed to create {self.label}",
        )

    def update(self, row_id: str, draft: Any) -> MutationResult:
        def work(db: Session):
            self._before_update(db, row_id, draft)
            row = update_row(db, self.model, row_id, self.update_values(draft))
            if row is None:
                raise NotFoundError(f"{self._title} {row_id} not found")
            return self.to_domain(row)

        return self._mutate(
            work,
            success=f"{self._title} updated successfully",
            failure=f"Failed to update {self.label}",
        )

    def delete(self, row_id: str) -> MutationResult[str]:
        def work(db: Session) -> str:
            delete_rows(db, self.model, [row_id])
            return row_id

        return self._mutate(
            work,
            success=f"{self._title} deleted successfully",
            failure=f"Failed to delete {self.label}",
        )

    def bulk_delete(self, ids: Iterable[str]) -> MutationResult[int]:
        ids = list(ids)
        return self._mutate(
            lambda db: delete_rows(db, self.model, ids),
            success=f"{len(ids)} {self.label}(s) deleted successfully",
            failure=f"Failed to delete {self.plural}",
        )

    def bulk_update_status(self, ids: Iterable[str], status: Any) -> MutationResult[int]:
        ids = list(ids)

        def work(db: Session) -> int:
            if self.status_choices is None:
                raise InvalidValueError(f"{self._title} records have no status")
            value = coerce_choice(self.status_choices, status, "status")
            return update_rows(db, self.model, ids, {self.status_column: value})

        return self._mutate(
            work,
            success=f"{len(ids)} {self.label}(s) updated successfully",
            failure=f"Failed to update {self.plural}",
        )
