# storefront_api/repositories/base.py

from __future__ import annotations

from typing import Any, Generic, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from ..db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class SQLRepository(Generic[ModelT]):
    """
    Generic data-access layer shared by the per-table repositories.

    Subclasses set ``model``. Writes only flush; committing is the caller's
    job so several repository calls can share one transaction.
    """

    model: Type[ModelT]

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    def _base_select(self) -> Select[Any]:
        return select(self.model)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_by_id(self, obj_id: Any) -> Optional[ModelT]:
        return self.session.get(self.model, obj_id)

    def list_all(self, *order_by: Any) -> Sequence[ModelT]:
        stmt = self._base_select()
        if order_by:
            stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).scalars().all())

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, **fields: Any) -> ModelT:
        obj = self.model(**fields)
        self.session.add(obj)
        self.session.flush()
        return obj

    def update(self, obj: ModelT, fields: Mapping[str, Any]) -> ModelT:
        """
        Apply a partial update: only the keys present in ``fields`` change.
        """
        for key, value in fields.items():
            setattr(obj, key, value)
        self.session.add(obj)
        self.session.flush()
        return obj

    def delete(self, obj: ModelT) -> None:
        self.session.delete(obj)
        self.session.flush()
