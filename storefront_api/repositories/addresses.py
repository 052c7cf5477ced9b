# storefront_api/repositories/addresses.py

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select, update

from ..db import models
from .base import SQLRepository


class AddressesRepository(SQLRepository[models.Address]):
    """
    Data access for ``addresses``.

    ``replace_default`` is the only way a default address is written; run it
    inside a transaction that has locked the owning user row.
    """

    model = models.Address

    def get_default(self, user_id: str) -> Optional[models.Address]:
        stmt = (
            self._base_select()
            .where(models.Address.user_id == user_id, models.Address.is_default.is_(True))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: str) -> Sequence[models.Address]:
        stmt = select(models.Address).where(models.Address.user_id == user_id)
        return list(self.session.execute(stmt).scalars().all())

    def clear_default(self, user_id: str) -> None:
        self.session.execute(
            update(models.Address)
            .where(models.Address.user_id == user_id)
            .values(is_default=False)
        )

    def replace_default(
        self,
        user_id: str,
        *,
        address: str,
        city: str,
        region: str,
        zip_code: str,
        country: str,
    ) -> models.Address:
        """
        Clear the default flag on every address of ``user_id``, then insert a
        new default row.
        """
        self.clear_default(user_id)
        return self.create(
            user_id=user_id,
            address=address,
            city=city,
            region=region,
            zip_code=zip_code,
            country=country,
            is_default=True,
        )
