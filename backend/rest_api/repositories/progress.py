"""
Progress Repository - Data access for client measurements.
"""

from datetime import datetime

from sqlalchemy.orm import Session
from sqlalchemy import Select, select

from rest_api.models import ProgressRecord
from .base import BaseRepository


class ProgressRepository(BaseRepository[ProgressRecord]):
    """Repository for ProgressRecord entities."""

    search_columns = ("notes",)
    sort_fields = {
        "progressDate": "progress_date",
        "weight": "weight",
        "bmi": "bmi",
        "bodyFat": "body_fat",
    }
    filter_columns = {"client_id": "client_id"}

    @property
    def model(self) -> type[ProgressRecord]:
        return ProgressRecord

    def _base_query(self) -> Select:
        return select(ProgressRecord)

    def find_by_client(
        self,
        client_id: int,
        *,
        ascending: bool = False,
        limit: int | None = None,
        since: datetime | None = None,
    ) -> list[ProgressRecord]:
        """Records of one client ordered by progress date."""
        order = ProgressRecord.progress_date.asc() if ascending else ProgressRecord.progress_date.desc()
        query = (
            self._base_query()
            .where(ProgressRecord.client_id == client_id)
            .order_by(order, ProgressRecord.id.asc() if ascending else ProgressRecord.id.desc())
        )
        if since is not None:
            query = query.where(ProgressRecord.progress_date >= since)
        if limit is not None:
            query = query.limit(limit)
        return list(self._db.execute(query).scalars().all())


def get_progress_repository(db: Session) -> ProgressRepository:
    """Factory function for ProgressRepository."""
    return ProgressRepository(db)
