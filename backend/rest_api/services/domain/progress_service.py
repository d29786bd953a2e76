"""
Progress Service - client measurements, trends and summaries.

BMI is computed from weight and height (cm) when the caller does not send
one, using the record's height or else the client's profile height.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Client, ProgressRecord, compute_bmi, utcnow
from rest_api.repositories import ProgressRepository
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.domain.client_service import progress_trends
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import ProgressOutput

logger = get_logger(__name__)


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


class ProgressService(BaseCRUDService[ProgressRecord, ProgressOutput]):
    """Service for progress records."""

    non_nullable_fields = ("weight", "progress_date")

    def __init__(self, db: Session):
        self._progress = ProgressRepository(db)
        super().__init__(
            db=db,
            model=ProgressRecord,
            repository=self._progress,
            output_schema=ProgressOutput,
            entity_name="Progress record",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_for_client(
        self, client_id: int, limit: int = 30, order: str = "desc"
    ) -> list[ProgressOutput]:
        self._get_client(client_id)
        records = self._progress.find_by_client(
            client_id, ascending=order == "asc", limit=limit
        )
        return [self.to_output(r) for r in records]

    def get_trends(self, client_id: int, period_days: int = 30) -> dict[str, Any]:
        """
        Change over the last ``period_days`` days.

        Returns a payload with ``trends: None`` when no record falls in the period.
        """
        self._get_client(client_id)
        since = utcnow() - timedelta(days=period_days)
        records = self._progress.find_by_client(client_id, ascending=True, since=since)

        if not records:
            return {
                "message": "No progress data available for the specified period",
                "trends": None,
            }

        first, last = records[0], records[-1]
        overall = progress_trends(list(reversed(records)))
        elapsed_days = max((last.progress_date - first.progress_date).days, 1)

        return {
            "period": {"days": period_days, "from": first.progress_date, "to": last.progress_date},
            "overall": {
                "weightChange": overall["weightChange"],
                "bmiChange": overall["bmiChange"],
                "direction": overall["direction"],
                "totalEntries": len(records),
            },
            "dailyAverageChange": {
                "weight": round(overall["weightChange"] / elapsed_days, 3),
                "bmi": round(overall["bmiChange"] / elapsed_days, 3),
            },
            "dataPoints": [
                {"date": r.progress_date, "weight": r.weight, "bmi": r.bmi} for r in records
            ],
        }

    def get_summary(self, client_id: int) -> dict[str, Any]:
        """Current vs starting measurement, averages and weight range."""
        self._get_client(client_id)
        records = self._progress.find_by_client(client_id, ascending=True)

        if not records:
            return {"message": "No progress data available", "summary": None}

        earliest, latest = records[0], records[-1]
        weights = [r.weight for r in records]
        bmis = [r.bmi for r in records if r.bmi is not None]

        return {
            "current": {"weight": latest.weight, "bmi": latest.bmi, "date": latest.progress_date},
            "starting": {
                "weight": earliest.weight,
                "bmi": earliest.bmi,
                "date": earliest.progress_date,
            },
            "averages": {"weight": _mean(weights), "bmi": _mean(bmis)},
            "range": {
                "minWeight": min(weights),
                "maxWeight": max(weights),
                "difference": round(max(weights) - min(weights), 2),
            },
            "totalEntries": len(records),
            "trackingPeriod": {
                "from": earliest.progress_date,
                "to": latest.progress_date,
                "days": (latest.progress_date - earliest.progress_date).days,
                "entries": len(records),
            },
        }

    # =========================================================================
    # Transformation
    # =========================================================================

    def _build_entity(self, data: dict[str, Any]) -> ProgressRecord:
        if data.get("progress_date") is None:
            data.pop("progress_date", None)
        if data.get("bmi") is None:
            client = self._db.get(Client, data["client_id"])
            height = data.get("height") or (client.height if client else None)
            data["bmi"] = compute_bmi(data["weight"], height)
        return ProgressRecord(**data)

    def _apply_changes(self, entity: ProgressRecord, data: dict[str, Any]) -> dict[str, Any]:
        """Recompute BMI when weight or height change and no BMI was sent."""
        old_values = super()._apply_changes(entity, data)
        if ("weight" in data or "height" in data) and data.get("bmi") is None:
            height = entity.height or (entity.client.height if entity.client else None)
            entity.bmi = compute_bmi(entity.weight, height)
        return old_values

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._get_client(data["client_id"])

    def _get_client(self, client_id: int) -> Client:
        client = self._db.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_create(self, entity: ProgressRecord) -> None:
        logger.info("Progress recorded", client_id=entity.client_id, progress_id=entity.id)
