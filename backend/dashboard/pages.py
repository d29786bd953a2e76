"""
Domain pages of the dashboard.

A page loads the whole collection once, then searches, filters, sorts and
summarizes it in memory. Actions make one transport call and reload the
collection when it succeeds. Failures are logged and kept in ``error``
instead of being raised.

Usage:
    page = ClientsPage(CRUDTransport("/clients", config))
    await page.load()
    page.stats()                            # ClientStats(total=3, ...)
    page.view(ClientFilters(status="unassigned", sort="recent"))
    await page.assign_trainer(client_id=4, trainer_id=1)
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from dashboard.entity import Entity, FetchParams
from dashboard.transport import CRUDTransport
from shared.config.constants import Limits
from shared.config.logging import dashboard_logger as logger

LOAD_ALL_LIMIT = Limits.MAX_PAGE_SIZE

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


# =============================================================================
# Helpers
# =============================================================================


def bmi_category(bmi: float | None) -> str | None:
    """WHO band for a BMI value; None when there is no value."""
    if not bmi:
        return None
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp from the API. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _nested(item: Entity | None, *path: str) -> Any:
    """Walk nested dicts, returning None at the first missing step."""
    current: Any = item
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _matches(term: str, *values: Any) -> bool:
    return any(term in str(v).lower() for v in values if v)


def _count(item: Entity, key: str) -> int:
    return _nested(item, "_count", key) or 0


class CollectionPage:
    """
    Full-collection loader shared by the domain pages.

    Failures never propagate: they are logged, ``error`` holds the message
    (or a per-page fallback) and the action returns None/False. ``loading``
    is True only while a load is in flight.
    """

    noun = "item"
    plural = "items"

    def __init__(self, transport: CRUDTransport):
        self.transport = transport
        self.items: list[Entity] = []
        self.loading = False
        self.error: str | None = None

    async def load(self) -> list[Entity]:
        self.loading = True
        self.error = None
        try:
            response = await self.transport.fetch_all(FetchParams(limit=LOAD_ALL_LIMIT))
            self.items = list(response.data)
            logger.debug("Page loaded", endpoint=self.transport.endpoint, count=len(self.items))
        except Exception as e:
            self._fail(f"Failed to load {self.plural}", e)
        finally:
            self.loading = False
        return self.items

    def _fail(self, fallback: str, error: Exception) -> None:
        self.error = str(error) or fallback
        logger.error(fallback, endpoint=self.transport.endpoint, error=self.error)

    async def _update_and_reload(
        self, transport: CRUDTransport, entity_id: Any, data: dict[str, Any], fallback: str
    ) -> Entity | None:
        self.error = None
        try:
            item = await transport.update(entity_id, data)
        except Exception as e:
            self._fail(fallback, e)
            return None
        await self.load()
        return item

    async def _delete_and_reload(self, entity_id: Any) -> bool:
        self.error = None
        try:
            await self.transport.delete(entity_id)
        except Exception as e:
            self._fail(f"Failed to delete {self.noun}", e)
            return False
        await self.load()
        return True


# =============================================================================
# Clients
# =============================================================================


ClientSort = Literal["name", "trainer", "activity", "bmi", "recent"]


@dataclass
class ClientFilters:
    search: str = ""
    trainer_id: int | None = None
    activity_level: str | None = None
    status: Literal["all", "active", "unassigned"] = "all"
    has_meal_plan: bool | None = None
    has_workout_plan: bool | None = None
    sort: ClientSort = "name"


@dataclass
class ClientStats:
    total: int = 0
    active: int = 0
    unassigned: int = 0
    progress_entries: int = 0


def _client_bmi(client: Entity) -> float | None:
    return _nested(client, "latestProgress", "bmi") or client.get("bmi")


class ClientsPage(CollectionPage):

    noun = "client"
    plural = "clients"

    def stats(self) -> ClientStats:
        active = sum(1 for c in self.items if c.get("trainerId") is not None)
        return ClientStats(
            total=len(self.items),
            active=active,
            unassigned=len(self.items) - active,
            progress_entries=sum(_count(c, "progressRecords") for c in self.items),
        )

    def view(self, filters: ClientFilters | None = None) -> list[Entity]:
        filters = filters or ClientFilters()
        items = self.items

        term = filters.search.strip().lower()
        if term:
            items = [
                c for c in items
                if _matches(term, _nested(c, "user", "name"), _nested(c, "user", "email"), c.get("goals"))
            ]

        if filters.trainer_id is not None:
            items = [c for c in items if c.get("trainerId") == filters.trainer_id]
        if filters.activity_level:
            items = [c for c in items if c.get("activityLevel") == filters.activity_level]
        if filters.status == "active":
            items = [c for c in items if c.get("trainerId") is not None]
        elif filters.status == "unassigned":
            items = [c for c in items if c.get("trainerId") is None]
        if filters.has_meal_plan is not None:
            items = [c for c in items if (_count(c, "mealPlans") > 0) == filters.has_meal_plan]
        if filters.has_workout_plan is not None:
            items = [c for c in items if (_count(c, "workoutPlans") > 0) == filters.has_workout_plan]

        return self._sorted(items, filters.sort)

    @staticmethod
    def _sorted(items: list[Entity], sort: ClientSort) -> list[Entity]:
        if sort == "name":
            return sorted(items, key=lambda c: (_nested(c, "user", "name") or "").lower())
        if sort == "trainer":
            return sorted(items, key=lambda c: (_nested(c, "trainer", "user", "name") or "").lower())
        if sort == "activity":
            return sorted(items, key=lambda c: (c.get("activityLevel") or "").lower())
        if sort == "bmi":
            # Highest first, clients without a measurement last
            return sorted(items, key=lambda c: (_client_bmi(c) is None, -(_client_bmi(c) or 0)))
        return sorted(items, key=lambda c: parse_timestamp(c.get("createdAt")), reverse=True)

    async def assign_trainer(self, client_id: int, trainer_id: int) -> Entity | None:
        return await self._update_and_reload(
            self.transport, client_id, {"trainerId": trainer_id}, "Failed to assign trainer"
        )

    async def unassign_trainer(self, client_id: int) -> Entity | None:
        return await self._update_and_reload(
            self.transport, client_id, {"trainerId": None}, "Failed to unassign trainer"
        )

    async def update_client(self, client_id: int, data: dict[str, Any]) -> Entity | None:
        return await self._update_and_reload(self.transport, client_id, data, "Failed to update client")

    async def delete_client(self, client_id: int) -> bool:
        return await self._delete_and_reload(client_id)


# =============================================================================
# Trainers
# =============================================================================


TrainerSort = Literal["name", "clients", "rating", "experience"]


@dataclass
class TrainerFilters:
    search: str = ""
    specialty: str | None = None
    min_rating: float = 0
    sort: TrainerSort = "name"


@dataclass
class TrainerStats:
    total: int = 0
    active: int = 0
    total_clients: int = 0
    average_rating: float = 0.0


class TrainersPage(CollectionPage):
    """
    Trainers with their client counts and ratings.

    ``clients_transport`` is used by assign_client, which updates the
    client rather than the trainer.
    """

    noun = "trainer"
    plural = "trainers"

    def __init__(self, transport: CRUDTransport, clients_transport: CRUDTransport):
        super().__init__(transport)
        self.clients_transport = clients_transport

    def stats(self) -> TrainerStats:
        rated = [t.get("averageRating") or 0 for t in self.items if (t.get("averageRating") or 0) > 0]
        return TrainerStats(
            total=len(self.items),
            active=sum(1 for t in self.items if _count(t, "clients") > 0),
            total_clients=sum(_count(t, "clients") for t in self.items),
            average_rating=sum(rated) / len(rated) if rated else 0.0,
        )

    def view(self, filters: TrainerFilters | None = None) -> list[Entity]:
        filters = filters or TrainerFilters()
        items = self.items

        term = filters.search.strip().lower()
        if term:
            items = [
                t for t in items
                if _matches(term, _nested(t, "user", "name"), _nested(t, "user", "email"), t.get("specialty"))
            ]
        if filters.specialty:
            items = [t for t in items if t.get("specialty") == filters.specialty]
        if filters.min_rating:
            items = [t for t in items if (t.get("averageRating") or 0) >= filters.min_rating]

        if filters.sort == "name":
            return sorted(items, key=lambda t: (_nested(t, "user", "name") or "").lower())
        if filters.sort == "clients":
            return sorted(items, key=lambda t: _count(t, "clients"), reverse=True)
        if filters.sort == "rating":
            return sorted(items, key=lambda t: t.get("averageRating") or 0, reverse=True)
        return sorted(items, key=lambda t: t.get("experienceYears") or 0, reverse=True)

    async def update_trainer(self, trainer_id: int, data: dict[str, Any]) -> Entity | None:
        return await self._update_and_reload(self.transport, trainer_id, data, "Failed to update trainer")

    async def delete_trainer(self, trainer_id: int) -> bool:
        return await self._delete_and_reload(trainer_id)

    async def assign_client(self, trainer_id: int, client_id: int) -> Entity | None:
        return await self._update_and_reload(
            self.clients_transport, client_id, {"trainerId": trainer_id}, "Failed to assign client"
        )


# =============================================================================
# Feedback
# =============================================================================


FeedbackSort = Literal["recent", "highest", "lowest"]

RECENT_WINDOW = timedelta(days=7)


@dataclass
class FeedbackFilters:
    search: str = ""
    trainer_id: int | None = None
    ratings: frozenset[int] = field(default_factory=frozenset)
    sort: FeedbackSort = "recent"


@dataclass
class FeedbackStats:
    total: int = 0
    average_rating: float = 0.0
    recent_count: int = 0
    rating_distribution: dict[int, int] = field(
        default_factory=lambda: {r: 0 for r in range(Limits.RATING_MIN, Limits.RATING_MAX + 1)}
    )
    top_rated_trainer: dict[str, Any] | None = None


def _trainer_name(feedback: Entity) -> str | None:
    return _nested(feedback, "trainer", "user", "name")


class FeedbackPage(CollectionPage):

    noun = "feedback"
    plural = "feedback"

    def stats(self, now: datetime | None = None) -> FeedbackStats:
        stats = FeedbackStats(total=len(self.items))
        if not self.items:
            return stats

        now = now or datetime.now(timezone.utc)
        stats.average_rating = sum(f["rating"] for f in self.items) / len(self.items)
        stats.recent_count = sum(
            1 for f in self.items if parse_timestamp(f.get("createdAt")) >= now - RECENT_WINDOW
        )
        for f in self.items:
            if f["rating"] in stats.rating_distribution:
                stats.rating_distribution[f["rating"]] += 1

        by_trainer: dict[Any, list[int]] = defaultdict(list)
        names: dict[Any, str | None] = {}
        for f in self.items:
            by_trainer[f.get("trainerId")].append(f["rating"])
            names.setdefault(f.get("trainerId"), _trainer_name(f))

        best = 0.0
        for trainer_id, ratings in by_trainer.items():
            mean = sum(ratings) / len(ratings)
            if mean > best:
                best = mean
                stats.top_rated_trainer = {"id": trainer_id, "name": names[trainer_id], "rating": mean}
        return stats

    def view(self, filters: FeedbackFilters | None = None) -> list[Entity]:
        filters = filters or FeedbackFilters()
        items = self.items

        term = filters.search.strip().lower()
        if term:
            items = [
                f for f in items
                if _matches(term, _trainer_name(f), _nested(f, "user", "name"))
            ]
        if filters.trainer_id is not None:
            items = [f for f in items if f.get("trainerId") == filters.trainer_id]
        if filters.ratings:
            wanted = {r for r in filters.ratings if Limits.RATING_MIN <= r <= Limits.RATING_MAX}
            items = [f for f in items if f.get("rating") in wanted]

        if filters.sort == "highest":
            return sorted(items, key=lambda f: f.get("rating") or 0, reverse=True)
        if filters.sort == "lowest":
            return sorted(items, key=lambda f: f.get("rating") or 0)
        return sorted(items, key=lambda f: parse_timestamp(f.get("createdAt")), reverse=True)

    async def delete_feedback(self, feedback_id: int) -> bool:
        return await self._delete_and_reload(feedback_id)
