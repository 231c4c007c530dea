"""Recommendation engine: ranks an event's candidate slots by attendance."""

import asyncio
import logging

from scheduler_api.db.store import SchedulingStore, StoreSnapshot
from scheduler_api.errors import NotFoundError, StoreUnavailableError
from scheduler_api.models.scheduling import Recommendation
from scheduler_api.recommendations.eligibility import eligible_slots
from scheduler_api.recommendations.ranking import rank
from scheduler_api.recommendations.resolver import AvailabilityResolver
from scheduler_api.recommendations.scoring import availability_percentage

logger = logging.getLogger(__name__)


def build_recommendations(snapshot: StoreSnapshot) -> list[Recommendation]:
    """Score and rank the slots in a snapshot.

    Returns an empty list when the event has no slots or nobody has
    responded yet. Slots shorter than the event's required duration are
    left out rather than scored.
    """
    event = snapshot.event
    if not snapshot.slots:
        return []

    resolver = AvailabilityResolver(event.id, snapshot.records)
    if not resolver.users:
        return []

    scored: list[Recommendation] = []
    for slot in eligible_slots(event.required_duration, snapshot.slots):
        partition = resolver.resolve(slot.id)
        scored.append(
            Recommendation(
                timeslot=slot,
                available_users=partition.available,
                unavailable_users=partition.unavailable,
                availability_percentage=availability_percentage(
                    len(partition.available), len(partition.unavailable)
                ),
            )
        )
    return rank(scored)


class RecommendationEngine:
    """Computes slot recommendations from a store's current state.

    Holds no state besides the store handle, so one instance can serve
    concurrent requests.
    """

    def __init__(self, store: SchedulingStore, read_timeout: float | None = None):
        self.store = store
        self.read_timeout = read_timeout

    async def _read_snapshot(self, event_id: str) -> StoreSnapshot | None:
        try:
            return await asyncio.wait_for(self.store.snapshot(event_id), timeout=self.read_timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Snapshot read timed out event=%s timeout=%s", event_id, self.read_timeout)
            raise StoreUnavailableError(
                detail="Timed out reading scheduling data", event_id=event_id
            ) from e

    async def recommend(self, event_id: str) -> list[Recommendation]:
        """Ranked recommendations for an event.

        Raises:
            NotFoundError: If the event does not exist.
            StoreUnavailableError: If the store cannot be read in time.
        """
        snapshot = await self._read_snapshot(event_id)
        if snapshot is None:
            raise NotFoundError(detail="Event not found", resource_type="event", resource_id=event_id)
        recommendations = build_recommendations(snapshot)
        logger.info(
            "Recommendations event=%s slots=%d respondents=%d results=%d",
            event_id,
            len(snapshot.slots),
            len({r.user_id for r in snapshot.records}),
            len(recommendations),
        )
        return recommendations
