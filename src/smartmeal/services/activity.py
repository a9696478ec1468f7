"""Activity history service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from smartmeal.domain.activity import ActivityEvent


class ActivityRepository(Protocol):
    """Persistence interface for activity events."""

    def create_event(
        self, user_id: UUID, event_type: str, details: dict[str, object]
    ) -> None:
        """Create an activity event row."""

    def list_events(self, user_id: UUID, limit: int) -> list[ActivityEvent]:
        """Return the most recent events for a user."""


@dataclass
class ActivityService:
    """Records and lists what users did."""

    repository: ActivityRepository

    def record(self, user_id: UUID, event_type: str, **details: object) -> None:
        """Persist an activity event."""
        self.repository.create_event(user_id, event_type, details)

    def history(self, user_id: UUID, limit: int = 50) -> list[ActivityEvent]:
        """Return events newest first."""
        events = self.repository.list_events(user_id, limit)
        return sorted(events, key=lambda event: event.created_at, reverse=True)
