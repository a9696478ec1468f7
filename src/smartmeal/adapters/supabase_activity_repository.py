"""Supabase repository for activity events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from smartmeal.domain.activity import ActivityEvent
from smartmeal.services.activity import ActivityRepository


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase-backed activity repository."""

    client: Client

    def create_event(
        self, user_id: UUID, event_type: str, details: dict[str, object]
    ) -> None:
        """Create an activity event row."""
        self.client.table("activityEvents").insert(
            {
                "user_id": str(user_id),
                "event_type": event_type,
                "details": details,
            }
        ).execute()

    def list_events(self, user_id: UUID, limit: int) -> list[ActivityEvent]:
        """Return the most recent events for a user."""
        response = (
            self.client.table("activityEvents")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            ActivityEvent(
                id=UUID(str(row["id"])),
                user_id=UUID(str(row["user_id"])),
                event_type=str(row.get("event_type", "")),
                details=dict(row.get("details") or {}),
                created_at=datetime.fromisoformat(str(row["created_at"])),
            )
            for row in response.data or []
        ]
