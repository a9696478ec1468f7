"""Domain models for the activity history feed."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DISH_ADDED = "dish_added"
MEAL_PLANNED = "meal_planned"
STOCK_ADDED = "stock_added"
LIST_GENERATED = "list_generated"


@dataclass(frozen=True)
class ActivityEvent:
    """Something a user did, shown in their history."""

    id: UUID
    user_id: UUID
    event_type: str
    details: dict[str, object]
    created_at: datetime
