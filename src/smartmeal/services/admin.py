"""Admin console aggregation."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from smartmeal.domain.admin import (
    AdminOverview,
    MonthlyShoppingReport,
    WeeklyPlanningReport,
)
from smartmeal.domain.models import UserProfile
from smartmeal.domain.planning import DAYS_PER_WEEK, week_start
from smartmeal.domain.shopping import category_stats
from smartmeal.services.planning import MealPlanRepository
from smartmeal.services.shopping import ShoppingListRepository


class AdminRepository(Protocol):
    """Counting queries over every collection."""

    def count_users(self) -> int:
        """Return the number of user profiles."""

    def count_approved_dishes(self) -> int:
        """Return the number of approved dishes."""

    def count_meal_plans(self) -> int:
        """Return the number of stored day plans."""

    def count_shopping_lists(self) -> int:
        """Return the number of shopping lists."""

    def list_users(self) -> list[UserProfile]:
        """Return every profile, newest first."""


@dataclass
class AdminService:
    """Service for the admin dashboard."""

    admin_repository: AdminRepository
    shopping_repository: ShoppingListRepository
    plan_repository: MealPlanRepository

    def overview(self) -> AdminOverview:
        """Return record counts across all users."""
        return AdminOverview(
            users=self.admin_repository.count_users(),
            approved_dishes=self.admin_repository.count_approved_dishes(),
            meal_plans=self.admin_repository.count_meal_plans(),
            shopping_lists=self.admin_repository.count_shopping_lists(),
        )

    def list_users(self) -> list[dict[str, object]]:
        """Return users with their setup state."""
        return [
            {
                "id": str(user.id),
                "email": user.email,
                "display_name": user.display_name,
                "role": user.role,
                "is_setup_complete": user.is_setup_complete,
                "household_size": user.household_size,
                "diet_preference": user.diet_preference,
                "created_at": user.created_at.isoformat() if user.created_at else None,
            }
            for user in self.admin_repository.list_users()
        ]

    def monthly_shopping_report(
        self, month: str, status: str | None = None
    ) -> MonthlyShoppingReport:
        """Aggregate the lists whose week starts in month (YYYY-MM)."""
        lists = [
            shopping_list
            for shopping_list in self.shopping_repository.list_all(status)
            if shopping_list.start_date is not None
            and shopping_list.start_date.isoformat().startswith(month)
        ]
        estimated = sum(item_list.estimated_budget for item_list in lists)
        actual = sum(item_list.actual_cost or 0.0 for item_list in lists)
        households = sum(item_list.household_size for item_list in lists)
        return MonthlyShoppingReport(
            month=month,
            total_lists=len(lists),
            total_estimated_cost=round(estimated, 2),
            total_actual_cost=round(actual, 2),
            average_household_size=round(households / len(lists)) if lists else 0,
            completed_lists=sum(1 for item in lists if item.status == "completed"),
            savings_rate=(
                round((estimated - actual) / estimated * 100) if estimated > 0 else 0
            ),
            categories=category_stats(lists),
        )

    def weekly_planning_report(
        self, day: date, user_id: UUID | None = None
    ) -> WeeklyPlanningReport:
        """Collect the day plans of the week containing day across users."""
        start = week_start(day)
        end = start + timedelta(days=DAYS_PER_WEEK - 1)
        return WeeklyPlanningReport(
            start=start,
            end=end,
            plans=self.plan_repository.list_all(start, end, user_id),
        )
