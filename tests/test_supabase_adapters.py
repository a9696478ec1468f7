"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from smartmeal.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from smartmeal.adapters.supabase_admin_repository import SupabaseAdminRepository
from smartmeal.adapters.supabase_auth_gateway import SupabaseAuthGateway
from smartmeal.adapters.supabase_dish_repository import SupabaseDishRepository
from smartmeal.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from smartmeal.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from smartmeal.adapters.supabase_shopping_list_repository import (
    SupabaseShoppingListRepository,
)
from smartmeal.adapters.supabase_stock_repository import SupabaseStockRepository
from smartmeal.adapters.supabase_user_repository import SupabaseUserRepository
from smartmeal.domain.models import UserProfile
from smartmeal.domain.planning import PlannedDish
from smartmeal.errors import AuthenticationError, RepositoryError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None
    count: int | None = None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    count: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args, **_kwargs) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}>=", value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}<=", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data, count=self.count)


@dataclass
class FakeAuth:
    user: object | None = None
    session: object | None = None
    error: Exception | None = None

    def _respond(self, *_args):  # type: ignore[no-untyped-def]
        if self.error:
            raise self.error
        return SimpleNamespace(user=self.user, session=self.session)

    sign_up = _respond
    sign_in_with_password = _respond
    get_user = _respond


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuth = field(default_factory=FakeAuth)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _dish_row(dish_id: str) -> dict[str, object]:
    return {
        "id": dish_id,
        "owner_id": None,
        "name": "Soup",
        "description": "Warm",
        "category": "dinner",
        "cooking_time_min": 20,
        "servings": 2,
        "difficulty": "easy",
        "ingredients": [{"name": "Leek", "quantity": 2, "unit": "pcs"}],
        "instructions": ["Boil"],
        "nutrition": {"calories": 180},
        "approved": True,
        "created_at": "2024-03-01",
    }


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = uuid4()
    row = {
        "id": str(user_id),
        "email": "sam@example.com",
        "household_size": 2,
        "role": "admin",
        "favorite_market_ids": ["1"],
        "created_at": "2024-03-01T10:00:00+00:00",
    }
    users_table.queue("insert", [row])
    users_table.queue("select", [row])

    repository = SupabaseUserRepository(client)
    created = repository.create_profile(
        UserProfile(id=user_id, email="sam@example.com")
    )
    fetched = repository.get_profile(user_id)

    assert created.id == user_id
    assert fetched is not None
    assert fetched.is_admin
    assert fetched.favorite_market_ids == ["1"]
    assert users_table.last_payload["role"] == "user"


def test_supabase_user_repository_update_stamps_time() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")

    repository = SupabaseUserRepository(client)
    with pytest.raises(RepositoryError):
        repository.update_profile(uuid4(), {"age": 30})

    assert "updated_at" in users_table.last_payload


def test_supabase_user_repository_delete_filters_by_id() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = uuid4()

    SupabaseUserRepository(client).delete_profile(user_id)

    assert users_table.last_filters == [("id", str(user_id))]


def test_supabase_dish_repository_parses_json_columns() -> None:
    client = FakeSupabaseClient()
    dishes_table = client.table("dishes")
    dish_id = str(uuid4())
    dishes_table.queue("insert", [_dish_row(dish_id)])
    dishes_table.queue("select", [_dish_row(dish_id)])

    repository = SupabaseDishRepository(client)
    owner = uuid4()
    created = repository.create_dish(owner, {"name": "Soup"})
    listed = repository.list_dishes()

    assert created.ingredients[0].quantity == 2
    assert created.nutrition.calories == 180
    assert created.created_at == date(2024, 3, 1)
    assert listed[0].approved
    assert dishes_table.last_payload["owner_id"] == str(owner)
    assert repository.get_dish(uuid4()) is None


def test_supabase_ingredient_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("ingredients")
    ingredient_id = str(uuid4())
    table.queue(
        "select",
        [
            {
                "id": ingredient_id,
                "name": "Milk",
                "category": "Dairy",
                "stock": 1,
                "min_stock": 2,
            }
        ],
    )

    repository = SupabaseIngredientRepository(client)
    ingredients = repository.list_ingredients()

    assert ingredients[0].is_low_stock
    with pytest.raises(RepositoryError):
        repository.create_ingredient({"name": "Egg"})


def test_supabase_meal_plan_repository_inserts_then_updates() -> None:
    client = FakeSupabaseClient()
    table = client.table("mealPlans")
    user_id = uuid4()
    dish = PlannedDish(
        dish_id=uuid4(),
        name="Soup",
        category="dinner",
        cooking_time_min=20,
        servings=2,
        calories=180,
    )
    stored = {
        "user_id": str(user_id),
        "date": "2024-03-04",
        "dinner": {"dish_id": str(dish.dish_id), "name": "Soup", "calories": 180},
        "lunch": None,
    }
    table.queue("select", [])
    table.queue("insert", [stored])
    table.queue("select", [stored])
    table.queue("update", [{**stored, "dinner": None}])

    repository = SupabaseMealPlanRepository(client)
    created = repository.set_slot(user_id, date(2024, 3, 4), "dinner", dish)
    inserted_payload = table.last_payload
    cleared = repository.clear_slot(user_id, date(2024, 3, 4), "dinner")

    assert created.dinner is not None
    assert created.dinner.calories == 180
    assert inserted_payload["dinner"]["name"] == "Soup"
    assert table.last_payload == {"dinner": None}
    assert cleared is not None
    assert cleared.planned() == []


def test_supabase_meal_plan_repository_filters_range() -> None:
    client = FakeSupabaseClient()
    table = client.table("mealPlans")

    repository = SupabaseMealPlanRepository(client)
    repository.list_plans(uuid4(), date(2024, 3, 4), date(2024, 3, 10))

    assert ("date>=", "2024-03-04") in table.last_filters
    assert ("date<=", "2024-03-10") in table.last_filters


def test_supabase_meal_plan_repository_lists_and_deletes_across_users() -> None:
    client = FakeSupabaseClient()
    table = client.table("mealPlans")
    user_id = uuid4()
    table.queue("select", [{"user_id": str(user_id), "date": "2024-03-05"}])

    repository = SupabaseMealPlanRepository(client)
    everyone = repository.list_all(date(2024, 3, 4), date(2024, 3, 10))
    unfiltered = list(table.last_filters)
    repository.list_all(date(2024, 3, 4), date(2024, 3, 10), user_id)
    repository.delete_plan(user_id, date(2024, 3, 5))

    assert [plan.day for plan in everyone] == [date(2024, 3, 5)]
    assert not any(column == "user_id" for column, _ in unfiltered)
    assert ("user_id", str(user_id)) in table.last_filters
    assert ("date", "2024-03-05") in table.last_filters


def test_supabase_shopping_list_repository_tolerates_bad_items() -> None:
    client = FakeSupabaseClient()
    table = client.table("shoppingLists")
    list_id = str(uuid4())
    table.queue(
        "select",
        [{"id": list_id, "user_id": str(uuid4()), "name": "Week", "items": "oops"}],
    )
    table.queue(
        "select",
        [
            {
                "id": list_id,
                "user_id": str(uuid4()),
                "name": "Week",
                "items": [{"id": "a", "name": "Milk", "purchased": True}],
                "start_date": "2024-03-04",
            }
        ],
    )

    repository = SupabaseShoppingListRepository(client)
    broken = repository.get_list(UUID(list_id))
    lists = repository.list_all(status="completed")

    assert broken is not None
    assert broken.items == []
    assert lists[0].items[0].category == "Other"
    assert lists[0].progress == 100
    assert ("status", "completed") in table.last_filters


def test_supabase_stock_repository_drops_derived_fields() -> None:
    client = FakeSupabaseClient()
    table = client.table("stockItems")
    item_id = str(uuid4())
    table.queue(
        "insert",
        [
            {
                "id": item_id,
                "user_id": str(uuid4()),
                "name": "Rice",
                "current_stock": 0,
                "min_stock": 5,
                "max_stock": 50,
                "status": "optimal",
            }
        ],
    )

    repository = SupabaseStockRepository(client)
    item = repository.create_item(
        uuid4(), {"name": "Rice", "status": "optimal", "stock_value": 99}
    )

    assert item.status == "critical"
    assert "status" not in table.last_payload
    assert "stock_value" not in table.last_payload


def test_supabase_activity_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("activityEvents")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "event_type": "dish_added",
                "details": {"dish_name": "Soup"},
                "created_at": "2024-03-01T10:00:00+00:00",
            }
        ],
    )

    repository = SupabaseActivityRepository(client)
    repository.create_event(user_id, "dish_added", {"dish_name": "Soup"})
    events = repository.list_events(user_id, 10)

    assert table.last_payload["event_type"] == "dish_added"
    assert events[0].details == {"dish_name": "Soup"}


def test_supabase_admin_repository_counts() -> None:
    client = FakeSupabaseClient()
    client.table("users").count = 3
    client.table("dishes").count = 2

    repository = SupabaseAdminRepository(client)

    assert repository.count_users() == 3
    assert repository.count_approved_dishes() == 2
    assert ("approved", True) in client.table("dishes").last_filters
    assert repository.count_shopping_lists() == 0


def test_supabase_auth_gateway_maps_users() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.auth.user = SimpleNamespace(
        id=str(user_id),
        email="sam@example.com",
        user_metadata={"display_name": "Sam Lee"},
    )

    gateway = SupabaseAuthGateway(client)
    session = gateway.sign_up("sam@example.com", "secret1", "Sam Lee")

    assert session.user.id == user_id
    assert session.user.display_name == "Sam Lee"
    assert session.access_token is None


def test_supabase_auth_gateway_wraps_errors() -> None:
    client = FakeSupabaseClient()
    client.auth.error = RuntimeError("invalid login")

    gateway = SupabaseAuthGateway(client)

    with pytest.raises(AuthenticationError):
        gateway.sign_in("sam@example.com", "nope")
    with pytest.raises(AuthenticationError):
        gateway.get_user("token")
