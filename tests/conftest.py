"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from smartmeal.adapters.google_maps_client import MapsClient
from smartmeal.adapters.supabase_dish_repository import parse_dish
from smartmeal.adapters.supabase_ingredient_repository import parse_ingredient
from smartmeal.adapters.supabase_shopping_list_repository import parse_shopping_list
from smartmeal.adapters.supabase_stock_repository import parse_stock_item
from smartmeal.config import Settings
from smartmeal.containers import AppContainer
from smartmeal.domain.activity import ActivityEvent
from smartmeal.domain.auth import AuthSession, AuthUser
from smartmeal.domain.dishes import Dish
from smartmeal.domain.ingredients import Ingredient
from smartmeal.domain.models import ROLE_ADMIN, UserProfile
from smartmeal.domain.planning import MealPlan, PlannedDish
from smartmeal.domain.shopping import ShoppingList
from smartmeal.domain.stock import StockItem
from smartmeal.errors import AuthenticationError
from smartmeal.services.activity import ActivityRepository, ActivityService
from smartmeal.services.admin import AdminRepository, AdminService
from smartmeal.services.auth import AuthGateway, AuthService
from smartmeal.services.cache import TTLCache
from smartmeal.services.dashboard import DashboardService
from smartmeal.services.dishes import DishRepository, DishService
from smartmeal.services.ingredients import IngredientRepository, IngredientService
from smartmeal.services.markets import MarketService
from smartmeal.services.planning import MealPlanRepository, PlanningService
from smartmeal.services.shopping import ShoppingListRepository, ShoppingService
from smartmeal.services.stock import StockRepository, StockService
from smartmeal.services.users import UserRepository, UserService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_profile(self, profile: UserProfile) -> UserProfile:
        created = replace(profile, created_at=datetime.now(tz=UTC))
        self.profiles[profile.id] = created
        return created

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        updated = replace(
            self.profiles[user_id], **payload, updated_at=datetime.now(tz=UTC)
        )
        self.profiles[user_id] = updated
        return updated

    def list_profiles(self) -> list[UserProfile]:
        return list(self.profiles.values())

    def delete_profile(self, user_id: UUID) -> None:
        self.profiles.pop(user_id, None)


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway that keeps identities and tokens in memory."""

    passwords: dict[str, str] = field(default_factory=dict)
    users: dict[str, AuthUser] = field(default_factory=dict)
    tokens: dict[str, AuthUser] = field(default_factory=dict)

    def sign_up(self, email: str, password: str, display_name: str) -> AuthSession:
        if email in self.users:
            raise AuthenticationError("Registration failed: already registered")
        user = AuthUser(id=uuid4(), email=email, display_name=display_name)
        self.users[email] = user
        self.passwords[email] = password
        return self._session(user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        if self.passwords.get(email) != password:
            raise AuthenticationError("Invalid credentials")
        return self._session(self.users[email])

    def get_user(self, access_token: str) -> AuthUser:
        user = self.tokens.get(access_token)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user

    def _session(self, user: AuthUser) -> AuthSession:
        token = f"token-{user.id}"
        self.tokens[token] = user
        return AuthSession(user=user, access_token=token, refresh_token="refresh")


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity repository for tests."""

    events: list[ActivityEvent] = field(default_factory=list)

    def create_event(
        self, user_id: UUID, event_type: str, details: dict[str, object]
    ) -> None:
        self.events.append(
            ActivityEvent(
                id=uuid4(),
                user_id=user_id,
                event_type=event_type,
                details=details,
                created_at=datetime.now(tz=UTC),
            )
        )

    def list_events(self, user_id: UUID, limit: int) -> list[ActivityEvent]:
        return [event for event in self.events if event.user_id == user_id][-limit:]


@dataclass
class InMemoryDishRepository(DishRepository):
    """Stores dish rows the way the dishes table would."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_dish(self, owner_id: UUID | None, payload: dict[str, object]) -> Dish:
        dish_id = uuid4()
        self.rows[dish_id] = {
            "id": str(dish_id),
            "owner_id": str(owner_id) if owner_id else None,
            **payload,
        }
        return parse_dish(self.rows[dish_id])

    def update_dish(self, dish_id: UUID, payload: dict[str, object]) -> Dish:
        self.rows[dish_id] = {**self.rows[dish_id], **payload}
        return parse_dish(self.rows[dish_id])

    def get_dish(self, dish_id: UUID) -> Dish | None:
        row = self.rows.get(dish_id)
        return parse_dish(row) if row else None

    def list_dishes(self) -> list[Dish]:
        return sorted(
            (parse_dish(row) for row in self.rows.values()), key=lambda d: d.name
        )

    def delete_dish(self, dish_id: UUID) -> None:
        self.rows.pop(dish_id, None)


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient catalog."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        ingredient_id = uuid4()
        self.rows[ingredient_id] = {"id": str(ingredient_id), **payload}
        return parse_ingredient(self.rows[ingredient_id])

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        self.rows[ingredient_id] = {**self.rows[ingredient_id], **payload}
        return parse_ingredient(self.rows[ingredient_id])

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        row = self.rows.get(ingredient_id)
        return parse_ingredient(row) if row else None

    def list_ingredients(self) -> list[Ingredient]:
        return sorted(
            (parse_ingredient(row) for row in self.rows.values()),
            key=lambda ingredient: ingredient.name,
        )

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        self.rows.pop(ingredient_id, None)


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """Day plans keyed by user and date."""

    plans: dict[tuple[UUID, date], MealPlan] = field(default_factory=dict)

    def get_plan(self, user_id: UUID, day: date) -> MealPlan | None:
        return self.plans.get((user_id, day))

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        return [
            plan
            for (owner, day), plan in sorted(
                self.plans.items(), key=lambda entry: entry[0][1]
            )
            if owner == user_id and start <= day <= end
        ]

    def set_slot(
        self, user_id: UUID, day: date, slot: str, dish: PlannedDish
    ) -> MealPlan:
        current = self.plans.get((user_id, day)) or MealPlan(user_id=user_id, day=day)
        self.plans[(user_id, day)] = replace(current, **{slot: dish})
        return self.plans[(user_id, day)]

    def clear_slot(self, user_id: UUID, day: date, slot: str) -> MealPlan | None:
        current = self.plans.get((user_id, day))
        if current is None:
            return None
        self.plans[(user_id, day)] = replace(current, **{slot: None})
        return self.plans[(user_id, day)]

    def count_plans(self) -> int:
        return len(self.plans)

    def list_all(
        self, start: date, end: date, user_id: UUID | None = None
    ) -> list[MealPlan]:
        return [
            plan
            for (owner, day), plan in sorted(
                self.plans.items(), key=lambda entry: entry[0][1], reverse=True
            )
            if start <= day <= end and user_id in (None, owner)
        ]

    def delete_plan(self, user_id: UUID, day: date) -> None:
        self.plans.pop((user_id, day), None)


@dataclass
class InMemoryShoppingListRepository(ShoppingListRepository):
    """Stores shopping list rows with their JSON items."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_list(self, user_id: UUID, payload: dict[str, object]) -> ShoppingList:
        list_id = uuid4()
        self.rows[list_id] = {
            "id": str(list_id),
            "user_id": str(user_id),
            "generated_at": datetime.now(tz=UTC).isoformat(),
            **payload,
        }
        return parse_shopping_list(self.rows[list_id])

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        row = self.rows.get(list_id)
        return parse_shopping_list(row) if row else None

    def list_for_user(self, user_id: UUID) -> list[ShoppingList]:
        return [
            parse_shopping_list(row)
            for row in self.rows.values()
            if row["user_id"] == str(user_id)
        ]

    def list_all(self, status: str | None = None) -> list[ShoppingList]:
        return [
            parse_shopping_list(row)
            for row in self.rows.values()
            if status is None or row.get("status") == status
        ]

    def update_list(self, list_id: UUID, payload: dict[str, object]) -> ShoppingList:
        self.rows[list_id] = {**self.rows[list_id], **payload}
        return parse_shopping_list(self.rows[list_id])

    def delete_list(self, list_id: UUID) -> None:
        self.rows.pop(list_id, None)


@dataclass
class InMemoryStockRepository(StockRepository):
    """Stores stock item rows."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> StockItem:
        item_id = uuid4()
        self.rows[item_id] = {"id": str(item_id), "user_id": str(user_id), **payload}
        return parse_stock_item(self.rows[item_id])

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> StockItem:
        self.rows[item_id] = {**self.rows[item_id], **payload}
        return parse_stock_item(self.rows[item_id])

    def get_item(self, item_id: UUID) -> StockItem | None:
        row = self.rows.get(item_id)
        return parse_stock_item(row) if row else None

    def list_items(self, user_id: UUID | None) -> list[StockItem]:
        return [
            parse_stock_item(row)
            for row in self.rows.values()
            if user_id is None or row["user_id"] == str(user_id)
        ]

    def delete_item(self, item_id: UUID) -> None:
        self.rows.pop(item_id, None)


@dataclass
class InMemoryAdminRepository(AdminRepository):
    """Counts over the other in-memory repositories."""

    users: InMemoryUserRepository
    dishes: InMemoryDishRepository
    plans: InMemoryMealPlanRepository
    shopping_lists: InMemoryShoppingListRepository

    def count_users(self) -> int:
        return len(self.users.profiles)

    def count_approved_dishes(self) -> int:
        return sum(1 for dish in self.dishes.list_dishes() if dish.approved)

    def count_meal_plans(self) -> int:
        return self.plans.count_plans()

    def count_shopping_lists(self) -> int:
        return len(self.shopping_lists.rows)

    def list_users(self) -> list[UserProfile]:
        return self.users.list_profiles()


@dataclass
class FakeMapsClient(MapsClient):
    """Maps client returning canned payloads."""

    geocode_payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": "OK",
            "results": [{"geometry": {"location": {"lat": 48.86, "lng": 2.35}}}],
        }
    )
    matrix_payload: dict[str, object] | None = None
    fail: bool = False
    geocode_calls: list[str] = field(default_factory=list)
    matrix_calls: list[tuple[str, list[str]]] = field(default_factory=list)

    async def geocode(self, address: str) -> dict[str, object]:
        self.geocode_calls.append(address)
        if self.fail:
            raise RuntimeError("maps unavailable")
        return self.geocode_payload

    async def distance_matrix(
        self, origin: str, destinations: list[str], mode: str = "walking"
    ) -> dict[str, object]:
        self.matrix_calls.append((origin, destinations))
        if self.fail:
            raise RuntimeError("maps unavailable")
        if self.matrix_payload is not None:
            return self.matrix_payload
        return {
            "status": "OK",
            "rows": [
                {
                    "elements": [
                        {
                            "distance": {"value": 500 * (index + 1)},
                            "duration": {"text": f"{6 * (index + 1)} mins"},
                        }
                        for index, _ in enumerate(destinations)
                    ]
                }
            ],
        }


def dish_payload(  # noqa: PLR0913
    name: str = "Ratatouille",
    category: str = "dinner",
    servings: int = 2,
    calories: float = 350,
    ingredients: list[dict[str, object]] | None = None,
    **extra: object,
) -> dict[str, object]:
    """Dish fields as the API submits them."""
    return {
        "name": name,
        "description": f"Homemade {name.lower()}",
        "category": category,
        "cooking_time_min": 30,
        "servings": servings,
        "difficulty": "easy",
        "ingredients": ingredients
        if ingredients is not None
        else [
            {"name": "Tomato", "quantity": 4, "unit": "pcs"},
            {"name": "Zucchini", "quantity": 2, "unit": "pcs"},
        ],
        "instructions": ["Chop", "Simmer"],
        "nutrition": {"calories": calories, "protein_g": 5, "carbs_g": 20, "fat_g": 8},
        **extra,
    }


def stock_payload(**overrides: object) -> dict[str, object]:
    """Stock item fields with an optimal level by default."""
    return {
        "name": "Rice",
        "category": "Grocery",
        "current_stock": 20,
        "min_stock": 5,
        "max_stock": 50,
        "unit": "kg",
        "cost": 2.5,
        "weekly_consumption": 7,
        "monthly_consumption": 28,
        **overrides,
    }


def make_profile(
    container: AppContainer,
    email: str = "cook@example.com",
    *,
    admin: bool = False,
    setup: bool = True,
) -> UserProfile:
    """Create a signed-up profile directly in the repositories."""
    session = container.auth_service.gateway.sign_up(email, "secret1", "Alex Cook")
    profile = container.user_service.ensure_profile(session.user)
    if setup:
        profile = container.user_service.complete_setup(
            profile.id,
            first_name="Alex",
            last_name="Cook",
            age=34,
            gender="other",
            diet_preference="standard",
            household_size=4,
        )
    if admin:
        profile = container.user_service.repository.update_profile(
            profile.id, {"role": ROLE_ADMIN}
        )
    return profile


def auth_headers(profile: UserProfile) -> dict[str, str]:
    """Bearer header for a profile created by make_profile."""
    return {"Authorization": f"Bearer token-{profile.id}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        admin_emails="boss@example.com",
        google_maps_api_key=None,
        environment="test",
    )


@pytest.fixture
def maps_client() -> FakeMapsClient:
    return FakeMapsClient()


@pytest.fixture
def container(settings: Settings, maps_client: FakeMapsClient) -> AppContainer:
    user_repository = InMemoryUserRepository()
    dish_repository = InMemoryDishRepository()
    plan_repository = InMemoryMealPlanRepository()
    shopping_repository = InMemoryShoppingListRepository()

    activity_service = ActivityService(InMemoryActivityRepository())
    user_service = UserService(user_repository, admin_emails={"boss@example.com"})
    dish_service = DishService(dish_repository, activity_service)
    ingredient_service = IngredientService(InMemoryIngredientRepository())
    planning_service = PlanningService(plan_repository, dish_service, activity_service)
    shopping_service = ShoppingService(
        repository=shopping_repository,
        plan_repository=plan_repository,
        dish_service=dish_service,
        ingredient_service=ingredient_service,
        activity_service=activity_service,
    )
    stock_service = StockService(InMemoryStockRepository(), activity_service)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(FakeAuthGateway()),
        user_service=user_service,
        activity_service=activity_service,
        dish_service=dish_service,
        ingredient_service=ingredient_service,
        planning_service=planning_service,
        shopping_service=shopping_service,
        stock_service=stock_service,
        market_service=MarketService(maps_client=maps_client, cache=TTLCache()),
        dashboard_service=DashboardService(
            dish_service, planning_service, shopping_service
        ),
        admin_service=AdminService(
            admin_repository=InMemoryAdminRepository(
                users=user_repository,
                dishes=dish_repository,
                plans=plan_repository,
                shopping_lists=shopping_repository,
            ),
            shopping_repository=shopping_repository,
            plan_repository=plan_repository,
        ),
        close_resources=close_resources,
    )
