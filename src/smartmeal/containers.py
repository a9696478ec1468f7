"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from smartmeal.adapters.google_maps_client import HttpxMapsClient
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
from smartmeal.config import Settings, parse_admin_emails
from smartmeal.services.activity import ActivityService
from smartmeal.services.admin import AdminService
from smartmeal.services.auth import AuthService
from smartmeal.services.cache import TTLCache
from smartmeal.services.dashboard import DashboardService
from smartmeal.services.dishes import DishService
from smartmeal.services.ingredients import IngredientService
from smartmeal.services.markets import MarketService
from smartmeal.services.planning import PlanningService
from smartmeal.services.shopping import ShoppingService
from smartmeal.services.stock import StockService
from smartmeal.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    user_service: UserService
    activity_service: ActivityService
    dish_service: DishService
    ingredient_service: IngredientService
    planning_service: PlanningService
    shopping_service: ShoppingService
    stock_service: StockService
    market_service: MarketService
    dashboard_service: DashboardService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    plan_repository = SupabaseMealPlanRepository(supabase_client)
    shopping_repository = SupabaseShoppingListRepository(supabase_client)

    activity_service = ActivityService(SupabaseActivityRepository(supabase_client))
    user_service = UserService(
        SupabaseUserRepository(supabase_client),
        admin_emails=parse_admin_emails(resolved_settings.admin_emails),
    )
    dish_service = DishService(
        SupabaseDishRepository(supabase_client), activity_service
    )
    ingredient_service = IngredientService(
        SupabaseIngredientRepository(supabase_client)
    )
    planning_service = PlanningService(plan_repository, dish_service, activity_service)
    shopping_service = ShoppingService(
        repository=shopping_repository,
        plan_repository=plan_repository,
        dish_service=dish_service,
        ingredient_service=ingredient_service,
        activity_service=activity_service,
    )
    stock_service = StockService(
        SupabaseStockRepository(supabase_client),
        activity_service,
        expiry_alert_days=resolved_settings.stock_expiry_alert_days,
        stockout_window_days=resolved_settings.stockout_window_days,
    )
    maps_client = (
        HttpxMapsClient.create(
            api_key=resolved_settings.google_maps_api_key,
            base_url=resolved_settings.google_maps_base_url,
        )
        if resolved_settings.google_maps_api_key
        else None
    )
    market_service = MarketService(maps_client=maps_client, cache=TTLCache())

    async def close_resources() -> None:
        if maps_client is not None:
            await maps_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(SupabaseAuthGateway(supabase_client)),
        user_service=user_service,
        activity_service=activity_service,
        dish_service=dish_service,
        ingredient_service=ingredient_service,
        planning_service=planning_service,
        shopping_service=shopping_service,
        stock_service=stock_service,
        market_service=market_service,
        dashboard_service=DashboardService(
            dish_service, planning_service, shopping_service
        ),
        admin_service=AdminService(
            admin_repository=SupabaseAdminRepository(supabase_client),
            shopping_repository=shopping_repository,
            plan_repository=plan_repository,
        ),
        close_resources=close_resources,
    )
