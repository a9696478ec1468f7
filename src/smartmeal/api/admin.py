"""Admin console endpoints."""

from dataclasses import asdict
from datetime import UTC, date, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse

from smartmeal.api import serializers
from smartmeal.api.deps import get_container, require_admin
from smartmeal.api.schemas import IngredientIn
from smartmeal.api.stock import stock_summary
from smartmeal.containers import AppContainer
from smartmeal.services.dishes import DishFilter

router = APIRouter(prefix="/admin", tags=["admin"])

_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/overview", dependencies=[Depends(require_admin)])
async def overview(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return record counts across all users."""
    return asdict(container.admin_service.overview())


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every user with their setup state."""
    return {"users": container.admin_service.list_users()}


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_user(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> None:
    """Delete a user profile."""
    container.user_service.delete_profile(user_id)


@router.get("/meal-plans", dependencies=[Depends(require_admin)])
async def list_meal_plans(
    day: date | None = None,
    user_id: UUID | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every user's day plans for one week with its stats."""
    report = container.admin_service.weekly_planning_report(
        day or datetime.now(tz=UTC).date(), user_id
    )
    return {
        "start": report.start,
        "end": report.end,
        "total_plans": report.total_plans,
        "planned_meals": report.planned_meals,
        "average_calories": report.average_calories,
        "total_users": report.total_users,
        "plans": [serializers.meal_plan(plan) for plan in report.plans],
    }


@router.delete(
    "/meal-plans/{user_id}/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_meal_plan(
    user_id: UUID, day: date, container: AppContainer = Depends(get_container)
) -> None:
    """Delete one user's plan for a day."""
    container.planning_service.delete_plan(user_id, day)


@router.get("/dishes", dependencies=[Depends(require_admin)])
async def list_dishes(
    search: str | None = None,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every dish, pending review included."""
    dishes = container.dish_service.list_all(
        DishFilter(search=search, category=category)
    )
    return {"dishes": [asdict(dish) for dish in dishes]}


@router.post("/dishes/{dish_id}/approve", dependencies=[Depends(require_admin)])
async def approve_dish(
    dish_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Publish a dish."""
    return asdict(container.dish_service.approve_dish(dish_id))


@router.delete(
    "/dishes/{dish_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_dish(
    dish_id: UUID, container: AppContainer = Depends(get_container)
) -> None:
    """Delete any dish."""
    container.dish_service.delete_dish(dish_id)


@router.get("/ingredients", dependencies=[Depends(require_admin)])
async def list_ingredients(
    search: str | None = None,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search the ingredient catalog."""
    ingredients = container.ingredient_service.search(search, category)
    return {"ingredients": [asdict(item) for item in ingredients]}


@router.get("/ingredients/low-stock", dependencies=[Depends(require_admin)])
async def low_stock_ingredients(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return ingredients at or below their minimum stock."""
    ingredients = container.ingredient_service.low_stock()
    return {"ingredients": [asdict(item) for item in ingredients]}


@router.post(
    "/ingredients",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_ingredient(
    body: IngredientIn, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Add a catalog entry."""
    return asdict(container.ingredient_service.create(body.model_dump()))


@router.put("/ingredients/{ingredient_id}", dependencies=[Depends(require_admin)])
async def update_ingredient(
    ingredient_id: UUID,
    body: IngredientIn,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace a catalog entry."""
    ingredient = container.ingredient_service.update(ingredient_id, body.model_dump())
    return asdict(ingredient)


@router.delete(
    "/ingredients/{ingredient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_ingredient(
    ingredient_id: UUID, container: AppContainer = Depends(get_container)
) -> None:
    """Remove a catalog entry."""
    container.ingredient_service.delete(ingredient_id)


@router.get("/reports/shopping", dependencies=[Depends(require_admin)])
async def shopping_report(
    month: str = Query(pattern=_MONTH_PATTERN),
    status_filter: str | None = Query(default=None, alias="status"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return shopping totals for one month (YYYY-MM)."""
    report = container.admin_service.monthly_shopping_report(month, status_filter)
    return asdict(report)


@router.delete(
    "/shopping-lists/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_shopping_list(
    list_id: UUID, container: AppContainer = Depends(get_container)
) -> None:
    """Delete any user's shopping list."""
    container.shopping_service.delete_list(list_id)


@router.get("/stock", dependencies=[Depends(require_admin)])
async def list_stock(
    category: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    sort_by: str = "name",
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return stock items of every user with the overall summary."""
    items = container.stock_service.list_items(
        None, category=category, status=status_filter, sort_by=sort_by
    )
    return {
        "items": [serializers.stock_item(item) for item in items],
        "categories": container.stock_service.categories(None),
        **stock_summary(container, None),
    }


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal admin console that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>SmartMeal Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 240px; margin-right: 0.5rem; }
      button { padding: 0.4rem 0.8rem; margin: 0 0.5rem 0.5rem 0; }
      pre { background: #f4f7f2; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>SmartMeal Admin</h1>
    <div class="row">
      <input id="token" type="password" placeholder="X-Admin-Token" />
      <input id="month" type="month" />
    </div>
    <div class="row">
      <button onclick="load('/admin/overview')">Overview</button>
      <button onclick="load('/admin/users')">Users</button>
      <button onclick="load('/admin/dishes')">Dishes</button>
      <button onclick="load('/admin/meal-plans')">Meal plans</button>
      <button onclick="load('/admin/ingredients')">Ingredients</button>
      <button onclick="load('/admin/stock')">Stock</button>
      <button onclick="loadReport()">Shopping report</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      async function load(path) {
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch(path, {
          headers: { 'X-Admin-Token': document.getElementById('token').value }
        });
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        output.textContent = JSON.stringify(await res.json(), null, 2);
      }
      function loadReport() {
        const month = document.getElementById('month').value;
        load('/admin/reports/shopping?month=' + encodeURIComponent(month));
      }
    </script>
  </body>
</html>
"""
