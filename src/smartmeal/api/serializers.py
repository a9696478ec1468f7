"""Conversion of domain objects to JSON-ready dicts."""

import math
from dataclasses import asdict

from smartmeal.domain.planning import MealPlan, WeekPlan
from smartmeal.domain.shopping import ShoppingList, group_items_by_category
from smartmeal.domain.stock import StockItem


def stock_item(item: StockItem) -> dict[str, object]:
    """Stored fields plus the derived status and value."""
    days = item.days_until_stockout
    return {
        **asdict(item),
        "status": item.status,
        "stock_value": item.stock_value,
        "days_until_stockout": None if math.isinf(days) else int(days),
    }


def shopping_list(item_list: ShoppingList) -> dict[str, object]:
    return {
        **asdict(item_list),
        "purchased_count": item_list.purchased_count,
        "progress": round(item_list.progress, 1),
        "items_by_category": {
            category: [asdict(item) for item in items]
            for category, items in group_items_by_category(item_list.items).items()
        },
    }


def meal_plan(plan: MealPlan) -> dict[str, object]:
    return {**asdict(plan), "total_calories": plan.total_calories}


def week_plan(week: WeekPlan) -> dict[str, object]:
    return {
        "start": week.start,
        "end": week.end,
        "planned_meals": week.planned_meal_count,
        "total_calories": week.total_calories,
        "days": [meal_plan(day) for day in week.days],
    }
