"""Tests for stock status rules and the stock service."""

import math
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from smartmeal.domain.stock import classify_stock, days_until_stockout
from smartmeal.errors import NotFoundError, ValidationError
from smartmeal.services.activity import ActivityService
from smartmeal.services.stock import StockService
from tests.conftest import (
    InMemoryActivityRepository,
    InMemoryStockRepository,
    stock_payload,
)


def _service() -> StockService:
    return StockService(
        InMemoryStockRepository(), ActivityService(InMemoryActivityRepository())
    )


@pytest.mark.parametrize(
    ("current", "minimum", "maximum", "expected"),
    [
        (0, 10, 50, "critical"),
        (0, 0, 0, "critical"),
        (-3, 10, 50, "critical"),
        (5, 10, 50, "low"),
        (10, 10, 50, "low"),
        (60, 10, 50, "overstocked"),
        (30, 10, 50, "optimal"),
        (50, 10, 50, "optimal"),
    ],
)
def test_classify_stock(current, minimum, maximum, expected) -> None:
    assert classify_stock(current, minimum, maximum) == expected


def test_days_until_stockout() -> None:
    assert days_until_stockout(10, 7) == 10
    assert days_until_stockout(3, 14) == 1
    assert days_until_stockout(5, 0) == math.inf


def test_stock_value_and_status_are_derived() -> None:
    service = _service()
    item = service.create_item(
        uuid4(), {**stock_payload(current_stock=3.333, cost=3), "status": "optimal"}
    )

    assert item.status == "low"
    assert item.stock_value == 10.0


def test_list_items_filters_and_sorts() -> None:
    service = _service()
    user_id = uuid4()
    service.create_item(user_id, stock_payload(name="Rice", current_stock=20))
    service.create_item(
        user_id, stock_payload(name="Milk", category="Dairy", current_stock=2)
    )
    service.create_item(user_id, stock_payload(name="apples", current_stock=0))
    service.create_item(uuid4(), stock_payload(name="Other user"))

    by_name = [item.name for item in service.list_items(user_id)]
    by_stock = [item.name for item in service.list_items(user_id, sort_by="stock")]
    dairy = service.list_items(user_id, category="Dairy")
    critical = service.list_items(user_id, status="critical")

    assert by_name == ["apples", "Milk", "Rice"]
    assert by_stock == ["apples", "Milk", "Rice"]
    assert [item.name for item in dairy] == ["Milk"]
    assert [item.name for item in critical] == ["apples"]
    assert service.categories(user_id) == ["Grocery", "Dairy"]


def test_list_items_rejects_unknown_sort_key() -> None:
    with pytest.raises(ValidationError):
        _service().list_items(uuid4(), sort_by="color")


def test_stats_counts_statuses_and_costs() -> None:
    service = _service()
    user_id = uuid4()
    service.create_item(user_id, stock_payload(current_stock=0))
    service.create_item(user_id, stock_payload(current_stock=4))
    service.create_item(user_id, stock_payload(current_stock=80))

    stats = service.stats(user_id)

    assert stats.total_items == 3
    assert stats.critical_items == 1
    assert stats.low_stock_items == 1
    assert stats.overstocked_items == 1
    assert stats.total_value == 210.0
    assert stats.weekly_consumption_cost == 52.5
    assert stats.monthly_consumption_cost == 210.0


def test_alerts_include_soon_expiring_items() -> None:
    service = _service()
    user_id = uuid4()
    today = date(2024, 3, 10)
    service.create_item(user_id, stock_payload(name="Low", current_stock=2))
    service.create_item(
        user_id,
        stock_payload(
            name="Yogurt", expiration_date=(today + timedelta(days=2)).isoformat()
        ),
    )
    service.create_item(
        user_id,
        stock_payload(
            name="Flour", expiration_date=(today + timedelta(days=30)).isoformat()
        ),
    )

    names = sorted(item.name for item in service.alerts(user_id, today=today))

    assert names == ["Low", "Yogurt"]


def test_predict_stockouts_keeps_alert_window() -> None:
    service = _service()
    user_id = uuid4()
    service.create_item(user_id, stock_payload(name="Soon", current_stock=3))
    service.create_item(user_id, stock_payload(name="Week", current_stock=7))
    service.create_item(user_id, stock_payload(name="Eight", current_stock=8))
    service.create_item(user_id, stock_payload(name="Later", current_stock=20))
    service.create_item(user_id, stock_payload(name="Unused", weekly_consumption=0))
    service.create_item(user_id, stock_payload(name="Empty", current_stock=0))
    # Half a unit at one unit a day rounds down to zero days left.
    service.create_item(user_id, stock_payload(name="Crumbs", current_stock=0.5))

    predictions = service.predict_stockouts(user_id)

    assert [(p.item.name, p.days_until_stockout) for p in predictions] == [
        ("Soon", 3),
        ("Week", 7),
    ]


def test_restock_adds_quantity_and_records_activity() -> None:
    activity = InMemoryActivityRepository()
    service = StockService(InMemoryStockRepository(), ActivityService(activity))
    user_id = uuid4()
    item = service.create_item(user_id, stock_payload(current_stock=2))

    restocked = service.restock(item.id, 10)

    assert restocked.current_stock == 12
    assert restocked.last_restocked == datetime.now(tz=UTC).date()
    assert activity.events[0].event_type == "stock_added"
    assert activity.events[0].details["item_name"] == "Rice"


def test_restock_rejects_non_positive_quantity() -> None:
    service = _service()
    item = service.create_item(uuid4(), stock_payload())

    with pytest.raises(ValidationError):
        service.restock(item.id, 0)


def test_restock_orders_fill_to_maximum() -> None:
    service = _service()
    user_id = uuid4()
    service.create_item(user_id, stock_payload(name="Low", current_stock=4))
    service.create_item(user_id, stock_payload(name="Gone", current_stock=0))
    service.create_item(user_id, stock_payload(name="Fine", current_stock=30))

    orders = {
        order.item.name: order.quantity for order in service.restock_orders(user_id)
    }

    assert orders == {"Low": 46, "Gone": 50}


def test_thresholds_are_checked() -> None:
    with pytest.raises(ValidationError):
        _service().create_item(uuid4(), stock_payload(min_stock=60, max_stock=50))


def test_unknown_item_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        _service().delete_item(uuid4())
