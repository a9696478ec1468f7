"""Stock tracker endpoints."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from smartmeal.api import serializers
from smartmeal.api.deps import get_container, require_setup
from smartmeal.api.schemas import RestockRequest, StockItemIn
from smartmeal.containers import AppContainer
from smartmeal.domain.models import UserProfile
from smartmeal.domain.stock import StockItem
from smartmeal.errors import NotFoundError

router = APIRouter(prefix="/stock", tags=["stock"])


def _owned_item(container: AppContainer, user: UserProfile, item_id: UUID) -> StockItem:
    item = container.stock_service.get_item(item_id)
    if item.user_id != user.id and not user.is_admin:
        raise NotFoundError(f"Stock item {item_id} not found")
    return item


def _stored_fields(body: StockItemIn) -> dict[str, object]:
    payload = body.model_dump()
    expiration = payload["expiration_date"]
    payload["expiration_date"] = expiration.isoformat() if expiration else None
    return payload


@router.get("")
async def list_items(
    category: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    sort_by: str = "name",
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's items with their derived status."""
    items = container.stock_service.list_items(
        user.id, category=category, status=status_filter, sort_by=sort_by
    )
    return {
        "items": [serializers.stock_item(item) for item in items],
        "categories": container.stock_service.categories(user.id),
    }


@router.get("/summary")
async def summary(
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return stats, alerts, stockout predictions and restock orders."""
    return stock_summary(container, user.id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(
    body: StockItemIn,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Add an item to the caller's stock."""
    item = container.stock_service.create_item(user.id, _stored_fields(body))
    return serializers.stock_item(item)


@router.put("/{item_id}")
async def update_item(
    item_id: UUID,
    body: StockItemIn,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace an item's fields."""
    _owned_item(container, user, item_id)
    item = container.stock_service.update_item(item_id, _stored_fields(body))
    return serializers.stock_item(item)


@router.post("/{item_id}/restock")
async def restock(
    item_id: UUID,
    body: RestockRequest,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Add quantity to an item."""
    _owned_item(container, user, item_id)
    item = container.stock_service.restock(item_id, body.quantity)
    return serializers.stock_item(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> None:
    """Delete an item."""
    _owned_item(container, user, item_id)
    container.stock_service.delete_item(item_id)


def stock_summary(container: AppContainer, user_id: UUID | None) -> dict[str, object]:
    """Stock dashboard for one user, or every user when user_id is None."""
    service = container.stock_service
    return {
        "stats": asdict(service.stats(user_id)),
        "alerts": [serializers.stock_item(item) for item in service.alerts(user_id)],
        "predictions": [
            {
                "item": serializers.stock_item(prediction.item),
                "days_until_stockout": prediction.days_until_stockout,
            }
            for prediction in service.predict_stockouts(user_id)
        ],
        "restock_orders": [
            {"item": serializers.stock_item(order.item), "quantity": order.quantity}
            for order in service.restock_orders(user_id)
        ],
    }
