"""Shopping list endpoints."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from smartmeal.api import serializers
from smartmeal.api.deps import get_container, require_setup
from smartmeal.api.schemas import (
    GenerateListRequest,
    ListStatusUpdate,
    ShoppingItemIn,
    ShoppingListCreate,
)
from smartmeal.containers import AppContainer
from smartmeal.domain.models import UserProfile
from smartmeal.domain.shopping import ShoppingList
from smartmeal.errors import NotFoundError
from smartmeal.services.exports import pdf_filename, render_shopping_list_pdf

router = APIRouter(prefix="/shopping-lists", tags=["shopping"])


def _owned_list(
    container: AppContainer, user: UserProfile, list_id: UUID
) -> ShoppingList:
    shopping_list = container.shopping_service.get_list(list_id)
    if shopping_list.user_id != user.id and not user.is_admin:
        raise NotFoundError(f"Shopping list {list_id} not found")
    return shopping_list


@router.get("")
async def list_lists(
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's lists with an overview."""
    lists = container.shopping_service.list_lists(user.id)
    return {
        "overview": asdict(container.shopping_service.overview(user.id)),
        "lists": [serializers.shopping_list(item_list) for item_list in lists],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_list(
    body: ShoppingListCreate,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create an empty list."""
    shopping_list = container.shopping_service.create_list(
        user,
        name=body.name,
        start_date=body.start_date,
        end_date=body.end_date,
        household_size=body.household_size,
    )
    return serializers.shopping_list(shopping_list)


@router.post("/generate", status_code=status.HTTP_201_CREATED)
async def generate_list(
    body: GenerateListRequest,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Build a list from the meals planned in a date range."""
    shopping_list = container.shopping_service.generate_list(
        user, body.start_date, body.end_date
    )
    return serializers.shopping_list(shopping_list)


@router.get("/{list_id}")
async def get_list(
    list_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one list grouped by category."""
    return serializers.shopping_list(_owned_list(container, user, list_id))


@router.post("/{list_id}/items", status_code=status.HTTP_201_CREATED)
async def add_item(
    list_id: UUID,
    body: ShoppingItemIn,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Append an item."""
    _owned_list(container, user, list_id)
    shopping_list = container.shopping_service.add_item(
        list_id,
        name=body.name,
        quantity=body.quantity,
        unit=body.unit,
        category=body.category,
        estimated_price=body.estimated_price,
    )
    return serializers.shopping_list(shopping_list)


@router.post("/{list_id}/items/{item_id}/toggle")
async def toggle_item(
    list_id: UUID,
    item_id: str,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Mark an item purchased or not purchased."""
    _owned_list(container, user, list_id)
    shopping_list = container.shopping_service.toggle_item(list_id, item_id)
    return serializers.shopping_list(shopping_list)


@router.patch("/{list_id}/status")
async def set_status(
    list_id: UUID,
    body: ListStatusUpdate,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Move a list to another status."""
    _owned_list(container, user, list_id)
    shopping_list = container.shopping_service.set_status(
        list_id, body.status, body.actual_cost
    )
    return serializers.shopping_list(shopping_list)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_list(
    list_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> None:
    """Delete a list."""
    _owned_list(container, user, list_id)
    container.shopping_service.delete_list(list_id)


@router.get("/{list_id}/pdf")
async def export_pdf(
    list_id: UUID,
    user: UserProfile = Depends(require_setup),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Download the list as a printable PDF."""
    shopping_list = _owned_list(container, user, list_id)
    return Response(
        content=render_shopping_list_pdf(shopping_list),
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f'attachment; filename="{pdf_filename(shopping_list)}"'
            )
        },
    )
