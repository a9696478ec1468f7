"""Ingredient catalog management."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from smartmeal.domain.ingredients import Ingredient
from smartmeal.errors import NotFoundError, ValidationError


class IngredientRepository(Protocol):
    """Persistence interface for ingredients."""

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        """Create an ingredient and return it."""

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        """Update an ingredient and return it."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return ingredients ordered by name."""

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient."""


@dataclass
class IngredientService:
    """Application service for the ingredient catalog."""

    repository: IngredientRepository

    def create(self, payload: dict[str, object]) -> Ingredient:
        """Create a catalog entry."""
        if not str(payload.get("name", "")).strip():
            raise ValidationError("Ingredient name is required")
        return self.repository.create_ingredient(payload)

    def update(self, ingredient_id: UUID, payload: dict[str, object]) -> Ingredient:
        """Update a catalog entry."""
        self.get(ingredient_id)
        return self.repository.update_ingredient(ingredient_id, payload)

    def delete(self, ingredient_id: UUID) -> None:
        """Delete a catalog entry."""
        self.get(ingredient_id)
        self.repository.delete_ingredient(ingredient_id)

    def get(self, ingredient_id: UUID) -> Ingredient:
        """Return an ingredient or raise when missing."""
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient {ingredient_id} not found")
        return ingredient

    def search(
        self, query: str | None = None, category: str | None = None
    ) -> list[Ingredient]:
        """Filter the catalog by name substring and category."""
        term = (query or "").lower()
        return [
            ingredient
            for ingredient in self.repository.list_ingredients()
            if term in ingredient.name.lower()
            and (not category or ingredient.category == category)
        ]

    def low_stock(self) -> list[Ingredient]:
        """Return ingredients at or below their minimum stock."""
        return [
            ingredient
            for ingredient in self.repository.list_ingredients()
            if ingredient.is_low_stock
        ]

    def by_name(self) -> dict[str, Ingredient]:
        """Index the catalog by lower-cased name."""
        return {
            ingredient.name.lower(): ingredient
            for ingredient in self.repository.list_ingredients()
        }
