"""Domain models for catalog foods and meals."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4


class FoodCategory(StrEnum):
    """Food group a catalog entry belongs to."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    PROTEIN = "protein"
    GRAIN = "grain"
    DAIRY = "dairy"
    OTHER = "other"


@dataclass(frozen=True)
class NutrientAmount:
    """Nutrient content per 100g of a food."""

    name: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Food:
    """Read-only catalog entry."""

    fdc_id: int
    name: str
    short_name: str
    category: FoodCategory
    nutrients: dict[str, NutrientAmount] = field(default_factory=dict)
    age_group: str | None = None
    serving_size: float | None = None
    serving_size_unit: str | None = None

    def nutrient_amount(self, nutrient: str) -> float:
        """Return the per-100g amount of a nutrient, or 0 when absent."""
        entry = self.nutrients.get(nutrient)
        return entry.amount if entry else 0.0


@dataclass(frozen=True)
class MealFood:
    """A food placed in a meal with a serving size."""

    food: Food
    serving_grams: float
    id: UUID = field(default_factory=uuid4)
    added_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
