"""Pydantic request models for the HTTP API."""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from little_ladle.domain.autochef import FEEDING_MODES, FeedingMode
from little_ladle.domain.children import ChildProfile, Sex
from little_ladle.domain.foods import Food, FoodCategory, MealFood, NutrientAmount


class ApiModel(BaseModel):
    """Base model accepting snake_case or camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutrientPayload(ApiModel):
    """Nutrient amount per 100g."""

    name: str = ""
    amount: float
    unit: str = ""


class FoodPayload(ApiModel):
    """Catalog food payload."""

    fdc_id: int
    name: str
    short_name: str = ""
    category: FoodCategory
    nutrients: dict[str, NutrientPayload] = Field(default_factory=dict)
    age_group: str | None = None
    serving_size: float | None = None
    serving_size_unit: str | None = None

    def to_domain(self) -> Food:
        return Food(
            fdc_id=self.fdc_id,
            name=self.name,
            short_name=self.short_name or self.name,
            category=self.category,
            nutrients={
                key: NutrientAmount(
                    name=value.name or key, amount=value.amount, unit=value.unit
                )
                for key, value in self.nutrients.items()
            },
            age_group=self.age_group,
            serving_size=self.serving_size,
            serving_size_unit=self.serving_size_unit,
        )


class MealFoodPayload(ApiModel):
    """Food placed in a meal."""

    food: FoodPayload
    serving_grams: float
    id: UUID = Field(default_factory=uuid4)
    added_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    def to_domain(self) -> MealFood:
        return MealFood(
            food=self.food.to_domain(),
            serving_grams=self.serving_grams,
            id=self.id,
            added_at=self.added_at,
        )


class ChildPayload(ApiModel):
    """Child profile payload."""

    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    birth_date: date
    sex: Sex
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    def to_domain(self) -> ChildProfile:
        return ChildProfile(
            id=self.id,
            name=self.name,
            birth_date=self.birth_date,
            sex=self.sex,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class AgeRequest(ApiModel):
    """Request body for age classification."""

    birth_date: date
    today: date | None = None


class AgeAppropriateRequest(ApiModel):
    """Request body for checking foods against a child's age."""

    birth_date: date
    foods: list[FoodPayload]
    today: date | None = None


class ComplianceRequest(ApiModel):
    """Request body for scoring a meal."""

    child: ChildPayload
    meal: list[MealFoodPayload] = Field(default_factory=list)
    feeding_mode: str = "complementary"
    today: date | None = None

    @field_validator("feeding_mode")
    @classmethod
    def _known_mode(cls, value: str) -> str:
        if value not in FEEDING_MODES:
            raise ValueError(f"Unknown feeding mode: {value}")
        return value

    def mode(self) -> FeedingMode:
        return FEEDING_MODES[self.feeding_mode]


class AutoChefRequest(ComplianceRequest):
    """Request body for Auto-Chef recommendations."""

    available_foods: list[FoodPayload] = Field(default_factory=list)
