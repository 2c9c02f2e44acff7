"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from little_ladle.adapters.guidelines_client import GuidelinesClient
from little_ladle.config import Settings
from little_ladle.containers import AppContainer
from little_ladle.domain.children import ChildProfile, Sex
from little_ladle.domain.foods import Food, FoodCategory, MealFood, NutrientAmount
from little_ladle.services.autochef import AutoChefService
from little_ladle.services.cache import InMemoryCache
from little_ladle.services.compliance import ComplianceService
from little_ladle.services.requirements import RequirementsService

TODAY = date(2024, 6, 1)


def born_days_ago(days: int) -> date:
    """Birth date that makes the child `days` old on TODAY."""
    return TODAY - timedelta(days=days)


def make_child(days_old: int) -> ChildProfile:
    now = datetime(2024, 6, 1, tzinfo=UTC)
    return ChildProfile(
        id=uuid4(),
        name="Sophie",
        birth_date=born_days_ago(days_old),
        sex=Sex.FEMALE,
        created_at=now,
        updated_at=now,
    )


def make_food(  # noqa: PLR0913
    fdc_id: int,
    name: str,
    category: FoodCategory,
    nutrients: dict[str, tuple[float, str]] | None = None,
    age_group: str | None = "6+ months",
) -> Food:
    return Food(
        fdc_id=fdc_id,
        name=name,
        short_name=name,
        category=category,
        nutrients={
            key: NutrientAmount(name=key, amount=amount, unit=unit)
            for key, (amount, unit) in (nutrients or {}).items()
        },
        age_group=age_group,
    )


CHICKEN = make_food(
    1,
    "Chicken",
    FoodCategory.PROTEIN,
    {"iron": (1.0, "mg"), "zinc": (1.5, "mg"), "protein": (27.0, "g")},
)
BEEF = make_food(
    2, "Beef", FoodCategory.PROTEIN, {"iron": (2.6, "mg"), "zinc": (6.3, "mg")}
)
CARROT = make_food(
    3,
    "Carrot",
    FoodCategory.VEGETABLE,
    {"vitaminA": (835.0, "µg"), "iron": (0.3, "mg")},
)
SWEET_POTATO = make_food(
    4,
    "Sweet potato",
    FoodCategory.VEGETABLE,
    {"vitaminA": (709.0, "µg"), "iron": (0.6, "mg")},
)
BANANA = make_food(
    5,
    "Banana",
    FoodCategory.FRUIT,
    {"vitaminA": (3.0, "µg"), "iron": (0.26, "mg")},
)
OATMEAL = make_food(6, "Oatmeal", FoodCategory.GRAIN, {"iron": (4.7, "mg")})
YOGURT = make_food(
    7,
    "Yogurt",
    FoodCategory.DAIRY,
    {"calcium": (121.0, "mg"), "vitaminA": (27.0, "µg")},
    age_group="12+ months",
)
STRAWBERRY = make_food(
    8,
    "Strawberry",
    FoodCategory.FRUIT,
    {"vitaminC": (59.0, "mg")},
    age_group="12+ months",
)

CATALOG = [CHICKEN, BEEF, CARROT, SWEET_POTATO, BANANA, OATMEAL, YOGURT, STRAWBERRY]

GUIDELINES = {
    "ageGroups": {
        "6-12_months": {
            "ageGroup": "6-12_months",
            "label": "6-12 months",
            "complementaryFoodEnergyNeeds": {
                "breastfed": {"value": 200, "unit": "kcal/day", "note": "6-8m"},
                "non_breastfed": {"value": 600, "unit": "kcal/day", "note": ""},
            },
            "dailyRequirements": {
                "iron": {
                    "value": 11,
                    "unit": "mg",
                    "note": "Critical",
                    "criticalPeriod": True,
                },
                "vitaminA": {"value": 400, "unit": "µg RAE", "note": ""},
                "zinc": {"value": 3, "unit": "mg", "note": ""},
                "calcium": {"value": 260, "unit": "mg", "note": ""},
            },
            "feedingFrequency": {
                "meals": "2-3",
                "snacks": "1-2",
                "note": "Increase gradually",
            },
        },
        "12-24_months": {
            "ageGroup": "12-24_months",
            "label": "12-24 months",
            "complementaryFoodEnergyNeeds": {
                "breastfed": {"value": 550, "unit": "kcal/day", "note": ""},
            },
            "dailyRequirements": {
                "iron": {"value": 7, "unit": "mg", "note": ""},
                "vitaminA": {"value": 300, "unit": "µg RAE", "note": ""},
                "zinc": {"value": 3, "unit": "mg", "note": ""},
            },
        },
    }
}


def meal(*entries: tuple[Food, float]) -> list[MealFood]:
    return [MealFood(food=food, serving_grams=grams) for food, grams in entries]


@dataclass
class FakeGuidelinesClient(GuidelinesClient):
    """Guideline client returning a static document."""

    document: dict[str, object] = field(default_factory=lambda: GUIDELINES)
    calls: int = 0

    async def fetch_guidelines(self) -> dict[str, object]:
        self.calls += 1
        return self.document


@dataclass
class FlakyGuidelinesClient(GuidelinesClient):
    """Guideline client failing a fixed number of times before succeeding."""

    failures: int = 1
    document: dict[str, object] = field(default_factory=lambda: GUIDELINES)
    calls: int = 0

    async def fetch_guidelines(self) -> dict[str, object]:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("guidelines unavailable")
        return self.document


@pytest.fixture
def settings() -> Settings:
    return Settings(
        guidelines_url="https://guidelines.test/data/who_nutrition_guidelines.json",
        autochef_seed=7,
    )


@pytest.fixture
def guidelines_client() -> FakeGuidelinesClient:
    return FakeGuidelinesClient()


@pytest.fixture
def requirements_service(
    guidelines_client: FakeGuidelinesClient,
) -> RequirementsService:
    return RequirementsService(client=guidelines_client, cache=InMemoryCache())


@pytest.fixture
def offline_requirements_service() -> RequirementsService:
    return RequirementsService(
        client=FlakyGuidelinesClient(failures=100), cache=InMemoryCache()
    )


@pytest.fixture
def compliance_service(requirements_service: RequirementsService) -> ComplianceService:
    return ComplianceService(requirements_service)


@pytest.fixture
def autochef_service(requirements_service: RequirementsService) -> AutoChefService:
    return AutoChefService(
        requirements_service=requirements_service, rng=random.Random(42)
    )


@pytest.fixture
def container(
    settings: Settings,
    guidelines_client: FakeGuidelinesClient,
    requirements_service: RequirementsService,
    compliance_service: ComplianceService,
    autochef_service: AutoChefService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        guidelines_client=guidelines_client,
        requirements_service=requirements_service,
        compliance_service=compliance_service,
        autochef_service=autochef_service,
        close_resources=close_resources,
    )
