"""Tests for nutrient intake totals."""

import pytest

from little_ladle.domain.foods import FoodCategory
from little_ladle.domain.requirements import NutrientRequirement
from little_ladle.services.nutrients import (
    calculate_intake,
    convert_to_who,
    is_plausible,
    with_percent_daily,
)
from tests.conftest import BEEF, CARROT, CHICKEN, make_food, meal


def test_intake_sums_across_foods() -> None:
    intake = calculate_intake(meal((BEEF, 50), (CHICKEN, 100), (CARROT, 0)))

    assert intake["iron"].amount == pytest.approx(2.3)
    assert intake["iron"].unit == "mg"
    assert intake["zinc"].amount == pytest.approx(4.65)
    assert "vitaminA" not in intake


def test_percent_daily_uses_requirements() -> None:
    intake = calculate_intake(meal((BEEF, 100)))
    requirements = {"iron": NutrientRequirement(value=13.0, unit="mg")}

    result = with_percent_daily(intake, requirements)

    assert result["iron"].percent_daily == pytest.approx(20.0)
    assert result["zinc"].percent_daily == 0.0


def test_conversion_and_range_checks() -> None:
    assert convert_to_who("vitaminA", 120.0) == 120.0
    assert convert_to_who("potassium", 5.0) == 5.0
    assert is_plausible("iron", 4.0)
    assert not is_plausible("iron", 45.0)
    assert is_plausible("potassium", 10_000.0)


def test_intake_reports_who_units() -> None:
    avocado = make_food(
        9,
        "Avocado",
        FoodCategory.FRUIT,
        {"vitaminA": (7.0, "µg"), "potassium": (485.0, "mg")},
    )

    intake = calculate_intake(meal((CARROT, 10), (avocado, 50)))

    assert intake["vitaminA"].unit == "µg RAE"
    assert intake["vitaminA"].amount == pytest.approx(87.0)
    assert intake["iron"].unit == "mg"
    assert intake["potassium"].unit == "mg"
