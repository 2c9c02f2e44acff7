"""Nutrient intake totals with catalog-to-WHO unit compatibility."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from little_ladle.domain.foods import MealFood
from little_ladle.domain.requirements import NutrientIntake, NutrientRequirement

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NutrientConversion:
    """Conversion from catalog units to WHO units."""

    catalog_unit: str
    who_unit: str
    factor: float = 1.0


# Catalog vitamin A values are already RAE, so every factor is currently 1.
NUTRIENT_CONVERSIONS: dict[str, NutrientConversion] = {
    "vitaminA": NutrientConversion("µg", "µg RAE"),
    "iron": NutrientConversion("mg", "mg"),
    "calcium": NutrientConversion("mg", "mg"),
    "vitaminC": NutrientConversion("mg", "mg"),
    "protein": NutrientConversion("g", "g"),
    "zinc": NutrientConversion("mg", "mg"),
}

# Plausible per-portion ranges; values outside are logged, never rejected.
VALID_RANGES: dict[str, tuple[float, float]] = {
    "vitaminA": (0.0, 1500.0),
    "iron": (0.0, 30.0),
    "calcium": (0.0, 2000.0),
    "vitaminC": (0.0, 500.0),
    "protein": (0.0, 100.0),
    "zinc": (0.0, 50.0),
}


def convert_to_who(nutrient: str, amount: float) -> float:
    """Convert a catalog nutrient amount to WHO units."""
    conversion = NUTRIENT_CONVERSIONS.get(nutrient)
    if conversion is None:
        return amount
    return amount * conversion.factor


def is_plausible(nutrient: str, amount: float) -> bool:
    """Return whether an amount lies within the expected range."""
    bounds = VALID_RANGES.get(nutrient)
    if bounds is None:
        return True
    low, high = bounds
    return low <= amount <= high


def calculate_intake(meal: Iterable[MealFood]) -> dict[str, NutrientIntake]:
    """Sum nutrient amounts over a meal in WHO units.

    Repeated foods add up. Nutrients without a conversion keep the catalog
    unit. Entries with non-positive grams contribute nothing.
    """
    totals: dict[str, float] = {}
    units: dict[str, str] = {}
    for entry in meal:
        if entry.serving_grams <= 0:
            continue
        multiplier = entry.serving_grams / 100.0
        for key, nutrient in entry.food.nutrients.items():
            amount = convert_to_who(key, nutrient.amount * multiplier)
            conversion = NUTRIENT_CONVERSIONS.get(key)
            if conversion and nutrient.unit not in ("", conversion.catalog_unit):
                _logger.warning(
                    "Unexpected unit %s for %s in %s (expected %s)",
                    nutrient.unit,
                    key,
                    entry.food.short_name,
                    conversion.catalog_unit,
                )
            if not is_plausible(key, amount):
                _logger.warning(
                    "Nutrient %s=%.2f for %s is outside the expected range",
                    key,
                    amount,
                    entry.food.short_name,
                )
            totals[key] = totals.get(key, 0.0) + amount
            units.setdefault(key, conversion.who_unit if conversion else nutrient.unit)
    return {
        key: NutrientIntake(amount=amount, unit=units[key])
        for key, amount in totals.items()
    }


def with_percent_daily(
    intake: dict[str, NutrientIntake],
    requirements: dict[str, NutrientRequirement],
) -> dict[str, NutrientIntake]:
    """Attach percent-of-daily-requirement to each nutrient with a target."""
    result: dict[str, NutrientIntake] = {}
    for key, value in intake.items():
        requirement = requirements.get(key)
        if requirement is None or requirement.value <= 0:
            result[key] = value
            continue
        result[key] = NutrientIntake(
            amount=value.amount,
            unit=value.unit,
            percent_daily=value.amount / requirement.value * 100.0,
        )
    return result
