"""WHO complementary-feeding compliance scoring.

Scoring policy (points):

- animal-source foods present: 25
- fruits or vegetables present: 25
- food diversity, min(categories / 3, 1): 25
- age-appropriate foods, minus 5 per inappropriate food: 15
- key nutrients adequate (iron, vitamin A, zinc): 10

When no requirement data exists for the child the nutrient part is skipped and
the remaining 90 points are rescaled to 100. Only entries with positive grams
count, so every sub-score is non-decreasing as foods are added.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from little_ladle.domain.autochef import COMPLEMENTARY, FULL, FeedingMode
from little_ladle.domain.children import AgeCalculation, ChildProfile
from little_ladle.domain.compliance import (
    AgeAppropriateScore,
    ComplianceBreakdown,
    ComplianceResult,
    DiversityScore,
    KeyNutrient,
    KeyNutrientScore,
    PresenceScore,
    RiskAlert,
    Severity,
)
from little_ladle.domain.foods import FoodCategory, MealFood
from little_ladle.domain.requirements import NutrientIntake, RequirementSet
from little_ladle.services.age import calculate_age, is_age_appropriate
from little_ladle.services.nutrients import calculate_intake, with_percent_daily
from little_ladle.services.requirements import (
    COMPLEMENTARY_BRACKETS,
    RequirementsService,
)

ANIMAL_SOURCE_POINTS = 25.0
PRODUCE_POINTS = 25.0
DIVERSITY_POINTS = 25.0
AGE_APPROPRIATE_POINTS = 15.0
KEY_NUTRIENT_POINTS = 10.0
FOOD_GROUP_POINTS = (
    ANIMAL_SOURCE_POINTS + PRODUCE_POINTS + DIVERSITY_POINTS + AGE_APPROPRIATE_POINTS
)
INAPPROPRIATE_PENALTY = 5.0
DIVERSITY_TARGET = 3

ANIMAL_SOURCE_CATEGORIES = frozenset({FoodCategory.PROTEIN})
PRODUCE_CATEGORIES = frozenset({FoodCategory.FRUIT, FoodCategory.VEGETABLE})

# Percent of the daily requirement one meal should supply.
ADEQUATE_PERCENT = {
    KeyNutrient.IRON: 5.0,
    KeyNutrient.VITAMIN_A: 3.0,
    KeyNutrient.ZINC: 5.0,
}
DEFICIENT_PERCENT = {
    KeyNutrient.IRON: 3.0,
    KeyNutrient.VITAMIN_A: 2.0,
    KeyNutrient.ZINC: 3.0,
}

_logger = logging.getLogger(__name__)


def score_meal(
    meal: Sequence[MealFood],
    age: AgeCalculation,
    requirements: RequirementSet | None,
    feeding_mode: FeedingMode = COMPLEMENTARY,
) -> ComplianceResult:
    """Score a meal for a child of the given age."""
    served = [entry for entry in meal if entry.serving_grams > 0]
    categories = {entry.food.category for entry in served}

    has_animal = bool(categories & ANIMAL_SOURCE_CATEGORIES)
    has_produce = bool(categories & PRODUCE_CATEGORIES)
    diversity_count = len(categories)
    inappropriate = sum(
        1 for entry in served if not is_age_appropriate(entry.food, age)
    )

    animal = PresenceScore(
        score=ANIMAL_SOURCE_POINTS if has_animal else 0.0,
        met=has_animal,
        message="Animal foods included" if has_animal else "No animal foods found",
    )
    produce = PresenceScore(
        score=PRODUCE_POINTS if has_produce else 0.0,
        met=has_produce,
        message=(
            "Fruits/vegetables included"
            if has_produce
            else "No fruits or vegetables found"
        ),
    )
    diversity = DiversityScore(
        score=min(diversity_count / DIVERSITY_TARGET, 1.0) * DIVERSITY_POINTS,
        count=diversity_count,
        message=f"{diversity_count} food categories (target: {DIVERSITY_TARGET}+)",
    )
    age_score = _age_appropriate_score(len(served), inappropriate)

    checked = _checked_nutrients(requirements)
    if checked:
        intake = with_percent_daily(
            calculate_intake(served), requirements.daily_requirements
        )
        nutrients = _key_nutrient_score(checked, intake)
    else:
        intake = {}
        nutrients = KeyNutrientScore(
            score=0.0, deficient=(), message="Nutrient targets unavailable"
        )

    raw = animal.score + produce.score + diversity.score + age_score.score
    available = FOOD_GROUP_POINTS
    if checked:
        raw += nutrients.score
        available += KEY_NUTRIENT_POINTS
    overall = _clamp(round(raw * 100.0 / available))

    _logger.debug(
        "Compliance for %s (%s): foods=%s intake=%s score=%s",
        age.display_age,
        age.bracket,
        [f"{entry.food.short_name} ({entry.serving_grams:g}g)" for entry in meal],
        {key: round(value.amount, 2) for key, value in intake.items()},
        overall,
    )

    breakdown = ComplianceBreakdown(
        animal_source_foods=animal,
        fruits_and_vegetables=produce,
        food_diversity=diversity,
        age_appropriate=age_score,
        key_nutrients=nutrients,
    )
    return ComplianceResult(
        overall_score=overall,
        breakdown=breakdown,
        risk_alerts=_risk_alerts(breakdown, requirements),
        recommendations=_recommendations(
            breakdown, overall, feeding_mode, age, requirements
        ),
        nutrients_checked=bool(checked),
    )


@dataclass
class ComplianceService:
    """Scores meals after resolving the child's WHO targets."""

    requirements_service: RequirementsService

    async def evaluate(
        self,
        meal: Sequence[MealFood],
        child: ChildProfile,
        feeding_mode: FeedingMode | None = None,
        today: date | None = None,
    ) -> ComplianceResult:
        """Return the compliance result for a child's meal."""
        age = calculate_age(child.birth_date, today)
        requirements = await self.requirements_service.get_requirements(age.bracket)
        return score_meal(meal, age, requirements, feeding_mode or COMPLEMENTARY)


def _age_appropriate_score(
    served_count: int, inappropriate: int
) -> AgeAppropriateScore:
    if served_count == 0:
        return AgeAppropriateScore(score=0.0, inappropriate=0, message="No foods yet")
    score = max(AGE_APPROPRIATE_POINTS - inappropriate * INAPPROPRIATE_PENALTY, 0.0)
    message = (
        "All foods age-appropriate"
        if inappropriate == 0
        else f"{inappropriate} foods may be too advanced"
    )
    return AgeAppropriateScore(
        score=score, inappropriate=inappropriate, message=message
    )


def _checked_nutrients(requirements: RequirementSet | None) -> list[KeyNutrient]:
    if requirements is None:
        return []
    return [
        nutrient
        for nutrient in KeyNutrient
        if nutrient.value in requirements.daily_requirements
    ]


def _key_nutrient_score(
    checked: list[KeyNutrient], intake: dict[str, NutrientIntake]
) -> KeyNutrientScore:
    adequate = 0
    deficient: list[KeyNutrient] = []
    for nutrient in checked:
        entry = intake.get(nutrient.value)
        percent = entry.percent_daily if entry else 0.0
        if percent >= ADEQUATE_PERCENT[nutrient]:
            adequate += 1
        if percent < DEFICIENT_PERCENT[nutrient]:
            deficient.append(nutrient)
    return KeyNutrientScore(
        score=adequate / len(checked) * KEY_NUTRIENT_POINTS,
        deficient=tuple(deficient),
        message=f"{adequate}/{len(checked)} key nutrients adequate",
    )


def _risk_alerts(
    breakdown: ComplianceBreakdown, requirements: RequirementSet | None
) -> list[RiskAlert]:
    alerts: list[RiskAlert] = []
    if not breakdown.animal_source_foods.met:
        alerts.append(
            RiskAlert(
                severity=Severity.HIGH,
                message="No animal source foods in meal",
                recommendation="Add meat, fish, eggs, or dairy for essential nutrients",
            )
        )
    if not breakdown.fruits_and_vegetables.met:
        alerts.append(
            RiskAlert(
                severity=Severity.HIGH,
                message="No fruits or vegetables in meal",
                recommendation=(
                    "Add colorful fruits or vegetables for vitamins and minerals"
                ),
            )
        )
    count = breakdown.food_diversity.count
    if count < DIVERSITY_TARGET:
        alerts.append(
            RiskAlert(
                severity=Severity.MEDIUM,
                message=f"Low food diversity ({count} categories)",
                recommendation=(
                    "Include foods from more categories for balanced nutrition"
                ),
            )
        )
    inappropriate = breakdown.age_appropriate.inappropriate
    if inappropriate > 0:
        alerts.append(
            RiskAlert(
                severity=Severity.MEDIUM,
                message=f"{inappropriate} food(s) may be too advanced for child's age",
                recommendation="Consider age-appropriate alternatives",
            )
        )
    deficient = breakdown.key_nutrients.deficient
    if deficient and requirements is not None:
        critical = [
            nutrient.value
            for nutrient in deficient
            if requirements.daily_requirements[nutrient.value].critical_period
        ]
        other = [
            nutrient.value for nutrient in deficient if nutrient.value not in critical
        ]
        if critical:
            alerts.append(
                RiskAlert(
                    severity=Severity.HIGH,
                    message=f"Low intake of critical nutrients: {', '.join(critical)}",
                    recommendation="Add iron-rich and vitamin A-rich foods",
                )
            )
        if other:
            alerts.append(
                RiskAlert(
                    severity=Severity.MEDIUM,
                    message=f"Low intake of key nutrients: {', '.join(other)}",
                    recommendation="Add nutrient-dense foods such as meat or legumes",
                )
            )
    return alerts


def _recommendations(
    breakdown: ComplianceBreakdown,
    overall: int,
    feeding_mode: FeedingMode,
    age: AgeCalculation,
    requirements: RequirementSet | None,
) -> list[str]:
    recommendations: list[str] = []
    if requirements is None:
        if age.bracket in COMPLEMENTARY_BRACKETS:
            recommendations.append(
                "WHO nutrient guidelines unavailable; scored on food groups only"
            )
        else:
            recommendations.append(
                "Child is outside WHO complementary feeding age range (6-23 months)"
            )
    if overall < feeding_mode.target_compliance:
        recommendations.append("Meal needs improvement to meet WHO guidelines")
    if not breakdown.animal_source_foods.met:
        recommendations.append("Add a protein source like meat, fish, or eggs")
    if not breakdown.fruits_and_vegetables.met:
        recommendations.append("Include fruits or vegetables for essential vitamins")
    if breakdown.food_diversity.count < DIVERSITY_TARGET:
        recommendations.append("Add more food variety for balanced nutrition")
    if overall >= FULL.target_compliance:
        recommendations.append("Excellent meal composition following WHO guidelines!")
    return recommendations


def _clamp(score: int) -> int:
    return max(0, min(100, score))
