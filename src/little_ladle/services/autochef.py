"""Auto-Chef: rule-based meal suggestions that raise WHO compliance."""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from functools import partial
from uuid import uuid4

from little_ladle.domain.autochef import (
    AutoChefRecommendation,
    AutoChefSuggestion,
    FeedingMode,
    GapReport,
    QuickFix,
    SuggestedFood,
)
from little_ladle.domain.children import AgeCalculation, ChildProfile
from little_ladle.domain.compliance import ComplianceResult
from little_ladle.domain.foods import Food, FoodCategory, MealFood
from little_ladle.services.age import calculate_age, is_age_appropriate
from little_ladle.services.compliance import DIVERSITY_TARGET, score_meal
from little_ladle.services.requirements import RequirementsService

MAX_SUGGESTIONS = 3
MAX_QUICK_FIXES = 3
QUICK_FIX_IMPROVEMENT = 25
QUICK_FIX_GRAMS = 10.0
INTRODUCTION_MAX_MONTHS = 8
POWER_IRON_MIN = 1.0
POWER_VITAMIN_A_MIN = 50.0

_PRODUCE = (FoodCategory.FRUIT, FoodCategory.VEGETABLE)
_DIVERSITY_ORDER = (
    FoodCategory.FRUIT,
    FoodCategory.VEGETABLE,
    FoodCategory.PROTEIN,
    FoodCategory.GRAIN,
    FoodCategory.DAIRY,
)

_logger = logging.getLogger(__name__)

Scorer = Callable[[Sequence[MealFood]], ComplianceResult]


@dataclass(frozen=True)
class StrategyContext:
    """Read-only inputs shared by every strategy."""

    current_meal: tuple[MealFood, ...]
    foods: tuple[Food, ...]
    gaps: GapReport
    age: AgeCalculation
    score: Scorer
    rng: random.Random


Strategy = Callable[[StrategyContext], AutoChefSuggestion | None]


def build_gap_report(result: ComplianceResult) -> GapReport:
    """Summarise which compliance categories a scored meal misses."""
    breakdown = result.breakdown
    return GapReport(
        animal_foods=not breakdown.animal_source_foods.met,
        fruits_vegetables=not breakdown.fruits_and_vegetables.met,
        diversity=breakdown.food_diversity.count,
        key_nutrients=breakdown.key_nutrients.deficient,
    )


def balanced_starter(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Build a protein, vegetable and fruit meal from scratch."""
    if ctx.current_meal:
        return None
    picks = (
        (FoodCategory.PROTEIN, 15.0, "Essential protein and iron source"),
        (FoodCategory.VEGETABLE, 10.0, "Vitamins and minerals"),
        (FoodCategory.FRUIT, 10.0, "Natural sweetness and vitamin C"),
    )
    items: list[SuggestedFood] = []
    for category, grams, reason in picks:
        food = _random_food(ctx, (category,))
        if food is not None:
            items.append(SuggestedFood(food=food, serving_grams=grams, reason=reason))
    if not items:
        return None
    predicted = ctx.score(_as_meal(items))
    return _suggestion(
        "balanced",
        name="Balanced Starter Meal",
        description="A well-rounded meal with protein, vegetables, and fruits",
        foods=items,
        predicted=predicted,
        highlights=list(predicted.recommendations),
    )


def protein_boost(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Add a protein food when the meal has no animal-source food."""
    if not ctx.current_meal or not ctx.gaps.animal_foods:
        return None
    food = _random_food(ctx, (FoodCategory.PROTEIN,))
    if food is None:
        return None
    addition = SuggestedFood(
        food=food,
        serving_grams=15.0,
        reason="Adds essential protein and iron to your meal",
    )
    return _suggestion(
        "protein-boost",
        name="Protein Power-Up",
        description="Add protein to complete your meal",
        foods=[addition],
        predicted=ctx.score([*ctx.current_meal, *_as_meal([addition])]),
        highlights=["Complete protein", "Iron for development"],
    )


def produce_boost(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Add a fruit or vegetable when the meal has none."""
    if not ctx.current_meal or not ctx.gaps.fruits_vegetables:
        return None
    food = _random_food(ctx, _PRODUCE)
    if food is None:
        return None
    addition = SuggestedFood(
        food=food,
        serving_grams=10.0,
        reason="Adds essential vitamins and natural flavors",
    )
    return _suggestion(
        "veggie-boost",
        name="Vitamin Boost",
        description="Add fruits or vegetables for essential vitamins",
        foods=[addition],
        predicted=ctx.score([*ctx.current_meal, *_as_meal([addition])]),
        highlights=["Rich in vitamins", "Natural flavors"],
    )


def diversity_boost(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Add a food from the first food group missing from the meal."""
    if not ctx.current_meal or ctx.gaps.diversity >= DIVERSITY_TARGET:
        return None
    present = {
        entry.food.category for entry in ctx.current_meal if entry.serving_grams > 0
    }
    missing = [category for category in _DIVERSITY_ORDER if category not in present]
    if not missing:
        return None
    target = missing[0]
    food = _first_food(ctx.foods, lambda candidate: candidate.category == target)
    if food is None:
        return None
    addition = SuggestedFood(
        food=food,
        serving_grams=10.0,
        reason=f"Adds {target} variety to your meal",
    )
    return _suggestion(
        "diversity-boost",
        name="Variety Booster",
        description=f"Add {target} for better food diversity",
        foods=[addition],
        predicted=ctx.score([*ctx.current_meal, *_as_meal([addition])]),
        highlights=["Increases food diversity", "Balanced nutrition"],
    )


def power_meal(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Pair the first iron-rich food with the first vitamin A-rich food."""
    items: list[SuggestedFood] = []
    iron_food = _first_food(
        ctx.foods, lambda food: food.nutrient_amount("iron") > POWER_IRON_MIN
    )
    if iron_food is not None:
        items.append(
            SuggestedFood(
                food=iron_food,
                serving_grams=15.0,
                reason="High iron content for brain development",
            )
        )
    vitamin_a_food = _first_food(
        ctx.foods, lambda food: food.nutrient_amount("vitaminA") > POWER_VITAMIN_A_MIN
    )
    if vitamin_a_food is not None:
        items.append(
            SuggestedFood(
                food=vitamin_a_food,
                serving_grams=10.0,
                reason="Rich in vitamin A for vision and immunity",
            )
        )
    if not items:
        return None
    return _suggestion(
        "power",
        name="Nutrition Power Meal",
        description="Nutrient-dense foods for optimal development",
        foods=items,
        predicted=ctx.score(_as_meal(items)),
        highlights=["High iron", "Rich in vitamin A", "Supports brain development"],
    )


def introduction_meal(ctx: StrategyContext) -> AutoChefSuggestion | None:
    """Tiny first-tastes meal for children up to eight months."""
    if ctx.age.months > INTRODUCTION_MAX_MONTHS:
        return None
    items: list[SuggestedFood] = []
    for category in _PRODUCE:
        food = _first_food(ctx.foods, lambda candidate: candidate.category == category)
        if food is not None:
            items.append(
                SuggestedFood(
                    food=food,
                    serving_grams=5.0,
                    reason=f"Gentle introduction to {category}s",
                )
            )
    if not items:
        return None
    return _suggestion(
        "intro",
        name="Gentle Introduction Meal",
        description="Perfect for new eaters - simple and gentle foods",
        foods=items,
        predicted=ctx.score(_as_meal(items)),
        highlights=["Easy to digest", "Gentle introduction", "Age-appropriate"],
        include_gaps=False,
    )


# Precedence order; the first MAX_SUGGESTIONS results are kept.
STRATEGIES: tuple[Strategy, ...] = (
    balanced_starter,
    protein_boost,
    produce_boost,
    diversity_boost,
    power_meal,
    introduction_meal,
)


def generate_quick_fixes(foods: Sequence[Food], gaps: GapReport) -> list[QuickFix]:
    """Single-food additions for each open food-group gap."""
    fixes: list[QuickFix] = []
    if gaps.animal_foods:
        protein = _first_food(foods, lambda food: food.category == FoodCategory.PROTEIN)
        if protein is not None:
            fixes.append(
                QuickFix(
                    food=protein,
                    serving_grams=QUICK_FIX_GRAMS,
                    expected_improvement=QUICK_FIX_IMPROVEMENT,
                    reason="Add essential protein and iron",
                )
            )
    if gaps.fruits_vegetables:
        produce = _first_food(foods, lambda food: food.category in _PRODUCE)
        if produce is not None:
            fixes.append(
                QuickFix(
                    food=produce,
                    serving_grams=QUICK_FIX_GRAMS,
                    expected_improvement=QUICK_FIX_IMPROVEMENT,
                    reason="Add essential vitamins and minerals",
                )
            )
    return fixes[:MAX_QUICK_FIXES]


@dataclass
class AutoChefService:
    """Generates scored meal suggestions for a child."""

    requirements_service: RequirementsService
    rng: random.Random = field(default_factory=random.Random)
    strategies: tuple[Strategy, ...] = STRATEGIES

    async def generate(
        self,
        current_meal: Sequence[MealFood],
        available_foods: Sequence[Food],
        child: ChildProfile,
        feeding_mode: FeedingMode,
        today: date | None = None,
    ) -> AutoChefRecommendation:
        """Score the current meal and propose up to three improvements."""
        age = calculate_age(child.birth_date, today)
        requirements = await self.requirements_service.get_requirements(age.bracket)
        score = partial(
            score_meal,
            age=age,
            requirements=requirements,
            feeding_mode=feeding_mode,
        )
        current = score(current_meal)
        foods = tuple(food for food in available_foods if is_age_appropriate(food, age))
        gaps = build_gap_report(current)
        ctx = StrategyContext(
            current_meal=tuple(current_meal),
            foods=foods,
            gaps=gaps,
            age=age,
            score=score,
            rng=self.rng,
        )
        produced = [strategy(ctx) for strategy in self.strategies]
        suggestions = [item for item in produced if item is not None]
        _logger.info(
            "Auto-Chef for %s: score=%s target=%s candidates=%s suggestions=%s",
            age.bracket,
            current.overall_score,
            feeding_mode.target_compliance,
            len(foods),
            len(suggestions),
        )
        return AutoChefRecommendation(
            current_meal_score=current.overall_score,
            target_score=feeding_mode.target_compliance,
            mode=feeding_mode,
            gaps=gaps,
            suggestions=suggestions[:MAX_SUGGESTIONS],
            quick_fixes=generate_quick_fixes(foods, gaps),
        )


def _random_food(
    ctx: StrategyContext, categories: tuple[FoodCategory, ...]
) -> Food | None:
    matches = [food for food in ctx.foods if food.category in categories]
    if not matches:
        return None
    return ctx.rng.choice(matches)


def _first_food(
    foods: Sequence[Food], predicate: Callable[[Food], bool]
) -> Food | None:
    return next((food for food in foods if predicate(food)), None)


def _as_meal(items: Sequence[SuggestedFood]) -> list[MealFood]:
    return [
        MealFood(food=item.food, serving_grams=item.serving_grams) for item in items
    ]


def _suggestion(  # noqa: PLR0913
    prefix: str,
    *,
    name: str,
    description: str,
    foods: list[SuggestedFood],
    predicted: ComplianceResult,
    highlights: list[str],
    include_gaps: bool = True,
) -> AutoChefSuggestion:
    gaps = [alert.message for alert in predicted.risk_alerts] if include_gaps else []
    return AutoChefSuggestion(
        id=f"{prefix}-{uuid4().hex[:8]}",
        name=name,
        description=description,
        foods=foods,
        predicted_score=predicted.overall_score,
        compliance_gaps=gaps,
        nutritional_highlights=highlights,
    )
