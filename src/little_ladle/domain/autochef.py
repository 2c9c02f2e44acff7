"""Domain models for Auto-Chef meal recommendations."""

from dataclasses import dataclass, field

from little_ladle.domain.compliance import KeyNutrient
from little_ladle.domain.foods import Food


@dataclass(frozen=True)
class FeedingMode:
    """Named target-compliance threshold."""

    key: str
    name: str
    target_compliance: int
    description: str


COMPLEMENTARY = FeedingMode(
    key="complementary",
    name="Complementary Feeding",
    target_compliance=60,
    description=(
        "Complementary to breast/formula feeding (recommended for 6-23 months)"
    ),
)
FULL = FeedingMode(
    key="full",
    name="Full Nutrition",
    target_compliance=80,
    description="Complete nutritional requirements from solid foods",
)

FEEDING_MODES: dict[str, FeedingMode] = {
    COMPLEMENTARY.key: COMPLEMENTARY,
    FULL.key: FULL,
}


@dataclass(frozen=True)
class GapReport:
    """Compliance categories the current meal fails to satisfy."""

    animal_foods: bool
    fruits_vegetables: bool
    diversity: int
    key_nutrients: tuple[KeyNutrient, ...] = ()


@dataclass(frozen=True)
class SuggestedFood:
    """A food proposed by Auto-Chef with its rationale."""

    food: Food
    serving_grams: float
    reason: str


@dataclass(frozen=True)
class AutoChefSuggestion:
    """A proposed meal and its predicted score."""

    id: str
    name: str
    description: str
    foods: list[SuggestedFood]
    predicted_score: int
    compliance_gaps: list[str] = field(default_factory=list)
    nutritional_highlights: list[str] = field(default_factory=list)
    age_appropriate: bool = True

    @property
    def total_grams(self) -> float:
        """Sum of all proposed servings."""
        return sum(item.serving_grams for item in self.foods)


@dataclass(frozen=True)
class QuickFix:
    """Single-food addition expected to close a gap."""

    food: Food
    serving_grams: float
    expected_improvement: int
    reason: str


@dataclass(frozen=True)
class AutoChefRecommendation:
    """Root Auto-Chef result returned to the caller."""

    current_meal_score: int
    target_score: int
    mode: FeedingMode
    gaps: GapReport
    suggestions: list[AutoChefSuggestion] = field(default_factory=list)
    quick_fixes: list[QuickFix] = field(default_factory=list)
