"""Domain models for WHO compliance scoring."""

from dataclasses import dataclass, field
from enum import StrEnum


class Severity(StrEnum):
    """Risk alert severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KeyNutrient(StrEnum):
    """Nutrients checked for sufficiency during complementary feeding."""

    IRON = "iron"
    VITAMIN_A = "vitaminA"
    ZINC = "zinc"


@dataclass(frozen=True)
class PresenceScore:
    """Sub-score for a food group that is either present or not."""

    score: float
    met: bool
    message: str


@dataclass(frozen=True)
class DiversityScore:
    """Sub-score for the number of distinct food groups."""

    score: float
    count: int
    message: str


@dataclass(frozen=True)
class AgeAppropriateScore:
    """Sub-score penalising foods too advanced for the child."""

    score: float
    inappropriate: int
    message: str


@dataclass(frozen=True)
class KeyNutrientScore:
    """Sub-score for critical nutrient sufficiency."""

    score: float
    deficient: tuple[KeyNutrient, ...]
    message: str


@dataclass(frozen=True)
class ComplianceBreakdown:
    """Per-category scoring details."""

    animal_source_foods: PresenceScore
    fruits_and_vegetables: PresenceScore
    food_diversity: DiversityScore
    age_appropriate: AgeAppropriateScore
    key_nutrients: KeyNutrientScore


@dataclass(frozen=True)
class RiskAlert:
    """A flagged problem with a meal."""

    severity: Severity
    message: str
    recommendation: str


@dataclass(frozen=True)
class ComplianceResult:
    """Outcome of scoring a meal against WHO guidance."""

    overall_score: int
    breakdown: ComplianceBreakdown
    risk_alerts: list[RiskAlert] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    nutrients_checked: bool = True
