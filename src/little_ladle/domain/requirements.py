"""Domain models for WHO nutrient requirements."""

from dataclasses import dataclass, field

from little_ladle.domain.children import AgeBracket


@dataclass(frozen=True)
class NutrientRequirement:
    """Daily requirement for a single nutrient."""

    value: float
    unit: str
    note: str = ""
    critical_period: bool = False


@dataclass(frozen=True)
class EnergyNeed:
    """Energy expected from complementary foods."""

    value: float
    unit: str
    note: str = ""


@dataclass(frozen=True)
class FeedingFrequency:
    """Recommended number of meals and snacks."""

    meals: str
    snacks: str
    note: str = ""


@dataclass(frozen=True)
class RequirementSet:
    """WHO targets for one age bracket."""

    bracket: AgeBracket
    label: str
    daily_requirements: dict[str, NutrientRequirement] = field(default_factory=dict)
    complementary_energy_needs: dict[str, EnergyNeed] = field(default_factory=dict)
    feeding_frequency: FeedingFrequency | None = None


@dataclass(frozen=True)
class ProteinRequirement:
    """Weight-based daily protein target."""

    daily_protein: float
    unit: str
    note: str


@dataclass(frozen=True)
class NutrientIntake:
    """Amount of a nutrient supplied by a meal."""

    amount: float
    unit: str
    percent_daily: float = 0.0
