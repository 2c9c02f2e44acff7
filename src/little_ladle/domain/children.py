"""Domain models for child profiles and age."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class Sex(StrEnum):
    """Biological sex recorded on a child profile."""

    MALE = "male"
    FEMALE = "female"


class AgeBracket(StrEnum):
    """WHO developmental stage used to select targets and foods."""

    UNDER_6_MONTHS = "under_6_months"
    MONTHS_6_12 = "6-12_months"
    MONTHS_12_24 = "12-24_months"
    OVER_24_MONTHS = "over_24_months"


@dataclass(frozen=True)
class ChildProfile:
    """A child the meals are planned for."""

    id: UUID
    name: str
    birth_date: date
    sex: Sex
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AgeCalculation:
    """Age derived from a birth date, recomputed on demand."""

    total_days: int
    months: int
    days: int
    bracket: AgeBracket
    display_age: str
