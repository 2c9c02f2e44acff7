"""Age classification into WHO brackets."""

import math
import re
from datetime import UTC, date, datetime

from little_ladle.domain.children import AgeBracket, AgeCalculation
from little_ladle.domain.foods import Food
from little_ladle.domain.requirements import ProteinRequirement

AVERAGE_MONTH_DAYS = 30.44
MONTHS_PER_YEAR = 12
MIN_SOLIDS_MONTHS = 6
INTRODUCTION_BUFFER_MONTHS = 2

_BRACKET_LIMITS = (
    (180, AgeBracket.UNDER_6_MONTHS),
    (365, AgeBracket.MONTHS_6_12),
    (730, AgeBracket.MONTHS_12_24),
)
_AGE_GROUP_PATTERN = re.compile(r"(\d+)\+")


def calculate_age(birth_date: date, today: date | None = None) -> AgeCalculation:
    """Return the child's age and WHO bracket for the given day."""
    current = today or datetime.now(tz=UTC).date()
    total_days = (current - birth_date).days
    months = math.floor(total_days / AVERAGE_MONTH_DAYS)
    days = math.floor(total_days % AVERAGE_MONTH_DAYS)
    return AgeCalculation(
        total_days=total_days,
        months=months,
        days=days,
        bracket=bracket_for_days(total_days),
        display_age=_display_age(total_days, months, days),
    )


def bracket_for_days(total_days: int) -> AgeBracket:
    """Map a day count to its WHO age bracket."""
    for limit, bracket in _BRACKET_LIMITS:
        if total_days < limit:
            return bracket
    return AgeBracket.OVER_24_MONTHS


def is_age_appropriate(food: Food, age: AgeCalculation) -> bool:
    """Check a food's minimum age, allowing introduction two months early.

    Foods without a parseable "N+ months" age group are always allowed. The
    buffered threshold never drops below six months.
    """
    if not food.age_group:
        return True
    match = _AGE_GROUP_PATTERN.search(food.age_group)
    if match is None:
        return True
    required = int(match.group(1))
    buffered = max(required - INTRODUCTION_BUFFER_MONTHS, MIN_SOLIDS_MONTHS)
    return age.months >= buffered


def calculate_protein_requirements(
    bracket: AgeBracket, weight_kg: float | None
) -> ProteinRequirement | None:
    """Return a weight-based daily protein target, if weight is known."""
    if not weight_kg:
        return None
    protein_per_kg = 1.1 if bracket == AgeBracket.MONTHS_6_12 else 1.0
    return ProteinRequirement(
        daily_protein=round(weight_kg * protein_per_kg, 1),
        unit="g/day",
        note=f"Based on {weight_kg:g}kg body weight",
    )


def _display_age(total_days: int, months: int, days: int) -> str:
    if months < 1:
        return f"{total_days} days"
    if months < MONTHS_PER_YEAR:
        text = _plural(months, "month")
        if days > 0:
            text += f", {days} days"
        return text
    years, remaining_months = divmod(months, MONTHS_PER_YEAR)
    text = _plural(years, "year")
    if remaining_months > 0:
        text += f", {_plural(remaining_months, 'month')}"
    return text


def _plural(count: int, unit: str) -> str:
    suffix = "s" if count > 1 else ""
    return f"{count} {unit}{suffix}"
