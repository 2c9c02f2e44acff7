"""WHO requirement lookups backed by the guideline document."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from little_ladle.adapters.guidelines_client import GuidelinesClient
from little_ladle.domain.children import AgeBracket
from little_ladle.domain.requirements import (
    EnergyNeed,
    FeedingFrequency,
    NutrientRequirement,
    RequirementSet,
)
from little_ladle.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_GUIDELINES_CACHE_KEY = "who:guidelines"

# Complementary feeding guidance only covers 6-23 months.
COMPLEMENTARY_BRACKETS = frozenset({AgeBracket.MONTHS_6_12, AgeBracket.MONTHS_12_24})

_logger = logging.getLogger(__name__)


@dataclass
class RequirementsService:
    """Resolves nutrient targets per age bracket with caching."""

    client: GuidelinesClient
    cache: Cache
    ttl_seconds: int = 86400
    retry_attempts: int = 0
    retry_delay_seconds: float = 0.3

    async def get_requirements(self, bracket: AgeBracket) -> RequirementSet | None:
        """Return the requirement set for a bracket, or None when unavailable.

        Brackets outside complementary feeding and failed fetches both yield
        None so callers can fall back to category-only scoring.
        """
        if bracket not in COMPLEMENTARY_BRACKETS:
            return None
        document = await self._load_document()
        if document is None:
            return None
        return parse_requirement_set(document, bracket)

    async def is_available(self) -> bool:
        """Return whether the guideline document can currently be loaded."""
        return await self._load_document() is not None

    async def refresh(self) -> bool:
        """Drop the cached document and fetch it again."""
        self.cache.invalidate(_GUIDELINES_CACHE_KEY)
        return await self.is_available()

    async def _load_document(self) -> dict[str, object] | None:
        cached = self.cache.get(_GUIDELINES_CACHE_KEY)
        if isinstance(cached, dict):
            return cached
        try:
            document = await self._call_with_retry(self.client.fetch_guidelines)
        except Exception as exc:
            _logger.warning(
                "Failed to load WHO guidelines (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            return None
        if not isinstance(document, dict):
            _logger.warning(
                "Ignoring WHO guidelines document of type %s",
                type(document).__name__,
            )
            return None
        self.cache.set(_GUIDELINES_CACHE_KEY, document, ttl_seconds=self.ttl_seconds)
        return document

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]"
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                if attempt > self.retry_attempts:
                    raise
                _logger.info(
                    "Retrying WHO guidelines fetch (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts,
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds)


def parse_requirement_set(
    document: dict[str, object], bracket: AgeBracket
) -> RequirementSet | None:
    """Extract one bracket's targets from a guideline document.

    Malformed sections are skipped; a bracket that is missing or not an object
    yields None.
    """
    groups = document.get("ageGroups", document)
    if not isinstance(groups, dict):
        return None
    raw = groups.get(bracket.value)
    if not isinstance(raw, dict):
        return None
    daily: dict[str, NutrientRequirement] = {}
    for name, entry in _section(raw, "dailyRequirements").items():
        if not isinstance(entry, dict) or not entry.get("value"):
            continue
        value = _number(entry["value"])
        if value is None:
            _logger.warning(
                "Skipping %s requirement for %s: bad value %r",
                name,
                bracket.value,
                entry["value"],
            )
            continue
        if value <= 0:
            continue
        daily[name] = NutrientRequirement(
            value=value,
            unit=str(entry.get("unit", "")),
            note=str(entry.get("note", "")),
            critical_period=bool(entry.get("criticalPeriod", False)),
        )
    energy = {
        name: EnergyNeed(
            value=_number(entry.get("value")) or 0.0,
            unit=str(entry.get("unit", "")),
            note=str(entry.get("note", "")),
        )
        for name, entry in _section(raw, "complementaryFoodEnergyNeeds").items()
        if isinstance(entry, dict)
    }
    frequency = raw.get("feedingFrequency")
    return RequirementSet(
        bracket=bracket,
        label=str(raw.get("label", bracket.value)),
        daily_requirements=daily,
        complementary_energy_needs=energy,
        feeding_frequency=(
            FeedingFrequency(
                meals=str(frequency.get("meals", "")),
                snacks=str(frequency.get("snacks", "")),
                note=str(frequency.get("note", "")),
            )
            if isinstance(frequency, dict)
            else None
        ),
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _section(raw: dict[str, object], key: str) -> dict[str, object]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
