"""Dependency container wiring for the application."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from little_ladle.adapters.guidelines_client import (
    GuidelinesClient,
    HttpxGuidelinesClient,
)
from little_ladle.config import Settings
from little_ladle.services.autochef import AutoChefService
from little_ladle.services.cache import InMemoryCache
from little_ladle.services.compliance import ComplianceService
from little_ladle.services.requirements import RequirementsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    guidelines_client: GuidelinesClient
    requirements_service: RequirementsService
    compliance_service: ComplianceService
    autochef_service: AutoChefService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    guidelines_client = HttpxGuidelinesClient.create(
        url=resolved_settings.guidelines_url,
        timeout_seconds=resolved_settings.guidelines_timeout_seconds,
    )
    requirements_service = RequirementsService(
        client=guidelines_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.guidelines_cache_ttl_seconds,
        retry_attempts=resolved_settings.guidelines_retry_attempts,
    )
    compliance_service = ComplianceService(requirements_service)
    autochef_service = AutoChefService(
        requirements_service=requirements_service,
        rng=random.Random(resolved_settings.autochef_seed),
    )

    async def close_resources() -> None:
        await guidelines_client.close()

    return AppContainer(
        settings=resolved_settings,
        guidelines_client=guidelines_client,
        requirements_service=requirements_service,
        compliance_service=compliance_service,
        autochef_service=autochef_service,
        close_resources=close_resources,
    )
