"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder

from little_ladle.api.models import (
    AgeAppropriateRequest,
    AgeRequest,
    AutoChefRequest,
    ComplianceRequest,
)
from little_ladle.app_logging import configure_logging
from little_ladle.containers import AppContainer
from little_ladle.domain.autochef import FEEDING_MODES, AutoChefRecommendation
from little_ladle.domain.children import AgeBracket
from little_ladle.services.age import (
    calculate_age,
    calculate_protein_requirements,
    is_age_appropriate,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug, container.settings.environment)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/feeding-modes")
    async def feeding_modes() -> dict[str, object]:
        """List the supported feeding modes."""
        return {"modes": jsonable_encoder(FEEDING_MODES)}

    @app.post("/age")
    async def age(body: AgeRequest) -> dict[str, object]:
        """Classify a birth date into a WHO age bracket."""
        return jsonable_encoder(calculate_age(body.birth_date, body.today))

    @app.post("/foods/age-appropriate")
    async def age_appropriate(body: AgeAppropriateRequest) -> dict[str, object]:
        """Flag which foods suit the child's age."""
        age_calc = calculate_age(body.birth_date, body.today)
        return {
            "age": jsonable_encoder(age_calc),
            "foods": [
                {
                    "fdc_id": food.fdc_id,
                    "age_appropriate": is_age_appropriate(food.to_domain(), age_calc),
                }
                for food in body.foods
            ],
        }

    @app.get("/requirements/{bracket}")
    async def requirements(
        bracket: AgeBracket,
        request: Request,
        weight_kg: float | None = Query(default=None, alias="weightKg", gt=0),
    ) -> dict[str, object]:
        """Return WHO targets for an age bracket, plus protein when weight is known."""
        state_container: AppContainer = request.app.state.container
        found = await state_container.requirements_service.get_requirements(bracket)
        if found is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        payload = jsonable_encoder(found)
        payload["protein"] = jsonable_encoder(
            calculate_protein_requirements(bracket, weight_kg)
        )
        return payload

    @app.post("/requirements/refresh")
    async def refresh_requirements(request: Request) -> dict[str, object]:
        """Re-fetch the guideline document."""
        state_container: AppContainer = request.app.state.container
        available = await state_container.requirements_service.refresh()
        if not available:
            logger.warning("WHO guidelines still unavailable after refresh")
        return {"available": available}

    @app.post("/compliance")
    async def compliance(
        body: ComplianceRequest, request: Request
    ) -> dict[str, object]:
        """Score a meal against WHO complementary-feeding guidance."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.compliance_service.evaluate(
            [item.to_domain() for item in body.meal],
            body.child.to_domain(),
            feeding_mode=body.mode(),
            today=body.today,
        )
        return jsonable_encoder(result)

    @app.post("/autochef")
    async def autochef(body: AutoChefRequest, request: Request) -> dict[str, object]:
        """Generate Auto-Chef meal suggestions."""
        state_container: AppContainer = request.app.state.container
        recommendation = await state_container.autochef_service.generate(
            [item.to_domain() for item in body.meal],
            [food.to_domain() for food in body.available_foods],
            body.child.to_domain(),
            body.mode(),
            today=body.today,
        )
        return _serialize_recommendation(recommendation)

    return app


def _serialize_recommendation(
    recommendation: AutoChefRecommendation,
) -> dict[str, object]:
    """Encode a recommendation, including each suggestion's total grams."""
    payload = jsonable_encoder(recommendation)
    for encoded, suggestion in zip(
        payload["suggestions"], recommendation.suggestions, strict=True
    ):
        encoded["total_grams"] = suggestion.total_grams
    return payload
