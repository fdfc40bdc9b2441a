"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from food_tracker.api.models import (
    CommitEstimateRequest,
    EntryPayload,
    EstimateRequest,
    SettingsPayload,
)
from food_tracker.app_logging import configure_logging
from food_tracker.containers import AppContainer
from food_tracker.domain.entries import EntryValidationError
from food_tracker.services.entries import DEFAULT_MOOD, entry_payload
from food_tracker.services.estimates import normalize_estimate
from food_tracker.services.grocery import build_grocery_plan
from food_tracker.services.profiles import profile_payload


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(EntryValidationError)
    async def entry_validation_error(
        _request: Request, exc: EntryValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/entries")
    async def list_entries(request: Request) -> list[dict[str, object]]:
        """Return all entries, newest first."""
        entries = _container(request).entry_service.list_entries()
        return [entry_payload(entry) for entry in entries]

    @app.post("/entries")
    async def create_entry(
        payload: EntryPayload, request: Request
    ) -> dict[str, object]:
        """Create an entry from a fully specified payload."""
        entry = _container(request).entry_service.create_entry(
            payload.model_dump(exclude_unset=True)
        )
        return entry_payload(entry)

    @app.post("/entries/commit")
    async def commit_estimate(
        payload: CommitEstimateRequest, request: Request
    ) -> dict[str, object]:
        """Save an accepted estimate as a new entry."""
        entry = _container(request).entry_service.commit_estimate(
            payload.mealText,
            normalize_estimate(payload.estimate),
            feel_after=payload.feelAfter,
            mood=payload.mood if isinstance(payload.mood, str) else DEFAULT_MOOD,
        )
        return entry_payload(entry)

    @app.patch("/entries/{entry_id}")
    async def update_entry(
        entry_id: str, payload: EntryPayload, request: Request
    ) -> dict[str, object]:
        """Apply a partial update to an entry."""
        entry = _container(request).entry_service.update_entry(
            entry_id, payload.model_dump(exclude_unset=True)
        )
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return entry_payload(entry)

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: str, request: Request) -> dict[str, bool]:
        """Delete an entry."""
        if not _container(request).entry_service.delete_entry(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"ok": True}

    @app.post("/estimate", response_model=None)
    async def estimate(
        payload: EstimateRequest, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Estimate a meal against today's targets."""
        state_container = _container(request)
        profile_service = state_container.profile_service
        try:
            result = await state_container.estimate_service.estimate(
                payload.mealText,
                profile=profile_service.get_profile(),
                targets=profile_service.get_targets(),
                optimal_goal=state_container.settings_service.get_goal_percent(),
                day_context=state_container.stats_service.get_day_context(),
            )
        except EntryValidationError:
            raise
        except Exception as exc:
            logger.exception("Failed to estimate meal")
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"error": str(exc) or "Failed to estimate meal quality."},
            )
        return result.model_dump()

    @app.get("/settings")
    async def get_settings(request: Request) -> dict[str, int]:
        """Return the daily goal setting."""
        return {"goalPercent": _container(request).settings_service.get_goal_percent()}

    @app.patch("/settings")
    async def update_settings(
        payload: SettingsPayload, request: Request
    ) -> dict[str, int]:
        """Update the daily goal setting."""
        goal_percent = _container(request).settings_service.set_goal_percent(
            payload.goalPercent
        )
        return {"goalPercent": goal_percent}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the stored profile or defaults."""
        return profile_payload(_container(request).profile_service.get_profile())

    @app.put("/profile")
    async def save_profile(
        request: Request, payload: dict[str, Any] | None = Body(default=None)
    ) -> dict[str, object]:
        """Normalize and store the profile."""
        profile = _container(request).profile_service.save_profile(payload or {})
        return profile_payload(profile)

    @app.get("/targets")
    async def get_targets(request: Request) -> dict[str, float]:
        """Return daily targets with custom overrides applied."""
        return _container(request).profile_service.get_targets().model_dump()

    @app.put("/targets")
    async def save_targets(
        request: Request, payload: dict[str, Any] | None = Body(default=None)
    ) -> dict[str, float]:
        """Store custom targets."""
        targets = _container(request).profile_service.save_targets(payload or {})
        return targets.model_dump()

    @app.delete("/targets")
    async def reset_targets(request: Request) -> dict[str, float]:
        """Revert to profile-derived targets."""
        return _container(request).profile_service.reset_targets().model_dump()

    @app.get("/summary/overview")
    async def summary_overview(request: Request) -> dict[str, object]:
        """Return entry count, averages and streak for today."""
        return jsonable_encoder(_container(request).stats_service.get_overview())

    @app.get("/summary/today")
    async def summary_today(request: Request) -> dict[str, object]:
        """Return today's averages, totals and coverage."""
        return jsonable_encoder(_container(request).stats_service.get_day())

    @app.get("/summary/week")
    async def summary_week(request: Request) -> dict[str, object]:
        """Return the last seven days with weekly coverage."""
        return jsonable_encoder(_container(request).stats_service.get_week())

    @app.get("/grocery")
    async def grocery(request: Request) -> dict[str, object]:
        """Return a weekly staples list for the current targets."""
        targets = _container(request).profile_service.get_targets()
        return jsonable_encoder(build_grocery_plan(targets))

    return app
