"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_tracker.adapters.openai_estimate_client import OpenAIEstimateClient
from food_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from food_tracker.adapters.supabase_profile_store import SupabaseProfileStore
from food_tracker.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from food_tracker.config import Settings
from food_tracker.services.entries import EntryService
from food_tracker.services.estimates import EstimateService
from food_tracker.services.profiles import ProfileService
from food_tracker.services.settings import SettingsService
from food_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    estimate_service: EstimateService
    settings_service: SettingsService
    profile_service: ProfileService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    settings_repository = SupabaseSettingsRepository(supabase_client)
    profile_store = SupabaseProfileStore(supabase_client)
    estimate_client = OpenAIEstimateClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    settings_service = SettingsService(
        settings_repository,
        default_goal_percent=resolved_settings.default_goal_percent,
    )
    profile_service = ProfileService(profile_store)
    stats_service = StatsService(
        repository=entry_repository,
        profile_service=profile_service,
        settings_service=settings_service,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        await estimate_client.close()

    return AppContainer(
        settings=resolved_settings,
        entry_service=EntryService(entry_repository),
        estimate_service=EstimateService(estimate_client),
        settings_service=settings_service,
        profile_service=profile_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
