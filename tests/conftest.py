"""Shared test fixtures."""

import json
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from food_tracker.config import Settings
from food_tracker.containers import AppContainer
from food_tracker.domain.entries import EntryDraft, EntryMetaV2, MealEntry
from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.services.entries import EntryRepository, EntryService
from food_tracker.services.entry_meta import encode_entry_meta
from food_tracker.services.estimates import EstimateClient, EstimateService
from food_tracker.services.profiles import ProfileService, ProfileStore
from food_tracker.services.settings import SettingsRepository, SettingsService
from food_tracker.services.stats import StatsService

_COLUMN_FIELDS = {
    "mealText": "meal_text",
    "timestamp": "timestamp",
    "mood": "mood",
    "wholeFoodsPercent": "whole_foods_percent",
    "llmReason": "llm_reason",
    "notes": "notes",
    "sizeLabel": "size_label",
    "sizeWeight": "size_weight",
}


def make_entry(  # noqa: PLR0913
    score: int,
    *,
    timestamp: datetime | None = None,
    size_weight: float | None = None,
    notes: str | None = None,
    meal_text: str = "meal",
    entry_id: str | None = None,
) -> MealEntry:
    """Build a meal entry with sensible defaults."""
    return MealEntry(
        id=entry_id or str(uuid4()),
        meal_text=meal_text,
        timestamp=timestamp or datetime.now(tz=UTC),
        mood="Neutral",
        whole_foods_percent=score,
        notes=notes,
        size_weight=size_weight,
    )


def meta_notes(feel_after: int | None = None, **nutrients: float) -> str:
    """Return encoded entry metadata carrying the given nutrients."""
    return encode_entry_meta(
        EntryMetaV2(feel_after=feel_after, nutrients=NutrientTotals(**nutrients))
    )


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[str, MealEntry] = field(default_factory=dict)

    def list_entries(self) -> list[MealEntry]:
        return sorted(self.entries.values(), key=lambda e: e.timestamp, reverse=True)

    def create_entry(self, draft: EntryDraft) -> MealEntry:
        entry = MealEntry(
            id=str(uuid4()),
            meal_text=draft.meal_text,
            timestamp=draft.timestamp,
            mood=draft.mood,
            whole_foods_percent=draft.whole_foods_percent,
            llm_reason=draft.llm_reason,
            notes=draft.notes,
            size_label=draft.size_label,
            size_weight=draft.size_weight,
        )
        self.entries[entry.id] = entry
        return entry

    def add(self, entry: MealEntry) -> MealEntry:
        self.entries[entry.id] = entry
        return entry

    def update_entry(
        self, entry_id: str, changes: dict[str, object]
    ) -> MealEntry | None:
        current = self.entries.get(entry_id)
        if current is None:
            return None
        updated = replace(
            current,
            **{_COLUMN_FIELDS[column]: value for column, value in changes.items()},
        )
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        return self.entries.pop(entry_id, None) is not None


@dataclass
class InMemorySettingsRepository(SettingsRepository):
    """In-memory settings repository for tests."""

    goal_percent: int | None = None

    def get_goal_percent(self) -> int | None:
        return self.goal_percent

    def set_goal_percent(self, goal_percent: int) -> None:
        self.goal_percent = goal_percent


@dataclass
class InMemoryProfileStore(ProfileStore):
    """In-memory profile store for tests."""

    profile: object | None = None
    targets: object | None = None

    def load_profile(self) -> object | None:
        return self.profile

    def save_profile(self, profile: dict[str, object]) -> None:
        self.profile = profile

    def load_target_overrides(self) -> object | None:
        return self.targets

    def save_target_overrides(self, overrides: dict[str, float]) -> None:
        self.targets = overrides


@dataclass
class FakeEstimateClient(EstimateClient):
    """Fake estimation client returning a fixed text response."""

    response_text: str = field(
        default_factory=lambda: json.dumps(
            {
                "optimal_score": 86,
                "summary": "Mostly whole foods with a solid protein base.",
                "positive": ["lean protein", "vegetables"],
                "improve": ["more fiber"],
                "nutrients": {"protein_g": 42, "fiber_g": 9, "sodium_mg": 640},
                "recommendation": "Add a bean salad for dinner.",
                "recommendation_options": ["bean salad", "lentil soup"],
                "size_label": "large",
                "size_weight": 1.3,
                "confidence": "high",
            }
        )
    )
    error: Exception | None = None
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def estimate(self, *, meal_text: str, context: dict[str, object]) -> str:
        self.calls.append((meal_text, context))
        if self.error is not None:
            raise self.error
        return self.response_text


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
        timezone="UTC",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def estimate_client() -> FakeEstimateClient:
    return FakeEstimateClient()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def container(
    settings: Settings,
    entry_repository: InMemoryEntryRepository,
    estimate_client: FakeEstimateClient,
    profile_store: InMemoryProfileStore,
) -> AppContainer:
    settings_service = SettingsService(InMemorySettingsRepository())
    profile_service = ProfileService(profile_store)
    stats_service = StatsService(
        repository=entry_repository,
        profile_service=profile_service,
        settings_service=settings_service,
        timezone_name=settings.timezone,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        entry_service=EntryService(entry_repository),
        estimate_service=EstimateService(estimate_client),
        settings_service=settings_service,
        profile_service=profile_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
