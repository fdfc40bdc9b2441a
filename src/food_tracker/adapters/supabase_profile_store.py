"""Supabase-backed store for the profile and custom targets."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_tracker.services.profiles import ProfileStore

PROFILE_ROW_ID = 1


@dataclass
class SupabaseProfileStore(ProfileStore):
    """Keeps the profile and target overrides as JSON columns."""

    client: Client

    def _load_column(self, column: str) -> object | None:
        response = (
            self.client.table("profiles")
            .select(column)
            .eq("id", PROFILE_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get(column)

    def _save_column(self, column: str, value: dict[str, object]) -> None:
        self.client.table("profiles").upsert(
            {
                "id": PROFILE_ROW_ID,
                column: value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def load_profile(self) -> object | None:
        """Return the stored profile JSON."""
        return self._load_column("profile")

    def save_profile(self, profile: dict[str, object]) -> None:
        """Persist the profile JSON."""
        self._save_column("profile", profile)

    def load_target_overrides(self) -> object | None:
        """Return stored target overrides."""
        return self._load_column("targets")

    def save_target_overrides(self, overrides: dict[str, float]) -> None:
        """Persist target overrides."""
        self._save_column("targets", dict(overrides))
