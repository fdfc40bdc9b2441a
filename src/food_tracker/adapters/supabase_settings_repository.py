"""Supabase repository for app settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_tracker.services.settings import SettingsRepository

SETTINGS_ROW_ID = 1


@dataclass
class SupabaseSettingsRepository(SettingsRepository):
    """Supabase implementation for the single settings row."""

    client: Client

    def get_goal_percent(self) -> int | None:
        """Return the stored goal percent."""
        response = (
            self.client.table("settings")
            .select("goalPercent")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("goalPercent")
        return int(value) if isinstance(value, int | float) else None

    def set_goal_percent(self, goal_percent: int) -> None:
        """Upsert the goal percent."""
        self.client.table("settings").upsert(
            {
                "id": SETTINGS_ROW_ID,
                "goalPercent": goal_percent,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
