"""Daily goal settings service."""

from dataclasses import dataclass
from typing import Protocol

from food_tracker.services.units import clamp, round_half_up, to_number

DEFAULT_GOAL_PERCENT = 80


class SettingsRepository(Protocol):
    """Persistence interface for app settings."""

    def get_goal_percent(self) -> int | None:
        """Return the stored goal percent if set."""

    def set_goal_percent(self, goal_percent: int) -> None:
        """Persist the goal percent."""


@dataclass
class SettingsService:
    """Service for the daily whole-foods goal."""

    repository: SettingsRepository
    default_goal_percent: int = DEFAULT_GOAL_PERCENT

    def get_goal_percent(self) -> int:
        """Return the goal percent or the default if unset."""
        stored = self.repository.get_goal_percent()
        if stored is None:
            return self.default_goal_percent
        return int(clamp(stored, 0, 100))

    def set_goal_percent(self, value: object) -> int:
        """Clamp and persist a new goal percent."""
        goal_percent = int(clamp(round_half_up(to_number(value)), 0, 100))
        self.repository.set_goal_percent(goal_percent)
        return goal_percent
