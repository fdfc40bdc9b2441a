"""Statistics service for the daily log."""

from dataclasses import dataclass
from datetime import date

from food_tracker.domain.summaries import (
    DashboardOverview,
    DayContext,
    DaySummary,
    WeekSummary,
)
from food_tracker.services.aggregation import (
    build_day_context,
    compute_streak,
    summarize_day,
    summarize_week,
    weighted_average,
)
from food_tracker.services.entries import EntryRepository
from food_tracker.services.profiles import ProfileService
from food_tracker.services.settings import SettingsService
from food_tracker.services.units import get_day_key, today_in


@dataclass
class StatsService:
    """Service for computing summaries in the observer's timezone."""

    repository: EntryRepository
    profile_service: ProfileService
    settings_service: SettingsService
    timezone_name: str | None = None

    def _today(self, today: date | None) -> date:
        return today or today_in(self.timezone_name)

    def get_day(self, day: date | None = None) -> DaySummary:
        """Return the summary for a day, today by default."""
        return summarize_day(
            self.repository.list_entries(),
            self._today(day),
            self.profile_service.get_targets(),
            self.timezone_name,
        )

    def get_week(self, end_day: date | None = None) -> WeekSummary:
        """Return the seven days ending today (or ``end_day``)."""
        return summarize_week(
            self.repository.list_entries(),
            self._today(end_day),
            self.profile_service.get_targets(),
            self.timezone_name,
        )

    def get_streak(self, today: date | None = None) -> int:
        """Return the number of consecutive days meeting the goal."""
        return compute_streak(
            self.repository.list_entries(),
            self.settings_service.get_goal_percent(),
            today=self._today(today),
            timezone_name=self.timezone_name,
        )

    def get_day_context(self, day: date | None = None) -> DayContext:
        """Return the context snapshot used for estimation requests."""
        return build_day_context(
            self.repository.list_entries(), self._today(day), self.timezone_name
        )

    def get_overview(self, today: date | None = None) -> DashboardOverview:
        """Return the headline numbers for the log screen."""
        entries = self.repository.list_entries()
        current = self._today(today)
        today_key = get_day_key(current)
        today_entries = [
            entry
            for entry in entries
            if get_day_key(entry.timestamp, self.timezone_name) == today_key
        ]
        goal_percent = self.settings_service.get_goal_percent()
        return DashboardOverview(
            today_key=today_key,
            today_count=len(today_entries),
            today_average=weighted_average(today_entries),
            all_time_average=weighted_average(entries),
            streak=compute_streak(
                entries,
                goal_percent,
                today=current,
                timezone_name=self.timezone_name,
            ),
            goal_percent=goal_percent,
        )
