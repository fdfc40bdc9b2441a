"""Supabase repository for meal entries."""

import logging
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from food_tracker.domain.entries import EntryDraft, MealEntry
from food_tracker.services.entries import EntryRepository
from food_tracker.services.units import parse_number, parse_timestamp

_COLUMNS = (
    "id, mealText, timestamp, mood, wholeFoodsPercent, llmReason, notes, "
    "sizeLabel, sizeWeight"
)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for meal entries."""

    client: Client
    table_name: str = "meal_entries"

    def list_entries(self) -> list[MealEntry]:
        """Return all entries, newest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("timestamp", desc=True)
            .execute()
        )
        entries = [_parse_row(row) for row in response.data or []]
        return [entry for entry in entries if entry is not None]

    def create_entry(self, draft: EntryDraft) -> MealEntry:
        """Insert an entry row and return it."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "mealText": draft.meal_text,
                    "timestamp": draft.timestamp.isoformat(),
                    "mood": draft.mood,
                    "wholeFoodsPercent": draft.whole_foods_percent,
                    "llmReason": draft.llm_reason,
                    "notes": draft.notes,
                    "sizeLabel": draft.size_label,
                    "sizeWeight": draft.size_weight,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal entry")
        entry = _parse_row(response.data[0])
        if entry is None:
            raise RuntimeError("Created meal entry has no timestamp")
        return entry

    def update_entry(
        self, entry_id: str, changes: dict[str, object]
    ) -> MealEntry | None:
        """Apply column changes to an entry."""
        payload = {
            column: value.isoformat() if isinstance(value, datetime) else value
            for column, value in changes.items()
        }
        if not payload:
            response = (
                self.client.table(self.table_name)
                .select(_COLUMNS)
                .eq("id", entry_id)
                .limit(1)
                .execute()
            )
        else:
            response = (
                self.client.table(self.table_name)
                .update(payload)
                .eq("id", entry_id)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry row."""
        response = (
            self.client.table(self.table_name).delete().eq("id", entry_id).execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> MealEntry | None:
    """Build an entry from a row, or None when its timestamp is unusable."""
    timestamp = parse_timestamp(row.get("timestamp"))
    if timestamp is None:
        _logger.debug(
            "Skipping meal entry %s without a valid timestamp", row.get("id")
        )
        return None
    size_label = row.get("sizeLabel")
    notes = row.get("notes")
    return MealEntry(
        id=str(row.get("id", "")),
        meal_text=str(row.get("mealText") or ""),
        timestamp=timestamp,
        mood=str(row.get("mood") or ""),
        whole_foods_percent=int(parse_number(row.get("wholeFoodsPercent")) or 0),
        llm_reason=str(row.get("llmReason") or ""),
        notes=notes if isinstance(notes, str) else None,
        size_label=size_label if isinstance(size_label, str) else None,
        size_weight=parse_number(row.get("sizeWeight")),
    )
