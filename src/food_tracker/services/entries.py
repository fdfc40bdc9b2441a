"""Meal entry service: validation in front of the entry store."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from food_tracker.domain.entries import EntryDraft, EntryValidationError, MealEntry
from food_tracker.domain.estimates import Estimate
from food_tracker.services.entry_meta import build_entry_meta, encode_entry_meta
from food_tracker.services.units import clamp, parse_timestamp, round_half_up, to_number

DEFAULT_MOOD = "Neutral"

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def list_entries(self) -> list[MealEntry]:
        """Return all entries, newest first."""

    def create_entry(self, draft: EntryDraft) -> MealEntry:
        """Create an entry and return it with its id."""

    def update_entry(
        self, entry_id: str, changes: dict[str, object]
    ) -> MealEntry | None:
        """Apply column changes and return the updated entry."""

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry, returning False when it did not exist."""


def normalize_score(value: object) -> int:
    """Clamp a whole-foods percent to [0, 100]; junk becomes 0."""
    return int(clamp(round_half_up(to_number(value)), 0, 100))


def normalize_size_weight(value: object) -> float | None:
    """Clamp a portion weight to [0.5, 2], or None when not given."""
    if not value:
        return None
    weight = to_number(value, 1.0)
    return clamp(weight, 0.5, 2.0)


def entry_payload(entry: MealEntry) -> dict[str, object]:
    """Return the persisted camelCase shape of an entry."""
    return {
        "id": entry.id,
        "mealText": entry.meal_text,
        "timestamp": entry.timestamp.isoformat(),
        "mood": entry.mood,
        "wholeFoodsPercent": entry.whole_foods_percent,
        "llmReason": entry.llm_reason,
        "notes": entry.notes,
        "sizeLabel": entry.size_label,
        "sizeWeight": entry.size_weight,
    }


def _meal_text(raw: Mapping[str, object]) -> str:
    value = raw.get("mealText")
    return value.strip() if isinstance(value, str) else ""


def parse_entry_draft(raw: Mapping[str, object]) -> EntryDraft:
    """Validate a create request; raises EntryValidationError."""
    meal_text = _meal_text(raw)
    if not meal_text:
        raise EntryValidationError("Meal text is required.")
    timestamp = parse_timestamp(raw.get("timestamp"))
    if timestamp is None:
        raise EntryValidationError("Invalid entry data.")
    mood = raw.get("mood")
    llm_reason = raw.get("llmReason")
    notes = raw.get("notes")
    size_label = raw.get("sizeLabel")
    return EntryDraft(
        meal_text=meal_text,
        timestamp=timestamp,
        mood=mood if isinstance(mood, str) else "",
        whole_foods_percent=normalize_score(raw.get("wholeFoodsPercent")),
        llm_reason=llm_reason if isinstance(llm_reason, str) else "",
        notes=notes if isinstance(notes, str) else None,
        size_label=size_label if isinstance(size_label, str) else None,
        size_weight=normalize_size_weight(raw.get("sizeWeight")),
    )


def parse_entry_changes(  # noqa: PLR0912
    raw: Mapping[str, object],
) -> dict[str, object]:
    """Translate a partial update request into column changes."""
    changes: dict[str, object] = {}
    if isinstance(raw.get("mealText"), str):
        meal_text = _meal_text(raw)
        if not meal_text:
            raise EntryValidationError("Meal text is required.")
        changes["mealText"] = meal_text
    if isinstance(raw.get("mood"), str):
        changes["mood"] = raw["mood"]
    if "notes" in raw:
        notes = raw["notes"]
        if isinstance(notes, str) or notes is None:
            changes["notes"] = notes
    if raw.get("timestamp"):
        timestamp = parse_timestamp(raw["timestamp"])
        if timestamp is not None:
            changes["timestamp"] = timestamp
    if "wholeFoodsPercent" in raw:
        changes["wholeFoodsPercent"] = normalize_score(raw["wholeFoodsPercent"])
    if "sizeWeight" in raw:
        changes["sizeWeight"] = normalize_size_weight(raw["sizeWeight"])
    if "sizeLabel" in raw:
        size_label = raw["sizeLabel"]
        changes["sizeLabel"] = size_label if isinstance(size_label, str) else None
    return changes


@dataclass
class EntryService:
    """Service for creating, editing and listing meal entries."""

    repository: EntryRepository

    def list_entries(self) -> list[MealEntry]:
        """Return all entries, newest first."""
        return sorted(
            self.repository.list_entries(),
            key=lambda entry: entry.timestamp,
            reverse=True,
        )

    def create_entry(self, raw: Mapping[str, object]) -> MealEntry:
        """Validate and persist a new entry."""
        entry = self.repository.create_entry(parse_entry_draft(raw))
        _logger.info("Created meal entry %s", entry.id)
        return entry

    def commit_estimate(  # noqa: PLR0913
        self,
        meal_text: object,
        estimate: Estimate,
        *,
        feel_after: object = None,
        mood: str = DEFAULT_MOOD,
        timestamp: datetime | None = None,
    ) -> MealEntry:
        """Save an accepted estimate as an entry with encoded metadata."""
        text = meal_text.strip() if isinstance(meal_text, str) else ""
        if not text:
            raise EntryValidationError("Meal text is required.")
        draft = EntryDraft(
            meal_text=text,
            timestamp=timestamp or datetime.now(tz=UTC),
            mood=mood,
            whole_foods_percent=estimate.optimal_score,
            llm_reason=estimate.summary,
            notes=encode_entry_meta(build_entry_meta(estimate, feel_after)),
            size_label=estimate.size_label,
            size_weight=estimate.size_weight,
        )
        entry = self.repository.create_entry(draft)
        _logger.info("Saved estimated meal entry %s", entry.id)
        return entry

    def update_entry(
        self, entry_id: str, raw: Mapping[str, object]
    ) -> MealEntry | None:
        """Apply a partial update; returns None for unknown ids."""
        return self.repository.update_entry(entry_id, parse_entry_changes(raw))

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry by id."""
        deleted = self.repository.delete_entry(entry_id)
        if deleted:
            _logger.info("Deleted meal entry %s", entry_id)
        return deleted
