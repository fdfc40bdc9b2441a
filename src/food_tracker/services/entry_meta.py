"""Encoding and decoding of the metadata stored in entry notes."""

import json
import logging
from collections.abc import Callable, Mapping

from food_tracker.domain.entries import Confidence, EntryMeta, EntryMetaV2
from food_tracker.domain.estimates import Estimate
from food_tracker.services.nutrients import sanitize_nutrients
from food_tracker.services.units import clamp, parse_number, round_half_up

ENTRY_META_VERSION = 2
MAX_LIST_ITEMS = 4

_logger = logging.getLogger(__name__)


def normalize_string_list(value: object, limit: int = MAX_LIST_ITEMS) -> list[str]:
    """Stringify, trim and drop empty items, keeping at most ``limit``."""
    if not isinstance(value, list | tuple):
        return []
    items = [str(item).strip() for item in value if item is not None]
    return [item for item in items if item][:limit]


def normalize_confidence(value: object) -> Confidence:
    """Return low/high when given exactly that word, else medium."""
    raw = str(value).strip().lower() if isinstance(value, str) else ""
    if raw == "low":
        return "low"
    if raw == "high":
        return "high"
    return "medium"


def normalize_feel_after(value: object) -> int | None:
    """Accept feel ratings of at least 1, clamped to the 1-5 scale."""
    number = parse_number(value)
    if number is None or number < 1:
        return None
    return int(clamp(round_half_up(number), 1, 5))


def encode_entry_meta(meta: EntryMetaV2) -> str:
    """Serialize metadata for storage in the notes field."""
    return meta.model_dump_json()


def decode_entry_meta(raw: str | None) -> EntryMeta | None:
    """Decode notes into metadata, or None when absent or foreign."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        _logger.debug("Ignoring notes that are not JSON")
        return None
    if not isinstance(payload, dict):
        return None
    version = payload.get("version")
    if isinstance(version, bool) or not isinstance(version, int | float):
        return None
    if isinstance(version, float):
        if not version.is_integer():
            return None
        version = int(version)
    decoder = _DECODERS.get(version)
    if decoder is None:
        _logger.debug("Ignoring notes with unsupported version %s", version)
        return None
    return decoder(payload)


def build_entry_meta(estimate: Estimate, feel_after: object = None) -> EntryMetaV2:
    """Create entry metadata from an accepted estimate."""
    return EntryMetaV2(
        feel_after=normalize_feel_after(feel_after),
        nutrients=estimate.nutrients,
        positive=normalize_string_list(estimate.positive),
        improve=normalize_string_list(estimate.improve),
        recommendation=estimate.recommendation,
        recommendation_options=normalize_string_list(estimate.recommendation_options),
        confidence=estimate.confidence,
    )


def _decode_v2(payload: Mapping[str, object]) -> EntryMetaV2:
    recommendation = payload.get("recommendation")
    return EntryMetaV2(
        feel_after=normalize_feel_after(payload.get("feel_after")),
        nutrients=sanitize_nutrients(payload.get("nutrients")),
        positive=normalize_string_list(payload.get("positive")),
        improve=normalize_string_list(payload.get("improve")),
        recommendation=recommendation if isinstance(recommendation, str) else "",
        recommendation_options=normalize_string_list(
            payload.get("recommendation_options")
        ),
        confidence=normalize_confidence(payload.get("confidence")),
    )


_DECODERS: dict[int, Callable[[Mapping[str, object]], EntryMeta]] = {
    ENTRY_META_VERSION: _decode_v2,
}
