"""Pydantic models for HTTP request payloads.

Fields are typed loosely on purpose: normalization and clamping happen
in the services, so malformed values degrade instead of failing with 422.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class EntryPayload(BaseModel):
    """Create or update payload for a meal entry."""

    model_config = ConfigDict(extra="ignore")

    mealText: Any = None  # noqa: N815
    timestamp: Any = None
    mood: Any = None
    wholeFoodsPercent: Any = None  # noqa: N815
    llmReason: Any = None  # noqa: N815
    notes: Any = None
    sizeLabel: Any = None  # noqa: N815
    sizeWeight: Any = None  # noqa: N815


class EstimateRequest(BaseModel):
    """Request to estimate a meal description."""

    model_config = ConfigDict(extra="ignore")

    mealText: Any = None  # noqa: N815


class CommitEstimateRequest(BaseModel):
    """Request to save an accepted estimate as an entry."""

    model_config = ConfigDict(extra="ignore")

    mealText: Any = None  # noqa: N815
    estimate: Any = None
    feelAfter: Any = None  # noqa: N815
    mood: Any = None


class SettingsPayload(BaseModel):
    """Update payload for settings."""

    model_config = ConfigDict(extra="ignore")

    goalPercent: Any = None  # noqa: N815
