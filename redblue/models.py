"""Pydantic models and enums shared across the generator.

These are the typed contracts between the input collector, the scaffolder and
the pipeline.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Feature(str, Enum):
    """The feature overlays a project can be generated with."""

    RED = "red"
    BLUE = "blue"

    @property
    def label(self) -> str:
        """Human-readable label shown in the selection prompt."""
        return _FEATURE_LABELS[self]


_FEATURE_LABELS: dict[Feature, str] = {
    Feature.RED: "Red Pill 🔴",
    Feature.BLUE: "Blue Pill 🔵",
}


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` if *name* is a single directory name below the cwd.

    Separators, ``.``/``..``, NUL bytes and drive prefixes (``C:foo``) are
    rejected on every platform.
    """
    if not name or name in (".", "..") or "\x00" in name:
        return False
    if "/" in name or "\\" in name:
        return False
    return not PureWindowsPath(name).drive and not PurePath(name).is_absolute()


class GenerationRequest(BaseModel):
    """The validated answers for one generation run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    personalization_name: str = Field(..., min_length=1)
    feature: Feature

    @field_validator("project_name")
    @classmethod
    def _single_path_segment(cls, value: str) -> str:
        if not is_valid_project_name(value):
            raise ValueError("project name must be a single directory name")
        return value
