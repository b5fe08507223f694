"""
Shared base classes for generated artifacts.

Every artifact model is immutable once validated: an accepted artifact is
passed downstream as-is and never patched. Collections are stored as tuples
so that nested values cannot be mutated either.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ArtifactModel(BaseModel):
    """
    Base for all generated artifact models.

    Unknown keys are ignored rather than rejected: generation output often
    carries harmless commentary fields, and only declared fields are checked.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


class InputModel(BaseModel):
    """Base for stage input bundles supplied by the surrounding application."""

    model_config = ConfigDict(frozen=True, extra="forbid")


NonEmptyStr = Annotated[str, Field(min_length=1)]
"""A string that must carry at least one character."""

Score = Annotated[int, Field(ge=1, le=5)]
"""A 1-5 risk dimension score."""

Count = Annotated[int, Field(ge=0)]
