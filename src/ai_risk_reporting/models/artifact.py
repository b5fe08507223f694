"""
Accepted pipeline artifacts.

Artifact is a frozen dataclass wrapping one stage's validated payload with
the identifiers needed to audit it: which stage produced it, under which
schema version, which model generated it and after how many attempts.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ai_risk_reporting.models.common import ArtifactModel
from ai_risk_reporting.models.enums import StageId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Artifact:
    """
    Immutable, versioned output of one pipeline stage.

    Only accepted payloads are ever wrapped; a rejected candidate is
    discarded and regenerated, never stored as an Artifact.

    Attributes:
        stage: Stage that produced the payload
        schema_version: Version of the payload shape
        payload: Schema- and rule-validated artifact model
        attempts: Generation attempts consumed to produce it (1 = first try)
        model_version: Model that generated the accepted attempt
        created_at: Acceptance timestamp (UTC)
    """

    stage: StageId
    schema_version: str
    payload: ArtifactModel
    attempts: int
    model_version: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Validate artifact invariants."""
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "stage": self.stage.value,
            "schema_version": self.schema_version,
            "payload": self.payload.model_dump(mode="json"),
            "attempts": self.attempts,
            "model_version": self.model_version,
            "created_at": self.created_at.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"Artifact("
            f"stage={self.stage.value}, "
            f"schema={self.schema_version}, "
            f"attempts={self.attempts})"
        )
