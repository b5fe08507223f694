"""
Result types returned by the validators.

Validators never raise on invalid candidates. The schema validator returns
SchemaSuccess or SchemaFailure; business-rule validators return a list of
violation strings (empty means valid).
"""

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar, Union

from ai_risk_reporting.models.common import ArtifactModel

T = TypeVar("T", bound=ArtifactModel)

StructuralErrorKind = Literal["parse", "schema"]


@dataclass(frozen=True)
class StructuralError:
    """
    First structural problem found in a candidate.

    Attributes:
        path: Dotted path to the offending field ("root" for whole-document errors)
        message: Human-readable description
        expected: What the field should have been (type, range or enum)
        actual: Short rendering of what was found
        kind: "parse" (not a JSON object) or "schema" (wrong shape)
    """

    path: str
    message: str
    expected: str
    actual: str
    kind: StructuralErrorKind = "schema"

    def __str__(self) -> str:
        if self.kind == "parse":
            return f"JSON parse error: {self.message}"
        return f"{self.path}: {self.message} (expected {self.expected}, got {self.actual})"


@dataclass(frozen=True)
class SchemaSuccess(Generic[T]):
    artifact: T
    ok: Literal[True] = True


@dataclass(frozen=True)
class SchemaFailure:
    error: StructuralError
    error_count: int = 1
    other_errors: tuple[str, ...] = field(default_factory=tuple)
    ok: Literal[False] = False


SchemaResult = Union[SchemaSuccess, SchemaFailure]
