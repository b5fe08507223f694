"""
Common contract for per-stage business-rule validators.

A validator receives a schema-valid candidate plus the stage's upstream
bundle and returns every violation it finds, in a stable order. It never
stops at the first problem: the whole list is fed back to the next
generation attempt as corrective context.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import structlog

from ai_risk_reporting.models.common import ArtifactModel, InputModel

A = TypeVar("A", bound=ArtifactModel)
U = TypeVar("U", bound=InputModel)

logger = structlog.get_logger(__name__)


class BusinessRuleValidator(ABC, Generic[A, U]):
    """
    Base class for stage rule validators.

    Subclasses implement `_checks`, returning the bound check methods in the
    order their violations should be reported. Each check returns a list.
    """

    name: str = "business_rules"

    def validate(self, artifact: A, upstream: U) -> list[str]:
        """
        Run all checks and accumulate violations.

        Args:
            artifact: Schema-validated candidate
            upstream: Stage input bundle the candidate was generated from

        Returns:
            List of violation messages (empty if valid)
        """
        violations: list[str] = []
        for check in self._checks():
            violations.extend(check(artifact, upstream))

        if violations:
            logger.debug("Business rule violations found", validator=self.name, count=len(violations))
        return violations

    @abstractmethod
    def _checks(self) -> list:
        """Ordered check callables of signature (artifact, upstream) -> list[str]."""
