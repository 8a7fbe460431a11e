"""
Schemas - Verification results
File: verification.py

Purpose: Structured outcome of proof verification.
``verify_proof`` only answers yes/no; ``check_proof`` returns a
VerificationResult so callers can see which check rejected a proof.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import HashTreeError


# Checks applied by check_proof(), in the order they run
ProofCheckId = Literal["proof_structure", "root_match"]


class CheckResult(BaseModel):
    """Outcome of one check applied to a proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_id: ProofCheckId
    ok: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def passed(
        cls,
        check_id: ProofCheckId,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, message=message, details=details or {})

    @classmethod
    def failed(
        cls,
        check_id: ProofCheckId,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=False, message=message, details=details or {})


class VerificationResult(BaseModel):
    """
    Complete result of verifying one proof against a trusted root.

    ``ok`` is True only when every check passed. Checks stop at the first
    failure, so a malformed proof reports ``proof_structure`` only.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool
    checks: list[CheckResult] = Field(default_factory=list)
    error: HashTreeError | None = Field(
        default=None,
        description="Structured error for the failing check",
    )

    @property
    def error_count(self) -> int:
        return len(self.get_failed_checks())

    def get_failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.ok]

    def get_error_messages(self) -> list[str]:
        return [check.message for check in self.get_failed_checks()]

    @classmethod
    def success(cls, checks: list[CheckResult]) -> "VerificationResult":
        return cls(ok=True, checks=checks)

    @classmethod
    def failure(
        cls,
        checks: list[CheckResult],
        error: HashTreeError | None = None,
    ) -> "VerificationResult":
        return cls(ok=False, checks=checks, error=error)
