"""Validation result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ValidationCheck:
    """Result of a single validation check.

    Attributes:
        name: Identifier for the check.
        severity: "pass", "warn", or "fail".
        message: Human-readable description of the result.
    """

    name: str
    severity: Literal["pass", "warn", "fail"]
    message: str = ""


@dataclass
class ValidationReport:
    """Outcome of validating one composed prompt.

    Attributes:
        length: Character count of the validated text.
        max_length: Ceiling the text was checked against.
        issues: One actionable message per failed check.
        suggestions: Remediation notes; advisory, never affect validity.
        checks: Individual check results, in evaluation order.
    """

    length: int
    max_length: int
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def has_failures(self) -> bool:
        """True if any check has severity 'fail'."""
        return any(c.severity == "fail" for c in self.checks)

    @property
    def has_warnings(self) -> bool:
        """True if any check has severity 'warn'."""
        return any(c.severity == "warn" for c in self.checks)

    @property
    def summary(self) -> str:
        """Human-readable summary of all checks."""
        fails = [c for c in self.checks if c.severity == "fail"]
        warns = [c for c in self.checks if c.severity == "warn"]
        passes = [c for c in self.checks if c.severity == "pass"]

        parts: list[str] = []
        if fails:
            parts.append(f"{len(fails)} failed")
        if warns:
            parts.append(f"{len(warns)} warnings")
        if passes:
            parts.append(f"{len(passes)} passed")
        return ", ".join(parts)

    def fail(self, name: str, message: str) -> None:
        self.checks.append(ValidationCheck(name, "fail", message))
        self.issues.append(message)

    def warn(self, name: str, message: str, suggestion: str | None = None) -> None:
        self.checks.append(ValidationCheck(name, "warn", message))
        if suggestion:
            self.suggestions.append(suggestion)

    def ok(self, name: str, message: str = "") -> None:
        self.checks.append(ValidationCheck(name, "pass", message))
