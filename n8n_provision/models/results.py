"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum


class StageOutcome(Enum):
    """Outcome of a single pipeline stage."""

    SUCCEEDED = "succeeded"
    FAILED_RECOVERABLE = "failed-recoverable"
    FAILED_FATAL = "failed-fatal"


@dataclass
class StageResult:
    """Result of a pipeline stage."""

    outcome: StageOutcome
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    context: Optional[str] = None

    @classmethod
    def ok(cls, message: str, **data: Any) -> "StageResult":
        return cls(StageOutcome.SUCCEEDED, message, data)

    @classmethod
    def degraded(cls, message: str, **data: Any) -> "StageResult":
        return cls(StageOutcome.FAILED_RECOVERABLE, message, data)

    @classmethod
    def fatal(cls, message: str, context: Optional[str] = None) -> "StageResult":
        return cls(StageOutcome.FAILED_FATAL, message, context=context)

    @property
    def is_fatal(self) -> bool:
        """Check if the stage must abort the pipeline."""
        return self.outcome == StageOutcome.FAILED_FATAL

    def __repr__(self) -> str:
        return f"StageResult(outcome={self.outcome.value}, message='{self.message}')"


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation has errors."""
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)})"


@dataclass
class ExecutionResult:
    """Result of a command execution on the host."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"
