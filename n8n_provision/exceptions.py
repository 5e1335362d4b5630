"""
n8n-provision Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class ProvisionError(Exception):
    """Base exception for all n8n-provision errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ValidationError(ProvisionError):
    """Raised when operator input is invalid or missing."""

    pass


class ConfigurationError(ProvisionError):
    """Raised when installer settings are invalid."""

    pass


class PrivilegeError(ProvisionError):
    """Raised when the installer is not running as root."""

    pass


class CommandError(ProvisionError):
    """Raised when an external command fails."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {command}"
        context = stderr.strip().splitlines()[-1] if stderr.strip() else None
        super().__init__(message, context)


class ProxyConfigError(ProvisionError):
    """Raised when nginx rejects the generated configuration."""

    pass


class StageError(ProvisionError):
    """Raised when a pipeline stage fails fatally."""

    def __init__(self, stage: str, message: str, context: Optional[str] = None):
        self.stage = stage
        super().__init__(f"Stage '{stage}' failed: {message}", context)


class InstallationCancelled(ProvisionError):
    """Raised when the operator declines a confirmation prompt."""

    pass
