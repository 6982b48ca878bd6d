"""Custom exceptions for shipctl."""

from typing import Any


class ShipCtlError(Exception):
    """Base exception for all shipctl errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigError(ShipCtlError):
    """Configuration-related errors."""

    pass


class CommandFailure(ShipCtlError):
    """An external command exited with a non-zero status."""

    def __init__(
        self,
        command_line: str,
        stderr: str,
        exit_code: int,
    ):
        super().__init__(f"Failed to run command [{command_line}]\n{stderr}")
        self.command_line = command_line
        self.stderr = stderr
        self.exit_code = exit_code


class ParseFailure(ShipCtlError):
    """Command output could not be parsed into the expected shape."""

    def __init__(self, command_line: str, reason: str):
        super().__init__(f"Unexpected output from [{command_line}]: {reason}")
        self.command_line = command_line
        self.reason = reason


class UnknownContext(ShipCtlError):
    """Requested kube context is not in the kubeconfig."""

    def __init__(self, context: str, suggestions: list[str] | None = None):
        message = f"Context [{context}] not found"
        if suggestions:
            message = f"{message}. Did you mean: {', '.join(suggestions)}?"
        super().__init__(message)
        self.context = context
        self.suggestions = suggestions or []
