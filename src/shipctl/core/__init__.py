"""Core utilities and shared components for shipctl."""

# Note: Import context lazily to avoid circular imports
# Use: from shipctl.core.context import ShipCtlContext, pass_context
from shipctl.core.exceptions import (
    ShipCtlError,
    ConfigError,
    CommandFailure,
    ParseFailure,
    UnknownContext,
)
from shipctl.core.output import OutputFormat, OutputFormatter

__all__ = [
    "ShipCtlError",
    "ConfigError",
    "CommandFailure",
    "ParseFailure",
    "UnknownContext",
    "OutputFormat",
    "OutputFormatter",
]
