"""Result of running one interactive flow."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from shipctl.core.exceptions import ShipCtlError


class FlowStatus(str, Enum):
    """How a flow ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class FlowOutcome:
    status: FlowStatus
    message: str | None = None
    error: ShipCtlError | None = None

    @classmethod
    def completed(cls, message: str | None = None) -> "FlowOutcome":
        return cls(FlowStatus.COMPLETED, message)

    @classmethod
    def cancelled(cls, message: str | None = None) -> "FlowOutcome":
        return cls(FlowStatus.CANCELLED, message)

    @classmethod
    def failed(cls, error: ShipCtlError) -> "FlowOutcome":
        return cls(FlowStatus.FAILED, str(error), error)

    @property
    def ok(self) -> bool:
        return self.status != FlowStatus.FAILED


def run_flow(flow: Callable[..., FlowOutcome], *args, **kwargs) -> FlowOutcome:
    """Run a flow, turning a shipctl error into a failed outcome."""
    try:
        return flow(*args, **kwargs)
    except ShipCtlError as e:
        return FlowOutcome.failed(e)
