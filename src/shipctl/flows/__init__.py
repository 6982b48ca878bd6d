"""Interactive flows driven from the main menu."""

from shipctl.flows.outcome import FlowOutcome, FlowStatus, run_flow
from shipctl.flows.service_status import service_status_flow, show_service_status
from shipctl.flows.switch_context import switch_context_flow
from shipctl.flows.menu import MenuAction, run_menu

__all__ = [
    "FlowOutcome",
    "FlowStatus",
    "run_flow",
    "service_status_flow",
    "show_service_status",
    "switch_context_flow",
    "MenuAction",
    "run_menu",
]
