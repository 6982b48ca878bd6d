"""Top-level menu loop."""

from enum import Enum

from rich.markup import escape

from shipctl.core.context import ShipCtlContext
from shipctl.core.logging import StructuredLogger
from shipctl.flows.outcome import FlowOutcome, FlowStatus, run_flow
from shipctl.flows.prompts import PromptChoice
from shipctl.flows.service_status import service_status_flow
from shipctl.flows.switch_context import switch_context_flow

logger = StructuredLogger(__name__)


class MenuAction(str, Enum):
    """Entries of the main menu."""

    SERVICE_STATUS = "service-status"
    SWITCH_CONTEXT = "switch-context"
    EXIT = "exit"


MENU_CHOICES = [
    PromptChoice(MenuAction.SERVICE_STATUS, "Service Status"),
    PromptChoice(MenuAction.SWITCH_CONTEXT, "Switch context"),
    PromptChoice(MenuAction.EXIT, "Exit"),
]

FLOWS = {
    MenuAction.SERVICE_STATUS: service_status_flow,
    MenuAction.SWITCH_CONTEXT: switch_context_flow,
}


def show_current_context(ctx: ShipCtlContext) -> str:
    """Print the active context; refreshed on every pass through the menu."""
    current = ctx.kubectl.get_current_context()
    ctx.output.print(f"\nCurrent context: [white on blue]{escape(current)}[/white on blue]")
    return current


def report_outcome(ctx: ShipCtlContext, action: MenuAction, outcome: FlowOutcome) -> None:
    logger.debug("Flow finished", action=action.value, status=outcome.status.value)
    if outcome.status == FlowStatus.FAILED:
        ctx.output.print_error(outcome.message or "flow failed")


def run_menu(ctx: ShipCtlContext) -> int:
    """Loop over the main menu until the operator exits.

    Returns:
        Process exit code
    """
    while True:
        show_current_context(ctx)

        action = ctx.prompter.select("What do you want to do?", MENU_CHOICES)
        if action is None:
            return 0

        if action == MenuAction.EXIT:
            ctx.output.print("Goodbye!")
            return 0

        outcome = run_flow(FLOWS[action], ctx)
        report_outcome(ctx, action, outcome)
