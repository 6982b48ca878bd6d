"""Service status: pick a namespace and releases, show their state."""

from typing import Sequence

from shipctl.core.context import ShipCtlContext
from shipctl.core.logging import StructuredLogger
from shipctl.core.output import OutputFormat
from shipctl.flows.outcome import FlowOutcome
from shipctl.flows.prompts import PromptChoice

logger = StructuredLogger(__name__)

RELEASE_COLUMNS = ["Name", "Image", "Status", "Last Deployed"]
POD_COLUMNS = ["Name", "Status", "Started", "Image"]
STRUCTURED_FORMATS = (OutputFormat.JSON, OutputFormat.YAML)


def service_status_flow(ctx: ShipCtlContext) -> FlowOutcome:
    """Prompt for a namespace and releases, then print their status."""
    namespaces = ctx.kubectl.get_namespaces()
    if not namespaces:
        ctx.output.print_warning("No matching namespaces found")
        return FlowOutcome.cancelled("no namespaces")

    namespace = ctx.prompter.select(
        "Select the namespace",
        [PromptChoice(n, n) for n in namespaces],
    )
    if namespace is None:
        return FlowOutcome.cancelled()

    releases = ctx.helm.list_releases(namespace)
    if not releases:
        ctx.output.print_warning(f"No releases found in {namespace}")
        return FlowOutcome.cancelled("no releases")

    selected = ctx.prompter.checkbox(
        "Select the release",
        [PromptChoice(r, r) for r in releases],
    )
    if not selected:
        return FlowOutcome.cancelled()

    show_service_status(ctx, namespace, selected)
    return FlowOutcome.completed()


def show_service_status(ctx: ShipCtlContext, namespace: str, releases: Sequence[str]) -> None:
    """Print a status table for ``releases``.

    A single release also gets its pods and revision history. In json and
    yaml output the three parts are printed as one document.
    """
    log = logger.bind(namespace=namespace)
    statuses = []
    for release in releases:
        statuses.append(ctx.helm.get_release_status(release, namespace))
    log.debug("Fetched release statuses", count=len(statuses))

    release_rows = [s.to_row() for s in statuses]
    if len(statuses) != 1:
        ctx.output.print_table(release_rows, columns=RELEASE_COLUMNS, title=f"Releases in {namespace}")
        return

    name = statuses[0].name
    pods = ctx.kubectl.get_pods_info(name, namespace)
    history = ctx.helm.get_release_history(name, namespace)
    log.debug("Fetched release details", release=name, pods=len(pods))

    pod_rows = [p.to_row() for p in pods]
    if ctx.output_format in STRUCTURED_FORMATS:
        ctx.output.print_data({"releases": release_rows, "pods": pod_rows, "history": history})
        return

    ctx.output.print_table(release_rows, columns=RELEASE_COLUMNS, title=f"Releases in {namespace}")
    ctx.output.print_table(pod_rows, columns=POD_COLUMNS, title=f"Pods for app={name}")
    ctx.output.print_text("\n" + history)