"""Switch context: jump between the configured environments."""

from dataclasses import dataclass
from typing import Sequence

from shipctl.config import EnvironmentConfig
from shipctl.core.context import ShipCtlContext
from shipctl.flows.outcome import FlowOutcome
from shipctl.flows.prompts import PromptChoice


@dataclass(frozen=True)
class EnvironmentChoice:
    """An environment resolved against the kubeconfig's contexts."""

    name: str
    suffix: str
    context: str | None


def build_environment_choices(
    environments: Sequence[EnvironmentConfig],
    contexts: Sequence[str],
) -> list[EnvironmentChoice]:
    """Pair each environment with the first context ending in its suffix."""
    choices = []
    for env in environments:
        match = next((c for c in contexts if c.endswith(env.suffix)), None)
        choices.append(EnvironmentChoice(env.name, env.suffix, match))
    return choices


def preselect_index(choices: Sequence[EnvironmentChoice], current_context: str) -> int | None:
    """Index of the choice already pointing at ``current_context``, if any."""
    for index, choice in enumerate(choices):
        if choice.context is not None and choice.context == current_context:
            return index
    return None


def switch_context_flow(ctx: ShipCtlContext) -> FlowOutcome:
    """Prompt for an environment and make its context the active one."""
    contexts = ctx.kubectl.get_config_contexts()
    current = ctx.kubectl.get_current_context()
    choices = build_environment_choices(ctx.profile.environments, contexts)

    selected = ctx.prompter.select(
        "Environment to switch to:",
        [
            PromptChoice(c, c.name, c.context or f"no context ending in '{c.suffix}'")
            for c in choices
        ],
        default_index=preselect_index(choices, current),
    )
    if selected is None:
        return FlowOutcome.cancelled()

    if selected.context is None:
        ctx.output.print_warning(
            f"No context ending in '{selected.suffix}' for environment {selected.name}"
        )
        return FlowOutcome.cancelled("unmatched environment")

    result = ctx.kubectl.use_config_context(selected.context)
    ctx.output.print_text(result.stdout.rstrip("\n"))
    return FlowOutcome.completed()
