"""Cluster client wrapping the kubectl CLI."""

import json
from typing import Any, Sequence

from pydantic import ValidationError

from shipctl.clients.models import PodPayload, PodSummary, describe_validation_error
from shipctl.core.exceptions import ParseFailure, UnknownContext
from shipctl.core.logging import StructuredLogger
from shipctl.core.runner import CommandResult, ProcessRunner
from shipctl.core.suggestions import suggest_names
from shipctl.core.utils import DEFAULT_TIMESTAMP_FORMAT, format_command, split_lines

logger = StructuredLogger(__name__)

DEFAULT_NAMESPACE_FILTERS = ("dev", "test")


class ClusterClient:
    """Reads pods, namespaces and contexts through ``kubectl``.

    ``use_config_context`` is the only call that changes anything outside
    this process.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        binary: str = "kubectl",
        namespace_filters: Sequence[str] = DEFAULT_NAMESPACE_FILTERS,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self._runner = runner
        self._binary = binary
        self._namespace_filters = tuple(namespace_filters)
        self._timestamp_format = timestamp_format

    @property
    def binary(self) -> str:
        return self._binary

    def run(self, args: list[str]) -> CommandResult:
        """Run a kubectl subcommand."""
        return self._runner.run(self._binary, args)

    def _run_json(self, args: list[str]) -> Any:
        result = self.run(args)
        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ParseFailure(format_command(self._binary, args), f"invalid JSON ({e})")

    def get_pods_info(self, app: str, namespace: str) -> list[PodSummary]:
        """Summarize the pods labelled ``app=<app>``, in the order kubectl lists them."""
        args = ["get", "pods", "-n", namespace, "-l", f"app={app}", "-o", "json"]
        data = self._run_json(args)
        command_line = format_command(self._binary, args)

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ParseFailure(command_line, "expected an object with an 'items' list")

        pods = []
        for index, item in enumerate(data["items"]):
            if not isinstance(item, dict) or item.get("kind") != "Pod":
                continue
            try:
                payload = PodPayload.model_validate(item)
                pods.append(PodSummary.from_payload(payload, self._timestamp_format))
            except ValidationError as e:
                raise ParseFailure(command_line, f"items.{index}: {describe_validation_error(e)}")
            except ValueError as e:
                raise ParseFailure(command_line, f"items.{index}: {e}")

        logger.debug("Listed pods", app=app, namespace=namespace, count=len(pods))
        return pods

    def get_config_contexts(self) -> list[str]:
        """List context names from the kubeconfig."""
        result = self.run(["config", "get-contexts", "-o", "name"])
        return split_lines(result.stdout)

    def get_namespaces(self) -> list[str]:
        """List namespace names matching one of the configured filters."""
        result = self.run(["get", "namespaces", "-o", "name"])
        namespaces = []
        for line in split_lines(result.stdout):
            # "namespace/dev-a" -> "dev-a"
            name = line.split("/", 1)[-1]
            if any(f in name for f in self._namespace_filters):
                namespaces.append(name)
        return namespaces

    def get_current_context(self) -> str:
        """Get the active context name."""
        result = self.run(["config", "current-context"])
        return result.stdout.strip()

    def use_config_context(self, context: str) -> CommandResult:
        """Switch the active context.

        Raises:
            UnknownContext: If ``context`` is not in the kubeconfig; nothing is changed
        """
        contexts = self.get_config_contexts()
        if context not in contexts:
            raise UnknownContext(context, suggest_names(context, contexts))
        logger.info("Switching context", context=context)
        return self.run(["config", "use-context", context])
