"""Release client wrapping the helm CLI."""

import json

from pydantic import ValidationError

from shipctl.clients.models import HelmStatusPayload, ReleaseStatus, describe_validation_error
from shipctl.core.exceptions import ParseFailure
from shipctl.core.logging import StructuredLogger
from shipctl.core.runner import CommandResult, ProcessRunner
from shipctl.core.utils import DEFAULT_TIMESTAMP_FORMAT, format_command, split_lines

logger = StructuredLogger(__name__)


class ReleaseClient:
    """Reads release state through ``helm``.

    Nothing is cached; every call reflects the release manager's live state.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        binary: str = "helm",
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self._runner = runner
        self._binary = binary
        self._timestamp_format = timestamp_format

    @property
    def binary(self) -> str:
        return self._binary

    def run(self, args: list[str]) -> CommandResult:
        """Run a helm subcommand."""
        return self._runner.run(self._binary, args)

    def list_releases(self, namespace: str) -> list[str]:
        """List release names in a namespace."""
        result = self.run(["list", "-q", "-n", namespace])
        releases = split_lines(result.stdout)
        logger.debug("Listed releases", namespace=namespace, count=len(releases))
        return releases

    def get_release_status(self, release: str, namespace: str) -> ReleaseStatus:
        """Fetch the status of a release.

        Raises:
            CommandFailure: If helm fails, e.g. the release does not exist
            ParseFailure: If the output is not the expected JSON document
        """
        args = ["status", release, "-n", namespace, "--output", "json"]
        result = self.run(args)
        command_line = format_command(self._binary, args)

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ParseFailure(command_line, f"invalid JSON ({e})")

        try:
            payload = HelmStatusPayload.model_validate(data)
            return ReleaseStatus.from_payload(payload, self._timestamp_format)
        except ValidationError as e:
            raise ParseFailure(command_line, describe_validation_error(e))
        except ValueError as e:
            raise ParseFailure(command_line, str(e))

    def get_release_history(self, release: str, namespace: str) -> str:
        """Fetch the revision history of a release as helm's own table text."""
        result = self.run(["history", release, "-n", namespace, "--output", "table"])
        return result.stdout
