"""Click context object for sharing state across commands and flows."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shipctl.config import ShipCtlConfig, ProfileConfig, get_default_config
from shipctl.core.output import OutputFormat, OutputFormatter
from shipctl.core.logging import resolve_log_level, setup_logging
from shipctl.core.runner import ProcessRunner

if TYPE_CHECKING:
    from shipctl.clients.helm import ReleaseClient
    from shipctl.clients.kubectl import ClusterClient
    from shipctl.flows.prompts import Prompter


class ShipCtlContext:
    """Shared context object for shipctl commands.

    This object is passed through Click's context mechanism and provides
    access to configuration, the helm and kubectl clients, prompts and output.
    """

    def __init__(
        self,
        config: ShipCtlConfig | None = None,
        profile: str | None = None,
        output_format: OutputFormat | None = None,
        verbose: int = 0,
        quiet: bool = False,
        color: bool = True,
        runner: ProcessRunner | None = None,
        prompter: Prompter | None = None,
        configure_logging: bool = True,
    ):
        self._config = config or get_default_config()
        self._profile_name = profile or "default"

        # CLI overrides config
        self._output_format = output_format or self._config.global_settings.output_format
        if configure_logging:
            log_level = resolve_log_level(verbose, quiet, self._config.global_settings.verbosity)
            setup_logging(log_level, rich_output=color)

        self._output = OutputFormatter(
            format=self._output_format,
            color=color,
            quiet=quiet,
        )

        self._runner = runner or ProcessRunner()
        self._prompter = prompter

        # Lazy-loaded clients
        self._helm_client: ReleaseClient | None = None
        self._kubectl_client: ClusterClient | None = None

    @property
    def config(self) -> ShipCtlConfig:
        """Get the loaded configuration."""
        return self._config

    @property
    def profile(self) -> ProfileConfig:
        """Get the current profile configuration."""
        return self._config.get_profile(self._profile_name)

    @property
    def profile_name(self) -> str:
        return self._profile_name

    @property
    def output(self) -> OutputFormatter:
        return self._output

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    @property
    def helm(self) -> "ReleaseClient":
        """Get or create the release client."""
        if self._helm_client is None:
            from shipctl.clients.helm import ReleaseClient

            self._helm_client = ReleaseClient(
                self._runner,
                binary=self.profile.helm.get_binary(),
                timestamp_format=self._config.global_settings.timestamp_format,
            )
        return self._helm_client

    @property
    def kubectl(self) -> "ClusterClient":
        """Get or create the cluster client."""
        if self._kubectl_client is None:
            from shipctl.clients.kubectl import ClusterClient

            kubectl_config = self.profile.kubectl
            self._kubectl_client = ClusterClient(
                self._runner,
                binary=kubectl_config.get_binary(),
                namespace_filters=kubectl_config.namespace_filters,
                timestamp_format=self._config.global_settings.timestamp_format,
            )
        return self._kubectl_client

    @property
    def prompter(self) -> "Prompter":
        """Get or create the interactive prompter."""
        if self._prompter is None:
            from shipctl.flows.prompts import InquirerPrompter

            self._prompter = InquirerPrompter()
        return self._prompter


# Click decorator for passing context
pass_context = click.make_pass_decorator(ShipCtlContext, ensure=True)
