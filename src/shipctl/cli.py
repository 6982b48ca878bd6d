"""Main CLI entry point for shipctl."""

import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from shipctl import __version__
from shipctl.config import load_config
from shipctl.core.context import ShipCtlContext, pass_context
from shipctl.core.output import OutputFormat
from shipctl.core.exceptions import ShipCtlError, ConfigError
from shipctl.core.suggestions import SuggestingGroup
from shipctl.flows.menu import run_menu
from shipctl.flows.service_status import show_service_status


CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}


class OutputFormatType(click.ParamType):
    """Custom Click parameter type for output format."""

    name = "format"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        try:
            return OutputFormat(value.lower())
        except ValueError:
            self.fail(
                f"Invalid format '{value}'. Choose from: table, json, yaml, raw",
                param,
                ctx,
            )


OUTPUT_FORMAT = OutputFormatType()


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"shipctl version {__version__}")
    ctx.exit()


def resolve_color(no_color: bool, setting: str) -> bool:
    """Combine --no-color with the configured color mode."""
    if no_color or setting == "never":
        return False
    if setting == "always":
        return True
    return sys.stdout.isatty()


@click.group(cls=SuggestingGroup, context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option(
    "-p",
    "--profile",
    metavar="NAME",
    envvar="SHIPCTL_PROFILE",
    help="Configuration profile to use",
)
@click.option(
    "-o",
    "--output",
    "output_format",
    type=OUTPUT_FORMAT,
    metavar="FORMAT",
    help="Output format: table, json, yaml, raw",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for info, -vvv for debug)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress non-essential output",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True),
    metavar="FILE",
    envvar="SHIPCTL_CONFIG",
    help="Path to config file",
)
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.pass_context
def cli(
    ctx: click.Context,
    profile: str | None,
    output_format: OutputFormat | None,
    verbose: int,
    quiet: bool,
    no_color: bool,
    config_file: str | None,
) -> None:
    """shipctl - helm release status and kube context switching.

    Run without a command for the interactive menu.

    \b
    Examples:
        shipctl
        shipctl status dev-payments payments-api
        shipctl switch test
        shipctl contexts

    \b
    Configuration:
        ~/.shipctl/config.yaml   User configuration
        ./shipctl.yaml           Project configuration
        SHIPCTL_*                Environment variables
    """
    try:
        config = load_config(config_file, profile)
    except ConfigError as e:
        console = Console(stderr=True)
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    # Tests may inject a prepared context object
    if not isinstance(ctx.obj, ShipCtlContext):
        ctx.obj = ShipCtlContext(
            config=config,
            profile=profile,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            color=resolve_color(no_color, config.global_settings.color),
        )

    if ctx.invoked_subcommand is None:
        ctx.exit(run_menu(ctx.obj))


@cli.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Open the interactive menu."""
    ctx.exit(run_menu(ctx.obj))


@cli.command()
@click.argument("namespace")
@click.argument("releases", nargs=-1, required=True)
@pass_context
def status(ctx: ShipCtlContext, namespace: str, releases: tuple[str, ...]) -> None:
    """Show the status of one or more releases.

    With a single release, its pods and revision history are shown too.

    \b
    Examples:
        shipctl status dev-payments payments-api
        shipctl status dev-payments payments-api payments-worker -o json
    """
    show_service_status(ctx, namespace, list(releases))


@cli.command()
@click.argument("target")
@pass_context
def switch(ctx: ShipCtlContext, target: str) -> None:
    """Switch the active kube context.

    TARGET is an environment name from the configuration (e.g. dev, test)
    or a context name.

    \b
    Examples:
        shipctl switch dev
        shipctl switch my-cluster-westeu-001-aks
    """
    context = target
    env = ctx.profile.find_environment(target)
    if env is not None:
        contexts = ctx.kubectl.get_config_contexts()
        match = next((c for c in contexts if c.endswith(env.suffix)), None)
        if match is None:
            raise ShipCtlError(f"No context ending in '{env.suffix}' for environment {env.name}")
        context = match

    result = ctx.kubectl.use_config_context(context)
    ctx.output.print_text(result.stdout.rstrip("\n"))


@cli.command()
@pass_context
def contexts(ctx: ShipCtlContext) -> None:
    """List kube contexts, marking the active one."""
    current = ctx.kubectl.get_current_context()
    rows = [
        {"current": "*" if name == current else "", "name": name}
        for name in ctx.kubectl.get_config_contexts()
    ]
    ctx.output.print_table(rows, columns=["current", "name"], title="Contexts")


@cli.command()
@pass_context
def namespaces(ctx: ShipCtlContext) -> None:
    """List namespaces matching the configured filters."""
    rows = [{"name": name} for name in ctx.kubectl.get_namespaces()]
    ctx.output.print_table(rows, columns=["name"], title="Namespaces")


@cli.command()
@pass_context
def config(ctx: ShipCtlContext) -> None:
    """Show current configuration."""
    profile = ctx.profile
    config_data = {
        "profile": ctx.profile_name,
        "output_format": ctx.output_format.value,
        "helm": profile.helm.get_binary(),
        "kubectl": profile.kubectl.get_binary(),
        "namespace_filters": ", ".join(profile.kubectl.namespace_filters),
        "environments": ", ".join(f"{e.name}=*{e.suffix}" for e in profile.environments),
        "timestamp_format": ctx.config.global_settings.timestamp_format,
    }
    ctx.output.print_data(config_data, title="Current Configuration")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except ShipCtlError as e:
        console = Console(stderr=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
