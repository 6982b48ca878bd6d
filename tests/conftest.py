"""Pytest fixtures for shipctl tests."""

import json
import logging
import os
from typing import Any, Generator, Sequence

import pytest
from click.testing import CliRunner
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import PipeInput, create_pipe_input
from prompt_toolkit.output import DummyOutput
from rich.logging import RichHandler

from shipctl.config import (
    ShipCtlConfig,
    ProfileConfig,
    HelmConfig,
    KubectlConfig,
    EnvironmentConfig,
)
from shipctl.core.context import ShipCtlContext
from shipctl.core.exceptions import CommandFailure
from shipctl.core.output import OutputFormat
from shipctl.core.runner import CommandResult, ProcessRunner
from shipctl.core.utils import format_command
from shipctl.flows.prompts import PromptChoice, Prompter


class FakeRunner(ProcessRunner):
    """Runner that answers from a table of canned outputs and records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self._responses: dict[tuple[str, tuple[str, ...]], CommandResult] = {}

    def add(
        self,
        command: str,
        args: Sequence[str],
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        self._responses[(command, tuple(args))] = CommandResult(stdout, stderr, exit_code)

    def add_json(self, command: str, args: Sequence[str], payload: Any) -> None:
        self.add(command, args, stdout=json.dumps(payload))

    def run(self, command: str, args: Sequence[str]) -> CommandResult:
        key = (command, tuple(args))
        self.calls.append(key)
        if key not in self._responses:
            raise AssertionError(f"Unexpected command: {format_command(command, args)}")
        result = self._responses[key]
        if result.exit_code != 0:
            raise CommandFailure(format_command(command, args), result.stderr, result.exit_code)
        return result

    def calls_to(self, command: str, *prefix: str) -> list[tuple[str, ...]]:
        """Argument vectors of calls to ``command`` starting with ``prefix``."""
        return [
            args for cmd, args in self.calls
            if cmd == command and args[: len(prefix)] == prefix
        ]


class FakePrompter(Prompter):
    """Prompter that replays scripted answers and records what was asked.

    Answers are callables receiving the offered values, or plain values.
    """

    def __init__(self, answers: Sequence[Any] = ()) -> None:
        self.answers = list(answers)
        self.asked: list[dict[str, Any]] = []

    def _answer(self, kind: str, message: str, choices: Sequence[PromptChoice], **extra: Any) -> Any:
        self.asked.append({"kind": kind, "message": message, "choices": list(choices), **extra})
        if not self.answers:
            raise AssertionError(f"No scripted answer for prompt: {message}")
        answer = self.answers.pop(0)
        if callable(answer):
            return answer([c.value for c in choices])
        return answer

    def select(
        self,
        message: str,
        choices: Sequence[PromptChoice],
        default_index: int | None = None,
    ) -> Any | None:
        return self._answer("select", message, choices, default_index=default_index)

    def checkbox(
        self,
        message: str,
        choices: Sequence[PromptChoice],
    ) -> list[Any] | None:
        return self._answer("checkbox", message, choices)


HELM_STATUS_TEMPLATE = {
    "name": "payments-api",
    "namespace": "dev-payments",
    "version": 7,
    "info": {
        "status": "deployed",
        "first_deployed": "2024-01-10T08:00:00.000000000Z",
        "last_deployed": "2024-01-15T10:30:00.123456789Z",
        "description": "Upgrade complete",
    },
    "config": {"image": {"tag": "1.4.2"}, "replicaCount": 2},
}


def helm_status(name: str, tag: str | None = "1.4.2", status: str = "deployed") -> dict[str, Any]:
    payload = json.loads(json.dumps(HELM_STATUS_TEMPLATE))
    payload["name"] = name
    payload["info"]["status"] = status
    if tag is None:
        payload["config"] = {}
    else:
        payload["config"]["image"]["tag"] = tag
    return payload


def pod_item(
    name: str,
    image: str = "registry.example.com/payments-api:1.4.2",
    phase: str = "Running",
    start_time: str | None = "2024-01-15T10:31:05Z",
    kind: str = "Pod",
) -> dict[str, Any]:
    status: dict[str, Any] = {"phase": phase}
    if start_time is not None:
        status["startTime"] = start_time
    return {
        "apiVersion": "v1",
        "kind": kind,
        "metadata": {"name": name, "namespace": "dev-payments", "labels": {"app": "payments-api"}},
        "spec": {"containers": [{"name": "app", "image": image}]},
        "status": status,
    }


def pod_list(*items: dict[str, Any]) -> dict[str, Any]:
    return {"apiVersion": "v1", "kind": "List", "items": list(items)}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def mock_config() -> ShipCtlConfig:
    """Create a mock configuration."""
    return ShipCtlConfig(
        profiles={
            "default": ProfileConfig(
                helm=HelmConfig(binary="helm"),
                kubectl=KubectlConfig(binary="kubectl"),
                environments=[
                    EnvironmentConfig(name="dev", suffix="pigeon"),
                    EnvironmentConfig(name="test", suffix="westeu-001-aks"),
                ],
            )
        }
    )


@pytest.fixture
def mock_context(
    mock_config: ShipCtlConfig,
    fake_runner: FakeRunner,
    fake_prompter: FakePrompter,
) -> ShipCtlContext:
    """Create a context wired to the fake runner and prompter."""
    return ShipCtlContext(
        config=mock_config,
        profile="default",
        output_format=OutputFormat.TABLE,
        verbose=0,
        quiet=False,
        color=False,
        runner=fake_runner,
        prompter=fake_prompter,
        configure_logging=False,
    )


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Clean environment variables before each test."""
    env_vars = [
        "SHIPCTL_PROFILE",
        "SHIPCTL_CONFIG",
        "SHIPCTL_HELM_BINARY",
        "SHIPCTL_KUBECTL_BINARY",
    ]

    original = {k: os.environ.get(k) for k in env_vars}

    for k in env_vars:
        os.environ.pop(k, None)

    yield

    for k, v in original.items():
        if v is not None:
            os.environ[k] = v
        else:
            os.environ.pop(k, None)


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary config file."""
    config_content = """
version: "1"
global:
  output_format: json
profiles:
  default:
    helm:
      binary: helm3
    environments:
      - name: staging
        suffix: stg-aks
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return str(config_file)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging and restore log levels."""
    root = logging.getLogger()
    shipctl_logger = logging.getLogger("shipctl")
    levels = (root.level, shipctl_logger.level)

    yield

    for handler in root.handlers[:]:
        if isinstance(handler, RichHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(levels[0])
    shipctl_logger.setLevel(levels[1])


# Keystrokes for prompts read from a pipe input
ENTER = "\r"
DOWN = "\x0e"  # ctrl-n
SPACE = " "
CTRL_C = "\x03"
CTRL_Z = "\x1a"


@pytest.fixture
def keys() -> Generator[PipeInput, None, None]:
    """Terminal input that InquirerPy prompts read keystrokes from."""
    with create_pipe_input() as pipe:
        with create_app_session(input=pipe, output=DummyOutput()):
            yield pipe
