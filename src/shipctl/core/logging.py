"""Log setup for shipctl.

Log records go to stderr so they never mix with tables or JSON on stdout.
Interactive sessions default to warnings only; ``-v`` and ``-vvv`` open up
the subprocess trace.
"""

import logging
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "shipctl"
PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class LogLevel(str, Enum):
    """Log levels accepted in the ``verbosity`` setting."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def to_logging(self) -> int:
        return getattr(logging, self.value.upper())


def resolve_log_level(verbose: int, quiet: bool, configured: LogLevel) -> LogLevel:
    """Pick the effective level; command-line flags win over the config file."""
    if verbose >= 3:
        return LogLevel.DEBUG
    if verbose >= 1:
        return LogLevel.INFO
    if quiet:
        return LogLevel.ERROR
    return configured


def setup_logging(level: LogLevel = LogLevel.WARNING, rich_output: bool = True) -> logging.Logger:
    """Install a single stderr handler on the root logger.

    Args:
        level: Threshold for shipctl and the root logger
        rich_output: RichHandler when True, a plain timestamped line otherwise

    Returns:
        The ``shipctl`` logger
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler: logging.Handler
    if rich_output:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%H:%M:%S"))

    root.addHandler(handler)
    root.setLevel(level.to_logging())

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.to_logging())

    # prompt_toolkit's event loop logs its selector choice at debug level
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``shipctl`` namespace for ``name`` (usually __name__)."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class StructuredLogger:
    """Logger that appends ``key=value`` pairs to each message.

    Pairs given to :meth:`bind` are repeated on every line; pairs given
    to a single call apply to that line only.
    """

    def __init__(self, name: str, **context: Any):
        self._logger = get_logger(name)
        self._context = context

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        return StructuredLogger(self._logger.name, **{**self._context, **kwargs})

    def _render(self, message: str, fields: dict[str, Any]) -> str:
        pairs = {**self._context, **fields}
        if not pairs:
            return message
        return "{} [{}]".format(message, " ".join(f"{k}={v}" for k, v in pairs.items()))

    def debug(self, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._render(message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.INFO):
            self._logger.info(self._render(message, kwargs))
