"""Common utilities for shipctl."""

import re
import shlex
from datetime import datetime, timezone
from typing import Sequence

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# helm emits nanosecond precision, datetime only accepts microseconds
_FRACTION = re.compile(r"(\.\d{1,6})\d*")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as emitted by helm and kubectl.

    Supports:
    - Zulu suffix: 2024-01-15T10:30:00Z
    - Offsets: 2024-01-15T10:30:00.123456789+01:00
    - Naive values, which are taken as UTC

    Raises:
        ValueError: If the value is not a timestamp
    """
    text = value.strip()
    if not text:
        raise ValueError("Timestamp cannot be empty")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(r"\1", text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: str, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Render a timestamp in local time using ``fmt``."""
    return parse_timestamp(value).astimezone().strftime(fmt)


def image_tag(image: str) -> str:
    """Return the tag portion of an image reference.

    The tag is looked for in the last path segment only, so a registry port
    is never mistaken for a tag:

        nginx:1.25                   -> 1.25
        host:5000/team/app:v1        -> v1
        host:5000/team/app           -> ""
        app:v1@sha256:abc            -> v1
    """
    name = image.split("@", 1)[0]
    last_segment = name.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        return ""
    return last_segment.rsplit(":", 1)[1]


def split_lines(output: str) -> list[str]:
    """Split command output into non-blank, stripped lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def format_command(command: str, args: Sequence[str]) -> str:
    """Join a command and its arguments for display."""
    return " ".join([command, *args])


def quote_command(command: str, args: Sequence[str]) -> str:
    """Join a command and its arguments so it can be pasted into a shell."""
    return shlex.join([command, *args])
