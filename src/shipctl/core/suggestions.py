"""'Did you mean?' suggestions for mistyped commands and context names."""

from difflib import get_close_matches
from typing import Sequence

import click


def suggest_names(
    typo: str,
    names: Sequence[str],
    n: int = 3,
    cutoff: float = 0.6,
) -> list[str]:
    """Find names similar to a typo.

    Args:
        typo: The mistyped name
        names: Valid names
        n: Maximum number of suggestions
        cutoff: Similarity threshold (0-1)

    Returns:
        List of similar names, best match first
    """
    return get_close_matches(typo, names, n=n, cutoff=cutoff)


def format_suggestions(suggestions: list[str]) -> str:
    """Format suggestions for display."""
    if not suggestions:
        return ""

    if len(suggestions) == 1:
        return f"Did you mean: {suggestions[0]}?"

    formatted = ", ".join(suggestions[:-1])
    return f"Did you mean: {formatted} or {suggestions[-1]}?"


class SuggestingGroup(click.Group):
    """Click Group that suggests similar commands on errors."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if args and "No such command" in str(e):
                cmd_name = args[0]
                suggestions = suggest_names(cmd_name, list(self.commands.keys()))
                if suggestions:
                    raise click.UsageError(
                        f"No such command '{cmd_name}'. {format_suggestions(suggestions)}",
                        ctx,
                    )
            raise
