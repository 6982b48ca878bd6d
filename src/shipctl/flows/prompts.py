"""Terminal prompts used by the interactive flows.

A cancelled prompt (Ctrl-C, or the skip key) returns ``None``. That is
distinct from a checkbox answered with nothing ticked, which returns ``[]``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice


@dataclass(frozen=True)
class PromptChoice:
    """One selectable entry: the value handed back and the text shown."""

    value: Any
    title: str
    description: str | None = None

    @property
    def label(self) -> str:
        if self.description:
            return f"{self.title} ({self.description})"
        return self.title


class Prompter(ABC):
    """Asks the operator to pick from a list."""

    @abstractmethod
    def select(
        self,
        message: str,
        choices: Sequence[PromptChoice],
        default_index: int | None = None,
    ) -> Any | None:
        """Single selection; returns the chosen value or None if cancelled."""

    @abstractmethod
    def checkbox(
        self,
        message: str,
        choices: Sequence[PromptChoice],
    ) -> list[Any] | None:
        """Multiple selection; returns chosen values in list order or None if cancelled."""


def _indexed(choices: Sequence[PromptChoice]) -> list[Choice]:
    # InquirerPy copies choice values through dataclasses.asdict, so only
    # the position is handed over and mapped back afterwards
    return [Choice(value=index, name=choice.label) for index, choice in enumerate(choices)]


class InquirerPrompter(Prompter):
    """Prompter backed by InquirerPy."""

    def select(
        self,
        message: str,
        choices: Sequence[PromptChoice],
        default_index: int | None = None,
    ) -> Any | None:
        if default_index is not None and not 0 <= default_index < len(choices):
            default_index = None
        try:
            index = inquirer.select(
                message=message,
                choices=_indexed(choices),
                default=default_index,
                mandatory=False,
                cycle=True,
            ).execute()
        except KeyboardInterrupt:
            return None
        if index is None:
            return None
        return choices[index].value

    def checkbox(
        self,
        message: str,
        choices: Sequence[PromptChoice],
    ) -> list[Any] | None:
        try:
            ticked = inquirer.checkbox(
                message=message,
                choices=_indexed(choices),
                mandatory=False,
                cycle=True,
                instruction="(space to toggle, enter to confirm)",
            ).execute()
        except KeyboardInterrupt:
            return None
        if ticked is None:
            return None
        return [choices[index].value for index in sorted(ticked)]
