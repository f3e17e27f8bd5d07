"""Interactive prompts used while configuring MCP clients.

The configuration flow only ever asks yes/no questions and one
single-choice question. Both go through a ``Prompter`` so tests can script
the answers.
"""

from typing import Protocol

import typer
from rich.markup import escape

from notifly_skills import cli_logger


class Prompter(Protocol):
    """Asks the user questions on behalf of the configuration flow."""

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question (default yes)."""
        ...

    def choose(self, question: str, options: list[tuple[str, str]]) -> str:
        """Ask the user to pick one ``(label, value)`` option; return its value."""
        ...


class TyperPrompter:
    """Prompter backed by typer's terminal prompts."""

    def confirm(self, question: str) -> bool:
        return typer.confirm(question, default=True)

    def choose(self, question: str, options: list[tuple[str, str]]) -> str:
        cli_logger.info(escape(question))
        for index, (label, _value) in enumerate(options, start=1):
            cli_logger.info(f"  {index}. {label}")

        while True:
            selection = typer.prompt("Select", type=int, default=1)
            if 1 <= selection <= len(options):
                return options[selection - 1][1]
            cli_logger.warning(f"Enter a number between 1 and {len(options)}")


class AssumeYesPrompter:
    """Answers every yes/no question with yes; delegates choices.

    Used for ``--yes`` so scripted installs never block on a confirmation.
    """

    def __init__(self, delegate: Prompter) -> None:
        self._delegate = delegate

    def confirm(self, question: str) -> bool:
        cli_logger.dim(f"{escape(question)} yes")
        return True

    def choose(self, question: str, options: list[tuple[str, str]]) -> str:
        return self._delegate.choose(question, options)
