"""Exception types and error formatting for notifly-skills.

Config errors carry the file path so a user can find and fix the file by
hand. ``handle_cli_error`` turns anything that escapes a command into a clean
one-line message and an exit code.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.markup import escape

from notifly_skills import cli_logger, exit_codes


class NotiflySkillsError(Exception):
    """Base class for errors raised by notifly-skills."""


class ConfigNotFoundError(NotiflySkillsError):
    """Raised when a client configuration file does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialize with the missing path."""
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileError(NotiflySkillsError):
    """A configuration file could not be processed.

    Attributes:
        path: The configuration file involved.
        detail: The underlying parser or OS message.
    """

    kind = "config"

    def __init__(self, path: Path, detail: str) -> None:
        """Initialize with the path and the underlying message."""
        self.path = path
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        return f"{self.path}: {self.detail}"


class ConfigParseError(ConfigFileError):
    """Raised when a config file is not valid JSON/TOML (after comment stripping)."""

    kind = "parse"

    def describe(self) -> str:
        return f"Failed to parse {self.path}: {self.detail}"


class ConfigStructureError(ConfigFileError):
    """Raised when the merge key (or the document root) has an unexpected shape."""

    kind = "structure"

    def describe(self) -> str:
        return f"Unexpected structure in {self.path}: {self.detail}"


class ConfigReadError(ConfigFileError):
    """Raised when an existing config file cannot be read."""

    kind = "read"

    def describe(self) -> str:
        return f"Failed to read {self.path}: {self.detail}"


class ConfigWriteError(ConfigFileError):
    """Raised when a config file (or its parent directory) cannot be written."""

    kind = "write"

    def describe(self) -> str:
        return f"Failed to write {self.path}: {self.detail}"


class SkillNotFoundError(NotiflySkillsError):
    """Raised when a requested skill bundle does not exist."""

    def __init__(self, skill_name: str, skills_dir: Path, available: list[str]) -> None:
        """Initialize with the requested name and what is available instead."""
        self.skill_name = skill_name
        self.skills_dir = skills_dir
        self.available = available
        message = f"Skill '{skill_name}' not found in {skills_dir}"
        if available:
            message += f". Available skills: {', '.join(available)}"
        super().__init__(message)


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic ValidationError into clean, user-friendly message.

    Removes Pydantic-specific URLs and technical jargon, producing a message
    suitable for CLI output.
    """
    messages = []

    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        error_type = err["type"]

        if error_type == "missing":
            messages.append(f"'{loc}': field is required")
        elif error_type == "string_type":
            messages.append(f"'{loc}': expected string")
        else:
            messages.append(f"'{loc}': {err['msg'].lower()}")

    return "; ".join(messages)


def handle_cli_error(error: Exception) -> int:
    """Handle an unhandled exception at the CLI boundary.

    Formats the error into a clean user-friendly message and returns
    an appropriate exit code. This is the last line of defense: it
    prevents raw tracebacks from reaching the user.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, ValidationError):
        cli_logger.error(f"Invalid skill metadata: {escape(format_validation_errors(error))}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, SkillNotFoundError):
        cli_logger.error(escape(str(error)))
        return exit_codes.SKILL_NOT_FOUND

    if isinstance(error, ConfigFileError):
        cli_logger.error(escape(error.describe()))
        return exit_codes.CONFIG_ERROR

    if isinstance(error, NotiflySkillsError):
        cli_logger.error(escape(str(error)))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(escape(f"{error.strerror}: {error.filename}"))
        else:
            cli_logger.error(escape(str(error)))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, yaml.YAMLError):
        cli_logger.error(f"Invalid YAML: {escape(str(error))}")
        return exit_codes.GENERAL_ERROR

    cli_logger.error(f"Unexpected error: {escape(str(error))}")
    return exit_codes.GENERAL_ERROR
