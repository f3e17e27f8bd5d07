"""Result types for MCP configuration.

Every path through the configuration flow ends in exactly one of these.
Reporting them to the user is a CLI concern.
"""

from dataclasses import dataclass
from pathlib import Path

from notifly_skills.errors import ConfigFileError


@dataclass
class AlreadyConfigured:
    """The server was already registered; nothing was written."""

    client: str
    path: Path | None = None


@dataclass
class Configured:
    """The server was registered (and the file created if ``created``)."""

    client: str
    path: Path | None = None
    created: bool = False


@dataclass
class DeclinedCreate:
    """The config file was missing and the user chose not to create it."""

    client: str
    path: Path


@dataclass
class DeclinedInject:
    """The user chose not to add the server."""

    client: str
    path: Path | None = None


@dataclass
class ManualSkipped:
    """The user picked manual configuration."""


@dataclass
class UnsupportedClient:
    """No configuration location is known for this client."""

    client: str


@dataclass
class ProbeFailed:
    """The client CLI is missing or lacks MCP support."""

    client: str
    reason: str


@dataclass
class RegistrationFailed:
    """The client CLI rejected the registration command."""

    client: str
    output: str


@dataclass
class ConfigFailed:
    """The config file could not be read, parsed or written."""

    client: str
    error: ConfigFileError

    @property
    def kind(self) -> str:
        return self.error.kind


ConfigureResult = (
    AlreadyConfigured
    | Configured
    | DeclinedCreate
    | DeclinedInject
    | ManualSkipped
    | UnsupportedClient
    | ProbeFailed
    | RegistrationFailed
    | ConfigFailed
)
