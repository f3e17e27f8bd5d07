"""Registry of AI clients whose MCP configuration can be updated.

MCP configuration is always machine-wide: every path is resolved against the
home directory, never the current project. Lookup is a pure function; an
unknown client yields ``None`` rather than a guessed location.
"""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from notifly_skills.formats import ConfigAdapter, Dialect, EntryBuilder, adapter_for
from notifly_skills.server import OPENCODE_SCHEMA_URL, build_opencode_entry, build_standard_entry

# Value returned by the client chooser when the user opts out.
MANUAL_CLIENT = "manual"

# Offered by the chooser for their skills folders; they have no MCP config location.
SKILLS_ONLY_CHOICES: tuple[tuple[str, str], ...] = (
    ("Letta", "letta"),
    ("Goose", "goose"),
    ("GitHub", "github"),
)


@dataclass(frozen=True)
class ClientDescriptor:
    """Where and how one client stores its MCP servers.

    Attributes:
        identifier: Canonical lowercase client name.
        display_name: Name shown in prompts and messages.
        dialect: Configuration dialect.
        merge_key: Key holding server entries (unused for CLI-managed clients).
        path_parts: Config path relative to the base directory; empty for
            CLI-managed clients.
        aliases: Other spellings accepted for this client.
        windows_profile_var: On Windows, environment variable used as the
            base directory instead of home when set and non-empty.
        entry_builder: Renders the server record for this client.
        skeleton_fields: Extra top-level fields for a newly created file.
    """

    identifier: str
    display_name: str
    dialect: Dialect
    merge_key: str = ""
    path_parts: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    windows_profile_var: str | None = None
    entry_builder: EntryBuilder = build_standard_entry
    skeleton_fields: dict[str, Any] = field(default_factory=dict)

    @property
    def is_cli_managed(self) -> bool:
        return self.dialect is Dialect.CLI_MANAGED

    def adapter(self) -> ConfigAdapter:
        """Return the format adapter for this client's config file."""
        return adapter_for(self.dialect, self.merge_key, self.entry_builder, self.skeleton_fields)


CLIENTS: tuple[ClientDescriptor, ...] = (
    ClientDescriptor(
        identifier="cursor",
        display_name="Cursor",
        dialect=Dialect.STANDARD_JSON,
        merge_key="mcpServers",
        path_parts=(".cursor", "mcp.json"),
    ),
    ClientDescriptor(
        identifier="claude",
        display_name="Claude Code",
        dialect=Dialect.CLI_MANAGED,
        aliases=("claude_code", "claude-code", "claudecode", "claude code"),
    ),
    ClientDescriptor(
        identifier="vscode",
        display_name="VS Code",
        dialect=Dialect.STANDARD_JSON,
        merge_key="mcpServers",
        path_parts=(".vscode", "mcp.json"),
    ),
    ClientDescriptor(
        identifier="amp",
        display_name="Amp",
        dialect=Dialect.ALTERNATE_KEY_JSON,
        merge_key="amp.mcpServers",
        path_parts=(".config", "amp", "settings.json"),
        windows_profile_var="USERPROFILE",
    ),
    ClientDescriptor(
        identifier="kiro",
        display_name="Kiro",
        dialect=Dialect.STANDARD_JSON,
        merge_key="mcpServers",
        path_parts=(".kiro", "settings", "mcp.json"),
    ),
    ClientDescriptor(
        identifier="amazonq",
        display_name="Amazon Q",
        dialect=Dialect.STANDARD_JSON,
        merge_key="mcpServers",
        path_parts=(".aws", "amazonq", "agents", "default.json"),
    ),
    ClientDescriptor(
        identifier="codex",
        display_name="Codex",
        dialect=Dialect.TOML,
        merge_key="mcp_servers",
        path_parts=(".codex", "config.toml"),
    ),
    ClientDescriptor(
        identifier="opencode",
        display_name="OpenCode",
        dialect=Dialect.COMMENTED_JSON,
        merge_key="mcp",
        path_parts=("opencode.json",),
        entry_builder=build_opencode_entry,
        skeleton_fields={"$schema": OPENCODE_SCHEMA_URL},
    ),
)


def _lookup_table() -> dict[str, ClientDescriptor]:
    table: dict[str, ClientDescriptor] = {}
    for descriptor in CLIENTS:
        table[descriptor.identifier] = descriptor
        for alias in descriptor.aliases:
            table[alias] = descriptor
    return table


_BY_NAME = _lookup_table()


def normalize_client_name(client: str) -> str:
    """Case-fold and trim a client name as typed by the user."""
    return client.strip().lower()


def get_client(client: str) -> ClientDescriptor | None:
    """Look up a client by identifier or alias.

    Returns:
        The descriptor, or None when the client is not supported.
    """
    return _BY_NAME.get(normalize_client_name(client))


def is_claude_code(client: str) -> bool:
    """Return True for any accepted spelling of Claude Code."""
    descriptor = get_client(client)
    return descriptor is not None and descriptor.identifier == "claude"


def client_choices() -> list[tuple[str, str]]:
    """Return ``(label, value)`` pairs for the interactive client chooser."""
    choices = [(descriptor.display_name, descriptor.identifier) for descriptor in CLIENTS]
    choices.extend(SKILLS_ONLY_CHOICES)
    choices.append(("None / Manual", MANUAL_CLIENT))
    return choices


def resolve_config_path(
    descriptor: ClientDescriptor,
    home: Path | None = None,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the absolute config file path for a file-backed client.

    Args:
        descriptor: The client to resolve.
        home: Home directory; defaults to ``Path.home()``.
        platform: Platform name as in ``sys.platform``; defaults to the
            running platform.
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        ValueError: If the client is CLI-managed and has no file.
    """
    if descriptor.is_cli_managed:
        raise ValueError(f"{descriptor.display_name} is configured via its CLI, not a file")

    base = home if home is not None else Path.home()
    platform = platform if platform is not None else sys.platform
    environ = environ if environ is not None else os.environ

    if descriptor.windows_profile_var and platform == "win32":
        profile = environ.get(descriptor.windows_profile_var)
        if profile:
            base = Path(profile)

    return base.joinpath(*descriptor.path_parts)
