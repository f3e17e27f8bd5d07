"""The Notifly MCP server registration record and its per-client renderings.

One immutable record describes how to launch the server. Each client format
gets its own builder; none of them mutate the record.
"""

from dataclasses import dataclass, field
from typing import Any

SERVER_NAME = "notifly-mcp-server"

# Placed at the top of a freshly created opencode.json.
OPENCODE_SCHEMA_URL = "https://opencode.ai/config.json"


@dataclass(frozen=True)
class ServerRegistrationRecord:
    """How an MCP client should launch the server.

    ``env`` stays empty for the Notifly server; builders only emit an env
    block when it has entries.
    """

    name: str
    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)

    @property
    def invocation(self) -> list[str]:
        """Program followed by its arguments."""
        return [self.command, *self.args]


NOTIFLY_MCP_SERVER = ServerRegistrationRecord(
    name=SERVER_NAME,
    command="npx",
    args=("-y", "notifly-mcp-server@latest"),
)


def build_standard_entry(record: ServerRegistrationRecord) -> dict[str, Any]:
    """Build the ``{"command", "args"}`` entry used by JSON and TOML clients."""
    entry: dict[str, Any] = {"command": record.command, "args": list(record.args)}
    if record.env:
        entry["env"] = dict(record.env)
    return entry


def build_opencode_entry(record: ServerRegistrationRecord) -> dict[str, Any]:
    """Build the entry stored under OpenCode's ``mcp`` key.

    OpenCode uses ``type: "local"`` for stdio servers, a single ``command``
    array (executable + args) and ``environment`` rather than ``env``.
    """
    entry: dict[str, Any] = {
        "type": "local",
        "command": record.invocation,
        "enabled": True,
    }
    if record.env:
        entry["environment"] = dict(record.env)
    return entry


def build_claude_add_args(record: ServerRegistrationRecord) -> list[str]:
    """Build the arguments for ``claude mcp add`` (without the program name).

    ``--`` terminates claude's option parsing so that server args such as
    ``-y`` are not read as claude options.
    """
    args = ["mcp", "add", "--transport", "stdio"]
    for key, value in record.env.items():
        args += ["-e", f"{key}={value}"]
    args.append(record.name)
    args.append("--")
    args.extend(record.invocation)
    return args
