"""Route an MCP configuration request to the right client handler.

``configure_mcp`` is the single entry point: it resolves the client (asking
when none was given), then either drives the client's CLI or loads, merges
and writes its config file. Config file errors come back as ``ConfigFailed``
results so one broken client file never aborts an install.
"""

from pathlib import Path

from notifly_skills.bootstrap import load_or_bootstrap
from notifly_skills.claude_cli import configure_claude_code
from notifly_skills.clients import (
    MANUAL_CLIENT,
    ClientDescriptor,
    client_choices,
    get_client,
    normalize_client_name,
    resolve_config_path,
)
from notifly_skills.errors import ConfigFileError
from notifly_skills.merge import merge_server
from notifly_skills.outcomes import (
    ConfigFailed,
    ConfigureResult,
    DeclinedCreate,
    ManualSkipped,
    UnsupportedClient,
)
from notifly_skills.process import ProcessRunner
from notifly_skills.prompts import Prompter
from notifly_skills.server import NOTIFLY_MCP_SERVER, ServerRegistrationRecord

CLIENT_QUESTION = "Which AI client are you using?"


def configure_mcp(
    client: str | None,
    prompter: Prompter,
    runner: ProcessRunner,
    home: Path | None = None,
    record: ServerRegistrationRecord = NOTIFLY_MCP_SERVER,
) -> ConfigureResult:
    """Register the MCP server with one client.

    Args:
        client: Client name or alias; None to ask the user.
        prompter: Asks for the client and for confirmations.
        runner: Runs external client CLIs.
        home: Home directory for config paths; defaults to ``Path.home()``.
        record: Server to register.

    Returns:
        The outcome of the attempt.
    """
    if client is None:
        client = prompter.choose(CLIENT_QUESTION, client_choices())

    if normalize_client_name(client) == MANUAL_CLIENT:
        return ManualSkipped()

    descriptor = get_client(client)
    if descriptor is None:
        return UnsupportedClient(client=client)

    if descriptor.is_cli_managed:
        return configure_claude_code(record, runner, prompter)

    return _configure_file_client(descriptor, record, prompter, home)


def _configure_file_client(
    descriptor: ClientDescriptor,
    record: ServerRegistrationRecord,
    prompter: Prompter,
    home: Path | None,
) -> ConfigureResult:
    """Bootstrap, merge and write a file-backed client's config."""
    path = resolve_config_path(descriptor, home=home)
    adapter = descriptor.adapter()

    try:
        loaded = load_or_bootstrap(path, adapter, prompter, home=home)
        if loaded is None:
            return DeclinedCreate(client=descriptor.display_name, path=path)
        return merge_server(
            descriptor.display_name, path, adapter, loaded, record, prompter, home=home
        )
    except ConfigFileError as e:
        return ConfigFailed(client=descriptor.display_name, error=e)
