"""Idempotent insertion of the server record into a loaded config document."""

from pathlib import Path

from notifly_skills.bootstrap import LoadedConfig
from notifly_skills.cli_logger import nice_path
from notifly_skills.formats import ConfigAdapter
from notifly_skills.outcomes import AlreadyConfigured, Configured, DeclinedInject
from notifly_skills.prompts import Prompter
from notifly_skills.server import ServerRegistrationRecord


def merge_server(
    client: str,
    path: Path,
    adapter: ConfigAdapter,
    loaded: LoadedConfig,
    record: ServerRegistrationRecord,
    prompter: Prompter,
    home: Path | None = None,
) -> AlreadyConfigured | Configured | DeclinedInject:
    """Register *record* in the document unless it is already there.

    1. Already present: report it, no prompt, no write.
    2. Otherwise ask before adding; a "no" writes nothing.
    3. On "yes", write the whole updated document back in one step.

    Raises:
        ConfigWriteError: If the file cannot be written. The file on disk is
            left as it was.
    """
    if adapter.has_server(loaded.document, record):
        return AlreadyConfigured(client=client, path=path)

    if not prompter.confirm(f"Add Notifly MCP Server to {nice_path(path, home)}?"):
        return DeclinedInject(client=client, path=path)

    updated = adapter.set_server(loaded.document, record)
    adapter.write(path, updated)
    return Configured(client=client, path=path, created=loaded.created)
