"""Load a client's config file, or offer to start from an empty skeleton."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from notifly_skills.cli_logger import nice_path
from notifly_skills.errors import ConfigNotFoundError
from notifly_skills.formats import ConfigAdapter
from notifly_skills.prompts import Prompter


@dataclass
class LoadedConfig:
    """A parsed document ready for merging.

    ``created`` is True when the file did not exist and the document is a
    fresh skeleton that has not been written yet.
    """

    document: Any
    created: bool = False


def load_or_bootstrap(
    path: Path,
    adapter: ConfigAdapter,
    prompter: Prompter,
    home: Path | None = None,
) -> LoadedConfig | None:
    """Read *path*, or ask to create it when it does not exist.

    The skeleton is kept in memory; it reaches disk only together with the
    merged server entry, so declining any later prompt writes nothing.

    Args:
        path: Config file location.
        adapter: Adapter for the file's dialect.
        prompter: Asks whether to create the file.
        home: Home directory, used only to shorten the path in the question.

    Returns:
        The loaded config, or None if the user declined to create the file.

    Raises:
        ConfigReadError, ConfigParseError, ConfigStructureError: From the adapter.
    """
    try:
        return LoadedConfig(document=adapter.read(path))
    except ConfigNotFoundError:
        pass

    if not prompter.confirm(f"Config file not found at {nice_path(path, home)}. Create it?"):
        return None

    return LoadedConfig(document=adapter.skeleton(), created=True)
