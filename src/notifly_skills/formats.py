"""Format adapters for client MCP configuration files.

An adapter reads one dialect into an in-memory document, answers whether the
server is already registered, inserts it, and writes the document back. Only
the merge key is inspected; everything else in the document is carried over
untouched.

JSON documents are plain dicts. TOML documents are ``tomlkit`` documents so
comments and table layout survive the round trip.
"""

import json
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from notifly_skills.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigStructureError,
    ConfigWriteError,
)
from notifly_skills.jsonc import strip_jsonc_comments
from notifly_skills.server import ServerRegistrationRecord, build_standard_entry

EntryBuilder = Callable[[ServerRegistrationRecord], dict[str, Any]]


class Dialect(str, Enum):
    """Configuration conventions used by supported clients."""

    STANDARD_JSON = "standard-json"
    ALTERNATE_KEY_JSON = "alternate-key-json"
    COMMENTED_JSON = "commented-json"
    TOML = "toml"
    CLI_MANAGED = "cli-managed"


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write_text(path: Path, text: str) -> None:
    """Write *text* to *path* via a temp file in the same directory and ``os.replace``.

    Creates parent directories as needed. Readers see either the old file or
    the new one, never a partial write. A symlinked *path* is followed, so the
    link stays in place and its target is replaced. Existing files keep their
    mode; new files get the usual umask-derived mode.
    """
    target = path.resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=str(target.parent), encoding="utf-8", suffix=".tmp"
        ) as tf:
            tmp_name = tf.name
            tf.write(text)
        if target.exists():
            shutil.copymode(target, tmp_name)
        else:
            os.chmod(tmp_name, _new_file_mode())
        os.replace(tmp_name, target)
    except OSError:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise


class ConfigAdapter(ABC):
    """Read, check, merge and write one configuration dialect.

    Args:
        merge_key: Top-level key holding server entries. Always a single
            literal key; a dot inside it is part of the name.
        entry_builder: Renders the registration record into this client's
            entry shape.
    """

    def __init__(self, merge_key: str, entry_builder: EntryBuilder = build_standard_entry) -> None:
        self.merge_key = merge_key
        self.entry_builder = entry_builder

    def read(self, path: Path) -> Any:
        """Read and parse *path*.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigReadError: If the file exists but cannot be read.
            ConfigParseError: If the content is not valid for this dialect.
            ConfigStructureError: If the root or the merge key has the wrong shape.
        """
        if not path.exists():
            raise ConfigNotFoundError(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigReadError(path, str(exc)) from exc

        document = self.parse(text, path)
        self._check_structure(document, path)
        return document

    def write(self, path: Path, document: Any) -> None:
        """Serialize *document* and write it to *path* in one step.

        Raises:
            ConfigWriteError: If the directory or file cannot be written.
        """
        try:
            atomic_write_text(path, self.dumps(document))
        except OSError as exc:
            raise ConfigWriteError(path, exc.strerror or str(exc)) from exc

    def has_server(self, document: Any, record: ServerRegistrationRecord) -> bool:
        """Return True if an entry named after *record* exists under the merge key."""
        servers = document.get(self.merge_key)
        return servers is not None and record.name in servers

    @abstractmethod
    def set_server(self, document: Any, record: ServerRegistrationRecord) -> Any:
        """Return a document with *record* registered under the merge key."""

    @abstractmethod
    def skeleton(self) -> Any:
        """Return a minimal valid document with an empty merge key."""

    @abstractmethod
    def parse(self, text: str, path: Path) -> Any:
        """Parse raw file text into a document."""

    @abstractmethod
    def dumps(self, document: Any) -> str:
        """Serialize a document to file text."""

    def _check_structure(self, document: Any, path: Path) -> None:
        if not isinstance(document, Mapping):
            raise ConfigStructureError(
                path, f"expected a table/object at the top level, found {type(document).__name__}"
            )
        servers = document.get(self.merge_key)
        if servers is not None and not isinstance(servers, Mapping):
            raise ConfigStructureError(
                path, f"'{self.merge_key}' must be an object, found {type(servers).__name__}"
            )


class JsonAdapter(ConfigAdapter):
    """Plain JSON files such as ``~/.cursor/mcp.json``.

    Args:
        merge_key: Top-level key holding server entries.
        entry_builder: Renders the registration record into an entry.
        skeleton_fields: Extra top-level fields written into a new file
            ahead of the merge key (e.g. OpenCode's ``$schema``).
    """

    def __init__(
        self,
        merge_key: str,
        entry_builder: EntryBuilder = build_standard_entry,
        skeleton_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(merge_key, entry_builder)
        self.skeleton_fields = skeleton_fields or {}

    def parse(self, text: str, path: Path) -> Any:
        if not text.strip():
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(path, str(exc)) from exc

    def dumps(self, document: Any) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    def skeleton(self) -> dict[str, Any]:
        return {**self.skeleton_fields, self.merge_key: {}}

    def set_server(self, document: dict[str, Any], record: ServerRegistrationRecord) -> dict[str, Any]:
        """Copy the document and replace only the merge-key mapping.

        The input document is left unchanged.
        """
        updated = dict(document)
        servers = dict(updated.get(self.merge_key) or {})
        servers[record.name] = self.entry_builder(record)
        updated[self.merge_key] = servers
        return updated


class CommentedJsonAdapter(JsonAdapter):
    """JSON files that may contain ``//`` and ``/* */`` comments.

    Comments are stripped before parsing and are not written back; the
    output is plain JSON, which is still valid for these clients.
    """

    def parse(self, text: str, path: Path) -> Any:
        return super().parse(strip_jsonc_comments(text), path)


class TomlAdapter(ConfigAdapter):
    """TOML files such as ``~/.codex/config.toml``.

    tomlkit documents are edited in place; ``set_server`` returns the same
    object it was given.
    """

    def parse(self, text: str, path: Path) -> tomlkit.TOMLDocument:
        try:
            return tomlkit.parse(text)
        except TOMLKitError as exc:
            raise ConfigParseError(path, str(exc)) from exc

    def dumps(self, document: tomlkit.TOMLDocument) -> str:
        return tomlkit.dumps(document)

    def skeleton(self) -> tomlkit.TOMLDocument:
        document = tomlkit.document()
        document.add(self.merge_key, tomlkit.table())
        return document

    def set_server(
        self, document: tomlkit.TOMLDocument, record: ServerRegistrationRecord
    ) -> tomlkit.TOMLDocument:
        if self.merge_key not in document:
            document.add(self.merge_key, tomlkit.table())
        elif self._is_dotted_at_root(document):
            # A new [header] here would capture the top-level keys that follow.
            servers = tomlkit.table()
            servers.update(document[self.merge_key].unwrap())
            del document[self.merge_key]
            document.add(self.merge_key, servers)
        document[self.merge_key][record.name] = self.entry_builder(record)
        return document

    def _is_dotted_at_root(self, document: tomlkit.TOMLDocument) -> bool:
        """True if the merge key is written as ``mcp_servers.x.y = ...`` among top-level keys."""
        return any(
            key is not None and key.key == self.merge_key and key.is_dotted()
            for key, _item in document.body
        )


def adapter_for(
    dialect: Dialect,
    merge_key: str,
    entry_builder: EntryBuilder = build_standard_entry,
    skeleton_fields: dict[str, Any] | None = None,
) -> ConfigAdapter:
    """Return the adapter for a file-backed dialect.

    The alternate-key dialect (Amp's ``settings.json``) is an editor settings
    file and may contain comments, so it shares the commented-JSON reader.

    Raises:
        ValueError: For the CLI-managed dialect, which has no file.
    """
    if dialect is Dialect.STANDARD_JSON:
        return JsonAdapter(merge_key, entry_builder, skeleton_fields)
    if dialect in (Dialect.ALTERNATE_KEY_JSON, Dialect.COMMENTED_JSON):
        return CommentedJsonAdapter(merge_key, entry_builder, skeleton_fields)
    if dialect is Dialect.TOML:
        return TomlAdapter(merge_key, entry_builder)
    raise ValueError(f"Dialect '{dialect.value}' is not file-backed")
