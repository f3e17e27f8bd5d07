"""Skill bundle discovery and installation.

A skill is a directory containing a ``SKILL.md`` file. Installing a skill
copies the whole directory into the client's skills folder, either under the
current project (default) or under the home directory (``--global``).
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from notifly_skills.clients import is_claude_code, normalize_client_name
from notifly_skills.errors import SkillNotFoundError

SKILL_MARKER = "SKILL.md"

# Environment variable for a custom skills source directory
SKILLS_DIR_ENV_VAR = "NOTIFLY_SKILLS_DIR"

# Bundled skills shipped inside the package
BUNDLED_SKILLS_DIR = Path(__file__).parent / "skill_bundles"

DEFAULT_SKILLS_DEST = ".notifly/skills"

# Relative skills folder per client, inside the install root.
CLIENT_SKILLS_DIRS: dict[str, str] = {
    "claude": ".claude/skills",
    "cursor": ".cursor/skills",
    "vscode": ".vscode/skills",
    "codex": ".codex/skills",
    "opencode": ".opencode/skill",
    "letta": ".skills",
    "goose": ".goose/skills",
    "github": ".github/skills",
    "copilot": ".github/skills",
    "amp": ".amp/skills",
    "kiro": ".kiro/skills",
    "amazonq": ".amazonq/skills",
}


class SkillMetadata(BaseModel):
    """YAML front matter at the top of a SKILL.md file."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(description="Skill name")
    description: str | None = Field(
        default=None,
        description="One-line summary shown in listings",
    )


@dataclass
class SkillInfo:
    """A discovered skill bundle."""

    directory: str
    path: Path
    metadata: SkillMetadata


def get_skills_dir() -> Path:
    """Get the directory skills are installed from.

    Resolution order:
    1. NOTIFLY_SKILLS_DIR environment variable (if set)
    2. The skills bundled with this package
    """
    env_value = os.environ.get(SKILLS_DIR_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return BUNDLED_SKILLS_DIR


def find_skills(skills_dir: Path) -> list[str]:
    """Return the sorted names of all skill directories under *skills_dir*."""
    if not skills_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in skills_dir.iterdir()
        if entry.is_dir() and (entry / SKILL_MARKER).is_file()
    )


def parse_front_matter(text: str) -> dict:
    """Extract the YAML front matter block from markdown text.

    Returns an empty dict when the text has no front matter.

    Raises:
        yaml.YAMLError: If the front matter is not valid YAML.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}

    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            data = yaml.safe_load("\n".join(lines[1:index]))
            return data if isinstance(data, dict) else {}
    return {}


def load_skill_info(skill_dir: Path) -> SkillInfo:
    """Load a skill's metadata from its SKILL.md.

    The name defaults to the directory name when the front matter omits it.

    Raises:
        pydantic.ValidationError: If the front matter fields have the wrong types.
        yaml.YAMLError: If the front matter is not valid YAML.
    """
    text = (skill_dir / SKILL_MARKER).read_text(encoding="utf-8")
    data = {"name": skill_dir.name, **parse_front_matter(text)}
    return SkillInfo(
        directory=skill_dir.name,
        path=skill_dir,
        metadata=SkillMetadata.model_validate(data),
    )


def client_skills_dir(client: str | None) -> str:
    """Return the relative skills folder for a client.

    Unknown clients that look like a dot-directory (``.foo``) get
    ``.foo/skills``; anything else falls back to ``.notifly/skills``.
    """
    if not client:
        return DEFAULT_SKILLS_DEST
    if is_claude_code(client):
        return CLIENT_SKILLS_DIRS["claude"]

    known = CLIENT_SKILLS_DIRS.get(normalize_client_name(client))
    if known:
        return known
    if client.startswith("."):
        return f"{client}/skills"
    return DEFAULT_SKILLS_DEST


def skill_destination(
    skill_name: str,
    client: str | None = None,
    custom_path: str | None = None,
    global_install: bool = False,
    cwd: Path | None = None,
    home: Path | None = None,
) -> Path:
    """Resolve where a skill bundle should be copied.

    Args:
        skill_name: Skill directory name.
        client: Target client, used to pick the skills folder.
        custom_path: Explicit relative (or absolute) folder; overrides the client.
        global_install: Install under the home directory instead of cwd.
        cwd: Project root; defaults to ``Path.cwd()``.
        home: Home directory; defaults to ``Path.home()``.
    """
    relative = custom_path if custom_path else client_skills_dir(client)
    if global_install:
        root = home if home is not None else Path.home()
    else:
        root = cwd if cwd is not None else Path.cwd()
    return (root / relative / skill_name).resolve()


def install_skill(skill_name: str, skills_dir: Path, destination: Path) -> Path:
    """Copy a skill bundle to *destination*, merging into existing files.

    Returns:
        Path to the installed SKILL.md.

    Raises:
        SkillNotFoundError: If the skill does not exist in *skills_dir*.
        OSError: If the copy fails.
    """
    source = skills_dir / skill_name
    if not (source / SKILL_MARKER).is_file():
        raise SkillNotFoundError(skill_name, skills_dir, find_skills(skills_dir))

    destination.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return destination / SKILL_MARKER
