"""Tests for skill discovery and installation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from notifly_skills.errors import SkillNotFoundError
from notifly_skills.skills import (
    BUNDLED_SKILLS_DIR,
    SKILLS_DIR_ENV_VAR,
    client_skills_dir,
    find_skills,
    get_skills_dir,
    install_skill,
    load_skill_info,
    parse_front_matter,
    skill_destination,
)
from tests.conftest import write_skill


class TestGetSkillsDir:
    """Tests for the skills source directory."""

    def test_env_var_overrides_bundled(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify NOTIFLY_SKILLS_DIR wins when set."""
        monkeypatch.setenv(SKILLS_DIR_ENV_VAR, str(tmp_path))

        assert get_skills_dir() == tmp_path

    def test_defaults_to_bundled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify the bundled skills are used by default."""
        monkeypatch.delenv(SKILLS_DIR_ENV_VAR, raising=False)

        assert get_skills_dir() == BUNDLED_SKILLS_DIR

    def test_bundled_integration_skill_exists(self) -> None:
        """Verify the package ships the integration skill."""
        assert "integration" in find_skills(BUNDLED_SKILLS_DIR)


class TestFindSkills:
    """Tests for find_skills."""

    def test_lists_only_dirs_with_skill_md(self, skills_dir: Path) -> None:
        """Verify folders without SKILL.md are ignored and names are sorted."""
        assert find_skills(skills_dir) == ["campaigns", "integration"]

    def test_missing_dir_is_empty(self, tmp_path: Path) -> None:
        """Verify a missing source directory yields no skills."""
        assert find_skills(tmp_path / "nope") == []


class TestSkillMetadata:
    """Tests for SKILL.md front matter parsing."""

    def test_parse_front_matter(self) -> None:
        """Verify the YAML block between --- markers is parsed."""
        text = "---\nname: integration\ndescription: SDK setup\n---\n# Body\n"

        assert parse_front_matter(text) == {"name": "integration", "description": "SDK setup"}

    @pytest.mark.parametrize("text", ["# No front matter\n", "", "---\nname: x\n"])
    def test_missing_front_matter_is_empty(self, text: str) -> None:
        """Verify absent or unterminated front matter yields an empty dict."""
        assert parse_front_matter(text) == {}

    def test_invalid_yaml_raises(self) -> None:
        """Verify malformed YAML is surfaced."""
        with pytest.raises(yaml.YAMLError):
            parse_front_matter("---\nname: [unclosed\n---\n")

    def test_name_defaults_to_directory(self, tmp_path: Path) -> None:
        """Verify a SKILL.md without a name uses the folder name."""
        skill_dir = write_skill(tmp_path, "push", "description: Push notifications")

        info = load_skill_info(skill_dir)

        assert info.directory == "push"
        assert info.metadata.name == "push"
        assert info.metadata.description == "Push notifications"

    def test_wrong_field_type_raises_validation_error(self, tmp_path: Path) -> None:
        """Verify a non-string name is rejected."""
        skill_dir = write_skill(tmp_path, "bad", "name: [1, 2]")

        with pytest.raises(ValidationError):
            load_skill_info(skill_dir)


class TestSkillDestination:
    """Tests for where skills are installed."""

    @pytest.mark.parametrize(
        ("client", "expected"),
        [
            (None, ".notifly/skills"),
            ("claude", ".claude/skills"),
            ("Claude-Code", ".claude/skills"),
            ("cursor", ".cursor/skills"),
            ("vscode", ".vscode/skills"),
            ("codex", ".codex/skills"),
            ("opencode", ".opencode/skill"),
            ("letta", ".skills"),
            ("goose", ".goose/skills"),
            ("github", ".github/skills"),
            ("copilot", ".github/skills"),
            ("amp", ".amp/skills"),
            ("kiro", ".kiro/skills"),
            ("amazonq", ".amazonq/skills"),
            (".windsurf", ".windsurf/skills"),
            ("notepad", ".notifly/skills"),
        ],
    )
    def test_client_skills_dir(self, client: str | None, expected: str) -> None:
        """Verify each client maps to its skills folder."""
        assert client_skills_dir(client) == expected

    def test_project_install_uses_cwd(self, tmp_path: Path) -> None:
        """Verify the default install root is the project directory."""
        destination = skill_destination("integration", "cursor", cwd=tmp_path, home=tmp_path / "home")

        assert destination == (tmp_path / ".cursor" / "skills" / "integration").resolve()

    def test_global_install_uses_home(self, tmp_path: Path) -> None:
        """Verify --global installs under the home directory."""
        home = tmp_path / "home"

        destination = skill_destination(
            "integration", "claude", global_install=True, cwd=tmp_path, home=home
        )

        assert destination == (home / ".claude" / "skills" / "integration").resolve()

    def test_custom_path_overrides_client(self, tmp_path: Path) -> None:
        """Verify --path wins over the client folder."""
        destination = skill_destination("integration", "cursor", "docs/agents", cwd=tmp_path)

        assert destination == (tmp_path / "docs" / "agents" / "integration").resolve()


class TestInstallSkill:
    """Tests for copying a skill bundle."""

    def test_copies_bundle(self, skills_dir: Path, tmp_path: Path) -> None:
        """Verify the whole directory tree is copied."""
        destination = tmp_path / "dest" / "integration"

        skill_md = install_skill("integration", skills_dir, destination)

        assert skill_md == destination / "SKILL.md"
        assert skill_md.is_file()
        assert (destination / "examples" / "example.js").is_file()

    def test_reinstall_overwrites_and_keeps_extra_files(self, skills_dir: Path, tmp_path: Path) -> None:
        """Verify installing over an existing copy refreshes files and keeps user files."""
        # Given
        destination = tmp_path / "dest" / "integration"
        destination.mkdir(parents=True)
        (destination / "SKILL.md").write_text("stale")
        (destination / "notes.md").write_text("mine")

        # When
        install_skill("integration", skills_dir, destination)

        # Then
        assert (destination / "SKILL.md").read_text() != "stale"
        assert (destination / "notes.md").read_text() == "mine"

    def test_unknown_skill_lists_available(self, skills_dir: Path, tmp_path: Path) -> None:
        """Verify a missing skill raises with the available names."""
        with pytest.raises(SkillNotFoundError) as exc_info:
            install_skill("nope", skills_dir, tmp_path / "dest")

        assert exc_info.value.available == ["campaigns", "integration"]
        assert "campaigns, integration" in str(exc_info.value)
        assert not (tmp_path / "dest").exists()
