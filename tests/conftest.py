"""Shared test fixtures for notifly-skills tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from notifly_skills.process import ProcessResult
from notifly_skills.skills import SKILLS_DIR_ENV_VAR


class ScriptedPrompter:
    """Prompter that replays scripted answers and records every question."""

    def __init__(self, confirms: list[bool] | None = None, choice: str | None = None) -> None:
        self._confirms = list(confirms or [])
        self._choice = choice
        self.questions: list[str] = []
        self.offered: list[tuple[str, str]] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        if not self._confirms:
            raise AssertionError(f"Unexpected confirmation prompt: {question}")
        return self._confirms.pop(0)

    def choose(self, question: str, options: list[tuple[str, str]]) -> str:
        self.questions.append(question)
        self.offered = options
        if self._choice is None:
            raise AssertionError(f"Unexpected choice prompt: {question}")
        return self._choice


class FakeProcessRunner:
    """ProcessRunner keyed by the ``claude mcp`` subcommand (``--help``, ``list``, ``add``).

    Subcommands without a scripted result succeed with empty output.
    """

    def __init__(self, results: dict[str, ProcessResult] | None = None) -> None:
        self._results = results or {}
        self.calls: list[list[str]] = []

    def run(self, program: str, args: list[str]) -> ProcessResult:
        self.calls.append([program, *args])
        subcommand = args[1] if len(args) > 1 else ""
        return self._results.get(subcommand, ProcessResult(exit_code=0))

    @property
    def subcommands(self) -> list[str]:
        return [call[2] for call in self.calls if len(call) > 2]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty home directory, also exported as HOME for Path.home()."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as the current working directory."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    return project_dir


def write_skill(skills_dir: Path, name: str, front_matter: str | None = None) -> Path:
    """Create a skill bundle with a SKILL.md and one example file."""
    skill_dir = skills_dir / name
    (skill_dir / "examples").mkdir(parents=True)
    header = f"---\n{front_matter}\n---\n" if front_matter is not None else ""
    (skill_dir / "SKILL.md").write_text(f"{header}# {name}\n")
    (skill_dir / "examples" / "example.js").write_text("console.log('hi');\n")
    return skill_dir


@pytest.fixture
def skills_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Skills source directory with two bundles and one non-skill folder."""
    source = tmp_path / "skills"
    write_skill(source, "integration", "name: integration\ndescription: SDK integration")
    write_skill(source, "campaigns", "name: campaigns")
    (source / "not-a-skill").mkdir()
    monkeypatch.setenv(SKILLS_DIR_ENV_VAR, str(source))
    return source
