"""notifly-skills CLI entry point."""

import sys
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from notifly_skills import __version__, cli_logger, exit_codes
from notifly_skills.cli_logger import nice_path
from notifly_skills.configure import configure_mcp
from notifly_skills.errors import SkillNotFoundError, handle_cli_error
from notifly_skills.outcomes import (
    AlreadyConfigured,
    ConfigFailed,
    Configured,
    ConfigureResult,
    DeclinedCreate,
    DeclinedInject,
    ManualSkipped,
    ProbeFailed,
    RegistrationFailed,
    UnsupportedClient,
)
from notifly_skills.process import SubprocessRunner
from notifly_skills.prompts import AssumeYesPrompter, Prompter, TyperPrompter
from notifly_skills.skills import (
    find_skills,
    get_skills_dir,
    install_skill,
    load_skill_info,
    skill_destination,
)

app = typer.Typer(
    name="notifly-skills",
    help="Install Notifly agent skills and register the Notifly MCP server with your AI client.",
    no_args_is_help=True,
)

console = Console()

CLIENT_HELP = (
    "Target AI client (amazonq, amp, claude|claude-code, codex, copilot|github, "
    "cursor, goose, kiro, letta, opencode, vscode, manual)."
)

ClientOption = Annotated[
    str | None,
    typer.Option("--client", "-c", help=CLIENT_HELP),
]
YesOption = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Answer yes to every confirmation prompt."),
]


def _make_prompter(assume_yes: bool) -> Prompter:
    prompter = TyperPrompter()
    return AssumeYesPrompter(prompter) if assume_yes else prompter


def report_mcp_result(result: ConfigureResult) -> int:
    """Print the outcome of an MCP configuration attempt.

    Returns:
        CONFIG_ERROR when a config file could not be processed, SUCCESS for
        every other outcome (skips included).
    """
    match result:
        case AlreadyConfigured():
            cli_logger.success("Notifly MCP Server is already configured.")

        case Configured(client=client, path=path, created=created):
            if created and path is not None:
                cli_logger.success(f"Created config file at {escape(nice_path(path))}")
            cli_logger.success(
                f"Added Notifly MCP Server to configuration. Please restart {client}."
            )

        case DeclinedCreate() | DeclinedInject():
            cli_logger.warning("Skipping MCP configuration. You can configure manually later.")

        case ManualSkipped():
            cli_logger.step("Skipping automatic MCP configuration.")

        case UnsupportedClient(client=client):
            cli_logger.warning(f"Could not determine config path for {escape(client)}. Skipping.")

        case ProbeFailed(reason=reason):
            cli_logger.warning(f"{escape(reason)}. Skipping MCP configuration.")

        case RegistrationFailed(client=client, output=output):
            cli_logger.warning(f"Failed to configure MCP via {client} CLI.")
            cli_logger.dim(f"  Output:\n{escape(output)}" if output else "  No output captured.")

        case ConfigFailed(error=error):
            cli_logger.error(escape(error.describe()))
            return exit_codes.CONFIG_ERROR

    return exit_codes.SUCCESS


def _run_mcp_configuration(client: str | None, assume_yes: bool) -> int:
    cli_logger.step("Configuring Notifly MCP Server...")
    result = configure_mcp(client, _make_prompter(assume_yes), SubprocessRunner())
    return report_mcp_result(result)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"notifly-skills {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show notifly-skills version and exit.",
    ),
) -> None:
    """Install Notifly agent skills and register the Notifly MCP server with your AI client."""


@app.command()
def install(
    skill: Annotated[
        str | None,
        typer.Argument(help="Skill to install."),
    ] = None,
    client: ClientOption = None,
    path: Annotated[
        str | None,
        typer.Option("--path", "-p", help="Custom installation path (default: .notifly/skills)."),
    ] = None,
    all_skills: Annotated[
        bool,
        typer.Option("--all", "-a", help="Install all available skills."),
    ] = False,
    global_install: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="Install to the home directory instead of the current project.",
        ),
    ] = False,
    skip_mcp: Annotated[
        bool,
        typer.Option("--skip-mcp", help="Copy skill files only; leave MCP configuration alone."),
    ] = False,
    assume_yes: YesOption = False,
) -> None:
    """Install one skill (or --all) and register the Notifly MCP server.

    Skill files go to the project (or home with --global). MCP configuration
    is always machine-wide; a failure there is reported but does not fail
    the install.
    """
    if all_skills and skill:
        cli_logger.error("Cannot specify both a skill name and --all")
        raise typer.Exit(exit_codes.INVALID_ARGS)

    if not all_skills and not skill:
        cli_logger.error("Please specify a skill name or use --all")
        raise typer.Exit(exit_codes.INVALID_ARGS)

    skills_dir = get_skills_dir()

    if all_skills:
        names = find_skills(skills_dir)
        if not names:
            cli_logger.error(f"No skills found to install in {escape(str(skills_dir))}")
            raise typer.Exit(exit_codes.SKILL_NOT_FOUND)
        cli_logger.success(f"Found {len(names)} skill(s): {', '.join(names)}")
    else:
        assert skill is not None
        names = [skill]

    installed: list[tuple[str, str]] = []
    failures: list[int] = []

    for name in names:
        destination = skill_destination(name, client, path, global_install)
        try:
            skill_md = install_skill(name, skills_dir, destination)
        except SkillNotFoundError as e:
            cli_logger.error(escape(str(e)))
            failures.append(exit_codes.SKILL_NOT_FOUND)
            continue
        except OSError as e:
            cli_logger.error(f"Failed to install '{escape(name)}': {escape(str(e))}")
            failures.append(exit_codes.GENERAL_ERROR)
            continue

        root = "system root" if global_install else "repo root"
        cli_logger.success(f"Skill files installed to {root} ({escape(str(destination))})")
        installed.append((name, str(skill_md)))

    if not installed:
        raise typer.Exit(failures[0])

    if not skip_mcp:
        _run_mcp_configuration(client, assume_yes)

    for name, skill_md in installed:
        cli_logger.success(f"Skill [bold]{escape(name)}[/bold] is ready to use!")
        cli_logger.dim(f"  - Docs: {escape(skill_md)}")
        cli_logger.dim("  - Instruct your agent to read these docs to start working.")

    if all_skills:
        if failures:
            cli_logger.warning(f"Installed {len(installed)} skill(s), {len(failures)} failed.")
            raise typer.Exit(exit_codes.GENERAL_ERROR)
        cli_logger.success(f"Successfully installed all {len(installed)} skill(s)!")

    raise typer.Exit(exit_codes.SUCCESS)


@app.command("list")
def list_skills() -> None:
    """List the skills available for installation."""
    skills_dir = get_skills_dir()
    names = find_skills(skills_dir)

    if not names:
        cli_logger.info(f"No skills found in {escape(str(skills_dir))}")
        raise typer.Exit(exit_codes.SUCCESS)

    table = Table(show_header=True, header_style="bold")
    table.add_column("SKILL")
    table.add_column("NAME")
    table.add_column("DESCRIPTION")

    for directory in names:
        try:
            info = load_skill_info(skills_dir / directory)
        except (ValidationError, yaml.YAMLError, OSError):
            table.add_row(escape(directory), "[red]invalid SKILL.md[/red]", "")
            continue
        table.add_row(
            escape(directory),
            escape(info.metadata.name),
            escape(info.metadata.description or ""),
        )

    console.print(table)
    raise typer.Exit(exit_codes.SUCCESS)


@app.command()
def mcp(
    client: ClientOption = None,
    assume_yes: YesOption = False,
) -> None:
    """Register the Notifly MCP server with an AI client, without copying skills."""
    raise typer.Exit(_run_mcp_configuration(client, assume_yes))


def main_cli() -> None:
    """CLI entry point with top-level exception handling.

    Wraps the Typer app to catch any unhandled exceptions and format them
    as clean error messages instead of raw tracebacks.
    """
    try:
        app()
    except Exception as e:
        sys.exit(handle_cli_error(e))


if __name__ == "__main__":
    main_cli()
