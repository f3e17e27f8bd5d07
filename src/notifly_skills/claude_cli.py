"""Register the MCP server through the ``claude`` CLI.

Claude Code keeps its MCP servers in a file it owns, so instead of editing
that file we drive ``claude mcp``: probe that the subcommand exists, check
``claude mcp list`` for the server, then ``claude mcp add``. A missing or
failing ``claude`` binary is never fatal; it produces a result the caller
reports as a skip.
"""

from notifly_skills.outcomes import (
    AlreadyConfigured,
    Configured,
    DeclinedInject,
    ProbeFailed,
    RegistrationFailed,
)
from notifly_skills.process import ProcessRunner
from notifly_skills.prompts import Prompter
from notifly_skills.server import ServerRegistrationRecord, build_claude_add_args

CLAUDE_PROGRAM = "claude"
CLAUDE_DISPLAY_NAME = "Claude Code"

PROBE_ARGS = ["mcp", "--help"]
LIST_ARGS = ["mcp", "list"]


def listing_mentions_server(output: str, record: ServerRegistrationRecord) -> bool:
    """Return True if ``claude mcp list`` output mentions the server (case-insensitive)."""
    return record.name.lower() in output.lower()


def configure_claude_code(
    record: ServerRegistrationRecord,
    runner: ProcessRunner,
    prompter: Prompter,
) -> AlreadyConfigured | Configured | DeclinedInject | ProbeFailed | RegistrationFailed:
    """Register *record* with Claude Code via ``claude mcp add``.

    A listing that fails to run is treated as "not registered yet"; the
    registration itself is still attempted.

    Args:
        record: The server to register.
        runner: Runs the ``claude`` program.
        prompter: Asks before registering.

    Returns:
        The outcome; never raises for process failures.
    """
    probe = runner.run(CLAUDE_PROGRAM, PROBE_ARGS)
    if probe.launch_error is not None:
        return ProbeFailed(
            client=CLAUDE_DISPLAY_NAME,
            reason=f"Could not run Claude CLI ({probe.launch_error})",
        )
    if probe.exit_code != 0:
        return ProbeFailed(
            client=CLAUDE_DISPLAY_NAME,
            reason="Claude CLI does not appear to support `claude mcp`",
        )

    listing = runner.run(CLAUDE_PROGRAM, LIST_ARGS)
    if listing.ok and listing_mentions_server(listing.output, record):
        return AlreadyConfigured(client=CLAUDE_DISPLAY_NAME)

    if not prompter.confirm("Add Notifly MCP Server to Claude Code via `claude mcp add`?"):
        return DeclinedInject(client=CLAUDE_DISPLAY_NAME)

    added = runner.run(CLAUDE_PROGRAM, build_claude_add_args(record))
    if not added.ok:
        output = added.output or added.launch_error or ""
        return RegistrationFailed(client=CLAUDE_DISPLAY_NAME, output=output)

    return Configured(client=CLAUDE_DISPLAY_NAME)
