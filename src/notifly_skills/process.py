"""Running external client CLIs.

Calls block until the process exits; there is no timeout.
"""

import subprocess
from dataclasses import dataclass
from typing import Protocol


@dataclass
class ProcessResult:
    """Outcome of running an external program.

    Attributes:
        exit_code: Process exit code, or None if it never started.
        stdout: Captured standard output.
        stderr: Captured standard error.
        launch_error: Why the process could not be started, if it wasn't.
    """

    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    launch_error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the process started and exited with status 0."""
        return self.launch_error is None and self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, stripped."""
        return f"{self.stdout}\n{self.stderr}".strip()


class ProcessRunner(Protocol):
    """Runs an external program and reports how it went."""

    def run(self, program: str, args: list[str]) -> ProcessResult:
        ...


class SubprocessRunner:
    """ProcessRunner backed by ``subprocess.run`` with captured text output."""

    def run(self, program: str, args: list[str]) -> ProcessResult:
        try:
            completed = subprocess.run(
                [program, *args],
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            return ProcessResult(exit_code=None, launch_error=str(exc))

        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
