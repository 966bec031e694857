# errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class BuildError(Exception):
    """
    Uniform failure for everything the pipeline touches.

    `code` becomes the process exit code at the CLI boundary (falls back to 1
    when it is 0/None).
    """
    code: int
    message: str

    def __str__(self) -> str:
        return self.message

    @property
    def exit_code(self) -> int:
        return self.code or 1


class OptionsError(BuildError):
    """Invalid flag combination. Raised before any step runs."""

    def __init__(self, message: str):
        super().__init__(code=1, message=message)


class ProcessFailure(BuildError):
    """A child process exited with a nonzero code."""

    def __init__(self, code: int, message: str | None = None):
        super().__init__(code=code, message=message or f"child process exited with code {code}")


class VersionParseError(BuildError):
    def __init__(self, output: str):
        super().__init__(code=1, message=f"Could not parse a version from: {output.strip()!r}")
        self.output = output


@dataclass(eq=False)
class StepFailure(BuildError):
    """Raised by the runner: which step broke, and why."""
    step: str = ""
    index: int = -1

    def __str__(self) -> str:
        return f"step '{self.step}' failed (exit={self.code}): {self.message}"
