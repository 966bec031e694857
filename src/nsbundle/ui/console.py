"""Console output formatting utilities for nsbundle."""

from __future__ import annotations

import sys
from typing import Optional, Sequence


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show debug lines and stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_build_started(
        self,
        project: str,
        platform: str,
        step_count: int,
    ) -> None:
        """Print build start information."""
        print("\nBUILD STARTED")
        print(f"Project: {project}")
        print(f"Platform: {platform}")
        print(f"Steps: {step_count}")
        print()

    def print_plan(self, steps: Sequence[tuple[str, str]]) -> None:
        """Print the composed pipeline, one numbered line per step."""
        self.print_header("PLAN")
        for i, (name, describe) in enumerate(steps, start=1):
            line = f"  {i}. {name}"
            if describe:
                line += f"  ({describe})"
            print(line)

    def print_step(self, name: str) -> None:
        """Print step start message."""
        print(f"STEP: {name}")

    def print_success(self, name: str) -> None:
        print("STATUS: success")

    def print_failure(
        self,
        name: str,
        reason: str,
        exit_code: Optional[int] = None,
    ) -> None:
        """
        Print step failure message.

        Args:
            name: Step name
            reason: Failure reason/error message
            exit_code: Optional exit code
        """
        print(f"STEP FAILED: {name}", file=sys.stderr)
        if exit_code is not None:
            print(f"Exit code: {exit_code}", file=sys.stderr)
        if self.debug:
            print(f"Error details: {reason}", file=sys.stderr)

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for step, status in results.items():
            status_display = status.upper() if status != "ok" else "SUCCESS"
            print(f"  {step}: {status_display}")

    def print_error(
        self,
        title: str,
        message: str,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (initialized by the CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
