# process.py
# Single entry point for every external command the pipeline runs.
# Steps never talk to asyncio's subprocess API directly.

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path
from typing import Optional

from .errors import ProcessFailure


def quote_command(command: str, *args: str) -> str:
    """Quote each token on its own and join them into one shell line."""
    return " ".join(shlex.quote(str(t)) for t in (command, *args))


class ProcessInvoker:
    """
    Spawns one child at a time through the shell.

    run():     child shares this terminal's stdin/stdout/stderr
    capture(): stdout is piped back to us, stderr still goes to the terminal

    Both raise ProcessFailure on a nonzero exit. There are no timeouts: a hung
    child hangs the build until someone hits Ctrl-C.
    """

    def __init__(self, cwd: str | Path | None = None):
        self.cwd: Optional[str] = str(cwd) if cwd is not None else None

    async def run(self, command: str, *args: str) -> None:
        try:
            proc = await asyncio.create_subprocess_shell(
                quote_command(command, *args),
                cwd=self.cwd,
            )
        except OSError as e:
            raise ProcessFailure(1, f"could not start {command}: {e}") from e
        code = await proc.wait()
        if code != 0:
            raise ProcessFailure(code)

    async def capture(self, command: str, *args: str) -> str:
        try:
            proc = await asyncio.create_subprocess_shell(
                quote_command(command, *args),
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessFailure(1, f"could not start {command}: {e}") from e
        out, _ = await proc.communicate()
        if proc.returncode != 0:
            raise ProcessFailure(proc.returncode)
        return (out or b"").decode(errors="replace")
