# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"


class FlagKind(Enum):
    PLATFORM = "platform"
    COMMAND = "command"      # <name>-app
    ENV = "env"              # anything containing "env."
    UGLIFY = "uglify"
    SNAPSHOT = "snapshot"
    NOBUNDLE = "nobundle"
    OTHER = "other"          # unknown --flag, forwarded to the CLI
    ARGUMENT = "argument"    # bare token, forwarded to the CLI


@dataclass(frozen=True)
class Flag:
    """One classified argv token."""
    kind: FlagKind
    name: str   # without the leading "--"
    raw: str    # token as it was typed

    @property
    def is_pipeline_flag(self) -> bool:
        return self.kind not in (FlagKind.OTHER, FlagKind.ARGUMENT)


@dataclass(frozen=True)
class Options:
    """
    What to build, resolved from the flags.

    platform: target platform (always present)
    command: CLI command run last ("build", "start", ...) or None
    env: bundler env flags, verbatim and in order (e.g. "env.aot")
    bundle: False when --nobundle was given
    passthrough: leftover tokens forwarded to the final CLI command
    """
    platform: Platform
    command: Optional[str] = None
    env: Tuple[str, ...] = ()
    bundle: bool = True
    passthrough: Tuple[str, ...] = ()


StepAction = Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class Step:
    """A deferred unit of work inside the pipeline. Position is its identity."""
    name: str
    action: StepAction = field(compare=False)
    # argv the step will run, for display only ("" for local steps)
    describe: str = ""
