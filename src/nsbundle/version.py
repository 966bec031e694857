# version.py
from __future__ import annotations

import re
from typing import NamedTuple, Protocol

from .errors import VersionParseError


VERSION_MATCH = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class Version(NamedTuple):
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        """First x.y.z found in free-form tool output."""
        m = VERSION_MATCH.search(text or "")
        if m is None:
            raise VersionParseError(text or "")
        return cls(*(int(g) for g in m.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class _Capturing(Protocol):
    async def capture(self, command: str, *args: str) -> str: ...


def is_version_gte(found: Version | str, reference: Version | str) -> bool:
    if isinstance(found, str):
        found = Version.parse(found)
    if isinstance(reference, str):
        reference = Version.parse(reference)
    return found >= reference


async def probe_cli_version(invoker: _Capturing, cli: str) -> Version:
    """Ask the app CLI for its version (`<cli> --version`)."""
    output = await invoker.capture(cli, "--version")
    return Version.parse(output)
