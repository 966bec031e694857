from __future__ import annotations

from pathlib import Path

import pytest

from nsbundle.config import BuildContext
from nsbundle.errors import ProcessFailure
from nsbundle.ui.console import Console, set_console


class FakeInvoker:
    """Records every command instead of spawning it."""

    def __init__(self, version_output: str = "3.1.0\n", fail_on: str | None = None, fail_code: int = 2):
        self.calls: list[tuple[str, ...]] = []
        self.version_output = version_output
        self.fail_on = fail_on
        self.fail_code = fail_code

    def _record(self, command: str, args: tuple[str, ...]) -> None:
        self.calls.append((command, *args))
        if self.fail_on is not None and self.fail_on in (command, *args):
            raise ProcessFailure(self.fail_code)

    async def run(self, command: str, *args: str) -> None:
        self._record(command, args)

    async def capture(self, command: str, *args: str) -> str:
        self._record(command, args)
        return self.version_output


@pytest.fixture(autouse=True)
def quiet_console():
    console = Console(debug=False)
    set_console(console)
    return console


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def ctx(tmp_path: Path) -> BuildContext:
    return BuildContext(project_dir=tmp_path, host_os="Linux")
