# config.py
from __future__ import annotations

import os
import platform as _platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional


DEFAULT_CLI = "tns"
DEFAULT_BUNDLER = "webpack"
DEFAULT_WEBPACK_CONFIG = "webpack.config.js"

# npm exports `--uglify` / `--snapshot` as npm_config_<name>
UGLIFY_ENV = "npm_config_uglify"
SNAPSHOT_ENV = "npm_config_snapshot"


def env_toggle(environ: Mapping[str, str], key: str) -> bool:
    value = environ.get(key, "")
    return value.strip().lower() not in ("", "0", "false")


@dataclass(frozen=True)
class BuildContext:
    """
    Everything the pipeline reads from the outside world, captured once.

    Steps only look at this value, never at os.environ.
    """
    project_dir: Path
    uglify: bool = False
    snapshot: bool = False
    host_os: str = "Linux"
    cli: str = DEFAULT_CLI
    bundler: str = DEFAULT_BUNDLER
    webpack_config: str = DEFAULT_WEBPACK_CONFIG

    @property
    def is_windows(self) -> bool:
        return self.host_os.lower().startswith("windows")

    @classmethod
    def from_env(
        cls,
        project_dir: str | Path | None = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "BuildContext":
        environ = os.environ if environ is None else environ
        return cls(
            project_dir=Path(project_dir or ".").resolve(),
            uglify=env_toggle(environ, UGLIFY_ENV),
            snapshot=env_toggle(environ, SNAPSHOT_ENV),
            host_os=_platform.system(),
            cli=environ.get("NSBUNDLE_CLI", DEFAULT_CLI),
            bundler=environ.get("NSBUNDLE_BUNDLER", DEFAULT_BUNDLER),
            webpack_config=environ.get("NSBUNDLE_WEBPACK_CONFIG", DEFAULT_WEBPACK_CONFIG),
        )

    def with_toggles(self, *, uglify: bool = False, snapshot: bool = False) -> "BuildContext":
        """Flags typed on the command line switch toggles on, never off."""
        return replace(self, uglify=self.uglify or uglify, snapshot=self.snapshot or snapshot)
