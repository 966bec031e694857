# step_workflows/snapshot.py
from __future__ import annotations

import shutil
from pathlib import Path

from ..config import BuildContext
from ..errors import BuildError
from ..model import Options, Platform, Step
from ..ui.console import get_console


SNAPSHOT_PACKAGE = "nativescript-android-snapshot"


def should_snapshot(options: Options, ctx: BuildContext) -> bool:
    """Snapshots are android-only and can't be generated on Windows hosts."""
    return options.platform is Platform.ANDROID and not ctx.is_windows and ctx.snapshot


class SnapshotArtifacts:
    """
    Precompiled V8 snapshot blobs + native libs inside platforms/android.

    The bundler (with --env.snapshot) writes them to snapshot-build/build;
    install() copies them where the android project picks them up.
    """

    def __init__(self, project_dir: str | Path):
        self.platform_dir = Path(project_dir) / "platforms" / "android"
        self.build_dir = self.platform_dir / "snapshot-build" / "build"
        self.assets_dir = self.platform_dir / "src" / "main" / "assets"
        self.config_dir = self.platform_dir / "configurations" / SNAPSHOT_PACKAGE

    @property
    def blobs_dir(self) -> Path:
        return self.assets_dir / "snapshots"

    def clean(self) -> None:
        for path in (self.blobs_dir, self.config_dir):
            if path.exists():
                get_console().print_debug(f"removing {path}")
                shutil.rmtree(path)

    def install(self) -> None:
        blobs = self.build_dir / "snapshots"
        libs = self.build_dir / "ndk-build" / "libs"
        include_gradle = self.build_dir / "include.gradle"

        missing = [p for p in (blobs, libs, include_gradle) if not p.exists()]
        if missing:
            raise BuildError(
                code=1,
                message="Snapshot build output not found: " + ", ".join(str(p) for p in missing),
            )

        try:
            shutil.copytree(blobs, self.blobs_dir, dirs_exist_ok=True)
            shutil.copytree(libs, self.config_dir / "libs", dirs_exist_ok=True)
            shutil.copy2(include_gradle, self.config_dir / "include.gradle")
        except OSError as e:
            raise BuildError(code=1, message=f"Could not install snapshot artifacts: {e}") from e


def clean_snapshot_artifacts_step(options: Options, ctx: BuildContext, artifacts: SnapshotArtifacts | None = None) -> Step:
    artifacts = artifacts or SnapshotArtifacts(ctx.project_dir)

    async def action() -> None:
        try:
            artifacts.clean()
        except OSError as e:
            raise BuildError(code=1, message=f"Could not remove snapshot artifacts: {e}") from e

    return Step(name="clean-snapshot-artifacts", action=action)


def install_snapshot_artifacts_step(options: Options, ctx: BuildContext, artifacts: SnapshotArtifacts | None = None) -> Step:
    artifacts = artifacts or SnapshotArtifacts(ctx.project_dir)

    async def action() -> None:
        artifacts.install()

    return Step(name="install-snapshot-artifacts", action=action)
