# step_workflows/gradle.py
from __future__ import annotations

from pathlib import Path

from ..config import BuildContext
from ..model import Options, Platform, Step
from ..process import ProcessInvoker
from ..ui.console import get_console
from ..version import Version, is_version_gte, probe_cli_version


# CLI releases from this one on clean android build output themselves,
# except when uglify invalidates their cache.
SELF_CLEANING_CLI = Version(3, 0, 1)


def android_platform_dir(project_dir: Path) -> Path:
    return project_dir / "platforms" / "android"


def needs_manual_clean(cli_version: Version, uglify: bool) -> bool:
    return uglify or not is_version_gte(cli_version, SELF_CLEANING_CLI)


async def gradlew_clean(project_dir: Path, invoker: ProcessInvoker) -> None:
    platform_dir = android_platform_dir(project_dir)
    gradlew = (platform_dir / "gradlew").resolve()
    if not gradlew.exists():
        get_console().print_debug(f"{gradlew} not found, skipping gradle clean")
        return
    await invoker.run(str(gradlew), "-p", str(platform_dir), "clean")


def clean_build_artifacts_step(options: Options, ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    async def action() -> None:
        if options.platform is not Platform.ANDROID:
            return

        cli_version = await probe_cli_version(invoker, ctx.cli)
        if needs_manual_clean(cli_version, ctx.uglify):
            get_console().print_debug(f"{ctx.cli} {cli_version}: cleaning android build manually")
            await gradlew_clean(ctx.project_dir, invoker)

    return Step(name="clean-build-artifacts", action=action)
