# pipeline.py
from __future__ import annotations

from typing import Dict, List, Optional

from .config import BuildContext
from .model import Options, Step
from .process import ProcessInvoker
from .runner import run_steps
from .step_workflows import (
    bundle_step,
    clean_app_step,
    clean_build_artifacts_step,
    clean_snapshot_artifacts_step,
    install_snapshot_artifacts_step,
    prepare_step,
    run_command_step,
    should_snapshot,
)
from .ui.console import Console, get_console


def compose_pipeline(
    options: Options,
    ctx: BuildContext,
    invoker: Optional[ProcessInvoker] = None,
) -> List[Step]:
    """
    Build the ordered step list for one invocation.

    prepare
      -> clean-app, clean-snapshot-artifacts, clean-build-artifacts, bundle  (unless --nobundle)
      -> install-snapshot-artifacts  (android, non-Windows host, snapshot on)
      -> run(<command>)              (only with a <name>-app flag)

    Cleaning comes before bundling, snapshot install after bundling, and the
    CLI command always last.
    """
    invoker = invoker or ProcessInvoker(ctx.project_dir)

    steps: List[Step] = [prepare_step(options, ctx, invoker)]

    if options.bundle:
        steps.append(clean_app_step(options, ctx, invoker))
        steps.append(clean_snapshot_artifacts_step(options, ctx))
        steps.append(clean_build_artifacts_step(options, ctx, invoker))
        steps.append(bundle_step(options, ctx, invoker))

    if should_snapshot(options, ctx):
        steps.append(install_snapshot_artifacts_step(options, ctx))

    if options.command:
        steps.append(run_command_step(options, ctx, invoker))

    return steps


async def run_pipeline(
    options: Options,
    ctx: BuildContext,
    invoker: Optional[ProcessInvoker] = None,
    console: Optional[Console] = None,
) -> Dict[str, str]:
    console = console or get_console()
    steps = compose_pipeline(options, ctx, invoker)
    console.print_build_started(
        project=ctx.project_dir.name,
        platform=options.platform.value,
        step_count=len(steps),
    )
    return await run_steps(steps, console)
