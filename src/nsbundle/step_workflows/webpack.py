# step_workflows/webpack.py
from __future__ import annotations

from ..config import BuildContext
from ..model import Options, Step
from ..process import ProcessInvoker, quote_command
from ..ui.console import get_console
from .snapshot import should_snapshot


def webpack_args(options: Options, ctx: BuildContext) -> list[str]:
    args = [
        f"--config={ctx.webpack_config}",
        "--progress",
        f"--env.{options.platform.value}",
        *(f"--{item}" for item in options.env),
    ]
    if ctx.uglify:
        args.append("--env.uglify")
    if should_snapshot(options, ctx):
        args.append("--env.snapshot")
    return args


def bundle_step(options: Options, ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    args = webpack_args(options, ctx)

    async def action() -> None:
        get_console().print_info(f"Running webpack for {options.platform.value}...")
        await invoker.run(ctx.bundler, *args)

    return Step(name="bundle", action=action, describe=quote_command(ctx.bundler, *args))
