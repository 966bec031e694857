# step_workflows/tns.py
from __future__ import annotations

from typing import Sequence

from ..config import BuildContext
from ..model import Options, Step
from ..process import ProcessInvoker, quote_command
from ..ui.console import get_console


# ---------------------------------------------------------------------
# App CLI steps (tns <command> <platform> ...)
# ---------------------------------------------------------------------

def cli_args(command: str, options: Options) -> list[str]:
    """Arguments for a bundled CLI run: skip npm install, forward leftovers."""
    return [
        command,
        options.platform.value,
        "--bundle",
        "--disable-npm-install",
        *options.passthrough,
    ]


def _cli_step(name: str, args: Sequence[str], ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    async def action() -> None:
        get_console().print_info(f"Running {ctx.cli} {args[0]}...")
        await invoker.run(ctx.cli, *args)

    return Step(name=name, action=action, describe=quote_command(ctx.cli, *args))


def prepare_step(options: Options, ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    return _cli_step("prepare", cli_args("prepare", options), ctx, invoker)


def clean_app_step(options: Options, ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    """Clear the platform's previous app output before a fresh bundle."""
    return _cli_step("clean-app", ["clean-app", options.platform.value], ctx, invoker)


def run_command_step(options: Options, ctx: BuildContext, invoker: ProcessInvoker) -> Step:
    if not options.command:
        raise ValueError("run_command_step() needs options.command")
    return _cli_step(
        f"run({options.command}, {options.platform.value})",
        cli_args(options.command, options),
        ctx,
        invoker,
    )
