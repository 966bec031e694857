# cli.py
from __future__ import annotations

import asyncio
import os
import sys

import click

from nsbundle.config import BuildContext
from nsbundle.errors import BuildError, OptionsError, StepFailure
from nsbundle.model import FlagKind
from nsbundle.options import has_flag, npm_argv, read_flags, resolve_options
from nsbundle.pipeline import compose_pipeline, run_pipeline
from nsbundle.ui.console import Console, get_console, set_console


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    }
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--project-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, exists=True),
    help="App project root (where platforms/ and webpack.config.js live)",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the build plan without running it")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args, debug, project_dir, dry_run):
    """
    Prepare, bundle and build a NativeScript app in one go.

    \b
    Examples:
      ns-bundle --android --build-app
      ns-bundle --ios --start-app --env.aot --release
      npm run ns-bundle --android --uglify --snapshot

    When called without flags, the flags are read from npm's recorded argv.
    """
    console = Console(debug=debug)
    set_console(console)

    try:
        tokens = list(args) or npm_argv(os.environ)
        flags = read_flags(tokens)
        options = resolve_options(flags)
    except OptionsError as e:
        console.print_error(
            "Invalid flags",
            e.message,
            suggestion="Usage:\n  ns-bundle --android|--ios [--<command>-app] [--env.<name>] [--uglify] [--snapshot] [--nobundle]",
        )
        sys.exit(e.exit_code)

    ctx = BuildContext.from_env(project_dir).with_toggles(
        uglify=has_flag(flags, FlagKind.UGLIFY),
        snapshot=has_flag(flags, FlagKind.SNAPSHOT),
    )
    console.print_debug(f"options={options}")
    console.print_debug(f"context={ctx}")

    if dry_run:
        steps = compose_pipeline(options, ctx)
        console.print_plan([(s.name, s.describe) for s in steps])
        return

    try:
        results = asyncio.run(run_pipeline(options, ctx, console=console))
        console.print_results(results)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except StepFailure as e:
        console.print_error("Build failed", str(e))
        sys.exit(e.exit_code)
    except BuildError as e:
        console.print_exception(e)
        sys.exit(e.exit_code)


def main() -> None:
    cli(prog_name="ns-bundle")


if __name__ == "__main__":
    main()
