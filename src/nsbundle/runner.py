# runner.py
from __future__ import annotations

from typing import Dict, Optional, Sequence

from .errors import BuildError, StepFailure
from .model import Step
from .ui.console import Console, get_console


async def run_steps(steps: Sequence[Step], console: Optional[Console] = None) -> Dict[str, str]:
    """
    Run steps one after another, in list order.

    The first BuildError stops the run: nothing after the failing step is
    started, and the error comes back out as a StepFailure with the failing
    step's exit code.

    Returns:
      {step name: "ok"} in execution order
    """
    console = console or get_console()
    results: Dict[str, str] = {}

    for index, step in enumerate(steps):
        console.print_step(step.name)
        try:
            await step.action()
        except BuildError as e:
            console.print_failure(step.name, e.message, exit_code=e.code)
            raise StepFailure(code=e.code, message=e.message, step=step.name, index=index) from e
        results[step.name] = "ok"
        console.print_success(step.name)

    return results
