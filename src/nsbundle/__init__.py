from .model import Options, Platform, Step
from .options import parse_argv
from .config import BuildContext
from .pipeline import compose_pipeline, run_pipeline
from .runner import run_steps
from .errors import BuildError, OptionsError, ProcessFailure, StepFailure, VersionParseError

__all__ = [
    "Options",
    "Platform",
    "Step",
    "parse_argv",
    "BuildContext",
    "compose_pipeline",
    "run_pipeline",
    "run_steps",
    "BuildError",
    "OptionsError",
    "ProcessFailure",
    "StepFailure",
    "VersionParseError",
]
