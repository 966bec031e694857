from .tns import prepare_step, clean_app_step, run_command_step
from .snapshot import clean_snapshot_artifacts_step, install_snapshot_artifacts_step, should_snapshot
from .gradle import clean_build_artifacts_step
from .webpack import bundle_step

__all__ = [
    "prepare_step",
    "clean_app_step",
    "run_command_step",
    "clean_snapshot_artifacts_step",
    "install_snapshot_artifacts_step",
    "should_snapshot",
    "clean_build_artifacts_step",
    "bundle_step",
]
