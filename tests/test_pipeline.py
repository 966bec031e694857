from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from nsbundle.errors import StepFailure, VersionParseError
from nsbundle.options import parse_argv
from nsbundle.pipeline import compose_pipeline, run_pipeline
from nsbundle.runner import run_steps

from conftest import FakeInvoker


def names(steps):
    return [s.name for s in steps]


def run(steps):
    return asyncio.run(run_steps(steps))


def test_android_build_end_to_end(ctx, invoker):
    steps = compose_pipeline(parse_argv(["--android", "--build-app"]), ctx, invoker)
    assert names(steps) == [
        "prepare",
        "clean-app",
        "clean-snapshot-artifacts",
        "clean-build-artifacts",
        "bundle",
        "run(build, android)",
    ]

    results = run(steps)

    assert list(results.values()) == ["ok"] * 6
    assert invoker.calls == [
        ("tns", "prepare", "android", "--bundle", "--disable-npm-install"),
        ("tns", "clean-app", "android"),
        ("tns", "--version"),
        ("webpack", "--config=webpack.config.js", "--progress", "--env.android"),
        ("tns", "build", "android", "--bundle", "--disable-npm-install"),
    ]


def test_nobundle_keeps_prepare_and_command_only(ctx, invoker):
    steps = compose_pipeline(parse_argv(["--ios", "--nobundle", "--start-app"]), ctx, invoker)
    assert names(steps) == ["prepare", "run(start, ios)"]


def test_nobundle_without_command(ctx, invoker):
    steps = compose_pipeline(parse_argv(["--android", "--nobundle"]), ctx, invoker)
    assert names(steps) == ["prepare"]


def test_cleaning_precedes_bundling(ctx, invoker):
    steps = names(compose_pipeline(parse_argv(["--ios"]), ctx, invoker))
    bundle_at = steps.index("bundle")
    for clean in ("clean-app", "clean-snapshot-artifacts", "clean-build-artifacts"):
        assert steps.index(clean) < bundle_at


def test_snapshot_installed_after_bundle_before_command(ctx, invoker):
    snap_ctx = replace(ctx, snapshot=True)
    steps = names(compose_pipeline(parse_argv(["--android", "--build-app"]), snap_ctx, invoker))
    assert steps.index("bundle") < steps.index("install-snapshot-artifacts") < steps.index("run(build, android)")
    assert steps[-1] == "run(build, android)"


@pytest.mark.parametrize(
    "argv, host_os",
    [
        (["--ios", "--build-app"], "Linux"),
        (["--android", "--build-app"], "Windows"),
    ],
)
def test_no_snapshot_outside_android_unix(ctx, invoker, argv, host_os):
    snap_ctx = replace(ctx, snapshot=True, host_os=host_os)
    steps = compose_pipeline(parse_argv(argv), snap_ctx, invoker)
    assert "install-snapshot-artifacts" not in names(steps)
    bundle = next(s for s in steps if s.name == "bundle")
    assert "--env.snapshot" not in bundle.describe


def test_bundle_args(ctx, invoker):
    flags_ctx = replace(ctx, uglify=True, snapshot=True)
    options = parse_argv(["--android", "--env.aot", "--env.report"])
    bundle = next(s for s in compose_pipeline(options, flags_ctx, invoker) if s.name == "bundle")

    asyncio.run(bundle.action())

    assert invoker.calls == [
        (
            "webpack",
            "--config=webpack.config.js",
            "--progress",
            "--env.android",
            "--env.aot",
            "--env.report",
            "--env.uglify",
            "--env.snapshot",
        )
    ]


def test_command_gets_passthrough_args(ctx, invoker):
    options = parse_argv(["--android", "--build-app", "--release", "--nobundle"])
    steps = compose_pipeline(options, ctx, invoker)
    asyncio.run(steps[-1].action())
    assert invoker.calls[-1] == ("tns", "build", "android", "--bundle", "--disable-npm-install", "--release")


class TestCleanBuildArtifacts:
    def _step(self, argv, ctx, invoker):
        steps = compose_pipeline(parse_argv(argv), ctx, invoker)
        return next(s for s in steps if s.name == "clean-build-artifacts")

    def _gradlew(self, ctx):
        platform_dir = ctx.project_dir / "platforms" / "android"
        platform_dir.mkdir(parents=True)
        (platform_dir / "gradlew").write_text("#!/bin/sh\n")

    def test_ios_is_noop(self, ctx):
        invoker = FakeInvoker(version_output="1.0.0")
        asyncio.run(self._step(["--ios"], replace(ctx, uglify=True), invoker).action())
        assert invoker.calls == []

    def test_old_cli_cleans(self, ctx):
        self._gradlew(ctx)
        invoker = FakeInvoker(version_output="3.0.0")
        asyncio.run(self._step(["--android"], ctx, invoker).action())
        assert invoker.calls[0] == ("tns", "--version")
        gradlew, *args = invoker.calls[1]
        assert gradlew.endswith("gradlew")
        assert args[0] == "-p"
        assert args[-1] == "clean"

    def test_new_cli_skips_clean(self, ctx):
        self._gradlew(ctx)
        invoker = FakeInvoker(version_output="3.0.1")
        asyncio.run(self._step(["--android"], ctx, invoker).action())
        assert invoker.calls == [("tns", "--version")]

    def test_uglify_forces_clean(self, ctx):
        self._gradlew(ctx)
        invoker = FakeInvoker(version_output="6.0.0")
        asyncio.run(self._step(["--android"], replace(ctx, uglify=True), invoker).action())
        assert invoker.calls[-1][-1] == "clean"

    def test_missing_gradlew_is_skipped(self, ctx):
        invoker = FakeInvoker(version_output="2.5.0")
        asyncio.run(self._step(["--android"], ctx, invoker).action())
        assert invoker.calls == [("tns", "--version")]

    def test_unparseable_version_fails_the_build(self, ctx):
        invoker = FakeInvoker(version_output="garbage")
        steps = compose_pipeline(parse_argv(["--android", "--build-app"]), ctx, invoker)
        with pytest.raises(StepFailure) as exc:
            run(steps)
        assert exc.value.step == "clean-build-artifacts"
        assert isinstance(exc.value.__cause__, VersionParseError)
        assert ("tns", "build", "android", "--bundle", "--disable-npm-install") not in invoker.calls


def test_failure_stops_remaining_steps(ctx):
    invoker = FakeInvoker(fail_on="clean-app", fail_code=3)
    steps = compose_pipeline(parse_argv(["--android", "--build-app"]), ctx, invoker)

    with pytest.raises(StepFailure) as exc:
        run(steps)

    assert exc.value.code == 3
    assert exc.value.exit_code == 3
    assert exc.value.index == 1
    assert invoker.calls == [
        ("tns", "prepare", "android", "--bundle", "--disable-npm-install"),
        ("tns", "clean-app", "android"),
    ]


def test_run_pipeline_returns_results(ctx, invoker):
    results = asyncio.run(run_pipeline(parse_argv(["--ios", "--nobundle"]), ctx, invoker))
    assert results == {"prepare": "ok"}
