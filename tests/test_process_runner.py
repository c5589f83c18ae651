"""Tests for the process runner (spawns real child interpreters)."""

from __future__ import annotations

import pytest
import structlog.testing

from hostctl.config import Settings
from hostctl.services.process_runner import (
    NonZeroExit,
    ProcessRunner,
    ProcessTimeout,
    SpawnFailure,
)
from hostctl.utils.platform import Platform
from tests.fakes import PY


@pytest.fixture
def runner():
    return ProcessRunner(Settings())


@pytest.mark.asyncio
async def test_returns_stdout_exactly(runner):
    out = await runner.run(PY, ["-c", "import sys; sys.stdout.write('hello'); sys.stdout.write(' world')"])
    assert out == "hello world"


@pytest.mark.asyncio
async def test_stderr_ignored_on_success(runner):
    out = await runner.run(PY, ["-c", "import sys; sys.stderr.write('warn'); sys.stdout.write('ok')"])
    assert out == "ok"


@pytest.mark.asyncio
async def test_arguments_passed_through(runner):
    out = await runner.run(PY, ["-c", "import sys; sys.stdout.write('|'.join(sys.argv[1:]))", "a", "b c"])
    assert out == "a|b c"


@pytest.mark.asyncio
async def test_stdin_written_then_closed(runner):
    # read() only returns once the input stream is closed
    out = await runner.run(
        PY,
        ["-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"],
        "line one\nline two\n",
        timeout=20,
    )
    assert out == "LINE ONE\nLINE TWO\n"


@pytest.mark.asyncio
async def test_no_stdin_means_immediate_eof(runner):
    out = await runner.run(PY, ["-c", "import sys; sys.stdout.write(repr(sys.stdin.read()))"], timeout=20)
    assert out == "''"


@pytest.mark.asyncio
async def test_nonzero_exit_carries_stderr(runner):
    with pytest.raises(NonZeroExit) as info:
        await runner.run(PY, ["-c", "import sys; sys.stdout.write('partial'); sys.stderr.write('boom'); sys.exit(2)"])
    assert str(info.value) == "Error executing script: boom"
    assert info.value.returncode == 2
    assert info.value.stderr == "boom"


@pytest.mark.asyncio
async def test_nonzero_exit_with_empty_stderr(runner):
    with pytest.raises(NonZeroExit) as info:
        await runner.run(PY, ["-c", "raise SystemExit(1)"])
    assert str(info.value) == "Error executing script: "


@pytest.mark.asyncio
async def test_missing_executable_is_spawn_failure(runner, tmp_path):
    missing = str(tmp_path / "definitely-not-here")
    with pytest.raises(SpawnFailure) as info:
        await runner.run(missing, [])
    assert str(info.value).startswith("Failed to start process: ")


@pytest.mark.asyncio
async def test_timeout_kills_process(runner):
    with pytest.raises(ProcessTimeout) as info:
        await runner.run(PY, ["-c", "import time; time.sleep(30)"], timeout=0.5)
    assert "timed out after 0.5 seconds" in str(info.value)


@pytest.mark.asyncio
async def test_default_timeout_from_settings():
    runner = ProcessRunner(Settings(hostctl_script_timeout_seconds=0.5))
    with pytest.raises(ProcessTimeout):
        await runner.run(PY, ["-c", "import time; time.sleep(30)"])


@pytest.mark.asyncio
async def test_repeated_runs_are_identical(runner):
    args = ["-c", "print('same every time')"]
    first = await runner.run(PY, args)
    second = await runner.run(PY, args)
    assert first == second
    assert "same every time" in first


def test_resolve_honours_platform():
    runner = ProcessRunner(Settings(), platform=Platform.windows)
    assert runner.resolve("deploy.ps1", ["x"]).argv == [
        "powershell.exe", "-ExecutionPolicy", "Bypass", "-File", "deploy.ps1", "x",
    ]
    runner = ProcessRunner(Settings(), platform=Platform.unix)
    assert runner.resolve("deploy.ps1", ["x"]).argv == ["deploy.ps1", "x"]


@pytest.mark.asyncio
async def test_null_byte_in_executable_is_spawn_failure(runner):
    with pytest.raises(SpawnFailure) as info:
        await runner.run("foo\x00bar", [])
    assert str(info.value).startswith("Failed to start process: ")


@pytest.mark.asyncio
async def test_null_byte_in_argument_is_spawn_failure(runner):
    with pytest.raises(SpawnFailure):
        await runner.run(PY, ["-c", "pass", "a\x00b"])


@pytest.mark.asyncio
async def test_stdout_kept_out_of_info_logs(runner):
    with structlog.testing.capture_logs() as events:
        await runner.run(PY, ["-c", "import sys; sys.stdout.write('secret-token')"])
    info_events = [e for e in events if e["log_level"] == "info"]
    assert any(e["event"] == "process.exit" for e in info_events)
    assert all("secret-token" not in str(e.get("out", "")) for e in info_events)
