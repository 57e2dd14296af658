import sys
from pathlib import Path

import pytest

from libpng_src.errors import SubprocessError
from libpng_src.observability import StructuredLogger
from libpng_src.runner import UNKNOWN_RETURNCODE, SubprocessRunner


class _FakeCompleted:
    def __init__(self, returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_runner_passes_command_args_and_cwd(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    seen: dict[str, object] = {}

    def fake_run(cmd: list[str], **kwargs: object) -> _FakeCompleted:
        seen["cmd"] = cmd
        seen.update(kwargs)
        return _FakeCompleted(0, stdout="-- Configuring done\n")

    monkeypatch.setattr("libpng_src.runner.subprocess.run", fake_run)
    logger = StructuredLogger()

    outcome = SubprocessRunner(logger=logger).run("cmake", ["-DPNG_SHARED=OFF", "/src"], tmp_path)

    assert seen["cmd"] == ["cmake", "-DPNG_SHARED=OFF", "/src"]
    assert seen["cwd"] == str(tmp_path)
    assert seen["capture_output"] is True
    assert outcome.returncode == 0
    assert outcome.args == ("-DPNG_SHARED=OFF", "/src")
    assert logger.records[-1]["extra"] == {"stdout": "-- Configuring done\n"}
    assert "Executed 'cmake -DPNG_SHARED=OFF /src' successfully" in logger.records[-1]["message"]


def test_runner_failure_carries_returncode_and_stderr(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        "libpng_src.runner.subprocess.run",
        lambda *a, **kw: _FakeCompleted(2, stderr="CMake Error: missing compiler"),
    )

    with pytest.raises(SubprocessError) as excinfo:
        SubprocessRunner().run("cmake", ["--build", "."], tmp_path)

    assert "failed with status code 2" in str(excinfo.value)
    assert excinfo.value.context["returncode"] == "2"
    assert excinfo.value.context["stderr"] == "CMake Error: missing compiler"
    assert excinfo.value.code == "E_SUBPROCESS"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required.")
def test_runner_uses_sentinel_for_signal_killed_process(tmp_path: Path) -> None:
    with pytest.raises(SubprocessError) as excinfo:
        SubprocessRunner().run("sh", ["-c", "kill -9 $$"], tmp_path)

    assert excinfo.value.context["returncode"] == str(UNKNOWN_RETURNCODE)
    assert excinfo.value.context["signal"] == "9"
    assert "status code -1" in str(excinfo.value)


def test_runner_reports_exit_status_without_signal(tmp_path: Path) -> None:
    with pytest.raises(SubprocessError) as excinfo:
        SubprocessRunner().run(sys.executable, ["-c", "import sys; sys.exit(3)"], tmp_path)

    assert excinfo.value.context["returncode"] == "3"
    assert "signal" not in excinfo.value.context


def test_runner_reports_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(SubprocessError) as excinfo:
        SubprocessRunner().run("definitely-not-a-cmake-binary", [], tmp_path)

    assert "could not be started" in str(excinfo.value)
    assert excinfo.value.hint is not None


def test_runner_executes_real_process(tmp_path: Path) -> None:
    logger = StructuredLogger()

    outcome = SubprocessRunner(logger=logger).run(
        sys.executable,
        ["-c", "import os; print(os.getcwd())"],
        tmp_path,
    )

    assert Path(outcome.stdout.strip()).resolve() == tmp_path.resolve()
    assert len(logger.records) == 1
