"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from libpng_src.config import BuildConfig
from libpng_src.errors import SubprocessError
from libpng_src.runner import RunOutcome


@dataclass(slots=True)
class FakeRunner:
    """Records invocations and mimics CMake's outputs on the build step."""

    artifact: str | None = "libpng16.a"
    fail_on: str | None = None
    calls: list[tuple[str, tuple[str, ...], Path]] = field(default_factory=list)

    def run(self, command: str, args: Sequence[str], cwd: Path) -> RunOutcome:
        self.calls.append((command, tuple(args), cwd))
        phase = "build" if "--build" in args else "configure"
        if phase == self.fail_on:
            raise SubprocessError(
                f"Command '{command}' failed with status code 2",
                context={"returncode": "2", "stderr": "CMake Error: boom"},
            )
        if phase == "build":
            (cwd / "pnglibconf.h").write_text("/* generated */\n", encoding="utf-8")
            if self.artifact is not None:
                artifact_path = cwd / self.artifact
                artifact_path.parent.mkdir(parents=True, exist_ok=True)
                artifact_path.write_bytes(b"!<arch>\nlibpng16\n")
        return RunOutcome(command=command, args=tuple(args), returncode=0, stdout="ok\n")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def libpng_source(tmp_path: Path) -> Path:
    source = tmp_path / "libpng-source"
    source.mkdir()
    (source / "png.h").write_text("/* png.h */\n", encoding="utf-8")
    (source / "pngconf.h").write_text("/* pngconf.h */\n", encoding="utf-8")
    return source


@pytest.fixture
def build_config(libpng_source: Path, tmp_path: Path) -> BuildConfig:
    return BuildConfig(source_dir=libpng_source, zlib_dir=tmp_path / "zlib")
