"""Process execution for the native build tool.

``SubprocessRunner`` is the only place that spawns child processes. Build
orchestration depends on the ``ProcessRunner`` protocol so tests can inject a
recording fake instead of invoking CMake.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from libpng_src.errors import SubprocessError
from libpng_src.observability import StructuredLogger

UNKNOWN_RETURNCODE = -1


@dataclass(frozen=True, slots=True)
class RunOutcome:
    command: str
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner(Protocol):
    def run(self, command: str, args: Sequence[str], cwd: Path) -> RunOutcome:
        """Run ``command`` with ``args`` in ``cwd``; raise SubprocessError on failure."""


@dataclass(slots=True)
class SubprocessRunner:
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run(self, command: str, args: Sequence[str], cwd: Path) -> RunOutcome:
        rendered = " ".join([command, *args])
        try:
            result = subprocess.run(
                [command, *args],
                cwd=str(cwd),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise SubprocessError(
                f"Command '{command}' could not be started.",
                hint=f"Install `{command}` and ensure it is available in PATH.",
                context={
                    "command": rendered,
                    "cwd": str(cwd),
                    "returncode": str(UNKNOWN_RETURNCODE),
                    "stderr": str(exc),
                },
            ) from exc

        if result.returncode != 0:
            # Negative codes mean the child was killed by a signal and has no exit status.
            returncode = result.returncode if result.returncode > 0 else UNKNOWN_RETURNCODE
            context = {
                "command": rendered,
                "cwd": str(cwd),
                "returncode": str(returncode),
                "stderr": result.stderr or "",
            }
            if result.returncode < 0:
                context["signal"] = str(-result.returncode)
            raise SubprocessError(
                f"Command '{command}' failed with status code {returncode}",
                hint="Check the native build tool output for details.",
                context=context,
            )

        self.logger.log(
            operation="run",
            target=None,
            phase=command,
            message=f"Executed '{rendered}' successfully",
            extra={"stdout": result.stdout or ""},
        )
        return RunOutcome(
            command=command,
            args=tuple(args),
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
