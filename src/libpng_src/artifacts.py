"""Locate the compiled static library and derive its linker name."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from libpng_src.errors import ArtifactNotFoundError
from libpng_src.models import HostOs, TargetFamily, TargetTriple
from libpng_src.targets import target_family

WINDOWS_ARTIFACT = PurePosixPath("Release", "libpng16_static.lib")
UNIX_ARTIFACT = PurePosixPath("libpng16.a")


def artifact_relative_path(host_os: HostOs) -> PurePosixPath:
    if host_os == "windows":
        return WINDOWS_ARTIFACT
    return UNIX_ARTIFACT


def locate(working_dir: Path, host_os: HostOs) -> Path:
    artifact_path = working_dir.joinpath(*artifact_relative_path(host_os).parts)
    if not artifact_path.is_file():
        raise ArtifactNotFoundError(
            f"Artifact not found at path: {artifact_path}",
            hint="The build step succeeded but produced no library where one was expected.",
            context={"path": str(artifact_path), "host_os": host_os},
        )
    return artifact_path


def derive_link_name(file_name: str, target: TargetTriple) -> str:
    """Return the library name as passed to the linker.

    MSVC links by full stem, so Windows targets keep the ``lib`` prefix.
    """
    stem = file_name.split(".", 1)[0]
    if target_family(target) is TargetFamily.WINDOWS:
        return stem
    return stem.removeprefix("lib")
