"""Core typed dataclasses for hosts, target families, and build results."""

from __future__ import annotations

import hashlib
import json
import platform
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

import cbor2

from libpng_src.config import LIBPNG_VERSION

HostOs = str
HostArch = str
TargetTriple = str

_OS_ALIASES = {
    "darwin": "macos",
    "macos": "macos",
    "linux": "linux",
    "windows": "windows",
}

_ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


class TargetFamily(StrEnum):
    """Platform family a target triple belongs to."""

    APPLE = "apple"
    ANDROID = "android"
    WINDOWS = "windows"
    LINUX = "linux"


@dataclass(frozen=True, slots=True)
class Host:
    """Operating system and CPU architecture of the machine running the build."""

    os: HostOs
    arch: HostArch

    @classmethod
    def normalize(cls, system: str, machine: str) -> Host:
        system_key = system.strip().lower()
        machine_key = machine.strip().lower()
        return cls(
            os=_OS_ALIASES.get(system_key, system_key),
            arch=_ARCH_ALIASES.get(machine_key, machine_key),
        )

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"


def current_host() -> Host:
    """Detect the host from the running interpreter's platform module."""
    return Host.normalize(platform.system(), platform.machine())


@dataclass(frozen=True, slots=True)
class BundleManifest:
    """Content digests of an assembled bundle, keyed by bundle-relative path."""

    link_name: str
    libpng_version: str
    files: dict[str, str] = field(default_factory=dict)
    schema_version: int = 1

    def to_json(self, path: str | Path | None = None) -> str:
        payload = self._payload()
        encoded = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        payload = self._payload()
        encoded = cbor2.dumps(payload, canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "libpng_version": self.libpng_version,
            "link_name": self.link_name,
            "files": dict(sorted(self.files.items())),
        }


@dataclass(frozen=True, slots=True)
class Artifacts:
    """Result of a complete build.

    ``root_dir`` holds ``include/`` (C headers for binding generation) and
    ``lib/`` (the static library, to be added to the link search path).
    ``link_name`` is the library name as the target's linker expects it.
    """

    root_dir: Path
    include_dir: Path
    lib_dir: Path
    link_name: str

    def manifest(self) -> BundleManifest:
        files: dict[str, str] = {}
        for path in sorted(self.root_dir.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(self.root_dir).as_posix()
            files[relative] = hashlib.sha256(path.read_bytes()).hexdigest()
        return BundleManifest(
            link_name=self.link_name,
            libpng_version=LIBPNG_VERSION,
            files=files,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "root_dir": str(self.root_dir),
            "include_dir": str(self.include_dir),
            "lib_dir": str(self.lib_dir),
            "link_name": self.link_name,
        }
