"""Build configuration and vendored source locations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

LIBPNG_VERSION = "1.6.43"

PACKAGE_DIR = Path(__file__).resolve().parent


def source_path() -> Path:
    """Return the vendored libpng source directory without any modifications.

    Use it to generate bindings if needed. The directory does not contain
    ``pnglibconf.h``, which is generated at build time.

    The libpng sources are not part of this distribution: they must be placed
    here before building, or supplied through ``BuildConfig.source_dir``.
    Otherwise the CMake configure step fails.
    """
    return PACKAGE_DIR / "libpng"


def windows_zlib_include_path() -> Path:
    """Return the vendored zlib headers and import library used by MSVC builds.

    Like :func:`source_path`, the directory must be supplied before building for
    Windows targets, here or through ``BuildConfig.zlib_dir``.
    """
    return PACKAGE_DIR / "win-zlib-include"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    cmake: str = "cmake"
    build_config: str = "Release"
    source_dir: Path | None = None
    zlib_dir: Path | None = None

    def resolved_source_dir(self) -> Path:
        return (self.source_dir or source_path()).resolve()

    def resolved_zlib_dir(self) -> Path:
        return (self.zlib_dir or windows_zlib_include_path()).resolve()


DEFAULT_CONFIG = BuildConfig()
