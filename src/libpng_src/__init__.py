"""Build helper compiling libpng into a static C library.

Meant to be used from build scripts of packages that link against libpng or
generate FFI bindings for it. Provides no libpng functionality itself.
"""

from .artifacts import derive_link_name, locate
from .build import build_artifact, compile_lib
from .config import LIBPNG_VERSION, BuildConfig, source_path
from .errors import (
    ArtifactNotFoundError,
    ErrorCode,
    FilesystemError,
    LibpngSrcError,
    SubprocessError,
    UnsupportedTargetError,
)
from .models import Artifacts, BundleManifest, Host, TargetFamily, current_host
from .observability import CleanupWarning, StructuredLogger
from .options import compile_options
from .runner import ProcessRunner, RunOutcome, SubprocessRunner
from .targets import allowed_targets, target_family

__all__ = [
    "LIBPNG_VERSION",
    "ArtifactNotFoundError",
    "Artifacts",
    "BuildConfig",
    "BundleManifest",
    "CleanupWarning",
    "ErrorCode",
    "FilesystemError",
    "Host",
    "LibpngSrcError",
    "ProcessRunner",
    "RunOutcome",
    "StructuredLogger",
    "SubprocessError",
    "SubprocessRunner",
    "TargetFamily",
    "UnsupportedTargetError",
    "allowed_targets",
    "build_artifact",
    "compile_lib",
    "compile_options",
    "current_host",
    "derive_link_name",
    "locate",
    "source_path",
    "target_family",
]
