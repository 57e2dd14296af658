"""Compile libpng with CMake and assemble the include/lib artifact bundle.

File structure produced by :func:`build_artifact`::

    working_dir/
        build/      transient CMake build directory, removed afterwards
        libpng/     artifact root
            include/    png.h, pngconf.h, pnglibconf.h
            lib/        libpng16.a or libpng16_static.lib
"""

from __future__ import annotations

import shutil
import warnings
from pathlib import Path

from libpng_src.artifacts import derive_link_name, locate
from libpng_src.config import DEFAULT_CONFIG, BuildConfig
from libpng_src.errors import FilesystemError
from libpng_src.models import Artifacts, Host, TargetTriple, current_host
from libpng_src.observability import CleanupWarning, StructuredLogger
from libpng_src.options import compile_options
from libpng_src.runner import ProcessRunner, SubprocessRunner
from libpng_src.targets import ensure_supported_target

STATIC_HEADERS = ("png.h", "pngconf.h")
GENERATED_HEADER = "pnglibconf.h"


def compile_lib(
    target: TargetTriple,
    working_dir: str | Path,
    *,
    host: Host | None = None,
    runner: ProcessRunner | None = None,
    config: BuildConfig = DEFAULT_CONFIG,
    logger: StructuredLogger | None = None,
) -> Path:
    """Statically compile libpng for ``target`` and return the library path.

    ``working_dir`` is created if missing and its previous content removed.
    Use this when the include headers are not needed.
    """
    host = host or current_host()
    logger = logger if logger is not None else StructuredLogger()
    runner = runner if runner is not None else SubprocessRunner(logger=logger)
    build_dir = Path(working_dir)

    ensure_supported_target(target, host)
    args = [*compile_options(target, host, config), str(config.resolved_source_dir())]

    _recreate_dir(build_dir)

    logger.log(operation="compile", target=target, phase="configure", message="Configuring libpng")
    runner.run(config.cmake, args, build_dir)
    logger.log(operation="compile", target=target, phase="build", message="Building libpng")
    runner.run(config.cmake, ["--build", ".", "--config", config.build_config], build_dir)

    library_path = locate(build_dir, host.os)
    logger.log(
        operation="compile",
        target=target,
        phase="locate",
        message="Located static library",
        extra={"path": str(library_path)},
    )
    return library_path


def build_artifact(
    target: TargetTriple,
    working_dir: str | Path,
    *,
    host: Host | None = None,
    runner: ProcessRunner | None = None,
    config: BuildConfig = DEFAULT_CONFIG,
    logger: StructuredLogger | None = None,
) -> Artifacts:
    """Build libpng and aggregate the library and its headers in one directory.

    Previous content of the ``build/`` and ``libpng/`` subdirectories of
    ``working_dir`` is removed.
    """
    logger = logger if logger is not None else StructuredLogger()
    working_dir = Path(working_dir)
    build_dir = working_dir / "build"

    library_path = compile_lib(
        target,
        build_dir,
        host=host,
        runner=runner,
        config=config,
        logger=logger,
    )
    library_filename = library_path.name

    root_dir = working_dir / "libpng"
    _recreate_dir(root_dir)

    include_dir = root_dir / "include"
    _make_dir(include_dir)
    source_dir = config.resolved_source_dir()
    for header in STATIC_HEADERS:
        _copy(source_dir / header, include_dir / header)
    _copy(build_dir / GENERATED_HEADER, include_dir / GENERATED_HEADER)

    lib_dir = root_dir / "lib"
    _make_dir(lib_dir)
    _copy(library_path, lib_dir / library_filename)

    link_name = derive_link_name(library_filename, target)
    logger.log(
        operation="assemble",
        target=target,
        phase="stage",
        message="Staged headers and library",
        extra={"root_dir": str(root_dir), "link_name": link_name},
    )

    _remove_build_dir(build_dir, target=target, logger=logger)

    return Artifacts(
        root_dir=root_dir,
        include_dir=include_dir,
        lib_dir=lib_dir,
        link_name=link_name,
    )


def _remove_build_dir(build_dir: Path, *, target: TargetTriple, logger: StructuredLogger) -> None:
    try:
        shutil.rmtree(build_dir)
    except OSError as exc:
        message = f"Cannot clean build directory {build_dir}: {exc}"
        logger.log(
            operation="assemble",
            target=target,
            phase="cleanup_warning",
            message=message,
            level="warning",
            extra={"path": str(build_dir)},
        )
        warnings.warn(message, CleanupWarning, stacklevel=3)


def _recreate_dir(path: Path) -> None:
    try:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True)
    except OSError as exc:
        raise FilesystemError(
            "Unable to recreate directory.",
            context={"operation": "recreate_dir", "path": str(path), "error": str(exc)},
        ) from exc


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            "Unable to create directory.",
            context={"operation": "make_dir", "path": str(path), "error": str(exc)},
        ) from exc


def _copy(source: Path, destination: Path) -> None:
    try:
        shutil.copy2(source, destination)
    except OSError as exc:
        raise FilesystemError(
            "Unable to copy file into artifact bundle.",
            context={
                "operation": "copy",
                "source": str(source),
                "destination": str(destination),
                "error": str(exc),
            },
        ) from exc
