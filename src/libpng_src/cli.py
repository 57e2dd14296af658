"""Command line entrypoint for building libpng artifacts.

Usage:
    libpng-src targets
    libpng-src compile --target x86_64-unknown-linux-gnu --out build/ --log build.jsonl
    libpng-src build --target aarch64-linux-android --out out/ --manifest out/manifest.cbor
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from libpng_src.build import build_artifact, compile_lib
from libpng_src.config import LIBPNG_VERSION
from libpng_src.errors import LibpngSrcError
from libpng_src.models import current_host
from libpng_src.observability import StructuredLogger
from libpng_src.targets import allowed_targets

__version__ = "0.2.0"

LOG_HELP = "Write build step records, including native tool output, as JSON lines"


def cmd_targets(args: argparse.Namespace) -> None:
    host = current_host()
    for target in sorted(allowed_targets(host.os, host.arch)):
        print(target)


def cmd_compile(args: argparse.Namespace) -> None:
    logger = StructuredLogger()
    try:
        library_path = compile_lib(args.target, args.out, logger=logger)
    finally:
        _write_log(logger, args.log)
    print(library_path)


def cmd_build(args: argparse.Namespace) -> None:
    logger = StructuredLogger()
    try:
        artifacts = build_artifact(args.target, args.out, logger=logger)
    finally:
        _write_log(logger, args.log)
    if args.manifest is not None:
        manifest = artifacts.manifest()
        if args.manifest.suffix == ".cbor":
            manifest.to_cbor(args.manifest)
        else:
            manifest.to_json(args.manifest)
    print(json.dumps(artifacts.to_dict(), indent=2, sort_keys=True))


def _write_log(logger: StructuredLogger, path: Path | None) -> None:
    if path is not None:
        logger.to_json_lines(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libpng-src",
        description="Compile libpng into a static library for FFI consumers",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} (libpng {LIBPNG_VERSION})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("targets", help="List targets buildable from this host")

    compile_p = sub.add_parser("compile", help="Compile the static library only")
    compile_p.add_argument("--target", required=True, help="Target triple")
    compile_p.add_argument("--out", required=True, type=Path, help="Working directory")
    compile_p.add_argument("--log", type=Path, default=None, help=LOG_HELP)

    build_p = sub.add_parser("build", help="Compile and assemble include/ and lib/")
    build_p.add_argument("--target", required=True, help="Target triple")
    build_p.add_argument("--out", required=True, type=Path, help="Working directory")
    build_p.add_argument("--log", type=Path, default=None, help=LOG_HELP)
    build_p.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Write a bundle digest manifest (.cbor for CBOR, JSON otherwise)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    handlers = {
        "targets": cmd_targets,
        "compile": cmd_compile,
        "build": cmd_build,
    }
    try:
        handlers[args.command](args)
    except LibpngSrcError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
