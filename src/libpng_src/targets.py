"""Target allow-lists per host and target family classification."""

from __future__ import annotations

from libpng_src.errors import UnsupportedTargetError
from libpng_src.models import Host, HostArch, HostOs, TargetFamily, TargetTriple

ANDROID_TARGETS: tuple[TargetTriple, ...] = (
    "aarch64-linux-android",
    "armv7-linux-androideabi",
    "x86_64-linux-android",
    "i686-linux-android",
)

APPLE_TARGETS: tuple[TargetTriple, ...] = (
    "aarch64-apple-darwin",
    "x86_64-apple-darwin",
    "aarch64-apple-ios",
    "aarch64-apple-ios-sim",
    "x86_64-apple-ios",
)


def allowed_targets(host_os: HostOs, host_arch: HostArch) -> frozenset[TargetTriple]:
    """Return the triples buildable from the given host; empty for unsupported hosts."""
    if host_os == "macos":
        return frozenset((*APPLE_TARGETS, *ANDROID_TARGETS))
    if (host_os, host_arch) == ("linux", "x86_64"):
        return frozenset(("x86_64-unknown-linux-gnu", *ANDROID_TARGETS))
    if (host_os, host_arch) == ("linux", "aarch64"):
        return frozenset(("aarch64-unknown-linux-gnu",))
    if (host_os, host_arch) == ("windows", "x86_64"):
        return frozenset(("x86_64-pc-windows-msvc", *ANDROID_TARGETS))
    if (host_os, host_arch) == ("windows", "aarch64"):
        return frozenset(("aarch64-pc-windows-msvc",))
    return frozenset()


def target_family(target: TargetTriple) -> TargetFamily:
    if "apple" in target:
        return TargetFamily.APPLE
    if "android" in target:
        return TargetFamily.ANDROID
    if "windows" in target:
        return TargetFamily.WINDOWS
    return TargetFamily.LINUX


def ensure_supported_target(target: TargetTriple, host: Host) -> None:
    if target in allowed_targets(host.os, host.arch):
        return
    raise UnsupportedTargetError(
        f"Unsupported target: {target}, for host OS: {host.os}, arch: {host.arch}",
        hint="Run `libpng-src targets` to list the targets buildable from this host.",
        context={"target": target, "host_os": host.os, "host_arch": host.arch},
    )
