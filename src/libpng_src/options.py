"""CMake option lists for each supported target family."""

from __future__ import annotations

from typing import assert_never

from libpng_src.config import DEFAULT_CONFIG, BuildConfig
from libpng_src.errors import UnsupportedTargetError
from libpng_src.models import Host, TargetFamily, TargetTriple
from libpng_src.targets import target_family

APPLE_ARCHITECTURES = {
    "aarch64": "arm64",
    "x86_64": "x86_64",
}

# x86_64-apple-ios has no device hardware, so it always denotes the simulator.
IOS_SIMULATOR_TARGETS = frozenset({"aarch64-apple-ios-sim", "x86_64-apple-ios"})

ANDROID_ABIS = {
    "armv7-linux-androideabi": "armeabi-v7a",
    "aarch64-linux-android": "arm64-v8a",
    "i686-linux-android": "x86",
    "x86_64-linux-android": "x86_64",
}


def common_options() -> tuple[str, ...]:
    return ("-DPNG_SHARED=OFF", "-DPNG_TESTS=OFF")


def compile_options(
    target: TargetTriple,
    host: Host,
    config: BuildConfig = DEFAULT_CONFIG,
) -> tuple[str, ...]:
    """Return the ordered configure-step options, without the trailing source path."""
    return (*common_options(), *target_options(target, host, config))


def target_options(
    target: TargetTriple,
    host: Host,
    config: BuildConfig = DEFAULT_CONFIG,
) -> tuple[str, ...]:
    family = target_family(target)
    if family is TargetFamily.APPLE:
        return _apple_options(target)
    if family is TargetFamily.ANDROID:
        return _android_options(target, host)
    if family is TargetFamily.WINDOWS:
        return _windows_options(config)
    if family is TargetFamily.LINUX:
        return ()
    assert_never(family)


def _apple_options(target: TargetTriple) -> tuple[str, ...]:
    arch_token = target.split("-", 1)[0]
    arch = APPLE_ARCHITECTURES.get(arch_token)
    if arch is None:
        raise _unknown_arch(target, TargetFamily.APPLE)

    options = [f"-DCMAKE_OSX_ARCHITECTURES={arch}", "-DPNG_FRAMEWORK=OFF"]
    if "-ios" in target:
        options.append("-DCMAKE_SYSTEM_NAME=iOS")
    if target in IOS_SIMULATOR_TARGETS:
        options.append("-DCMAKE_OSX_SYSROOT=iphonesimulator")
    return tuple(options)


def _android_options(target: TargetTriple, host: Host) -> tuple[str, ...]:
    abi = ANDROID_ABIS.get(target)
    if abi is None:
        raise _unknown_arch(target, TargetFamily.ANDROID)

    options = ["-DCMAKE_SYSTEM_NAME=Android", f"-DCMAKE_ANDROID_ARCH_ABI={abi}"]
    if host.is_windows:
        # The NDK toolchain cannot link probe executables from a Windows host.
        options.append("-DCMAKE_TRY_COMPILE_TARGET_TYPE=STATIC_LIBRARY")
    return tuple(options)


def _windows_options(config: BuildConfig) -> tuple[str, ...]:
    zlib_dir = config.resolved_zlib_dir()
    return (
        f"-DZLIB_INCLUDE_DIR={zlib_dir}",
        f"-DZLIB_LIBRARY={zlib_dir / 'zlib.lib'}",
    )


def _unknown_arch(target: TargetTriple, family: TargetFamily) -> UnsupportedTargetError:
    return UnsupportedTargetError(
        f"Unsupported target: {target}, unrecognized architecture for {family} family",
        context={"target": target, "family": family.value},
    )
