"""
Pytest configuration and shared fixtures for ohoskit tests.
"""

import pytest

from ohoskit.core.filesystem import RecordingProbe, VirtualFileSystem
from ohoskit.toolchain.environment import DriverEnvironment

INSTALL_ROOT = "/opt/ohos"
INSTALLED_DIR = f"{INSTALL_ROOT}/llvm/bin"
DRIVER_DIR = f"{INSTALL_ROOT}/llvm/bin"
RESOURCE_DIR = f"{INSTALL_ROOT}/llvm/lib/clang/12.0.1"
BUNDLED_SYSROOT = f"{INSTALLED_DIR}/../../sysroot"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as fast unit tests without disk access"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def environment() -> DriverEnvironment:
    """Driver environment of a toolchain installed under /opt/ohos."""
    return DriverEnvironment(
        installed_dir=INSTALLED_DIR,
        resource_dir=RESOURCE_DIR,
        driver_dir=DRIVER_DIR,
    )


@pytest.fixture
def vfs() -> VirtualFileSystem:
    """Empty virtual filesystem."""
    return VirtualFileSystem()


@pytest.fixture
def recording_vfs(vfs: VirtualFileSystem) -> RecordingProbe:
    """Recording probe over the empty virtual filesystem."""
    return RecordingProbe(vfs)


@pytest.fixture
def ohos_install() -> VirtualFileSystem:
    """
    Virtual OHOS toolchain installation.

    Contains the bundled sysroot with versioned and unversioned aarch64
    library directories, an arm musl multilib layout, compiler-rt under the
    literal target name and libc++ under the multiarch name.
    """
    return VirtualFileSystem(
        [
            "/opt/ohos/sysroot/usr/include/aarch64-linux-ohos",
            "/opt/ohos/sysroot/usr/lib/aarch64-linux-ohos/9.2.1",
            "/opt/ohos/sysroot/usr/lib/aarch64-linux-ohos/9",
            "/opt/ohos/sysroot/usr/lib/arm-linux-ohosmusl/a7_hard_neon-vfpv4",
            f"{RESOURCE_DIR}/include",
            f"{RESOURCE_DIR}/lib/aarch64-linux-ohos9.2.1",
            f"{RESOURCE_DIR}/lib/arm-linux-ohosmusl/a7_hard_neon-vfpv4",
            f"{INSTALL_ROOT}/llvm/lib/aarch64-linux-ohos/c++",
            f"{INSTALL_ROOT}/llvm/include/c++/v1",
        ]
    )
