"""
Tests for OHOS target resolution end to end, against virtual filesystems.
"""

from dataclasses import FrozenInstanceError

import pytest

from ohoskit.core.exceptions import TripleError
from ohoskit.core.filesystem import RecordingProbe, VirtualFileSystem
from ohoskit.core.interfaces import TargetResolver
from ohoskit.toolchain.environment import DriverEnvironment
from ohoskit.toolchain.flags import FloatABI
from ohoskit.toolchain.multilib import MultilibSet
from ohoskit.toolchain.ohos import OHOSToolchain, resolve_target
from ohoskit.toolchain.runtime import ArtifactKind
from ohoskit.toolchain.sanitizers import SanitizerKind

SYSROOT = "/opt/ohos/llvm/bin/../../sysroot"
RESOURCE_DIR = "/opt/ohos/llvm/lib/clang/12.0.1"
A7_HARD = ["-mcpu=cortex-a7", "-mfloat-abi=hard", "-mfpu=neon-vfpv4"]


class TestConstruction:
    """Tests for constructing a resolver."""

    def test_is_target_resolver(self, environment, vfs):
        """Test that the toolchain implements the resolver interface."""
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs)

        assert isinstance(toolchain, TargetResolver)

    def test_invalid_triple(self, environment, vfs):
        """Test that an unparseable triple raises TripleError."""
        with pytest.raises(TripleError):
            OHOSToolchain("aarch64", [], environment, vfs)

    def test_defaults(self, vfs):
        """Test construction with only a target and a probe."""
        config = OHOSToolchain("aarch64-linux-ohos", probe=vfs).resolve()

        assert config.sysroot == ""
        assert config.multilib.is_default
        assert config.environment == DriverEnvironment()

    def test_empty_filesystem_is_kept(self, monkeypatch, vfs):
        """Test that an empty virtual filesystem is used, not the host."""
        monkeypatch.setattr("ohoskit.toolchain.ohos.host_probe", lambda path: True)

        toolchain = OHOSToolchain("aarch64-linux-ohos", [], probe=vfs)

        assert toolchain.probe is vfs
        assert toolchain.include_dirs() == ()
        assert toolchain.library_search_paths() == ()

    def test_empty_catalog_is_kept(self, environment, vfs):
        """Test that an empty multilib catalog is used as given."""
        toolchain = OHOSToolchain(
            "arm-linux-ohosmusl",
            ["-mcpu=cortex-a7"],
            environment,
            vfs,
            multilibs=MultilibSet([]),
        )

        assert len(toolchain.multilibs) == 0
        assert toolchain.select_multilib().is_default


class TestMultilibSelection:
    """Tests for multilib selection through the resolver."""

    def test_default(self, environment, vfs):
        """Test that plain options select the default variant."""
        toolchain = OHOSToolchain("arm-linux-ohosmusl", [], environment, vfs)

        assert toolchain.select_multilib().is_default
        assert toolchain.resolve().multilib_suffix == ""

    @pytest.mark.parametrize(
        "raw,name",
        [
            (["-mcpu=cortex-a7"], "a7_soft"),
            (["-mcpu=cortex-a7", "-mfloat-abi=softfp", "-mfpu=neon-vfpv4"], "a7_softfp_neon-vfpv4"),
            (A7_HARD, "a7_hard_neon-vfpv4"),
            (["-mcpu=cortex-a7", "-mfloat-abi=hard"], ""),
        ],
    )
    def test_variants(self, environment, vfs, raw, name):
        """Test variant selection from raw options."""
        toolchain = OHOSToolchain("arm-linux-ohosmusl", raw, environment, vfs)

        assert toolchain.select_multilib().name == name

    def test_empty_float_abi_selects_default(self, environment, vfs):
        """Test that an empty -mfloat-abi= matches no float ABI variant."""
        config = resolve_target(
            "arm-linux-ohosmusl", ["-mcpu=cortex-a7", "-mfloat-abi="], environment, vfs
        )

        assert config.float_abi is FloatABI.INVALID
        assert config.multilib.is_default
        assert config.diagnostics == ()
        assert config.dynamic_linker == "/lib/ld-musl-arm.so.1"

    def test_selection_independent_of_filesystem(self, environment, ohos_install, vfs):
        """Test that the probe does not influence selection."""
        with_files = OHOSToolchain("arm-linux-ohosmusl", A7_HARD, environment, ohos_install)
        without = OHOSToolchain("arm-linux-ohosmusl", A7_HARD, environment, vfs)

        assert with_files.select_multilib() == without.select_multilib()


class TestSearchPaths:
    """Tests for sysroot, library and include resolution."""

    def test_bundled_sysroot(self, environment, ohos_install):
        """Test that the sysroot next to the installation is used."""
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], environment, ohos_install)

        assert toolchain.compute_sysroot() == SYSROOT

    def test_sysroot_option_overrides(self, environment, ohos_install):
        """Test that --sysroot on the option list wins."""
        toolchain = OHOSToolchain(
            "aarch64-linux-ohos", ["--sysroot=/custom"], environment, ohos_install
        )

        assert toolchain.compute_sysroot() == "/custom"

    def test_environment_override(self, ohos_install):
        """Test the driver's sysroot override."""
        env = DriverEnvironment(sysroot_override="/forced", installed_dir="/opt/ohos/llvm/bin")
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], env, ohos_install)

        assert toolchain.compute_sysroot() == "/forced"

    def test_versioned_library_dirs(self, environment, ohos_install):
        """Test that existing versioned directories come before the unversioned one."""
        toolchain = OHOSToolchain("aarch64-linux-ohos9.2.1", [], environment, ohos_install)
        lib = f"{SYSROOT}/usr/lib/aarch64-linux-ohos"

        assert toolchain.library_search_paths() == (f"{lib}/9.2.1", f"{lib}/9", lib)

    def test_only_unversioned_library_dir(self, environment):
        """Test a sysroot holding only the unversioned directory."""
        vfs = VirtualFileSystem(["/opt/ohos/sysroot/usr/lib/aarch64-linux-ohos"])
        toolchain = OHOSToolchain("aarch64-linux-ohos9.2.1", [], environment, vfs)

        assert toolchain.library_search_paths() == (
            f"{SYSROOT}/usr/lib/aarch64-linux-ohos",
        )

    def test_multilib_library_dir(self, environment, ohos_install):
        """Test that the multilib suffix is used for library directories."""
        toolchain = OHOSToolchain("arm-linux-ohosmusl", A7_HARD, environment, ohos_install)

        assert toolchain.library_search_paths() == (
            f"{SYSROOT}/usr/lib/arm-linux-ohosmusl/a7_hard_neon-vfpv4",
        )

    def test_no_sysroot(self, environment, vfs):
        """Test that a missing sysroot just shortens the lists."""
        config = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs).resolve()

        assert config.sysroot == ""
        assert config.library_dirs == ()
        assert config.include_dirs == ()

    def test_include_dirs(self, environment, ohos_install):
        """Test builtin and sysroot include directories in order."""
        config = OHOSToolchain("aarch64-linux-ohos", [], environment, ohos_install).resolve()

        assert config.include_dirs == (
            f"{RESOURCE_DIR}/include",
            f"{SYSROOT}/usr/include/aarch64-linux-ohos",
            f"{SYSROOT}/usr/include",
        )

    def test_nostdinc(self, environment, ohos_install):
        """Test that -nostdinc drops every include directory."""
        config = OHOSToolchain(
            "aarch64-linux-ohos", ["-nostdinc"], environment, ohos_install
        ).resolve()

        assert config.include_dirs == ()

    def test_nostdlibinc(self, environment, ohos_install):
        """Test that -nostdlibinc keeps only the builtin headers."""
        config = OHOSToolchain(
            "aarch64-linux-ohos", ["-nostdlibinc"], environment, ohos_install
        ).resolve()

        assert config.include_dirs == (f"{RESOURCE_DIR}/include",)
        assert config.cxx_include_dirs == ()

    def test_nobuiltininc(self, environment, ohos_install):
        """Test that -nobuiltininc drops the resource headers."""
        config = OHOSToolchain(
            "aarch64-linux-ohos", ["-nobuiltininc"], environment, ohos_install
        ).resolve()

        assert f"{RESOURCE_DIR}/include" not in config.include_dirs
        assert config.include_dirs[0] == f"{SYSROOT}/usr/include/aarch64-linux-ohos"

    def test_cxx_include_dirs(self, environment, ohos_install):
        """Test the libc++ header directory."""
        config = OHOSToolchain("aarch64-linux-ohos", [], environment, ohos_install).resolve()

        assert config.cxx_include_dirs == ("/opt/ohos/llvm/bin/../include/c++/v1",)

    def test_nostdincxx(self, environment, ohos_install):
        """Test that -nostdinc++ drops the libc++ headers."""
        config = OHOSToolchain(
            "aarch64-linux-ohos", ["-nostdinc++"], environment, ohos_install
        ).resolve()

        assert config.cxx_include_dirs == ()


class TestRuntimePaths:
    """Tests for runtime and C++ standard library directories."""

    def test_runtime_under_literal_target(self, environment, ohos_install):
        """Test the first tier: the target as given."""
        toolchain = OHOSToolchain("aarch64-linux-ohos9.2.1", [], environment, ohos_install)

        assert toolchain.runtime_path() == f"{RESOURCE_DIR}/lib/aarch64-linux-ohos9.2.1"

    def test_runtime_under_normalized_triple(self, environment):
        """Test the second tier: the normalized triple."""
        vfs = VirtualFileSystem([f"{RESOURCE_DIR}/lib/aarch64-unknown-linux-ohos"])
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs)

        assert toolchain.runtime_path() == f"{RESOURCE_DIR}/lib/aarch64-unknown-linux-ohos"

    def test_runtime_under_multiarch_triple(self, environment):
        """Test the third tier: the multiarch triple."""
        vfs = VirtualFileSystem([f"{RESOURCE_DIR}/lib/arm-linux-ohosmusl"])
        toolchain = OHOSToolchain("armv7a-linux-ohosmusl", [], environment, vfs)

        assert toolchain.runtime_path() == f"{RESOURCE_DIR}/lib/arm-linux-ohosmusl"

    def test_runtime_tiers_short_circuit(self, environment):
        """Test that later tiers are not probed after a hit."""
        probe = RecordingProbe(
            VirtualFileSystem(
                [
                    f"{RESOURCE_DIR}/lib/aarch64-linux-ohos9",
                    f"{RESOURCE_DIR}/lib/aarch64-unknown-linux-ohos9",
                ]
            )
        )
        OHOSToolchain("aarch64-linux-ohos9", [], environment, probe)

        assert f"{RESOURCE_DIR}/lib/aarch64-linux-ohos9" in probe.queries
        assert f"{RESOURCE_DIR}/lib/aarch64-unknown-linux-ohos9" not in probe.queries

    def test_runtime_with_multilib(self, environment, ohos_install):
        """Test that the multilib suffix is part of the runtime directory."""
        toolchain = OHOSToolchain("arm-linux-ohosmusl", A7_HARD, environment, ohos_install)

        assert toolchain.runtime_path() == (
            f"{RESOURCE_DIR}/lib/arm-linux-ohosmusl/a7_hard_neon-vfpv4"
        )
        assert toolchain.resolve().library_paths == (toolchain.runtime_path(),)

    def test_runtime_absent(self, environment, vfs):
        """Test that a missing runtime is None, not an error."""
        config = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs).resolve()

        assert config.runtime_dir is None
        assert config.library_paths == ()
        assert config.diagnostics == ()

    def test_cxx_stdlib_under_multiarch(self, environment, ohos_install):
        """Test the libc++ directory found through the multiarch tier."""
        toolchain = OHOSToolchain("aarch64-linux-ohos9.2.1", [], environment, ohos_install)

        assert toolchain.cxx_stdlib_path() == (
            "/opt/ohos/llvm/bin/../lib/aarch64-linux-ohos/c++"
        )

    def test_cxx_stdlib_absent(self, environment, vfs):
        """Test that a missing libc++ directory is None."""
        assert OHOSToolchain("aarch64-linux-ohos", [], environment, vfs).cxx_stdlib_path() is None

    def test_file_paths_in_c_mode(self, environment, ohos_install):
        """Test that the C driver does not search the libc++ directory."""
        config = OHOSToolchain("aarch64-linux-ohos9.2.1", [], environment, ohos_install).resolve()

        assert config.file_paths == config.library_dirs

    def test_file_paths_in_cxx_mode(self, ohos_install):
        """Test that the C++ driver searches libc++ first."""
        env = DriverEnvironment(
            installed_dir="/opt/ohos/llvm/bin",
            resource_dir=RESOURCE_DIR,
            driver_dir="/opt/ohos/llvm/bin",
            cxx_mode=True,
        )
        config = OHOSToolchain("aarch64-linux-ohos9.2.1", [], env, ohos_install).resolve()

        assert config.file_paths[0] == "/opt/ohos/llvm/bin/../lib/aarch64-linux-ohos/c++"
        assert config.file_paths[1:] == config.library_dirs

    def test_file_paths_arch_specific_dir(self, environment):
        """Test that the per-architecture runtime directory precedes the sysroot."""
        vfs = VirtualFileSystem(
            [
                f"{RESOURCE_DIR}/lib/linux/aarch64",
                "/opt/ohos/sysroot/usr/lib/aarch64-linux-ohos",
            ]
        )
        config = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs).resolve()

        assert config.file_paths == (
            f"{RESOURCE_DIR}/lib/linux/aarch64",
            f"{SYSROOT}/usr/lib/aarch64-linux-ohos",
        )


class TestLinkerAndArtifacts:
    """Tests for loader, artifacts and link policy through the resolver."""

    def test_dynamic_linker_bionic(self, environment, vfs):
        """Test the bionic 64-bit loader."""
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs)

        assert toolchain.dynamic_linker() == "/system/bin/linker64"

    def test_dynamic_linker_musl_hard_float(self, environment, vfs):
        """Test that the hard-float ABI from the options reaches the loader name."""
        toolchain = OHOSToolchain("arm-linux-ohosmusl", A7_HARD, environment, vfs)

        assert toolchain.float_abi is FloatABI.HARD
        assert toolchain.dynamic_linker() == "/lib/ld-musl-armhf.so.1"

    def test_dynamic_linker_musl_x86_64(self, environment, vfs):
        """Test the x86_64 musl loader."""
        config = resolve_target("x86_64-linux-ohosmusl", [], environment, vfs)

        assert config.dynamic_linker == "/lib/ld-musl-x86_64.so.1"

    def test_compiler_rt(self, environment, vfs):
        """Test compiler-rt artifacts rooted at the literal target."""
        toolchain = OHOSToolchain("aarch64-linux-ohos9", [], environment, vfs)
        base = f"{RESOURCE_DIR}/lib/aarch64-linux-ohos9"

        assert toolchain.compiler_rt("builtins", ArtifactKind.STATIC) == (
            f"{base}/libclang_rt.builtins.a"
        )
        assert toolchain.compiler_rt("builtins", ArtifactKind.OBJECT) == (
            f"{base}/clang_rt.builtins.o"
        )
        assert toolchain.compiler_rt("asan", "shared") == f"{base}/libclang_rt.asan.so"

    def test_compiler_rt_with_multilib(self, environment, vfs):
        """Test that artifacts live in the multilib directory."""
        config = resolve_target("arm-linux-ohosmusl", ["-mcpu=cortex-a7"], environment, vfs)

        assert config.compiler_rt("builtins") == (
            f"{RESOURCE_DIR}/lib/arm-linux-ohosmusl/a7_soft/libclang_rt.builtins.a"
        )

    def test_linker_flags(self, environment, vfs):
        """Test that the fixed flags are always present."""
        config = resolve_target("aarch64-linux-ohos", ["-O2"], environment, vfs)

        assert config.linker_flags[:2] == ("-z", "now")
        assert config.linker_flags[-1] == "--enable-new-dtags"
        assert "--build-id" not in config.linker_flags

    def test_build_id_switch(self, vfs):
        """Test the external build-id capability switch."""
        env = DriverEnvironment(enable_linker_build_id=True)
        config = resolve_target("aarch64-linux-ohos", [], env, vfs)

        assert "--build-id" in config.linker_flags

    def test_profile_link_args(self, environment, vfs):
        """Test the profiling runtime directive and archive."""
        config = resolve_target(
            "aarch64-linux-ohos", ["-fprofile-instr-generate"], environment, vfs
        )

        assert config.profile_link_args == (
            "-u__llvm_profile_runtime",
            f"{RESOURCE_DIR}/lib/aarch64-linux-ohos/libclang_rt.profile.a",
        )

    def test_sanitizers(self, environment, vfs):
        """Test that the supported sanitizer mask is part of the result."""
        config = resolve_target("aarch64-linux-ohos", [], environment, vfs)

        assert SanitizerKind.ADDRESS in config.sanitizers
        assert SanitizerKind.SCUDO in config.sanitizers
        assert SanitizerKind.THREAD not in config.sanitizers

    def test_cxx_stdlib_link_args(self, environment, vfs):
        """Test the libc++ link arguments."""
        config = resolve_target("aarch64-linux-ohos", [], environment, vfs)

        assert config.cxx_stdlib == "libc++"
        assert config.runtime_lib == "compiler-rt"
        assert config.cxx_stdlib_link_args == ("-lc++", "-lc++abi", "-lunwind")
        assert config.target_cc1_args == ("-fuse-init-array",)


class TestDiagnostics:
    """Tests for non-fatal diagnostics."""

    def test_diagnostics_collected(self, environment, vfs):
        """Test that every problem is reported and resolution completes."""
        config = resolve_target(
            "arm-linux-ohosmusl",
            ["-mfloat-abi=bogus", "--rtlib=libgcc", "--stdlib=libstdc++"],
            environment,
            vfs,
        )

        assert [d.code for d in config.diagnostics] == [
            "invalid-mfloat-abi",
            "invalid-rtlib-name",
            "invalid-stdlib-name",
        ]
        assert config.has_errors()
        assert config.float_abi is FloatABI.SOFT
        assert config.dynamic_linker == "/lib/ld-musl-arm.so.1"

    def test_clean_resolution(self, environment, vfs):
        """Test that valid options produce no diagnostics."""
        config = resolve_target("arm-linux-ohosmusl", A7_HARD, environment, vfs)

        assert config.diagnostics == ()
        assert not config.has_errors()


class TestResolvedConfiguration:
    """Tests for the resolved configuration object."""

    def test_idempotent(self, environment, ohos_install):
        """Test that identical inputs give identical configurations."""
        first = resolve_target("arm-linux-ohosmusl", A7_HARD, environment, ohos_install)
        second = resolve_target("arm-linux-ohosmusl", A7_HARD, environment, ohos_install)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_resolve_returns_same_object(self, environment, vfs):
        """Test that resolve() does not recompute."""
        toolchain = OHOSToolchain("aarch64-linux-ohos", [], environment, vfs)

        assert toolchain.resolve() is toolchain.resolve()

    def test_immutable(self, environment, vfs):
        """Test that the configuration cannot be modified."""
        config = resolve_target("aarch64-linux-ohos", [], environment, vfs)

        with pytest.raises(FrozenInstanceError):
            config.sysroot = "/other"

    def test_to_dict(self, environment, ohos_install):
        """Test the plain-data rendering."""
        data = resolve_target(
            "arm-linux-ohosmusl", A7_HARD, environment, ohos_install
        ).to_dict()

        assert data["multilib"] == "a7_hard_neon-vfpv4"
        assert data["multilib_suffix"] == "/a7_hard_neon-vfpv4"
        assert data["multiarch_triple"] == "arm-linux-ohosmusl"
        assert data["libc"] == "musl"
        assert data["float_abi"] == "hard"
        assert data["dynamic_linker"] == "/lib/ld-musl-armhf.so.1"
        assert "address" in data["sanitizers"]
        assert data["diagnostics"] == []
        assert isinstance(data["library_dirs"], list)
