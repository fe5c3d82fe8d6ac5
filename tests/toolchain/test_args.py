"""
Unit tests for the ordered driver option list.
"""

import pytest

from ohoskit.toolchain.args import Arg, ArgList


@pytest.mark.unit
class TestArgList:
    """Tests for ArgList."""

    def test_joined_option(self):
        """Test that 'name=value' options are split."""
        args = ArgList(["-mcpu=cortex-a7"])

        arg = args.last_arg("-mcpu=")
        assert arg == Arg("-mcpu=", "cortex-a7", "-mcpu=cortex-a7")

    def test_plain_flag(self):
        """Test that flags have an empty value."""
        arg = ArgList(["--coverage"]).last_arg("--coverage")

        assert arg.option == "--coverage"
        assert arg.value == ""

    def test_last_occurrence_wins(self):
        """Test that the last of several options is returned."""
        args = ArgList(["-msoft-float", "-mfloat-abi=hard", "-mhard-float"])

        assert args.last_arg("-msoft-float", "-mfloat-abi=").option == "-mfloat-abi="
        assert args.last_arg("-msoft-float", "-mhard-float").option == "-mhard-float"

    def test_missing_option(self):
        """Test that a missing option returns None or the default."""
        args = ArgList(["-O2"])

        assert args.last_arg("-mcpu=") is None
        assert args.last_value("-mcpu=") is None
        assert args.last_value("-mcpu=", "generic") == "generic"
        assert not args.has_arg("-mcpu=")

    def test_separate_sysroot(self):
        """Test '--sysroot PATH' in separate form."""
        args = ArgList(["--sysroot", "/custom", "-O2"])

        assert args.last_value("--sysroot=") == "/custom"
        assert len(args) == 2

    def test_separate_option_at_end(self):
        """Test a trailing separate-form option without a value."""
        args = ArgList(["--sysroot"])

        assert args.last_arg("--sysroot").value == ""

    def test_value_with_equals(self):
        """Test that only the first '=' splits."""
        args = ArgList(["-fprofile-instr-generate=out=1.profraw"])

        assert args.last_value("-fprofile-instr-generate=") == "out=1.profraw"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ([], True),
            (["-fno-use-init-array"], False),
            (["-fno-use-init-array", "-fuse-init-array"], True),
            (["-fuse-init-array", "-fno-use-init-array"], False),
        ],
    )
    def test_has_flag(self, raw, expected):
        """Test positive/negative flag pairs."""
        args = ArgList(raw)

        assert args.has_flag("-fuse-init-array", "-fno-use-init-array", True) is expected

    def test_raw_and_iteration(self):
        """Test access to the raw tokens and parsed args."""
        args = ArgList(["-a", "-b=c"])

        assert args.raw == ("-a", "-b=c")
        assert [a.as_string() for a in args] == ["-a", "-b=c"]
