"""
Shared utilities for CLI commands.

Provides the pieces every command needs: turning parsed arguments into a
driver environment and a filesystem probe, and printing results.
"""

import json
import logging
from dataclasses import asdict
from typing import Any, Dict

import yaml

from ohoskit.core.filesystem import Probe, RecordingProbe, VirtualFileSystem, host_probe
from ohoskit.core.exceptions import ConfigurationError
from ohoskit.toolchain.environment import DriverEnvironment

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json", "yaml")


# ============================================================================
# Driver Environment
# ============================================================================


def build_environment(args) -> DriverEnvironment:
    """
    Build the driver environment from parsed arguments.

    Values from --env-file are loaded first; explicit command-line options
    override them.

    Args:
        args: Parsed arguments namespace

    Returns:
        DriverEnvironment
    """
    values: Dict[str, Any] = {}

    env_file = getattr(args, "env_file", None)
    if env_file:
        base = DriverEnvironment.from_yaml(env_file)
        values.update(asdict(base))

    overrides = {
        "sysroot_override": getattr(args, "sysroot", None),
        "installed_dir": getattr(args, "installed_dir", None),
        "resource_dir": getattr(args, "resource_dir", None),
        "driver_dir": getattr(args, "driver_dir", None),
        "c_include_dirs": getattr(args, "c_include_dir", None),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    if getattr(args, "cxx", False):
        values["cxx_mode"] = True
    if getattr(args, "build_id", False):
        values["enable_linker_build_id"] = True

    return DriverEnvironment.from_mapping(values)


def build_probe(args) -> Probe:
    """
    Build the filesystem probe for a command.

    Args:
        args: Parsed arguments; --vfs selects a YAML listing instead of
            the host filesystem, --trace-probes wraps the probe in a recorder

    Returns:
        Probe callable
    """
    vfs = getattr(args, "vfs", None)
    probe: Probe = VirtualFileSystem.from_yaml(vfs) if vfs else host_probe

    if getattr(args, "trace_probes", False):
        return RecordingProbe(probe)
    return probe


def strip_separator(driver_args) -> list:
    """Drop a leading '--' left over from argument parsing."""
    driver_args = list(driver_args or [])
    if driver_args and driver_args[0] == "--":
        driver_args = driver_args[1:]
    return driver_args


# ============================================================================
# Output
# ============================================================================


def format_data(data: Dict[str, Any], output_format: str) -> str:
    """
    Render a mapping in the requested output format.

    Args:
        data: Plain data (str, list, dict, None values)
        output_format: One of 'text', 'json', 'yaml'

    Returns:
        Rendered text

    Raises:
        ConfigurationError: If the format is unknown
    """
    if output_format == "json":
        return json.dumps(data, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip()
    if output_format == "text":
        return _format_text(data)
    raise ConfigurationError(
        f"Unknown output format: {output_format} (expected one of {OUTPUT_FORMATS})"
    )


def _format_text(data: Dict[str, Any]) -> str:
    lines = []
    width = max((len(key) for key in data), default=0)
    for key, value in data.items():
        if isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{key:<{width}} : (none)")
                continue
            lines.append(f"{key:<{width}} :")
            for item in value:
                lines.append(f"{'':<{width}}   {item}")
        else:
            shown = "(none)" if value is None or value == "" else value
            lines.append(f"{key:<{width}} : {shown}")
    return "\n".join(lines)
