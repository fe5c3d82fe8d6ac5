"""
Driver environment.

Everything the resolver needs to know about the driver itself (where it is
installed, where its resource directory lives, which sysroot the user forced)
arrives as one immutable value instead of being read from globals.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

import yaml

from ohoskit.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriverEnvironment:
    """
    Driver-provided environment.

    Attributes:
        sysroot_override: Sysroot forced by the driver, '' when not set
        installed_dir: Directory the compiler binary is installed in
        resource_dir: Compiler resource directory (lib/clang/<version>)
        driver_dir: Directory of the driver executable
        cxx_mode: The driver runs in C++ mode (clang++)
        enable_linker_build_id: Pass --build-id to the linker
        c_include_dirs: Configure-time C include directories
    """

    sysroot_override: str = ""
    installed_dir: str = ""
    resource_dir: str = ""
    driver_dir: str = ""
    cxx_mode: bool = False
    enable_linker_build_id: bool = False
    c_include_dirs: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DriverEnvironment":
        """
        Build an environment from a plain mapping.

        Args:
            data: Mapping of field names to values; None values are ignored

        Returns:
            DriverEnvironment

        Raises:
            ConfigurationError: If the mapping has unknown keys or bad values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown driver environment keys: {', '.join(unknown)}"
            )

        values = {}
        for key, value in data.items():
            if value is None:
                continue
            if key == "c_include_dirs":
                if isinstance(value, str) or not all(
                    isinstance(v, str) for v in value
                ):
                    raise ConfigurationError("c_include_dirs must be a list of paths")
                values[key] = tuple(value)
            elif key in ("cxx_mode", "enable_linker_build_id"):
                if not isinstance(value, bool):
                    raise ConfigurationError(f"{key} must be true or false")
                values[key] = value
            else:
                values[key] = str(value)

        return cls(**values)

    @classmethod
    def from_yaml(cls, env_file: Union[str, Path]) -> "DriverEnvironment":
        """
        Load an environment from a YAML file.

        Args:
            env_file: Path to a YAML mapping of DriverEnvironment fields

        Returns:
            DriverEnvironment

        Raises:
            ConfigurationError: If the file is missing, not valid YAML,
                or not a mapping of known keys
        """
        env_file = Path(env_file)
        if not env_file.exists():
            raise ConfigurationError(f"Environment file not found: {env_file}")

        try:
            with open(env_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {env_file}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Environment file {env_file} must be a mapping")

        logger.debug(f"Loaded driver environment from {env_file}")
        return cls.from_mapping(data)
