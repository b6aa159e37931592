"""Configuration module for nativebuild.

This module provides YAML parsing and validation for nativebuild.yaml and
the setup of projects from a parsed build description.
"""

from nativebuild.config.parser import (
    DEFAULT_CONFIG_FILE,
    AndroidConfig,
    ConfigError,
    ExternalNativeBuildConfig,
    NativeBuildConfig,
    ProjectConfig,
    parse_config,
    parse_config_data,
    parse_property_overrides,
)
from nativebuild.config.loader import configure_external_native_build, create_project

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "AndroidConfig",
    "ConfigError",
    "ExternalNativeBuildConfig",
    "NativeBuildConfig",
    "ProjectConfig",
    "parse_config",
    "parse_config_data",
    "parse_property_overrides",
    "configure_external_native_build",
    "create_project",
]
