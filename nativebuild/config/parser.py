"""YAML build description parser for nativebuild.

This module provides parsing and validation for nativebuild.yaml files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from nativebuild.core.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "nativebuild.yaml"


@dataclass
class ProjectConfig:
    """Project identity and layout."""

    name: Optional[str] = None
    build_dir: str = "build"


@dataclass
class AndroidConfig:
    """Settings of the Android library plugin."""

    ndk_directory: Optional[str] = None
    abi_filters: List[str] = field(default_factory=list)
    library_variants: List[str] = field(default_factory=lambda: ["debug", "release"])


@dataclass
class ExternalNativeBuildConfig:
    """Calls made on the externalNativeBuild extension."""

    c_flags: Optional[List[str]] = None
    cpp_flags: Optional[List[str]] = None
    arguments: Optional[List[str]] = None
    build_target: Optional[str] = None
    working_folder: Optional[str] = None
    install_prefix: Optional[str] = None
    path: Optional[str] = None


@dataclass
class NativeBuildConfig:
    """Complete build description."""

    version: int
    project: ProjectConfig = field(default_factory=ProjectConfig)
    properties: Dict[str, Any] = field(default_factory=dict)
    android: Optional[AndroidConfig] = None
    external_native_build: Optional[ExternalNativeBuildConfig] = None


def parse_config(config_path: Path) -> NativeBuildConfig:
    """
    Parse a nativebuild.yaml build description.

    Args:
        config_path: Path to nativebuild.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    return parse_config_data(data)


def parse_config_data(data: Any) -> NativeBuildConfig:
    """Parse and validate an already loaded build description."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    config = NativeBuildConfig(version=data["version"])

    if data.get("project") is not None:
        config.project = _parse_project(data["project"])

    if data.get("properties") is not None:
        properties = data["properties"]
        if not isinstance(properties, dict):
            raise ConfigError("properties must be a mapping")
        config.properties = {str(key): value for key, value in properties.items()}

    if data.get("android") is not None:
        config.android = _parse_android(data["android"])

    if data.get("external_native_build") is not None:
        config.external_native_build = _parse_external_native_build(
            data["external_native_build"]
        )

    return config


def _parse_project(data: Any) -> ProjectConfig:
    if not isinstance(data, dict):
        raise ConfigError("project must be a mapping")

    project = ProjectConfig()
    if data.get("name") is not None:
        project.name = str(data["name"])
    if data.get("build_dir") is not None:
        project.build_dir = str(data["build_dir"])
    return project


def _parse_android(data: Any) -> AndroidConfig:
    if not isinstance(data, dict):
        raise ConfigError("android must be a mapping")

    android = AndroidConfig()
    if data.get("ndk_directory") is not None:
        android.ndk_directory = str(data["ndk_directory"])
    if "abi_filters" in data:
        android.abi_filters = _string_list(data, "abi_filters", "android")
    if "library_variants" in data:
        variants = _string_list(data, "library_variants", "android")
        if not variants:
            raise ConfigError("android.library_variants must not be empty")
        if len(set(variants)) != len(variants):
            raise ConfigError(f"Duplicate library variant in: {variants}")
        android.library_variants = variants
    return android


def _parse_external_native_build(data: Any) -> ExternalNativeBuildConfig:
    if not isinstance(data, dict):
        raise ConfigError("external_native_build must be a mapping")

    native = ExternalNativeBuildConfig()
    for key in ("c_flags", "cpp_flags", "arguments"):
        if key in data:
            setattr(native, key, _string_list(data, key, "external_native_build"))
    for key in ("build_target", "working_folder", "install_prefix", "path"):
        if data.get(key) is not None:
            setattr(native, key, str(data[key]))
    return native


def _string_list(data: dict, key: str, section: str) -> List[str]:
    value = data[key]
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"{section}.{key} must be a list")
    return [str(item) for item in value]


def parse_property_overrides(overrides: Optional[Sequence[str]]) -> Dict[str, str]:
    """
    Parse ``key=value`` property overrides from the command line.

    Raises:
        ConfigError: If an override has no '=' or an empty key
    """
    properties: Dict[str, str] = {}
    for override in overrides or []:
        key, sep, value = override.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Invalid property '{override}' (expected key=value)")
        properties[key] = value
    return properties
