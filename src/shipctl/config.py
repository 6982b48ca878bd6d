"""Configuration management for shipctl using Pydantic."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from shipctl.core.exceptions import ConfigError
from shipctl.core.output import OutputFormat
from shipctl.core.logging import LogLevel
from shipctl.core.utils import DEFAULT_TIMESTAMP_FORMAT


class HelmConfig(BaseModel):
    """Release manager (helm) configuration."""

    binary: str = "helm"

    def get_binary(self) -> str:
        """Get helm executable from config or environment."""
        return os.environ.get("SHIPCTL_HELM_BINARY") or self.binary


class KubectlConfig(BaseModel):
    """Cluster client (kubectl) configuration."""

    binary: str = "kubectl"
    # Only namespaces containing one of these substrings are offered
    namespace_filters: list[str] = Field(default_factory=lambda: ["dev", "test"])

    def get_binary(self) -> str:
        """Get kubectl executable from config or environment."""
        return os.environ.get("SHIPCTL_KUBECTL_BINARY") or self.binary


class EnvironmentConfig(BaseModel):
    """Maps an environment name onto the kube context ending with ``suffix``."""

    name: str
    suffix: str

    @field_validator("name", "suffix")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def default_environments() -> list[EnvironmentConfig]:
    return [
        EnvironmentConfig(name="dev", suffix="pigeon"),
        EnvironmentConfig(name="test", suffix="westeu-001-aks"),
    ]


class ProfileConfig(BaseModel):
    """Profile configuration grouping tool settings and environments."""

    helm: HelmConfig = Field(default_factory=HelmConfig)
    kubectl: KubectlConfig = Field(default_factory=KubectlConfig)
    environments: list[EnvironmentConfig] = Field(default_factory=default_environments)

    def find_environment(self, name: str) -> EnvironmentConfig | None:
        """Look up an environment by name."""
        for env in self.environments:
            if env.name == name:
                return env
        return None


class GlobalConfig(BaseModel):
    """Global settings."""

    output_format: OutputFormat = OutputFormat.TABLE
    color: str = "auto"  # auto, always, never
    verbosity: LogLevel = LogLevel.WARNING
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if v not in ("auto", "always", "never"):
            raise ValueError("color must be 'auto', 'always', or 'never'")
        return v


class ShipCtlConfig(BaseModel):
    """Main configuration model."""

    model_config = {"populate_by_name": True}

    version: str = "1"
    global_settings: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    profiles: dict[str, ProfileConfig] = Field(default_factory=lambda: {"default": ProfileConfig()})

    def get_profile(self, name: str | None = None) -> ProfileConfig:
        """Get a profile by name, defaulting to 'default'."""
        profile_name = name or "default"
        if profile_name not in self.profiles:
            raise ConfigError(f"Profile '{profile_name}' not found")
        return self.profiles[profile_name]


class ConfigLoader:
    """Loads and merges configuration from multiple sources."""

    CONFIG_FILENAMES = ["shipctl.yaml", "shipctl.yml", ".shipctl.yaml", ".shipctl.yml"]

    def __init__(self, home: Path | None = None):
        self._home = home
        self._config: ShipCtlConfig | None = None

    @property
    def user_config_path(self) -> Path:
        return (self._home or Path.home()) / ".shipctl" / "config.yaml"

    def load(
        self,
        config_file: str | Path | None = None,
        profile: str | None = None,
    ) -> ShipCtlConfig:
        """Load configuration from files.

        Priority (highest to lowest):
        1. Explicitly specified config file
        2. Project config (./shipctl.yaml)
        3. User config (~/.shipctl/config.yaml)

        Args:
            config_file: Optional explicit config file path
            profile: Profile name that must exist in the result

        Returns:
            Merged configuration
        """
        configs: list[dict[str, Any]] = []

        if self.user_config_path.exists():
            configs.append(self._load_yaml_file(self.user_config_path))

        project_config = self._find_project_config()
        if project_config:
            configs.append(self._load_yaml_file(project_config))

        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_file}")
            configs.append(self._load_yaml_file(config_path))

        merged = self._merge_configs(configs)

        try:
            self._config = ShipCtlConfig(**merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

        if profile:
            self._config.get_profile(profile)
        return self._config

    def _find_project_config(self) -> Path | None:
        """Find project config file in current or parent directories."""
        current = Path.cwd()

        while current != current.parent:
            for filename in self.CONFIG_FILENAMES:
                config_path = current / filename
                if config_path.exists():
                    return config_path
            current = current.parent

        return None

    def _load_yaml_file(self, path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}")
        if not isinstance(content, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}")
        return content

    def _merge_configs(self, configs: list[dict[str, Any]]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for config in configs:
            result = self._deep_merge(result, config)
        return result

    def _deep_merge(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def load_config(
    config_file: str | Path | None = None,
    profile: str | None = None,
) -> ShipCtlConfig:
    """Load shipctl configuration.

    Args:
        config_file: Optional explicit config file path
        profile: Profile name to use

    Returns:
        Loaded configuration
    """
    return ConfigLoader().load(config_file, profile)


def get_default_config() -> ShipCtlConfig:
    """Get default configuration without loading from files."""
    return ShipCtlConfig()
