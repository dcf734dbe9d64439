"""Configuration management for commandtree applications."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

USER_CONFIG = "commandtree.yaml"
LOCAL_CONFIG = "commandtree.local.yaml"


class Config(BaseModel):
    """
    Configuration for a commandtree application.

    Configuration is loaded from a workspace directory:
    1. commandtree.yaml - User configuration (optional)
    2. commandtree.local.yaml - Local overrides (optional, overrides user)

    Pydantic defaults are used for fields not specified in either file.
    """

    workspace: Path
    name: str = "commandtree"
    logging_path: Path = Field(default=Path(".logs"))
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    disabled_commands: list[str] = Field(default_factory=list)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("disabled_commands")
    @classmethod
    def normalize_disabled(cls, v: list[str]) -> list[str]:
        return [" ".join(address.split()) for address in v if address.strip()]

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve the relative logging path against the workspace."""
        if self.logging_path.is_absolute():
            raise ValueError(f"logging_path must be relative, got: {self.logging_path}")
        self.logging_path = self.workspace / self.logging_path
        return self

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a workspace directory.

        Args:
            workspace_dir: Directory holding the config files

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            ValidationError: If configuration is invalid
        """
        config_data: dict[str, Any] = {"workspace": workspace_dir}

        for filename in (USER_CONFIG, LOCAL_CONFIG):
            config_file = workspace_dir / filename
            if config_file.exists():
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, file_data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
