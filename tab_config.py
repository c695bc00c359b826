"""
Configuration models for the workspace tab manager.

Settings are grouped into small pydantic models so callers only override
what they care about.

Example:
    >>> from tab_config import TabManagerConfig, EvictionConfig
    >>> config = TabManagerConfig(eviction=EvictionConfig(max_temporary_tabs=8))
    >>> manager = TabManager(config=config)
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, Field, ValidationError

from error_handling import ConfigurationError


class HomeTabConfig(BaseModel):
    """The permanent home tab every workspace starts with."""

    id: str = Field(
        default="dashboard",
        min_length=1,
        description="Fixed id of the home tab"
    )
    path: str = Field(
        default="/",
        min_length=1,
        description="Logical address of the home tab"
    )
    title: str = Field(
        default="Dashboard",
        description="Display title of the home tab"
    )


class EvictionConfig(BaseModel):
    """Bounds on ephemeral tabs."""

    max_temporary_tabs: int = Field(
        default=5,
        ge=1,
        description="Maximum number of temporary, non-dirty tabs kept open"
    )


class NavigationConfig(BaseModel):
    """Defaults applied when a caller does not say where a navigation came from."""

    default_source: Literal["sidebar", "user", "llm"] = Field(
        default="user",
        description="Source assumed when open_tab is called without options"
    )


class DebugConfig(BaseModel):
    """Debugging and logging configuration."""

    debug_mode: bool = Field(
        default=False,
        description="Print every tab event to the console"
    )


class TabManagerConfig(BaseModel):
    """
    Main configuration object for TabManager.

    Example:
        >>> config = TabManagerConfig(
        ...     home=HomeTabConfig(title="Accueil"),
        ...     logging=DebugConfig(debug_mode=True)
        ... )
    """

    home: HomeTabConfig = Field(
        default_factory=HomeTabConfig,
        description="Home tab configuration"
    )
    eviction: EvictionConfig = Field(
        default_factory=EvictionConfig,
        description="Temporary tab eviction configuration"
    )
    navigation: NavigationConfig = Field(
        default_factory=NavigationConfig,
        description="Navigation defaults"
    )
    logging: DebugConfig = Field(
        default_factory=DebugConfig,
        description="Debug and logging configuration"
    )

    @classmethod
    def debug(cls) -> TabManagerConfig:
        """Configuration that echoes every tab event to the console."""
        return cls(logging=DebugConfig(debug_mode=True))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> TabManagerConfig:
        """
        Load a configuration from a JSON file.

        Args:
            path: Path to a JSON document matching this model

        Returns:
            Parsed TabManagerConfig

        Raises:
            ConfigurationError: if the file is missing, not JSON, or invalid
        """
        config_path = Path(path)
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read configuration {config_path}: {e}", payload=str(config_path))
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration {config_path}: {e}", payload=raw)
