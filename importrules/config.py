"""Configuration for the import rules engine using pydantic-settings."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocationScope(str, Enum):
    """Which asset roots to scan."""

    ASSETS = "assets"
    PACKAGES = "packages"
    BOTH = "both"


class StoreSettings(BaseSettings):
    """Settings for rule set persistence."""

    model_config = SettingsConfigDict(
        env_prefix="RULESTORE_",
    )

    directory: Path = Field(
        default=Path(".importrules"),
        description="Directory holding the saved session rule sets",
    )

    document_format: Literal["yaml", "json"] = Field(
        default="yaml",
        description="Format of the saved session documents",
    )


class ScanSettings(BaseSettings):
    """Settings for building the asset working set."""

    model_config = SettingsConfigDict(
        env_prefix="SCAN_",
    )

    location_scope: LocationScope = Field(
        default=LocationScope.ASSETS,
        description="Asset roots to search (assets, packages or both)",
    )

    scene_only: bool = Field(
        default=False,
        description="Only include assets referenced by the open scene",
    )


class EngineSettings(BaseSettings):
    """Global settings for the engine."""

    model_config = SettingsConfigDict(
        env_prefix="IMPORTRULES_",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level used by setup_logging",
    )

    store: StoreSettings = Field(default_factory=StoreSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)


# Global settings instance that can be accessed throughout the application
_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def set_settings(settings: EngineSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
