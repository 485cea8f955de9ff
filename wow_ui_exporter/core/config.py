"""Configuration management for wow-ui-exporter."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, field_validator

from wow_ui_exporter.core.types import Region

logger = structlog.get_logger()


class TACTConfig(BaseModel):
    """Version endpoint configuration."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    regions: list[str] = Field(
        default=[region.value for region in Region],
        description="Supported regions"
    )

    def get_base_url(self, region: str) -> str:
        """Get base URL for a region."""
        return f"https://{region}.version.battle.net"

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("regions")
    @classmethod
    def validate_regions(cls, v: list[str]) -> list[str]:
        """Validate regions list."""
        if not v:
            raise ValueError("Regions list cannot be empty")

        valid_regions = {region.value for region in Region}
        for region in v:
            if region not in valid_regions:
                raise ValueError(f"Invalid region: {region}. Valid regions: {valid_regions}")

        return v


class ListfileConfig(BaseModel):
    """Community listfile configuration."""

    url: str = Field(
        default="https://github.com/wowdev/wow-listfile/releases/latest/download/community-listfile.csv",
        description="Published listfile snapshot"
    )
    # Snapshot names are lowercase, so the prefix is too
    prefix: str = Field(default="interface/", description="Subtree kept in the index")
    timeout: float = Field(default=60.0, description="Request timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate snapshot URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Listfile URL must be http(s): {v}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class ExportToolConfig(BaseModel):
    """External retrieval tool configuration."""

    executable: str = Field(default="TACTTool", description="Tool executable name or path")
    mode: str = Field(default="list", description="Mode flag selecting list-based retrieval")

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        """Validate executable value."""
        if not v.strip():
            raise ValueError("Executable cannot be empty")
        return v


class AppConfig(BaseModel):
    """Application configuration."""

    config_dir: Path = Field(
        default=Path.home() / ".config" / "wow-ui-exporter",
        description="Configuration directory"
    )

    tact: TACTConfig = Field(default_factory=TACTConfig)
    listfile: ListfileConfig = Field(default_factory=ListfileConfig)
    export_tool: ExportToolConfig = Field(default_factory=ExportToolConfig)

    # Output settings
    output_format: str = Field(
        default="rich",
        description="Output format (rich, json, plain)"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @classmethod
    def load(cls, config_file: Path | None = None) -> AppConfig:
        """Load configuration from file.

        Args:
            config_file: Path to config file, uses default if None

        Returns:
            Application configuration
        """
        if config_file is None:
            config_file = Path.home() / ".config" / "wow-ui-exporter" / "config.json"

        if config_file.exists():
            with open(config_file) as f:
                data = json.load(f)
                return cls(**data)

        # Return defaults
        return cls()

    def save(self, config_file: Path | None = None) -> None:
        """Save configuration to file.

        Args:
            config_file: Path to config file, uses default if None
        """
        if config_file is None:
            config_file = self.config_dir / "config.json"

        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

        logger.info("config_saved", path=str(config_file))

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = {"rich", "json", "plain"}
        if v not in valid_formats:
            raise ValueError(f"Invalid output format: {v}. Valid formats: {valid_formats}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {valid_levels}")
        return v
