# cloudsvc/config/schema.py
"""
Configuration schema for cloudsvc.

Defaults ship in cloudsvc/config/defaults/cloudsvc.yaml; a project may
override any key in <project>/.cloudsvc/config.yaml.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DocumentsConfig(BaseModel):
    """File names of the project documents, relative to the project root."""

    model_config = ConfigDict(extra="forbid")

    definition: str = Field(..., description="Service definition document")
    settings: Dict[str, str] = Field(
        ..., description="Settings documents keyed by environment (e.g. Cloud, Local)"
    )

    @field_validator("settings")
    @classmethod
    def _at_least_one_environment(cls, value: Dict[str, str]) -> Dict[str, str]:
        if not value:
            raise ValueError("at least one settings document is required")
        return value


class ScaffoldingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    web_config: str = Field(..., description="Role-local config file that receives injected sections")


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Log level name")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LEVELS:
            raise ValueError(f"unknown log level {value!r}, expected one of {LEVELS}")
        return value


class CloudSvcConfig(BaseModel):
    """Complete, merged cloudsvc configuration."""

    model_config = ConfigDict(extra="forbid")

    documents: DocumentsConfig
    scaffolding: ScaffoldingConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
