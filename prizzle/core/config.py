"""Configuration management for prizzle"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..schema.naming import NamingStyle


class SystemConfig(BaseModel):
    """System configuration"""
    name: str = "prizzle"
    version: str = "0.1.0"
    log_level: str = "INFO"
    log_file: Optional[str] = None


class BuilderConfig(BaseModel):
    """Schema builder configuration"""
    naming_style: NamingStyle = NamingStyle.DRIZZLE


class GeneratorConfig(BaseModel):
    """Code generator configuration"""
    default_varchar_length: int = Field(default=255, gt=0)
    provider_override: Optional[str] = None  # e.g. "mysql"


class Config(BaseSettings):
    """Main configuration class"""
    model_config = SettingsConfigDict(env_prefix="PRIZZLE_", env_nested_delimiter="__")

    system: SystemConfig = Field(default_factory=SystemConfig)
    builder: BuilderConfig = Field(default_factory=BuilderConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Config":
        """Load configuration from YAML file"""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return self.model_dump(mode="json")

    def save_yaml(self, output_path: str | Path) -> None:
        """Save configuration to YAML file"""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
