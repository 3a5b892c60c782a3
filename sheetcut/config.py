"""Configuration management for sheetcut."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHEETCUT_",
        extra="ignore",
    )

    # Cutting
    kerf: float = Field(default=0.125, ge=0, description="Gap reserved between cut pieces (inches)")

    # Threaded through for product assembly; not used by splitting or nesting
    max_span: float = Field(default=24.0, gt=0, description="Maximum clear span between ribs (inches)")
    rib_thickness: float = Field(default=0.75, gt=0, description="Rib thickness (inches)")
    case_inset: float = Field(default=0.25, ge=0, description="Case panel inset (inches)")

    # Seams
    allow_split: bool = Field(default=True, description="Allow oversized parts to be split")
    seam_prohibited_materials: List[str] = Field(
        default_factory=list,
        description="Materials that must never be split (e.g. glass, acrylic)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for setup_logging")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Settings) -> None:
    """Override global settings."""
    global _settings
    _settings = settings
