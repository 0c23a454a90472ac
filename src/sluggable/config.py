"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:       str = "sluggable"
    db_url:         str = "sqlite:///sluggable.db"
    slug_field:     str = Field(default="slug", min_length=1, description="Field the slug is stored in")
    generate_unique_slugs: bool = Field(default=True, description="Suffix colliding slugs with -1, -2, ...")
    maximum_length: int = Field(default=250, ge=1, description="Max source length before normalization")
    separator:      str = Field(default="-", min_length=1, description="Slug word and suffix separator")
    max_attempts:   int = Field(default=0,   ge=0, description="Max suffixed candidates per slug; 0 = unlimited")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SLUGGABLE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SLUGGABLE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
