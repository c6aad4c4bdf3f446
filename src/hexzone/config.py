"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HEXZONE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Hex Delivery Zone API"
    api_prefix: str = "/api"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    restaurants_file: Path = Field(
        default=Path("data/restaurants.json"),
        description="Restaurant delivery configuration used when Supabase is not configured.",
    )
    restaurants_table: str = Field(default="restaurants", description="Supabase table holding restaurants.")
    default_cell_size_meters: float = Field(
        default=450.0,
        gt=0.0,
        description="Hex cell size used when a restaurant has no grid settings.",
    )
    default_radius_meters: float = Field(
        default=3000.0,
        ge=0.0,
        description="Service radius used when a restaurant has no grid settings.",
    )
    delivery_max_radius_meters: float = Field(
        default=20000.0,
        ge=0.0,
        description="Straight-line cutoff when listing restaurants that deliver to an address.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("restaurants_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
