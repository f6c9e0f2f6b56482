"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Logistics Dashboard API"
    api_prefix: str = "/api"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the service.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    storage_backend: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Where shop, driver, route and target records live.",
    )
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    optimizer_backend: Literal["local", "remote"] = Field(
        default="local",
        description="Route optimizer collaborator: OR-Tools in process or a remote HTTP service.",
    )
    optimizer_url: Optional[str] = Field(
        default=None,
        description="Base URL of the remote route optimizer (e.g., http://localhost:8500).",
    )
    optimizer_timeout_seconds: float = Field(default=30.0, gt=0.0)
    solver_first_solution_strategy: str = Field(default="PATH_CHEAPEST_ARC")
    solver_local_search_metaheuristic: str = Field(default="GREEDY_DESCENT")
    solver_time_limit_seconds: int = Field(default=5, ge=1)

    average_speed_kmh: float = Field(
        default=25.0,
        gt=0.0,
        description="Average urban delivery speed used to turn saved distance into minutes.",
    )
    default_fuel_litres_per_km: float = Field(default=0.08, ge=0.0)
    vehicle_fuel_litres_per_km: dict[str, float] = Field(
        default={"motorcycle": 0.03, "van": 0.1, "truck": 0.25},
        description="Fuel consumption per vehicle type, keyed by lower-case vehicle type.",
    )

    service_area_file: Optional[Path] = Field(
        default=None,
        description="GeoJSON FeatureCollection outlining the operating area.",
    )

    @field_validator("service_area_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
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

    @field_validator("vehicle_fuel_litres_per_km", mode="after")
    @classmethod
    def _normalize_vehicle_keys(cls, value: dict[str, float]) -> dict[str, float]:
        return {key.strip().lower(): rate for key, rate in value.items()}

    def fuel_rate_for(self, vehicle_type: str | None) -> float:
        """Litres per km for a vehicle type, falling back to the default rate."""
        if not vehicle_type:
            return self.default_fuel_litres_per_km
        return self.vehicle_fuel_litres_per_km.get(
            vehicle_type.strip().lower(), self.default_fuel_litres_per_km
        )


settings = Settings()
