"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Drone CRM"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    service_name: str = "dronecrm"
    log_level: str = "INFO"
    log_buffer_size: int = 200
    database_url: str = "sqlite:///./dronecrm.db"
    database_echo: bool = False
    # OpenWeatherMap (current conditions + 5 day / 3 hour forecast)
    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_units: str = "metric"
    openweather_lang: str = "pt_br"
    weather_api_timeout: float = 10.0
    default_location: str = "São Paulo"
    timezone: str = "America/Sao_Paulo"
    default_forecast_hour: int = 12
    # Flight / spraying advisory thresholds
    advisory_max_wind_kmh: int = 6
    advisory_max_precipitation_mm: float = 0.0
    advisory_min_visibility_km: int = 3
    advisory_max_cloud_cover_pct: int = 80
    advisory_min_humidity_pct: int = 50
    advisory_max_humidity_pct: int = 90
    advisory_min_temperature_c: float = 10.0
    advisory_max_temperature_c: float = 35.0
    notifications_max_items: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
