from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    DATABASE_URL: str | None = None
    REDIS_URL: str | None = None
    OUTLET_DIRECTORY_BASE_URL: str | None = None
    INTERNAL_API_TOKEN: str | None = None
    API_CACHE_TTL_SECONDS: int = 30
    LOCATOR_BASE_DELIVERY_MINUTES: float = 30.0
    LOCATOR_TRAVEL_MINUTES_PER_KM: float = 2.0
    LOCATOR_DEFAULT_LIMIT: int = 5


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
