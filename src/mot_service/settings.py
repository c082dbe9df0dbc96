from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # MOT history API
    mot_api_key: str = Field(default="", alias="MOT_API_KEY")
    mot_api_base_url: str = Field(default="https://beta.check-mot.service.gov.uk", alias="MOT_API_BASE_URL")
    mot_api_timeout_seconds: float = Field(default=10.0, alias="MOT_API_TIMEOUT_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
