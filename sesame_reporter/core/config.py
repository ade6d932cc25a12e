from enum import Enum
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class TriggerMode(str, Enum):
    METHOD = "method"
    PATH = "path"


class Settings(BaseSettings):

    BASE_DIR: Path = Path(__file__).resolve().parents[2]

    GATEWAY_API_KEY: str = Field("", description="Shared secret expected in X-API-KEY")
    SESAME_API_KEY: str = Field("", description="Sesame (CANDY HOUSE) API key")
    SESAME_DEVICES: dict = Field(default_factory=dict, description="key -> {name, uuid}")
    LINE_ACCESS_TOKEN: str = Field("", description="LINE channel access token")
    LINE_USER_ID: str = Field("", description="LINE push recipient")

    SESAME_API_URL: str = "https://app.candyhouse.co/api/sesame2"
    LINE_PUSH_URL: str = "https://api.line.me/v2/bot/message/push"
    HTTP_TIMEOUT: float = 10.0

    TRIGGER_MODE: TriggerMode = TriggerMode.METHOD
    REPORT_INTERVAL: int = 0

    HOST: str = "0.0.0.0"
    PORT: int = 8787

    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True

    @field_validator("REPORT_INTERVAL")
    @classmethod
    def validate_report_interval(cls, value: int) -> int:
        if value < 0:
            raise ValueError("REPORT_INTERVAL must be >= 0")
        return value

    def missing_credentials(self, *, serving: bool = True) -> List[str]:
        required = ["SESAME_API_KEY", "LINE_ACCESS_TOKEN", "LINE_USER_ID"]
        if serving:
            required.insert(0, "GATEWAY_API_KEY")
        return [name for name in required if not getattr(self, name)]


settings = Settings()
