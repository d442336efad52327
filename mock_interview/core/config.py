from typing import List, Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    PROJECT_NAME: str = "Mock Interview Session Service"
    API_V1_PREFIX: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./mock_interview.db"

    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]

    # Interview session timing
    SESSION_DURATION_SECONDS: int = Field(default=60, gt=0)
    TICK_INTERVAL_SECONDS: float = Field(default=1.0, gt=0)
    COMPLETION_DELAY_SECONDS: float = Field(default=2.0, ge=0)

    # Media capture: "opencv" or "none"
    MEDIA_DEVICE: str = "opencv"
    CAMERA_INDEX: int = 0

    # Optional report page notified on hand-off
    REPORT_WEBHOOK_URL: Optional[str] = None
    REPORT_WEBHOOK_TIMEOUT: float = 2.0

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
