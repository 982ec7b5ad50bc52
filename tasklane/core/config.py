from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Tasklane API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "dev_secret_key_change_in_prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 2

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./tasklane.db"
    TEST_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    # Due-date sweep
    SCHEDULER_ENABLED: bool = True
    DUE_DATE_SWEEP_MINUTES: int = 15
    NEAR_OVERDUE_WINDOW_HOURS: int = 24

    # Invitations
    INVITATION_DEFAULT_EXPIRE_DAYS: int = 7
    INVITATION_MAX_EXPIRE_DAYS: int = 90

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"

settings = Settings()
