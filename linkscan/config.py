from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # API Configuration
    APP_NAME: str = "LinkScan"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Frontend dev servers allowed to call the API
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Analysis Settings
    NEW_DOMAIN_PROBABILITY: float = 0.3
    MAX_URL_LENGTH: int = 2048

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
