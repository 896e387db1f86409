from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "PrepPal API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Modèle génératif (OpenAI)
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TIMEOUT_SECONDS: float = 120.0

    # Storage
    UPLOADS_PATH: str = "./uploads"
    TEMP_PATH: str = "./temp"
    MAX_UPLOAD_MB: int = 25

    # Upload distant avec retry (délai fixe, pas d'exponentiel)
    UPLOAD_MAX_ATTEMPTS: int = 3
    UPLOAD_RETRY_DELAY_SECONDS: float = 2.0

    # Quiz
    DEFAULT_QUIZ_QUESTIONS: int = 5
    QUIZ_SESSION_TTL_SECONDS: int = 60 * 60  # 1h

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
