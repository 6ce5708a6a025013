from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Administrator credential (plaintext, single fixed identity)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "12345"
    ADMIN_DISPLAY_NAME: str = "Administrator"

    # Session persistence
    SESSION_KEY: str = "crm_user"
    SESSION_DATABASE_URL: str = "sqlite:///./crm_session.db"
    DATABASE_ECHO: bool = False

    # Identifier policy
    EMPLOYEE_ID_PREFIX: str = "EMP"
    EMPLOYEE_ID_WIDTH: int = 3
    LEAD_ID_PREFIX: str = "L"

    # Presentation limits (not enforced by the engine)
    FEEDBACK_MAX_CHARS: int = 150
    RECENT_FEEDBACK_LIMIT: int = 5

    # Load the demo employee and leads on startup
    SEED_DEMO_DATA: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
