from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database (backs the key-value slots)
    DATABASE_URL: str = "sqlite:///./linkpulse.db"

    # Storage slots
    STORAGE_KEY: str = "linkpulse_links"
    SETTINGS_KEY: str = "linkpulse_settings"
    SEED_DEMO_DATA: bool = True

    # Enrichment (Gemini)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    ENRICHMENT_TIMEOUT_SECONDS: float = 10.0

    # Links
    HISTORY_DAYS: int = 7
    SHORT_CODE_LENGTH: int = 6

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
