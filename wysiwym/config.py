from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "WYSIWYM Doc Model"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = False

    # Kind plugins loaded at start-up; None loads every built-in plugin
    enabled_plugins: list[str] | None = None

    # Run the editing surface's structural check after doc→editor builds
    check_structure: bool = True

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WYSIWYM_",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
