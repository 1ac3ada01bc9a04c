from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings, loaded from CONTENT_FIELDS_* environment variables
    or a .env file.
    """

    # --- Rule validation ---
    MAX_EXPRESSION_LENGTH: int = 1000

    # --- Body summary ---
    SUMMARY_MIN_LENGTH: int = 200
    SUMMARY_MAX_LENGTH: int = 400

    # --- Parsing ---
    HTML_PARSER: str = "lxml"

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_FIELDS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
