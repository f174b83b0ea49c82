from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str

    # CORS origins: comma-separated list
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Dashboard statistics: calendar months are cut in this timezone
    REPORT_TIMEZONE: str = "Africa/Nairobi"
    # Budget per aggregation; 0 fails every fetch
    STATS_FETCH_TIMEOUT_SECONDS: float = 10.0
    # Dashboard sessions remembered for superseded-request detection
    STATS_SESSION_CAPACITY: int = 1000

    # Report exports
    CURRENCY_LABEL: str = "KSh"
    DEFAULT_LANGUAGE: str = "en"

    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
