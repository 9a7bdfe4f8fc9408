from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DB_URL: str = "sqlite:///./jobs.db"
    LOG_LEVEL: str = "INFO"
    # Paging
    DEFAULT_PER_PAGE: int = 20
    # Derived flags
    NEW_WINDOW_DAYS: int = 7
    FEATURED_PAY_THRESHOLD: int = 150000
    # 1 = run applied/saved/benefit lookups one after another on the request session
    AGGREGATE_WORKERS: int = 1


settings = Settings()
