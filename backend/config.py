from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Paint Estimator"
    DEFAULT_UNIT_SYSTEM: str = "imperial"  # "imperial" | "metric"
    LOG_LEVEL: str = "INFO"

    # Exports
    EXPORT_BASENAME: str = "paint-estimate"
    REPORT_TITLE: str = "Paint Estimate"

    class Config:
        env_file = ".env"


settings = Settings()
