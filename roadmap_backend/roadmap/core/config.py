from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./roadmap.db"
    environment: str = "development"
    log_level: str = "INFO"

    # Default per-term credit load
    target_credits: int = 15
    min_credits: int = 12
    max_credits: int = 18

    horizon_terms: int = 8  # Fall + Spring for four years
    fall_cutoff_month: int = 8  # from this month on, planning starts next Spring
    include_summer: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
