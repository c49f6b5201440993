"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "credit-desk"
    log_level: str = "INFO"

    # "Today" for requests that don't send a reference date
    business_timezone: str = "America/Sao_Paulo"

    # Loan form defaults
    default_interest_rate: float = 10.0
    default_installment_count: int = 24
    max_schedule_installments: int = 360


settings = Settings()
