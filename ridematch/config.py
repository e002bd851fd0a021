"""Centralised application settings loaded from environment / .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Credentials
    password_hash_rounds: int = Field(12, ge=4, le=31)  # bcrypt cost factor

    # Logging (kept quiet by default so log lines don't mix with prompts)
    log_level: str = "WARNING"

    model_config = {"env_file": ".env", "env_prefix": "RIDEMATCH_", "extra": "ignore"}


settings = Settings()
