"""Application configuration"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # GitHub
    github_api_url: str = "https://api.github.com"
    # Used when no token is passed on the command line.
    github_token: Optional[str] = None
    user_agent: str = "github-issues-mirror"
    request_timeout_seconds: float = 30

    # Sync
    page_size: int = 100
    # Interval for periodic mode when --every-minutes is not given.
    # If empty/omitted, the CLI runs a single sync and exits.
    sync_interval_minutes: Optional[int] = None

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
