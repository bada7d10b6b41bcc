"""Shared configuration for all services."""
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Job storage: "memory" or "mongo"
    storage_backend: str = "memory"

    # MongoDB Configuration
    mongo_url: str = "mongodb://localhost:27017"
    mongo_db_name: str = "web2doc"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_debug: bool = False

    # Artifacts
    downloads_dir: str = "downloads"
    download_cleanup_delay: float = 60.0  # seconds after a download completes
    recent_documents_limit: int = 10

    # Browser Configuration
    scrape_timeout: int = 30
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    browser_args: List[str] = ["--no-sandbox", "--disable-setuid-sandbox"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
