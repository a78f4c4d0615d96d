"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI-compatible chat completion provider
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_timeout: float = 60.0

    # Retry policy for the recommendation call (attempts include the first one)
    recommendation_max_attempts: int = 2
    recommendation_retry_delay: float = 1.0

    # Auth (JWT issued by the managed auth service)
    jwt_secret: str = "change-me"
    jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"

    # Database
    database_url: str = "sqlite+aiosqlite:///./journeygo.db"

    # Offline cache shell
    cache_version: str = "v1"
    cache_assets: List[str] = [
        "/",
        "/index.html",
        "/manifest.json",
        "/icons/icon-192.png",
        "/icons/icon-512.png",
    ]
    offline_cache_enabled: bool = False

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # CORS Configuration
    frontend_url: str = "http://localhost:5173"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def cache_name(self) -> str:
        return f"journeygo-cache-{self.cache_version}"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
