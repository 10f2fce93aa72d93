"""Application configuration and settings management."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Runtime environment; demo seeding is disabled in "production"
    environment: str = "development"
    
    # Database
    database_path: Path = Path("data") / "job_tracker.db"
    seed_demo_data: bool = False
    
    # Development server
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = True
    
    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    
    # Board client
    api_base_url: str = "http://127.0.0.1:5000"
    request_timeout: float = 10.0
    reload_debounce_ms: int = 250
    toast_limit: int = 4
    toast_ttl_seconds: float = 3.5
    
    @property
    def is_production(self) -> bool:
        """True when running with ENVIRONMENT=production."""
        return self.environment.strip().lower() == "production"
    
    @property
    def reload_debounce_seconds(self) -> float:
        """Debounce delay for board reloads, in seconds."""
        return max(self.reload_debounce_ms, 0) / 1000.0


# Global settings instance
settings = Settings()
