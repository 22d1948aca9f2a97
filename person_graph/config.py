from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

from .types import UnresolvedPolicy


class Settings(BaseSettings):
    """Application settings."""

    # Upstream API Configuration
    swapi_base_url: str = "https://sw-api.starnavi.io"
    request_timeout: float = 30.0

    # Graph Data Configuration
    cache_ttl_seconds: float = 300.0
    unresolved_starship_policy: UnresolvedPolicy = UnresolvedPolicy.DROP

    # Layout Configuration
    layout_node_width: float = 200.0
    layout_node_height: float = 48.0
    layout_spacing: float = 64.0

    # API Server Configuration
    api_host: str = "localhost"
    api_port: int = 8000

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/app.log"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def log_dir(self) -> Optional[Path]:
        """Get log directory path."""
        return Path(self.log_file).parent if self.log_file else None

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
