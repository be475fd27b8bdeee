from functools import lru_cache
from pydantic_settings import BaseSettings

from ..services.metadata import DuplicateKeyPolicy

class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    max_input_chars: int = 200_000
    duplicate_metadata_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST
    tolerant: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {
        "env_file": ".env",
        "env_prefix": "COOKLANG_",
        "extra": "ignore",
    }

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
