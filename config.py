from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Runtime settings, read from VARIANT_SELECTOR_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="VARIANT_SELECTOR_",
        env_file=".env",
        extra="ignore",
    )

    catalog_file: Path = BASE_DIR / "products.json"
    product_path_prefix: str = "/products"
    cors_origins: list[str] = ["http://localhost:3000"]
    gzip_minimum_size: int = 500
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
