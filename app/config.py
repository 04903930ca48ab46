from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "bowlingalleys"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Upstream REST API (sitemap, venue export). Empty is reported per request.
    api_base_url: str = ""
    site_url: str = "https://bowlingalleys.io"
    default_host: str = "bowlingalleys.io"

    # Category pages fill sparse cities up to this many venues
    backfill_min_count: int = 20

    sitemap_timeout_s: float = 90.0
    sitemap_min_bytes: int = 500

    model_config = {"env_file": ".env"}


settings = Settings()
