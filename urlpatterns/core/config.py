"""Configuration management"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    api_title: str = "URL Pattern Analyzer Service"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"
    max_urls_per_request: int = 300_000

    # Pattern Extraction Settings
    placeholder: str = "…"
    host_mask_threshold: int = 3  # mask subdomains only up to this many distinct values
    max_path_segments: int = 128  # deeper paths are rejected as malformed

    # Rendering Settings
    url_display_limit: int = 100

    # Sitemap Collection Settings
    sitemap_batch_size: int = 3  # clamped to 3-5
    max_child_sitemaps: int = 50
    max_collected_urls: int = 300_000
    fetch_timeout: int = 30  # seconds
    user_agent: str = "SitemapFetcher/1.0"

    # Development
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
