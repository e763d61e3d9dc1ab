"""Configuration settings for isoaudit."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Catalog Configuration
    default_standard: str = "ISO9001"
    catalog_dir: str | None = None  # Extra YAML catalogs to load

    # Scope Configuration
    default_sections: list[str] = [
        "section-4",
        "section-5",
        "section-6",
        "section-7",
        "section-8",
        "section-9",
        "section-10",
    ]

    # Tracing Configuration
    tracing_enabled: bool = True
    log_level: str = "INFO"
    trace_buffer_size: int = 500  # Recent events kept in memory

    model_config = {
        "env_prefix": "ISOAUDIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
