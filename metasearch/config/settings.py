"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Backend credentials (empty = tier not configured)
    exa_api_key: str = ""
    tavily_api_key: str = ""

    # Backend endpoints
    duckduckgo_url: str = "https://api.duckduckgo.com"
    exa_url: str = "https://api.exa.ai"
    tavily_url: str = "https://api.tavily.com"
    searxng_url: str = "http://localhost:8080"
    default_num_results: int = 10

    # Rate limiting (per backend)
    rate_limit_rps: float = 10.0
    rate_limit_burst: int = 10

    # Connection pool
    pool_max_concurrent: int = 10
    pool_max_idle_per_host: int = 20
    pool_idle_timeout: float = 90.0
    request_timeout: float = 30.0

    # Result cache
    cache_max_size: int = 1000
    cache_ttl_seconds: int = 3600

    # Tiered retrieval
    l1_threshold: float = 0.80
    l2_threshold: float = 0.85
    max_results_per_tier: int = 10
    l3_context_tokens: int = 2000
    backend_max_attempts: int = 3

    # Semantic router
    router_simple_max_length: int = 50
    router_complex_keywords: list[str] = [
        "分析",
        "比較",
        "為什麼",
        "如何",
        "evaluate",
        "analyze",
        "compare",
    ]

    # Advisory model ids per tier
    model_fast: str = "claude-haiku-4-5"
    model_balanced: str = "claude-sonnet-4-5"
    model_premium: str = "claude-opus-4-5"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
