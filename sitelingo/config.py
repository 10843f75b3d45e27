"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from sitelingo.core.languages import Language, parse_language


PLACEHOLDER_API_KEYS = {"", "your-api-key-here"}


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # ==========================================================================
    # Environment
    # ==========================================================================
    
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    
    # ==========================================================================
    # API Server
    # ==========================================================================
    
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    
    # ==========================================================================
    # Text-generation provider
    # ==========================================================================
    
    # Accepts either PROVIDER_API_KEY or DEEPSEEK_API_KEY
    provider_api_key: str = ""
    deepseek_api_key: str = ""  # Alias for provider_api_key
    provider_api_url: str = "https://api.deepseek.com/v1/chat/completions"
    provider_model: str = "deepseek-chat"
    provider_timeout_seconds: float = 30.0
    provider_max_concurrency: int = 4
    provider_max_tokens: int = 2000
    # 1 = no retries; retries happen in the engines, never in the client
    provider_max_attempts: int = 1
    
    translate_temperature: float = 0.3
    optimize_temperature: float = 0.7
    business_domain: str = "architecture and construction"
    
    # ==========================================================================
    # Cache
    # ==========================================================================
    
    cache_ttl_seconds: int = 24 * 60 * 60
    cache_max_entries: int = 10_000
    
    # ==========================================================================
    # Languages & fan-out
    # ==========================================================================
    
    source_language_default: str = "de"
    supported_languages: str = "de,en,fr,it,es"
    fanout_concurrency: int = 4
    
    # Field -> context hint table (YAML); empty = bundled table
    context_hints_path: str = ""
    
    # ==========================================================================
    # Helpers
    # ==========================================================================
    
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
    
    @property
    def resolved_api_key(self) -> str:
        return self.provider_api_key or self.deepseek_api_key
    
    @property
    def provider_configured(self) -> bool:
        """Whether remote calls should be attempted at all."""
        return self.resolved_api_key.strip() not in PLACEHOLDER_API_KEYS
    
    @property
    def supported_languages_list(self) -> list[Language]:
        codes = [c for c in self.supported_languages.split(",") if c.strip()]
        return [parse_language(c) for c in codes]
    
    @property
    def source_language(self) -> Language:
        return parse_language(self.source_language_default, self.supported_languages_list)
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
