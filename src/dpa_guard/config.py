import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Remote DPA list (Supabase REST endpoint)
    api_url: str = os.getenv("DPA_API_URL", "")
    api_key: str = os.getenv("DPA_API_KEY", "")
    api_host: str = os.getenv("DPA_API_HOST", "")
    user_agent: str = os.getenv("DPA_USER_AGENT", "SB29-guard-chrome")
    http_timeout: float = float(os.getenv("DPA_HTTP_TIMEOUT", "30"))

    # OAuth redirect flow
    auth_provider: str = os.getenv("DPA_AUTH_PROVIDER", "google")
    redirect_url: str = os.getenv("DPA_REDIRECT_URL", "http://localhost:8000/auth/callback")
    auth_callback_url: str | None = os.getenv("DPA_AUTH_CALLBACK_URL")
    auth_timeout: float = float(os.getenv("DPA_AUTH_TIMEOUT", "300"))  # interactive prompt, seconds

    # Cache
    cache_ttl: int = int(os.getenv("DPA_CACHE_TTL", "86400"))  # 24 hours
    store_prefix: str = os.getenv("DPA_STORE_PREFIX", "dpa_guard")
    store_backend: str = os.getenv("DPA_STORE_BACKEND", "redis")  # or "memory"

    # Periodic refresh
    refresh_timer_name: str = "refreshDpaList"
    refresh_initial_delay: float = float(os.getenv("DPA_REFRESH_INITIAL_DELAY", "60"))
    refresh_period: float = float(os.getenv("DPA_REFRESH_PERIOD", os.getenv("DPA_CACHE_TTL", "86400")))

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_bind_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def cache_ttl_ms(self) -> int:
        """Cache TTL in milliseconds, the unit fetch timestamps are stored in."""
        return self.cache_ttl * 1000

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("DPA_CACHE_TTL must be a positive number of seconds")

        if self.refresh_period <= 0:
            raise ValueError("DPA_REFRESH_PERIOD must be a positive number of seconds")

        if self.auth_timeout <= 0:
            raise ValueError("DPA_AUTH_TIMEOUT must be a positive number of seconds")

        if self.refresh_initial_delay < 0:
            raise ValueError("DPA_REFRESH_INITIAL_DELAY must not be negative")

        if self.store_backend not in ("redis", "memory"):
            raise ValueError(f"DPA_STORE_BACKEND must be redis or memory, got {self.store_backend}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
