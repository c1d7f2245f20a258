"""Configuration management with environment variable support."""

import logging
import os
import secrets
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "120"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class StorageConfig:
    """Where balance, stats and the multiplier trail are persisted."""

    backend: Literal["memory", "file", "redis"] = field(
        default_factory=lambda: os.getenv("STORAGE_BACKEND", "file").lower()  # type: ignore
    )
    path: str = field(
        default_factory=lambda: os.getenv(
            "STORAGE_PATH", os.path.join(os.path.expanduser("~"), ".plinko_store.json")
        )
    )
    key_prefix: str = field(default_factory=lambda: os.getenv("STORAGE_PREFIX", "plinko:"))


@dataclass(frozen=True)
class BoardConfig:
    """Default board layout, in board units."""

    rows: int = field(default_factory=lambda: int(os.getenv("PLINKO_ROWS", "16")))
    risk: str = field(default_factory=lambda: os.getenv("PLINKO_RISK", "medium").lower())
    width: float = 300.0
    height: float = 450.0
    row_spacing: float = 25.0


@dataclass(frozen=True)
class PhysicsSettings:
    """Integration constants, per tick."""

    gravity: float = 0.2
    horizontal_speed: float = 0.8
    collision_radius: float = 5.0
    push_out: float = 6.0
    max_ticks: int = 10_000  # Headless play cap per ball


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    starting_balance: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("STARTING_BALANCE", "1000"))
    )
    default_wager: Decimal = Decimal("1")
    trail_capacity: int = 3
    auto_drop_interval: float = 1.0  # seconds
    highlight_duration: float = 0.5  # seconds


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    redis: RedisConfig = field(default_factory=RedisConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    board: BoardConfig = field(default_factory=BoardConfig)
    physics: PhysicsSettings = field(default_factory=PhysicsSettings)
    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit level)."""
    logging.basicConfig(
        level=getattr(logging, (level or config.log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )


# Global configuration instance
config = AppConfig()
