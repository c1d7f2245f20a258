"""Tests for configuration classes."""

import logging
import os
from decimal import Decimal
from unittest.mock import patch


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Test that default CORS origins are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert "http://localhost:8000" in config.allowed_origins

    def test_cors_parses_env_var(self):
        """Test that CORS origins are parsed from environment variable."""
        env_origins = "  http://example.com  ,http://localhost:3000,"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            origins = _parse_cors_origins()

            assert origins == ["http://example.com", "http://localhost:3000"]


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 120

    def test_rate_limit_from_env(self):
        with patch.dict(
            os.environ,
            {"RATE_LIMIT_ENABLED": "FALSE", "RATE_LIMIT_RPM": "30"},
        ):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 30


class TestRedisConfig:
    """Tests for RedisConfig class."""

    def test_redis_url_without_password(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RedisConfig

            assert RedisConfig().url == "redis://localhost:6379/0"

    def test_redis_url_with_password(self):
        with patch.dict(
            os.environ,
            {"REDIS_HOST": "redis.example.com", "REDIS_DB": "2", "REDIS_PASSWORD": "s3cret"},
        ):
            from config import RedisConfig

            assert RedisConfig().url == "redis://:s3cret@redis.example.com:6379/2"


class TestStorageConfig:
    """Tests for StorageConfig class."""

    def test_storage_defaults(self):
        """The file backend is used unless configured otherwise."""
        with patch.dict(os.environ, {}, clear=True):
            from config import StorageConfig

            config = StorageConfig()

            assert config.backend == "file"
            assert config.path.endswith(".plinko_store.json")
            assert config.key_prefix == "plinko:"

    def test_storage_from_env(self):
        with patch.dict(
            os.environ,
            {"STORAGE_BACKEND": "Redis", "STORAGE_PATH": "/tmp/p.json"},
        ):
            from config import StorageConfig

            config = StorageConfig()

            assert config.backend == "redis"
            assert config.path == "/tmp/p.json"


class TestBoardAndGameConfig:
    """Tests for BoardConfig and GameConfig."""

    def test_board_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import BoardConfig

            config = BoardConfig()

            assert config.rows == 16
            assert config.risk == "medium"
            assert (config.width, config.height, config.row_spacing) == (300.0, 450.0, 25.0)

    def test_board_from_env(self):
        with patch.dict(os.environ, {"PLINKO_ROWS": "8", "PLINKO_RISK": "HIGH"}):
            from config import BoardConfig

            config = BoardConfig()

            assert config.rows == 8
            assert config.risk == "high"

    def test_game_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import GameConfig

            config = GameConfig()

            assert config.starting_balance == Decimal("1000")
            assert config.trail_capacity == 3
            assert config.auto_drop_interval == 1.0
            assert config.highlight_duration == 0.5

    def test_starting_balance_from_env(self):
        with patch.dict(os.environ, {"STARTING_BALANCE": "250.50"}):
            from config import GameConfig

            assert GameConfig().starting_balance == Decimal("250.50")


class TestLogging:
    """Tests for logging setup."""

    def test_log_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            from config import AppConfig

            assert AppConfig().log_level == "DEBUG"

    def test_setup_logging_explicit_level(self):
        from config import LOG_FORMAT, setup_logging

        with patch("logging.basicConfig") as basic_config:
            setup_logging("warning")

        basic_config.assert_called_once_with(
            level=logging.WARNING, format=LOG_FORMAT, force=True
        )

    def test_setup_logging_unknown_level_falls_back_to_info(self):
        from config import setup_logging

        with patch("logging.basicConfig") as basic_config:
            setup_logging("chatty")

        assert basic_config.call_args.kwargs["level"] == logging.INFO
