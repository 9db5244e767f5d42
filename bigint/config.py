"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class BigIntConfig(BaseSettings):
    """Arbitrary-precision integer library configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout

    # Parsing limits
    max_parse_digits: int = 0  # 0 = unlimited

    # Narrowing conversions (to_long / to_int)
    strict_narrowing: bool = False  # True raises instead of truncating

    class Config:
        env_prefix = "BIGINT_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BigIntConfig()


def get_config() -> BigIntConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BigIntConfig:
    """Reload configuration from environment"""
    global config
    config = BigIntConfig()
    return config
