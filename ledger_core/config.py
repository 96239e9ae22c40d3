"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Ledger core configuration"""
    
    # Validation rules
    timestamp_tolerance_seconds: float = 2.0  # How far in the past a transaction may be dated
    amount_precision: int = 28  # Decimal context precision
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    enable_operation_logging: bool = True
    
    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
