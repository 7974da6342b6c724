"""
Configuration settings for the redaction layer.

Settings are loaded from environment variables prefixed with REDACTION_
(e.g. REDACTION_PLACEHOLDER), with sensible defaults. A .env file is
honoured for local development.

Policies read these values once, when they are constructed. Changing the
settings afterwards does not affect existing policies.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class RedactionSettings(BaseSettings):
    """Redaction defaults loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_prefix="REDACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Redaction defaults ===
    PLACEHOLDER: str = "[Hidden Data]"
    REDACT_ENABLED: bool = True  # False: redacted fields resolve to None
    OMIT_NULL_REDACTED_KEYS: bool = True  # Drop None-redacted keys from dumps
    
    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"


# Global settings instance
settings = RedactionSettings()
