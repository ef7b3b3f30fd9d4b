"""
Movie Store — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time. Services read attributes at call
       time, so tests can flip a flag on the singleton for a single case.

Behavior switches:
    The service keeps the historical contract by default: an unknown id
    answers 200 with an empty body, a malformed body is absorbed into a
    zero-valued movie, and generated ids are not checked for collisions.
    Each of those can be tightened independently.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that reproduce the baseline behavior;
    nothing is required to start the server.
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Not-Found Policy ──────────────────────────────────────────────────
    # What: GET/PUT on an unknown id answer 404 instead of an empty 200
    # DELETE is unaffected: deleting an absent id stays a silent no-op
    strict_not_found: bool = Field(default=False)

    # ── Request Bodies ────────────────────────────────────────────────────
    # What: Reject malformed movie bodies with 400 instead of absorbing them
    # into a zero-valued movie
    strict_body: bool = Field(default=False)

    # ── Id Generation ─────────────────────────────────────────────────────
    # What: Redraw random ids until one is unused by the collection
    # The id format (decimal in [0, 1_000_000)) is the same either way
    unique_ids: bool = Field(default=False)
    id_max_attempts: int = Field(default=100, ge=1, le=10_000)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # STRICT_NOT_FOUND and strict_not_found both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
