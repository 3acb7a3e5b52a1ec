"""
NoteKeep — Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: JSON document holding lastId and every note
    # Created with {"lastId": 0, "notes": []} on first access if missing
    notes_file: str = Field(
        default="./notes.json",
        description="Path of the JSON state file holding all notes",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    # PORT is accepted too, for platforms that only inject that variable
    backend_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("backend_port", "port"),
    )

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # NOTES_FILE and notes_file both work
        "extra": "ignore",
    }

    @property
    def notes_path(self) -> Path:
        return Path(self.notes_file).expanduser()

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the state file location is usable.
        When:  Called during app startup (lifespan).
        How:   Creates the parent directory and checks an existing path is a file.
               Raises ValueError listing every problem found.
        """
        errors = []
        path = self.notes_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            errors.append(f"NOTES_FILE directory '{path.parent}' cannot be created: {e}")
        if path.exists() and not path.is_file():
            errors.append(f"NOTES_FILE '{path}' exists but is not a regular file")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
