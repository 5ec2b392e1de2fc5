"""Configuration models using Pydantic for validation."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_ARCHIVE_DIRNAME = "arpo"


class KeyBindings(BaseModel):
    """Keys mapped to each interactive action, in normalized key names."""

    up: list[str] = Field(default_factory=lambda: ["k", "w", "up"])
    down: list[str] = Field(default_factory=lambda: ["j", "s", "down"])
    toggle: list[str] = Field(default_factory=lambda: ["space"])
    commit: list[str] = Field(default_factory=lambda: ["enter"])
    quit: list[str] = Field(default_factory=lambda: ["q", "ctrl+c"])

    @field_validator("up", "down", "toggle", "commit", "quit")
    @classmethod
    def not_empty(cls, v: list[str]) -> list[str]:
        """Every action needs at least one key."""
        if not v:
            raise ValueError("at least one key must be bound")
        return [key.lower() for key in v]

    def action_for(self, key: str) -> str | None:
        """Return the action bound to ``key``, or None."""
        for action in ("up", "down", "toggle", "commit", "quit"):
            if key in getattr(self, action):
                return action
        return None


class ThemeSettings(BaseModel):
    """Rich style strings for the interactive display."""

    spinner: str = Field(default="color(63)")
    help: str = Field(default="color(241)")
    placeholder: str = Field(default="color(241)")
    duration: str = Field(default="color(241)")
    header: str = Field(default="bold color(10)")
    row: str = Field(default="#aa77aa")
    border: str = Field(default="#aa3388")
    cursor: str = Field(default="reverse")
    check_mark: str = Field(default="color(42)")


class UISettings(BaseModel):
    """Interactive display settings."""

    page_size: int = Field(default=10, ge=1, le=100, description="Rows shown per page")
    refresh_per_second: int = Field(default=12, ge=1, le=60)
    keys: KeyBindings = Field(default_factory=KeyBindings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_dir: Path = Field(
        default=Path.home() / ".arpo" / "logs", description="Directory for log files"
    )
    max_bytes: int = Field(
        default=5 * 1024 * 1024, ge=1024, description="Max log file size before rotation (bytes)"
    )
    backup_count: int = Field(default=3, ge=1, description="Number of rotated log files to keep")
    console_enabled: bool = Field(
        default=False, description="Log to the terminal (interferes with the live display)"
    )
    file_enabled: bool = Field(default=True, description="Enable file logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class ArpoConfig(BaseModel):
    """Main configuration for arpo."""

    projects_root: Path = Field(
        default=Path("."), description="Directory whose subdirectories can be archived"
    )
    archive_path: Path | None = Field(
        default=None, description="Archive destination (defaults to <projects_root>/arpo)"
    )

    history_size: int = Field(
        default=5, ge=1, le=5, description="Completed moves kept on screen (at most 5)"
    )
    skip_hidden: bool = Field(default=False, description="Do not list dot-directories")
    dry_run: bool = Field(default=False, description="Measure moves without touching the disk")
    on_conflict: Literal["error", "rename"] = Field(
        default="error", description="What to do when the archive already holds a project"
    )
    max_workers: int = Field(
        default=2, ge=1, le=8, description="Worker threads for background commands"
    )

    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def archive_root(self) -> Path:
        """Resolved archive destination."""
        if self.archive_path is not None:
            return self.archive_path
        return self.projects_root / DEFAULT_ARCHIVE_DIRNAME

    class Config:
        """Pydantic config."""

        validate_assignment = True
        extra = "forbid"
