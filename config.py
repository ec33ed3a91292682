"""
Central configuration for the checkers engine and its front end.
Pydantic models give type-checked settings loaded from the environment or a JSON file.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class UISettings(BaseModel):
    """Terminal display settings."""

    use_unicode: bool = Field(default=True, description="Use Unicode characters for pieces")
    show_indices: bool = Field(default=True, description="Show square numbers on empty dark squares")
    highlight_moves: bool = Field(default=True, description="Mark squares of movable pieces")

    @field_validator('use_unicode', 'show_indices', 'highlight_moves', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class EngineSettings(BaseModel):
    """Search engine configuration."""

    default_depth: int = Field(default=4, ge=1, le=10, description="Search depth in plies")

    @field_validator('default_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="checkers.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class CheckersConfig(BaseModel):
    """Main configuration model."""

    ui: UISettings = Field(default_factory=UISettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'CheckersConfig':
        """Create configuration from environment variables."""
        return cls(
            ui=UISettings(
                use_unicode=_env_flag('CHECKERS_UNICODE', 'true'),
                show_indices=_env_flag('CHECKERS_INDICES', 'true'),
            ),
            engine=EngineSettings(
                default_depth=int(os.getenv('CHECKERS_DEPTH', '4')),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('CHECKERS_LOG_LEVEL', 'INFO'),
                log_to_file=_env_flag('CHECKERS_LOG_FILE', 'false'),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath
        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'CheckersConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            ui=UISettings(**data.get('ui', {})),
            engine=EngineSettings(**data.get('engine', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from a {section: {key: value}} dictionary, revalidating each section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[CheckersConfig] = None


def get_config() -> CheckersConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = CheckersConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> CheckersConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = CheckersConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once from LoggingSettings (CHECKERS_LOG_LEVEL)."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    name = (level or settings.log_level).upper()
    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
