"""
Central configuration for engine tunables and logging.
Pydantic models for type-safe configuration management.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    search_depth: int = Field(default=6, ge=1, le=10, description="Plies searched below each root move")
    parallel_search: bool = Field(default=True, description="Search root moves in worker processes")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Worker processes (None = CPU count)")
    shuffle_roots: bool = Field(default=True, description="Shuffle root candidates before ordering")
    seed: Optional[int] = Field(default=None, description="Seed for root shuffling")

    @field_validator('search_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)

    @field_validator('parallel_search', 'shuffle_roots', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(v)


class MatchSettings(BaseModel):
    """Engine-vs-engine match settings."""

    games: int = Field(default=30, ge=1, description="Number of games to play")
    max_moves: int = Field(default=200, ge=1, description="Plies after which a game is a tie")

    @field_validator('games', 'max_moves', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class DraughtsConfig(BaseModel):
    """Main configuration model for the draughts engine."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    match: MatchSettings = Field(default_factory=MatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'DraughtsConfig':
        """Create configuration from environment variables."""
        workers = os.getenv('DRAUGHTS_WORKERS')
        seed = os.getenv('DRAUGHTS_SEED')
        return cls(
            engine=EngineSettings(
                search_depth=os.getenv('DRAUGHTS_DEPTH', '6'),
                parallel_search=os.getenv('DRAUGHTS_PARALLEL', 'true'),
                max_workers=int(workers) if workers else None,
                seed=int(seed) if seed else None,
            ),
            match=MatchSettings(
                games=os.getenv('DRAUGHTS_GAMES', '30'),
                max_moves=os.getenv('DRAUGHTS_MAX_MOVES', '200'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('DRAUGHTS_LOG_LEVEL', 'INFO'),
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
    def load_from_file(cls, filepath: str) -> 'DraughtsConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            match=MatchSettings(**data.get('match', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )


# Global configuration instance
_config: Optional[DraughtsConfig] = None


def get_config() -> DraughtsConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DraughtsConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> DraughtsConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = DraughtsConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_match_settings() -> MatchSettings:
    return get_config().match


def setup_logging() -> None:
    """Configure root logging once, controlled by DRAUGHTS_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    level: int = getattr(logging, get_config().logging.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
