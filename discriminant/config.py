"""
Central configuration for engine, rules and match tunables.
Pydantic models give type-safe, validated settings.
"""
from __future__ import annotations

import os
import logging
from typing import Dict, Any, Optional, Tuple
from pydantic import BaseModel, Field, field_validator


ConfigDict = Dict[str, Any]

VALID_PLAYERS = ("RED", "BLUE")
STALEMATE_POLICIES = ("pass", "forfeit", "none")


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    default_depth: int = Field(default=3, ge=1, le=8, description="Default search depth in plies")
    use_pruning: bool = Field(default=True, description="Use alpha-beta pruning (False runs plain minimax)")

    @field_validator('default_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class GameRulesSettings(BaseModel):
    """Game rules and variant settings."""

    starting_player: str = Field(default="BLUE", description="Player who moves first (RED or BLUE)")
    min_chain_length: int = Field(default=2, ge=2, le=9, description="Shortest chain evaluated as an equation")
    stalemate_policy: str = Field(default="pass", description="What happens when the player to move is stuck")

    @field_validator('starting_player', mode='before')
    @classmethod
    def validate_player(cls, v):
        v_upper = str(v).upper()
        if v_upper not in VALID_PLAYERS:
            raise ValueError(f"starting_player must be one of {VALID_PLAYERS}")
        return v_upper

    @field_validator('stalemate_policy', mode='before')
    @classmethod
    def validate_policy(cls, v):
        v_lower = str(v).lower()
        if v_lower not in STALEMATE_POLICIES:
            raise ValueError(f"stalemate_policy must be one of {STALEMATE_POLICIES}")
        return v_lower


class MatchSettings(BaseModel):
    """Computer-versus-computer match settings."""

    max_moves: int = Field(default=200, ge=1, description="Moves after which a game is scored as a draw")
    epsilon: float = Field(default=0.1, ge=0, le=1.0, description="Probability of playing a random legal move")
    depths: Tuple[int, ...] = Field(default=(1, 2, 3), description="Search depths varied between games")

    @field_validator('epsilon', mode='before')
    @classmethod
    def validate_float_fields(cls, v):
        return float(v)

    @field_validator('depths', mode='before')
    @classmethod
    def validate_depths(cls, v):
        if isinstance(v, str):
            v = [p for p in v.replace(' ', '').split(',') if p]
        depths = tuple(int(d) for d in v)
        if not depths or any(d < 1 for d in depths):
            raise ValueError("depths must be a non-empty list of positive integers")
        return depths


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="discriminant.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class DiscriminantConfig(BaseModel):
    """Main configuration model for the project."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    rules: GameRulesSettings = Field(default_factory=GameRulesSettings)
    match: MatchSettings = Field(default_factory=MatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'DiscriminantConfig':
        """Create configuration from environment variables."""
        return cls(
            engine=EngineSettings(
                default_depth=int(os.getenv('DISCRIMINANT_DEPTH', '3')),
                use_pruning=os.getenv('DISCRIMINANT_PRUNING', 'true').lower() == 'true',
            ),
            rules=GameRulesSettings(
                starting_player=os.getenv('DISCRIMINANT_START', 'BLUE'),
                min_chain_length=int(os.getenv('DISCRIMINANT_MIN_CHAIN', '2')),
                stalemate_policy=os.getenv('DISCRIMINANT_STALEMATE', 'pass'),
            ),
            match=MatchSettings(
                max_moves=int(os.getenv('DISCRIMINANT_MAX_MOVES', '200')),
                epsilon=os.getenv('DISCRIMINANT_EPSILON', '0.1'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('DISCRIMINANT_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('DISCRIMINANT_LOG_FILE', 'false').lower() == 'true',
            )
        )

    def to_dict(self) -> ConfigDict:
        """Convert configuration to dictionary."""
        return {
            'engine': self.engine.model_dump(),
            'rules': self.rules.model_dump(),
            'match': {**self.match.model_dump(), 'depths': list(self.match.depths)},
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        import json
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'DiscriminantConfig':
        """Load configuration from JSON file."""
        import json

        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            rules=GameRulesSettings(**data.get('rules', {})),
            match=MatchSettings(**data.get('match', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: ConfigDict) -> None:
        """Update configuration from a nested dictionary, re-validating each section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[DiscriminantConfig] = None


def get_config() -> DiscriminantConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DiscriminantConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> DiscriminantConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = DiscriminantConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_game_rules() -> GameRulesSettings:
    return get_config().rules


def get_match_settings() -> MatchSettings:
    return get_config().match


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by the logging settings."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
