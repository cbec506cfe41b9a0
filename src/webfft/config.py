"""
Engine configuration loaded from YAML.

Example (the shipped ``webfft/configs/default.yaml``)::

    engine:
      size: 1024
      log_level: WARNING
"""

import logging
from dataclasses import dataclass, fields, asdict
from typing import Dict

import yaml

from .engine import validate_size
from .utils.logging import get_logger

logger = get_logger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class EngineConfig:
    """Settings for an ``FFTEngine``."""
    size: int = 1024
    log_level: str = 'WARNING'

    def __post_init__(self):
        self.size = validate_size(self.size)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level {self.log_level!r}, expected one of {LOG_LEVELS}")

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, config: Dict) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        for key in config:
            if key not in known:
                logger.warning(f"Ignoring unknown engine config key: {key}")
        return cls(**{k: v for k, v in config.items() if k in known})

    def to_dict(self) -> Dict:
        return asdict(self)


def load_yaml(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str) -> EngineConfig:
    """Load the ``engine`` section of a YAML file."""
    config = load_yaml(config_path)
    return EngineConfig.from_dict(config.get('engine', {}) or {})
