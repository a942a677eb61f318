# config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from index.errors import ConfigError
from index.tfidf import STALE_POLICIES
from processing.tokenize import Rule, get_rule

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class EngineConfig:
    normalization: str = "punctuation"  # "punctuation" | "measurements" | "whitespace"
    stale_weights: str = "warn"  # "warn" | "raise" | "ignore"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            normalization=os.getenv("VSM_NORMALIZATION", cls.normalization),
            stale_weights=os.getenv("VSM_STALE_WEIGHTS", cls.stale_weights).lower(),
            log_level=os.getenv("VSM_LOG_LEVEL", cls.log_level).upper(),
        )

    def rule(self) -> Rule:
        return get_rule(self.normalization)

    def validate(self) -> EngineConfig:
        self.rule()
        if self.stale_weights not in STALE_POLICIES:
            raise ConfigError(f"VSM_STALE_WEIGHTS must be one of {STALE_POLICIES}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"unknown log level: {self.log_level!r}")
        return self


def load_config() -> EngineConfig:
    """Read and validate the environment; raises ConfigError on bad values."""
    return EngineConfig.from_env().validate()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
