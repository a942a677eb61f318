from __future__ import annotations


class VsmError(Exception):
    """Base class for retrieval engine errors."""


class ConfigError(VsmError, ValueError):
    pass


class UnknownRuleError(ConfigError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown normalization rule: {name!r}")
        self.name = name


class StaleWeightsError(VsmError):
    """Search was attempted after a merge without recomputing weights."""
