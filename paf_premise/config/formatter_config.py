"""
Formatter configuration.

Supports:
- Default for `merge_sub_and_building` when a raw record doesn't carry it
- Log level used for metrics summaries
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from paf_premise.utils.accessors import parse_flag


@dataclass
class FormatterConfig:
    """Configuration for building addresses and reporting on formatting runs."""

    # Used by Address.from_record() when the record has no merge flag
    default_merge_sub_and_building: bool = False

    # Level for PremiseMetrics.log_summary() when the caller passes none
    metrics_log_level: str = "INFO"

    @property
    def metrics_log_level_value(self) -> int:
        return _level_value("metrics_log_level", self.metrics_log_level)

    @classmethod
    def from_env(cls) -> "FormatterConfig":
        """Load config from environment variables."""
        raw_merge = os.getenv("PAF_MERGE_SUB_AND_BUILDING", "false")
        try:
            merge = parse_flag(raw_merge)
        except ValueError as e:
            raise ValueError(f"PAF_MERGE_SUB_AND_BUILDING: {e}") from e

        level = os.getenv("PAF_METRICS_LOG_LEVEL", "INFO").strip().upper()
        _level_value("PAF_METRICS_LOG_LEVEL", level)

        return cls(
            default_merge_sub_and_building=merge,
            metrics_log_level=level,
        )


def _level_value(source: str, name: str) -> int:
    value = logging.getLevelName(name.upper())
    if not isinstance(value, int):
        raise ValueError(f"{source}: unknown logging level {name!r}")
    return value


_default_config: Optional[FormatterConfig] = None


def get_formatter_config() -> FormatterConfig:
    """Get or create the environment-based default config."""
    global _default_config
    if _default_config is None:
        _default_config = FormatterConfig.from_env()
    return _default_config


def reset_formatter_config() -> None:
    """Drop the cached default so the next call re-reads the environment."""
    global _default_config
    _default_config = None
