"""
Telemetry and Metrics Package

Lightweight observability for premise formatting runs.
"""

from .premise_metrics import (
    PremiseMetrics,
    get_global_metrics,
    reset_global_metrics,
    record_formatted_premise,
)

__all__ = [
    "PremiseMetrics",
    "get_global_metrics",
    "reset_global_metrics",
    "record_formatted_premise",
]
