"""
Telemetry and Metrics for Premise Formatting

Lightweight counters over formatting runs: which rules fire, how many lines
the output fills, how often organisation details or the merge flag show up.

Design Philosophy:
- Plain counters, JSON summary (no dashboards)
- Owned by the caller; formatter() never records anything on its own
- Privacy-safe (no address text, only aggregates)

Usage:
    from paf_premise.telemetry.premise_metrics import PremiseMetrics

    metrics = PremiseMetrics()
    results = format_addresses(addresses, metrics=metrics)

    summary = metrics.get_summary()
"""

import json
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from paf_premise.config.formatter_config import get_formatter_config
from paf_premise.schemas.premise import FormattedPremise, PremiseRule
from paf_premise.utils.accessors import extract, extract_flag, is_empty

logger = logging.getLogger(__name__)


class PremiseMetrics:
    """
    Telemetry collector for premise formatting.

    Tracks:
    - Rule distribution (rule_1 .. rule_7, undocumented, po_box)
    - Output line usage (how many of line_1..line_3 are filled)
    - Organisation / merge flag presence
    """

    def __init__(self):
        self.counters = defaultdict(int)
        self.start_time = datetime.now(timezone.utc)
        self.address_count = 0

    def record(
        self,
        address: Any,
        rule: PremiseRule,
        result: FormattedPremise,
    ) -> None:
        """
        Record one formatted address.

        Args:
            address: The address that was formatted
            rule: Rule selected by select_rule()
            result: Output of the rule
        """
        self.address_count += 1

        self.counters[f"rule.{rule.value}"] += 1

        lines_used = sum(
            1 for line in (result.line_1, result.line_2, result.line_3)
            if not is_empty(line)
        )
        self.counters[f"lines.{lines_used}"] += 1

        if not is_empty(extract(address, "organisation_name")):
            self.counters["special.organisation"] += 1

        if extract_flag(address, "merge_sub_and_building"):
            self.counters["special.merge_flag"] += 1

    def get_summary(self) -> Dict[str, Any]:
        """
        Summary with raw counts and percentages of addresses recorded.

        Returns:
            Dict suitable for json.dumps()
        """
        elapsed = (datetime.now(timezone.utc) - self.start_time).total_seconds()

        percentages = {}
        for key, count in sorted(self.counters.items()):
            percentages[key] = {
                "count": count,
                "percentage": round(100 * count / self.address_count, 2)
                if self.address_count
                else 0.0,
            }

        rule_distribution = {
            rule.value: self.counters.get(f"rule.{rule.value}", 0)
            for rule in PremiseRule
        }

        return {
            "address_count": self.address_count,
            "elapsed_seconds": round(elapsed, 3),
            "rule_distribution": rule_distribution,
            "counters": percentages,
        }

    def log_summary(self, level: Optional[int] = None) -> None:
        """
        Log metrics summary as JSON.

        Args:
            level: Logging level (default: PAF_METRICS_LOG_LEVEL)
        """
        if level is None:
            level = get_formatter_config().metrics_log_level_value
        summary = self.get_summary()
        logger.log(level, f"Premise Metrics Summary: {json.dumps(summary, indent=2)}")

    def export_json(self, filepath: str) -> None:
        """
        Export metrics to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        summary = self.get_summary()
        with open(filepath, "w") as f:
            json.dump(summary, f, indent=2)


# Global metrics instance (optional, for convenience)
_global_metrics: Optional[PremiseMetrics] = None


def get_global_metrics() -> PremiseMetrics:
    """Get or create global metrics instance."""
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = PremiseMetrics()
    return _global_metrics


def reset_global_metrics() -> None:
    """Reset global metrics instance."""
    global _global_metrics
    _global_metrics = PremiseMetrics()


def record_formatted_premise(
    address: Any,
    rule: PremiseRule,
    result: FormattedPremise,
) -> None:
    """Record one formatted address to the global metrics."""
    get_global_metrics().record(address, rule, result)
