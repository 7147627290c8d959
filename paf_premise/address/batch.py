# paf_premise/address/batch.py

import logging
from typing import Any, Iterable, List, Optional

from paf_premise.address.rules import RULES, select_rule
from paf_premise.schemas.premise import FormattedPremise
from paf_premise.telemetry.premise_metrics import PremiseMetrics

logger = logging.getLogger(__name__)


def format_addresses(
    addresses: Iterable[Any],
    metrics: Optional[PremiseMetrics] = None,
) -> List[FormattedPremise]:
    """
    Format a batch of addresses, in order.

    Args:
        addresses: Address models or mappings
        metrics: Optional collector; one record per address

    Returns:
        One FormattedPremise per input address
    """
    results: List[FormattedPremise] = []
    for address in addresses:
        rule = select_rule(address)
        result = RULES[rule](address)
        if metrics is not None:
            metrics.record(address, rule, result)
        results.append(result)

    logger.debug(f"Formatted {len(results)} premises")
    return results
