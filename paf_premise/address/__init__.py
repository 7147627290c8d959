"""
Premise formatting for PAF addresses.

formatter() is the entry point; the individual rules and helpers are exported
for testing.
"""

from .rules import (
    formatter,
    select_rule,
    rule1,
    rule2,
    rule3,
    rule4,
    rule5,
    rule6,
    rule7,
    undocumented_rule,
    po_box,
    name_exception,
    check_building_range,
    premise_localities,
    append_organisation_info,
    combine_premise,
)
from .batch import format_addresses

__all__ = [
    "formatter",
    "select_rule",
    "format_addresses",
    "rule1",
    "rule2",
    "rule3",
    "rule4",
    "rule5",
    "rule6",
    "rule7",
    "undocumented_rule",
    "po_box",
    "name_exception",
    "check_building_range",
    "premise_localities",
    "append_organisation_info",
    "combine_premise",
]
