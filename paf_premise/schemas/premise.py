# paf_premise/schemas/premise.py

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict


class PremiseRule(str, Enum):
    """Which PAF premise rule formatted an address."""
    RULE_1 = "rule_1"            # no building name, number or sub building name
    RULE_2 = "rule_2"            # building number only
    RULE_3 = "rule_3"            # building name only
    RULE_4 = "rule_4"            # building name and number
    RULE_5 = "rule_5"            # sub building name and building number
    RULE_6 = "rule_6"            # sub building name and building name
    RULE_7 = "rule_7"            # sub building name, building name and number
    UNDOCUMENTED = "undocumented"  # sub building name only
    PO_BOX = "po_box"


@dataclass(frozen=True)
class FormattedPremise:
    """
    Premise portion of an address, ready for printing.

    - premise: canonical single-string form of every premise level
    - line_1..line_3: printable lines, most specific first
    """
    premise: str
    line_1: str
    line_2: str
    line_3: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class BuildingRangeMatch:
    """A building name split into its text part and trailing number range."""
    range: str
    actual_name: str
