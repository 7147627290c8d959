"""
PAF premise formatting rules.

Implements the premise rules from the Royal Mail PAF programmer's guide.
An address is classified by which of sub building name, building name and
building number are present (PO Box short-circuits everything) and exactly
one rule formats it.

Premise elements are collected least specific first:
- localities (dependant locality -> dependant thoroughfare)
- building / sub building details
- organisation details (appended last, so always line_1)

combine_premise() reverses that list into printable lines.

Exception Rule (note (a) in the guide) - a name is treated like a number when:
i)   first and last characters are numeric (eg '1to1' or '100:1')
ii)  first and penultimate characters are numeric, last is alphabetic (eg '12A')
iii) it is a single character (eg 'A')
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from paf_premise.schemas.premise import BuildingRangeMatch, FormattedPremise, PremiseRule
from paf_premise.utils.accessors import extract, extract_flag, is_empty, prepend_locality

logger = logging.getLogger(__name__)

AddressElements = List[str]
AddressFormatter = Callable[[Any], FormattedPremise]

NAME_EXCEPTION_REGEX = re.compile(r"(\d|\d.*\d|\d(.*\d)?[a-z]|[a-z])", re.IGNORECASE | re.ASCII)
BUILDING_RANGE_REGEX = re.compile(r"(\d.*\D.*\d|\d(.*\d)?[a-z]|[a-z])", re.IGNORECASE | re.ASCII)
SUB_RANGE_REGEX = re.compile(r"^unit\s", re.IGNORECASE)
STARTS_CHAR_REGEX = re.compile(r"[a-z]", re.IGNORECASE | re.ASCII)

LOCALITY_ELEMENTS = (
    "dependant_locality",
    "double_dependant_locality",
    "thoroughfare",
    "dependant_thoroughfare",
)


def not_empty(s: str) -> bool:
    return not is_empty(s)


# -----------------------------------------------------------------------------
# Predicates
# -----------------------------------------------------------------------------

def name_exception(n: str) -> bool:
    """True if `n` falls under the Exception Rule (whole string match)."""
    return NAME_EXCEPTION_REGEX.fullmatch(n) is not None


def check_building_range(building_name: str) -> Optional[BuildingRangeMatch]:
    """
    Detect a trailing number range in a building name.

    "Foo House 12-13" -> BuildingRangeMatch(range="12-13", actual_name="Foo House")
    Returns None when the last word isn't a range.
    """
    name_split = building_name.split(" ")
    last_elem = name_split.pop()
    if BUILDING_RANGE_REGEX.fullmatch(last_elem):
        return BuildingRangeMatch(range=last_elem, actual_name=" ".join(name_split))
    return None


# -----------------------------------------------------------------------------
# Element list helpers
# -----------------------------------------------------------------------------

def premise_localities(address: Any) -> AddressElements:
    """Non-empty localities, least specific first. Always a new list."""
    values = (extract(address, elem) for elem in LOCALITY_ELEMENTS)
    return [v for v in values if not_empty(v)]


def append_organisation_info(elems: AddressElements, address: Any) -> None:
    organisation_name = extract(address, "organisation_name")
    department_name = extract(address, "department_name")
    if is_empty(organisation_name):
        return
    if not_empty(department_name):
        elems.append(department_name)
    elems.append(organisation_name)


def combine_premise(elems: AddressElements, address: Any, premise: str = "") -> FormattedPremise:
    """
    Merge premise elements ordered by precedence into a FormattedPremise.

    The last (most specific) element becomes line_1, the one before it line_2,
    and everything else is joined onto line_3.
    """
    premise_elements = list(elems)
    append_organisation_info(premise_elements, address)
    premise_elements.reverse()
    line_1 = premise_elements[0] if len(premise_elements) > 0 else ""
    line_2 = premise_elements[1] if len(premise_elements) > 1 else ""
    return FormattedPremise(
        premise=premise,
        line_1=line_1,
        line_2=line_2,
        line_3=", ".join(premise_elements[2:]),
    )


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------

def rule1(address: Any) -> FormattedPremise:
    """
    Rule 1 - No building name, number or sub building name.
    Typically only an organisation name is present.
    """
    return combine_premise(premise_localities(address), address, "")


def rule2(address: Any) -> FormattedPremise:
    """Rule 2 - Building number only."""
    building_number = extract(address, "building_number")
    result = premise_localities(address)
    prepend_locality(result, building_number)
    return combine_premise(result, address, building_number)


def rule3(address: Any) -> FormattedPremise:
    """
    Rule 3 - Building name only.

    If the Exception Rule applies, the building name goes at the start of the
    first thoroughfare line (or first locality line if there's no thoroughfare).

    A building with both a name and a number range holds both in the building
    name field. When the name ends in a space followed by a range, the range is
    split off and treated as a building number; the text part stays as the
    building name. Names starting with "Unit " are left alone.
    """
    building_name = extract(address, "building_name")
    result = premise_localities(address)
    if name_exception(building_name):
        premise = building_name.lower()
        prepend_locality(result, premise)
    else:
        range_match = check_building_range(building_name)
        if range_match is not None and not SUB_RANGE_REGEX.match(building_name):
            number_range = range_match.range.lower()
            premise = f"{range_match.actual_name}, {number_range}"
            prepend_locality(result, number_range)
            result.append(range_match.actual_name)
        else:
            premise = building_name
            result.append(premise)
    return combine_premise(result, address, premise)


def rule4(address: Any) -> FormattedPremise:
    """
    Rule 4 - Building name and number.

    Building name goes on the line before the thoroughfare/locality lines; the
    number goes at the start of the first thoroughfare (or locality) line.
    """
    building_name = extract(address, "building_name")
    building_number = extract(address, "building_number")
    result = premise_localities(address)
    premise = f"{building_name}, {building_number}"
    prepend_locality(result, building_number)
    result.append(building_name)
    return combine_premise(result, address, premise)


def rule5(address: Any) -> FormattedPremise:
    """
    Rule 5 - Sub building name and building number.

    A single letter sub building ("A") joins the number ("12A"). Otherwise the
    sub building name gets its own line and the number leads the first
    thoroughfare (or locality) line.
    """
    building_number = extract(address, "building_number")
    sub_building_name = extract(address, "sub_building_name")
    result = premise_localities(address)
    if STARTS_CHAR_REGEX.fullmatch(sub_building_name):
        premise = building_number + sub_building_name
        prepend_locality(result, premise)
    else:
        premise = f"{sub_building_name}, {building_number}"
        prepend_locality(result, building_number)
        result.append(sub_building_name)
    return combine_premise(result, address, premise)


def rule6(address: Any) -> FormattedPremise:
    """
    Rule 6 - Sub building name and building name.

    - sub building is an exception: same line as, and before, the building name
    - building name is an exception: it leads the first thoroughfare line
    - merge flag set: both on one line
    - otherwise: sub building line above the building name line
    """
    sub_building_name = extract(address, "sub_building_name")
    building_name = extract(address, "building_name")
    result = premise_localities(address)
    if name_exception(sub_building_name):
        premise = f"{sub_building_name} {building_name}"
        result.append(premise)
    elif name_exception(building_name):
        premise = f"{sub_building_name}, {building_name}"
        prepend_locality(result, building_name)
        result.append(sub_building_name)
    elif extract_flag(address, "merge_sub_and_building"):
        premise = f"{sub_building_name}, {building_name}"
        result.append(premise)
    else:
        premise = f"{sub_building_name}, {building_name}"
        result.append(building_name)
        result.append(sub_building_name)
    return combine_premise(result, address, premise)


def rule7(address: Any) -> FormattedPremise:
    """
    Rule 7 - Sub building name, building name and building number.

    If the Exception Rule applies to the sub building, it shares a line with
    (and precedes) the building name.
    """
    building_name = extract(address, "building_name")
    building_number = extract(address, "building_number")
    sub_building_name = extract(address, "sub_building_name")
    result = premise_localities(address)
    prepend_locality(result, building_number)
    if name_exception(sub_building_name):
        premise = f"{sub_building_name} {building_name}, {building_number}"
        result.append(f"{sub_building_name} {building_name}")
    elif extract_flag(address, "merge_sub_and_building"):
        # Normaliser shouldn't set the merge flag alongside a building number
        logger.warning(
            "merge_sub_and_building set on an address with a building number "
            f"(udprn={extract(address, 'udprn') or '?'}); building number dropped"
        )
        result = premise_localities(address)
        premise = f"{sub_building_name}, {building_name}"
        result.append(premise)
    else:
        premise = f"{sub_building_name}, {building_name}, {building_number}"
        result.append(building_name)
        result.append(sub_building_name)
    return combine_premise(result, address, premise)


def undocumented_rule(address: Any) -> FormattedPremise:
    """
    Sub building name only.

    Not in the programmer's guide, but some records in the wild only carry a
    sub building name.
    """
    sub_building_name = extract(address, "sub_building_name")
    result = premise_localities(address)
    prepend_locality(result, sub_building_name)
    return combine_premise(result, address, sub_building_name)


def po_box(address: Any) -> FormattedPremise:
    """PO Box rule."""
    result = premise_localities(address)
    premise = f"PO Box {extract(address, 'po_box')}"
    result.append(premise)
    return combine_premise(result, address, premise)


# -----------------------------------------------------------------------------
# Dispatch
# -----------------------------------------------------------------------------

# (sub building name, building name, building number) -> rule
RULE_TABLE: Dict[Tuple[bool, bool, bool], PremiseRule] = {
    (True, True, True): PremiseRule.RULE_7,
    (True, True, False): PremiseRule.RULE_6,
    (True, False, True): PremiseRule.RULE_5,
    (True, False, False): PremiseRule.UNDOCUMENTED,
    (False, True, True): PremiseRule.RULE_4,
    (False, True, False): PremiseRule.RULE_3,
    (False, False, True): PremiseRule.RULE_2,
    (False, False, False): PremiseRule.RULE_1,
}

RULES: Dict[PremiseRule, AddressFormatter] = {
    PremiseRule.RULE_1: rule1,
    PremiseRule.RULE_2: rule2,
    PremiseRule.RULE_3: rule3,
    PremiseRule.RULE_4: rule4,
    PremiseRule.RULE_5: rule5,
    PremiseRule.RULE_6: rule6,
    PremiseRule.RULE_7: rule7,
    PremiseRule.UNDOCUMENTED: undocumented_rule,
    PremiseRule.PO_BOX: po_box,
}


def select_rule(address: Any) -> PremiseRule:
    """Pick the premise rule for an address. PO Box always wins."""
    if not_empty(extract(address, "po_box")):
        return PremiseRule.PO_BOX

    sub = not_empty(extract(address, "sub_building_name"))
    name = not_empty(extract(address, "building_name"))
    number = not_empty(extract(address, "building_number"))
    return RULE_TABLE[(sub, name, number)]


def formatter(address: Any) -> FormattedPremise:
    """Format the premise of an address."""
    rule = select_rule(address)
    logger.debug(f"Formatting premise with {rule.value}")
    return RULES[rule](address)
