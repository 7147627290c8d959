"""
Tests for rule selection and the nine premise rules.
"""

import logging

import pytest
from paf_premise.address import formatter, select_rule, rule3, rule5, rule6, rule7
from paf_premise.schemas.address import Address
from paf_premise.schemas.premise import FormattedPremise, PremiseRule


def lines(result: FormattedPremise):
    return (result.line_1, result.line_2, result.line_3)


class TestSelectRule:
    """Dispatch over (sub building, building name, building number)."""

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"sub_building_name": "Flat 1", "building_name": "The Tower", "building_number": "27"}, PremiseRule.RULE_7),
            ({"sub_building_name": "Flat 1", "building_name": "The Tower"}, PremiseRule.RULE_6),
            ({"sub_building_name": "Flat 1", "building_number": "27"}, PremiseRule.RULE_5),
            ({"sub_building_name": "Flat 1"}, PremiseRule.UNDOCUMENTED),
            ({"building_name": "The Tower", "building_number": "27"}, PremiseRule.RULE_4),
            ({"building_name": "The Tower"}, PremiseRule.RULE_3),
            ({"building_number": "27"}, PremiseRule.RULE_2),
            ({}, PremiseRule.RULE_1),
            ({"po_box": "61"}, PremiseRule.PO_BOX),
        ],
    )
    def test_rule_for_fields(self, fields, expected):
        assert select_rule(Address(**fields)) == expected

    def test_po_box_overrides_everything(self):
        """PO Box wins even with sub building, name and number present."""
        address = Address(
            po_box="61",
            sub_building_name="Flat 1",
            building_name="The Tower",
            building_number="27",
            thoroughfare="Johnson Street",
        )
        assert select_rule(address) == PremiseRule.PO_BOX
        result = formatter(address)
        assert result.premise == "PO Box 61"
        assert lines(result) == ("PO Box 61", "Johnson Street", "")

    def test_whitespace_fields_are_absent(self):
        address = Address(building_number="  ", building_name="\t", po_box=" ")
        assert select_rule(address) == PremiseRule.RULE_1

    def test_accepts_plain_mapping(self):
        assert select_rule({"building_number": "4"}) == PremiseRule.RULE_2


class TestRule1:
    """No building name, number or sub building name."""

    def test_localities_only(self):
        address = Address(
            thoroughfare="High Street",
            dependant_locality="Kingsley",
            double_dependant_locality="Upper Kingsley",
        )
        result = formatter(address)
        assert result.premise == ""
        assert lines(result) == ("High Street", "Upper Kingsley", "Kingsley")

    def test_organisation_only(self):
        address = Address(
            organisation_name="Acme Ltd",
            thoroughfare="High Street",
            dependant_locality="Kingsley",
        )
        result = formatter(address)
        assert result.premise == ""
        assert lines(result) == ("Acme Ltd", "High Street", "Kingsley")

    def test_empty_address(self):
        result = formatter(Address())
        assert result.to_dict() == {"premise": "", "line_1": "", "line_2": "", "line_3": ""}


class TestRule2:
    """Building number only."""

    def test_number_leads_thoroughfare(self):
        address = Address(
            building_number="1",
            thoroughfare="Acacia Avenue",
            dependant_locality="Bridgeton",
        )
        result = formatter(address)
        assert result.premise == "1"
        assert lines(result) == ("1 Acacia Avenue", "Bridgeton", "")

    def test_number_leads_dependant_thoroughfare(self):
        address = Address(
            building_number="3",
            thoroughfare="Long Road",
            dependant_thoroughfare="Cherry Close",
        )
        result = formatter(address)
        assert lines(result) == ("3 Cherry Close", "Long Road", "")

    def test_number_without_localities(self):
        result = formatter(Address(building_number="16"))
        assert result.premise == "16"
        assert lines(result) == ("16", "", "")


class TestRule3:
    """Building name only."""

    def test_exception_name_is_lowercased_inline(self):
        address = Address(building_name="1A", thoroughfare="Lansdowne Road")
        result = formatter(address)
        assert result.premise == "1a"
        assert lines(result) == ("1a Lansdowne Road", "", "")

    def test_range_is_split_off(self):
        address = Address(building_name="Victoria House 12-13", thoroughfare="High Street")
        result = rule3(address)
        assert result.premise == "Victoria House, 12-13"
        assert lines(result) == ("Victoria House", "12-13 High Street", "")

    def test_range_letter_is_lowercased(self):
        address = Address(building_name="Mill House 1A-1C", thoroughfare="Mill Lane")
        result = rule3(address)
        assert result.premise == "Mill House, 1a-1c"
        assert lines(result) == ("Mill House", "1a-1c Mill Lane", "")

    def test_unit_names_keep_their_range(self):
        address = Address(building_name="Unit 1-2", thoroughfare="High Street")
        result = rule3(address)
        assert result.premise == "Unit 1-2"
        assert lines(result) == ("Unit 1-2", "High Street", "")

    def test_plain_name_gets_own_line(self):
        address = Address(building_name="The Manor", dependant_locality="Upton")
        result = formatter(address)
        assert result.premise == "The Manor"
        assert lines(result) == ("The Manor", "Upton", "")


class TestRule4:
    """Building name and number."""

    def test_name_above_numbered_thoroughfare(self):
        address = Address(
            building_name="Victoria House",
            building_number="15",
            thoroughfare="The Street",
            dependant_locality="Chingford",
        )
        result = formatter(address)
        assert result.premise == "Victoria House, 15"
        assert lines(result) == ("Victoria House", "15 The Street", "Chingford")

    def test_department_and_organisation(self):
        address = Address(
            department_name="Sales",
            organisation_name="Acme Ltd",
            building_name="Victoria House",
            building_number="15",
            thoroughfare="The Street",
            dependant_locality="Chingford",
        )
        result = formatter(address)
        assert result.premise == "Victoria House, 15"
        assert lines(result) == (
            "Acme Ltd",
            "Sales",
            "Victoria House, 15 The Street, Chingford",
        )


class TestRule5:
    """Sub building name and building number."""

    def test_single_letter_joins_number(self):
        address = Address(sub_building_name="A", building_number="12", thoroughfare="Station Road")
        result = rule5(address)
        assert result.premise == "12A"
        assert lines(result) == ("12A Station Road", "", "")

    def test_sub_building_on_own_line(self):
        address = Address(sub_building_name="Flat 1", building_number="12", thoroughfare="Station Road")
        result = formatter(address)
        assert result.premise == "Flat 1, 12"
        assert lines(result) == ("Flat 1", "12 Station Road", "")

    def test_numeric_sub_building_is_not_joined(self):
        address = Address(sub_building_name="1A", building_number="12", thoroughfare="Station Road")
        result = rule5(address)
        assert result.premise == "1A, 12"
        assert lines(result) == ("1A", "12 Station Road", "")


class TestRule6:
    """Sub building name and building name."""

    def test_exception_sub_building_precedes_name(self):
        address = Address(
            sub_building_name="10B",
            building_name="Barry Jackson Tower",
            thoroughfare="Estone Walk",
        )
        result = rule6(address)
        assert result.premise == "10B Barry Jackson Tower"
        assert lines(result) == ("10B Barry Jackson Tower", "Estone Walk", "")

    def test_exception_building_name_leads_thoroughfare(self):
        address = Address(
            sub_building_name="Caretakers Flat",
            building_name="110-114",
            thoroughfare="High Street West",
        )
        result = rule6(address)
        assert result.premise == "Caretakers Flat, 110-114"
        assert lines(result) == ("Caretakers Flat", "110-114 High Street West", "")

    def test_merge_flag_combines_lines(self):
        address = Address(
            sub_building_name="Flat 2",
            building_name="The Manor",
            thoroughfare="Upper Hill",
            merge_sub_and_building=True,
        )
        result = rule6(address)
        assert result.premise == "Flat 2, The Manor"
        assert lines(result) == ("Flat 2, The Manor", "Upper Hill", "")

    def test_separate_lines(self):
        address = Address(
            sub_building_name="Flat 2",
            building_name="The Manor",
            thoroughfare="Upper Hill",
        )
        result = formatter(address)
        assert result.premise == "Flat 2, The Manor"
        assert lines(result) == ("Flat 2", "The Manor", "Upper Hill")


class TestRule7:
    """Sub building name, building name and building number."""

    def test_exception_sub_building(self):
        address = Address(
            sub_building_name="2B",
            building_name="The Tower",
            building_number="27",
            thoroughfare="Johnson Street",
        )
        result = rule7(address)
        assert result.premise == "2B The Tower, 27"
        assert lines(result) == ("2B The Tower", "27 Johnson Street", "")

    def test_merge_flag_drops_number(self, caplog):
        """Anomalous merge flag: number is not prepended and a warning is logged."""
        address = Address(
            sub_building_name="Flat 1",
            building_name="The Tower",
            building_number="27",
            thoroughfare="Johnson Street",
            merge_sub_and_building=True,
        )
        with caplog.at_level(logging.WARNING, logger="paf_premise.address.rules"):
            result = rule7(address)
        assert result.premise == "Flat 1, The Tower"
        assert lines(result) == ("Flat 1, The Tower", "Johnson Street", "")
        assert any("merge_sub_and_building" in r.getMessage() for r in caplog.records)

    def test_separate_lines(self):
        address = Address(
            sub_building_name="Flat 1",
            building_name="The Tower",
            building_number="27",
            thoroughfare="Johnson Street",
        )
        result = formatter(address)
        assert result.premise == "Flat 1, The Tower, 27"
        assert lines(result) == ("Flat 1", "The Tower", "27 Johnson Street")

    def test_exception_wins_over_merge_flag(self):
        address = Address(
            sub_building_name="A",
            building_name="The Tower",
            building_number="27",
            thoroughfare="Johnson Street",
            merge_sub_and_building=True,
        )
        result = rule7(address)
        assert result.premise == "A The Tower, 27"
        assert lines(result) == ("A The Tower", "27 Johnson Street", "")


class TestUndocumentedRule:
    """Sub building name only."""

    def test_sub_building_leads_thoroughfare(self):
        address = Address(sub_building_name="Flat 3", thoroughfare="Mill Lane")
        result = formatter(address)
        assert result.premise == "Flat 3"
        assert lines(result) == ("Flat 3 Mill Lane", "", "")


class TestPoBoxRule:
    """PO Box addresses."""

    def test_po_box_line(self):
        result = formatter(Address(po_box="61", dependant_locality="Kingsley"))
        assert result.premise == "PO Box 61"
        assert lines(result) == ("PO Box 61", "Kingsley", "")

    def test_organisation_above_po_box(self):
        address = Address(po_box="61", organisation_name="Acme Ltd", dependant_locality="Kingsley")
        result = formatter(address)
        assert lines(result) == ("Acme Ltd", "PO Box 61", "Kingsley")


class TestFormatterProperties:
    """Properties that hold for every address."""

    def test_idempotent(self):
        address = Address(
            sub_building_name="Flat 1",
            building_name="The Tower",
            building_number="27",
            organisation_name="Acme Ltd",
            thoroughfare="Johnson Street",
        )
        assert formatter(address) == formatter(address)

    def test_input_is_not_modified(self):
        address = Address(building_number="1", thoroughfare="Acacia Avenue")
        before = address.model_dump()
        formatter(address)
        assert address.model_dump() == before


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
