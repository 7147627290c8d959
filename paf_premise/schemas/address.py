"""
Address record schema.

Frozen pydantic model for a single PAF delivery point. Every string field
defaults to "" so that emptiness is the only "absent" signal; there is no None.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paf_premise.config.formatter_config import FormatterConfig, get_formatter_config
from paf_premise.utils.accessors import extract, extract_flag

# Premise elements read by the formatter
PREMISE_FIELDS = (
    "building_name",
    "building_number",
    "sub_building_name",
    "organisation_name",
    "department_name",
    "po_box",
)

# In precedence order, least specific first
LOCALITY_FIELDS = (
    "dependant_locality",
    "double_dependant_locality",
    "thoroughfare",
    "dependant_thoroughfare",
)

# Carried on the record but not read by the formatter
OTHER_FIELDS = (
    "post_town",
    "postcode",
    "postcode_type",
    "county",
    "traditional_county",
    "administrative_county",
    "postal_county",
    "district",
    "ward",
    "country",
    "udprn",
    "umprn",
    "su_organisation_indicator",
    "delivery_point_suffix",
    "northings",
    "eastings",
    "longitude",
    "latitude",
)

STRING_FIELDS = PREMISE_FIELDS + LOCALITY_FIELDS + OTHER_FIELDS


class Address(BaseModel):
    """
    One PAF address record.

    `merge_sub_and_building` is resolved upstream by the normaliser: when set,
    sub building and building name render on one combined line.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    # Premise
    building_name: str = Field("", description="Building name, may hold a number range")
    building_number: str = Field("", description="Building number (numeric only in PAF)")
    sub_building_name: str = Field("", description="Flat / unit within a building")
    organisation_name: str = Field("", description="Organisation at the delivery point")
    department_name: str = Field("", description="Department within the organisation")
    po_box: str = Field("", description="PO Box number")

    # Localities
    dependant_locality: str = ""
    double_dependant_locality: str = ""
    thoroughfare: str = ""
    dependant_thoroughfare: str = ""

    # Geography / identifiers
    post_town: str = ""
    postcode: str = ""
    postcode_type: str = ""
    county: str = ""
    traditional_county: str = ""
    administrative_county: str = ""
    postal_county: str = ""
    district: str = ""
    ward: str = ""
    country: str = ""
    udprn: str = ""
    umprn: str = ""
    su_organisation_indicator: str = ""
    delivery_point_suffix: str = ""
    northings: str = ""
    eastings: str = ""
    longitude: str = ""
    latitude: str = ""

    merge_sub_and_building: bool = Field(
        False, description="Render sub building and building name on one line"
    )

    @field_validator(*STRING_FIELDS, mode="before")
    @classmethod
    def _coerce_string(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)

    @classmethod
    def from_record(
        cls,
        record: Mapping,
        config: Optional[FormatterConfig] = None,
    ) -> "Address":
        """
        Build an Address from a raw mapping (CSV row, JSON object, ...).

        Args:
            record: Field name -> value. Unknown keys are ignored.
            config: Supplies the merge flag default (env-based if omitted)

        Raises:
            TypeError: if record is not a mapping
        """
        if not isinstance(record, Mapping):
            raise TypeError(
                f"Address record must be a mapping, got {type(record).__name__}"
            )
        cfg = config or get_formatter_config()
        values = {name: extract(record, name) for name in STRING_FIELDS}
        values["merge_sub_and_building"] = extract_flag(
            record,
            "merge_sub_and_building",
            default=cfg.default_merge_sub_and_building,
        )
        return cls(**values)
