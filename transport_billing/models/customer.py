"""Customer and service offering models."""

from typing import Any, List

from pydantic import Field, field_validator, model_validator

from transport_billing.models.base import BaseDataModel
from transport_billing.models.memo import coerce_cells_to_text


class Customer(BaseDataModel):
    """A billed customer with a two-line address."""

    name: str = Field(..., min_length=1, description="Customer name")
    address1: str = ""
    address2: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_cells(cls, data: Any) -> Any:
        return coerce_cells_to_text(data)

    @field_validator("name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that the name is not empty or whitespace only.

        Raises:
            ValueError: If the value is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @classmethod
    def column_names(cls) -> List[str]:
        return list(cls.model_fields.keys())

    def to_row(self) -> List[str]:
        return [self.name, self.address1, self.address2]


class ServiceOffering(BaseDataModel):
    """A bookable service: one vehicle type operated within one area.

    Offerings are not stored; they are derived from the service-areas table
    joined with the rate calculation table.

    Attributes:
        location_area: Locality name (e.g. "Guindy")
        location_category: Rate band of the locality (e.g. "Area 1")
        vehicle_type: Vehicle type (e.g. "TATA ACE")
        product_item: Key selected on a memo, ``<category>_<area>_<vehicle>``
        minimum_hours: Hours included in the minimum charge
        minimum_km: Kilometres included in the minimum charge
        minimum_charges: Minimum charge for the service
        additional_hour_charges: Rate for each hour beyond the minimum
        running_hours: Typical running hours to the area
        driver_bata: Driver allowance rate per hour
    """

    location_area: str
    location_category: str
    vehicle_type: str
    product_item: str
    minimum_hours: str = "0"
    minimum_km: str = "0"
    minimum_charges: str = "0"
    additional_hour_charges: str = "0"
    running_hours: str = "0"
    driver_bata: str = "0"

    @model_validator(mode="before")
    @classmethod
    def coerce_cells(cls, data: Any) -> Any:
        return coerce_cells_to_text(data)

    @property
    def label(self) -> str:
        """Display label used by the service pickers."""
        return f"{self.location_area} ({self.location_category}) - {self.vehicle_type}"

    def to_row(self) -> List[str]:
        return [
            self.location_area,
            self.location_category,
            self.vehicle_type,
            self.product_item,
            self.minimum_hours,
            self.minimum_km,
            self.minimum_charges,
            self.additional_hour_charges,
            self.running_hours,
            self.driver_bata,
        ]

