"""Base model for all data models in the transport billing system.

This module provides a base Pydantic model with the shared configuration
used by memos, invoices, customers and service offerings.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation on assignment
    - Rejection of unknown fields (sheet columns must map to a field)
    - Serialization to/from dictionaries

    Example:
        >>> class Vehicle(BaseDataModel):
        ...     vehicle_no: str
        ...     vehicle_type: str
        >>> vehicle = Vehicle(vehicle_no="TN01AB1234", vehicle_type="TATA ACE")
        >>> vehicle.model_dump()
        {'vehicle_no': 'TN01AB1234', 'vehicle_type': 'TATA ACE'}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )
