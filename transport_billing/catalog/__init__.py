"""Service catalog and reference data."""

from transport_billing.catalog.seed_data import LOCATION_CATEGORIES, VEHICLE_TYPES
from transport_billing.catalog.service_catalog import (
    apply_service,
    build_service_catalog,
    find_offering,
)

__all__ = [
    "LOCATION_CATEGORIES",
    "VEHICLE_TYPES",
    "apply_service",
    "build_service_catalog",
    "find_offering",
]
