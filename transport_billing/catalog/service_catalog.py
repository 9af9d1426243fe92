"""Service catalog derived from the service-areas and rate tables.

A service offering is one vehicle type operated within one locality. The
catalog is never stored: it is rebuilt from the two flat tables, joining
each area's category with the rate table key ``<vehicle type>_<category>``.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from transport_billing.calculators.trip_charge_calculator import recompute
from transport_billing.catalog.seed_data import VEHICLE_TYPES
from transport_billing.models.customer import ServiceOffering
from transport_billing.models.memo import TripMemo

logger = logging.getLogger(__name__)

# Memo fields each service slot fills, keyed by offering attribute
_SLOT_FIELDS: Dict[int, Dict[str, str]] = {
    1: {
        "product_item": "service_item1",
        "vehicle_type": "vehicle_type",
        "minimum_hours": "minimum_hours1",
        "minimum_charges": "minimum_charges1",
        "additional_hour_charges": "additional_hour_rate",
        "driver_bata": "driver_bata_rate",
    },
    2: {
        "product_item": "service_item2",
        "minimum_hours": "minimum_hours2",
        "minimum_charges": "minimum_charges2",
    },
}


def build_service_catalog(
    areas: Iterable[Sequence[str]],
    rate_table: Sequence[Sequence[str]],
    vehicle_types: Sequence[str] = VEHICLE_TYPES,
) -> List[ServiceOffering]:
    """
    Cross the service areas with every vehicle type that has a rate.

    Args:
        areas: Headerless rows of (locality, category)
        rate_table: Rate rows, header first: key, minimum hours, minimum km,
                    minimum charges, additional hour charges, running hours,
                    driver bata
        vehicle_types: Vehicle types to offer, in display order

    Returns:
        Offerings ordered by area row, then vehicle type
    """
    rates = {row[0]: list(row[1:]) for row in rate_table[1:] if row}

    catalog: List[ServiceOffering] = []
    for area_row in areas:
        if len(area_row) < 2:
            continue
        location_area, location_category = area_row[0], area_row[1]

        for vehicle_type in vehicle_types:
            rate = rates.get(f"{vehicle_type}_{location_category}")
            if rate is None:
                continue
            rate = (rate + [""] * 6)[:6]
            product_item = (
                f"{location_category}_{location_area}_{vehicle_type}".replace(" ", "_")
            )
            catalog.append(
                ServiceOffering(
                    location_area=location_area,
                    location_category=location_category,
                    vehicle_type=vehicle_type,
                    product_item=product_item,
                    minimum_hours=rate[0],
                    minimum_km=rate[1],
                    minimum_charges=rate[2],
                    additional_hour_charges=rate[3],
                    running_hours=rate[4],
                    driver_bata=rate[5],
                )
            )

    logger.debug(f"Built service catalog with {len(catalog)} offerings")
    return catalog


def find_offering(
    catalog: Iterable[ServiceOffering], product_item: str
) -> Optional[ServiceOffering]:
    """Return the offering with the given product item key, if any."""
    for offering in catalog:
        if offering.product_item == product_item:
            return offering
    return None


def apply_service(
    memo: TripMemo, offering: Optional[ServiceOffering], slot: int
) -> TripMemo:
    """
    Fill a memo's service slot from an offering and recompute the memo.

    Passing ``None`` clears the slot back to its defaults.

    Args:
        memo: Memo being edited
        offering: Selected offering, or None when the selection is unknown
        slot: 1 for the primary service, 2 for the secondary one

    Returns:
        New memo with the slot filled and derived fields recomputed

    Raises:
        ValueError: If slot is not 1 or 2
    """
    if slot not in _SLOT_FIELDS:
        raise ValueError(f"Service slot must be 1 or 2, got {slot}")

    defaults = TripMemo()
    update = {}
    for attribute, field_name in _SLOT_FIELDS[slot].items():
        if offering is None:
            update[field_name] = getattr(defaults, field_name)
        else:
            update[field_name] = getattr(offering, attribute)

    return recompute(memo.model_copy(update=update))
