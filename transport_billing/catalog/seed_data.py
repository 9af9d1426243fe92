"""Sample data a fresh local database starts with.

Minimum charges follow the operator's tariff per vehicle type and area band;
the band itself fixes the minimum hours, the kilometres included and the
typical running hours.
"""

from typing import Dict, List, Tuple

VEHICLE_TYPES: Tuple[str, ...] = (
    "TATA ACE",
    "DOST",
    "407",
    "DCM Toyota",
    "17 Feet",
    "20 Feet",
)

LOCATION_CATEGORIES: Tuple[str, ...] = tuple(f"Area {n}" for n in range(1, 10))

CALCULATION_HEADER: List[str] = [
    "products_type_category",
    "products_minimum_hours",
    "products_minimum_km",
    "products_minimum_charges",
    "products_additional_hours_charges",
    "products_running_hours",
    "products_driver_bata",
]

LOOKUP_HEADER: List[str] = ["driver_name", "license_number", "phone"]

DRIVER_BATA = "25"

# (minimum hours, minimum km, running hours) per area band
AREA_BANDS: Dict[str, Tuple[str, str, str]] = {
    "Area 1": ("2", "20", "0"),
    "Area 2": ("2", "30", "1"),
    "Area 3": ("2", "50", "1.25"),
    "Area 4": ("3.5", "70", "1.5"),
    "Area 5": ("4.5", "80", "1.75"),
    "Area 6": ("5", "90", "2"),
    "Area 7": ("5.5", "110", "2.5"),
    "Area 8": ("6", "150", "3"),
    "Area 9": ("8", "200", "3.5"),
}

# (minimum charges for Area 1..9, additional hour rate) per vehicle type
VEHICLE_TARIFFS: Dict[str, Tuple[Tuple[int, ...], int]] = {
    "TATA ACE": ((600, 800, 1000, 1300, 1500, 1700, 1900, 2300, 2800), 180),
    "DOST": ((900, 1000, 1300, 1700, 2000, 2200, 2500, 2900, 3700), 200),
    "407": ((1000, 1100, 1400, 1900, 2200, 2400, 2750, 3200, 4100), 220),
    "DCM Toyota": ((1200, 1350, 1500, 2200, 2500, 2700, 3200, 3600, 4500), 260),
    "17 Feet": ((1350, 1550, 1750, 2400, 2800, 3000, 3500, 4200, 5200), 300),
    "20 Feet": ((1450, 1650, 1850, 2600, 3000, 3200, 3700, 4400, 5400), 320),
}

SERVICE_AREAS: List[List[str]] = [
    ["Local Trip", "Area 1"],
    ["Appolo Hospital", "Area 1"],
    ["Guindy", "Area 1"],
    ["ICF", "Area 1"],
    ["Vadapalani Bus Stand", "Area 1"],
    ["Ambattur", "Area 2"],
    ["Kolathur", "Area 2"],
    ["Porur", "Area 2"],
    ["Velachery", "Area 2"],
    ["Alandur", "Area 2"],
    ["Avadi", "Area 3"],
    ["Chrompet", "Area 3"],
    ["Tambaram", "Area 3"],
    ["Red Hills", "Area 3"],
    ["Kovur", "Area 4"],
    ["Navalur", "Area 4"],
    ["Vandalur", "Area 4"],
    ["Guduvanchery", "Area 5"],
    ["Kelambakkam", "Area 5"],
    ["Ponneri", "Area 5"],
    ["Gummidipoondi", "Area 6"],
    ["Sriperumbathur", "Area 6"],
    ["Thiruvallur", "Area 6"],
    ["Chengalpet", "Area 7"],
    ["Mahabalipuram", "Area 7"],
    ["Oragadam", "Area 7"],
    ["Kalpakkam", "Area 8"],
    ["Kancheepuram", "Area 8"],
    ["Arakkonam", "Area 9"],
    ["Thiruthani", "Area 9"],
]

CUSTOMERS: List[List[str]] = [
    ["John Doe", "123 Main St", "Anytown"],
    ["Jane Smith", "456 Oak Ave", "Otherville"],
]

LOOKUP_ROWS: List[List[str]] = [
    LOOKUP_HEADER,
    ["Ramesh", "TN-01-A-1234", "9876543210"],
    ["Kumar", "TN-02-B-5678", "9876543211"],
]


def calculation_rows() -> List[List[str]]:
    """Rate calculation table, header first, one row per vehicle and band."""
    rows = [list(CALCULATION_HEADER)]
    for vehicle_type, (charges, hour_rate) in VEHICLE_TARIFFS.items():
        for category, minimum_charges in zip(LOCATION_CATEGORIES, charges):
            minimum_hours, minimum_km, running_hours = AREA_BANDS[category]
            rows.append(
                [
                    f"{vehicle_type}_{category}",
                    minimum_hours,
                    minimum_km,
                    str(minimum_charges),
                    str(hour_rate),
                    running_hours,
                    DRIVER_BATA,
                ]
            )
    return rows


def sample_memo_fields() -> Dict[str, str]:
    """Raw fields of the first sample memo."""
    return {
        "memo_no": "SVS-001",
        "operated_date": "2024-07-28",
        "vehicle_no": "TN01AB1234",
        "vehicle_type": "TATA ACE",
        "customer_name": "John Doe",
        "customer_address1": "123 Main St",
        "customer_address2": "Anytown",
        "starting_time1": "09:00",
        "closing_time1": "13:00",
        "starting_km1": "1000",
        "closing_km1": "1050",
        "service_item1": "TATA ACE",
        "minimum_hours1": "4",
        "minimum_charges1": "1000",
        "additional_hour_rate": "200",
        "less_advance": "500",
    }
