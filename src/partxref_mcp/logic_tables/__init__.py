"""Family registry: logic tables by family id and the subcategory lookup.

Variant tables (13, 53-55, 60, 72) are built from their base tables with
``derive`` at import time.
"""

import logging

from ..classifier import classify_family, enrich_rectifier_attributes
from ..models import LogicTable, PartAttributes
from .capacitors import ALUMINUM_ELECTROLYTIC, ALUMINUM_POLYMER, MICA, MLCC
from .discretes import JFETS, MOSFETS, RECTIFIER_DIODES
from .inductors import POWER_INDUCTORS, RF_SIGNAL_INDUCTORS
from .regulators import SWITCHING_REGULATORS
from .resistors import CHASSIS_MOUNT_RESISTORS, CHIP_RESISTORS, CURRENT_SENSE_RESISTORS, THROUGH_HOLE_RESISTORS

logger = logging.getLogger(__name__)

LOGIC_TABLES: dict[str, LogicTable] = {
    table.family_id: table
    for table in (
        MLCC, MICA,
        CHIP_RESISTORS, THROUGH_HOLE_RESISTORS, CURRENT_SENSE_RESISTORS, CHASSIS_MOUNT_RESISTORS,
        ALUMINUM_ELECTROLYTIC, ALUMINUM_POLYMER,
        POWER_INDUCTORS, RF_SIGNAL_INDUCTORS,
        RECTIFIER_DIODES, MOSFETS, JFETS,
        SWITCHING_REGULATORS,
    )
}

# Subcategory labels (as produced by the mapper or supplied by callers) -> base family id
SUBCATEGORY_TO_FAMILY: dict[str, str] = {
    # Ceramic / mica capacitors
    "MLCC": "12",
    "Ceramic": "12",
    "Multilayer Ceramic": "12",
    "Ceramic Capacitor": "12",
    "Mica Capacitor": "13",
    "Silver Mica": "13",
    "Mica": "13",
    # Resistors
    "Chip Resistor": "52",
    "Thick Film": "52",
    "Thin Film": "52",
    "Resistor": "52",
    "Chip Resistor - Surface Mount": "52",
    "Through Hole Resistor": "53",
    "Axial Resistor": "53",
    "Current Sense Resistor": "54",
    "Current Sense": "54",
    "Chassis Mount Resistor": "55",
    "Power Resistor": "55",
    # Aluminum capacitors
    "Aluminum Electrolytic": "58",
    "Electrolytic": "58",
    "Aluminum Polymer": "60",
    "Polymer Capacitor": "60",
    # Inductors
    "Power Inductor": "71",
    "Inductor": "71",
    "Shielded Inductor": "71",
    "Fixed Inductor": "71",
    "RF Inductor": "72",
    "Signal Inductor": "72",
    "RF Choke": "72",
    # Rectifiers
    "Rectifier Diode": "B1",
    "Rectifier": "B1",
    "Diode - Rectifier": "B1",
    "Diodes - Rectifiers - Single": "B1",
    "Diodes - Rectifiers - Array": "B1",
    "Diodes - Bridge Rectifiers": "B1",
    "Fast Recovery Diode": "B1",
    "Ultrafast Recovery Diode": "B1",
    "Standard Recovery Diode": "B1",
    "Recovery Rectifier": "B1",
    # Field-effect transistors
    "MOSFET": "B5",
    "N-Channel MOSFET": "B5",
    "P-Channel MOSFET": "B5",
    "SiC MOSFET": "B5",
    "Transistors - FETs, MOSFETs - Single": "B5",
    "JFET": "B9",
    "Transistors - JFETs": "B9",
    # Switching regulators
    "Switching Regulator": "C2",
    "DC DC Switching Regulator": "C2",
    "Buck Converter": "C2",
    "Boost Converter": "C2",
    "Voltage Regulators - DC DC Switching Controllers": "C2",
    "Voltage Regulators - DC DC Switching Regulators": "C2",
}

_SUBCATEGORY_LOWER: dict[str, str] = {k.lower(): v for k, v in SUBCATEGORY_TO_FAMILY.items()}

# Families whose attributes are enriched before evaluation
_ENRICHERS = {
    "B1": enrich_rectifier_attributes,
}


def enrich_for_family(family_id: str, attrs: PartAttributes) -> PartAttributes:
    enrich = _ENRICHERS.get(family_id)
    return enrich(attrs) if enrich is not None else attrs


def get_logic_table(family_id: str) -> LogicTable | None:
    table = LOGIC_TABLES.get(family_id)
    if table is None:
        logger.warning(f"No logic table for family '{family_id}'")
    return table


def get_family_for_subcategory(subcategory: str) -> str | None:
    """Base family id for a subcategory label: exact match first, then case-insensitive."""
    if not subcategory:
        return None
    family_id = SUBCATEGORY_TO_FAMILY.get(subcategory)
    if family_id is None:
        family_id = _SUBCATEGORY_LOWER.get(subcategory.strip().lower())
    return family_id


def resolve_family(family_id: str, attrs: PartAttributes) -> tuple[LogicTable | None, PartAttributes]:
    """Refine a base family with the classifier and enrich the attributes.

    A variant with no shipped table falls back to the base family's table.
    """
    variant_id = classify_family(family_id, attrs)
    table = LOGIC_TABLES.get(variant_id)
    if table is None:
        table = get_logic_table(family_id)
    if table is None:
        return None, attrs
    return table, enrich_for_family(table.family_id, attrs)


def resolve_logic_table(
    subcategory: str, attrs: PartAttributes
) -> tuple[LogicTable | None, PartAttributes]:
    """Pick the logic table for a part and return it with the (possibly enriched) attributes.

    Returns ``(None, attrs)`` when the subcategory maps to no supported family.
    """
    family_id = get_family_for_subcategory(subcategory)
    if family_id is None:
        logger.debug(f"{attrs.part.mpn}: subcategory '{subcategory}' has no logic table")
        return None, attrs
    return resolve_family(family_id, attrs)


def list_families() -> list[LogicTable]:
    return list(LOGIC_TABLES.values())


def is_family_supported(subcategory: str) -> bool:
    family_id = get_family_for_subcategory(subcategory)
    return family_id is not None and family_id in LOGIC_TABLES
