"""Family variant classification and text-derived attribute enrichment.

A part's subcategory gives a coarse base family ("52" chip resistors). Variant
rules refine that into a specific engineering family ("54" current sense
resistors) from the normalized attributes. Rules are registered per base
family and only ever run for parts currently in that base family, so a
"MOSFET" keyword can never pull a diode into a transistor family.
"""

import logging
import re
from typing import Callable

from .config import FAST_TRR_MAX_S, ULTRAFAST_TRR_MAX_S
from .models import ParametricAttribute, PartAttributes
from .values import extract_numeric_value, leading_number

logger = logging.getLogger(__name__)

VariantPredicate = Callable[[PartAttributes], bool]


# =============================================================================
# ATTRIBUTE HELPERS
# =============================================================================


def _value(attrs: PartAttributes, attribute_id: str) -> str:
    param = attrs.get(attribute_id)
    return param.value if param else ""


def _numeric(attrs: PartAttributes, attribute_id: str) -> float | None:
    """Numeric value of an attribute, parsed from its text when not pre-computed."""
    param = attrs.get(attribute_id)
    if param is None:
        return None
    if param.numeric_value is not None:
        return param.numeric_value
    return leading_number(param.value)


def _description(attrs: PartAttributes) -> str:
    return attrs.part.description.lower()


# =============================================================================
# RESISTOR VARIANTS (base 52)
# =============================================================================

_CURRENT_SENSE_KEYWORDS = ("current sense", "4-terminal", "kelvin", "shunt")
_POWER_PACKAGE_PATTERN = re.compile(r"TO-220|TO-247|TO-263|D.?PAK", re.IGNORECASE)
# Standard SMD chip codes 0100-2599 (0402, 0603, 1206, 2512, ...)
_SMD_CHIP_PATTERN = re.compile(r"^(0[1-9]\d{2}|1\d{3}|2[0-5]\d{2})\b")


def is_current_sense_resistor(attrs: PartAttributes) -> bool:
    resistance = _numeric(attrs, "resistance")
    desc = _description(attrs)
    is_low_value = resistance is not None and resistance <= 1
    return is_low_value and any(k in desc for k in _CURRENT_SENSE_KEYWORDS)


def is_chassis_mount_resistor(attrs: PartAttributes) -> bool:
    power = _numeric(attrs, "power_rating")
    pkg = _value(attrs, "package_case").strip().upper()
    desc = _description(attrs)
    if _POWER_PACKAGE_PATTERN.search(pkg):
        return True
    if "chassis mount" in desc or "chassis-mount" in desc:
        return True
    # High power only counts off a standard SMD chip footprint
    is_smd_chip = bool(_SMD_CHIP_PATTERN.match(pkg))
    return power is not None and power >= 5 and not is_smd_chip


def is_through_hole_resistor(attrs: PartAttributes) -> bool:
    mount = f"{_value(attrs, 'mounting_type')} {_value(attrs, 'mounting_style')}".lower()
    desc = _description(attrs)
    return any(k in mount or k in desc for k in ("through hole", "axial"))


# =============================================================================
# CAPACITOR VARIANTS (base 58, 12)
# =============================================================================


def is_aluminum_polymer(attrs: PartAttributes) -> bool:
    desc = _description(attrs)
    sub = attrs.part.subcategory.lower()
    return ("polymer" in desc or "polymer" in sub) and "tantalum" not in desc


def is_mica_capacitor(attrs: PartAttributes) -> bool:
    return "mica" in _description(attrs) or "mica" in _value(attrs, "dielectric").lower()


# =============================================================================
# INDUCTOR VARIANTS (base 71)
# =============================================================================

_RF_WORD_PATTERN = re.compile(r"\brf\b", re.IGNORECASE)


def is_rf_signal_inductor(attrs: PartAttributes) -> bool:
    sub = attrs.part.subcategory.lower()
    if _RF_WORD_PATTERN.search(attrs.part.description) or _RF_WORD_PATTERN.search(sub) or "signal" in sub:
        return True
    # Sub-microhenry parts that publish Q or SRF are signal inductors
    inductance = _numeric(attrs, "inductance")
    is_nano_range = inductance is not None and inductance < 1e-6
    return is_nano_range and (attrs.has("q_factor") or attrs.has("srf"))


# =============================================================================
# TRANSISTOR VARIANTS (base B5)
# =============================================================================

_JFET_KEYWORDS = ("jfet", "j-fet", "junction field effect", "depletion mode fet")
# Part number families of JFETs sold under generic "FET" categories
JFET_MPN_PREFIXES = (
    "2SK170", "2SK209", "2SK246", "2SK30", "2SK369", "2SJ",
    "2N3819", "2N4391", "2N4392", "2N4393", "2N4416", "2N5457", "2N5458",
    "2N5459", "2N5484", "2N5485", "2N5486", "J1", "J2", "J3",
    "MPF102", "BF245", "BF256", "PN4391", "MMBFJ", "LSK", "IF",
)


def is_jfet(attrs: PartAttributes) -> bool:
    desc = _description(attrs)
    if "mosfet" in desc:
        return False
    if any(k in desc for k in _JFET_KEYWORDS):
        return True
    if "jfet" in attrs.part.subcategory.lower():
        return True
    return attrs.part.mpn.upper().startswith(JFET_MPN_PREFIXES)


# =============================================================================
# REGISTRY
# =============================================================================

# base family id -> ordered (predicate, variant family id); first hit wins
VARIANT_RULES: dict[str, list[tuple[VariantPredicate, str]]] = {
    "52": [
        (is_current_sense_resistor, "54"),
        (is_chassis_mount_resistor, "55"),
        (is_through_hole_resistor, "53"),
    ],
    "58": [(is_aluminum_polymer, "60")],
    "12": [(is_mica_capacitor, "13")],
    "71": [(is_rf_signal_inductor, "72")],
    "B5": [(is_jfet, "B9")],
}


def classify_family(base_family_id: str, attrs: PartAttributes) -> str:
    """Refine a base family id into the most specific variant family id.

    Returns ``base_family_id`` unchanged when no variant rule matches or the
    base family has no rules at all.
    """
    for predicate, variant_id in VARIANT_RULES.get(base_family_id, []):
        if predicate(attrs):
            logger.debug(f"{attrs.part.mpn}: family {base_family_id} -> {variant_id} ({predicate.__name__})")
            return variant_id
    return base_family_id


# =============================================================================
# ENRICHMENT
# =============================================================================


def _recovery_from_trr(attrs: PartAttributes) -> str | None:
    param = attrs.get("trr")
    if param is None:
        return None
    trr = param.numeric_value
    if trr is None:
        trr, _ = extract_numeric_value(param.value)
    if trr is None:
        return None
    if trr < ULTRAFAST_TRR_MAX_S:
        return "Ultrafast"
    if trr < FAST_TRR_MAX_S:
        return "Fast"
    return "Standard"


def _recovery_from_description(attrs: PartAttributes) -> str | None:
    desc = _description(attrs)
    if "ultrafast" in desc or "ultra fast" in desc or "ultra-fast" in desc:
        return "Ultrafast"
    if "fast" in desc:
        return "Fast"
    if "standard" in desc or "general purpose" in desc:
        return "Standard"
    return None


def enrich_rectifier_attributes(attrs: PartAttributes) -> PartAttributes:
    """Add a recovery_category attribute to a rectifier when it is missing.

    Measured reverse-recovery time wins over description keywords. When neither
    says anything the attributes come back unchanged; nothing is guessed.
    """
    if attrs.has("recovery_category"):
        return attrs
    category = _recovery_from_trr(attrs) or _recovery_from_description(attrs)
    if category is None:
        return attrs
    logger.debug(f"{attrs.part.mpn}: inferred recovery category {category}")
    return attrs.with_parameter(ParametricAttribute(
        attribute_id="recovery_category",
        name="Recovery Category",
        value=category,
        sort_order=6,
    ))
