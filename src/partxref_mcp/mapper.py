"""Vendor catalog record -> canonical Part / PartAttributes.

Input records follow the vendor's product JSON (ManufacturerProductNumber,
Manufacturer, Description, Category tree, Parameters list, ...). Mapping is
total: every record yields a Part, however sparse, and nothing here raises on
missing or malformed fields.
"""

import logging
import re
from typing import Any, Callable

from .config import UNKNOWN_MANUFACTURER
from .models import (
    ComponentCategory,
    ParametricAttribute,
    Part,
    PartAttributes,
    PartStatus,
    PartSummary,
    SearchResult,
)
from .param_map import (
    PLACEHOLDER_VALUE,
    PLACEHOLDER_VALUES,
    get_param_mappings,
    get_placeholders,
    has_category_mapping,
)
from .values import extract_numeric_value

logger = logging.getLogger(__name__)


# =============================================================================
# CATEGORY RESOLUTION
# =============================================================================

# Ordered: first entry with any matching keyword wins.
CATEGORY_KEYWORDS: list[tuple[tuple[str, ...], ComponentCategory]] = [
    (("capacitor",), ComponentCategory.CAPACITORS),
    (("resistor",), ComponentCategory.RESISTORS),
    (("inductor", "choke", "ferrite"), ComponentCategory.INDUCTORS),
    (("diode", "rectifier"), ComponentCategory.DIODES),
    (("transistor", "mosfet", "fet", "bjt", "igbt", "thyristor"), ComponentCategory.TRANSISTORS),
    (("connector", "header", "socket"), ComponentCategory.CONNECTORS),
    (("varistor", "thermistor", "fuse"), ComponentCategory.PROTECTION),
]

# Ordered most-specific first. Each entry is a list of alternatives; an
# alternative matches when all of its substrings are present.
SUBCATEGORY_PATTERNS: list[tuple[list[tuple[str, ...]], str]] = [
    ([("ceramic capacitor",), ("mlcc",)], "MLCC"),
    ([("aluminum", "polymer")], "Aluminum Polymer"),
    ([("aluminum",)], "Aluminum Electrolytic"),
    ([("tantalum",)], "Tantalum"),
    ([("supercapacitor",), ("double layer",)], "Supercapacitor"),
    ([("film capacitor",)], "Film Capacitor"),
    ([("mica",)], "Mica Capacitor"),
    ([("through hole resistor",)], "Through Hole Resistor"),
    ([("chassis mount resistor",)], "Chassis Mount Resistor"),
    ([("current sense",), ("shunt resistor",)], "Current Sense Resistor"),
    ([("thick film",)], "Thick Film"),
    ([("thin film",)], "Thin Film"),
    ([("chip resistor",), ("surface mount", "resistor")], "Thick Film"),
    ([("fixed inductor",)], "Fixed Inductor"),
    ([("ferrite bead",)], "Ferrite Bead and Chip"),
    ([("common mode choke",)], "Common Mode Choke"),
    ([("varistor",)], "Varistor"),
    ([("ptc resettable",), ("polyfuse",), ("pptc",)], "PTC Resettable Fuse"),
    ([("ntc thermistor",)], "NTC Thermistor"),
    ([("ptc thermistor",)], "PTC Thermistor"),
    ([("bridge rectifier",)], "Diodes - Bridge Rectifiers"),
    ([("single diode",)], "Rectifier Diode"),
    ([("sic mosfet",)], "SiC MOSFET"),
    ([("gan fet",), ("gallium nitride",)], "GaN FET"),
    ([("mosfet", "n-channel")], "N-Channel MOSFET"),
    ([("mosfet", "p-channel")], "P-Channel MOSFET"),
    ([("mosfet",)], "MOSFET"),
    ([("jfet",)], "JFET"),
    ([("bipolar", "npn")], "NPN BJT"),
    ([("bipolar", "pnp")], "PNP BJT"),
    ([("bipolar",), ("bjt",)], "BJT"),
    ([("switching regulator",), ("switching controller",)], "Switching Regulator"),
]

STATUS_SYNONYMS: list[tuple[tuple[str, ...], PartStatus]] = [
    (("not recommended", "nrnd"), PartStatus.NRND),
    (("last time buy", "ltb"), PartStatus.LAST_TIME_BUY),
    (("obsolete",), PartStatus.OBSOLETE),
    (("discontinued",), PartStatus.DISCONTINUED),
    (("active",), PartStatus.ACTIVE),
]


def get_deepest_category(category: dict[str, Any] | None) -> dict[str, Any]:
    """Follow the first child at each level down to the most specific category."""
    if not isinstance(category, dict):
        return {}
    current = category
    while True:
        children = current.get("ChildCategories")
        if not isinstance(children, list) or not children or not isinstance(children[0], dict):
            return current
        current = children[0]


def map_category(category_name: str) -> ComponentCategory:
    lower = category_name.lower()
    for keywords, category in CATEGORY_KEYWORDS:
        if any(k in lower for k in keywords):
            return category
    return ComponentCategory.ICS


def map_subcategory(category_name: str) -> str:
    """Vendor category name -> subcategory label used for family lookup.

    Unrecognised names pass through unchanged.
    """
    lower = category_name.lower()
    for alternatives, label in SUBCATEGORY_PATTERNS:
        if any(all(s in lower for s in alt) for alt in alternatives):
            return label
    return category_name


def map_status(status: str | None) -> PartStatus:
    if not status:
        return PartStatus.ACTIVE
    lower = status.lower()
    for synonyms, mapped in STATUS_SYNONYMS:
        if any(s in lower for s in synonyms):
            return mapped
    return PartStatus.ACTIVE


# =============================================================================
# VALUE TRANSFORMERS
# =============================================================================

_DIAMETER_PATTERN = re.compile(r"Dia\s*\((\d+\.?\d*)\s*mm\)", re.IGNORECASE)
_DIAMETER_FALLBACK_PATTERN = re.compile(r"Dia[^(]*?(\d+\.?\d*)\s*mm", re.IGNORECASE)
_BODY_LENGTH_PATTERN = re.compile(r"\((\d+\.?\d*)\s*mm\s*x\s*\d+\.?\d*\s*mm\)", re.IGNORECASE)
_DIELECTRIC_ABBR_PATTERN = re.compile(r"\(([A-Z]{2,4})\)")
_SAFETY_CLASS_PATTERN = re.compile(r"\b([XY][12])\b", re.IGNORECASE)
_SLUG_PATTERN = re.compile(r"[\s/()\-]+")


def _yes_no(found: bool) -> str:
    return "Yes" if found else "No"


def transform_flexible_termination(text: str) -> str:
    return _yes_no("flex" in text.lower())


def transform_aec_q200(text: str) -> str:
    return _yes_no("AEC-Q200" in text.upper())


def transform_aec_q101(text: str) -> str:
    return _yes_no("AEC-Q101" in text.upper())


def transform_aec_q100(text: str) -> str:
    return _yes_no("AEC-Q100" in text.upper())


def transform_anti_sulfur(text: str) -> str:
    lower = text.lower()
    return _yes_no(any(k in lower for k in ("anti-sulfur", "anti sulfur", "sulphur resistant", "sulfur resistant")))


def transform_diameter(text: str) -> str:
    """'0.197" Dia (5.00mm)' -> '5.00mm'. The metric parenthetical wins."""
    match = _DIAMETER_PATTERN.search(text) or _DIAMETER_FALLBACK_PATTERN.search(text)
    return f"{match.group(1)}mm" if match else text


def transform_body_length(text: str) -> str:
    """'0.906" L x 0.453" W (23.00mm x 11.50mm)' -> '23.00mm'."""
    match = _BODY_LENGTH_PATTERN.search(text)
    return f"{match.group(1)}mm" if match else text


def transform_dielectric_type(text: str) -> str:
    """'Polypropylene (PP), Metallized' -> 'PP', 'Polyester, Metallized' -> 'PET'."""
    match = _DIELECTRIC_ABBR_PATTERN.search(text)
    if match:
        return match.group(1)
    lower = text.lower()
    if "polypropylene" in lower:
        return "PP"
    if "polyphenylene" in lower:
        return "PPS"
    if "polyethylene naphthalate" in lower:
        return "PEN"
    if "polyester" in lower or "polyethylene terephthalate" in lower:
        return "PET"
    return text


def transform_self_healing(text: str) -> str:
    # Metallized film construction implies self-healing
    return _yes_no("metallized" in text.lower())


def transform_safety_rating(text: str) -> str:
    """'AEC-Q200, X2' -> 'X2'."""
    match = _SAFETY_CLASS_PATTERN.search(text)
    return match.group(1).upper() if match else text


def transform_recovery_category(text: str) -> str:
    """'Fast Recovery =< 500ns, > 200mA (Io)' -> 'Fast'."""
    lower = text.lower()
    if "ultrafast" in lower or "ultra fast" in lower:
        return "Ultrafast"
    if "fast" in lower:
        return "Fast"
    if "standard" in lower:
        return "Standard"
    return text


TRANSFORMERS: dict[str, Callable[[str], str]] = {
    "flexible_termination": transform_flexible_termination,
    "aec_q200": transform_aec_q200,
    "aec_q101": transform_aec_q101,
    "aec_q100": transform_aec_q100,
    "anti_sulfur": transform_anti_sulfur,
    "diameter": transform_diameter,
    "body_length": transform_body_length,
    "dielectric_type": transform_dielectric_type,
    "self_healing": transform_self_healing,
    "safety_rating": transform_safety_rating,
    "recovery_category": transform_recovery_category,
}

# Yes/No flags: an empty vendor field is an explicit "No", not a missing value
FLAG_ATTRIBUTES = frozenset({"flexible_termination", "aec_q200", "aec_q101", "aec_q100", "anti_sulfur"})

# Thermistor B-values like "3380K": the K is kelvin, not kilo.
UNSCALED_ATTRIBUTES = frozenset({"b_value", "b_value_85"})


def transform_value(attribute_id: str, text: str) -> str:
    transformer = TRANSFORMERS.get(attribute_id)
    return transformer(text) if transformer else text


def slugify_parameter(name: str) -> str:
    """'Height - Seated (Max)' -> 'height_seated_max'."""
    return _SLUG_PATTERN.sub("_", name.lower()).strip("_")


# =============================================================================
# MAIN MAPPERS
# =============================================================================


def _get(record: dict[str, Any], key: str) -> dict[str, Any]:
    """Nested object field or an empty dict when absent/null."""
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def _manufacturer_name(product: dict[str, Any]) -> str:
    name = _get(product, "Manufacturer").get("Name")
    if not name:
        logger.warning(f"No manufacturer for {product.get('ManufacturerProductNumber', '?')}, using placeholder")
        return UNKNOWN_MANUFACTURER
    return name


def _vendor_part_number(product: dict[str, Any]) -> str | None:
    if product.get("DigiKeyPartNumber"):
        return product["DigiKeyPartNumber"]
    variations = product.get("ProductVariations") or []
    if variations and isinstance(variations[0], dict):
        return variations[0].get("DigiKeyProductNumber") or None
    return None


def map_product_to_part(product: dict[str, Any]) -> Part:
    deepest = get_deepest_category(product.get("Category"))
    category_name = deepest.get("Name") or ""
    description = _get(product, "Description")
    classifications = _get(product, "Classifications")

    category = map_category(category_name)
    subcategory = map_subcategory(category_name)
    logger.debug(f"Category '{category_name}' -> {category.value} / {subcategory}")

    return Part(
        mpn=product.get("ManufacturerProductNumber") or "",
        manufacturer=_manufacturer_name(product),
        description=description.get("ProductDescription") or "",
        detailed_description=description.get("DetailedDescription") or "",
        category=category,
        subcategory=subcategory,
        status=map_status(_get(product, "ProductStatus").get("Status")),
        series=_get(product, "Series").get("Name") or "",
        vendor_part_number=_vendor_part_number(product),
        unit_price=product.get("UnitPrice"),
        quantity_available=product.get("QuantityAvailable"),
        product_url=product.get("ProductUrl") or None,
        datasheet_url=product.get("DatasheetUrl") or None,
        image_url=product.get("PhotoUrl") or None,
        rohs_status=classifications.get("RohsStatus") or None,
        moisture_sensitivity_level=classifications.get("MoistureSensitivityLevel") or None,
        vendor_category_id=deepest.get("CategoryId"),
    )


def _is_blank(value: str) -> bool:
    return not value or value.strip() in ("", "-")


def _mapped_parameters(product: dict[str, Any], category_name: str, raw_params: list[dict]) -> list[ParametricAttribute]:
    """Curated mapping path for categories with a parameter table."""
    lookup = {p.get("ParameterText"): p.get("ValueText") or "" for p in raw_params}
    parameters: list[ParametricAttribute] = []
    added: set[str] = set()

    for raw in raw_params:
        text = raw.get("ParameterText") or ""
        raw_value = raw.get("ValueText") or ""
        for mapping in get_param_mappings(category_name, text):
            if mapping.attribute_id in added:
                continue
            value_text = raw_value
            if mapping.attribute_id == "package_case" and value_text == "Nonstandard":
                supplier_pkg = lookup.get("Supplier Device Package")
                if supplier_pkg and supplier_pkg != "-":
                    value_text = supplier_pkg
            if _is_blank(value_text) and mapping.attribute_id not in FLAG_ATTRIBUTES:
                continue

            value = transform_value(mapping.attribute_id, value_text)
            numeric_value = None
            if mapping.unit and mapping.attribute_id not in UNSCALED_ATTRIBUTES:
                numeric_value, _ = extract_numeric_value(value)

            parameters.append(ParametricAttribute(
                attribute_id=mapping.attribute_id,
                name=mapping.attribute_name,
                value=value,
                numeric_value=numeric_value,
                unit=mapping.unit,
                sort_order=mapping.sort_order,
            ))
            added.add(mapping.attribute_id)

    msl = _get(product, "Classifications").get("MoistureSensitivityLevel")
    if "msl" not in added and msl:
        parameters.append(ParametricAttribute(
            attribute_id="msl",
            name="Moisture Sensitivity Level",
            value=msl,
            sort_order=10,
        ))
        added.add("msl")

    for placeholder in get_placeholders(category_name):
        if placeholder.attribute_id in added:
            continue
        parameters.append(ParametricAttribute(
            attribute_id=placeholder.attribute_id,
            name=placeholder.attribute_name,
            value=PLACEHOLDER_VALUES.get(placeholder.attribute_id, PLACEHOLDER_VALUE),
            sort_order=placeholder.sort_order,
        ))
        added.add(placeholder.attribute_id)

    return parameters


def _generic_parameters(raw_params: list[dict]) -> list[ParametricAttribute]:
    """Pass-through path for categories without a curated table."""
    parameters: list[ParametricAttribute] = []
    added: set[str] = set()
    for i, raw in enumerate(raw_params):
        text = raw.get("ParameterText") or ""
        value = raw.get("ValueText") or ""
        attribute_id = slugify_parameter(text)
        if not attribute_id or _is_blank(value) or attribute_id in added:
            continue
        numeric_value, unit = extract_numeric_value(value)
        parameters.append(ParametricAttribute(
            attribute_id=attribute_id,
            name=text,
            value=value,
            numeric_value=numeric_value,
            unit=unit,
            sort_order=i + 1,
        ))
        added.add(attribute_id)
    return parameters


def map_product_to_attributes(product: dict[str, Any]) -> PartAttributes:
    """Map a vendor product record to a Part plus its parametric attributes."""
    part = map_product_to_part(product)
    category_name = get_deepest_category(product.get("Category")).get("Name") or ""
    raw_params = [p for p in (product.get("Parameters") or []) if isinstance(p, dict)]

    if has_category_mapping(category_name):
        parameters = _mapped_parameters(product, category_name, raw_params)
    else:
        logger.debug(f"No parameter map for '{category_name}', using generic pass-through")
        parameters = _generic_parameters(raw_params)

    parameters.sort(key=lambda p: p.sort_order)
    return PartAttributes(part=part, parameters=tuple(parameters))


def map_product_to_summary(product: dict[str, Any]) -> PartSummary:
    category_name = get_deepest_category(product.get("Category")).get("Name") or ""
    return PartSummary(
        mpn=product.get("ManufacturerProductNumber") or "",
        manufacturer=_manufacturer_name(product),
        description=_get(product, "Description").get("ProductDescription") or "",
        category=map_category(category_name),
        status=map_status(_get(product, "ProductStatus").get("Status")),
    )


def map_keyword_response(response: dict[str, Any]) -> SearchResult:
    """Reduce a keyword-search response to a none/single/multiple result.

    Exact matches come first; a part listed in both ExactMatches and Products
    counts once.
    """
    products = [*(response.get("ExactMatches") or []), *(response.get("Products") or [])]
    seen: set[str] = set()
    unique: list[PartSummary] = []
    for product in products:
        if not isinstance(product, dict):
            continue
        mpn = product.get("ManufacturerProductNumber") or ""
        # Records without an MPN are never deduplicated
        if mpn:
            if mpn in seen:
                continue
            seen.add(mpn)
        unique.append(map_product_to_summary(product))

    if not unique:
        return SearchResult(type="none")
    if len(unique) == 1:
        return SearchResult(type="single", matches=tuple(unique))
    return SearchResult(type="multiple", matches=tuple(unique))
