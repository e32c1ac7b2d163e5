"""Vendor parameter name -> canonical attribute id mapping.

Vendor catalogs label the same engineering value differently per category
("Voltage - Rated" for capacitors, "Drain to Source Voltage (Vdss)" for
MOSFETs). This module holds the curated per-category tables the mapper uses to
turn vendor ParameterText labels into stable attribute ids.

Category keys are matched as case-insensitive substrings of the deepest vendor
category name, first match wins, so more specific keys come first
("Aluminum - Polymer" before "Aluminum Electrolytic").

A single vendor parameter may feed several attributes: "Ratings" carries both
the AEC-Q200 flag and the film-capacitor safety class, "Tolerance" feeds both
tolerance and inductance_tolerance for inductors.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParamMapping:
    attribute_id: str
    attribute_name: str
    sort_order: int
    unit: str | None = None  # declared unit enables numeric extraction


# =============================================================================
# CAPACITORS
# =============================================================================

MLCC_PARAMS: dict[str, list[ParamMapping]] = {
    "Capacitance": [ParamMapping("capacitance", "Capacitance", 1, "µF")],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 2)],
    "Voltage - Rated": [ParamMapping("voltage_rated", "Voltage Rating", 3, "V")],
    "Temperature Coefficient": [ParamMapping("dielectric", "Dielectric / Temp Characteristic", 4)],
    "Tolerance": [ParamMapping("tolerance", "Tolerance", 5)],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 6)],
    "Height - Seated (Max)": [ParamMapping("height", "Height (Seated Max)", 7, "mm")],
    "ESR (Equivalent Series Resistance)": [ParamMapping("esr", "ESR", 8, "Ω")],
    "Features": [ParamMapping("flexible_termination", "Flexible Termination", 10)],
    "Moisture Sensitivity Level (MSL)": [ParamMapping("msl", "Moisture Sensitivity Level", 11)],
    "Ratings": [ParamMapping("aec_q200", "AEC-Q200", 12)],
    "Packaging": [ParamMapping("packaging", "Packaging", 14)],
}

ALUMINUM_PARAMS: dict[str, list[ParamMapping]] = {
    "Capacitance": [ParamMapping("capacitance", "Capacitance", 1, "µF")],
    "Voltage - Rated": [ParamMapping("voltage_rated", "Voltage Rating", 2, "V")],
    "Polarization": [ParamMapping("polarization", "Polarization", 3)],
    "Mounting Type": [ParamMapping("mounting_style", "Mounting Style", 4)],
    "Size / Dimension": [ParamMapping("diameter", "Diameter", 5, "mm")],
    "Height - Seated (Max)": [ParamMapping("height", "Height (Seated Max)", 6, "mm")],
    "Lead Spacing": [ParamMapping("lead_spacing", "Lead Spacing", 7, "mm")],
    "Tolerance": [ParamMapping("tolerance", "Tolerance", 8)],
    "ESR (Equivalent Series Resistance)": [ParamMapping("esr", "ESR", 9, "Ω")],
    "Ripple Current @ High Frequency": [ParamMapping("ripple_current", "Ripple Current", 10, "A")],
    "Lifetime @ Temp.": [ParamMapping("lifetime", "Lifetime @ Temperature", 11, "Hrs")],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 12)],
    "Ratings": [ParamMapping("aec_q200", "AEC-Q200", 13)],
    "Packaging": [ParamMapping("packaging", "Packaging", 14)],
}

FILM_PARAMS: dict[str, list[ParamMapping]] = {
    "Capacitance": [ParamMapping("capacitance", "Capacitance", 1, "µF")],
    "Voltage Rating - AC": [ParamMapping("voltage_rated_ac", "Voltage Rating (AC)", 2, "V")],
    "Voltage Rating - DC": [ParamMapping("voltage_rated", "Voltage Rating (DC)", 3, "V")],
    "Dielectric Material": [
        ParamMapping("dielectric_type", "Dielectric Type", 4),
        ParamMapping("self_healing", "Self-Healing", 5),
    ],
    "Ratings": [
        ParamMapping("safety_rating", "Safety Rating", 6),
        ParamMapping("aec_q200", "AEC-Q200", 7),
    ],
    "Tolerance": [ParamMapping("tolerance", "Tolerance", 8)],
    "Size / Dimension": [ParamMapping("body_length", "Body Length", 9, "mm")],
    "Lead Spacing": [ParamMapping("lead_spacing", "Lead Spacing", 10, "mm")],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 11)],
    "Packaging": [ParamMapping("packaging", "Packaging", 12)],
}


# =============================================================================
# RESISTORS
# =============================================================================

RESISTOR_PARAMS: dict[str, list[ParamMapping]] = {
    "Resistance": [ParamMapping("resistance", "Resistance", 1, "Ω")],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 2)],
    "Tolerance": [ParamMapping("tolerance", "Tolerance", 3)],
    "Power (Watts)": [ParamMapping("power_rating", "Power Rating", 4, "W")],
    "Temperature Coefficient": [ParamMapping("tcr", "Temperature Coefficient (TCR)", 6, "ppm/°C")],
    "Composition": [ParamMapping("composition", "Composition / Technology", 7)],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 8)],
    "Height - Seated (Max)": [ParamMapping("height", "Height (Seated Max)", 9, "mm")],
    "Moisture Sensitivity Level (MSL)": [ParamMapping("msl", "Moisture Sensitivity Level", 10)],
    "Ratings": [ParamMapping("aec_q200", "AEC-Q200 Qualification", 11)],
    "Features": [ParamMapping("anti_sulfur", "Anti-Sulfur", 12)],
    "Packaging": [ParamMapping("packaging", "Packaging", 13)],
    "Mounting Type": [ParamMapping("mounting_style", "Mounting Style", 15)],
}

THERMISTOR_PARAMS: dict[str, list[ParamMapping]] = {
    "Resistance @ 25°C": [ParamMapping("resistance", "Resistance @ 25°C", 1, "Ω")],
    "Resistance Tolerance": [ParamMapping("tolerance", "Resistance Tolerance", 2)],
    "B25/50": [ParamMapping("b_value", "B-Value (B25/50)", 3)],
    "B25/85": [ParamMapping("b_value_85", "B-Value (B25/85)", 4)],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 5)],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 6)],
    "Packaging": [ParamMapping("packaging", "Packaging", 11)],
}


# =============================================================================
# INDUCTORS
# =============================================================================

INDUCTOR_PARAMS: dict[str, list[ParamMapping]] = {
    "Inductance": [ParamMapping("inductance", "Inductance", 1, "µH")],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 2)],
    "Current - Saturation (Isat)": [ParamMapping("saturation_current", "Saturation Current (Isat)", 3, "A")],
    "Current Rating (Amps)": [ParamMapping("rated_current", "Rated Current (Irms)", 4, "A")],
    "DC Resistance (DCR)": [ParamMapping("dcr", "DC Resistance (DCR)", 5, "Ω")],
    "Tolerance": [
        ParamMapping("tolerance", "Tolerance", 6),
        ParamMapping("inductance_tolerance", "Inductance Tolerance", 19),
    ],
    "Material - Core": [ParamMapping("core_material", "Core Material", 7)],
    "Shielding": [ParamMapping("shielding", "Shielding", 8)],
    "Frequency - Self Resonant": [ParamMapping("srf", "Self-Resonant Frequency (SRF)", 9, "Hz")],
    "Height - Seated (Max)": [ParamMapping("height", "Height (Seated Max)", 10, "mm")],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 11)],
    "Ratings": [ParamMapping("aec_q200", "AEC-Q200", 12)],
    "Packaging": [ParamMapping("packaging", "Packaging", 13)],
    "Q @ Freq": [ParamMapping("q_factor", "Q Factor (Quality Factor)", 18)],
}


# =============================================================================
# DISCRETE SEMICONDUCTORS
# =============================================================================

RECTIFIER_PARAMS: dict[str, list[ParamMapping]] = {
    "Package / Case": [ParamMapping("package_case", "Package / Case", 1)],
    "Voltage - DC Reverse (Vr) (Max)": [ParamMapping("vrrm", "Reverse Voltage (Vrrm)", 2, "V")],
    "Voltage - Peak Reverse (Max)": [ParamMapping("vrrm", "Reverse Voltage (Vrrm)", 2, "V")],
    "Current - Average Rectified (Io)": [ParamMapping("io_avg", "Average Rectified Current (Io)", 3, "A")],
    "Voltage - Forward (Vf) (Max) @ If": [ParamMapping("vf", "Forward Voltage (Vf)", 4, "V")],
    "Speed": [ParamMapping("recovery_category", "Recovery Category", 6)],
    "Reverse Recovery Time (trr)": [ParamMapping("trr", "Reverse Recovery Time (trr)", 7, "ns")],
    "Current - Reverse Leakage @ Vr": [ParamMapping("ir_leakage", "Reverse Leakage (Ir)", 8, "A")],
    "Operating Temperature - Junction": [ParamMapping("operating_temp", "Operating Junction Temp Range", 9)],
    "Diode Type": [ParamMapping("configuration", "Configuration", 10)],
    "Qualification": [ParamMapping("aec_q101", "AEC-Q101", 11)],
    "Packaging": [ParamMapping("packaging", "Packaging", 13)],
}

MOSFET_PARAMS: dict[str, list[ParamMapping]] = {
    "FET Type": [ParamMapping("channel_type", "Channel Type", 1)],
    "Technology": [ParamMapping("technology", "Technology", 2)],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 3)],
    "Drain to Source Voltage (Vdss)": [ParamMapping("vds_max", "Vds (Max)", 4, "V")],
    "Vgs (Max)": [ParamMapping("vgs_max", "Vgs (Max)", 5, "V")],
    "Current - Continuous Drain (Id) @ 25°C": [ParamMapping("id_max", "Id (Max Continuous)", 6, "A")],
    "Power Dissipation (Max)": [ParamMapping("pd", "Power Dissipation", 7, "W")],
    "Rds On (Max) @ Id, Vgs": [ParamMapping("rds_on", "Rds(on)", 8, "Ω")],
    "Vgs(th) (Max) @ Id": [ParamMapping("vgs_th", "Vgs(th)", 9, "V")],
    "Gate Charge (Qg) (Max) @ Vgs": [ParamMapping("qg", "Gate Charge (Qg)", 10, "C")],
    "Input Capacitance (Ciss) (Max) @ Vds": [ParamMapping("ciss", "Input Capacitance (Ciss)", 11, "F")],
    "Qualification": [ParamMapping("aec_q101", "AEC-Q101", 15)],
    "Packaging": [ParamMapping("packaging", "Packaging", 17)],
}

JFET_PARAMS: dict[str, list[ParamMapping]] = {
    "FET Type": [ParamMapping("channel_type", "Channel Type", 1)],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 2)],
    "Voltage - Cutoff (VGS off) @ Id": [ParamMapping("vp", "Pinch-Off Voltage (Vp)", 3, "V")],
    "Current - Drain (Idss) @ Vds (Vgs=0)": [ParamMapping("idss", "Idss", 4, "A")],
    "Voltage - Breakdown (V(BR)GSS)": [ParamMapping("vds_max", "Breakdown Voltage", 7, "V")],
    "Input Capacitance (Ciss) (Max) @ Vds": [ParamMapping("ciss", "Input Capacitance (Ciss)", 10, "F")],
    "Power - Max": [ParamMapping("pd_max", "Power Dissipation (Max)", 12, "W")],
    "Qualification": [ParamMapping("aec_q101", "AEC-Q101", 14)],
    "Packaging": [ParamMapping("packaging", "Packaging", 16)],
}


# =============================================================================
# POWER MANAGEMENT
# =============================================================================

SWITCHING_REGULATOR_PARAMS: dict[str, list[ParamMapping]] = {
    "Topology": [ParamMapping("topology", "Topology", 1)],
    "Function": [ParamMapping("architecture", "Architecture", 2)],
    "Package / Case": [ParamMapping("package_case", "Package / Case", 3)],
    "Output Configuration": [ParamMapping("output_polarity", "Output Polarity", 5)],
    "Voltage - Input (Min)": [ParamMapping("vin_min", "Vin (Min)", 6, "V")],
    "Voltage - Input (Max)": [ParamMapping("vin_max", "Vin (Max)", 7, "V")],
    "Current - Output": [ParamMapping("iout_max", "Iout (Max)", 9, "A")],
    "Frequency - Switching": [ParamMapping("fsw", "Switching Frequency", 10, "Hz")],
    "Voltage - Output (Min/Fixed)": [ParamMapping("vref", "Feedback Reference Voltage", 13, "V")],
    "Operating Temperature": [ParamMapping("operating_temp", "Operating Temp Range", 19)],
    "Qualification": [ParamMapping("aec_q100", "AEC-Q100", 20)],
    "Packaging": [ParamMapping("packaging", "Packaging", 21)],
}


# =============================================================================
# CATEGORY TABLE
# =============================================================================

CATEGORY_PARAM_MAPS: dict[str, dict[str, list[ParamMapping]]] = {
    "Ceramic Capacitors": MLCC_PARAMS,
    "Aluminum - Polymer Capacitors": ALUMINUM_PARAMS,
    "Aluminum Polymer Capacitors": ALUMINUM_PARAMS,
    "Aluminum Electrolytic Capacitors": ALUMINUM_PARAMS,
    "Film Capacitors": FILM_PARAMS,
    "Chip Resistor": RESISTOR_PARAMS,
    "Through Hole Resistors": RESISTOR_PARAMS,
    "Chassis Mount Resistors": RESISTOR_PARAMS,
    "NTC Thermistors": THERMISTOR_PARAMS,
    "Fixed Inductors": INDUCTOR_PARAMS,
    "Single Diodes": RECTIFIER_PARAMS,
    "Bridge Rectifiers": RECTIFIER_PARAMS,
    "MOSFET": MOSFET_PARAMS,
    "JFET": JFET_PARAMS,
    "DC DC Switching Regulators": SWITCHING_REGULATOR_PARAMS,
}

# Attributes vendors never publish but logic tables expect, usually
# application_review rules. Keyed by category substring like the maps above.
CATEGORY_PLACEHOLDERS: dict[str, list[ParamMapping]] = {
    "Ceramic Capacitors": [ParamMapping("dc_bias_derating", "DC Bias Derating", 13)],
    "Aluminum - Polymer Capacitors": [
        ParamMapping("polarization", "Polarization", 3),
        ParamMapping("polymer_type", "Conductive Polymer Type", 15),
    ],
    "NTC Thermistors": [
        ParamMapping("rt_curve", "R-T Curve Matching", 9),
        ParamMapping("dissipation_constant", "Dissipation Constant", 10),
    ],
    "Single Diodes": [ParamMapping("recovery_behavior", "Recovery Behavior (Soft vs. Snappy)", 12)],
    "Bridge Rectifiers": [ParamMapping("recovery_behavior", "Recovery Behavior (Soft vs. Snappy)", 12)],
}

PLACEHOLDER_VALUE = "Consult datasheet"

# Placeholders with a known value instead of the generic datasheet hint.
PLACEHOLDER_VALUES: dict[str, str] = {
    "polarization": "Polar",
}


def _find_category_map(category_name: str) -> dict[str, list[ParamMapping]] | None:
    lower = category_name.lower()
    for key, params in CATEGORY_PARAM_MAPS.items():
        if key.lower() in lower:
            return params
    return None


def has_category_mapping(category_name: str) -> bool:
    """Check if a vendor category name has a curated parameter map."""
    return _find_category_map(category_name) is not None


def get_param_mappings(category_name: str, parameter_text: str) -> list[ParamMapping]:
    """Look up the attribute mappings for one vendor parameter label.

    Exact label match first, then case-insensitive. Returns [] when the
    category or the label is unmapped.
    """
    params = _find_category_map(category_name)
    if not params:
        return []
    if parameter_text in params:
        return params[parameter_text]
    lower = parameter_text.lower()
    for key, mappings in params.items():
        if key.lower() == lower:
            return mappings
    return []


def get_placeholders(category_name: str) -> list[ParamMapping]:
    lower = category_name.lower()
    for key, placeholders in CATEGORY_PLACEHOLDERS.items():
        if key.lower() in lower:
            return placeholders
    return []
