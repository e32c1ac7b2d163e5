"""Capacitor families: MLCC (12), Mica (13), Aluminum Electrolytic (58), Aluminum Polymer (60)."""

from ..derive import RuleOverride, TableDelta, derive
from ..models import LogicTable, LogicType, MatchingRule, ThresholdDirection

IDENTITY = LogicType.IDENTITY
UPGRADE = LogicType.IDENTITY_UPGRADE
FLAG = LogicType.IDENTITY_FLAG
THRESHOLD = LogicType.THRESHOLD
FIT = LogicType.FIT
REVIEW = LogicType.APPLICATION_REVIEW
OPERATIONAL = LogicType.OPERATIONAL

GTE = ThresholdDirection.GTE
LTE = ThresholdDirection.LTE
RANGE = ThresholdDirection.RANGE_SUPERSET


# Class I first, then Class II by temperature stability
DIELECTRIC_HIERARCHY = ("C0G", "X8R", "X7R", "X7S", "X6S", "X5R", "Y5V")

MLCC = LogicTable(
    family_id="12",
    family_name="MLCC Capacitors",
    category="Passives",
    description="Hard logic filters for multilayer ceramic capacitor replacement validation",
    rules=(
        MatchingRule("capacitance", "Capacitance", IDENTITY, 10,
                     "Nominal capacitance must match. Tolerance covers the allowed spread.", 1),
        MatchingRule("package_case", "Package / Case", IDENTITY, 10,
                     "Footprint must match: 0402, 0603 and 0805 pads are not interchangeable.", 2),
        MatchingRule("voltage_rated", "Voltage Rating", THRESHOLD, 9,
                     "Higher rated voltage is always acceptable and reduces DC bias loss.", 3,
                     threshold_direction=GTE),
        MatchingRule("dielectric", "Dielectric / Temp Characteristic", UPGRADE, 9,
                     "C0G can replace X7R, X7R can replace X5R, never the reverse.", 4,
                     upgrade_hierarchy=DIELECTRIC_HIERARCHY),
        MatchingRule("tolerance", "Tolerance", THRESHOLD, 7,
                     "Tighter tolerance is always acceptable.", 5,
                     threshold_direction=LTE),
        MatchingRule("operating_temp", "Operating Temp Range", THRESHOLD, 7,
                     "Replacement must cover the full original temperature range.", 6,
                     threshold_direction=RANGE),
        MatchingRule("height", "Height (Seated Max)", FIT, 5,
                     "A taller part may not fit under shields or in stacked assemblies.", 7),
        MatchingRule("esr", "ESR", THRESHOLD, 4,
                     "Lower ESR is better for decoupling.", 8,
                     threshold_direction=LTE),
        MatchingRule("flexible_termination", "Flexible Termination", FLAG, 6,
                     "Soft terminations resist board-flex cracking. Required if the original has them.", 10),
        MatchingRule("msl", "Moisture Sensitivity Level", THRESHOLD, 3,
                     "Lower MSL number is less restrictive.", 11,
                     threshold_direction=LTE),
        MatchingRule("aec_q200", "AEC-Q200", FLAG, 8,
                     "A non-qualified part cannot replace an automotive qualified one.", 12),
        MatchingRule("dc_bias_derating", "DC Bias Derating", REVIEW, 7,
                     "Class II dielectrics lose capacitance under DC bias. Compare the DC bias curves at the operating voltage.", 13),
        MatchingRule("packaging", "Packaging", OPERATIONAL, 2,
                     "Tape width and reel size must suit the pick-and-place feeders.", 14),
    ),
)

MICA = derive(MLCC, TableDelta(
    family_id="13",
    family_name="Mica Capacitors (Silver Mica)",
    description="Derived from MLCC with mica-specific simplifications for precision applications",
    base_family_id="12",
    remove=("dc_bias_derating", "flexible_termination", "piezoelectric_noise"),
    override=(
        RuleOverride("dielectric", name="Dielectric Material", logic_type=IDENTITY, upgrade_hierarchy=(),
                     reason="Silver mica is its own material class and must match exactly."),
        RuleOverride("tolerance",
                     reason="Mica is chosen for precision (typically 1% or better). Tighter is always acceptable."),
    ),
    add=(
        MatchingRule("temperature_coefficient", "Temperature Coefficient", THRESHOLD, 7,
                     "Typically ±50 ppm/°C or better. Lower is better for stability.", 15,
                     threshold_direction=LTE),
    ),
))


ALUMINUM_ELECTROLYTIC = LogicTable(
    family_id="58",
    family_name="Aluminum Electrolytic Capacitors",
    category="Passives",
    description="Hard logic filters for aluminum electrolytic capacitor replacement validation",
    rules=(
        MatchingRule("capacitance", "Capacitance", IDENTITY, 10,
                     "Nominal capacitance must match.", 1),
        MatchingRule("voltage_rated", "Voltage Rating", THRESHOLD, 9,
                     "Higher rated voltage is always acceptable.", 2,
                     threshold_direction=GTE),
        MatchingRule("polarization", "Polarization", IDENTITY, 10,
                     "Polar and bipolar parts are not interchangeable.", 3),
        MatchingRule("mounting_style", "Mounting Style", IDENTITY, 9,
                     "SMD can and radial through-hole footprints differ.", 4),
        MatchingRule("diameter", "Diameter", FIT, 8,
                     "Can diameter must fit the footprint and neighbouring parts.", 5),
        MatchingRule("height", "Height (Seated Max)", FIT, 7,
                     "A taller can may not fit the enclosure.", 6),
        MatchingRule("lead_spacing", "Lead Spacing", IDENTITY, 7,
                     "Hole pattern must match for radial parts.", 7),
        MatchingRule("tolerance", "Tolerance", THRESHOLD, 5,
                     "Tighter tolerance is always acceptable.", 8,
                     threshold_direction=LTE),
        MatchingRule("esr", "ESR", THRESHOLD, 7,
                     "Lower ESR reduces ripple voltage and self-heating.", 9,
                     threshold_direction=LTE),
        MatchingRule("ripple_current", "Ripple Current", THRESHOLD, 8,
                     "Replacement must carry at least the same ripple current.", 10,
                     threshold_direction=GTE),
        MatchingRule("lifetime", "Lifetime @ Temperature", THRESHOLD, 7,
                     "Electrolyte dry-out sets service life. Longer rated life is better.", 11,
                     threshold_direction=GTE),
        MatchingRule("operating_temp", "Operating Temp Range", THRESHOLD, 7,
                     "Replacement must cover the full original temperature range.", 12,
                     threshold_direction=RANGE),
        MatchingRule("aec_q200", "AEC-Q200", FLAG, 7,
                     "A non-qualified part cannot replace an automotive qualified one.", 13),
        MatchingRule("packaging", "Packaging", OPERATIONAL, 1,
                     "Verify tape, bulk or ammo packaging against the production line.", 14),
    ),
)

ALUMINUM_POLYMER = derive(ALUMINUM_ELECTROLYTIC, TableDelta(
    family_id="60",
    family_name="Aluminum Polymer Capacitors",
    description="Derived from aluminum electrolytic with solid polymer-specific modifications",
    base_family_id="58",
    remove=("lifetime", "reforming"),
    override=(
        RuleOverride("esr", weight=9,
                     reason="Low ESR is the reason to choose polymer (5-30 mΩ vs 50-500 mΩ liquid). Lower is always better."),
        RuleOverride("ripple_current", weight=9,
                     reason="Polymer parts carry much higher ripple current. Elevated importance for power supplies."),
    ),
    add=(
        MatchingRule("polymer_type", "Conductive Polymer Type", IDENTITY, 5,
                     "PEDOT and polypyrrole age differently. Match if specified.", 18),
    ),
))
