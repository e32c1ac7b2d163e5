"""Resistor families: chip (52) and the through-hole, current sense and chassis mount variants."""

from ..derive import RuleOverride, TableDelta, derive
from ..models import LogicTable, LogicType, MatchingRule, ThresholdDirection

IDENTITY = LogicType.IDENTITY
FLAG = LogicType.IDENTITY_FLAG
THRESHOLD = LogicType.THRESHOLD
FIT = LogicType.FIT

GTE = ThresholdDirection.GTE
LTE = ThresholdDirection.LTE

CHIP_RESISTORS = LogicTable(
    family_id="52",
    family_name="Chip Resistors (Surface Mount)",
    category="Passives",
    description="Hard logic filters for chip resistor replacement validation",
    rules=(
        MatchingRule("resistance", "Resistance", IDENTITY, 10,
                     "Resistance must match exactly. A 10kΩ part is replaced by a 10kΩ part.", 1),
        MatchingRule("package_case", "Package / Case", IDENTITY, 10,
                     "Footprint must match: 0402, 0603 and 0805 have different pad geometries.", 2),
        MatchingRule("tolerance", "Tolerance", THRESHOLD, 7,
                     "Tighter tolerance is always acceptable. ±1% can replace ±5%, not the reverse.", 3,
                     threshold_direction=LTE),
        MatchingRule("power_rating", "Power Rating", THRESHOLD, 9,
                     "Replacement must dissipate at least the same power.", 4,
                     threshold_direction=GTE),
        MatchingRule("voltage_rated", "Voltage Rating", THRESHOLD, 8,
                     "Higher working voltage is always acceptable.", 5,
                     threshold_direction=GTE),
        MatchingRule("tcr", "Temperature Coefficient (TCR)", THRESHOLD, 6,
                     "Lower TCR is more stable over temperature. Critical for precision analog.", 6,
                     threshold_direction=LTE),
        MatchingRule("composition", "Composition / Technology", LogicType.IDENTITY_UPGRADE, 5,
                     "Thin film is more precise and quieter than thick film. Thick to thin is always acceptable.", 7,
                     upgrade_hierarchy=("Thin Film", "Thick Film")),
        MatchingRule("operating_temp", "Operating Temp Range", THRESHOLD, 7,
                     "Replacement must cover the full original temperature range.", 8,
                     threshold_direction=ThresholdDirection.RANGE_SUPERSET),
        MatchingRule("height", "Height (Seated Max)", FIT, 5,
                     "A taller part may not fit tight enclosures or stacked boards.", 9),
        MatchingRule("msl", "Moisture Sensitivity Level", THRESHOLD, 3,
                     "MSL 1 (unlimited floor life) is best. Lower level is always acceptable.", 10,
                     threshold_direction=LTE),
        MatchingRule("aec_q200", "AEC-Q200 Qualification", FLAG, 8,
                     "A non-qualified part cannot replace an automotive qualified one.", 11),
        MatchingRule("anti_sulfur", "Anti-Sulfur", FLAG, 7,
                     "Sulfur-resistant electrodes are required in harsh environments if the original has them.", 12),
        MatchingRule("packaging", "Packaging", LogicType.OPERATIONAL, 2,
                     "Tape & reel width and pitch must match the feeders.", 13),
    ),
)

THROUGH_HOLE_RESISTORS = derive(CHIP_RESISTORS, TableDelta(
    family_id="53",
    family_name="Through-Hole Resistors",
    description="Derived from chip resistors with through-hole mounting additions",
    base_family_id="52",
    add=(
        MatchingRule("lead_spacing", "Lead Spacing / Pitch", IDENTITY, 7,
                     "Hole pattern must match (7.5mm, 10mm, 12.5mm ...).", 14),
        MatchingRule("mounting_style", "Mounting Style", IDENTITY, 9,
                     "Axial through-hole cannot be swapped for SMD without a board change.", 15),
        MatchingRule("body_dimensions", "Body Length × Diameter", FIT, 5,
                     "Higher power bodies are longer. Replacement must fit the available space.", 16),
    ),
))

CURRENT_SENSE_RESISTORS = derive(CHIP_RESISTORS, TableDelta(
    family_id="54",
    family_name="Current Sense Resistors",
    description="Derived from chip resistors with tightened precision and current-sensing additions",
    base_family_id="52",
    override=(
        RuleOverride("tolerance", weight=9,
                     reason="Current sensing needs 1% or better for accurate measurement."),
        RuleOverride("tcr", weight=8,
                     reason="TCR must be 50 ppm/°C or better for measurement stability."),
    ),
    add=(
        MatchingRule("kelvin_sensing", "Kelvin (4-Terminal) Sensing", FLAG, 8,
                     "Separate force and sense pads remove lead resistance error.", 14),
        MatchingRule("power_rating_pulse", "Power Rating (Pulse)", THRESHOLD, 7,
                     "Surge handling for short overcurrent events. Higher is always acceptable.", 15,
                     threshold_direction=GTE),
        MatchingRule("parasitic_inductance", "Inductance (Parasitic)", LogicType.APPLICATION_REVIEW, 5,
                     "Verify for current sensing above 100 kHz. Metal strip and reverse-geometry parts are lower.", 16),
    ),
))

CHASSIS_MOUNT_RESISTORS = derive(CHIP_RESISTORS, TableDelta(
    family_id="55",
    family_name="Chassis Mount / High Power Resistors",
    description="Derived from chip resistors with high-power mounting and thermal additions",
    base_family_id="52",
    override=(
        RuleOverride("power_rating", weight=10,
                     reason="Power rating is derated at the mounting surface temperature. Critical for thermal design."),
    ),
    add=(
        MatchingRule("mounting_style", "Mounting Style", IDENTITY, 9,
                     "TO-220, TO-247, D²PAK, bolt-down or clip mount must match mechanically.", 14),
        MatchingRule("thermal_resistance", "Thermal Resistance (°C/W)", THRESHOLD, 7,
                     "Lower thermal resistance moves heat into the heatsink better.", 15,
                     threshold_direction=LTE),
        MatchingRule("heatsink_dimensions", "Heatsink Interface Dimensions", FIT, 8,
                     "Bolt spacing and tab size must suit the existing hardware.", 16),
    ),
))
