"""Inductor families: power (71) and RF / signal (72)."""

from ..derive import RuleOverride, TableDelta, derive
from ..models import LogicTable, LogicType, MatchingRule, ThresholdDirection

GTE = ThresholdDirection.GTE
LTE = ThresholdDirection.LTE

POWER_INDUCTORS = LogicTable(
    family_id="71",
    family_name="Power Inductors",
    category="Passives",
    description="Hard logic filters for power inductor replacement validation",
    rules=(
        MatchingRule("inductance", "Inductance", LogicType.IDENTITY, 10,
                     "Inductance sets ripple current and loop dynamics. Must match.", 1),
        MatchingRule("package_case", "Package / Case", LogicType.IDENTITY, 10,
                     "Footprint must match.", 2),
        MatchingRule("saturation_current", "Saturation Current (Isat)", LogicType.THRESHOLD, 9,
                     "Peak current must stay below Isat or inductance collapses.", 3,
                     threshold_direction=GTE),
        MatchingRule("rated_current", "Rated Current (Irms)", LogicType.THRESHOLD, 9,
                     "Thermal current rating must cover the RMS load current.", 4,
                     threshold_direction=GTE),
        MatchingRule("dcr", "DC Resistance (DCR)", LogicType.THRESHOLD, 7,
                     "Lower DCR means lower copper loss.", 5,
                     threshold_direction=LTE),
        MatchingRule("tolerance", "Tolerance", LogicType.THRESHOLD, 6,
                     "Tighter tolerance is always acceptable.", 6,
                     threshold_direction=LTE),
        MatchingRule("core_material", "Core Material", LogicType.IDENTITY_UPGRADE, 6,
                     "Metal composite saturates softly. Ferrite can replace iron powder.", 7,
                     upgrade_hierarchy=("Metal Composite", "Ferrite", "Iron Powder")),
        MatchingRule("shielding", "Shielding", LogicType.IDENTITY_UPGRADE, 7,
                     "Shielded parts radiate less. Shielded can replace unshielded, not the reverse.", 8,
                     upgrade_hierarchy=("Shielded", "Semi-Shielded", "Unshielded")),
        MatchingRule("srf", "Self-Resonant Frequency (SRF)", LogicType.THRESHOLD, 5,
                     "SRF must stay well above the switching frequency.", 9,
                     threshold_direction=GTE),
        MatchingRule("height", "Height (Seated Max)", LogicType.FIT, 6,
                     "A taller part may not fit.", 10),
        MatchingRule("operating_temp", "Operating Temp Range", LogicType.THRESHOLD, 6,
                     "Replacement must cover the full original temperature range.", 11,
                     threshold_direction=ThresholdDirection.RANGE_SUPERSET),
        MatchingRule("aec_q200", "AEC-Q200", LogicType.IDENTITY_FLAG, 7,
                     "A non-qualified part cannot replace an automotive qualified one.", 12),
        MatchingRule("packaging", "Packaging", LogicType.OPERATIONAL, 1,
                     "Verify reel format against the production line.", 13),
    ),
)

RF_SIGNAL_INDUCTORS = derive(POWER_INDUCTORS, TableDelta(
    family_id="72",
    family_name="RF / Signal Inductors",
    description="Derived from power inductors with RF signal-frequency priority inversions",
    base_family_id="71",
    override=(
        RuleOverride("saturation_current", weight=5,
                     reason="Signal inductors carry small currents. Still verify, but not a primary concern."),
        RuleOverride("core_material", logic_type=LogicType.IDENTITY, upgrade_hierarchy=(),
                     reason="Air, ceramic or thin-film core only. Ferrite is too lossy at RF. Must match."),
        RuleOverride("shielding", logic_type=LogicType.APPLICATION_REVIEW,
                     reason="Shields can lower Q through eddy currents. Verify against coupling concerns."),
        RuleOverride("srf", weight=8,
                     reason="SRF must be at least 10x the operating frequency or the part turns capacitive."),
    ),
    add=(
        MatchingRule("q_factor", "Q Factor (Quality Factor)", LogicType.THRESHOLD, 9,
                     "Primary RF specification. Higher Q means lower loss and sharper tuning.", 18,
                     threshold_direction=GTE),
        MatchingRule("inductance_tolerance", "Inductance Tolerance", LogicType.THRESHOLD, 7,
                     "Tuned circuits and filters depend directly on inductance accuracy.", 19,
                     threshold_direction=LTE),
    ),
))
