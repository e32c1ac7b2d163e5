"""Power management families: switching regulators (C2).

Topology and architecture are blocking gates: a buck cannot replace a boost
and a controller cannot replace an integrated-switch converter, so a missing
value on the candidate fails outright instead of going to review.
"""

from ..models import LogicTable, LogicType, MatchingRule, ThresholdDirection

IDENTITY = LogicType.IDENTITY
THRESHOLD = LogicType.THRESHOLD

GTE = ThresholdDirection.GTE
LTE = ThresholdDirection.LTE

SWITCHING_REGULATORS = LogicTable(
    family_id="C2",
    family_name="Switching Regulators (DC-DC Converters & Controllers)",
    category="Integrated Circuits",
    description="Hard logic filters for switching regulator replacement validation",
    rules=(
        MatchingRule("topology", "Topology", IDENTITY, 10,
                     "Buck, boost, buck-boost, flyback and SEPIC are different power stages.", 1,
                     block_on_missing=True),
        MatchingRule("architecture", "Architecture", IDENTITY, 10,
                     "Integrated-switch and controller-only designs have different external parts.", 2,
                     block_on_missing=True),
        MatchingRule("package_case", "Package / Footprint", IDENTITY, 10,
                     "Footprint and pinout must match.", 3),
        MatchingRule("control_mode", "Control Mode", IDENTITY, 9,
                     "The compensation network is tuned for the original control mode.", 4),
        MatchingRule("output_polarity", "Output Polarity", IDENTITY, 10,
                     "Positive, negative and isolated outputs are not interchangeable.", 5),
        MatchingRule("vin_min", "Minimum Input Voltage (Vin Min)", THRESHOLD, 7,
                     "Replacement must start up at the lowest input voltage.", 6,
                     threshold_direction=LTE),
        MatchingRule("vin_max", "Maximum Input Voltage (Vin Max)", THRESHOLD, 8,
                     "Replacement must survive the highest input voltage including transients.", 7,
                     threshold_direction=GTE),
        MatchingRule("vout_range", "Output Voltage Range", THRESHOLD, 8,
                     "Achievable output range must contain the original's.", 8,
                     threshold_direction=ThresholdDirection.RANGE_SUPERSET),
        MatchingRule("iout_max", "Maximum Output Current", THRESHOLD, 9,
                     "Current limit must cover the load.", 9,
                     threshold_direction=GTE),
        MatchingRule("fsw", "Switching Frequency (fsw)", IDENTITY, 8,
                     "Within ±10% the existing inductor and capacitors still work.", 10,
                     tolerance_pct=10.0),
        MatchingRule("ton_min", "Minimum On-Time", THRESHOLD, 7,
                     "High conversion ratios need a short minimum on-time.", 11,
                     threshold_direction=LTE),
        MatchingRule("gate_drive_current", "Gate Drive Current", THRESHOLD, 7,
                     "Controller-only parts must drive the external FETs as fast as before.", 12,
                     threshold_direction=GTE),
        MatchingRule("vref", "Feedback Reference Voltage (Vref)", LogicType.VREF_CHECK, 9,
                     "A different Vref changes the output voltage set by the existing divider.", 13),
        MatchingRule("compensation_type", "Compensation Type", IDENTITY, 8,
                     "Internal and external Type-II/III compensation need different parts.", 14),
        MatchingRule("soft_start", "Soft-Start", IDENTITY, 6,
                     "Internal, external capacitor or absent soft-start changes inrush.", 15),
        MatchingRule("enable_uvlo", "Enable / UVLO Pin", IDENTITY, 7,
                     "Enable polarity and threshold must suit the sequencing circuit.", 16),
        MatchingRule("ocp_mode", "Overcurrent Protection Mode", IDENTITY, 6,
                     "Hiccup, foldback and latch-off behave differently under fault.", 17),
        MatchingRule("thermal_shutdown", "Thermal Shutdown Threshold", THRESHOLD, 6,
                     "Higher threshold is acceptable.", 18,
                     threshold_direction=GTE),
        MatchingRule("rth_ja", "Thermal Resistance (Rθja)", THRESHOLD, 6,
                     "Lower thermal resistance runs cooler.", 19,
                     threshold_direction=LTE),
        MatchingRule("tj_max", "Maximum Junction Temperature (Tj Max)", THRESHOLD, 7,
                     "Higher is always acceptable.", 20,
                     threshold_direction=GTE),
        MatchingRule("aec_q100", "AEC-Q100 Qualification", LogicType.IDENTITY_FLAG, 8,
                     "A non-qualified part cannot replace an automotive qualified one.", 21),
        MatchingRule("packaging", "Packaging", LogicType.OPERATIONAL, 1,
                     "Verify tape, tube or tray format.", 22),
    ),
)
