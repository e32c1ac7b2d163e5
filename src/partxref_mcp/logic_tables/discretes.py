"""Discrete semiconductor families: rectifier diodes (B1), MOSFETs (B5), JFETs (B9)."""

from ..models import LogicTable, LogicType, MatchingRule, ThresholdDirection

IDENTITY = LogicType.IDENTITY
FLAG = LogicType.IDENTITY_FLAG
THRESHOLD = LogicType.THRESHOLD
REVIEW = LogicType.APPLICATION_REVIEW

GTE = ThresholdDirection.GTE
LTE = ThresholdDirection.LTE
RANGE = ThresholdDirection.RANGE_SUPERSET

RECTIFIER_DIODES = LogicTable(
    family_id="B1",
    family_name="Rectifier Diodes",
    category="Discrete Semiconductors",
    description="Hard logic filters for rectifier diode and bridge replacement validation",
    rules=(
        MatchingRule("package_case", "Package / Case", IDENTITY, 10,
                     "Footprint and polarity marking must match.", 1),
        MatchingRule("vrrm", "Reverse Voltage (Vrrm)", THRESHOLD, 10,
                     "Repetitive peak reverse voltage must cover the circuit with margin.", 2,
                     threshold_direction=GTE),
        MatchingRule("io_avg", "Average Rectified Current (Io)", THRESHOLD, 10,
                     "Average forward current rating must cover the load.", 3,
                     threshold_direction=GTE),
        MatchingRule("vf", "Forward Voltage (Vf)", THRESHOLD, 8,
                     "Lower Vf means lower conduction loss.", 4,
                     threshold_direction=LTE),
        MatchingRule("ifsm", "Surge Current (Ifsm)", THRESHOLD, 8,
                     "Must survive inrush into the reservoir capacitor.", 5,
                     threshold_direction=GTE),
        MatchingRule("recovery_category", "Recovery Category", LogicType.IDENTITY_UPGRADE, 8,
                     "A faster recovery class can replace a slower one in switching circuits.", 6,
                     upgrade_hierarchy=("Ultrafast", "Fast", "Standard")),
        MatchingRule("trr", "Reverse Recovery Time (trr)", THRESHOLD, 7,
                     "Shorter trr reduces switching loss and EMI.", 7,
                     threshold_direction=LTE),
        MatchingRule("ir_leakage", "Reverse Leakage (Ir)", THRESHOLD, 5,
                     "Lower leakage is better, especially hot.", 8,
                     threshold_direction=LTE),
        MatchingRule("operating_temp", "Operating Junction Temp Range", THRESHOLD, 6,
                     "Replacement must cover the full original junction temperature range.", 9,
                     threshold_direction=RANGE),
        MatchingRule("configuration", "Configuration", IDENTITY, 9,
                     "Single, dual common-cathode and bridge pinouts are not interchangeable.", 10),
        MatchingRule("aec_q101", "AEC-Q101", FLAG, 7,
                     "A non-qualified part cannot replace an automotive qualified one.", 11),
        MatchingRule("recovery_behavior", "Recovery Behavior (Soft / Snappy)", REVIEW, 4,
                     "Snappy recovery rings and radiates. Check soft-recovery needs in EMI sensitive designs.", 12),
        MatchingRule("packaging", "Packaging", LogicType.OPERATIONAL, 1,
                     "Verify reel or ammo format against the production line.", 13),
    ),
)

MOSFETS = LogicTable(
    family_id="B5",
    family_name="MOSFETs (N-Channel & P-Channel)",
    category="Discrete Semiconductors",
    description="Hard logic filters for MOSFET replacement validation",
    rules=(
        MatchingRule("channel_type", "Channel Type (N-Channel / P-Channel)", IDENTITY, 10,
                     "N and P channel parts need opposite drive polarity.", 1),
        MatchingRule("technology", "Technology (Si / SiC / GaN)", IDENTITY, 9,
                     "Si, SiC and GaN need different gate drive voltages.", 2),
        MatchingRule("pin_configuration", "Pin Configuration", IDENTITY, 10,
                     "G-D-S order and tab assignment must match the footprint.", 3),
        MatchingRule("package_case", "Package / Footprint", IDENTITY, 10,
                     "Footprint must match.", 4),
        MatchingRule("aec_q101", "AEC-Q101 Qualification", FLAG, 8,
                     "A non-qualified part cannot replace an automotive qualified one.", 5),
        MatchingRule("vds_max", "Drain-Source Voltage (Vds Max)", THRESHOLD, 10,
                     "Must block the full drain swing including ringing.", 6,
                     threshold_direction=GTE),
        MatchingRule("vgs_max", "Gate-Source Voltage (Vgs Max)", THRESHOLD, 8,
                     "Gate oxide must survive the driver voltage.", 7,
                     threshold_direction=GTE),
        MatchingRule("id_max", "Continuous Drain Current (Id Max)", THRESHOLD, 10,
                     "Continuous current rating must cover the load.", 8,
                     threshold_direction=GTE),
        MatchingRule("id_pulse", "Peak Pulsed Drain Current (Id Pulse)", THRESHOLD, 7,
                     "Pulse rating must cover inrush and fault currents.", 9,
                     threshold_direction=GTE),
        MatchingRule("pd", "Power Dissipation (Pd Max)", THRESHOLD, 6,
                     "Higher dissipation rating is always acceptable.", 10,
                     threshold_direction=GTE),
        MatchingRule("avalanche_energy", "Avalanche Energy (Eas)", THRESHOLD, 7,
                     "Energy absorbed in unclamped inductive switching. Lower Eas reduces fault tolerance.", 11,
                     threshold_direction=GTE),
        MatchingRule("rds_on", "On-State Resistance (Rds(on))", THRESHOLD, 9,
                     "Lower Rds(on) means lower conduction loss.", 12,
                     threshold_direction=LTE),
        MatchingRule("vgs_th", "Gate Threshold Voltage (Vgs(th))", REVIEW, 6,
                     "A different threshold can leave the part partly on with logic-level drive. Check drive margin.", 13),
        MatchingRule("qg", "Total Gate Charge (Qg)", THRESHOLD, 8,
                     "Higher Qg slows switching with the same driver.", 14,
                     threshold_direction=LTE),
        MatchingRule("qgd", "Gate-Drain Charge (Qgd)", THRESHOLD, 7,
                     "Miller charge dominates switching transition time.", 15,
                     threshold_direction=LTE),
        MatchingRule("qgs", "Gate-Source Charge (Qgs)", THRESHOLD, 6,
                     "Lower is better.", 16,
                     threshold_direction=LTE),
        MatchingRule("ciss", "Input Capacitance (Ciss)", THRESHOLD, 6,
                     "Higher Ciss loads the gate driver more.", 17,
                     threshold_direction=LTE),
        MatchingRule("coss", "Output Capacitance (Coss)", REVIEW, 7,
                     "Coss affects soft-switching and snubber design. Review in resonant converters.", 18),
        MatchingRule("crss", "Reverse Transfer Capacitance (Crss)", THRESHOLD, 7,
                     "Higher Crss increases Miller turn-on risk.", 19,
                     threshold_direction=LTE),
        MatchingRule("body_diode_vf", "Body Diode Forward Voltage (Vf)", THRESHOLD, 6,
                     "Lower Vf reduces dead-time loss.", 20,
                     threshold_direction=LTE),
        MatchingRule("body_diode_trr", "Body Diode Reverse Recovery Time (trr)", THRESHOLD, 8,
                     "Hard-switched bridges need fast body diode recovery.", 21,
                     threshold_direction=LTE),
        MatchingRule("rth_jc", "Thermal Resistance Junction-to-Case", THRESHOLD, 7,
                     "Lower is better for heatsinked parts.", 22,
                     threshold_direction=LTE),
        MatchingRule("rth_ja", "Thermal Resistance Junction-to-Ambient", REVIEW, 5,
                     "Depends on copper area. Compare against the actual board layout.", 23),
        MatchingRule("soa", "Safe Operating Area (SOA)", REVIEW, 7,
                     "Linear-mode and hot-swap designs must compare SOA curves directly.", 24),
        MatchingRule("height", "Height / Profile", LogicType.FIT, 5,
                     "A taller part may not fit.", 25),
        MatchingRule("mounting_style", "Mounting Style", IDENTITY, 9,
                     "SMD and through-hole are not interchangeable.", 26),
        MatchingRule("packaging", "Packaging", LogicType.OPERATIONAL, 2,
                     "Verify tape, tube or tray format.", 27),
    ),
)

JFETS = LogicTable(
    family_id="B9",
    family_name="JFETs (Junction Field-Effect Transistors)",
    category="Discrete Semiconductors",
    description="Hard logic filters for JFET replacement validation",
    rules=(
        MatchingRule("channel_type", "Channel Type (N/P)", IDENTITY, 10,
                     "N and P channel JFETs need opposite gate bias polarity.", 1),
        MatchingRule("package_case", "Package / Footprint", IDENTITY, 10,
                     "JFET pin order varies even within TO-92 and SOT-23. Gate/drain swaps destroy the part.", 2),
        MatchingRule("vp", "Pinch-Off Voltage Vp / Vgs(off)", LogicType.IDENTITY_RANGE, 10,
                     "Vp sets the bias point. Spreads are 3-4:1, so the ranges must overlap.", 3),
        MatchingRule("idss", "Drain Saturation Current Idss", LogicType.IDENTITY_RANGE, 9,
                     "Idss bounds the operating current and gain. Ranges must overlap.", 4),
        MatchingRule("gfs", "Forward Transconductance gfs", THRESHOLD, 7,
                     "Lower gfs means lower gain and more noise.", 5,
                     threshold_direction=GTE),
        MatchingRule("noise_figure", "Noise Figure NF", THRESHOLD, 8,
                     "Low noise is the main reason to choose a JFET.", 6,
                     threshold_direction=LTE),
        MatchingRule("fc_1f_corner", "1/f Noise Corner Frequency", THRESHOLD, 7,
                     "Critical for audio below 10 kHz, irrelevant for RF.", 7,
                     threshold_direction=LTE),
        MatchingRule("vds_max", "Drain-Source Breakdown Voltage Vds", THRESHOLD, 8,
                     "Must cover the full drain swing.", 8,
                     threshold_direction=GTE),
        MatchingRule("vgs_max", "Gate-Source Breakdown Voltage Vgs", THRESHOLD, 6,
                     "Low margin increases vulnerability to gate transients.", 9,
                     threshold_direction=GTE),
        MatchingRule("igss", "Gate Leakage Current Igss", THRESHOLD, 9,
                     "Binding specification for electrometer and high-impedance inputs.", 10,
                     threshold_direction=LTE),
        MatchingRule("ft", "Unity-Gain Frequency ft", THRESHOLD, 6,
                     "Must sit well above the operating frequency in RF amplifiers.", 11,
                     threshold_direction=GTE),
        MatchingRule("ciss", "Input Capacitance Ciss", THRESHOLD, 5,
                     "Limits input bandwidth.", 12,
                     threshold_direction=LTE),
        MatchingRule("crss", "Reverse Transfer Capacitance Crss", THRESHOLD, 5,
                     "Miller capacitance limits common-source bandwidth.", 13,
                     threshold_direction=LTE),
        MatchingRule("pd_max", "Maximum Power Dissipation", THRESHOLD, 4,
                     "Rarely binding in small-signal use.", 14,
                     threshold_direction=GTE),
        MatchingRule("tj_max", "Maximum Junction Temperature", THRESHOLD, 4,
                     "Higher is always acceptable.", 15,
                     threshold_direction=GTE),
        MatchingRule("aec_q101", "AEC-Q101 Automotive Qualification", FLAG, 5,
                     "A non-qualified part cannot replace an automotive qualified one.", 16),
        MatchingRule("matched_pair_review", "Matched Pair Suitability", REVIEW, 0,
                     "Differential inputs need matched Vp and Idss between two devices. Single-device rules are not enough.", 17),
    ),
)
