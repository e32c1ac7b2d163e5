"""Shipped application-context question sets, keyed by family id."""

from .context import (
    AttributeEffect,
    ContextEffect,
    ContextOption,
    ContextQuestion,
    FamilyContextConfig,
    QuestionCondition,
)

_MANDATORY = ContextEffect.ESCALATE_TO_MANDATORY
_PRIMARY = ContextEffect.ESCALATE_TO_PRIMARY


# =============================================================================
# MLCC (12)
# =============================================================================

MLCC_CONTEXT = FamilyContextConfig(
    family_ids=("12",),
    context_sensitivity="high",
    questions=(
        ContextQuestion(
            question_id="voltage_ratio",
            question_text="What is the operating voltage relative to the rated voltage?",
            priority=1,
            options=(
                ContextOption(
                    value="low",
                    label="< 50% of rated",
                    description="DC bias derating is less of a concern but still relevant for Class II dielectrics",
                    attribute_effects=(
                        AttributeEffect("dc_bias_derating", ContextEffect.ADD_REVIEW_FLAG,
                                        "Low voltage ratio: DC bias derating is minor but should still be checked for X7R/X5R"),
                    ),
                ),
                ContextOption(
                    value="medium",
                    label="50-80% of rated",
                    description="Two identical MLCCs can lose 30-60% capacitance from DC bias",
                    attribute_effects=(
                        AttributeEffect("dc_bias_derating", _PRIMARY,
                                        "At 50-80% of rated voltage, Class II dielectrics can lose 30-60% of capacitance. Verify DC bias curves"),
                        AttributeEffect("dielectric", _PRIMARY,
                                        "Dielectric choice is critical at this voltage ratio. C0G is immune to DC bias"),
                    ),
                ),
                ContextOption(
                    value="high",
                    label="> 80% of rated",
                    description="Severe DC bias derating. Only C0G/NP0 dielectrics are safe at this ratio",
                    attribute_effects=(
                        AttributeEffect("dc_bias_derating", _MANDATORY,
                                        "At >80% of rated, Class II effective capacitance may be <30% of nominal. C0G/NP0 strongly recommended"),
                        AttributeEffect("dielectric", _MANDATORY,
                                        "Only C0G/NP0 dielectrics maintain capacitance at >80% voltage ratio"),
                    ),
                ),
            ),
        ),
        ContextQuestion(
            question_id="flex_pcb",
            question_text="Is this mounted on a flex or flex-rigid PCB?",
            priority=2,
            options=(
                ContextOption(
                    value="yes",
                    label="Yes, flex or flex-rigid",
                    description="Standard MLCCs crack under board flex, causing shorts",
                    attribute_effects=(
                        AttributeEffect("flexible_termination", _MANDATORY,
                                        "Flexible termination is mandatory for flex PCBs"),
                    ),
                ),
                ContextOption(value="no", label="No, rigid PCB",
                              description="Flexible termination is not required but acceptable if present"),
            ),
        ),
        ContextQuestion(
            question_id="audio_path",
            question_text="Is this in an audio or analog signal path?",
            priority=3,
            options=(
                ContextOption(
                    value="yes",
                    label="Yes, audio / analog",
                    description="Class II dielectrics (X7R, X5R) are piezoelectric and can cause audible noise",
                    attribute_effects=(
                        AttributeEffect("dielectric", _PRIMARY,
                                        'C0G/NP0 strongly preferred for audio paths. Class II dielectrics cause "singing capacitor" noise'),
                    ),
                ),
                ContextOption(value="no", label="No", description="Piezoelectric noise is not a concern"),
            ),
        ),
        ContextQuestion(
            question_id="environment",
            question_text="What environment is this for?",
            priority=4,
            options=(
                ContextOption(
                    value="automotive",
                    label="Automotive",
                    description="AEC-Q200 qualification becomes mandatory",
                    attribute_effects=(
                        AttributeEffect("aec_q200", _MANDATORY,
                                        "Automotive application: AEC-Q200 qualification is required"),
                    ),
                ),
                ContextOption(
                    value="industrial",
                    label="Industrial / harsh",
                    description="Wide temperature range, potential sulfur exposure",
                    attribute_effects=(
                        AttributeEffect("operating_temp", _PRIMARY,
                                        "Industrial/harsh environment: verify extended temperature range coverage"),
                    ),
                ),
                ContextOption(value="consumer", label="Consumer", description="Standard specifications acceptable"),
            ),
        ),
    ),
)


# =============================================================================
# SWITCHING REGULATORS (C2)
# =============================================================================

SWITCHING_REGULATOR_CONTEXT = FamilyContextConfig(
    family_ids=("C2",),
    context_sensitivity="critical",
    questions=(
        ContextQuestion(
            question_id="architecture_type",
            question_text="Is this an integrated-switch converter or a controller-only design?",
            priority=1,
            options=(
                ContextOption(
                    value="integrated_switch",
                    label="Integrated switch (converter)",
                    description="The IC includes the power MOSFETs on-chip. Gate drive specifications do not apply.",
                    attribute_effects=(
                        AttributeEffect("gate_drive_current", ContextEffect.NOT_APPLICABLE,
                                        "Integrated-switch converter: gate drive current is internal to the IC"),
                    ),
                ),
                ContextOption(
                    value="controller_only",
                    label="Controller-only (external FETs)",
                    description="The IC drives external MOSFETs. Gate drive current sets switching speed, efficiency and EMI.",
                    attribute_effects=(
                        AttributeEffect("gate_drive_current", _PRIMARY,
                                        "Controller-only design: lower gate drive current means slower transitions, "
                                        "higher switching losses and more EMI"),
                    ),
                ),
                ContextOption(value="unknown", label="Unknown / not specified",
                              description="Gate drive parameters stay at default weight"),
            ),
        ),
        ContextQuestion(
            question_id="comp_redesign",
            question_text="Can the compensation network be redesigned, or must external components stay unchanged?",
            priority=2,
            options=(
                ContextOption(
                    value="can_redesign",
                    label="Compensation can be redesigned",
                    description="A control mode mismatch needs loop re-verification but is not an automatic rejection.",
                    attribute_effects=(
                        AttributeEffect("control_mode", ContextEffect.ADD_REVIEW_FLAG,
                                        "Engineering review required: control mode mismatch with redesignable compensation. "
                                        "PCM needs Type-II, VM needs Type-III. Recalculate compensation for the "
                                        "replacement's gm and verify phase margin."),
                    ),
                ),
                ContextOption(value="cannot_change", label="Components must stay unchanged (drop-in only)",
                              description="Control mode must match exactly"),
                ContextOption(value="unknown", label="Unknown",
                              description="Control mode mismatch stays a hard identity failure"),
            ),
        ),
        ContextQuestion(
            question_id="automotive",
            question_text="Is this an automotive application requiring AEC-Q100?",
            priority=3,
            options=(
                ContextOption(
                    value="yes",
                    label="Yes, automotive (AEC-Q100 required)",
                    description="AEC-Q100 becomes mandatory; load-dump and Tj(max) margins matter.",
                    attribute_effects=(
                        AttributeEffect("aec_q100", _MANDATORY, "Automotive: AEC-Q100 required"),
                        AttributeEffect("tj_max", _PRIMARY,
                                        "Automotive: underhood applications require Tj(max) >= 150°C"),
                        AttributeEffect("vin_max", _PRIMARY,
                                        "Automotive: Vin(max) must survive load-dump transients (>= 42V on 12V systems)"),
                    ),
                ),
                ContextOption(value="no", label="No", description="Standard qualification matching"),
            ),
        ),
        ContextQuestion(
            question_id="passive_flexibility",
            question_text="Can the power inductor and output capacitors be changed, or must they stay as-is?",
            priority=4,
            options=(
                ContextOption(value="passives_can_change", label="Passives can be changed",
                              description="fsw deviation beyond ±10% is flagged but passives will be recalculated"),
                ContextOption(
                    value="passives_fixed",
                    label="Passives must stay unchanged",
                    description="Switching frequency must match the existing inductor and output capacitors.",
                    attribute_effects=(
                        AttributeEffect("fsw", _MANDATORY,
                                        "BLOCKING: passive components are fixed, switching frequency must match. "
                                        "A deviation changes inductor ripple current with the existing inductor.",
                                        block_on_missing=True),
                    ),
                ),
                ContextOption(value="unknown", label="Unknown", description="Standard ±10% fsw tolerance applies"),
            ),
        ),
        ContextQuestion(
            question_id="high_conversion_ratio",
            question_text="Does this design have a high voltage conversion ratio (e.g. 12V to 1V buck)?",
            priority=5,
            condition=QuestionCondition("architecture_type", ("integrated_switch", "controller_only")),
            options=(
                ContextOption(
                    value="yes",
                    label="Yes, high step-down or step-up ratio",
                    description="Extreme duty cycles make minimum on-time the binding specification.",
                    attribute_effects=(
                        AttributeEffect("ton_min", _MANDATORY,
                                        "BLOCKING: high conversion ratio, required ton = D/fsw must exceed the "
                                        "replacement's minimum on-time",
                                        block_on_missing=True),
                    ),
                ),
                ContextOption(value="no", label="No, moderate ratio",
                              description="Standard matching weight applies"),
                ContextOption(value="unknown", label="Unknown",
                              description="Ton_min stays at standard weight"),
            ),
        ),
    ),
)


CONTEXT_CONFIGS: tuple[FamilyContextConfig, ...] = (MLCC_CONTEXT, SWITCHING_REGULATOR_CONTEXT)


def get_context_config(family_id: str) -> FamilyContextConfig | None:
    for config in CONTEXT_CONFIGS:
        if family_id in config.family_ids:
            return config
    return None
