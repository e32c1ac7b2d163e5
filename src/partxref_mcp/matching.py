"""Rule-based matching engine.

Evaluates a candidate replacement against a source part, one family rule at a
time, and aggregates the weighted verdicts into a match percentage plus a hard
pass/fail. Nothing here raises for sparse or malformed attribute data; every
rule degrades to an explainable pass, review or fail.
"""

import logging
import math
from typing import Callable

from .config import (
    MAX_SUMMARY_NOTES,
    MISSING_VALUE,
    OPERATIONAL_MISMATCH_CREDIT,
    REVIEW_CREDIT,
    VREF_MATCH_TOLERANCE_PCT,
    VREF_OUTPUT_ATTRIBUTE,
    VREF_OUTPUT_TOLERANCE_PCT,
)
from .models import (
    NON_MATCHABLE_LOGIC_TYPES,
    EvaluationResult,
    LogicTable,
    LogicType,
    MatchingRule,
    MatchStatus,
    MissingAttribute,
    ParametricAttribute,
    PartAttributes,
    Recommendation,
    RuleEvaluation,
    RuleResult,
    ThresholdDirection,
)
from .values import extract_numeric_value, normalize, parse_flag, parse_msl, parse_range, parse_tolerance

logger = logging.getLogger(__name__)

Evaluator = Callable[
    [MatchingRule, ParametricAttribute | None, ParametricAttribute | None, PartAttributes],
    RuleEvaluation,
]

MISSING_DATA_NOTE = "Missing attribute data"

# Characters that end the leading token of a hierarchy value: "C0G (NP0)" -> "C0G"
_QUALIFIER_SEPARATORS = (",", "(", "[", "/")


# =============================================================================
# HELPERS
# =============================================================================


def _verdict(
    rule: MatchingRule,
    source: ParametricAttribute | None,
    candidate: ParametricAttribute | None,
    result: RuleResult,
    status: MatchStatus,
    note: str | None = None,
    missing: str = MISSING_VALUE,
) -> RuleEvaluation:
    return RuleEvaluation(
        attribute_id=rule.attribute_id,
        name=rule.name,
        logic_type=rule.logic_type,
        source_value=source.value if source else missing,
        candidate_value=candidate.value if candidate else missing,
        result=result,
        match_status=status,
        note=note,
    )


def _same(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9)


def _numeric_pair(
    source: ParametricAttribute, candidate: ParametricAttribute
) -> tuple[float | None, float | None]:
    """Numeric values for both sides, on the same scale.

    Pre-computed values are used when both sides have one; otherwise both are
    re-read from their text so an SI-scaled number is never compared against
    an unscaled one.
    """
    if source.numeric_value is not None and candidate.numeric_value is not None:
        return source.numeric_value, candidate.numeric_value
    src, _ = extract_numeric_value(source.value)
    cand, _ = extract_numeric_value(candidate.value)
    return src, cand


def _deviation_pct(reference: float, value: float) -> float | None:
    if reference == 0:
        return None
    return abs(value - reference) / abs(reference) * 100


def _hierarchy_position(value: str, hierarchy: tuple[str, ...]) -> int | None:
    """Index of ``value`` in a best -> worst hierarchy, or None.

    Entries match whole values only, so "Shielded" never matches inside
    "Semi-Shielded". A trailing qualifier after the first separator is
    ignored: "C0G (NP0)" and "X7R, Automotive" resolve to their first token.
    """
    norm = normalize(value)
    token = norm
    for sep in _QUALIFIER_SEPARATORS:
        token = token.split(sep, 1)[0]
    token = token.strip()
    for i, entry in enumerate(hierarchy):
        entry_norm = normalize(entry)
        if entry_norm == norm or entry_norm == token:
            return i
    return None


# =============================================================================
# RULE EVALUATORS
# =============================================================================


def _evaluate_identity(rule, source, candidate, source_attrs) -> RuleEvaluation:
    if source is None:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if candidate is None:
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT, MISSING_DATA_NOTE)

    if source.numeric_value is not None and candidate.numeric_value is not None:
        src, cand = source.numeric_value, candidate.numeric_value
        if _same(src, cand):
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
        if rule.tolerance_pct is not None:
            deviation = _deviation_pct(src, cand)
            if deviation is not None and deviation <= rule.tolerance_pct:
                return _verdict(
                    rule, source, candidate, RuleResult.PASS, MatchStatus.COMPATIBLE,
                    f"{rule.name} differs by {deviation:.1f}% (within ±{rule.tolerance_pct:g}%)",
                )
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT)

    if normalize(source.value) == normalize(candidate.value):
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT)


def _evaluate_identity_range(rule, source, candidate, source_attrs) -> RuleEvaluation:
    if source is None:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if candidate is None:
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT, MISSING_DATA_NOTE)

    src = parse_range(source.value)
    cand = parse_range(candidate.value)
    if src is None or cand is None:
        if normalize(source.value) == normalize(candidate.value):
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
        return _verdict(
            rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE,
            "Could not parse range for comparison",
        )

    if _same(src[0], cand[0]) and _same(src[1], cand[1]):
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if cand[0] <= src[1] and cand[1] >= src[0]:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.COMPATIBLE)
    return _verdict(
        rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT,
        f"{candidate.value} does not overlap {source.value}",
    )


def _evaluate_identity_upgrade(rule, source, candidate, source_attrs) -> RuleEvaluation:
    if source is None:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if candidate is None:
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT, MISSING_DATA_NOTE)

    src_idx = _hierarchy_position(source.value, rule.upgrade_hierarchy)
    cand_idx = _hierarchy_position(candidate.value, rule.upgrade_hierarchy)

    if src_idx is None and cand_idx is None:
        if normalize(source.value) == normalize(candidate.value):
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT)
    if src_idx is None or cand_idx is None:
        return _verdict(
            rule, source, candidate, RuleResult.FAIL, MatchStatus.DIFFERENT,
            "Cannot determine hierarchy position",
        )

    if cand_idx == src_idx:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if cand_idx < src_idx:
        return _verdict(
            rule, source, candidate, RuleResult.UPGRADE, MatchStatus.BETTER,
            f"Upgraded from {source.value} to {candidate.value}",
        )
    return _verdict(
        rule, source, candidate, RuleResult.FAIL, MatchStatus.WORSE,
        f"Downgrade from {source.value} to {candidate.value} not allowed",
    )


def _evaluate_identity_flag(rule, source, candidate, source_attrs) -> RuleEvaluation:
    required = parse_flag(source.value if source else None)
    has = parse_flag(candidate.value if candidate else None)

    if required and not has:
        return _verdict(
            rule, source, candidate, RuleResult.FAIL, MatchStatus.WORSE,
            f"Original requires {rule.name}, replacement does not have it", missing="No",
        )
    if not required and has:
        return _verdict(
            rule, source, candidate, RuleResult.PASS, MatchStatus.BETTER,
            f"Replacement has {rule.name} (not required by original)", missing="No",
        )
    return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT, missing="No")


def _compare_ordered(rule, source, candidate, src: float, cand: float, lower_is_better: bool) -> RuleEvaluation:
    if _same(src, cand):
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    passes = cand < src if lower_is_better else cand > src
    if passes:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.BETTER)
    return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.WORSE)


def _threshold(rule, source, candidate, direction: ThresholdDirection) -> RuleEvaluation:
    if source is None:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if candidate is None:
        result = RuleResult.FAIL if rule.block_on_missing else RuleResult.REVIEW
        return _verdict(rule, source, candidate, result, MatchStatus.DIFFERENT, MISSING_DATA_NOTE)

    if direction == ThresholdDirection.RANGE_SUPERSET:
        src = parse_range(source.value)
        cand = parse_range(candidate.value)
        if src is None or cand is None:
            return _verdict(
                rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE,
                "Could not parse range for comparison",
            )
        if _same(src[0], cand[0]) and _same(src[1], cand[1]):
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
        if cand[0] <= src[0] and cand[1] >= src[1]:
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.BETTER)
        return _verdict(rule, source, candidate, RuleResult.FAIL, MatchStatus.WORSE)

    # Tolerance and MSL read as ordinals: tighter tolerance / lower level is better
    if rule.attribute_id in ("tolerance", "msl"):
        parser = parse_tolerance if rule.attribute_id == "tolerance" else parse_msl
        src, cand = parser(source.value), parser(candidate.value)
        if src is None or cand is None:
            return _verdict(
                rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE,
                f"Could not parse {rule.name.lower()} values",
            )
        return _compare_ordered(rule, source, candidate, src, cand, lower_is_better=True)

    src, cand = _numeric_pair(source, candidate)
    if src is None or cand is None:
        if normalize(source.value) == normalize(candidate.value):
            return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
        return _verdict(
            rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE,
            "Could not parse numeric values for threshold comparison",
        )
    return _compare_ordered(
        rule, source, candidate, src, cand, lower_is_better=direction == ThresholdDirection.LTE,
    )


def _evaluate_threshold(rule, source, candidate, source_attrs) -> RuleEvaluation:
    return _threshold(rule, source, candidate, rule.threshold_direction or ThresholdDirection.GTE)


def _evaluate_fit(rule, source, candidate, source_attrs) -> RuleEvaluation:
    return _threshold(rule, source, candidate, ThresholdDirection.LTE)


def _evaluate_application_review(rule, source, candidate, source_attrs) -> RuleEvaluation:
    return _verdict(rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE, rule.reason or None)


def _evaluate_operational(rule, source, candidate, source_attrs) -> RuleEvaluation:
    src = normalize(source.value) if source else MISSING_VALUE
    cand = normalize(candidate.value) if candidate else MISSING_VALUE
    if src == cand:
        return _verdict(rule, source, candidate, RuleResult.INFO, MatchStatus.EXACT)
    return _verdict(
        rule, source, candidate, RuleResult.INFO, MatchStatus.COMPATIBLE,
        "Verify packaging compatibility with production line",
    )


def _output_voltage(source_attrs: PartAttributes) -> float | None:
    """Fixed output voltage of the source design; None for adjustable ranges."""
    param = source_attrs.get(VREF_OUTPUT_ATTRIBUTE)
    if param is None:
        return None
    bounds = parse_range(param.value)
    if bounds is None or not _same(bounds[0], bounds[1]):
        return None
    return bounds[0]


def _evaluate_vref(rule, source, candidate, source_attrs) -> RuleEvaluation:
    if source is None:
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if candidate is None:
        result = RuleResult.FAIL if rule.block_on_missing else RuleResult.REVIEW
        return _verdict(rule, source, candidate, result, MatchStatus.DIFFERENT, MISSING_DATA_NOTE)

    vref_src, vref_cand = _numeric_pair(source, candidate)
    if vref_src is None or vref_cand is None or vref_src == 0:
        return _verdict(
            rule, source, candidate, RuleResult.REVIEW, MatchStatus.COMPATIBLE,
            "Could not parse reference voltage for comparison",
        )
    if _same(vref_src, vref_cand):
        return _verdict(rule, source, candidate, RuleResult.PASS, MatchStatus.EXACT)
    if _deviation_pct(vref_src, vref_cand) <= VREF_MATCH_TOLERANCE_PCT:
        return _verdict(
            rule, source, candidate, RuleResult.PASS, MatchStatus.BETTER,
            f"Vref {candidate.value} within ±{VREF_MATCH_TOLERANCE_PCT:g}% of {source.value}",
        )

    vout = _output_voltage(source_attrs)
    if vout is None or vout == 0:
        return _verdict(
            rule, source, candidate, RuleResult.REVIEW, MatchStatus.DIFFERENT,
            f"Vref differs ({source.value} vs {candidate.value}) and the output voltage is unknown. "
            f"Recompute the feedback divider (Rbot/Rtop) for the replacement",
        )

    ratio = vout / vref_src - 1
    vout_cand = vref_cand * (ratio + 1)
    deviation = _deviation_pct(vout, vout_cand)
    if deviation <= VREF_OUTPUT_TOLERANCE_PCT:
        return _verdict(
            rule, source, candidate, RuleResult.PASS, MatchStatus.COMPATIBLE,
            f"Existing divider gives {vout_cand:.3g}V, within tolerance of {vout:.3g}V ({deviation:.1f}%)",
        )
    new_ratio = vout / vref_cand - 1
    return _verdict(
        rule, source, candidate, RuleResult.REVIEW, MatchStatus.DIFFERENT,
        f"Existing divider gives {vout_cand:.3g}V instead of {vout:.3g}V ({deviation:.1f}% off). "
        f"Recompute feedback resistors: Rtop/Rbot = {new_ratio:.3f}",
    )


EVALUATORS: dict[LogicType, Evaluator] = {
    LogicType.IDENTITY: _evaluate_identity,
    LogicType.IDENTITY_RANGE: _evaluate_identity_range,
    LogicType.IDENTITY_UPGRADE: _evaluate_identity_upgrade,
    LogicType.IDENTITY_FLAG: _evaluate_identity_flag,
    LogicType.THRESHOLD: _evaluate_threshold,
    LogicType.FIT: _evaluate_fit,
    LogicType.APPLICATION_REVIEW: _evaluate_application_review,
    LogicType.OPERATIONAL: _evaluate_operational,
    LogicType.VREF_CHECK: _evaluate_vref,
}


def evaluate_rule(rule: MatchingRule, source: PartAttributes, candidate: PartAttributes) -> RuleEvaluation:
    evaluator = EVALUATORS[rule.logic_type]
    return evaluator(rule, source.get(rule.attribute_id), candidate.get(rule.attribute_id), source)


# =============================================================================
# SCORING
# =============================================================================


def _earned_weight(rule: MatchingRule, evaluation: RuleEvaluation) -> float:
    if evaluation.result in (RuleResult.PASS, RuleResult.UPGRADE):
        return rule.weight
    if evaluation.result == RuleResult.INFO:
        if evaluation.match_status == MatchStatus.EXACT:
            return rule.weight
        return rule.weight * OPERATIONAL_MISMATCH_CREDIT
    if evaluation.result == RuleResult.REVIEW:
        return rule.weight * REVIEW_CREDIT
    return 0.0


def _percentage(earned: float, total: float) -> int:
    if total <= 0:
        return 0
    return math.floor(earned / total * 100 + 0.5)  # half-up


def evaluate(table: LogicTable, source: PartAttributes, candidate: PartAttributes) -> EvaluationResult:
    """Evaluate every rule in ``table`` for one candidate.

    Any hard ``fail`` makes the candidate fail outright, whatever its
    percentage. Review outcomes earn partial credit and are listed in
    ``review_flags`` by attribute id.
    """
    results: list[RuleEvaluation] = []
    review_flags: list[str] = []
    notes: list[str] = []
    total = 0.0
    earned = 0.0
    has_hard_failure = False

    for rule in table.rules:
        evaluation = evaluate_rule(rule, source, candidate)
        results.append(evaluation)
        total += rule.weight
        earned += _earned_weight(rule, evaluation)
        if evaluation.result == RuleResult.FAIL:
            has_hard_failure = True
        elif evaluation.result == RuleResult.REVIEW:
            review_flags.append(rule.attribute_id)
        if evaluation.note:
            notes.append(evaluation.note)

    return EvaluationResult(
        candidate=candidate,
        match_percentage=_percentage(earned, total),
        passed=not has_hard_failure,
        results=tuple(results),
        review_flags=tuple(review_flags),
        notes=tuple(notes),
    )


# =============================================================================
# RANKING
# =============================================================================


def _summary_notes(evaluation: EvaluationResult) -> str | None:
    parts = []
    if not evaluation.passed:
        parts.append("Has failing attributes")
    review_names = [r.name for r in evaluation.results if r.result == RuleResult.REVIEW]
    if review_names:
        parts.append(f"Needs review: {', '.join(review_names)}")
    unique_notes = list(dict.fromkeys(evaluation.notes))
    parts.extend(unique_notes[:MAX_SUMMARY_NOTES])
    return " | ".join(parts) if parts else None


def find_replacements(
    table: LogicTable, source: PartAttributes, candidates: list[PartAttributes]
) -> list[Recommendation]:
    """Rank candidates: passing before failing, then by match percentage.

    The source part itself is never recommended. Candidates that tie keep
    their input order.
    """
    evaluations = [
        evaluate(table, source, candidate)
        for candidate in candidates
        if candidate.part.mpn != source.part.mpn
    ]
    evaluations.sort(key=lambda e: (not e.passed, -e.match_percentage))
    logger.debug(
        f"{source.part.mpn}: ranked {len(evaluations)} candidates against family {table.family_id}, "
        f"{sum(e.passed for e in evaluations)} passing"
    )
    return [
        Recommendation(
            part=e.candidate.part,
            match_percentage=e.match_percentage,
            passed=e.passed,
            match_details=e.results,
            notes=_summary_notes(e),
        )
        for e in evaluations
    ]


def detect_missing_attributes(table: LogicTable, attrs: PartAttributes) -> list[MissingAttribute]:
    """Matchable rules whose attribute the part does not have, heaviest first."""
    missing = [
        rule for rule in table.rules
        if rule.logic_type not in NON_MATCHABLE_LOGIC_TYPES and not attrs.has(rule.attribute_id)
    ]
    missing.sort(key=lambda rule: rule.weight, reverse=True)
    return [
        MissingAttribute(
            attribute_id=rule.attribute_id,
            name=rule.name,
            weight=rule.weight,
            logic_type=rule.logic_type,
        )
        for rule in missing
    ]
