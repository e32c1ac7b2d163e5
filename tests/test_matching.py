"""Tests for the matching engine - rule evaluators, scoring and ranking."""

import pytest

from partxref_mcp.logic_tables.capacitors import DIELECTRIC_HIERARCHY, MLCC
from partxref_mcp.matching import (
    # Rule evaluation
    EVALUATORS,
    MISSING_DATA_NOTE,
    evaluate_rule,
    # Scoring and ranking
    evaluate,
    find_replacements,
    detect_missing_attributes,
)
from partxref_mcp.models import (
    ComponentCategory,
    LogicTable,
    LogicType,
    MatchingRule,
    MatchStatus,
    ParametricAttribute,
    Part,
    PartAttributes,
    RuleResult,
    ThresholdDirection,
)


def param(attribute_id: str, value: str, numeric: float | None = None) -> ParametricAttribute:
    return ParametricAttribute(attribute_id, attribute_id.replace("_", " ").title(), value, numeric)


def part(mpn: str, *params: ParametricAttribute) -> PartAttributes:
    return PartAttributes(
        part=Part(mpn, "Acme", f"Test part {mpn}", ComponentCategory.CAPACITORS, "MLCC"),
        parameters=params,
    )


def rule(attribute_id: str, logic_type: LogicType, weight: int = 10, **kwargs) -> MatchingRule:
    return MatchingRule(attribute_id, attribute_id.replace("_", " ").title(), logic_type, weight, **kwargs)


def table(*rules: MatchingRule) -> LogicTable:
    return LogicTable("T", "Test Family", "Passives", "Test table", rules=rules)


def check(r: MatchingRule, source: ParametricAttribute | None, candidate: ParametricAttribute | None):
    src = part("SRC", source) if source else part("SRC")
    cand = part("CAND", candidate) if candidate else part("CAND")
    return evaluate_rule(r, src, cand)


# =============================================================================
# RULE EVALUATORS
# =============================================================================


class TestEvaluatorRegistry:
    """Tests for the evaluator dispatch table."""

    def test_every_logic_type_has_evaluator(self):
        assert set(EVALUATORS) == set(LogicType)


class TestIdentity:
    """Tests for identity rules."""

    RULE = rule("capacitance", LogicType.IDENTITY)

    def test_numeric_exact(self):
        result = check(self.RULE, param("capacitance", "100nF", 1e-7), param("capacitance", "0.1µF", 1e-7))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.EXACT

    def test_numeric_different(self):
        result = check(self.RULE, param("capacitance", "100nF", 1e-7), param("capacitance", "220nF", 2.2e-7))
        assert result.result == RuleResult.FAIL
        assert result.match_status == MatchStatus.DIFFERENT

    def test_text_match_is_normalized(self):
        r = rule("package_case", LogicType.IDENTITY)
        result = check(r, param("package_case", "0603 (1608 Metric)"), param("package_case", " 0603  (1608 metric)"))
        assert result.result == RuleResult.PASS

    def test_text_without_numbers_compared_as_text(self):
        """Without numeric values on both sides, SOT-23 and SOT-23-5 are different text."""
        r = rule("package_case", LogicType.IDENTITY)
        result = check(r, param("package_case", "SOT-23"), param("package_case", "SOT-23-5"))
        assert result.result == RuleResult.FAIL

    def test_within_tolerance(self):
        r = rule("fsw", LogicType.IDENTITY, tolerance_pct=10.0)
        result = check(r, param("fsw", "500kHz", 5e5), param("fsw", "530kHz", 5.3e5))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.COMPATIBLE
        assert "within ±10%" in result.note

    def test_outside_tolerance(self):
        r = rule("fsw", LogicType.IDENTITY, tolerance_pct=10.0)
        result = check(r, param("fsw", "500kHz", 5e5), param("fsw", "600kHz", 6e5))
        assert result.result == RuleResult.FAIL

    def test_missing_source_passes(self):
        result = check(self.RULE, None, param("capacitance", "100nF", 1e-7))
        assert result.result == RuleResult.PASS
        assert result.source_value == "N/A"

    def test_missing_candidate_fails(self):
        result = check(self.RULE, param("capacitance", "100nF", 1e-7), None)
        assert result.result == RuleResult.FAIL
        assert result.candidate_value == "N/A"
        assert result.note == MISSING_DATA_NOTE


class TestIdentityRange:
    """Tests for identity_range rules (overlapping parameter ranges)."""

    RULE = rule("vp", LogicType.IDENTITY_RANGE)

    def test_same_range(self):
        result = check(self.RULE, param("vp", "-0.5V ~ -6V"), param("vp", "-0.5V ~ -6V"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.EXACT

    def test_overlap(self):
        result = check(self.RULE, param("vp", "-0.5V ~ -6V"), param("vp", "-1V ~ -8V"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.COMPATIBLE

    def test_no_overlap(self):
        result = check(self.RULE, param("vp", "-0.5V ~ -6V"), param("vp", "-7V ~ -10V"))
        assert result.result == RuleResult.FAIL
        assert "does not overlap" in result.note

    def test_unparseable_goes_to_review(self):
        result = check(self.RULE, param("vp", "Matched"), param("vp", "Selected"))
        assert result.result == RuleResult.REVIEW

    def test_missing_source_passes(self):
        assert check(self.RULE, None, param("vp", "-1V ~ -3V")).result == RuleResult.PASS

    def test_missing_candidate_fails(self):
        assert check(self.RULE, param("vp", "-1V ~ -3V"), None).result == RuleResult.FAIL


class TestIdentityUpgrade:
    """Tests for identity_upgrade rules (best -> worst hierarchies)."""

    RULE = rule("dielectric", LogicType.IDENTITY_UPGRADE, upgrade_hierarchy=DIELECTRIC_HIERARCHY)

    def test_same_grade(self):
        result = check(self.RULE, param("dielectric", "X7R"), param("dielectric", "X7R"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.EXACT

    def test_upgrade(self):
        result = check(self.RULE, param("dielectric", "X7R"), param("dielectric", "C0G"))
        assert result.result == RuleResult.UPGRADE
        assert result.match_status == MatchStatus.BETTER
        assert result.note == "Upgraded from X7R to C0G"

    def test_downgrade(self):
        result = check(self.RULE, param("dielectric", "X7R"), param("dielectric", "Y5V"))
        assert result.result == RuleResult.FAIL
        assert result.match_status == MatchStatus.WORSE

    def test_qualifier_ignored(self):
        result = check(self.RULE, param("dielectric", "C0G (NP0)"), param("dielectric", "C0G"))
        assert result.match_status == MatchStatus.EXACT

    def test_whole_value_match(self):
        """'Shielded' must not match inside 'Semi-Shielded'."""
        r = rule("shielding", LogicType.IDENTITY_UPGRADE,
                 upgrade_hierarchy=("Shielded", "Semi-Shielded", "Unshielded"))
        assert check(r, param("shielding", "Semi-Shielded"), param("shielding", "Shielded")).result == RuleResult.UPGRADE
        assert check(r, param("shielding", "Shielded"), param("shielding", "Semi-Shielded")).result == RuleResult.FAIL

    def test_unknown_grade(self):
        result = check(self.RULE, param("dielectric", "X7R"), param("dielectric", "U2J"))
        assert result.result == RuleResult.FAIL
        assert result.note == "Cannot determine hierarchy position"

    def test_both_unknown_but_equal(self):
        result = check(self.RULE, param("dielectric", "U2J"), param("dielectric", "u2j"))
        assert result.result == RuleResult.PASS

    def test_missing_source_passes(self):
        assert check(self.RULE, None, param("dielectric", "X5R")).result == RuleResult.PASS


class TestIdentityFlag:
    """Tests for identity_flag rules."""

    RULE = rule("aec_q200", LogicType.IDENTITY_FLAG)

    def test_required_and_present(self):
        result = check(self.RULE, param("aec_q200", "Yes"), param("aec_q200", "Yes"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.EXACT

    def test_required_but_absent(self):
        result = check(self.RULE, param("aec_q200", "Yes"), param("aec_q200", "No"))
        assert result.result == RuleResult.FAIL
        assert result.match_status == MatchStatus.WORSE

    def test_required_but_missing(self):
        result = check(self.RULE, param("aec_q200", "Yes"), None)
        assert result.result == RuleResult.FAIL
        assert result.candidate_value == "No"

    def test_extra_feature_is_better(self):
        result = check(self.RULE, param("aec_q200", "No"), param("aec_q200", "Yes"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.BETTER

    def test_not_required(self):
        assert check(self.RULE, None, None).result == RuleResult.PASS


class TestThreshold:
    """Tests for threshold rules."""

    GTE_RULE = rule("voltage_rated", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.GTE)
    LTE_RULE = rule("esr", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.LTE)

    def test_gte_higher_is_better(self):
        result = check(self.GTE_RULE, param("voltage_rated", "25V", 25), param("voltage_rated", "50V", 50))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.BETTER

    def test_gte_lower_fails(self):
        result = check(self.GTE_RULE, param("voltage_rated", "25V", 25), param("voltage_rated", "16V", 16))
        assert result.result == RuleResult.FAIL
        assert result.match_status == MatchStatus.WORSE

    def test_gte_equal(self):
        result = check(self.GTE_RULE, param("voltage_rated", "25V", 25), param("voltage_rated", "25 V", 25))
        assert result.match_status == MatchStatus.EXACT

    def test_lte_lower_is_better(self):
        result = check(self.LTE_RULE, param("esr", "50mΩ", 0.05), param("esr", "20mΩ", 0.02))
        assert result.match_status == MatchStatus.BETTER
        result = check(self.LTE_RULE, param("esr", "50mΩ", 0.05), param("esr", "100mΩ", 0.1))
        assert result.result == RuleResult.FAIL

    def test_direction_defaults_to_gte(self):
        r = rule("voltage_rated", LogicType.THRESHOLD)
        assert check(r, param("voltage_rated", "25V", 25), param("voltage_rated", "50V", 50)).result == RuleResult.PASS

    def test_reparses_when_one_side_has_no_numeric(self):
        result = check(self.GTE_RULE, param("voltage_rated", "25V", 25), param("voltage_rated", "50V"))
        assert result.match_status == MatchStatus.BETTER

    def test_si_scaling(self):
        result = check(self.LTE_RULE, param("esr", "1Ω"), param("esr", "500mΩ"))
        assert result.match_status == MatchStatus.BETTER

    def test_unparseable(self):
        result = check(self.GTE_RULE, param("voltage_rated", "High"), param("voltage_rated", "Low"))
        assert result.result == RuleResult.REVIEW
        result = check(self.GTE_RULE, param("voltage_rated", "High"), param("voltage_rated", "high"))
        assert result.result == RuleResult.PASS

    def test_missing_source_passes(self):
        assert check(self.GTE_RULE, None, param("voltage_rated", "50V", 50)).result == RuleResult.PASS

    def test_missing_candidate_reviews(self):
        result = check(self.GTE_RULE, param("voltage_rated", "25V", 25), None)
        assert result.result == RuleResult.REVIEW
        assert result.note == MISSING_DATA_NOTE

    def test_missing_candidate_blocks(self):
        r = rule("voltage_rated", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.GTE,
                 block_on_missing=True)
        assert check(r, param("voltage_rated", "25V", 25), None).result == RuleResult.FAIL


class TestThresholdOrdinals:
    """Tests for tolerance and MSL thresholds, where lower is better."""

    TOLERANCE = rule("tolerance", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.LTE)
    MSL = rule("msl", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.LTE)

    def test_tighter_tolerance(self):
        result = check(self.TOLERANCE, param("tolerance", "±10%"), param("tolerance", "±5%"))
        assert result.match_status == MatchStatus.BETTER

    def test_looser_tolerance(self):
        result = check(self.TOLERANCE, param("tolerance", "±5%"), param("tolerance", "±10%"))
        assert result.result == RuleResult.FAIL

    def test_unparseable_tolerance(self):
        result = check(self.TOLERANCE, param("tolerance", "±10%"), param("tolerance", "K"))
        assert result.result == RuleResult.REVIEW
        assert result.note == "Could not parse tolerance values"

    def test_higher_msl_fails(self):
        result = check(self.MSL, param("msl", "1 (Unlimited)"), param("msl", "3 (168 Hours)"))
        assert result.result == RuleResult.FAIL


class TestRangeSuperset:
    """Tests for range_superset thresholds."""

    RULE = rule("operating_temp", LogicType.THRESHOLD, threshold_direction=ThresholdDirection.RANGE_SUPERSET)

    def test_wider_range(self):
        result = check(self.RULE, param("operating_temp", "-55°C ~ 125°C"), param("operating_temp", "-55°C ~ 150°C"))
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.BETTER

    def test_same_range(self):
        result = check(self.RULE, param("operating_temp", "-55°C ~ 125°C"), param("operating_temp", "-55°C ~ 125°C"))
        assert result.match_status == MatchStatus.EXACT

    def test_narrower_range(self):
        result = check(self.RULE, param("operating_temp", "-55°C ~ 125°C"), param("operating_temp", "-40°C ~ 85°C"))
        assert result.result == RuleResult.FAIL

    def test_unparseable(self):
        result = check(self.RULE, param("operating_temp", "-55°C ~ 125°C"), param("operating_temp", "Industrial"))
        assert result.result == RuleResult.REVIEW


class TestFit:
    """Tests for fit rules (smaller or equal fits)."""

    RULE = rule("height", LogicType.FIT)

    def test_shorter_fits(self):
        assert check(self.RULE, param("height", "1.0mm", 1.0), param("height", "0.8mm", 0.8)).result == RuleResult.PASS

    def test_taller_fails(self):
        result = check(self.RULE, param("height", "1.0mm", 1.0), param("height", "1.2mm", 1.2))
        assert result.result == RuleResult.FAIL
        assert result.match_status == MatchStatus.WORSE

    def test_missing_source_passes(self):
        assert check(self.RULE, None, param("height", "1.2mm", 1.2)).result == RuleResult.PASS


class TestReviewAndOperational:
    """Tests for application_review and operational rules."""

    def test_application_review_always_reviews(self):
        r = rule("dc_bias_derating", LogicType.APPLICATION_REVIEW, reason="Compare DC bias curves.")
        result = check(r, param("dc_bias_derating", "Consult datasheet"), param("dc_bias_derating", "Consult datasheet"))
        assert result.result == RuleResult.REVIEW
        assert result.note == "Compare DC bias curves."
        assert check(r, None, None).result == RuleResult.REVIEW

    def test_operational_match(self):
        r = rule("packaging", LogicType.OPERATIONAL)
        result = check(r, param("packaging", "Tape & Reel (TR)"), param("packaging", "tape & reel (tr)"))
        assert result.result == RuleResult.INFO
        assert result.match_status == MatchStatus.EXACT

    def test_operational_mismatch(self):
        r = rule("packaging", LogicType.OPERATIONAL)
        result = check(r, param("packaging", "Tape & Reel (TR)"), param("packaging", "Bulk"))
        assert result.result == RuleResult.INFO
        assert result.match_status == MatchStatus.COMPATIBLE
        assert result.note == "Verify packaging compatibility with production line"


class TestVrefCheck:
    """Tests for feedback reference voltage checks."""

    RULE = rule("vref", LogicType.VREF_CHECK, 9)

    def _check(self, src_vref, cand_vref, output_voltage=None):
        source = [param("vref", src_vref)]
        if output_voltage:
            source.append(param("output_voltage", output_voltage))
        return evaluate_rule(self.RULE, part("SRC", *source), part("CAND", param("vref", cand_vref)))

    def test_same_vref(self):
        result = self._check("0.8V", "0.8V")
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.EXACT

    def test_within_one_percent(self):
        result = self._check("0.8V", "0.804V")
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.BETTER

    def test_divider_recompute(self):
        result = self._check("0.8V", "0.6V", output_voltage="3.3V")
        assert result.result == RuleResult.REVIEW
        assert result.match_status == MatchStatus.DIFFERENT
        assert "Rtop/Rbot = 4.500" in result.note

    def test_existing_divider_within_output_tolerance(self):
        result = self._check("0.8V", "0.81V", output_voltage="3.3V")
        assert result.result == RuleResult.PASS
        assert result.match_status == MatchStatus.COMPATIBLE

    def test_unknown_output_voltage(self):
        result = self._check("0.8V", "0.6V")
        assert result.result == RuleResult.REVIEW
        assert "Rbot/Rtop" in result.note

    def test_adjustable_output_counts_as_unknown(self):
        result = self._check("0.8V", "0.6V", output_voltage="0.8V ~ 5V")
        assert result.result == RuleResult.REVIEW
        assert "Rbot/Rtop" in result.note

    def test_unparseable(self):
        assert self._check("0.8V", "Adjustable").result == RuleResult.REVIEW

    def test_missing_source_passes(self):
        assert check(self.RULE, None, param("vref", "0.6V")).result == RuleResult.PASS

    def test_missing_candidate(self):
        assert check(self.RULE, param("vref", "0.8V"), None).result == RuleResult.REVIEW
        blocking = rule("vref", LogicType.VREF_CHECK, 9, block_on_missing=True)
        assert check(blocking, param("vref", "0.8V"), None).result == RuleResult.FAIL


# =============================================================================
# SCORING
# =============================================================================


class TestEvaluate:
    """Tests for evaluate (weighted scoring across a family table)."""

    def test_single_exact_rule_is_100(self):
        t = table(rule("capacitance", LogicType.IDENTITY))
        result = evaluate(t, part("SRC", param("capacitance", "100nF", 1e-7)),
                          part("CAND", param("capacitance", "100nF", 1e-7)))
        assert result.match_percentage == 100
        assert result.passed is True

    def test_hard_failure_overrides_score(self):
        t = table(
            rule("capacitance", LogicType.IDENTITY, 10),
            rule("package_case", LogicType.IDENTITY, 1),
        )
        source = part("SRC", param("capacitance", "100nF", 1e-7), param("package_case", "0603"))
        candidate = part("CAND", param("capacitance", "100nF", 1e-7), param("package_case", "0805"))
        result = evaluate(t, source, candidate)
        assert result.match_percentage == 91
        assert result.passed is False

    def test_review_earns_half_credit(self):
        t = table(rule("dc_bias_derating", LogicType.APPLICATION_REVIEW, 10))
        result = evaluate(t, part("SRC"), part("CAND"))
        assert result.match_percentage == 50
        assert result.passed is True
        assert result.review_flags == ("dc_bias_derating",)

    def test_operational_mismatch_credit(self):
        t = table(rule("packaging", LogicType.OPERATIONAL, 10))
        result = evaluate(t, part("SRC", param("packaging", "Tray")), part("CAND", param("packaging", "Bulk")))
        assert result.match_percentage == 80

    def test_zero_total_weight(self):
        assert evaluate(table(), part("SRC"), part("CAND")).match_percentage == 0
        t = table(rule("matched_pair_review", LogicType.APPLICATION_REVIEW, 0))
        result = evaluate(t, part("SRC"), part("CAND"))
        assert result.match_percentage == 0
        assert result.passed is True

    def test_all_missing_on_source_passes(self):
        result = evaluate(MLCC, part("SRC"), part("CAND"))
        assert result.passed is True
        assert len(result.results) == len(MLCC.rules)

    def test_idempotent(self):
        source = part("SRC", param("capacitance", "100nF", 1e-7), param("dielectric", "X7R"))
        candidate = part("CAND", param("capacitance", "100nF", 1e-7), param("dielectric", "C0G"))
        assert evaluate(MLCC, source, candidate) == evaluate(MLCC, source, candidate)

    def test_notes_collected(self):
        t = table(rule("dielectric", LogicType.IDENTITY_UPGRADE, upgrade_hierarchy=DIELECTRIC_HIERARCHY))
        result = evaluate(t, part("SRC", param("dielectric", "X7R")), part("CAND", param("dielectric", "C0G")))
        assert result.notes == ("Upgraded from X7R to C0G",)

    def test_results_follow_table_order(self):
        result = evaluate(MLCC, part("SRC"), part("CAND"))
        assert [r.attribute_id for r in result.results] == [r.attribute_id for r in MLCC.rules]

    def test_percentage_rounds_half_up(self):
        t = table(
            rule("capacitance", LogicType.IDENTITY, 1),
            rule("package_case", LogicType.IDENTITY, 7),
        )
        source = part("SRC", param("capacitance", "1nF", 1e-9), param("package_case", "0603"))
        candidate = part("CAND", param("capacitance", "1nF", 1e-9), param("package_case", "0805"))
        # 1 of 8 is 12.5%
        assert evaluate(t, source, candidate).match_percentage == 13


class TestMlccScenario:
    """End-to-end evaluation against the MLCC family."""

    SOURCE = part(
        "GRM188R71H104KA93D",
        param("capacitance", "0.1 µF", 1e-7),
        param("package_case", "0603 (1608 Metric)"),
        param("voltage_rated", "50V", 50),
        param("dielectric", "X7R"),
        param("tolerance", "±10%"),
        param("operating_temp", "-55°C ~ 125°C"),
        param("aec_q200", "No"),
        param("flexible_termination", "No"),
    )

    def test_drop_in_upgrade(self):
        candidate = part(
            "CL10B104KB8NNNC",
            param("capacitance", "100nF", 1e-7),
            param("package_case", "0603 (1608 Metric)"),
            param("voltage_rated", "100V", 100),
            param("dielectric", "C0G"),
            param("tolerance", "±5%"),
            param("operating_temp", "-55°C ~ 125°C"),
            param("aec_q200", "Yes"),
            param("flexible_termination", "No"),
        )
        result = evaluate(MLCC, self.SOURCE, candidate)
        assert result.passed is True
        assert "dc_bias_derating" in result.review_flags
        by_id = {r.attribute_id: r for r in result.results}
        assert by_id["dielectric"].result == RuleResult.UPGRADE
        assert by_id["voltage_rated"].match_status == MatchStatus.BETTER

    def test_wrong_footprint_fails(self):
        candidate = part(
            "CL21B104KBCNNNC",
            param("capacitance", "100nF", 1e-7),
            param("package_case", "0805 (2012 Metric)"),
            param("voltage_rated", "50V", 50),
            param("dielectric", "X7R"),
        )
        result = evaluate(MLCC, self.SOURCE, candidate)
        assert result.passed is False


# =============================================================================
# RANKING
# =============================================================================


class TestFindReplacements:
    """Tests for find_replacements ranking."""

    TABLE = table(
        rule("capacitance", LogicType.IDENTITY, 10),
        rule("voltage_rated", LogicType.THRESHOLD, 5, threshold_direction=ThresholdDirection.GTE),
        rule("dc_bias_derating", LogicType.APPLICATION_REVIEW, 2),
    )
    SOURCE = part("SRC", param("capacitance", "100nF", 1e-7), param("voltage_rated", "25V", 25))

    def test_excludes_source_mpn(self):
        same = part("SRC", param("capacitance", "100nF", 1e-7), param("voltage_rated", "25V", 25))
        other = part("ALT", param("capacitance", "100nF", 1e-7), param("voltage_rated", "25V", 25))
        recommendations = find_replacements(self.TABLE, self.SOURCE, [same, other])
        assert [r.part.mpn for r in recommendations] == ["ALT"]

    def test_passing_before_failing(self):
        failing = part("FAIL", param("capacitance", "220nF", 2.2e-7), param("voltage_rated", "50V", 50))
        passing = part("PASS", param("capacitance", "100nF", 1e-7))
        recommendations = find_replacements(self.TABLE, self.SOURCE, [failing, passing])
        assert [r.part.mpn for r in recommendations] == ["PASS", "FAIL"]
        assert recommendations[0].passed is True
        assert recommendations[1].passed is False
        assert recommendations[1].notes.startswith("Has failing attributes")

    def test_sorted_by_percentage(self):
        reviewed = part("REVIEW", param("capacitance", "100nF", 1e-7))
        full = part("FULL", param("capacitance", "100nF", 1e-7), param("voltage_rated", "50V", 50))
        recommendations = find_replacements(self.TABLE, self.SOURCE, [reviewed, full])
        assert [r.part.mpn for r in recommendations] == ["FULL", "REVIEW"]
        assert recommendations[0].match_percentage > recommendations[1].match_percentage

    def test_ties_keep_input_order(self):
        a = part("A", param("capacitance", "100nF", 1e-7), param("voltage_rated", "50V", 50))
        b = part("B", param("capacitance", "100nF", 1e-7), param("voltage_rated", "50V", 50))
        assert [r.part.mpn for r in find_replacements(self.TABLE, self.SOURCE, [a, b])] == ["A", "B"]
        assert [r.part.mpn for r in find_replacements(self.TABLE, self.SOURCE, [b, a])] == ["B", "A"]

    def test_review_summary(self):
        candidate = part("ALT", param("capacitance", "100nF", 1e-7), param("voltage_rated", "25V", 25))
        recommendation = find_replacements(self.TABLE, self.SOURCE, [candidate])[0]
        assert "Needs review: Dc Bias Derating" in recommendation.notes
        assert len(recommendation.match_details) == 3

    def test_empty(self):
        assert find_replacements(self.TABLE, self.SOURCE, []) == []


class TestDetectMissingAttributes:
    """Tests for detect_missing_attributes."""

    def test_heaviest_first(self):
        attrs = part("SRC", param("capacitance", "100nF", 1e-7))
        missing = detect_missing_attributes(MLCC, attrs)
        ids = [m.attribute_id for m in missing]
        assert "capacitance" not in ids
        assert ids[0] == "package_case"
        weights = [m.weight for m in missing]
        assert weights == sorted(weights, reverse=True)

    def test_excludes_review_and_operational(self):
        ids = [m.attribute_id for m in detect_missing_attributes(MLCC, part("SRC"))]
        assert "dc_bias_derating" not in ids
        assert "packaging" not in ids
        assert len(ids) == len(MLCC.rules) - 2

    def test_stable_for_equal_weights(self):
        ids = [m.attribute_id for m in detect_missing_attributes(MLCC, part("SRC"))]
        assert ids.index("voltage_rated") < ids.index("dielectric")

    def test_nothing_missing(self):
        t = table(rule("capacitance", LogicType.IDENTITY))
        assert detect_missing_attributes(t, part("SRC", param("capacitance", "1nF", 1e-9))) == []


def test_missing_value_display():
    result = check(rule("esr", LogicType.THRESHOLD), param("esr", "50mΩ", 0.05), None)
    assert result.source_value == "50mΩ"
    assert result.candidate_value == "N/A"
    assert result.match_status == MatchStatus.DIFFERENT


@pytest.mark.parametrize("logic_type", [
    LogicType.IDENTITY,
    LogicType.IDENTITY_RANGE,
    LogicType.IDENTITY_UPGRADE,
    LogicType.THRESHOLD,
    LogicType.FIT,
    LogicType.VREF_CHECK,
])
def test_missing_source_never_fails(logic_type):
    result = check(rule("x", logic_type), None, param("x", "1V", 1.0))
    assert result.result == RuleResult.PASS
