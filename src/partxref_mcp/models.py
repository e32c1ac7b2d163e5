"""Canonical value types for parts, rule tables and evaluation results.

All types are frozen dataclasses holding tuples instead of lists, so a part or a
logic table can be shared between concurrent evaluations without copying.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class PartStatus(str, Enum):
    ACTIVE = "Active"
    OBSOLETE = "Obsolete"
    DISCONTINUED = "Discontinued"
    NRND = "NRND"
    LAST_TIME_BUY = "LastTimeBuy"


class ComponentCategory(str, Enum):
    CAPACITORS = "Capacitors"
    RESISTORS = "Resistors"
    INDUCTORS = "Inductors"
    DIODES = "Diodes"
    TRANSISTORS = "Transistors"
    CONNECTORS = "Connectors"
    PROTECTION = "Protection"
    ICS = "ICs"


class LogicType(str, Enum):
    """How a rule compares the source and candidate values."""
    IDENTITY = "identity"
    IDENTITY_RANGE = "identity_range"
    IDENTITY_UPGRADE = "identity_upgrade"
    IDENTITY_FLAG = "identity_flag"
    THRESHOLD = "threshold"
    FIT = "fit"
    APPLICATION_REVIEW = "application_review"
    OPERATIONAL = "operational"
    VREF_CHECK = "vref_check"


class ThresholdDirection(str, Enum):
    GTE = "gte"  # candidate >= source (voltage rating, current)
    LTE = "lte"  # candidate <= source (ESR, tolerance, MSL)
    RANGE_SUPERSET = "range_superset"  # candidate range contains source range


class RuleResult(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    REVIEW = "review"
    UPGRADE = "upgrade"
    INFO = "info"


class MatchStatus(str, Enum):
    EXACT = "exact"
    BETTER = "better"
    WORSE = "worse"
    COMPATIBLE = "compatible"
    DIFFERENT = "different"


# Logic types that never produce data-driven verdicts, so a part is not
# "missing" anything when it lacks them.
NON_MATCHABLE_LOGIC_TYPES = frozenset({LogicType.APPLICATION_REVIEW, LogicType.OPERATIONAL})


@dataclass(frozen=True)
class Part:
    """Identity and descriptive facts about one component."""
    mpn: str
    manufacturer: str
    description: str
    category: ComponentCategory
    subcategory: str
    status: PartStatus = PartStatus.ACTIVE
    detailed_description: str = ""
    series: str = ""
    vendor_part_number: str | None = None
    unit_price: float | None = None
    quantity_available: int | None = None
    product_url: str | None = None
    datasheet_url: str | None = None
    image_url: str | None = None
    rohs_status: str | None = None
    moisture_sensitivity_level: str | None = None
    vendor_category_id: int | None = None


@dataclass(frozen=True)
class ParametricAttribute:
    """One named engineering value.

    ``numeric_value`` is in SI base units and is None when the raw value is
    non-numeric or could not be parsed. It is never NaN.
    """
    attribute_id: str
    name: str
    value: str
    numeric_value: float | None = None
    unit: str | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class PartAttributes:
    """A part plus its ordered parametric attributes - the unit of comparison."""
    part: Part
    parameters: tuple[ParametricAttribute, ...] = ()

    def get(self, attribute_id: str) -> ParametricAttribute | None:
        for param in self.parameters:
            if param.attribute_id == attribute_id:
                return param
        return None

    def has(self, attribute_id: str) -> bool:
        return self.get(attribute_id) is not None

    def with_parameter(self, param: ParametricAttribute) -> "PartAttributes":
        """Return a copy with ``param`` added, keeping sort order."""
        params = sorted((*self.parameters, param), key=lambda p: p.sort_order)
        return PartAttributes(part=self.part, parameters=tuple(params))


@dataclass(frozen=True)
class MatchingRule:
    """One row of engineering policy in a family logic table."""
    attribute_id: str
    name: str
    logic_type: LogicType
    weight: int
    reason: str = ""
    sort_order: int = 0
    threshold_direction: ThresholdDirection | None = None
    upgrade_hierarchy: tuple[str, ...] = ()  # best -> worst
    tolerance_pct: float | None = None
    block_on_missing: bool = False


@dataclass(frozen=True)
class LogicTable:
    family_id: str
    family_name: str
    category: str
    description: str
    rules: tuple[MatchingRule, ...] = ()

    def get_rule(self, attribute_id: str) -> MatchingRule | None:
        for rule in self.rules:
            if rule.attribute_id == attribute_id:
                return rule
        return None

    @property
    def total_weight(self) -> int:
        return sum(rule.weight for rule in self.rules)


@dataclass(frozen=True)
class RuleEvaluation:
    """Verdict of a single rule for one (source, candidate) pair."""
    attribute_id: str
    name: str
    logic_type: LogicType
    source_value: str
    candidate_value: str
    result: RuleResult
    match_status: MatchStatus
    note: str | None = None


@dataclass(frozen=True)
class EvaluationResult:
    candidate: PartAttributes
    match_percentage: int
    passed: bool
    results: tuple[RuleEvaluation, ...] = ()
    review_flags: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    part: Part
    match_percentage: int
    passed: bool
    match_details: tuple[RuleEvaluation, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class PartSummary:
    """Lightweight part info for list displays."""
    mpn: str
    manufacturer: str
    description: str
    category: ComponentCategory
    status: PartStatus = PartStatus.ACTIVE


@dataclass(frozen=True)
class SearchResult:
    type: str  # "none" | "single" | "multiple"
    matches: tuple[PartSummary, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MissingAttribute:
    attribute_id: str
    name: str
    weight: int
    logic_type: LogicType


def to_dict(obj: Any) -> Any:
    """Convert a model (or list of models) into JSON-able plain data."""
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    return _plain(asdict(obj))


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
