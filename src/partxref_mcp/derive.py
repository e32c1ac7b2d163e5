"""Derive a family logic table from a base table plus an ordered patch.

Used when authoring family configuration: a variant family (current sense
resistors, RF inductors, ...) is expressed as a delta against its base family
instead of a second hand-maintained copy.

Operations apply in a fixed order regardless of how the delta lists them:
remove, then override, then add. An override that targets a rule removed by
the same delta therefore has nothing to patch and is ignored.
"""

import logging
from dataclasses import dataclass, fields, replace

from .models import LogicTable, LogicType, MatchingRule, ThresholdDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleOverride:
    """Partial patch for one base rule. Fields left as None keep the base value."""
    attribute_id: str
    name: str | None = None
    logic_type: LogicType | None = None
    weight: int | None = None
    reason: str | None = None
    sort_order: int | None = None
    threshold_direction: ThresholdDirection | None = None
    upgrade_hierarchy: tuple[str, ...] | None = None
    tolerance_pct: float | None = None
    block_on_missing: bool | None = None

    def patch(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "attribute_id" and getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class TableDelta:
    family_id: str
    family_name: str | None = None
    category: str | None = None
    description: str | None = None
    base_family_id: str = ""
    remove: tuple[str, ...] = ()
    override: tuple[RuleOverride, ...] = ()
    add: tuple[MatchingRule, ...] = ()


def derive(base: LogicTable, delta: TableDelta) -> LogicTable:
    """Build a new table from ``base`` and ``delta``.

    ``base`` and its rules are never modified; every rule in the result is a
    fresh record. Unknown ids in remove/override are skipped silently.
    Added rules keep a non-zero sort order; a zero sort order is assigned one
    past the highest sort order left after remove/override, counting up for
    each further zero-sort addition.
    """
    removed = set(delta.remove)
    rules = [replace(rule) for rule in base.rules if rule.attribute_id not in removed]

    positions = {rule.attribute_id: i for i, rule in enumerate(rules)}
    for override in delta.override:
        i = positions.get(override.attribute_id)
        if i is None:
            continue
        rules[i] = replace(rules[i], **override.patch())

    next_sort = max((rule.sort_order for rule in rules), default=0)
    for added in delta.add:
        if added.attribute_id in positions and added.attribute_id not in removed:
            logger.warning(f"Family {delta.family_id}: added rule '{added.attribute_id}' already in base, skipped")
            continue
        if added.sort_order == 0:
            next_sort += 1
            added = replace(added, sort_order=next_sort)
        else:
            added = replace(added)
        rules.append(added)
        positions[added.attribute_id] = len(rules) - 1

    logger.debug(
        f"Derived family {delta.family_id} from {base.family_id}: "
        f"-{len(removed)} ~{len(delta.override)} +{len(delta.add)} -> {len(rules)} rules"
    )
    return LogicTable(
        family_id=delta.family_id,
        family_name=delta.family_name if delta.family_name is not None else base.family_name,
        category=delta.category if delta.category is not None else base.category,
        description=delta.description if delta.description is not None else base.description,
        rules=tuple(rules),
    )
