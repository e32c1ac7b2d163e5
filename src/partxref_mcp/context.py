"""Application-context modifier.

The same family table serves very different designs: a 0402 MLCC on a flex
board is judged differently from one on a rigid consumer board. Callers answer
a family's context questions and ``apply_context`` returns a re-weighted copy
of the table. Like ``derive``, it never touches the table it is given.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .models import LogicTable, LogicType, MatchingRule

logger = logging.getLogger(__name__)

MANDATORY_WEIGHT = 10
PRIMARY_WEIGHT = 9


class ContextEffect(str, Enum):
    ESCALATE_TO_MANDATORY = "escalate_to_mandatory"  # weight = 10
    ESCALATE_TO_PRIMARY = "escalate_to_primary"  # weight = max(weight, 9)
    SET_THRESHOLD = "set_threshold"  # guidance only, rule type kept
    NOT_APPLICABLE = "not_applicable"  # weight = 0
    ADD_REVIEW_FLAG = "add_review_flag"  # becomes application_review


@dataclass(frozen=True)
class AttributeEffect:
    attribute_id: str
    effect: ContextEffect
    note: str | None = None
    block_on_missing: bool = False


@dataclass(frozen=True)
class ContextOption:
    value: str
    label: str
    description: str = ""
    attribute_effects: tuple[AttributeEffect, ...] = ()


@dataclass(frozen=True)
class QuestionCondition:
    """Only ask a question once another question has one of ``values``."""
    question_id: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class ContextQuestion:
    question_id: str
    question_text: str
    priority: int
    options: tuple[ContextOption, ...] = ()
    condition: QuestionCondition | None = None

    def get_option(self, value: str) -> ContextOption | None:
        for option in self.options:
            if option.value == value:
                return option
        return None


@dataclass(frozen=True)
class FamilyContextConfig:
    family_ids: tuple[str, ...]
    context_sensitivity: str  # "low" | "moderate" | "high" | "critical"
    questions: tuple[ContextQuestion, ...] = ()


def _is_active(question: ContextQuestion, answers: dict[str, str]) -> bool:
    if question.condition is None:
        return True
    return answers.get(question.condition.question_id) in question.condition.values


def _apply_effect(rule: MatchingRule, effect: AttributeEffect) -> MatchingRule:
    changes: dict = {}
    if effect.effect == ContextEffect.ESCALATE_TO_MANDATORY:
        changes["weight"] = MANDATORY_WEIGHT
    elif effect.effect == ContextEffect.ESCALATE_TO_PRIMARY:
        changes["weight"] = max(rule.weight, PRIMARY_WEIGHT)
    elif effect.effect == ContextEffect.NOT_APPLICABLE:
        changes["weight"] = 0
    elif effect.effect == ContextEffect.ADD_REVIEW_FLAG:
        changes["logic_type"] = LogicType.APPLICATION_REVIEW

    # not_applicable keeps the rule's own justification
    if effect.note and effect.effect != ContextEffect.NOT_APPLICABLE:
        changes["reason"] = effect.note
    if effect.block_on_missing:
        changes["block_on_missing"] = True
    return replace(rule, **changes)


def apply_context(table: LogicTable, answers: dict[str, str], config: FamilyContextConfig) -> LogicTable:
    """Return a copy of ``table`` with the effects of ``answers`` applied.

    ``answers`` maps question id to the chosen option value. Answers that are
    not one of the question's option values (free text) have no effect, and
    effects naming an attribute the table has no rule for are skipped.
    Questions are applied in config order, so later effects on the same rule
    win.
    """
    rules = [replace(rule) for rule in table.rules]
    positions = {rule.attribute_id: i for i, rule in enumerate(rules)}

    for question in config.questions:
        answer = answers.get(question.question_id)
        if not answer or not _is_active(question, answers):
            continue
        option = question.get_option(answer)
        if option is None:
            continue
        for effect in option.attribute_effects:
            i = positions.get(effect.attribute_id)
            if i is None:
                continue
            rules[i] = _apply_effect(rules[i], effect)
            logger.debug(f"Context {question.question_id}={answer}: {effect.effect.value} on {effect.attribute_id}")

    return replace(table, rules=tuple(rules))
