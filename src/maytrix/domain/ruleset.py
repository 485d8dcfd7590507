"""Rule sets: build, freeze, evaluate, classify.

Build-then-freeze discipline: :class:`RuleSetBuilder` is the only mutable
phase. :meth:`RuleSetBuilder.freeze` returns an immutable :class:`RuleSet`
that any number of threads may evaluate concurrently.

INVARIANT: Rules never see each other's outcomes. Results are reported
in declaration order regardless of how evaluation was scheduled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import Executor
from dataclasses import dataclass
from enum import StrEnum

from maytrix.domain.entity import Entity, EntityId
from maytrix.domain.errors import RuleErrorCode
from maytrix.domain.rules import FieldPath, Rule, RuleOutcome, evaluate, format_field_path
from maytrix.domain.schema import EntitySchema
from maytrix.value import Result, Symbol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Frozen rule set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable collection of rules."""

    rules: tuple[Rule, ...] = ()
    schema: EntitySchema | None = None

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    @property
    def names(self) -> tuple[Symbol, ...]:
        return tuple(rule.name for rule in self.rules)

    def dependencies(self) -> tuple[FieldPath, ...]:
        """Every field path any rule reads, first-declared order, no repeats."""
        seen: dict[FieldPath, None] = {}
        for rule in self.rules:
            for path in rule.depends_on:
                seen.setdefault(path, None)
        return tuple(seen)


class RuleSetBuilder:
    """Mutable registration phase for a :class:`RuleSet`.

    Usage::

        builder = RuleSetBuilder(schema=schema)
        result = builder.register(rule)
        if not result.ok:
            ...
        rule_set = builder.freeze()
    """

    def __init__(self, schema: EntitySchema | None = None) -> None:
        self._schema = schema
        self._rules: list[Rule] = []
        self._names: set[str] = set()

    def register(self, rule: Rule) -> Result[Rule]:
        """Add *rule*, or fail with DUPLICATE_RULE_NAME / UNKNOWN_FIELD_DEPENDENCY."""
        name = str(rule.name)
        if name in self._names:
            return Result.failure(
                RuleErrorCode.DUPLICATE_RULE_NAME,
                f"rule name {name!r} is already registered",
                rule=name,
            )
        if self._schema is not None:
            for path in rule.depends_on:
                if not self._schema.has_path(path):
                    return Result.failure(
                        RuleErrorCode.UNKNOWN_FIELD_DEPENDENCY,
                        f"rule {name} depends on {format_field_path(path)!r}, "
                        "which the schema does not declare",
                        rule=name,
                        path=format_field_path(path),
                    )
        self._rules.append(rule)
        self._names.add(name)
        logger.debug("Registered rule: %s", name)
        return Result.success(rule)

    def register_all(self, rules: Iterable[Rule]) -> Result[list[Rule]]:
        """Register rules in order, stopping at the first failure."""
        registered: list[Rule] = []
        for rule in rules:
            outcome = self.register(rule)
            if not outcome.ok:
                return Result.from_failure(outcome.error)  # type: ignore[arg-type]
            registered.append(rule)
        return Result.success(registered)

    def freeze(self) -> RuleSet:
        """Snapshot the registered rules into an immutable RuleSet."""
        return RuleSet(rules=tuple(self._rules), schema=self._schema)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleEvaluation:
    name: Symbol
    outcome: RuleOutcome

    def to_dict(self) -> dict[str, str | None]:
        return {
            "rule": str(self.name),
            "status": str(self.outcome.status),
            "reason": self.outcome.reason,
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Outcomes for one entity, in rule declaration order."""

    entity_id: EntityId
    evaluations: tuple[RuleEvaluation, ...]

    def __len__(self) -> int:
        return len(self.evaluations)

    def __iter__(self) -> Iterator[RuleEvaluation]:
        return iter(self.evaluations)

    def as_pairs(self) -> list[tuple[str, RuleOutcome]]:
        return [(str(e.name), e.outcome) for e in self.evaluations]

    def outcome_for(self, name: str) -> RuleOutcome | None:
        for e in self.evaluations:
            if e.name == name:
                return e.outcome
        return None


def evaluate_set(
    rule_set: RuleSet,
    entity: Entity,
    *,
    executor: Executor | None = None,
) -> EvaluationResult:
    """Evaluate every rule independently against *entity*.

    With an *executor*, rules run in parallel; ``Executor.map`` keeps the
    declaration order of the results.
    """
    rules = rule_set.rules
    if executor is None:
        outcomes = [evaluate(rule, entity) for rule in rules]
    else:
        outcomes = list(executor.map(lambda rule: evaluate(rule, entity), rules))
    result = EvaluationResult(
        entity_id=entity.id,
        evaluations=tuple(
            RuleEvaluation(name=rule.name, outcome=outcome)
            for rule, outcome in zip(rules, outcomes, strict=True)
        ),
    )
    logger.debug("Evaluated %d rule(s) against %s", len(rules), entity.id)
    return result


def evaluate_many(
    rule_set: RuleSet,
    entities: Iterable[Entity],
    *,
    executor: Executor | None = None,
) -> list[EvaluationResult]:
    """Evaluate *rule_set* against each entity; results follow input order."""
    subjects = list(entities)
    if executor is None:
        return [evaluate_set(rule_set, entity) for entity in subjects]
    return list(executor.map(lambda entity: evaluate_set(rule_set, entity), subjects))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class ClassificationStatus(StrEnum):
    SATISFIED = "satisfied"
    VIOLATED = "violated"


@dataclass(frozen=True)
class Classification:
    """Aggregate verdict for one evaluation result."""

    status: ClassificationStatus
    reasons: tuple[str, ...] = ()
    failed_rules: tuple[str, ...] = ()

    @property
    def satisfied(self) -> bool:
        return self.status is ClassificationStatus.SATISFIED


def classify(result: EvaluationResult) -> Classification:
    """Satisfied unless some outcome failed; fail reasons keep rule order."""
    failed = [e for e in result.evaluations if e.outcome.is_fail]
    if not failed:
        return Classification(ClassificationStatus.SATISFIED)
    return Classification(
        ClassificationStatus.VIOLATED,
        reasons=tuple(e.outcome.reason or "" for e in failed),
        failed_rules=tuple(str(e.name) for e in failed),
    )
