"""Pure, named classifiers over declared entity fields.

A rule declares the field paths it depends on when it is defined. Its
check receives exactly those values, positionally and in declaration
order, so it can never read an undeclared field: dependency analysis is
accurate by construction.

If any declared path is missing from the entity, the rule is
``inapplicable`` and the check is not called.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from maytrix.domain.entity import Entity
from maytrix.domain.errors import RuleErrorCode
from maytrix.domain.lifecycle import EvaluationState, EvaluationTrace
from maytrix.value import Result, Symbol, Value, path_get

logger = logging.getLogger(__name__)

FieldPath = tuple[str, ...]


class OutcomeStatus(StrEnum):
    PASS = "pass"
    FAIL = "fail"
    INAPPLICABLE = "inapplicable"


@dataclass(frozen=True)
class RuleOutcome:
    """Terminal outcome of one rule evaluation.

    ``reason`` is required for ``fail``; for ``inapplicable`` it is an
    optional note (e.g. which field was missing).
    """

    status: OutcomeStatus
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.status is OutcomeStatus.FAIL and not self.reason:
            raise ValueError("a failed rule outcome needs a reason")

    @classmethod
    def passed(cls) -> RuleOutcome:
        return cls(OutcomeStatus.PASS)

    @classmethod
    def failed(cls, reason: str) -> RuleOutcome:
        return cls(OutcomeStatus.FAIL, reason)

    @classmethod
    def inapplicable(cls, note: str | None = None) -> RuleOutcome:
        return cls(OutcomeStatus.INAPPLICABLE, note)

    @property
    def is_pass(self) -> bool:
        return self.status is OutcomeStatus.PASS

    @property
    def is_fail(self) -> bool:
        return self.status is OutcomeStatus.FAIL

    @property
    def is_inapplicable(self) -> bool:
        return self.status is OutcomeStatus.INAPPLICABLE


RuleCheck = Callable[..., RuleOutcome]


@dataclass(frozen=True)
class Rule:
    """A registered-ready rule. Build with :func:`define_rule`."""

    name: Symbol
    depends_on: tuple[FieldPath, ...]
    check: RuleCheck
    description: str | None = None


def parse_field_path(path: str | Sequence[str]) -> FieldPath:
    """``"address.city"`` -> ``("address", "city")``; sequences pass through."""
    if isinstance(path, str):
        return tuple(path.split("."))
    return tuple(path)


def format_field_path(path: FieldPath) -> str:
    return ".".join(path)


def _arity_accepts(check: Callable[..., object], count: int) -> bool | None:
    """Whether *check* accepts *count* positional args (None if unknown)."""
    try:
        sig = inspect.signature(check)
    except (TypeError, ValueError):
        return None
    required = 0
    maximum: float = 0
    for param in sig.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            maximum += 1
            if param.default is param.empty:
                required += 1
        elif param.kind is param.VAR_POSITIONAL:
            maximum = float("inf")
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            return False
    return required <= count <= maximum


def define_rule(
    name: str,
    depends_on: Sequence[str | Sequence[str]],
    check: RuleCheck,
    *,
    description: str | None = None,
) -> Result[Rule]:
    """Validate and build a :class:`Rule`.

    Fails with INVALID_RULE when the name is not a Symbol, a dependency path
    is empty or repeated, or *check* cannot take one positional argument
    per dependency.
    """
    symbol = Symbol.try_new(name)
    if not symbol.ok:
        return Result.failure(
            RuleErrorCode.INVALID_RULE,
            f"invalid rule name {name!r}: {symbol.error.message}",  # type: ignore[union-attr]
            rule=str(name),
        )

    if isinstance(depends_on, str):
        depends_on = [depends_on]

    paths: list[FieldPath] = []
    for raw in depends_on:
        path = parse_field_path(raw)
        if not path or any(not isinstance(s, str) or not s for s in path):
            return Result.failure(
                RuleErrorCode.INVALID_RULE,
                f"rule {name}: invalid dependency path {raw!r}",
                rule=name,
            )
        if path in paths:
            return Result.failure(
                RuleErrorCode.INVALID_RULE,
                f"rule {name}: dependency {format_field_path(path)!r} declared twice",
                rule=name,
            )
        paths.append(path)

    if not callable(check):
        return Result.failure(RuleErrorCode.INVALID_RULE, f"rule {name}: check is not callable", rule=name)
    if _arity_accepts(check, len(paths)) is False:
        return Result.failure(
            RuleErrorCode.INVALID_RULE,
            f"rule {name}: check does not accept {len(paths)} field value(s)",
            rule=name,
            dependencies=[format_field_path(p) for p in paths],
        )

    return Result.success(
        Rule(
            name=symbol.value,  # type: ignore[arg-type]
            depends_on=tuple(paths),
            check=check,
            description=description,
        )
    )


def predicate_rule(
    name: str,
    depends_on: Sequence[str | Sequence[str]],
    test: Callable[..., bool],
    reason: str,
    *,
    description: str | None = None,
) -> Result[Rule]:
    """Define a rule from a boolean test: True passes, False fails with *reason*."""
    if not reason:
        return Result.failure(
            RuleErrorCode.INVALID_RULE, f"rule {name}: a failure reason is required", rule=name
        )
    if isinstance(depends_on, str):
        depends_on = [depends_on]

    def check(*values: Value) -> RuleOutcome:
        return RuleOutcome.passed() if test(*values) else RuleOutcome.failed(reason)

    if callable(test) and _arity_accepts(test, len(depends_on)) is False:
        return Result.failure(
            RuleErrorCode.INVALID_RULE,
            f"rule {name}: test does not accept {len(depends_on)} field value(s)",
            rule=name,
        )
    return define_rule(name, depends_on, check, description=description)


def evaluate(rule: Rule, entity: Entity) -> RuleOutcome:
    """Evaluate one rule against one entity snapshot."""
    trace = EvaluationTrace(str(rule.name))
    trace.advance(EvaluationState.EVALUATING)

    values: list[Value] = []
    for path in rule.depends_on:
        found = path_get(entity.fields, path)
        if not found.ok:
            outcome = RuleOutcome.inapplicable(f"missing field {format_field_path(path)}")
            trace.advance(EvaluationState(outcome.status.value))
            logger.debug("rule %s inapplicable to %s: %s", rule.name, entity.id, outcome.reason)
            return outcome
        values.append(found.value)  # type: ignore[arg-type]

    outcome = rule.check(*values)
    if not isinstance(outcome, RuleOutcome):
        msg = f"rule {rule.name} returned {type(outcome).__name__}, expected RuleOutcome"
        raise TypeError(msg)
    trace.advance(EvaluationState(outcome.status.value))
    logger.debug("rule %s on %s -> %s", rule.name, entity.id, outcome.status)
    return outcome
