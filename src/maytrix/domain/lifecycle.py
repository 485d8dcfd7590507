"""Per-call rule evaluation lifecycle.

Each ``evaluate`` call walks ``pending -> evaluating -> terminal``.
Terminal states are never left; re-evaluation is a new call with a new
trace. Nothing is persisted between calls.
"""

from __future__ import annotations

from enum import StrEnum


class EvaluationState(StrEnum):
    """States of a single rule evaluation."""

    PENDING = "pending"
    EVALUATING = "evaluating"
    PASS = "pass"
    FAIL = "fail"
    INAPPLICABLE = "inapplicable"


EVALUATION_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["evaluating"],
    "evaluating": ["pass", "fail", "inapplicable"],
    "pass": [],
    "fail": [],
    "inapplicable": [],
}

TERMINAL_STATES = frozenset({EvaluationState.PASS, EvaluationState.FAIL, EvaluationState.INAPPLICABLE})


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


class EvaluationTrace:
    """Tracks one evaluation through its states."""

    def __init__(self, rule_name: str) -> None:
        self.rule_name = rule_name
        self.state = EvaluationState.PENDING
        self.history: list[EvaluationState] = [self.state]

    def advance(self, target: EvaluationState) -> None:
        if not is_valid_transition(self.state, target, EVALUATION_TRANSITIONS):
            msg = f"rule {self.rule_name}: illegal transition {self.state} -> {target}"
            raise RuntimeError(msg)
        self.state = target
        self.history.append(target)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES
