"""Rule-engine failure codes. Failures travel in :class:`maytrix.value.Result`."""

from __future__ import annotations

from enum import StrEnum


class RuleErrorCode(StrEnum):
    """Registration- and construction-time failures of the rule engine."""

    DUPLICATE_RULE_NAME = "DUPLICATE_RULE_NAME"
    UNKNOWN_FIELD_DEPENDENCY = "UNKNOWN_FIELD_DEPENDENCY"
    INVALID_RULE = "INVALID_RULE"
