"""Domain layer: entities, schemas, rules, rule sets.

This layer depends only on stdlib, pydantic and maytrix.value.
It must never import from services, config, output or commands.
"""

from maytrix.domain.catalog import CatalogKind, RuleSpec, build_rule, build_rule_set, build_schema
from maytrix.domain.entity import Entity, EntityId, allocate_entity_id, validate_entity_id
from maytrix.domain.errors import RuleErrorCode
from maytrix.domain.lifecycle import EvaluationState
from maytrix.domain.rules import (
    FieldPath,
    OutcomeStatus,
    Rule,
    RuleOutcome,
    define_rule,
    evaluate,
    parse_field_path,
    predicate_rule,
)
from maytrix.domain.ruleset import (
    Classification,
    ClassificationStatus,
    EvaluationResult,
    RuleEvaluation,
    RuleSet,
    RuleSetBuilder,
    classify,
    evaluate_many,
    evaluate_set,
)
from maytrix.domain.schema import EntitySchema

__all__ = [
    "CatalogKind",
    "Classification",
    "ClassificationStatus",
    "Entity",
    "EntityId",
    "EntitySchema",
    "EvaluationResult",
    "EvaluationState",
    "FieldPath",
    "OutcomeStatus",
    "Rule",
    "RuleErrorCode",
    "RuleEvaluation",
    "RuleOutcome",
    "RuleSet",
    "RuleSetBuilder",
    "RuleSpec",
    "allocate_entity_id",
    "build_rule",
    "build_rule_set",
    "build_schema",
    "classify",
    "define_rule",
    "evaluate",
    "evaluate_many",
    "evaluate_set",
    "parse_field_path",
    "predicate_rule",
    "validate_entity_id",
]
