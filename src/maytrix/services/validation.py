"""ValidationService: load entities and rule files, evaluate, classify.

Rules file (TOML)::

    strict_schema = false

    [schema]
    balance = "integer"
    name = "text"

    [[rules]]
    name = "non_negative"
    kind = "min"
    field = "balance"
    bound = 0
    reason = "balance below zero"

Entity file (JSON): one object, or an array of objects.

A violated rule set is an error result (code ``RULES_VIOLATED``) so the
CLI exits non-zero; the per-rule outcomes travel in ``error.detail``.
"""

from __future__ import annotations

import decimal
import json
import tomllib
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

import structlog

from maytrix.domain import (
    Entity,
    EvaluationResult,
    RuleSet,
    build_rule_set,
    classify,
    evaluate_many,
)
from maytrix.domain.rules import format_field_path
from maytrix.services.base import BaseService
from maytrix.services.result import ServiceError, ServiceResult
from maytrix.value import Failure, Result

log = structlog.get_logger(__name__)

RULES_VIOLATED = "RULES_VIOLATED"
FILE_NOT_FOUND = "FILE_NOT_FOUND"
INVALID_TOML = "INVALID_TOML"
INVALID_JSON = "INVALID_JSON"


class ValidationService(BaseService):
    """Wires rule files and entity files into the rule engine."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def describe_rules(self, rules_path: Path) -> ServiceResult:
        """Load a rules file and report what it declares."""
        op = "rules"
        loaded = self.load_rule_set(rules_path)
        if not loaded.ok:
            return self._fail(op, loaded.error, path=str(rules_path))  # type: ignore[arg-type]
        rule_set: RuleSet = loaded.value  # type: ignore[assignment]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "rules": [
                    {
                        "name": str(rule.name),
                        "depends_on": [format_field_path(p) for p in rule.depends_on],
                        "description": rule.description or "",
                    }
                    for rule in rule_set
                ],
                "count": len(rule_set),
                "dependencies": [format_field_path(p) for p in rule_set.dependencies()],
                "has_schema": rule_set.schema is not None,
            },
        )

    def validate(self, entity_path: Path, rules_path: Path) -> ServiceResult:
        """Evaluate a rules file against the entity (or entities) in a JSON file."""
        op = "validate"
        loaded_rules = self.load_rule_set(rules_path)
        if not loaded_rules.ok:
            return self._fail(op, loaded_rules.error, path=str(rules_path))  # type: ignore[arg-type]
        rule_set: RuleSet = loaded_rules.value  # type: ignore[assignment]

        loaded_entities = self.load_entities(entity_path)
        if not loaded_entities.ok:
            return self._fail(op, loaded_entities.error, path=str(entity_path))  # type: ignore[arg-type]
        entities: list[Entity] = loaded_entities.value  # type: ignore[assignment]

        warnings: list[str] = []
        if rule_set.schema is not None:
            for entity in entities:
                warnings.extend(
                    f"{entity.id}: {problem}" for problem in rule_set.schema.violations(entity.fields)
                )

        results = self._evaluate(rule_set, entities)
        reports = [self._report(result) for result in results]
        violated = [r for r in reports if r["status"] == "violated"]

        log.info(
            "validate.complete",
            entities=len(entities),
            rules=len(rule_set),
            violated=len(violated),
        )

        data = {"results": reports, "count": len(reports), "violated": len(violated)}
        if violated:
            reasons = [reason for r in violated for reason in r["reasons"]]
            return ServiceResult(
                ok=False,
                op=op,
                warnings=warnings,
                error=ServiceError(
                    code=RULES_VIOLATED,
                    message=f"{len(reasons)} rule failure(s): {'; '.join(reasons)}",
                    detail=data,
                ),
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_rule_set(self, rules_path: Path) -> Result[RuleSet]:
        if not rules_path.is_file():
            return Result.failure(FILE_NOT_FOUND, f"rules file not found: {rules_path}")
        try:
            data = tomllib.loads(
                rules_path.read_text(encoding="utf-8"),
                parse_float=decimal.Decimal,
            )
        except tomllib.TOMLDecodeError as exc:
            return Result.failure(INVALID_TOML, f"invalid TOML in {rules_path}: {exc}")
        return build_rule_set(data)

    def load_entities(self, entity_path: Path) -> Result[list[Entity]]:
        if not entity_path.is_file():
            return Result.failure(FILE_NOT_FOUND, f"entity file not found: {entity_path}")
        try:
            data: Any = json.loads(
                entity_path.read_text(encoding="utf-8"),
                parse_float=decimal.Decimal,
            )
        except json.JSONDecodeError as exc:
            return Result.failure(
                INVALID_JSON,
                f"invalid JSON in {entity_path}: {exc.msg} (line {exc.lineno})",
            )

        raw_entities = data if isinstance(data, list) else [data]
        entities: list[Entity] = []
        for i, raw in enumerate(raw_entities):
            created = Entity.from_python(raw)
            if not created.ok:
                failure: Failure = created.error  # type: ignore[assignment]
                return Result.from_failure(
                    failure.model_copy(update={"detail": {**failure.detail, "index": i}})
                )
            entities.append(created.value)  # type: ignore[arg-type]
        return Result.success(entities)

    # ------------------------------------------------------------------
    # Evaluation helpers
    # ------------------------------------------------------------------

    def _evaluate(self, rule_set: RuleSet, entities: list[Entity]) -> list[EvaluationResult]:
        config = self._settings.evaluation
        if not config.parallel:
            return evaluate_many(rule_set, entities)
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            return evaluate_many(rule_set, entities, executor=pool)

    @staticmethod
    def _report(result: EvaluationResult) -> dict[str, Any]:
        verdict = classify(result)
        return {
            "entity_id": result.entity_id,
            "status": str(verdict.status),
            "outcomes": [e.to_dict() for e in result],
            "reasons": list(verdict.reasons),
        }
