"""Tests for ServiceResult formatting."""

from __future__ import annotations

import json

from maytrix.output.formatters import OutputSettings, format_result, render_quiet
from maytrix.services.result import ServiceError, ServiceResult

_VALIDATE_DATA = {
    "results": [
        {
            "entity_id": "ENT-000007",
            "status": "violated",
            "outcomes": [
                {"rule": "non_negative", "status": "fail", "reason": "balance below zero"},
                {"rule": "has_name", "status": "pass", "reason": None},
            ],
            "reasons": ["balance below zero"],
        }
    ],
    "count": 1,
    "violated": 1,
}


class TestJson:
    def test_round_trips(self) -> None:
        result = ServiceResult(ok=True, op="parse", data={"kind": "integer", "value": "1"})
        output = format_result(result, settings=OutputSettings(json_output=True))
        assert json.loads(output)["data"]["value"] == "1"


class TestQuiet:
    def test_value(self) -> None:
        result = ServiceResult(ok=True, op="calculate", data={"kind": "decimal", "value": "2.50"})
        assert render_quiet(result) == "2.50"

    def test_ordering(self) -> None:
        result = ServiceResult(ok=True, op="compare", data={"ordering": "less"})
        assert render_quiet(result) == "less"

    def test_generic(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="rules", data={"count": 2})) == "OK: rules"

    def test_error(self) -> None:
        result = ServiceResult(ok=False, op="calculate", error=ServiceError(code="X", message="bad"))
        assert render_quiet(result) == "ERROR: calculate — bad"


class TestRich:
    def test_value(self) -> None:
        result = ServiceResult(ok=True, op="calculate", data={"kind": "decimal", "value": "2.50"})
        output = format_result(result)
        assert "2.50" in output
        assert "(decimal)" in output

    def test_value_verbose_shows_expression(self) -> None:
        result = ServiceResult(
            ok=True,
            op="calculate",
            data={"expression": "10 / 4", "kind": "decimal", "value": "2"},
        )
        assert "10 / 4" in format_result(result, settings=OutputSettings(verbose=True))
        assert "10 / 4" not in format_result(result)

    def test_compare(self) -> None:
        result = ServiceResult(
            ok=True,
            op="compare",
            data={"left": "1", "right": "2", "ordering": "less", "equal": False},
        )
        assert "less" in format_result(result)

    def test_validate_success(self) -> None:
        data = {**_VALIDATE_DATA, "violated": 0}
        output = format_result(ServiceResult(ok=True, op="validate", data=data))
        assert "OK" in output
        assert "ENT-000007" in output
        assert "non_negative" in output

    def test_validate_error_shows_outcomes(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(
                code="RULES_VIOLATED",
                message="1 rule failure(s): balance below zero",
                detail=_VALIDATE_DATA,
            ),
        )
        output = format_result(result)
        assert "ERROR" in output
        assert "[RULES_VIOLATED]" in output
        assert "has_name" in output
        assert "violated" in output

    def test_rules_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="rules",
            data={
                "rules": [{"name": "has_name", "depends_on": ["name"], "description": "Named"}],
                "count": 1,
                "dependencies": ["name"],
                "has_schema": False,
            },
        )
        assert "has_name" in format_result(result)
        assert "Named" not in format_result(result)
        assert "Named" in format_result(result, settings=OutputSettings(verbose=True))

    def test_generic_fields(self) -> None:
        output = format_result(ServiceResult(ok=True, op="other", data={"count": 3}))
        assert "other" in output
        assert "count: 3" in output

    def test_error_detail_in_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="calculate",
            error=ServiceError(code="OVERFLOW", message="too big", detail={"left": "[1]"}),
        )
        assert "left: [1]" in format_result(result, settings=OutputSettings(verbose=True))
        assert "left" not in format_result(result)
