"""Shared pytest fixtures for maytrix tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from maytrix.config.settings import MaytrixSettings
from maytrix.domain import Entity, RuleOutcome, RuleSet, RuleSetBuilder, define_rule
from maytrix.value import IntegerValue, NullValue, Ordering, TextValue, Value, compare, map_of

SCENARIO_RULES_TOML = """\
[schema]
balance = "integer"
name = "text"

[[rules]]
name = "non_negative"
kind = "min"
field = "balance"
bound = 0
reason = "balance below zero"

[[rules]]
name = "has_name"
kind = "non_empty"
field = "name"
reason = "name is empty"
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> MaytrixSettings:
    """Settings with no config file and no MAYTRIX_ environment."""
    monkeypatch.delenv("MAYTRIX_CONFIG", raising=False)
    return MaytrixSettings.from_cli(search_root=tmp_path)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from an empty temp directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MAYTRIX_CONFIG", raising=False)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing *body* to ``tmp_path / name``."""

    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def rules_file(write_file: Callable[[str, str], Path]) -> Path:
    return write_file("rules.toml", SCENARIO_RULES_TOML)


# ---------------------------------------------------------------------------
# Account scenario: non_negative(balance) and has_name(name), built in code
# ---------------------------------------------------------------------------


def _non_negative(balance: Value) -> RuleOutcome:
    ordered = compare(balance, IntegerValue(0))
    if not ordered.ok or ordered.value is Ordering.LESS:
        return RuleOutcome.failed("balance below zero")
    return RuleOutcome.passed()


def _has_name(name: Value) -> RuleOutcome:
    if isinstance(name, NullValue) or name == TextValue(""):
        return RuleOutcome.failed("name is empty")
    return RuleOutcome.passed()


@pytest.fixture
def scenario_rule_set() -> RuleSet:
    builder = RuleSetBuilder()
    builder.register(define_rule("non_negative", ["balance"], _non_negative).unwrap()).unwrap()
    builder.register(define_rule("has_name", ["name"], _has_name).unwrap()).unwrap()
    return builder.freeze()


@pytest.fixture
def make_account() -> Callable[..., Entity]:
    """Factory for ``{balance, name}`` entities."""

    def _make(balance: int, name: str) -> Entity:
        return Entity.create(map_of({"balance": IntegerValue(balance), "name": TextValue(name)}))

    return _make
