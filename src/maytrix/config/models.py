"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, maytrix.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- maytrix.toml sections ---


class ArithmeticConfig(BaseModel):
    """[arithmetic] section."""

    model_config = {"frozen": True}

    division_scale: int = Field(default=0, ge=0)


class EvaluationConfig(BaseModel):
    """[evaluation] section."""

    model_config = {"frozen": True}

    parallel: bool = False
    max_workers: int = Field(default=4, ge=1)

