"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, nsidctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- nsidctl.toml sections ---


class BatchConfig(BaseModel):
    """[batch] section — multi-identifier validation."""

    model_config = {"frozen": True}

    fail_fast: bool = False
    comment_prefix: str = "#"
    skip_blank: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = Field(default=100, ge=40)

