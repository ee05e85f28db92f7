"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ifsctl.toml only contains overrides.
An empty (or absent) ifsctl.toml is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ifsctl.domain.generator import MAX_INSTANCES

# --- ifsctl.toml sections ---


class GeneratorConfig(BaseModel):
    """[generator] section."""

    model_config = {"frozen": True}

    max_instances: int = Field(default=MAX_INSTANCES, gt=0)


class GridConfig(BaseModel):
    """[grid] section."""

    model_config = {"frozen": True}

    step: float = Field(default=0.333, gt=0)
    tolerance: float = Field(default=0.001, ge=0, lt=0.5)


class ShareConfig(BaseModel):
    """[share] section."""

    model_config = {"frozen": True}

    base_url: str = "https://ifsctl.local/"
    param: str = "c"


class GeneratedConfig(BaseModel):
    """[generated] section — policy for externally generated rule sets."""

    model_config = {"frozen": True}

    iterations: int = Field(default=4, ge=0)
    default_scale: float = Field(default=0.5, gt=0)
    fallback_name: str = "AI Generated Fractal"
