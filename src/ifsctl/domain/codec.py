"""Wire encodings for FractalConfig — JSON text and share tokens.

Two transports carry the same object:

- JSON text (file export/import, copy/paste), indented for humans.
- Share token: compact JSON, UTF-8, URL-safe base64 without padding, carried
  as a single query parameter of a share URL.

Import contract: the decoded value must be an object whose ``rules`` is an
array.  Accepted objects are merged over the defaults and then validated
strictly; unknown fields are ignored.  Anything else raises
:class:`InvalidFormatError` and nothing is applied.

Generated (AI) rule sets follow a looser policy: missing rule components
default to ``0`` and a missing scale to ``0.5`` before strict validation.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from pydantic import ValidationError

from ifsctl.domain.models import DEFAULT_CONFIG, FractalConfig, TransformRule

INVALID_FORMAT_MESSAGE = "Invalid fractal file format."
DEFAULT_SHARE_PARAM = "c"
GENERATED_FALLBACK_NAME = "AI Generated Fractal"
GENERATED_DEFAULT_SCALE = 0.5
GENERATED_ITERATIONS = 4


class InvalidFormatError(ValueError):
    """Raised when persisted or transmitted state does not match the wire format."""

    def __init__(self, message: str = INVALID_FORMAT_MESSAGE, *, detail: str | None = None):
        super().__init__(message)
        self.detail = detail


# ---------------------------------------------------------------------------
# Structured object <-> FractalConfig
# ---------------------------------------------------------------------------


def config_from_object(data: Any) -> FractalConfig:
    """Validate a decoded wire object into a FractalConfig."""
    if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
        raise InvalidFormatError()
    try:
        return FractalConfig.model_validate({**DEFAULT_CONFIG.to_wire(), **data})
    except ValidationError as exc:
        raise InvalidFormatError(detail=_summarize(exc)) from exc


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------


def dump_config_json(config: FractalConfig, *, indent: int | None = 2) -> str:
    separators = (",", ":") if indent is None else None
    return json.dumps(config.to_wire(), indent=indent, separators=separators, ensure_ascii=False)


def load_config_json(text: str) -> FractalConfig:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFormatError("Error parsing JSON data.", detail=str(exc)) from exc
    return config_from_object(data)


# ---------------------------------------------------------------------------
# Share tokens
# ---------------------------------------------------------------------------


def encode_share_token(config: FractalConfig) -> str:
    raw = dump_config_json(config, indent=None).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_share_token(token: str) -> FractalConfig:
    """Decode a share token (URL-safe or standard base64, padding optional)."""
    cleaned = token.strip().replace("-", "+").replace("_", "/").replace(" ", "+")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True)
        text = raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise InvalidFormatError("Invalid share link.", detail=str(exc)) from exc
    return load_config_json(text)


def build_share_url(
    config: FractalConfig,
    base_url: str,
    *,
    param: str = DEFAULT_SHARE_PARAM,
) -> str:
    parts = urlsplit(base_url)
    query = parse_qs(parts.query, keep_blank_values=True)
    query[param] = [encode_share_token(config)]
    return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))


def extract_share_token(value: str, *, param: str = DEFAULT_SHARE_PARAM) -> str:
    """Return the token from a share URL, or *value* itself if it is not a URL."""
    parts = urlsplit(value.strip())
    if not parts.scheme and not parts.query:
        return value.strip()
    tokens = parse_qs(parts.query).get(param)
    if not tokens:
        raise InvalidFormatError(f"Share link has no '{param}' parameter.")
    return tokens[0]


# ---------------------------------------------------------------------------
# Generated (AI) partial configs
# ---------------------------------------------------------------------------


def _component(values: Any, i: int) -> Any:
    if values is None:
        return 0.0
    if not isinstance(values, list):
        raise InvalidFormatError(detail=f"expected an array, got {type(values).__name__}")
    if i >= len(values) or values[i] is None:
        return 0.0
    return values[i]


def coerce_generated_rule(
    data: Any,
    *,
    default_scale: float = GENERATED_DEFAULT_SCALE,
) -> TransformRule:
    """Coerce one loosely typed generated rule into a strict TransformRule."""
    if not isinstance(data, dict):
        raise InvalidFormatError(detail="rule must be an object")
    position = data.get("position")
    rotation = data.get("rotation")
    scale = data.get("scale")
    try:
        return TransformRule(
            position=tuple(_component(position, i) for i in range(3)),
            rotation=tuple(_component(rotation, i) for i in range(3)),
            scale=default_scale if scale is None else scale,
        )
    except ValidationError as exc:
        raise InvalidFormatError(detail=_summarize(exc)) from exc


def merge_generated(
    current: FractalConfig,
    partial: Any,
    *,
    prompt: str | None = None,
    fallback_name: str = GENERATED_FALLBACK_NAME,
    default_scale: float = GENERATED_DEFAULT_SCALE,
    iterations: int = GENERATED_ITERATIONS,
) -> FractalConfig:
    """Apply an externally generated partial config on top of *current*.

    Rules, shape and color keep their current values when absent; the name
    falls back to *fallback_name*, the description to *prompt*, and the
    iteration count is reset to *iterations*.
    """
    if not isinstance(partial, dict):
        raise InvalidFormatError()

    raw_rules = partial.get("rules")
    if raw_rules is None:
        rules = list(current.rules)
    elif isinstance(raw_rules, list):
        rules = [coerce_generated_rule(r, default_scale=default_scale) for r in raw_rules]
    else:
        raise InvalidFormatError()

    merged = {
        **current.to_wire(),
        **partial,
        "rules": [r.model_dump(mode="json") for r in rules],
        "baseShape": partial.get("baseShape") or current.base_shape.value,
        "color": partial.get("color") or current.color,
        "name": partial.get("name") or fallback_name,
        "description": partial.get("description") or prompt or current.description,
        "iterations": iterations,
    }
    return config_from_object(merged)
