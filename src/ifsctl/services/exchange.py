"""ExchangeService — create, validate, export, share, and merge fractal files.

INVARIANT: a rejected load never writes.  Decoding and validation run to
completion before any file is created or replaced.
"""

from __future__ import annotations

import json
from pathlib import Path

from ifsctl.domain.codec import (
    InvalidFormatError,
    build_share_url,
    decode_share_token,
    encode_share_token,
    extract_share_token,
    merge_generated,
)
from ifsctl.domain.models import DEFAULT_CONFIG, FractalConfig
from ifsctl.infrastructure.filesystem import export_filename, is_within, read_text_file
from ifsctl.services.base import BaseService
from ifsctl.services.result import ServiceResult
from ifsctl.services.telemetry import traced


def _describe(config: FractalConfig) -> dict[str, object]:
    return {
        "name": config.name,
        "base_shape": config.base_shape.value,
        "rule_count": len(config.rules),
        "iterations": config.iterations,
    }


class ExchangeService(BaseService):
    """Move fractal configs between files, share links, and generated output."""

    @traced
    def init_config(self, path: Path, *, force: bool = False) -> ServiceResult:
        """Write the default fractal to *path*."""
        op = "init_config"
        if path.exists() and not force:
            return ServiceResult.failure(
                op, "ALREADY_EXISTS", f"{path} already exists (use --force to overwrite)"
            )
        failure = self._save(path, DEFAULT_CONFIG, op=op)
        if failure is not None:
            return failure
        return ServiceResult(ok=True, op=op, data={"path": str(path), **_describe(DEFAULT_CONFIG)})

    @traced
    def validate(self, path: Path) -> ServiceResult:
        op = "validate"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None
        return ServiceResult(ok=True, op=op, data={"path": str(path), **_describe(config)})

    @traced
    def export(self, path: Path, output_dir: Path) -> ServiceResult:
        """Write a normalized copy of *path* as ``<name>_fractal.json`` in *output_dir*."""
        op = "export"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        target = output_dir / export_filename(config.name)
        if not is_within(target, output_dir):
            return ServiceResult.failure(
                op, "INVALID_INPUT", f"Export target {target} is outside {output_dir}"
            )
        failure = self._save(target, config, op=op)
        if failure is not None:
            return failure
        return ServiceResult(ok=True, op=op, data={"path": str(target), **_describe(config)})

    @traced
    def share_encode(self, path: Path, *, base_url: str | None = None) -> ServiceResult:
        op = "share_encode"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        share = self._settings.share
        url = build_share_url(config, base_url or share.base_url, param=share.param)
        return ServiceResult(
            ok=True,
            op=op,
            data={"token": encode_share_token(config), "url": url, **_describe(config)},
        )

    @traced
    def share_decode(self, value: str, output: Path, *, force: bool = False) -> ServiceResult:
        """Decode a share token or URL and write it to *output*."""
        op = "share_decode"
        try:
            token = extract_share_token(value, param=self._settings.share.param)
            config = decode_share_token(token)
        except InvalidFormatError as exc:
            return self._invalid_format(op, exc)

        if output.exists() and not force:
            return ServiceResult.failure(
                op, "ALREADY_EXISTS", f"{output} already exists (use --force to overwrite)"
            )
        failure = self._save(output, config, op=op)
        if failure is not None:
            return failure
        return ServiceResult(ok=True, op=op, data={"path": str(output), **_describe(config)})

    @traced
    def merge_generated(
        self,
        path: Path,
        generated: Path,
        *,
        prompt: str | None = None,
    ) -> ServiceResult:
        """Apply a generated partial config (JSON file) on top of *path*."""
        op = "merge_generated"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        try:
            partial = json.loads(read_text_file(generated))
        except FileNotFoundError:
            return ServiceResult.failure(op, "NOT_FOUND", f"No generated file at {generated}")
        except json.JSONDecodeError as exc:
            return self._invalid_format(
                op, InvalidFormatError("Failed to parse generated output.", detail=str(exc))
            )

        policy = self._settings.generated
        try:
            merged = merge_generated(
                config,
                partial,
                prompt=prompt,
                fallback_name=policy.fallback_name,
                default_scale=policy.default_scale,
                iterations=policy.iterations,
            )
        except InvalidFormatError as exc:
            return self._invalid_format(op, exc, path=str(generated))

        failure = self._save(path, merged, op=op)
        if failure is not None:
            return failure
        return ServiceResult(ok=True, op=op, data={"path": str(path), **_describe(merged)})
