"""Filesystem operations for fractal files.

Fractal files are UTF-8 JSON documents.  Parsing and validation live in
:mod:`ifsctl.domain.codec`; this module only moves text and arrays to and
from disk.

INVARIANT: a write either replaces the target completely or leaves it
untouched.  Text is written to a sibling temp file and renamed into place.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import numpy as np

FRACTAL_SUFFIX = ".json"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def read_text_file(path: Path) -> str:
    """Read a fractal file.  Raises FileNotFoundError if it does not exist."""
    return path.read_text(encoding="utf-8")


def write_text_file(path: Path, text: str) -> None:
    """Atomically write *text* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
            if not text.endswith("\n"):
                fh.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_transforms(path: Path, transforms: np.ndarray) -> Path:
    """Save an ``(N, 4, 4)`` transform stack as ``.npy``.  Returns the written path."""
    if path.suffix != ".npy":
        path = path.with_suffix(".npy")
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, transforms)
    return path


def export_filename(name: str) -> str:
    """Default export filename for a fractal name.

    Whitespace runs become underscores, as do path separators and any other
    character outside ``[A-Za-z0-9._-]``.  Leading dots are stripped so the
    result is always a plain, visible basename.
    """
    stem = _UNSAFE_CHARS.sub("_", "_".join(name.split())).lstrip(".") or "fractal"
    return f"{stem}_fractal{FRACTAL_SUFFIX}"


def is_within(path: Path, directory: Path) -> bool:
    """True when *path* resolves to a direct child of *directory*."""
    return path.resolve().parent == directory.resolve()
