"""Affine 4x4 transform construction and composition.

Matrices are ``numpy`` float64 arrays acting on column vectors, so
``compose(parent, local)`` places *local* inside the parent's frame.

Rotation convention: intrinsic X-Y-Z Euler angles, ``R = Rx · Ry · Rz``.
The order matters and is fixed everywhere in the package.
"""

from __future__ import annotations

import math

import numpy as np

from ifsctl.domain.models import TransformRule


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[:3, 3] = (x, y, z)
    return m


def uniform_scale(s: float) -> np.ndarray:
    return np.diag((s, s, s, 1.0)).astype(np.float64)


def rotation_xyz(x: float, y: float, z: float) -> np.ndarray:
    """Rotation matrix for intrinsic XYZ Euler angles (radians)."""
    cx, sx = math.cos(x), math.sin(x)
    cy, sy = math.cos(y), math.sin(y)
    cz, sz = math.cos(z), math.sin(z)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])

    m = identity()
    m[:3, :3] = rx @ ry @ rz
    return m


def build_local_transform(rule: TransformRule) -> np.ndarray:
    """``Translation · Rotation · Scale`` for one rule.

    Raises:
        ValueError: if any rule field is not finite or scale is not positive.
    """
    values = (*rule.position, *rule.rotation, rule.scale)
    if not all(math.isfinite(v) for v in values):
        msg = f"Rule fields must be finite: {rule!r}"
        raise ValueError(msg)
    if rule.scale <= 0:
        msg = f"Rule scale must be positive, got {rule.scale}"
        raise ValueError(msg)

    return translation(*rule.position) @ rotation_xyz(*rule.rotation) @ uniform_scale(rule.scale)


def compose(parent: np.ndarray, local: np.ndarray) -> np.ndarray:
    """Return ``parent · local``.  Associative, not commutative."""
    return parent @ local
