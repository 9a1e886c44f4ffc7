# space_helpers/tensor.py
# ------------------------------------------------------------
# Per-sample outer products
# ------------------------------------------------------------
from __future__ import annotations

import numpy as np


def outer_product(a: np.ndarray,
                  b: np.ndarray,
                  *,
                  conjugate_b: bool = False) -> np.ndarray:
    """
    Outer product over the last axis, broadcasting the leading axes.

        a : (..., n)     b : (..., m)     →     (..., n, m)
        out[..., i, j] = a[..., i] * b[..., j]

    Typical use: a time series of vectors (N, 3) ⊗ (N, 3) → (N, 3, 3),
    e.g. a spectral matrix from FFT coefficients with conjugate_b=True.
    """
    A = np.asarray(a)
    B = np.asarray(b)
    if A.ndim == 0 or B.ndim == 0:
        raise ValueError('outer_product needs at least 1-D inputs')
    if conjugate_b:
        B = np.conj(B)
    return np.matmul(A[..., :, np.newaxis], B[..., np.newaxis, :])
