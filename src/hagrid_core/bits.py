"""Same-width bit reinterpretation.

Both variants relabel the bits of a value as another dtype of identical
width. Nothing is converted or rounded.
"""
from __future__ import annotations

import jax.numpy as jnp
import numpy as np
from jax import lax

from hagrid_core.errors import HagridBitWidthError


def _host_dtype(value, from_dtype, to_dtype):
    if from_dtype is not None:
        return np.dtype(from_dtype)
    if isinstance(value, (np.ndarray, np.generic)):
        return value.dtype
    if isinstance(value, float):
        return np.dtype(np.float64)
    # Bare ints are read as the unsigned type matching the target width.
    return np.dtype(f"u{np.dtype(to_dtype).itemsize}")


def bit_reinterpret(value, to_dtype, from_dtype=None):
    """Reinterpret the bit pattern of ``value`` as ``to_dtype``.

    Python scalars come back as Python scalars, arrays as a view.
    """
    to_dt = np.dtype(to_dtype)
    from_dt = _host_dtype(value, from_dtype, to_dt)
    if from_dt.itemsize != to_dt.itemsize:
        raise HagridBitWidthError(from_dtype=from_dt, to_dtype=to_dt)
    arr = np.asarray(value, dtype=from_dt)
    out = arr.view(to_dt)
    if isinstance(value, np.ndarray):
        return out
    return out.item()


def bit_reinterpret_jax(x, to_dtype):
    x = jnp.asarray(x)
    to_dt = jnp.dtype(to_dtype)
    if x.dtype.itemsize != to_dt.itemsize:
        raise HagridBitWidthError(from_dtype=x.dtype, to_dtype=to_dt)
    return lax.bitcast_convert_type(x, to_dt)


def uint_dtype_for(dtype) -> np.dtype:
    """Unsigned integer dtype with the same width as ``dtype``."""
    return np.dtype(f"u{np.dtype(dtype).itemsize}")


def sign_bit(dtype) -> int:
    return 1 << (np.dtype(dtype).itemsize * 8 - 1)


__all__ = [
    "bit_reinterpret",
    "bit_reinterpret_jax",
    "uint_dtype_for",
    "sign_bit",
]
