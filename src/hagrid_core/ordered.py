"""Order-preserving float <-> unsigned integer keys.

Negative floats have every bit inverted, non-negative floats have only
the sign bit set, so unsigned comparison of keys follows float order:
``-inf < ... < -0.0 < +0.0 < ... < +inf``. The mapping is a bijection on
bit patterns; NaN keys land past the infinities and carry no ordering
guarantee.
"""
from __future__ import annotations

import jax.numpy as jnp
import numpy as np

from hagrid_core.bits import bit_reinterpret_jax, sign_bit, uint_dtype_for
from hagrid_core.errors import HagridCodecDtypeError

_FLOAT_FOR_WIDTH = {2: np.float16, 4: np.float32, 8: np.float64}


def _codec_float_dtype(dtype, context) -> np.dtype:
    dt = np.dtype(dtype)
    if dt.kind != "f" or dt.itemsize not in _FLOAT_FOR_WIDTH:
        raise HagridCodecDtypeError(dtype=dt, context=context)
    return dt


def _float_dtype_for(uint_dtype, context) -> np.dtype:
    dt = np.dtype(uint_dtype)
    if dt.kind != "u" or dt.itemsize not in _FLOAT_FOR_WIDTH:
        raise HagridCodecDtypeError(dtype=dt, context=context)
    return np.dtype(_FLOAT_FOR_WIDTH[dt.itemsize])


def _masks(udt):
    top = udt.type(udt.itemsize * 8 - 1)
    sign = udt.type(sign_bit(udt))
    ones = udt.type(np.iinfo(udt).max)
    return top, sign, ones


def float_to_ordered(x, dtype=None):
    """Map floats to unsigned keys of the same width.

    Python floats are encoded as float64 keys unless ``dtype`` says
    otherwise; numpy inputs keep their own dtype.
    """
    if dtype is None:
        dtype = x.dtype if isinstance(x, (np.ndarray, np.generic)) else np.float64
    fdt = _codec_float_dtype(dtype, "float_to_ordered")
    udt = uint_dtype_for(fdt)
    top, sign, ones = _masks(udt)
    u = np.asarray(x, dtype=fdt).view(udt)
    neg = np.right_shift(u, top).astype(bool)
    out = u ^ np.where(neg, ones, sign).astype(udt)
    if isinstance(x, np.ndarray):
        return out
    return int(out)


def ordered_to_float(u, dtype=None):
    """Inverse of :func:`float_to_ordered`.

    ``dtype`` names the float type to decode to. Without it numpy inputs
    decode to the float of their width and Python ints to float64.
    """
    if dtype is None:
        if isinstance(u, (np.ndarray, np.generic)):
            dtype = _float_dtype_for(u.dtype, "ordered_to_float")
        else:
            dtype = np.float64
    fdt = _codec_float_dtype(dtype, "ordered_to_float")
    udt = uint_dtype_for(fdt)
    top, sign, ones = _masks(udt)
    key = np.asarray(u, dtype=udt)
    pos = np.right_shift(key, top).astype(bool)
    bits = key ^ np.where(pos, sign, ones).astype(udt)
    out = bits.view(fdt)
    if isinstance(u, np.ndarray):
        return out
    return float(out)


def float_to_ordered_jax(x):
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.floating):
        raise HagridCodecDtypeError(dtype=x.dtype, context="float_to_ordered_jax")
    udt = uint_dtype_for(x.dtype)
    u = bit_reinterpret_jax(x, udt)
    top = jnp.asarray(udt.itemsize * 8 - 1, dtype=udt)
    sign = jnp.asarray(sign_bit(udt), dtype=udt)
    ones = jnp.asarray(np.iinfo(udt).max, dtype=udt)
    neg = (u >> top) != 0
    return u ^ jnp.where(neg, ones, sign)


def ordered_to_float_jax(u, dtype=None):
    if isinstance(u, int):
        u = jnp.asarray(u, dtype=jnp.uint32)
    u = jnp.asarray(u)
    if dtype is None:
        fdt = _float_dtype_for(u.dtype, "ordered_to_float_jax")
    else:
        fdt = _codec_float_dtype(dtype, "ordered_to_float_jax")
    udt = uint_dtype_for(fdt)
    u = u.astype(udt)
    top = jnp.asarray(udt.itemsize * 8 - 1, dtype=udt)
    sign = jnp.asarray(sign_bit(udt), dtype=udt)
    ones = jnp.asarray(np.iinfo(udt).max, dtype=udt)
    pos = (u >> top) != 0
    return bit_reinterpret_jax(u ^ jnp.where(pos, sign, ones), fdt)


__all__ = [
    "float_to_ordered",
    "ordered_to_float",
    "float_to_ordered_jax",
    "ordered_to_float_jax",
]
