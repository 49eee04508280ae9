"""Scalar numeric primitives.

Host functions work on Python/numpy scalars and keep exact integer
arithmetic. The ``_jax`` variants are elementwise, traceable under
``jax.jit`` and fixed to the array's bit width.
"""
from __future__ import annotations

import math

import jax.numpy as jnp
import numpy as np
from jax import jit, lax

from hagrid_core.bits import (
    bit_reinterpret,
    bit_reinterpret_jax,
    sign_bit,
    uint_dtype_for,
)


def round_div(i, j):
    """Ceiling division: smallest q with q * j >= i (j > 0)."""
    return -(-i // j)


def minimum(a, b):
    return a if a < b else b


def maximum(a, b):
    return a if a > b else b


def clamp(a, b, c):
    # Not symmetric: b > c yields c.
    return minimum(c, maximum(b, a))


def swap(buf, i, j):
    buf[i], buf[j] = buf[j], buf[i]


def safe_rcp(x):
    """1/x, or an infinity carrying the sign of a zero x.

    numpy arrays are handled elementwise in their own float dtype.
    """
    if isinstance(x, np.ndarray):
        if not np.issubdtype(x.dtype, np.floating):
            x = x.astype(np.float64)
        with np.errstate(divide="ignore"):
            return np.reciprocal(x)
    if x != 0:
        return 1.0 / x
    return math.copysign(math.inf, x)


def prodsign(x, y, dtype=None):
    """x with the sign of x * y, without computing the product."""
    if dtype is None:
        dtype = x.dtype if isinstance(x, (np.ndarray, np.generic)) else np.float64
    udt = uint_dtype_for(dtype)
    ux = bit_reinterpret(x, udt, from_dtype=dtype)
    uy = bit_reinterpret(y, udt, from_dtype=dtype)
    return bit_reinterpret(ux ^ (uy & sign_bit(dtype)), dtype, from_dtype=udt)


def icbrt(x: int) -> int:
    """Integer cube root of x >= 0, three bits per step."""
    x = int(x)
    y = 0
    # Start at the 3-bit group holding the top bit of x.
    top = 3 * ((x.bit_length() - 1) // 3)
    for s in range(top, -1, -3):
        y = 2 * y
        b = (3 * y * (y + 1) + 1) << s
        if x >= b:
            x = x - b
            y = y + 1
    return y


def ilog2(x: int) -> int:
    """Smallest q with (1 << q) >= x."""
    x = int(x)
    return (x - 1).bit_length() if x > 1 else 0


def round_div_jax(i, j):
    i = jnp.asarray(i)
    return -((-i) // j)


def minimum_jax(a, b):
    return jnp.where(a < b, a, b)


def maximum_jax(a, b):
    return jnp.where(a > b, a, b)


def clamp_jax(a, b, c):
    return minimum_jax(c, maximum_jax(b, a))


def swap_jax(buf, i, j):
    x = buf[i]
    y = buf[j]
    return buf.at[i].set(y).at[j].set(x)


def _as_float(x):
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.floating):
        x = x.astype(jnp.float32)
    return x


def safe_rcp_jax(x):
    x = _as_float(x)
    nonzero = x != 0
    inf = jnp.asarray(jnp.inf, dtype=x.dtype)
    rcp = 1 / jnp.where(nonzero, x, jnp.ones_like(x))
    return jnp.where(nonzero, rcp, jnp.copysign(inf, x))


def prodsign_jax(x, y):
    x = _as_float(x)
    y = jnp.asarray(y, dtype=x.dtype)
    udt = uint_dtype_for(x.dtype)
    ux = bit_reinterpret_jax(x, udt)
    uy = bit_reinterpret_jax(y, udt)
    mask = jnp.asarray(sign_bit(x.dtype), dtype=udt)
    return bit_reinterpret_jax(ux ^ (uy & mask), x.dtype)


@jit
def icbrt_jax(x):
    # 32-bit domain: 11 groups of 3 bits, s = 30 .. 0.
    x = jnp.asarray(x).astype(jnp.uint32)

    def body(k, state):
        rem, y = state
        s = (30 - 3 * k).astype(jnp.uint32)
        y = y * jnp.uint32(2)
        b = (jnp.uint32(3) * y * (y + jnp.uint32(1)) + jnp.uint32(1)) << s
        take = rem >= b
        return jnp.where(take, rem - b, rem), jnp.where(take, y + jnp.uint32(1), y)

    _, y = lax.fori_loop(0, 11, body, (x, jnp.zeros_like(x)))
    return y.astype(jnp.int32)


@jit
def ilog2_jax(x):
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.integer):
        x = x.astype(jnp.int32)
    bits = jnp.iinfo(x.dtype).bits
    safe = jnp.where(x > 1, x - 1, jnp.ones_like(x))
    q = bits - lax.clz(safe)
    return jnp.where(x > 1, q, jnp.zeros_like(q)).astype(jnp.int32)


__all__ = [
    "round_div",
    "minimum",
    "maximum",
    "clamp",
    "swap",
    "safe_rcp",
    "prodsign",
    "icbrt",
    "ilog2",
    "round_div_jax",
    "minimum_jax",
    "maximum_jax",
    "clamp_jax",
    "swap_jax",
    "safe_rcp_jax",
    "prodsign_jax",
    "icbrt_jax",
    "ilog2_jax",
]
