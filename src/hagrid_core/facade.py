"""Backend-dispatching entry points.

Each call resolves a :class:`Backend` (explicit ``backend=``, else
``HAGRID_BACKEND``, else the buffer type) and returns the result: host
buffers are rearranged in place and returned as-is, device buffers come
back as new arrays. Device arrays sent to the host backend are copied
to numpy first.
"""
from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from hagrid_core import block_swap as _block_swap
from hagrid_core import ordered as _ordered
from hagrid_core.bits import uint_dtype_for
from hagrid_core.gating import _normalize_backend
from hagrid_core.modes import Backend


def _device_buffer(buf):
    return jnp.asarray(buf)


def _host_buffer(buf):
    # Device arrays are immutable; the host path works on a copy.
    if isinstance(buf, jax.Array):
        return np.array(buf)
    return buf


def block_swap_equal(buf, a, b, n, *, backend=None):
    if _normalize_backend(backend, buf) == Backend.DEVICE:
        return _block_swap.block_swap_equal_jax(_device_buffer(buf), a, b, n)
    buf = _host_buffer(buf)
    _block_swap.block_swap_equal(buf, a, b, n)
    return buf


def block_swap_contiguous(buf, a, b, c, *, backend=None):
    if _normalize_backend(backend, buf) == Backend.DEVICE:
        return _block_swap.block_swap_contiguous_jax(_device_buffer(buf), a, b, c)
    buf = _host_buffer(buf)
    _block_swap.block_swap_contiguous(buf, a, b, c)
    return buf


def block_swap_disjoint(buf, a, b, c, d, *, backend=None):
    if _normalize_backend(backend, buf) == Backend.DEVICE:
        return _block_swap.block_swap_disjoint_jax(
            _device_buffer(buf), a, b, c, d
        )
    buf = _host_buffer(buf)
    _block_swap.block_swap_disjoint(buf, a, b, c, d)
    return buf


def float_to_ordered(x, *, backend=None):
    """Ordered integer keys for ``x``.

    The device path converts Python floats and lists with ``jnp.asarray``,
    which narrows them to float32 unless x64 is enabled; their keys are
    uint32 and decode to the float32 value. The host path keeps Python
    floats as float64.
    """
    if _normalize_backend(backend, x) == Backend.DEVICE:
        return _ordered.float_to_ordered_jax(x)
    if isinstance(x, (list, jax.Array)):
        x = np.asarray(x)
    return _ordered.float_to_ordered(x)


def ordered_to_float(u, *, dtype=None, backend=None):
    if _normalize_backend(backend, u) == Backend.DEVICE:
        return _ordered.ordered_to_float_jax(u, dtype=dtype)
    if isinstance(u, list):
        key_dtype = uint_dtype_for(np.float64 if dtype is None else dtype)
        u = np.asarray(u, dtype=key_dtype)
    elif isinstance(u, jax.Array):
        u = np.asarray(u)
    return _ordered.ordered_to_float(u, dtype=dtype)


__all__ = [
    "block_swap_equal",
    "block_swap_contiguous",
    "block_swap_disjoint",
    "float_to_ordered",
    "ordered_to_float",
]
