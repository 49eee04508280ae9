from __future__ import annotations

import jax
import jax.numpy as jnp

from hagrid_core.gating import _block_guard_enabled

HAS_DEBUG_CALLBACK = hasattr(jax, "debug") and hasattr(jax.debug, "callback")


def _bounds_message(label, bounds, size):
    shown = ", ".join(str(int(v)) for v in bounds)
    return f"block bounds invalid in {label} (bounds=[{shown}], size={int(size)})"


def _equal_message(label, a, b, n, size):
    return (
        f"equal blocks invalid in {label} "
        f"(a={int(a)}, b={int(b)}, n={int(n)}, size={int(size)})"
    )


def _equal_blocks_ok(a, b, n, size):
    in_range = (n >= 0) & (a >= 0) & (b >= 0) & (a + n <= size) & (b + n <= size)
    disjoint = (a + n <= b) | (b + n <= a) | (n == 0)
    return in_range & disjoint


def guard_block_bounds(bounds, size, label, *, guard=None):
    """Require non-decreasing boundaries inside [0, size]."""
    if guard is None:
        guard = _block_guard_enabled()
    if not guard:
        return
    vals = [int(v) for v in bounds]
    ordered = all(lo <= hi for lo, hi in zip(vals, vals[1:]))
    if not ordered or vals[0] < 0 or vals[-1] > int(size):
        raise RuntimeError(_bounds_message(label, vals, size))


def guard_equal_blocks(a, b, n, size, label, *, guard=None):
    """Require two in-range, disjoint blocks of length n."""
    if guard is None:
        guard = _block_guard_enabled()
    if not guard:
        return
    a, b, n, size = int(a), int(b), int(n), int(size)
    if not _equal_blocks_ok(a, b, n, size):
        raise RuntimeError(_equal_message(label, a, b, n, size))


def guard_block_bounds_jax(bounds, size, label, *, guard=None):
    if guard is None:
        guard = _block_guard_enabled()
    if not guard or not HAS_DEBUG_CALLBACK:
        return
    vals = [jnp.asarray(v, dtype=jnp.int32) for v in bounds]
    size_i = jnp.asarray(size, dtype=jnp.int32)
    bad = (vals[0] < 0) | (vals[-1] > size_i)
    for lo, hi in zip(vals, vals[1:]):
        bad = bad | (lo > hi)

    def _raise(bad_val, size_val, *bound_vals):
        if bad_val:
            raise RuntimeError(_bounds_message(label, bound_vals, size_val))

    jax.debug.callback(_raise, bad, size_i, *vals)


def guard_equal_blocks_jax(a, b, n, size, label, *, guard=None):
    if guard is None:
        guard = _block_guard_enabled()
    if not guard or not HAS_DEBUG_CALLBACK:
        return
    a, b, n, size = (jnp.asarray(v, dtype=jnp.int32) for v in (a, b, n, size))
    bad = ~_equal_blocks_ok(a, b, n, size)

    def _raise(bad_val, a_val, b_val, n_val, size_val):
        if bad_val:
            raise RuntimeError(_equal_message(label, a_val, b_val, n_val, size_val))

    jax.debug.callback(_raise, bad, a, b, n, size)


__all__ = [
    "HAS_DEBUG_CALLBACK",
    "guard_block_bounds",
    "guard_equal_blocks",
    "guard_block_bounds_jax",
    "guard_equal_blocks_jax",
]
