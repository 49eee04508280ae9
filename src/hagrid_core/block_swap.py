"""In-place block exchange within a single buffer.

Three escalating operations, each built on the previous one:

- ``block_swap_equal``: exchange two disjoint blocks of equal length.
- ``block_swap_contiguous``: exchange adjacent blocks ``[a, b)`` and
  ``[b, c)`` of any lengths (rotation of ``[a, c)`` by ``b - a``).
- ``block_swap_disjoint``: exchange ``[a, b)`` and ``[c, d)`` around the
  middle ``[b, c)``; ``[a, d)`` ends as former ``[c, d)``, ``[b, c)``,
  ``[a, b)``.

No auxiliary storage beyond a few indices. Host variants mutate any
mutable sequence in place and return None. ``_jax`` variants are jitted
and return the rearranged array; boundaries may be traced values.

Boundaries must satisfy ``a <= b <= c (<= d)`` and lie inside the
buffer. Violations are only detected when block guards are enabled.
"""
from __future__ import annotations

from functools import partial

import jax.numpy as jnp
from jax import jit, lax

from hagrid_core.gating import _block_guard_enabled
from hagrid_core.guards import (
    guard_block_bounds,
    guard_block_bounds_jax,
    guard_equal_blocks,
    guard_equal_blocks_jax,
)
from hagrid_core.numeric import minimum, swap, swap_jax


def _block_swap_equal(buf, a, b, n):
    for i, j in zip(range(a, a + n), range(b, b + n)):
        swap(buf, i, j)


def _block_swap_contiguous(buf, a, b, c):
    d1 = b - a
    d2 = c - b
    while minimum(d1, d2) > 0:
        if d1 < d2:
            # [a, b) trades places with the tail of [b, c).
            _block_swap_equal(buf, a, c - d1, d1)
            c = c - d1
        else:
            # Head of [a, b) trades places with [b, c).
            _block_swap_equal(buf, a, b, d2)
            a = a + d2
        d1 = b - a
        d2 = c - b


def _block_swap_disjoint(buf, a, b, c, d):
    d1 = b - a
    d2 = c - b
    _block_swap_contiguous(buf, a, b, c)
    _block_swap_contiguous(buf, c - d1, c, d)
    _block_swap_contiguous(buf, a, a + d2, d - d1)


def block_swap_equal(buf, a: int, b: int, n: int) -> None:
    guard_equal_blocks(a, b, n, len(buf), "block_swap_equal")
    _block_swap_equal(buf, a, b, n)


def block_swap_contiguous(buf, a: int, b: int, c: int) -> None:
    guard_block_bounds((a, b, c), len(buf), "block_swap_contiguous")
    _block_swap_contiguous(buf, a, b, c)


def block_swap_disjoint(buf, a: int, b: int, c: int, d: int) -> None:
    guard_block_bounds((a, b, c, d), len(buf), "block_swap_disjoint")
    _block_swap_disjoint(buf, a, b, c, d)


def _index(v):
    return jnp.asarray(v, dtype=jnp.int32)


def _block_swap_equal_jax(buf, a, b, n):
    def body(i, out):
        return swap_jax(out, a + i, b + i)

    return lax.fori_loop(jnp.int32(0), n, body, buf)


def _block_swap_contiguous_jax(buf, a, b, c):
    def cond(state):
        _, a, b, c = state
        return jnp.minimum(b - a, c - b) > 0

    def body(state):
        out, a, b, c = state
        d1 = b - a
        d2 = c - b
        left = d1 < d2
        other = jnp.where(left, c - d1, b)
        out = _block_swap_equal_jax(out, a, other, jnp.minimum(d1, d2))
        c = jnp.where(left, c - d1, c)
        a = jnp.where(left, a, a + d2)
        return out, a, b, c

    out, _, _, _ = lax.while_loop(cond, body, (buf, a, b, c))
    return out


@partial(jit, static_argnames=("guard",))
def _block_swap_equal_jit(buf, a, b, n, guard):
    a, b, n = _index(a), _index(b), _index(n)
    guard_equal_blocks_jax(
        a, b, n, buf.shape[0], "block_swap_equal_jax", guard=guard
    )
    return _block_swap_equal_jax(buf, a, b, n)


@partial(jit, static_argnames=("guard",))
def _block_swap_contiguous_jit(buf, a, b, c, guard):
    a, b, c = _index(a), _index(b), _index(c)
    guard_block_bounds_jax(
        (a, b, c), buf.shape[0], "block_swap_contiguous_jax", guard=guard
    )
    return _block_swap_contiguous_jax(buf, a, b, c)


@partial(jit, static_argnames=("guard",))
def _block_swap_disjoint_jit(buf, a, b, c, d, guard):
    a, b, c, d = _index(a), _index(b), _index(c), _index(d)
    guard_block_bounds_jax(
        (a, b, c, d), buf.shape[0], "block_swap_disjoint_jax", guard=guard
    )
    d1 = b - a
    d2 = c - b
    out = _block_swap_contiguous_jax(buf, a, b, c)
    out = _block_swap_contiguous_jax(out, c - d1, c, d)
    return _block_swap_contiguous_jax(out, a, a + d2, d - d1)


# Guard flags are read per call and compiled in as a static argument.
def block_swap_equal_jax(buf, a, b, n, *, guard=None):
    if guard is None:
        guard = _block_guard_enabled()
    return _block_swap_equal_jit(buf, a, b, n, guard=bool(guard))


def block_swap_contiguous_jax(buf, a, b, c, *, guard=None):
    if guard is None:
        guard = _block_guard_enabled()
    return _block_swap_contiguous_jit(buf, a, b, c, guard=bool(guard))


def block_swap_disjoint_jax(buf, a, b, c, d, *, guard=None):
    if guard is None:
        guard = _block_guard_enabled()
    return _block_swap_disjoint_jit(buf, a, b, c, d, guard=bool(guard))


__all__ = [
    "block_swap_equal",
    "block_swap_contiguous",
    "block_swap_disjoint",
    "block_swap_equal_jax",
    "block_swap_contiguous_jax",
    "block_swap_disjoint_jax",
]
