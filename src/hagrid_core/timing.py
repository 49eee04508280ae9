"""Wall-clock timing of device work."""
from __future__ import annotations

import time

import jax

HAS_EFFECTS_BARRIER = hasattr(jax, "effects_barrier")


def device_synchronize(result=None):
    """Block until ``result`` and pending device effects are done."""
    jax.block_until_ready(result)
    if HAS_EFFECTS_BARRIER:
        jax.effects_barrier()
    return result


def timed(fn, *, sync: bool = True):
    """Run ``fn()`` once and return ``(elapsed_ms, result)``.

    With ``sync`` the clock stops only after the result is ready on the
    device; JAX dispatch is asynchronous otherwise.
    """
    t0 = time.perf_counter()
    result = fn()
    if sync:
        device_synchronize(result)
    elapsed_ms = (time.perf_counter() - t0) * 1000
    return elapsed_ms, result


def profile(fn, *, sync: bool = True) -> float:
    """Milliseconds spent running ``fn()``."""
    elapsed_ms, _ = timed(fn, sync=sync)
    return elapsed_ms


__all__ = [
    "HAS_EFFECTS_BARRIER",
    "device_synchronize",
    "timed",
    "profile",
]
