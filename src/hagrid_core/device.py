from __future__ import annotations

import os

import jax
import jax.numpy as jnp

from hagrid_core.gating import _device_index
from hagrid_core.status import checked_call


def default_device():
    """Device selected by HAGRID_DEVICE_INDEX on the default backend."""
    devices = jax.devices()
    index = _device_index()
    if index >= len(devices):
        raise ValueError(
            f"HAGRID_DEVICE_INDEX={index} out of range ({len(devices)} devices)"
        )
    return devices[index]


def _put(value, device):
    return jax.device_put(jnp.asarray(value), device)


def set_global(value, *, device=None, abort_fn=os.abort):
    """Copy a host value to the device as one array; a failed transfer is fatal."""
    if device is None:
        device = default_device()
    out = checked_call(_put, value, device, label="set_global", abort_fn=abort_fn)
    return jax.block_until_ready(out)


__all__ = [
    "default_device",
    "set_global",
]
