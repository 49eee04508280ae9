from __future__ import annotations

from enum import Enum

from hagrid_core.errors import HagridBackendError


class Backend(str, Enum):
    AUTO = "auto"
    HOST = "host"
    DEVICE = "device"


def coerce_backend(
    mode: Backend | str | None,
    *,
    default_fn=None,
    context: str | None = None,
) -> Backend:
    if mode is None or mode == "" or mode == Backend.AUTO:
        return default_fn() if default_fn is not None else Backend.AUTO
    if isinstance(mode, Backend):
        return mode
    if isinstance(mode, str):
        if mode == Backend.AUTO.value:
            return default_fn() if default_fn is not None else Backend.AUTO
        if mode == Backend.HOST.value:
            return Backend.HOST
        if mode == Backend.DEVICE.value:
            return Backend.DEVICE
    raise HagridBackendError(
        mode=mode,
        allowed=(
            Backend.HOST.value,
            Backend.DEVICE.value,
            Backend.AUTO.value,
        ),
        context=context,
    )


__all__ = [
    "Backend",
    "coerce_backend",
]
