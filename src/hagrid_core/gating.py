import os

import jax

from hagrid_core.modes import Backend, coerce_backend

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name):
    value = os.environ.get(name, "").strip().lower()
    return value in _TRUTHY


def _test_guards_enabled():
    return _env_flag("HAGRID_TEST_GUARDS")


def _block_guard_enabled():
    # Read per call so tests can toggle guards with monkeypatch.
    return _test_guards_enabled() or _env_flag("HAGRID_BLOCK_GUARD")


def _debug_sync_enabled():
    return _test_guards_enabled() or _env_flag("HAGRID_DEBUG_SYNC")


def _device_index():
    value = os.environ.get("HAGRID_DEVICE_INDEX", "").strip()
    if not value:
        return 0
    if not value.isdigit():
        raise ValueError("HAGRID_DEVICE_INDEX must be an integer")
    return int(value)


def _env_backend() -> Backend:
    return coerce_backend(
        os.environ.get("HAGRID_BACKEND", "").strip().lower(),
        context="HAGRID_BACKEND",
    )


def _backend_for(buf) -> Backend:
    # AUTO follows the buffer: JAX arrays stay on device, everything else is host.
    return Backend.DEVICE if isinstance(buf, jax.Array) else Backend.HOST


def _normalize_backend(backend, buf):
    def _default():
        env = _env_backend()
        return _backend_for(buf) if env == Backend.AUTO else env

    return coerce_backend(backend, default_fn=_default, context="backend")


__all__ = [
    "_env_flag",
    "_test_guards_enabled",
    "_block_guard_enabled",
    "_debug_sync_enabled",
    "_device_index",
    "_env_backend",
    "_backend_for",
    "_normalize_backend",
]
