"""Fail-fast checks around calls into external systems.

A failing external status is unrecoverable: the failure is logged with
the caller's source location and the process is aborted. ``abort_fn`` is
injectable so callers (and tests) can substitute the termination step.
"""
from __future__ import annotations

import inspect
import logging
import os
from dataclasses import dataclass

from hagrid_core.gating import _debug_sync_enabled
from hagrid_core.timing import device_synchronize

logger = logging.getLogger("hagrid_core.status")


@dataclass(frozen=True)
class CallStatus:
    ok: bool
    code: int = 0
    message: str = ""

    @classmethod
    def success(cls) -> "CallStatus":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str, code: int = 1) -> "CallStatus":
        return cls(ok=False, code=code, message=message)


def _as_status(status) -> CallStatus:
    if isinstance(status, CallStatus):
        return status
    if isinstance(status, bool):
        return CallStatus(ok=status, code=0 if status else 1)
    if isinstance(status, int):
        return CallStatus(ok=status == 0, code=status)
    raise TypeError(f"unsupported status type: {type(status).__name__}")


def _caller_location(stacklevel):
    # Skip this helper and check_call itself.
    frame = inspect.currentframe().f_back.f_back
    for _ in range(stacklevel - 1):
        frame = frame.f_back
    return frame.f_code.co_filename, frame.f_lineno


def check_call(status, *, label=None, abort_fn=os.abort, stacklevel=1):
    """Return the status on success; log and abort on failure."""
    st = _as_status(status)
    if st.ok:
        return st
    filename, lineno = _caller_location(stacklevel)
    what = st.message or f"status code {st.code}"
    if label:
        what = f"{label}: {what}"
    logger.error("%s(%d): %s", filename, lineno, what)
    abort_fn()
    return st


def checked_call(fn, *args, label=None, abort_fn=os.abort, **kwargs):
    """Run an external call; any exception it raises is fatal."""
    try:
        result = fn(*args, **kwargs)
    except Exception as exc:
        name = label or getattr(fn, "__name__", "external call")
        check_call(
            CallStatus.failure(f"{type(exc).__name__}: {exc}"),
            label=name,
            abort_fn=abort_fn,
            stacklevel=2,
        )
        raise
    return result


def debug_sync(*arrays, label="debug_sync", abort_fn=os.abort):
    """Synchronize with the device when debug sync is enabled."""
    if not _debug_sync_enabled():
        return
    checked_call(device_synchronize, arrays, label=label, abort_fn=abort_fn)


__all__ = [
    "CallStatus",
    "check_call",
    "checked_call",
    "debug_sync",
]
