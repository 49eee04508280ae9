from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HagridBackendError(ValueError):
    mode: object
    allowed: tuple[str, ...] = ("host", "device", "auto")
    context: str | None = None

    def __str__(self) -> str:
        if self.context:
            return f"unknown {self.context}={self.mode!r}"
        return f"unknown backend={self.mode!r}"


@dataclass(frozen=True)
class HagridBitWidthError(ValueError):
    from_dtype: object
    to_dtype: object

    def __str__(self) -> str:
        return (
            f"bit_reinterpret width mismatch: {self.from_dtype} -> {self.to_dtype}"
        )


@dataclass(frozen=True)
class HagridCodecDtypeError(TypeError):
    dtype: object
    context: str | None = None

    def __str__(self) -> str:
        where = f" in {self.context}" if self.context else ""
        return f"ordered codec does not support dtype={self.dtype!s}{where}"


__all__ = [
    "HagridBackendError",
    "HagridBitWidthError",
    "HagridCodecDtypeError",
]
