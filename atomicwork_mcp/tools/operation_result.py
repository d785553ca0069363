from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from atomicwork_mcp.errors import AppError

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Generic result wrapper for tool operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


async def capture(operation: Callable[[], Awaitable[T]]) -> OperationResult[T]:
    """Await ``operation`` and record its outcome instead of raising."""
    try:
        return OperationResult(success=True, data=await operation())
    except AppError as exc:
        return OperationResult(success=False, error=exc.message)


@dataclass
class FallbackResult(Generic[T]):
    """Outcome of a primary attempt and the optional fallback attempt."""

    primary: OperationResult[T]
    fallback: Optional[OperationResult[T]] = None

    @property
    def success(self) -> bool:
        return self.primary.success or bool(self.fallback and self.fallback.success)

    @property
    def data(self) -> Optional[T]:
        if self.primary.success:
            return self.primary.data
        if self.fallback and self.fallback.success:
            return self.fallback.data
        return None

    def error_message(self, label: str) -> str:
        message = f"{label}: {self.primary.error}"
        if self.fallback is not None:
            message += f". Fallback also failed: {self.fallback.error}"
        return message


async def with_fallback(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[], Awaitable[T]],
) -> FallbackResult[T]:
    """Run ``primary`` and, only if it fails, ``fallback``."""
    first = await capture(primary)
    if first.success:
        return FallbackResult(primary=first)
    return FallbackResult(primary=first, fallback=await capture(fallback))


__all__ = ["OperationResult", "FallbackResult", "capture", "with_fallback"]
