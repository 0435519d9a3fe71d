"""Result type for explicit error handling.

Every fallible operation in the release runner (manifest loading, process
execution, pipeline steps) returns a Result instead of raising. The caller
inspects it and decides whether to continue or halt.

Usage:
    match load_manifest(path):
        case Ok(manifest):
            print(manifest.version)
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeGuard, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error payload."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Applies a function to the contained error.

        Used to translate a low-level error (e.g. ProcessError) into the
        error type of the calling layer.
        """
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard that narrows a Result to Ok."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard that narrows a Result to Err."""
    return isinstance(result, Err)
