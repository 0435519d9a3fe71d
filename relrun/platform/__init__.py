"""Platform abstraction layer."""

from .process import (
    ProcessError,
    run,
    run_inherited,
)

__all__ = [
    "ProcessError",
    "run",
    "run_inherited",
]
