"""Shared type aliases used across hush modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: any callable
Handler: TypeAlias = Callable[..., Any]

# Whatever a request mapper resolves a request to; opaque to the mappers
# that wrap it
RequestHandler: TypeAlias = Any
