"""Shared type aliases used across waypost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Component factory: a class or zero-argument callable returning an instance
ComponentFactory: TypeAlias = Callable[[], Any]
