"""Sample-instance factories consumed by the equality verifier.

A factory produces two kinds of values:

- primary (``a()``): every call returns a freshly constructed instance that
  is equal to every other primary instance but never the same object.
- secondary (``b()``): a value that is not equal to any primary instance.
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class InstancesLoadError(Exception):
    """Raised when a ``module:attr`` target cannot be resolved to a factory."""


class Instances(ABC, Generic[T]):
    """Base class for sample factories."""

    @abstractmethod
    def a(self) -> T:
        """Return a new primary instance."""

    @abstractmethod
    def b(self) -> T:
        """Return a secondary instance, unequal to every primary one."""


class SampleFactory(Instances[T]):
    """Instances backed by two zero-argument callables."""

    __slots__ = ("_primary", "_secondary")

    def __init__(self, primary: Callable[[], T], secondary: Callable[[], T]) -> None:
        self._primary = primary
        self._secondary = secondary

    def a(self) -> T:
        return self._primary()

    def b(self) -> T:
        return self._secondary()

    def __repr__(self) -> str:
        return f"SampleFactory({self._primary!r}, {self._secondary!r})"


def load_instances(target: str) -> Instances:
    """Resolve ``package.module:attr`` to an Instances object.

    ``attr`` may be an Instances subclass (instantiated without arguments)
    or an Instances object.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise InstancesLoadError(
            f"Target must look like 'package.module:attr', got '{target}'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InstancesLoadError(f"Cannot import '{module_name}': {exc}") from exc

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise InstancesLoadError(
                f"'{module_name}' has no attribute '{attr}'"
            ) from exc

    if isinstance(obj, type) and issubclass(obj, Instances):
        try:
            return obj()
        except TypeError as exc:
            raise InstancesLoadError(f"Cannot instantiate '{target}': {exc}") from exc
    if isinstance(obj, Instances):
        return obj
    raise InstancesLoadError(
        f"'{target}' is a {type(obj).__name__}, expected an Instances subclass or instance"
    )
