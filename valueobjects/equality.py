"""Equality and hash contract checks.

``__eq__`` must implement an equivalence relation on non-None values:

- reflexive: ``x == x`` for any x; two distinct-but-equal primaries compare equal.
- symmetric: ``x == y`` if and only if ``y == x``.
- transitive: ``x == y`` and ``y == z`` imply ``x == z``.
- consistent: repeated comparisons return the same result while the
  values are unchanged.
- ``x == None`` is False and does not raise.

Equal objects must also have equal hashes.

Every check raises ``ContractViolation`` on the first broken property.
"""

from __future__ import annotations

import logging
import operator
from typing import Any

from valueobjects.instances import Instances, T

log = logging.getLogger(__name__)

DEFAULT_CONSISTENCY_ROUNDS = 3


class ContractViolation(AssertionError):
    """An observed deviation from the equality/hash contract."""


def _hash(value: Any, allow_unhashable: bool) -> int | None:
    """Return ``hash(value)``, or None when unhashable values are allowed."""
    try:
        return hash(value)
    except TypeError as exc:
        if allow_unhashable:
            return None
        raise ContractViolation(
            f"expected a hashable instance, but hash({value!r}) raised: {exc}"
        ) from exc


class EqualityTests:
    """Stateless verifier driven by an ``Instances`` factory."""

    def __init__(
        self,
        consistency_rounds: int = DEFAULT_CONSISTENCY_ROUNDS,
        allow_unhashable: bool = False,
    ) -> None:
        if consistency_rounds < 1:
            raise ValueError(f"consistency_rounds must be >= 1, got {consistency_rounds}")
        self.consistency_rounds = consistency_rounds
        self.allow_unhashable = allow_unhashable

    def __repr__(self) -> str:
        return (
            f"EqualityTests(consistency_rounds={self.consistency_rounds}, "
            f"allow_unhashable={self.allow_unhashable})"
        )

    # -- Aggregates ----------------------------------------------------------

    def should_conform_to_equals_and_hashcode(self, instances: Instances[T]) -> None:
        self.should_conform_to_equals(instances)
        self.should_conform_to_hashcode(instances)

    def should_conform_to_equals(self, instances: Instances[T]) -> None:
        self.should_be_reflexive(instances)
        self.should_be_symmetric(instances)
        self.should_be_transitive(instances)
        self.should_not_equal_none(instances)

    def should_conform_to_hashcode(self, instances: Instances[T]) -> None:
        self.should_have_equal_hashcodes(instances)

    # -- Equality ------------------------------------------------------------

    def should_be_reflexive(self, instances: Instances[T]) -> None:
        a1 = instances.a()
        a2 = instances.a()
        # must be distinct but equal instances
        if a1 is a2:
            raise ContractViolation(
                f"expected distinct primary instances, but a() returned the same object twice ({a1!r})"
            )
        if not operator.eq(a1, a2):
            raise ContractViolation(
                f"expected reflexive equality, but a1 ({a1!r}) != a2 ({a2!r})"
            )
        log.debug("reflexive: %r == %r", a1, a2)

    def should_be_symmetric(self, instances: Instances[T]) -> None:
        a = instances.a()
        b = instances.b()
        self.should_not_violate_symmetry(a, b)
        a2 = instances.a()
        self.should_not_violate_symmetry(a, a2)
        log.debug("symmetric: %r, %r, %r", a, b, a2)

    def should_not_violate_symmetry(self, a: T, b: T) -> None:
        if operator.eq(a, b):
            if not operator.eq(b, a):
                raise ContractViolation(
                    f"expected symmetric equality, but b ({b!r}) != a ({a!r})"
                )
        elif operator.eq(b, a):
            raise ContractViolation(
                f"expected symmetric inequality, but a ({a!r}) == b ({b!r})"
            )

    def should_be_transitive(self, instances: Instances[T]) -> None:
        a1 = instances.a()
        a2 = instances.a()
        a3 = instances.a()
        self.should_not_violate_transitivity(a1, a2, a3)
        log.debug("transitive: %r, %r, %r", a1, a2, a3)

    def should_not_violate_transitivity(self, a1: T, a2: T, a3: T) -> None:
        eq12 = operator.eq(a1, a2)
        eq23 = operator.eq(a2, a3)
        if not eq12 and not eq23:
            # nothing can be deduced
            return

        eq13 = operator.eq(a1, a3)
        if eq12 and eq23:
            if not eq13:
                raise ContractViolation(
                    f"expected transitive equality, but a1 ({a1!r}) == a2 ({a2!r}) "
                    f"and a2 == a3 ({a3!r}) while a1 != a3"
                )
        elif eq13:
            # exactly one of the pairs is equal, so a1 and a3 cannot be
            left, right = (a1, a2) if eq12 else (a2, a3)
            raise ContractViolation(
                f"expected transitive inequality, but a1 ({a1!r}) == a3 ({a3!r}) "
                f"while only {left!r} == {right!r} of the chain holds"
            )

    def should_not_equal_none(self, instances: Instances[T]) -> None:
        a = instances.a()
        self.check_not_none(a)
        b = instances.b()
        self.check_not_none(b)
        log.debug("not None: %r, %r", a, b)

    def check_not_none(self, value: T) -> None:
        """Well-behaved objects return False, and never raise, when compared to None."""
        try:
            result = operator.eq(value, None)
        except Exception as exc:
            raise ContractViolation(
                f"instance ({value!r}) raised {type(exc).__name__} when compared to None: {exc}"
            ) from exc
        if result:
            raise ContractViolation(f"instance ({value!r}) should not equal None")

    # -- Hashing -------------------------------------------------------------

    def should_have_equal_hashcodes(self, instances: Instances[T]) -> None:
        a1 = instances.a()
        a2 = instances.a()
        if not operator.eq(a1, a2):
            raise ContractViolation(
                f"expected equal primary instances, but a1 ({a1!r}) != a2 ({a2!r})"
            )
        h1 = _hash(a1, self.allow_unhashable)
        if h1 is None:
            log.debug("hashcode: skipped, %s is unhashable", type(a1).__name__)
            return
        h2 = _hash(a2, self.allow_unhashable)
        if h2 is None:
            raise ContractViolation(
                f"expected equal instances to agree on hashability, but {a1!r} is hashable "
                f"and {a2!r} is not"
            )
        if h1 != h2:
            raise ContractViolation(
                f"expected equal hashes for equal instances, but hash({a1!r}) == {h1} "
                f"and hash({a2!r}) == {h2}"
            )
        log.debug("hashcode: %r and %r hash to %d", a1, a2, h1)

    # -- Consistency ---------------------------------------------------------

    def should_be_consistent(self, instances: Instances[T]) -> None:
        a1 = instances.a()
        a2 = instances.a()
        b = instances.b()
        for x, y in ((a1, a2), (a1, b), (b, a1)):
            self._check_stable_equality(x, y)

        first = _hash(a1, self.allow_unhashable)
        if first is None:
            log.debug("consistent: equality stable, %s is unhashable", type(a1).__name__)
            return
        for _ in range(self.consistency_rounds - 1):
            h = hash(a1)
            if h != first:
                raise ContractViolation(
                    f"expected a stable hash, but hash({a1!r}) returned {first} and then {h}"
                )
        log.debug("consistent: %d rounds over %r, %r", self.consistency_rounds, a1, b)

    def _check_stable_equality(self, x: T, y: T) -> None:
        first = operator.eq(x, y)
        for _ in range(self.consistency_rounds - 1):
            result = operator.eq(x, y)
            if result != first:
                raise ContractViolation(
                    f"expected consistent equality, but ({x!r} == {y!r}) returned "
                    f"{first} and then {result}"
                )


_default = EqualityTests()


def verify_equals_and_hashcode(instances: Instances[T]) -> None:
    _default.should_conform_to_equals_and_hashcode(instances)


def verify_equals(instances: Instances[T]) -> None:
    _default.should_conform_to_equals(instances)


def verify_hashcode(instances: Instances[T]) -> None:
    _default.should_conform_to_hashcode(instances)
