"""Equality and hash contract verification for value objects.

Typical use inside a test::

    from valueobjects import EqualityTests, SampleFactory

    def test_money_is_a_value_object():
        EqualityTests().should_conform_to_equals_and_hashcode(
            SampleFactory(lambda: Money("1.50", "EUR"), lambda: Money("2", "EUR"))
        )
"""

from __future__ import annotations

from valueobjects.equality import (
    ContractViolation,
    EqualityTests,
    verify_equals,
    verify_equals_and_hashcode,
    verify_hashcode,
)
from valueobjects.instances import Instances, InstancesLoadError, SampleFactory, load_instances
from valueobjects.report import CheckFailure, VerificationReport, verify

__all__ = [
    "CheckFailure",
    "ContractViolation",
    "EqualityTests",
    "Instances",
    "InstancesLoadError",
    "SampleFactory",
    "VerificationReport",
    "load_instances",
    "verify",
    "verify_equals",
    "verify_equals_and_hashcode",
    "verify_hashcode",
]
