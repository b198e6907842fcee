"""Run every contract check and collect the failures.

``EqualityTests`` stops at the first violation, which suits a unit test.
``verify()`` keeps going so a caller sees every broken property of a type
at once, returning a ``VerificationReport``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from valueobjects.config import CHECK_NAMES
from valueobjects.equality import ContractViolation, EqualityTests
from valueobjects.instances import Instances

log = logging.getLogger(__name__)


@dataclass
class CheckFailure:
    """A single failed check."""

    check: str
    message: str

    def __repr__(self) -> str:
        return f"CheckFailure({self.check}: {self.message})"


@dataclass
class VerificationReport:
    """Result of running a set of checks against one factory."""

    passed: bool
    checks_run: list[str] = field(default_factory=list)
    failures: list[CheckFailure] = field(default_factory=list)

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"VerificationReport({status}, {len(self.failures)} failures)"


def _check_table(verifier: EqualityTests) -> dict[str, Callable[[Instances], None]]:
    return {
        "reflexive": verifier.should_be_reflexive,
        "symmetric": verifier.should_be_symmetric,
        "transitive": verifier.should_be_transitive,
        "none": verifier.should_not_equal_none,
        "hashcode": verifier.should_have_equal_hashcodes,
        "consistent": verifier.should_be_consistent,
    }


def verify(
    instances: Instances,
    checks: Sequence[str] | None = None,
    verifier: EqualityTests | None = None,
) -> VerificationReport:
    """Run ``checks`` (default: all, in canonical order) against ``instances``.

    Parameters
    ----------
    instances:
        Sample factory for the type under test.
    checks:
        Check names from ``CHECK_NAMES``. Duplicates run once.
    verifier:
        Verifier carrying consistency/hash settings; a default one if None.

    Raises
    ------
    ValueError
        If ``checks`` names an unknown check.
    """
    names = list(CHECK_NAMES) if checks is None else list(dict.fromkeys(checks))
    unknown = [n for n in names if n not in CHECK_NAMES]
    if unknown:
        raise ValueError(f"Unknown checks: {unknown}. Known: {', '.join(CHECK_NAMES)}")

    table = _check_table(verifier or EqualityTests())
    failures: list[CheckFailure] = []
    for name in names:
        try:
            table[name](instances)
        except ContractViolation as exc:
            log.warning("[%s] %s", name, exc)
            failures.append(CheckFailure(name, str(exc)))
        except Exception as exc:
            # a raising __eq__ or factory breaks only this check
            message = f"{type(exc).__name__} raised: {exc}"
            log.warning("[%s] %s", name, message)
            failures.append(CheckFailure(name, message))

    return VerificationReport(passed=not failures, checks_run=names, failures=failures)


def verifier_from_config(config: dict) -> EqualityTests:
    return EqualityTests(
        consistency_rounds=config["consistency_rounds"],
        allow_unhashable=config["allow_unhashable"],
    )
