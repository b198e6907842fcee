"""Tests for valueobjects.instances."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

from valueobjects.instances import (
    Instances,
    InstancesLoadError,
    SampleFactory,
    load_instances,
)


SAMPLES_MODULE = '''\
from decimal import Decimal

from valueobjects import Instances, SampleFactory


class DecimalInstances(Instances):
    def a(self):
        return Decimal("3.14159265")

    def b(self):
        return Decimal("2.71828183")


class NeedsArgs(Instances):
    def __init__(self, value):
        self.value = value

    def a(self):
        return self.value

    def b(self):
        return None


DECIMALS = SampleFactory(lambda: Decimal("1.5"), lambda: Decimal("2"))

class Holder:
    decimals = DECIMALS

NOT_A_FACTORY = 42
'''


@pytest.fixture
def samples_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module of factories and return its name."""
    name = "vo_samples_for_loading"
    (tmp_path / f"{name}.py").write_text(SAMPLES_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    importlib.invalidate_caches()
    return name


class TestInstances:
    def test_cannot_instantiate_base(self) -> None:
        with pytest.raises(TypeError):
            Instances()  # type: ignore[abstract]

    def test_sample_factory_calls_producers(self) -> None:
        calls: list[str] = []

        def primary() -> str:
            calls.append("a")
            return "x"

        def secondary() -> str:
            calls.append("b")
            return "y"

        factory = SampleFactory(primary, secondary)
        assert factory.a() == "x"
        assert factory.a() == "x"
        assert factory.b() == "y"
        assert calls == ["a", "a", "b"]

    def test_sample_factory_is_instances(self) -> None:
        assert isinstance(SampleFactory(object, object), Instances)


class TestLoadInstances:
    def test_loads_subclass_and_instantiates(self, samples_module: str) -> None:
        instances = load_instances(f"{samples_module}:DecimalInstances")
        assert type(instances).__name__ == "DecimalInstances"
        assert str(instances.a()) == "3.14159265"

    def test_loads_object(self, samples_module: str) -> None:
        instances = load_instances(f"{samples_module}:DECIMALS")
        assert isinstance(instances, SampleFactory)

    def test_loads_dotted_attribute(self, samples_module: str) -> None:
        instances = load_instances(f"{samples_module}:Holder.decimals")
        assert isinstance(instances, SampleFactory)

    @pytest.mark.parametrize("target", ["no_colon", ":attr", "module:"])
    def test_malformed_target(self, target: str) -> None:
        with pytest.raises(InstancesLoadError, match="package.module:attr"):
            load_instances(target)

    def test_missing_module(self) -> None:
        with pytest.raises(InstancesLoadError, match="Cannot import"):
            load_instances("vo_no_such_module_anywhere:X")

    def test_missing_attribute(self, samples_module: str) -> None:
        with pytest.raises(InstancesLoadError, match="has no attribute 'Missing'"):
            load_instances(f"{samples_module}:Missing")

    def test_wrong_type(self, samples_module: str) -> None:
        with pytest.raises(InstancesLoadError, match="is a int"):
            load_instances(f"{samples_module}:NOT_A_FACTORY")

    def test_subclass_needing_arguments(self, samples_module: str) -> None:
        with pytest.raises(InstancesLoadError, match="Cannot instantiate"):
            load_instances(f"{samples_module}:NeedsArgs")
