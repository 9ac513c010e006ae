"""Tests for the bindable attribute descriptor and its tables."""

import pytest

from configbind.attributes import (
    AttributeKind,
    BindableProperty,
    bindable,
    camel_case,
    declared_attributes,
    readable_attributes,
    writable_attributes,
)
from configbind.exceptions import SealedConfigError
from tests.helpers.stub_targets import MismatchedTarget, StubDataSource


class _Sealed:
    sealed = True

    def __init__(self):
        self._value = "a"
        self._tuned = 1

    @bindable(AttributeKind.STRING)
    def value(self):
        return self._value

    @value.setter
    def value(self, new_value):
        self._value = new_value

    @bindable(AttributeKind.INT, runtime=True)
    def tuned(self):
        return self._tuned

    @tuned.setter
    def tuned(self, new_value):
        self._tuned = new_value


class TestCamelCase:
    @pytest.mark.parametrize(
        ("snake", "camel"),
        [("minimum_idle", "minimumIdle"), ("url", "url"), ("leak_detection_threshold", "leakDetectionThreshold")],
    )
    def test_camel_case(self, snake, camel):
        assert camel_case(snake) == camel


class TestBindableProperty:
    def test_name_derived_from_attribute(self):
        """Descriptors without an explicit name use the camelCase attribute name."""
        assert StubDataSource.__dict__["login_timeout"].name == "loginTimeout"

    def test_explicit_name_kept(self):
        assert StubDataSource.__dict__["url"].name == "URL"

    def test_reads_and_writes_through_accessors(self):
        target = StubDataSource()
        target.login_timeout = 5
        assert target.login_timeout == 5
        assert target.writes == ["loginTimeout"]

    def test_write_only_attribute_is_not_readable(self):
        target = StubDataSource()
        with pytest.raises(AttributeError):
            _ = target.password

    def test_read_only_attribute_is_not_writable(self):
        target = MismatchedTarget()
        with pytest.raises(AttributeError):
            target.status = "other"

    def test_sealed_instance_rejects_write(self):
        target = _Sealed()
        with pytest.raises(SealedConfigError, match="value"):
            target.value = "b"
        assert target.value == "a"

    def test_runtime_attribute_writable_when_sealed(self):
        target = _Sealed()
        target.tuned = 7
        assert target.tuned == 7

    def test_setter_preserves_metadata(self):
        prop = BindableProperty(AttributeKind.LONG, lambda self: 0, name="x", runtime=True)
        with_writer = prop.setter(lambda self, value: None)
        assert with_writer.name == "x"
        assert with_writer.kind is AttributeKind.LONG
        assert with_writer.runtime is True
        assert with_writer.writable


class TestAttributeTables:
    def test_declared_attributes(self):
        assert set(declared_attributes(StubDataSource)) == {"URL", "loginTimeout", "logWriter", "port", "password"}

    def test_readable_excludes_write_only(self):
        assert "password" not in readable_attributes(StubDataSource)

    def test_writable_excludes_read_only(self):
        assert "status" not in writable_attributes(MismatchedTarget)
        assert "label" in writable_attributes(MismatchedTarget)

    def test_subclass_overrides_by_name(self):
        class Child(StubDataSource):
            @bindable(AttributeKind.STRING)
            def port(self):
                return "p"

        assert declared_attributes(Child)["port"].kind is AttributeKind.STRING
        assert declared_attributes(Child)["URL"].kind is AttributeKind.STRING
