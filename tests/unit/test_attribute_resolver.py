"""Tests for attribute enumeration and writer resolution."""

import pytest

from configbind.attribute_resolver import get_property, property_names, resolve_writer
from configbind.attributes import AttributeKind
from configbind.exceptions import UnknownAttributeError
from configbind.pool_config import PoolConfig
from tests.helpers.stub_targets import MismatchedTarget, StubDataSource


class TestPropertyNames:
    def test_pool_config_names(self):
        names = property_names(PoolConfig)
        assert {"url", "minimumIdle", "connectionTimeout", "autoCommit", "dataSourceProperties"} <= names

    def test_write_only_attribute_not_enumerated(self):
        assert "password" not in property_names(StubDataSource)

    def test_reader_without_matching_writer_skipped(self):
        """Readers with no writer, or a writer of another kind, are not configurable."""
        assert property_names(MismatchedTarget) == {"enabled"}

    def test_every_name_has_matching_writer(self):
        for name in property_names(PoolConfig):
            writer = resolve_writer(PoolConfig(), name)
            assert writer.name == name


class TestResolveWriter:
    def test_primary_convention(self):
        writer = resolve_writer(PoolConfig(), "minimumIdle")
        assert writer.kind is AttributeKind.INT
        assert writer.attribute.name == "minimumIdle"

    def test_primary_convention_capitalized_first_letter(self):
        """``MinimumIdle`` capitalizes to the same writer name as ``minimumIdle``."""
        assert resolve_writer(PoolConfig(), "MinimumIdle").attribute.name == "minimumIdle"

    def test_primary_is_case_sensitive_beyond_first_letter(self):
        with pytest.raises(UnknownAttributeError):
            resolve_writer(PoolConfig(), "minimumidle")

    def test_upper_case_fallback(self):
        target = StubDataSource()
        writer = resolve_writer(target, "url")
        writer("jdbc:stub")
        assert target.url == "jdbc:stub"

    def test_unknown_attribute_names_property_and_type(self):
        with pytest.raises(UnknownAttributeError) as err:
            resolve_writer(PoolConfig(), "what")

        message = str(err.value)
        assert "what" in message
        assert "PoolConfig" in message
        assert err.value.attribute == "what"
        assert err.value.target_type == "configbind.pool_config.PoolConfig"

    def test_unknown_attribute_is_logged(self, caplog):
        with caplog.at_level("ERROR", logger="configbind.attribute_resolver"):
            with pytest.raises(UnknownAttributeError):
                resolve_writer(StubDataSource(), "nope")
        assert "Property nope does not exist" in caplog.text


class TestGetProperty:
    def test_reads_value(self):
        config = PoolConfig()
        config.minimum_idle = 3
        assert get_property("minimumIdle", config) == 3

    def test_upper_case_fallback(self):
        target = StubDataSource()
        target.url = "stub:db"
        assert get_property("url", target) == "stub:db"

    def test_missing_returns_none(self):
        assert get_property("missing", PoolConfig()) is None

    def test_write_only_returns_none(self):
        assert get_property("password", StubDataSource()) is None
