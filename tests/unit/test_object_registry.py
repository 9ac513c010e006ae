import pytest

from configbind.object_registry import ObjectRegistry, UnregisteredFactoryError
from tests.helpers.stub_targets import StubLogWriter


def test_register_type_uses_qualified_name(object_registry: ObjectRegistry):
    object_registry.register_type(StubLogWriter)

    name = "tests.helpers.stub_targets.StubLogWriter"
    assert name in object_registry
    assert list(object_registry) == [name]
    assert isinstance(object_registry.create(name), StubLogWriter)


def test_create_unregistered(object_registry: ObjectRegistry):
    with pytest.raises(UnregisteredFactoryError) as err:
        object_registry.create("missing")
    assert err.value.name == "missing"
    assert isinstance(err.value, LookupError)


def test_unregister(object_registry: ObjectRegistry):
    object_registry.register("writer", StubLogWriter)
    object_registry.unregister("writer")
    object_registry.unregister("writer")
    assert "writer" not in object_registry
