import pytest
from pydantic import ValidationError as PydanticValidationError

from propsync.core.fields import Field, Spatial
from propsync.core.type_registry import DEFAULT_TYPES, TypeRegistry, build_default_registry
from propsync.core.units import SpatialUnits


class TestTypeRegistry:
    """Explicit per-type defaults and encoders."""

    def test_default_registry_contents(self):
        assert DEFAULT_TYPES.default_for(bool) is False
        assert DEFAULT_TYPES.default_for(float) is None
        assert DEFAULT_TYPES.default_for(list) == []
        assert DEFAULT_TYPES.default_for(SpatialUnits) is None

    def test_duplicate_registration(self):
        registry = TypeRegistry()
        registry.register(int, default=0)

        with pytest.raises(ValueError, match="Duplicate"):
            registry.register(int, default=1)
        registry.register(int, default=1, replace=True)
        assert registry.default_for(int) == 1

    def test_get_unknown_type_lists_available(self):
        registry = TypeRegistry()
        registry.register(int, default=0)

        with pytest.raises(KeyError, match="Available: int"):
            registry.get(str)

    def test_default_and_factory_exclusive(self):
        registry = TypeRegistry()

        with pytest.raises(PydanticValidationError):
            registry.register(list, default=[1], default_factory=list)

    def test_subclass_lookup(self):
        assert DEFAULT_TYPES.encoder_for(SpatialUnits)(SpatialUnits.SCREEN) == "screen"

    def test_adapter_encoder_is_cached(self):
        registry = TypeRegistry()

        assert registry.encoder_for(float) is registry.encoder_for(float)

    def test_encoder_for_type_without_schema(self):
        class Point:
            def __init__(self):
                self.x, self.y = 1, 2

        encode = TypeRegistry().encoder_for(Point)

        assert encode(Point()) == {"x": 1, "y": 2}

    def test_type_checks(self):
        registry = TypeRegistry()

        assert registry.type_check_for(object) is None
        assert registry.type_check_for(str)("abc")
        assert not registry.type_check_for(str)(1)
        assert registry.type_check_for(str) is registry.type_check_for(str)

    def test_field_uses_custom_registry(self):
        registry = build_default_registry()
        registry.register(float, default=1.0, encoder=lambda v: round(v, 1))

        field = Field(float, registry=registry)
        assert field.value() == 1.0
        field.set(2.26)
        assert field.to_json() == 2.3

    def test_default_units_from_registry(self):
        registry = build_default_registry()
        registry.register(SpatialUnits, default=SpatialUnits.DATA)

        field = Spatial(float, registry=registry)
        assert field.default_units() is SpatialUnits.DATA
        assert field.units() is SpatialUnits.DATA
        assert not field.is_dirty()

    def test_copy_registry_is_independent(self):
        registry = build_default_registry()
        clone = registry.copy_registry()
        clone.register(int, default=0)

        assert registry.find(int) is None
        assert clone.default_for(int) == 0
