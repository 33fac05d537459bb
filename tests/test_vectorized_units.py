"""
Tests for vectorized and units-aware fields.
"""

import pytest

from propsync.core.errors import FieldOptionsError, NoValueError, ValidationError
from propsync.core.fields import Angular, FieldOptions, Spatial, UnitsField, Vectorized
from propsync.core.units import AngularUnits, SpatialUnits


class TestVectorized:
    """Reference versus literal value."""

    def test_reference_takes_precedence(self):
        field = Vectorized(float)
        field.set(3.0)
        field.set_reference("col")

        assert field.serialize_value() == {"field": "col"}
        assert field.value() == 3.0
        assert field.reference() == "col"

    def test_value_shape_without_reference(self):
        field = Vectorized(float, value=2.0)

        assert field.serialize_value() == {"value": 2.0}
        assert field.to_json() == {"value": 2.0}

    def test_empty_field_serializes_value_none_but_has_no_content(self):
        field = Vectorized(float)

        assert field.serialize_value() == {"value": None}
        assert not field.has_content()
        assert field.to_json() is None

    def test_set_reference_marks_dirty_even_when_clearing(self):
        field = Vectorized(float)
        field.set_reference(None)

        assert field.is_dirty()
        with pytest.raises(NoValueError):
            field.reference()

    def test_clearing_reference_restores_literal(self):
        field = Vectorized(float, value=1.0)
        field.set_reference("x")
        field.set_reference(None)

        assert field.to_json() == {"value": 1.0}

    def test_construction_with_reference(self):
        field = Vectorized(float, reference="x")

        assert field.to_json() == {"field": "x"}
        assert field.is_dirty()

    def test_value_and_reference_are_exclusive(self):
        with pytest.raises(FieldOptionsError):
            Vectorized(float, value=1.0, reference="x")

    def test_call_with_reference(self):
        field = Vectorized(float)

        assert field(reference="col") is None  # unbound template has no owner
        assert field.reference_opt() == "col"
        with pytest.raises(FieldOptionsError):
            field(1.0, reference="col")


class TestUnitsField:
    """Units tag handling."""

    def test_units_added_to_value_shape(self):
        field = Spatial(float)
        field.set_value_and_units(5.0, SpatialUnits.SCREEN)

        assert field.serialize_value() == {"value": 5.0, "units": "screen"}

    def test_units_added_to_reference_shape(self):
        field = Angular(float)
        field.set_reference_and_units("angles", "rad")

        assert field.to_json() == {"field": "angles", "units": "rad"}
        assert field.units() is AngularUnits.RAD

    def test_units_accepted_by_name(self):
        field = Spatial(float)
        field.set_units("data")

        assert field.units_opt() is SpatialUnits.DATA
        assert field.is_dirty()

    def test_foreign_units_rejected(self):
        field = Spatial(float)

        with pytest.raises(ValidationError):
            field.set_units(AngularUnits.DEG)
        with pytest.raises(ValidationError):
            field.set_units("furlongs")
        assert not field.is_dirty()

    def test_no_default_units(self):
        field = Angular(float)

        assert field.default_units() is None
        with pytest.raises(NoValueError):
            field.units()

    def test_units_only_field_has_no_content(self):
        field = Spatial(float, units="screen")

        assert field.to_json() is None

    def test_unbound_units_field_rejected(self):
        with pytest.raises(TypeError):
            UnitsField(float)

    def test_call_sets_units_only(self):
        field = Spatial(float, value=1.0)
        field(units="screen")

        assert field.to_json() == {"value": 1.0, "units": "screen"}


class TestConstructionForms:
    """The four construction forms and their dirty flags."""

    @pytest.mark.parametrize("cls, units", [(Spatial, "screen"), (Angular, "deg")])
    def test_no_arguments_is_clean(self, cls, units):
        field = cls(float)

        assert not field.is_dirty()
        assert field.units_opt() is None

    @pytest.mark.parametrize("cls, units", [(Spatial, "screen"), (Angular, "deg")])
    def test_value_only_is_dirty(self, cls, units):
        field = cls(float, value=2.0)

        assert field.is_dirty()
        assert field.value() == 2.0

    @pytest.mark.parametrize("cls, units", [(Spatial, "screen"), (Angular, "deg")])
    def test_units_only_stays_clean(self, cls, units):
        field = cls(float, units=units)

        assert not field.is_dirty()
        assert field.units_opt().external_name == units

    @pytest.mark.parametrize("cls, units", [(Spatial, "screen"), (Angular, "deg")])
    def test_value_and_units_is_dirty(self, cls, units):
        field = cls(float, value=2.0, units=units)

        assert field.is_dirty()
        assert field.to_json() == {"value": 2.0, "units": units}

    def test_reference_and_units_is_dirty(self):
        field = Spatial(float, reference="xs", units="data")

        assert field.is_dirty()
        assert field.to_json() == {"field": "xs", "units": "data"}

    def test_invalid_units_at_construction(self):
        with pytest.raises(ValidationError):
            Angular(float, units="screen")

    def test_options_mode(self):
        assert FieldOptions.build().mode == "default"
        assert FieldOptions.build(value=1, units="deg").mode == "value+units"
        assert FieldOptions.build(reference="x").mode == "reference"

    def test_blank_reference_rejected(self):
        with pytest.raises(FieldOptionsError):
            FieldOptions.build(reference="  ")
