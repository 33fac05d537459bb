import json
import logging
from datetime import date
from enum import Enum

import pytest

from propsync import Field, HasFields, Vectorized
from propsync.core.errors import ValidationError
from propsync.core.serializer import dumps, serialize_field, take_snapshot, to_external_form
from propsync.core.snapshot import Snapshot

from sample_models import Circle


class Palette(Enum):
    WARM = "warm"
    COLD = "cold"


class Chart(HasFields):
    title = Field(str, value="Sales")
    start = Field(date)
    palette = Field(Palette)
    ticks = Vectorized(list)


class TestSerializeField:
    def test_plain_field_encodes_value(self):
        chart = Chart(start=date(2024, 3, 1), palette=Palette.COLD)

        assert serialize_field(chart.start) == "2024-03-01"
        assert serialize_field(chart.palette) == "cold"

    def test_vectorized_list_value(self):
        chart = Chart()

        assert serialize_field(chart.ticks) == {"value": []}
        chart.ticks.set([1, 2, 3])
        assert serialize_field(chart.ticks) == {"value": [1, 2, 3]}


class TestSnapshotFunctions:
    def test_take_snapshot_full_and_dirty(self):
        chart = Chart()

        assert take_snapshot(chart) == {"title": "Sales", "ticks": {"value": []}}
        assert take_snapshot(chart, dirty_only=True) == {"title": "Sales"}

    def test_to_external_form_is_plain_dict(self):
        snapshot = take_snapshot(Circle())
        external = to_external_form(snapshot)

        assert type(external) is dict
        assert external == {"color": "black"}

    def test_dumps_model_and_snapshot(self):
        circle = Circle()
        circle.radius.set(1.5)

        assert json.loads(dumps(circle)) == {"color": "black", "radius": {"value": 1.5}}
        assert json.loads(dumps(circle, dirty_only=True)) == {"radius": {"value": 1.5}}
        assert dumps(circle.full_snapshot(), sort_keys=True) == '{"color": "black", "radius": {"value": 1.5}}'

    def test_dumps_logs_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="propsync.core.serializer"):
            dumps(Circle())

        assert any("Calling dumps" in r.getMessage() for r in caplog.records)


class TestSnapshotDiff:
    def test_diff_reports_changes_additions_and_removals(self):
        before = Snapshot([("a", 1), ("b", 2)])
        after = Snapshot([("a", 1), ("b", 3), ("c", 4)])

        assert after.diff(before) == [("b", 2, 3), ("c", None, 4)]
        assert before.diff(after) == [("b", 3, 2), ("c", 4, None)]

    def test_diff_between_model_states(self):
        circle = Circle()
        before = circle.full_snapshot()
        circle.radius.set_reference("r")

        assert circle.full_snapshot().diff(before) == [("radius", None, {"field": "r"})]

    def test_repr_and_to_dict(self):
        snapshot = Snapshot([("a", 1)], type_name="Thing", dirty_only=True)

        assert snapshot.to_dict() == {"a": 1}
        assert "Thing dirty" in repr(snapshot)


class Node:
    def __init__(self, label, weight):
        self.label = label
        self.weight = weight
        self._cache = None


class Scene(HasFields):
    child = Field(Node)
    glyph = Field(Circle)
    glyphs = Field(list)


class TestNestedValues:
    """Fields holding plain objects or other models."""

    def test_model_class_with_arbitrary_value_types(self):
        scene = Scene()

        assert scene.field_names() == ["child", "glyph", "glyphs"]
        assert scene.full_snapshot() == {"glyphs": []}

    def test_plain_object_encodes_public_attributes(self):
        scene = Scene(child=Node("root", 2))

        assert scene.full_snapshot()["child"] == {"label": "root", "weight": 2}

    def test_nested_model_uses_external_form(self):
        circle = Circle()
        circle.radius.set(1.5)
        scene = Scene(glyph=circle, glyphs=[Circle(color="red")])

        assert scene.to_external_form()["glyph"] == {"color": "black", "radius": {"value": 1.5}}
        assert scene.to_external_form()["glyphs"] == [{"color": "red"}]
        assert json.loads(dumps(scene, dirty_only=True))["glyph"]["radius"] == {"value": 1.5}

    def test_wrong_model_type_rejected(self):
        scene = Scene()

        with pytest.raises(ValidationError, match="must be of type Circle"):
            scene.glyph.set(Node("x", 1))
