"""Tests for transformation values and geometric argument parsing."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from framegraph.core.errors import ArgumentError
from framegraph.core.frames import (
    DynamicTransform,
    ExampleTransform,
    StaticTransform,
    as_rotation,
    as_translation,
    parse_geometry,
    split_frame_arguments,
)

ABS_TOL = 1e-9


def test_as_translation():
    np.testing.assert_allclose(as_translation([1, 2, 3]), [1.0, 2.0, 3.0])
    np.testing.assert_allclose(as_translation(np.array([0.5, 0, 0])), [0.5, 0.0, 0.0])
    assert as_translation(10) is None
    assert as_translation("abc") is None
    assert as_translation([1, 2]) is None
    assert as_translation([0, 0, 0, 1]) is None


def test_as_translation_copies_input():
    source = np.array([1.0, 2.0, 3.0])
    vector = as_translation(source)
    vector[0] = 42.0
    assert source[0] == 1.0


def test_as_rotation():
    rot = Rotation.from_euler("z", 90, degrees=True)
    assert as_rotation(rot).approx_equal(rot)
    assert as_rotation([0, 0, 0, 1]).approx_equal(Rotation.identity())
    assert as_rotation([0, 0, 0, 0]) is None
    assert as_rotation([1, 2, 3]) is None
    assert as_rotation(Rotation.from_euler("z", [10, 20], degrees=True)) is None
    assert as_rotation("quat") is None


def test_parse_geometry_defaults():
    translation, rotation = parse_geometry([[1, 2, 3]])
    np.testing.assert_allclose(translation, [1, 2, 3])
    assert rotation.approx_equal(Rotation.identity())

    rot = Rotation.from_quat([0, 1, 0, 0])
    translation, rotation = parse_geometry([rot])
    np.testing.assert_allclose(translation, [0, 0, 0])
    assert rotation.approx_equal(rot)


def test_parse_geometry_any_order():
    rot = Rotation.from_euler("x", 30, degrees=True)
    t1, r1 = parse_geometry([[0, 2, 0], rot])
    t2, r2 = parse_geometry([rot, [0, 2, 0]])
    np.testing.assert_allclose(t1, t2)
    assert r1.approx_equal(r2)


@pytest.mark.parametrize(
    "values",
    [
        [],
        [10],
        [10, [0, 0, 0]],
        [[0, 0, 0], [0, 0, 0, 1], 10],
        [[0, 0, 0], [1, 1, 1]],
        [[0, 0, 0, 1], Rotation.identity()],
    ],
)
def test_parse_geometry_rejects(values):
    with pytest.raises(ArgumentError):
        parse_geometry(values)


def test_split_frame_arguments():
    assert split_frame_arguments([[0, 0, 0], {"a": "b"}]) == (("a", "b"), ([0, 0, 0],))
    assert split_frame_arguments(["a", "b", "producer"]) == (("a", "b"), ("producer",))
    with pytest.raises(ArgumentError, match="single"):
        split_frame_arguments([{"a": "b", "c": "d"}])
    with pytest.raises(ArgumentError):
        split_frame_arguments([[0, 0, 0]])


def test_transform_endpoints():
    t = StaticTransform("body", "laser")
    assert t.pair == ("body", "laser")
    assert t.frames == frozenset({"body", "laser"})
    assert t.other_frame("body") == "laser"
    assert t.other_frame("laser") == "body"
    with pytest.raises(ArgumentError):
        t.other_frame("camera")


def test_static_transform_equality():
    a = StaticTransform("a", "b", [1, 0, 0])
    assert a == StaticTransform("a", "b", np.array([1.0, 0.0, 0.0]))
    assert a != StaticTransform("a", "b", [2, 0, 0])
    assert a != StaticTransform("b", "a", [1, 0, 0])
    assert a != ExampleTransform("a", "b", [1, 0, 0])
    assert a != DynamicTransform("a", "b", "producer")


def test_static_transform_copy_is_independent():
    original = StaticTransform("a", "b", [1, 2, 3])
    duplicate = original.copy()
    duplicate.translation[0] = 10.0
    assert original.translation[0] == pytest.approx(1.0, abs=ABS_TOL)
    assert isinstance(duplicate, StaticTransform)


def test_static_transform_rejects_invalid_values():
    with pytest.raises(ArgumentError):
        StaticTransform("a", "b", translation=[1, 2])
    with pytest.raises(ArgumentError):
        StaticTransform("a", "b", rotation=[0, 0, 0, 0])


def test_dynamic_transform_equality():
    assert DynamicTransform("a", "b", "p") == DynamicTransform("a", "b", "p")
    assert DynamicTransform("a", "b", "p") != DynamicTransform("a", "b", "q")
    assert DynamicTransform("a", "b", np.zeros(3)) == DynamicTransform("a", "b", np.zeros(3))
    assert DynamicTransform("a", "b", np.zeros(3)) != DynamicTransform("a", "b", np.ones(3))


def test_transforms_are_not_hashable():
    with pytest.raises(TypeError):
        hash(StaticTransform("a", "b"))


def test_string_forms():
    assert str(DynamicTransform("a", "b", "dynamixel")) == "a => b produced by dynamixel"
    assert str(StaticTransform("a", "b", [1, 0, 0])) == "a => b t=(1, 0, 0) q=(0, 0, 0, 1)"
