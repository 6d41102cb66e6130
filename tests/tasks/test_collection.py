"""Tests for shape-preserving task collections."""

import pytest

from rollback.tasks.collection import TaskCollection
from rollback.types.base import TaskShape


class TestFromInput:
    def test_list(self):
        c = TaskCollection.from_input(["a", "b"])
        assert c.shape is TaskShape.SEQUENCE
        assert c.keys == (0, 1)
        assert c.items == ("a", "b")

    def test_mapping_keeps_key_order(self):
        c = TaskCollection.from_input({"z": 1, "a": 2})
        assert c.shape is TaskShape.MAPPING
        assert c.keys == ("z", "a")
        assert c.items == (1, 2)

    def test_generator_is_a_sequence(self):
        c = TaskCollection.from_input(x for x in "ab")
        assert c.shape is TaskShape.SEQUENCE
        assert len(c) == 2

    def test_existing_collection_is_returned(self):
        c = TaskCollection.from_input([1])
        assert TaskCollection.from_input(c) is c

    @pytest.mark.parametrize("bad", ["abc", b"abc", {1, 2}, frozenset(), 42, None])
    def test_rejects_unsupported(self, bad):
        with pytest.raises(TypeError):
            TaskCollection.from_input(bad)


class TestBuild:
    def test_sequence_builds_list(self):
        c = TaskCollection.from_input(("a", "b"))
        assert c.build([1, 2]) == [1, 2]

    def test_mapping_builds_dict(self):
        c = TaskCollection.from_input({"x": "a", "y": "b"})
        assert c.build([1, 2]) == {"x": 1, "y": 2}

    def test_length_mismatch(self):
        c = TaskCollection.from_input(["a"])
        with pytest.raises(ValueError, match="Expected 1 values"):
            c.build([1, 2])

    def test_map_preserves_shape(self):
        c = TaskCollection.from_input({"x": 1, "y": 2}).map(lambda v: v * 10)
        assert c.shape is TaskShape.MAPPING
        assert list(c.pairs()) == [("x", 10), ("y", 20)]


def test_mismatched_keys_and_items():
    with pytest.raises(ValueError):
        TaskCollection(shape=TaskShape.SEQUENCE, keys=(0,), items=())
