"""Tests for the JSON form of decomposition records."""

import json

import pytest
from pydantic import ValidationError

from lookup_engine import (
    DecomposeOptions,
    DecomposedMember,
    DecomposedObject,
    MemberAttributes,
    decompose,
)


class Widget:
    def __init__(self):
        self.title = "main"
        self.size = 3

    @property
    def area(self) -> int:
        return self.size * self.size

    def render(self) -> None:
        pass


class TestJsonForm:
    """Tests for model_dump_json()."""

    def test_raw_values_not_serialized(self):
        payload = json.loads(decompose(Widget()).model_dump_json())

        assert "raw_value" not in payload
        assert "descriptor" not in payload
        for member in payload["members"]:
            assert "raw_value" not in member["value"]
            assert "descriptor" not in member["value"]

    def test_member_attributes_as_integer(self):
        payload = json.loads(decompose(Widget()).model_dump_json())
        area = next(m for m in payload["members"] if m["name"] == "area")

        assert area["member_attributes"] == int(
            MemberAttributes.PROPERTY | MemberAttributes.READ_ONLY
        )

    def test_expected_keys(self):
        payload = json.loads(decompose(Widget()).model_dump_json())

        assert set(payload) == {
            "name",
            "type_name",
            "type_full_name",
            "description",
            "members",
        }
        assert set(payload["members"][0]) == {
            "depth",
            "name",
            "declaring_type_name",
            "declaring_type_full_name",
            "computation_time",
            "allocated_bytes",
            "member_attributes",
            "value",
        }


class TestRoundTrip:
    """Tests for model_validate_json()."""

    def test_round_trip_preserves_structure(self):
        original = decompose(Widget(), DecomposeOptions(include_unsupported=True))
        restored = DecomposedObject.model_validate_json(original.model_dump_json())

        assert restored.name == original.name
        assert restored.type_full_name == original.type_full_name
        assert [m.name for m in restored.members] == [m.name for m in original.members]
        assert [m.value.name for m in restored.members] == [
            m.value.name for m in original.members
        ]
        assert [m.depth for m in restored.members] == [m.depth for m in original.members]

    def test_round_trip_restores_flags(self):
        original = decompose(Widget())
        restored = DecomposedObject.model_validate_json(original.model_dump_json())

        area = next(m for m in restored.members if m.name == "area")
        assert isinstance(area.member_attributes, MemberAttributes)
        assert area.member_attributes.kind == MemberAttributes.PROPERTY
        assert area.member_attributes & MemberAttributes.READ_ONLY

    def test_raw_values_dropped(self):
        original = decompose(Widget())
        restored = DecomposedObject.model_validate_json(original.model_dump_json())

        assert restored.raw_value is None
        assert all(m.value.raw_value is None for m in restored.members)

    def test_member_round_trip(self):
        member = decompose(Widget()).members[0]
        restored = DecomposedMember.model_validate_json(member.model_dump_json())

        assert restored.name == member.name
        assert restored.computation_time == member.computation_time


class TestFrozen:
    """Records are immutable."""

    def test_object_is_frozen(self):
        result = decompose(Widget())

        with pytest.raises(ValidationError):
            result.name = "other"

    def test_member_is_frozen(self):
        member = decompose(Widget()).members[0]

        with pytest.raises(ValidationError):
            member.depth = 5
