"""
Field Mapping Unit Tests

Tests for the wire/config serializers, strict decoding and flatten().
"""
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from pas_sdk.protocols import FieldDecodeError
from pas_sdk.platform.fields import (
    field_table,
    flatten,
    from_map,
    is_empty,
    to_config_map,
    to_wire_map,
    wire_field,
)
from pas_sdk.platform.secret import ChallengeRules, Secret

pytestmark = pytest.mark.unit


# =============================================================================
# Test Models
# =============================================================================

class Endpoint(BaseModel):
    host: str = wire_field("", wire="Host", config="host")
    secure: bool = wire_field(False, wire="Secure", config="secure")


class Schedule(BaseModel):
    enabled: bool = wire_field(False, wire="ScheduleEnabled", config="schedule_enabled")
    cron: str = wire_field("", wire="Cron", config="cron")


class Resource(BaseModel):
    name: str = wire_field("", wire="Name", config="name")
    port: int = wire_field(0, wire="Port", config="port")
    api_token: str = wire_field("", wire="Token")
    always: str = wire_field("", wire="Always", config="always", omit_empty=False)
    tags: List[str] = wire_field(default_factory=list, wire="Tags", config="tags")
    endpoint: Optional[Endpoint] = wire_field(None, wire="Endpoint", config="endpoint")
    schedule: Schedule = wire_field(default_factory=Schedule, inline=True)
    scratch: str = ""


# =============================================================================
# Test Data Factory
# =============================================================================

class FieldTestDataFactory:
    """Factory for field mapping test data"""

    @staticmethod
    def resource(**kwargs) -> Resource:
        return Resource(
            name=kwargs.get("name", "web01"),
            port=kwargs.get("port", 22),
            api_token=kwargs.get("api_token", ""),
            tags=kwargs.get("tags", ["prod"]),
            endpoint=kwargs.get("endpoint"),
            schedule=kwargs.get("schedule", Schedule()),
        )

    @staticmethod
    def wire_payload(**overrides) -> Dict[str, Any]:
        payload = {
            "Name": "web01",
            "Port": 22,
            "Tags": ["prod", "linux"],
            "Endpoint": {"Host": "10.0.0.1", "Secure": True},
            "ScheduleEnabled": True,
            "Cron": "0 * * * *",
        }
        payload.update(overrides)
        return payload


# =============================================================================
# Descriptor Table Tests
# =============================================================================

class TestFieldTable:
    """Tests for field_table()"""

    def test_unmapped_attributes_are_not_described(self):
        attrs = [d.attr for d in field_table(Resource)]
        assert "scratch" not in attrs
        assert attrs[:3] == ["name", "port", "api_token"]

    def test_nested_and_inline_models_are_detected(self):
        table = {d.attr: d for d in field_table(Resource)}
        assert table["endpoint"].model is Endpoint
        assert table["schedule"].inline is True
        assert table["schedule"].model is Schedule

    def test_list_of_models_is_not_a_nested_model(self):
        class Holder(BaseModel):
            items: List[Endpoint] = wire_field(default_factory=list, wire="Items")

        assert field_table(Holder)[0].model is None

    def test_table_is_cached_per_class(self):
        assert field_table(Resource) is field_table(Resource)


# =============================================================================
# Serialization Tests
# =============================================================================

class TestToWireMap:
    """Tests for to_wire_map()"""

    def test_empty_values_are_omitted(self):
        payload = to_wire_map(Resource(name="web01"))
        assert payload == {"Name": "web01", "Always": ""}

    def test_omit_empty_false_keeps_key(self):
        assert to_wire_map(Resource())["Always"] == ""

    def test_populated_values_are_serialized(self):
        payload = to_wire_map(FieldTestDataFactory.resource(api_token="tok"))
        assert payload["Port"] == 22
        assert payload["Tags"] == ["prod"]
        assert payload["Token"] == "tok"

    def test_nested_model_uses_wire_keys(self):
        resource = FieldTestDataFactory.resource(endpoint=Endpoint(host="10.0.0.1", secure=True))
        assert to_wire_map(resource)["Endpoint"] == {"Host": "10.0.0.1", "Secure": True}

    def test_nested_model_is_never_empty(self):
        resource = FieldTestDataFactory.resource(endpoint=Endpoint())
        assert to_wire_map(resource)["Endpoint"] == {}

    def test_inline_model_is_merged_into_parent(self):
        resource = FieldTestDataFactory.resource(schedule=Schedule(enabled=True, cron="@daily"))
        payload = to_wire_map(resource)
        assert payload["ScheduleEnabled"] is True
        assert payload["Cron"] == "@daily"
        assert "schedule" not in payload

    def test_unmapped_attribute_never_serialized(self):
        resource = FieldTestDataFactory.resource()
        resource.scratch = "temp"
        assert "temp" not in to_wire_map(resource).values()


class TestToConfigMap:
    """Tests for to_config_map()"""

    def test_wire_only_field_is_excluded(self):
        config = to_config_map(FieldTestDataFactory.resource(api_token="tok"))
        assert "Token" not in config
        assert "api_token" not in config
        assert "tok" not in config.values()

    def test_uses_config_keys(self):
        config = to_config_map(FieldTestDataFactory.resource(endpoint=Endpoint(host="h")))
        assert config == {
            "name": "web01",
            "port": 22,
            "always": "",
            "tags": ["prod"],
            "endpoint": {"host": "h"},
        }

    def test_secret_id_is_wire_only(self):
        secret = Secret(MagicMock(), id="abc", secret_name="db", secret_text="pw")
        assert to_wire_map(secret)["ID"] == "abc"
        assert "abc" not in to_config_map(secret).values()

    def test_permissions_are_config_only(self):
        secret = Secret(
            MagicMock(),
            secret_name="db",
            permissions=[{"principal_name": "admins", "principal_type": "Role", "rights": "View"}],
        )
        assert "permission" not in to_wire_map(secret)
        assert to_config_map(secret)["permission"] == [
            {"principal_name": "admins", "principal_type": "Role", "rights": "View"}
        ]


# =============================================================================
# Decoding Tests
# =============================================================================

class TestFromMap:
    """Tests for from_map()"""

    def test_populates_fields_from_wire_keys(self):
        resource = from_map(FieldTestDataFactory.wire_payload(), Resource())
        assert resource.name == "web01"
        assert resource.port == 22
        assert resource.tags == ["prod", "linux"]
        assert resource.endpoint == Endpoint(host="10.0.0.1", secure=True)
        assert resource.schedule == Schedule(enabled=True, cron="0 * * * *")

    def test_returns_same_object(self):
        resource = Resource()
        assert from_map({"Name": "x"}, resource) is resource

    def test_absent_and_null_keys_leave_attributes_untouched(self):
        resource = Resource(name="keep", port=8080)
        from_map({"Name": None, "Tags": ["a"]}, resource)
        assert resource.name == "keep"
        assert resource.port == 8080
        assert resource.tags == ["a"]

    def test_unknown_keys_are_ignored(self):
        resource = from_map({"Name": "x", "LastModified": "2024-01-01"}, Resource())
        assert resource.name == "x"

    def test_wire_round_trip(self):
        original = FieldTestDataFactory.resource(
            api_token="tok",
            endpoint=Endpoint(host="h", secure=True),
            schedule=Schedule(enabled=True, cron="@hourly"),
        )
        assert from_map(to_wire_map(original), Resource()) == original

    @pytest.mark.parametrize("payload", [
        {"Port": "22"},
        {"Name": 5},
        {"Tags": "prod"},
        {"ScheduleEnabled": "true"},
    ])
    def test_type_mismatch_raises(self, payload):
        with pytest.raises(FieldDecodeError):
            from_map(payload, Resource())

    def test_nested_value_must_be_object(self):
        with pytest.raises(FieldDecodeError, match="Endpoint"):
            from_map({"Endpoint": ["10.0.0.1"]}, Resource())

    def test_non_mapping_input_raises(self):
        with pytest.raises(FieldDecodeError):
            from_map(["Name", "x"], Resource())

    def test_challenge_rules_decode(self):
        rules = from_map(
            {"Enabled": True, "UniqueKey": "k1", "Rules": [{"Conditions": []}]},
            ChallengeRules(),
        )
        assert rules.enabled is True
        assert rules.unique_key == "k1"
        assert rules.rules == [{"Conditions": []}]


# =============================================================================
# Helper Tests
# =============================================================================

class TestIsEmpty:
    """Tests for is_empty()"""

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False, [], {}, ()])
    def test_empty_values(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", ["x", 1, True, ["a"], {"a": 1}, Endpoint()])
    def test_non_empty_values(self, value):
        assert not is_empty(value)


class TestFlatten:
    """Tests for flatten()"""

    def test_nested_maps_are_merged(self):
        nested = {"a": 1, "b": {"c": 2, "d": {"e": 3}}}
        assert flatten(nested) == {"a": 1, "c": 2, "e": 3}

    def test_lists_are_kept_as_values(self):
        assert flatten({"tags": ["x", "y"]}) == {"tags": ["x", "y"]}

    def test_later_value_wins_on_collision(self):
        assert flatten({"x": 1, "n": {"x": 2}}) == {"x": 2}
        assert flatten({"n": {"x": 2}, "x": 1}) == {"x": 1}

    def test_config_map_flattens(self):
        config = to_config_map(FieldTestDataFactory.resource(endpoint=Endpoint(host="h")))
        assert flatten(config)["host"] == "h"

    @pytest.mark.parametrize("value", [None, "text", ["a"], 3])
    def test_non_mapping_raises(self, value):
        with pytest.raises(TypeError, match="Not a valid input, must be a map"):
            flatten(value)
