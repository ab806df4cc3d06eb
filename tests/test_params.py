from typing import List

import pytest

from mcp_digitalocean.do_client import ListOptions
from mcp_digitalocean.models import FirewallRule, OnlineMigrationSource
from mcp_digitalocean.tools.params import ArgumentError, Kind, Param, extract_arguments, list_options


def test_required_string_present():
    params = [Param("Name", required=True)]
    assert extract_arguments({"Name": "web-1"}, params) == {"Name": "web-1"}


@pytest.mark.parametrize("bag", [{}, {"Name": None}, {"Name": ""}, None])
def test_missing_required_uses_default_message(bag):
    with pytest.raises(ArgumentError, match="^Name is required$"):
        extract_arguments(bag, [Param("Name", required=True)])


def test_missing_required_uses_declared_message():
    param = Param("id", required=True, required_message="Cluster id is required")
    with pytest.raises(ArgumentError, match="^Cluster id is required$"):
        extract_arguments({"ID": "abc"}, [param])


def test_field_names_are_case_sensitive():
    params = [Param("ID", required=True)]
    with pytest.raises(ArgumentError):
        extract_arguments({"id": "abc"}, params)


def test_optional_absent_gets_default_or_none():
    params = [
        Param("Page", Kind.INTEGER, default=1),
        Param("Type"),
        Param("Tags", Kind.ARRAY),
    ]
    assert extract_arguments({}, params) == {"Page": 1, "Type": None, "Tags": []}


def test_required_with_default_never_fails():
    params = [Param("type", required=True, default="droplet")]
    assert extract_arguments({}, params) == {"type": "droplet"}


def test_non_mapping_arguments_rejected():
    with pytest.raises(ArgumentError, match="object"):
        extract_arguments(["a", "b"], [Param("Name")])


def test_wrong_type_is_argument_error():
    with pytest.raises(ArgumentError, match=r"Invalid or missing 'Name' \(expected string\)"):
        extract_arguments({"Name": 42}, [Param("Name", required=True)])


def test_number_accepts_int_and_float():
    params = [Param("Value", Kind.NUMBER)]
    assert extract_arguments({"Value": 80}, params) == {"Value": 80}
    assert extract_arguments({"Value": 0.5}, params) == {"Value": 0.5}


def test_integer_truncates_floats():
    params = [Param("ID", Kind.INTEGER, required=True)]
    assert extract_arguments({"ID": 12345.0}, params) == {"ID": 12345}
    assert extract_arguments({"ID": -7.9}, params) == {"ID": -7}


@pytest.mark.parametrize("raw", [True, "12", [1], float("nan"), float("inf")])
def test_integer_rejects_non_numbers(raw):
    with pytest.raises(ArgumentError, match="expected integer"):
        extract_arguments({"ID": raw}, [Param("ID", Kind.INTEGER, required=True)])


def test_text_encoded_numbers():
    params = [Param("page", Kind.INTEGER, from_text=True), Param("ratio", Kind.NUMBER, from_text=True)]
    assert extract_arguments({"page": " 3 ", "ratio": "0.25"}, params) == {"page": 3, "ratio": 0.25}
    # Numeric form is still accepted alongside text.
    assert extract_arguments({"page": 2}, params)["page"] == 2


@pytest.mark.parametrize("raw", ["abc", "1e999", "nan"])
def test_text_encoded_number_garbage(raw):
    with pytest.raises(ArgumentError):
        extract_arguments({"page": raw}, [Param("page", Kind.INTEGER, from_text=True)])


def test_boolean_and_text_boolean():
    assert extract_arguments({"Enabled": False}, [Param("Enabled", Kind.BOOLEAN)]) == {"Enabled": False}
    params = [Param("disable_ssl", Kind.BOOLEAN, from_text=True)]
    assert extract_arguments({"disable_ssl": "TRUE"}, params) == {"disable_ssl": True}
    with pytest.raises(ArgumentError, match="expected boolean"):
        extract_arguments({"disable_ssl": "yes"}, params)
    with pytest.raises(ArgumentError):
        extract_arguments({"Enabled": "true"}, [Param("Enabled", Kind.BOOLEAN)])


def test_delimited_text_array():
    params = [Param("tags", Kind.ARRAY, from_text=True)]
    assert extract_arguments({"tags": "a, b ,,c"}, params) == {"tags": ["a", "b", "c"]}
    assert extract_arguments({"tags": ",, ,"}, params) == {"tags": []}


def test_array_items_are_coerced():
    params = [Param("DropletIDs", Kind.ARRAY, items=Kind.INTEGER)]
    assert extract_arguments({"DropletIDs": [1, 2.0]}, params) == {"DropletIDs": [1, 2]}
    with pytest.raises(ArgumentError, match="array of integer"):
        extract_arguments({"DropletIDs": [1, "two"]}, params)
    with pytest.raises(ArgumentError):
        extract_arguments({"DropletIDs": "1,2"}, params)


def test_array_with_schema_validates_each_entry():
    param = Param("InboundRules", Kind.ARRAY, items=Kind.OBJECT, schema=List[FirewallRule])
    rules = extract_arguments(
        {"InboundRules": [{"Protocol": "tcp", "PortRange": "22", "Sources": ["0.0.0.0/0"]}]},
        [param],
    )["InboundRules"]
    assert rules[0].to_inbound() == {
        "protocol": "tcp",
        "ports": "22",
        "sources": {"addresses": ["0.0.0.0/0"]},
    }
    with pytest.raises(ArgumentError, match="^Invalid InboundRules"):
        extract_arguments({"InboundRules": [{"PortRange": "22"}]}, [param])


def test_json_text_object():
    param = Param("config_json", Kind.OBJECT, from_text=True)
    assert extract_arguments({"config_json": '{"retention_ms": 1000}'}, [param]) == {
        "config_json": {"retention_ms": 1000}
    }
    assert extract_arguments({"config_json": {"a": 1}}, [param]) == {"config_json": {"a": 1}}


def test_json_text_parse_failure():
    param = Param("settings_json", Kind.OBJECT, from_text=True)
    with pytest.raises(ArgumentError, match="^Invalid settings_json: "):
        extract_arguments({"settings_json": "{not json"}, [param])


def test_object_requires_mapping_without_schema():
    with pytest.raises(ArgumentError, match="expected object"):
        extract_arguments({"Alerts": [1, 2]}, [Param("Alerts", Kind.OBJECT)])
    with pytest.raises(ArgumentError, match="expected object"):
        extract_arguments({"Alerts": "{}"}, [Param("Alerts", Kind.OBJECT)])


def test_structured_object_schema():
    param = Param("source", Kind.OBJECT, schema=OnlineMigrationSource)
    value = extract_arguments({"source": {"host": "db.internal", "port": "5432"}}, [param])["source"]
    assert value == OnlineMigrationSource(host="db.internal", port=5432)
    with pytest.raises(ArgumentError, match="^Invalid source: "):
        extract_arguments({"source": {"host": "db.internal"}}, [param])


def test_first_violation_wins():
    params = [Param("A", required=True), Param("B", required=True)]
    with pytest.raises(ArgumentError, match="^A is required$"):
        extract_arguments({}, params)


def test_list_options_unset_when_both_absent():
    assert list_options({"page": None, "per_page": None}, "page", "per_page") is None
    assert list_options({"Page": 2, "PerPage": None}) == ListOptions(page=2)
    assert list_options({"Page": 1, "PerPage": 50}) == ListOptions(page=1, per_page=50)


def test_json_schema_rendering():
    assert Param("ID", Kind.INTEGER, required=True, description="Droplet ID").json_schema() == {
        "type": "number",
        "description": "Droplet ID",
    }
    assert Param("page", Kind.INTEGER, from_text=True).json_schema() == {"type": "string"}
    assert Param("Regions", Kind.ARRAY).json_schema() == {"type": "array", "items": {"type": "string"}}
    assert Param("PerPage", Kind.INTEGER, default=50).json_schema()["default"] == 50
