"""Tests for project lookups and field metadata."""

import pytest

from youtrack_mcp.exceptions import NetworkError, NotFoundError
from youtrack_mcp.youtrack.projects import is_internal_project_id, query_value

TYPE_FIELD = {
    "id": "92-1",
    "field": {"name": "Type", "fieldType": {"valueType": "enum[1]"}},
    "bundle": {
        "$type": "EnumBundle",
        "values": [
            {"name": "Task", "ordinal": 2},
            {"name": "Bug", "ordinal": 0},
            {"name": "Feature", "ordinal": 1, "localizedName": "Fonction"},
        ],
    },
}
STATE_FIELD = {
    "id": "92-2",
    "field": {"name": "State"},
    "bundle": {"values": [{"name": "Open", "ordinal": 0}, {"name": "In Progress", "ordinal": 1}]},
}


def test_is_internal_project_id():
    assert is_internal_project_id("0-12")
    assert not is_internal_project_id("PROJ")
    assert not is_internal_project_id("")


def test_query_value_braces_spaces():
    assert query_value("In Progress") == "{In Progress}"
    assert query_value("Open") == "Open"


class TestProjects:
    def test_validate_missing_project(self, fetcher):
        fetcher.get.side_effect = NotFoundError("404 Not Found", 404)

        result = fetcher.validate_project("NOPE")

        assert result["valid"] is False
        assert "NOPE" in result["reason"]

    def test_validate_existing_project(self, fetcher):
        fetcher.get.return_value = {"id": "0-5", "shortName": "PROJ", "name": "Project"}

        result = fetcher.validate_project("PROJ")

        assert result["valid"] is True
        assert result["project"]["shortName"] == "PROJ"

    def test_resolve_internal_id(self, fetcher):
        fetcher.get.return_value = {"id": "0-5"}

        assert fetcher.resolve_internal_project_id("PROJ") == "0-5"
        assert fetcher.resolve_internal_project_id("0-7") == "0-7"
        fetcher.get.assert_called_once()

    def test_resolve_internal_id_falls_back(self, fetcher):
        fetcher.get.side_effect = NetworkError("Cannot reach YouTrack")

        assert fetcher.resolve_internal_project_id("PROJ") == "PROJ"


class TestFieldValues:
    def test_values_ordered_by_ordinal(self, fetcher):
        fetcher.get.return_value = [STATE_FIELD, TYPE_FIELD]

        result = fetcher.get_project_field_values("PROJ", "Type")

        assert result["valueNames"] == ["Bug", "Fonction", "Task"]
        assert result["valueCount"] == 3
        assert result["bundleType"] == "EnumBundle"
        assert result["values"][1]["name"] == "Feature"

    def test_unknown_field_lists_available(self, fetcher):
        fetcher.get.return_value = [STATE_FIELD, TYPE_FIELD]

        with pytest.raises(NotFoundError, match="Available fields: State, Type"):
            fetcher.get_project_field_values("PROJ", "Dev_Team")

    def test_field_without_values(self, fetcher):
        fetcher.get.return_value = [{"field": {"name": "Due Date"}}]

        with pytest.raises(NotFoundError, match="no available values"):
            fetcher.get_project_field_values("PROJ", "Due Date")

    def test_allowed_values_empty_on_error(self, fetcher):
        fetcher.get.return_value = []

        assert fetcher.get_allowed_values("PROJ", "Type") == []


def test_project_statistics(fetcher):
    counts = {
        "project: PROJ": 10,
        "project: PROJ #Unresolved": 4,
        "project: PROJ #Resolved": 6,
        "project: PROJ State: Open": 3,
        "project: PROJ State: {In Progress}": 1,
    }
    fetcher.get.return_value = [STATE_FIELD]
    fetcher.post.side_effect = lambda path, json=None, params=None: {"count": counts[json["query"]]}

    stats = fetcher.get_project_statistics("PROJ")

    assert stats["total"] == 10
    assert stats["unresolved"] == 4
    assert stats["resolved"] == 6
    assert stats["byState"] == {"Open": 3, "In Progress": 1}
