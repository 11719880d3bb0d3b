"""Tests for project scope resolution."""

import pytest

from youtrack_mcp.exceptions import MissingScopeError, ScopeViolationError
from youtrack_mcp.youtrack.scope import ScopeConfig, ScopeResolver


class TestResolve:
    def test_enforced_project_replaces_caller_id(self, team_scope_resolver):
        assert team_scope_resolver.resolve("OTHER") == "TEAM"

    def test_enforced_project_used_when_absent(self, team_scope_resolver):
        assert team_scope_resolver.resolve(None) == "TEAM"
        assert team_scope_resolver.resolve("  ") == "TEAM"

    def test_matching_caller_id_accepted(self, team_scope_resolver):
        assert team_scope_resolver.resolve("TEAM") == "TEAM"

    def test_caller_id_used_without_enforcement(self, scope_resolver):
        assert scope_resolver.resolve(" OTHER ") == "OTHER"

    def test_missing_scope(self, scope_resolver):
        with pytest.raises(MissingScopeError, match="PROJECT_ID"):
            scope_resolver.resolve(None)

    def test_strict_mode_rejects_foreign_project(self):
        resolver = ScopeResolver(ScopeConfig(enforced_project_id="TEAM", enforce_strict=True))
        with pytest.raises(ScopeViolationError) as excinfo:
            resolver.resolve("OTHER")
        assert excinfo.value.enforced_project_id == "TEAM"
        assert excinfo.value.attempted_project_id == "OTHER"

    def test_strict_mode_allows_same_project(self):
        resolver = ScopeResolver(ScopeConfig(enforced_project_id="TEAM", enforce_strict=True))
        assert resolver.resolve("TEAM") == "TEAM"

    def test_allow_override_does_not_raise_in_strict_mode(self):
        resolver = ScopeResolver(ScopeConfig(enforced_project_id="TEAM", enforce_strict=True))
        assert resolver.resolve("OTHER", allow_override=True) == "TEAM"

    def test_resolve_optional(self, scope_resolver, team_scope_resolver):
        assert scope_resolver.resolve_optional(None) is None
        assert scope_resolver.resolve_optional("OTHER") == "OTHER"
        assert team_scope_resolver.resolve_optional(None) == "TEAM"


class TestScopeQuery:
    def test_unscoped_query_untouched_without_project(self, scope_resolver):
        assert scope_resolver.scope_query("State: Open") == "State: Open"

    def test_prepends_enforced_project(self, team_scope_resolver):
        assert team_scope_resolver.scope_query("State: Open") == "project: TEAM State: Open"

    def test_prepends_supplied_project(self, scope_resolver):
        assert scope_resolver.scope_query("#Unresolved", "OTHER") == "project: OTHER #Unresolved"

    def test_rewrites_foreign_project_clause(self, team_scope_resolver):
        scoped = team_scope_resolver.scope_query("project: OTHER State: Open")
        assert scoped == "project: TEAM State: Open"

    def test_keeps_clause_without_enforcement(self, scope_resolver):
        query = "project: OTHER State: Open"
        assert scope_resolver.scope_query(query, "ANOTHER") == query

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("project: TEAM or project: OTHER #Unresolved", "project: TEAM or project: TEAM #Unresolved"),
            ("project: OTHER or project: SECRET", "project: TEAM or project: TEAM"),
            ("project: TEAM, OTHER State: Open", "project: TEAM State: Open"),
            ("Project: {Other Team} #Unresolved", "project: TEAM #Unresolved"),
            ("in: OTHER State: Open", "project: TEAM State: Open"),
        ],
    )
    def test_rewrites_every_project_clause(self, team_scope_resolver, query, expected):
        assert team_scope_resolver.scope_query(query) == expected

    def test_strict_mode_rewrites_query_clauses(self):
        resolver = ScopeResolver(ScopeConfig(enforced_project_id="TEAM", enforce_strict=True))
        assert resolver.scope_query("project: OTHER or project: TEAM") == (
            "project: TEAM or project: TEAM"
        )

    def test_value_in_braces_is_not_a_clause(self, team_scope_resolver):
        assert team_scope_resolver.scope_query("State: {In Progress}") == (
            "project: TEAM State: {In Progress}"
        )
