"""Tests for suggestion/fuzzy matching utilities."""

from youtrack_mcp.utils.suggestions import (
    describe_suggestions,
    fuzzy_match,
    suggest_tool_names,
)

TOOLS = [
    "projects",
    "issues",
    "query",
    "comments",
    "agile_boards",
    "knowledge_base",
    "analytics",
    "time_tracking",
    "users",
    "commands",
]


class TestFuzzyMatch:
    """Tests for fuzzy_match()."""

    def test_exact_case_insensitive_match(self):
        assert fuzzy_match("ISSUES", TOOLS) == ["issues"]

    def test_no_match_returns_empty(self):
        assert fuzzy_match("zzzzz", ["alpha", "beta"]) == []

    def test_typo(self):
        assert fuzzy_match("comands", TOOLS)[0] == "commands"

    def test_substring_match(self):
        """Short prefixes are found through substring matching."""
        result = fuzzy_match("agile", TOOLS)
        assert "agile_boards" in result

    def test_empty_input_or_candidates(self):
        assert fuzzy_match("", TOOLS) == []
        assert fuzzy_match("issues", []) == []

    def test_max_results(self):
        result = fuzzy_match("s", ["s1", "s2", "s3", "s4"], max_results=2)
        assert len(result) == 2


class TestSuggestToolNames:
    def test_alias_wins(self):
        assert suggest_tool_names("create_issue", TOOLS) == ["issues"]
        assert suggest_tool_names("Search_Issues", TOOLS) == ["query"]
        assert suggest_tool_names("log_time", TOOLS) == ["time_tracking"]

    def test_alias_for_disabled_tool_falls_back(self):
        assert suggest_tool_names("create_issue", ["projects"]) == []

    def test_fuzzy_fallback(self):
        assert suggest_tool_names("isues", TOOLS)[0] == "issues"


class TestDescribeSuggestions:
    def test_empty(self):
        assert describe_suggestions([]) == ""

    def test_quoted_list(self):
        assert describe_suggestions(["issues", "query"]) == "Did you mean 'issues', 'query'?"
