import pytest

from visual_memory.application.services import MAX_SUGGESTIONS, SUGGESTION_TABLE, generate_suggestions


def test_table_covers_known_keywords():
    assert list(SUGGESTION_TABLE) == [
        "error", "login", "dashboard", "upload", "settings", "button", "form", "table"
    ]
    assert all(len(phrases) == 4 for phrases in SUGGESTION_TABLE.values())


@pytest.mark.parametrize("query", ["", "   "])
def test_blank_query_has_no_suggestions(query):
    assert generate_suggestions(query) == []


def test_suggestions_must_contain_the_query():
    assert generate_suggestions("login") == ["login form"]
    assert generate_suggestions("button") == [
        "click button", "press button", "action button", "submit button"
    ]


def test_matching_is_case_insensitive():
    assert generate_suggestions("FORM") == ["input form", "submit form"]


def test_keyword_inside_longer_query():
    # "login form" matches both the login and form keywords
    assert generate_suggestions("login form") == ["login form"]


def test_unknown_query_has_no_suggestions():
    assert generate_suggestions("invoice") == []


def test_suggestions_are_capped(monkeypatch):
    phrases = tuple(f"button {i}" for i in range(8))
    monkeypatch.setitem(SUGGESTION_TABLE, "button", phrases)

    assert generate_suggestions("button") == list(phrases[:MAX_SUGGESTIONS])
