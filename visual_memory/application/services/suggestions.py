"""Search suggestions from a keyword table."""

from typing import Dict, List, Tuple

MAX_SUGGESTIONS = 5

# Keyword found in the query -> related queries, checked in this order
SUGGESTION_TABLE: Dict[str, Tuple[str, ...]] = {
    "error": ("error message", "bug report", "issue details", "problem description"),
    "login": ("login form", "authentication", "sign in", "user credentials"),
    "dashboard": ("main page", "overview", "home screen", "status page"),
    "upload": ("file upload", "add file", "import data", "create new"),
    "settings": ("configuration", "preferences", "options", "setup"),
    "button": ("click button", "press button", "action button", "submit button"),
    "form": ("input form", "data entry", "submit form", "validation"),
    "table": ("data table", "grid view", "list view", "information display"),
}


def generate_suggestions(query: str) -> List[str]:
    """Suggest up to five related queries that still contain the query text."""
    if not query.strip():
        return []

    query_lower = query.lower()
    candidates: List[str] = []
    for keyword, phrases in SUGGESTION_TABLE.items():
        if keyword in query_lower:
            candidates.extend(phrases)

    return [s for s in candidates if query_lower in s.lower()][:MAX_SUGGESTIONS]
