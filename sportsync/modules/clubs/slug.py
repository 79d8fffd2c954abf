import re

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """
    Derive a club's URL slug from its display name.

    Lower-cases and collapses every whitespace run into a single hyphen:
    "FC  Reds" -> "fc-reds". Distinct names can share a slug ("FC Reds",
    "fc reds", "fc-reds"), so callers must check slug uniqueness on its own.
    """
    return _WHITESPACE.sub("-", name.strip().lower())
